"""
JWT Manager
JWT 토큰 생성 및 검증
"""

import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from jose import ExpiredSignatureError, JWTError, jwt

from ..config import AuthConfig
from .exceptions import TokenSigningError

logger = logging.getLogger(__name__)


class TokenFailure(str, enum.Enum):
    """토큰 검증 실패 유형 (메시지 구분용, 상태 코드는 동일)"""

    EXPIRED = "expired"
    INVALID = "invalid"


@dataclass(frozen=True)
class TokenVerification:
    """
    토큰 검증 결과

    payload 또는 failure 중 하나만 설정된다.
    """

    payload: Optional[Dict[str, Any]] = None
    failure: Optional[TokenFailure] = None

    @property
    def is_valid(self) -> bool:
        return self.payload is not None

    @property
    def user_id(self) -> Optional[str]:
        return self.payload.get("sub") if self.payload else None

    @classmethod
    def ok(cls, payload: Dict[str, Any]) -> "TokenVerification":
        return cls(payload=payload)

    @classmethod
    def fail(cls, failure: TokenFailure) -> "TokenVerification":
        return cls(failure=failure)


class JWTManager:
    """
    JWT 토큰 관리자

    Access Token 생성/검증 담당. 서버 측 세션 저장소 없음 (Stateless).
    서명 키 등 설정은 생성 시점에 AuthConfig 로 주입받는다.
    """

    def __init__(self, config: AuthConfig):
        """
        Args:
            config: 인증 설정 (서명 키, 알고리즘, 토큰 수명)
        """
        self.config = config

    @property
    def token_lifetime(self) -> timedelta:
        return self.config.token_lifetime

    def create_access_token(
        self,
        user_id: Union[int, str],
        email: str,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Access Token 생성

        역할(role)과 비밀번호 해시는 payload 에 넣지 않는다.
        역할은 검증 시마다 저장소에서 다시 조회한다.

        Args:
            user_id: 사용자 ID (sub claim)
            email: 진단용 이메일 힌트
            expires_delta: 만료 시간 (기본값: 설정의 token_lifetime)

        Returns:
            str: 생성된 JWT 토큰

        Raises:
            TokenSigningError: 서명 프리미티브 실패
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self.token_lifetime)

        to_encode = {
            "sub": str(user_id),
            "email": email,
            "iat": now,
            "exp": expire,
        }

        try:
            return jwt.encode(
                to_encode,
                self.config.secret_key,
                algorithm=self.config.algorithm,
            )
        except JWTError as e:
            logger.error(
                "JWT signing failed",
                extra={"user_id": str(user_id), "exception_type": type(e).__name__},
            )
            raise TokenSigningError() from e

    def verify_token(self, token: str) -> TokenVerification:
        """
        JWT 토큰 서명 및 만료 검증

        실패 원인은 운영자용 로그에만 남기고, 호출자에게는
        만료/무효 구분만 전달한다. 잘못된 토큰에 대해 예외를 던지지 않는다.

        Args:
            token: JWT 토큰 문자열

        Returns:
            TokenVerification: 검증 결과
        """
        try:
            payload = jwt.decode(
                token,
                self.config.secret_key,
                algorithms=[self.config.algorithm],
            )
        except ExpiredSignatureError:
            logger.info("JWT verification failed: token expired")
            return TokenVerification.fail(TokenFailure.EXPIRED)
        except JWTError as e:
            logger.warning(f"JWT verification failed: {e}")
            return TokenVerification.fail(TokenFailure.INVALID)

        if not payload.get("sub"):
            logger.warning("JWT verification failed: missing subject claim")
            return TokenVerification.fail(TokenFailure.INVALID)

        return TokenVerification.ok(payload)
