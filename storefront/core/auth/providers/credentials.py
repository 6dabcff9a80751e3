"""
Credentials Authentication Provider
이메일/비밀번호 인증 (Argon2 전용)
"""

import logging

from passlib.context import CryptContext

from ..exceptions import ComparisonError, HashingError

logger = logging.getLogger(__name__)


class CredentialsAuthProvider:
    """
    비밀번호 기반 인증 제공자

    - Argon2id: 비밀번호 해싱 (해시마다 임의 salt)
    - 작업 비용은 고정 상수 (외부 설정 불가)
    """

    TIME_COST = 4  # 반복 횟수
    MEMORY_COST = 65536  # 64MB
    PARALLELISM = 1

    pwd_context = CryptContext(
        schemes=["argon2"],
        argon2__rounds=TIME_COST,
        argon2__memory_cost=MEMORY_COST,
        argon2__parallelism=PARALLELISM,
    )

    def hash_password(self, password: str) -> str:
        """
        비밀번호 해싱 (Argon2id)

        Args:
            password: 평문 비밀번호

        Returns:
            str: Argon2 해시 ($argon2id$v=19$m=65536,t=4,p=1$...)

        Raises:
            HashingError: 해싱 프리미티브 실패
        """
        try:
            return self.pwd_context.hash(password)
        except Exception as e:
            logger.error(
                "Password hashing failed",
                extra={"exception_type": type(e).__name__},
            )
            raise HashingError() from e

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """
        비밀번호 검증 (상수 시간 비교는 passlib 에 위임)

        Args:
            plain_password: 평문 비밀번호
            hashed_password: 저장된 Argon2 해시

        Returns:
            bool: 일치 여부 (불일치는 예외 없이 False)

        Raises:
            ComparisonError: 저장된 해시 형식이 잘못된 경우
        """
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError) as e:
            logger.error(
                "Stored password digest is malformed",
                extra={"exception_type": type(e).__name__},
            )
            raise ComparisonError() from e
