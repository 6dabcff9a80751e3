"""
Authentication Dependencies
FastAPI Depends용 인증 의존성 (Access Gate)

요청 단위 처리 순서:
1. Extract   - Authorization: Bearer 헤더 → 없으면 쿠키
2. Verify    - 서명/만료 검증
3. Resolve   - 저장소에서 사용자 조회 (삭제된 사용자 거부)
4. Attach    - request.state.user 에 사용자 바인딩
5. Authorize - (선택) 라우트별 역할 검사
"""

import logging
from typing import Callable, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.core.config import AuthConfig
from storefront.core.dependencies import (
    get_auth_config,
    get_jwt_manager,
    get_user_repository,
)
from storefront.domain.models.user import User, UserRole
from storefront.domain.repositories import UserRepository

from .exceptions import (
    InvalidTokenException,
    NotLoggedInException,
    PermissionDeniedException,
    TokenExpiredException,
    UserNoLongerExistsException,
)
from .jwt_manager import JWTManager, TokenFailure

logger = logging.getLogger(__name__)

# HTTP Bearer 토큰 스킴 (쿠키 fallback 을 위해 auto_error 비활성화)
security = HTTPBearer(auto_error=False)


def extract_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_config: AuthConfig = Depends(get_auth_config),
) -> str:
    """
    요청에서 Bearer 토큰 추출

    Authorization 헤더를 우선하고, 없으면 같은 이름의 쿠키를 확인한다.

    Raises:
        NotLoggedInException: 토큰이 없는 경우
    """
    if credentials is not None and credentials.credentials:
        return credentials.credentials

    cookie_token = request.cookies.get(auth_config.cookie_name)
    if cookie_token:
        return cookie_token

    raise NotLoggedInException()


async def get_current_user(
    request: Request,
    token: str = Depends(extract_token),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
    user_repo: UserRepository = Depends(get_user_repository),
) -> User:
    """
    현재 인증된 사용자 조회

    Returns:
        User: 저장소에서 조회한 사용자 (요청 수명 동안만 유지)

    Raises:
        TokenExpiredException: 토큰 만료
        InvalidTokenException: 서명 불일치/형식 오류
        UserNoLongerExistsException: 토큰 소유 사용자가 삭제됨
    """
    verification = jwt_manager.verify_token(token)

    if not verification.is_valid:
        if verification.failure == TokenFailure.EXPIRED:
            raise TokenExpiredException()
        raise InvalidTokenException()

    try:
        user_id = int(verification.user_id)
    except (TypeError, ValueError):
        logger.warning("Token subject is not a valid user id")
        raise InvalidTokenException()

    user = await user_repo.get_by_id(user_id)
    if user is None:
        logger.info("Token refers to a deleted user", extra={"user_id": user_id})
        raise UserNoLongerExistsException()

    request.state.user = user
    return user


def restrict_to(*roles: UserRole) -> Callable:
    """
    역할 기반 접근 제어 의존성 생성

    Usage:
        @router.get("/admin/users", dependencies=[Depends(restrict_to(UserRole.ADMIN))])

    Args:
        roles: 허용할 역할 목록

    Returns:
        Callable: 현재 사용자를 반환하는 FastAPI 의존성
    """
    required = frozenset(UserRole(role) for role in roles)

    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in required:
            logger.info(
                "Role check failed",
                extra={
                    "user_id": current_user.id,
                    "role": current_user.role.value,
                    "required_roles": sorted(r.value for r in required),
                },
            )
            raise PermissionDeniedException(sorted(r.value for r in required))
        return current_user

    return role_checker

