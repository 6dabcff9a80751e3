"""
User API Endpoints (v1)
사용자 프로필 / 비밀번호 재설정 / 관리자 API 라우터
"""

from datetime import timedelta

from fastapi import APIRouter, Depends, Response, status

from storefront.core.auth.cookies import set_auth_cookie
from storefront.core.auth.dependencies import get_current_user, restrict_to
from storefront.core.config import AuthConfig, Settings
from storefront.core.dependencies import (
    get_app_settings,
    get_auth_config,
    get_user_repository,
)
from storefront.core.exceptions import ErrorResponse
from storefront.domain.models.user import User, UserRole
from storefront.domain.repositories import UserRepository
from storefront.features.auth.schemas import MessageResponse, UserProfile
from storefront.features.auth.service import AuthService
from storefront.features.user.schemas import (
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    ProfileData,
    ProfileResponse,
    ProfileWithTokenResponse,
    ResetPasswordRequest,
    UpdatePasswordRequest,
    UpdateProfileRequest,
    UpdateRoleRequest,
    UserListData,
    UserListResponse,
)
from storefront.features.user.service import UserService

from .auth import get_auth_service

router = APIRouter()

require_admin = restrict_to(UserRole.ADMIN)


def get_user_service(
    user_repo: UserRepository = Depends(get_user_repository),
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
) -> UserService:
    """UserService 의존성 주입"""
    return UserService(
        user_repo=user_repo,
        auth_service=auth_service,
        reset_token_lifetime=timedelta(minutes=settings.password_reset_expire_minutes),
    )


def _profile_response(user: User) -> ProfileResponse:
    return ProfileResponse(data=ProfileData(user=UserProfile.model_validate(user)))


# ==================== Profile ====================


@router.get(
    "/profile",
    response_model=ProfileResponse,
    responses={401: {"model": ErrorResponse, "description": "인증 실패"}},
)
async def get_profile(current_user: User = Depends(get_current_user)):
    """내 프로필 조회"""
    return _profile_response(current_user)


@router.patch(
    "/profile",
    response_model=ProfileResponse,
    responses={
        400: {"model": ErrorResponse, "description": "검증 실패 / 이메일 중복"},
        401: {"model": ErrorResponse, "description": "인증 실패"},
    },
)
async def update_profile(
    request: UpdateProfileRequest,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    """
    내 프로필 수정

    Args:
        request: 수정할 필드 (firstName, lastName, email)
    """
    user = await user_service.update_profile(
        current_user,
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
    )
    return _profile_response(user)


@router.patch(
    "/password",
    response_model=ProfileWithTokenResponse,
    responses={
        400: {"model": ErrorResponse, "description": "검증 실패"},
        401: {"model": ErrorResponse, "description": "현재 비밀번호 불일치"},
    },
)
async def update_password(
    request: UpdatePasswordRequest,
    response: Response,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_app_settings),
    auth_config: AuthConfig = Depends(get_auth_config),
):
    """
    비밀번호 변경

    Returns:
        ProfileWithTokenResponse: 새 토큰 + 사용자 정보
    """
    user, token = await user_service.update_password(
        current_user,
        current_password=request.current_password,
        new_password=request.new_password,
    )
    set_auth_cookie(response, token, settings, auth_config)

    return ProfileWithTokenResponse(
        token=token,
        data=ProfileData(user=UserProfile.model_validate(user)),
    )


# ==================== Password Reset ====================


@router.post(
    "/forgot-password",
    response_model=ForgotPasswordResponse,
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse, "description": "사용자 없음"}},
)
async def forgot_password(
    request: ForgotPasswordRequest,
    user_service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_app_settings),
):
    """
    비밀번호 재설정 토큰 발급

    메일 발송은 범위 밖이며, 개발 모드에서만 응답에 토큰과 재설정 URL 을 포함한다.
    """
    reset_token = await user_service.create_password_reset_token(request.email)

    if settings.is_production:
        return ForgotPasswordResponse()

    return ForgotPasswordResponse(
        reset_url=f"{settings.frontend_url}/reset-password/{reset_token}",
        token=reset_token,
    )


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse, "description": "토큰 무효/만료"}},
)
async def reset_password(
    request: ResetPasswordRequest,
    user_service: UserService = Depends(get_user_service),
):
    """재설정 토큰으로 비밀번호 변경"""
    await user_service.reset_password(request.token, request.password)
    return MessageResponse(message="Password has been reset successfully")


# ==================== Admin ====================


@router.get(
    "/admin/users",
    response_model=UserListResponse,
    dependencies=[Depends(require_admin)],
    responses={403: {"model": ErrorResponse, "description": "관리자 전용"}},
)
async def list_users(user_service: UserService = Depends(get_user_service)):
    """전체 사용자 목록 (관리자)"""
    users = await user_service.list_users()
    return UserListResponse(
        results=len(users),
        data=UserListData(users=[UserProfile.model_validate(u) for u in users]),
    )


@router.get(
    "/admin/users/{user_id}",
    response_model=ProfileResponse,
    dependencies=[Depends(require_admin)],
    responses={404: {"model": ErrorResponse, "description": "사용자 없음"}},
)
async def get_user(user_id: int, user_service: UserService = Depends(get_user_service)):
    """사용자 조회 (관리자)"""
    user = await user_service.get_user(user_id)
    return _profile_response(user)


@router.patch(
    "/admin/users/{user_id}/role",
    response_model=ProfileResponse,
    dependencies=[Depends(require_admin)],
    responses={
        400: {"model": ErrorResponse, "description": "잘못된 역할"},
        404: {"model": ErrorResponse, "description": "사용자 없음"},
    },
)
async def update_user_role(
    user_id: int,
    request: UpdateRoleRequest,
    user_service: UserService = Depends(get_user_service),
):
    """사용자 역할 변경 (관리자)"""
    user = await user_service.update_role(user_id, request.role)
    return _profile_response(user)


@router.delete(
    "/admin/users/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
    responses={404: {"model": ErrorResponse, "description": "사용자 없음"}},
)
async def delete_user(user_id: int, user_service: UserService = Depends(get_user_service)):
    """사용자 삭제 (관리자)"""
    await user_service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
