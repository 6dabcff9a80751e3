"""
Auth API Endpoints (v1)
인증 관련 API 라우터
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, Response, status

from storefront.core.auth.cookies import clear_auth_cookie, set_auth_cookie
from storefront.core.auth.dependencies import get_current_user
from storefront.core.auth.jwt_manager import JWTManager
from storefront.core.auth.providers.credentials import CredentialsAuthProvider
from storefront.core.config import AuthConfig, Settings
from storefront.core.database import check_connection
from storefront.core.dependencies import (
    get_app_settings,
    get_auth_config,
    get_credentials_provider,
    get_jwt_manager,
    get_user_repository,
)
from storefront.core.exceptions import ErrorResponse
from storefront.domain.models.user import User
from storefront.domain.repositories import UserRepository
from storefront.features.auth.schemas import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    UserData,
    UserPublic,
)
from storefront.features.auth.service import AuthService

router = APIRouter()


def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
    credentials_provider: CredentialsAuthProvider = Depends(get_credentials_provider),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
) -> AuthService:
    """AuthService 의존성 주입"""
    return AuthService(
        user_repo=user_repo,
        credentials_provider=credentials_provider,
        jwt_manager=jwt_manager,
    )


def _auth_response(user: User, token: str) -> AuthResponse:
    return AuthResponse(
        token=token,
        data=UserData(user=UserPublic.model_validate(user)),
    )


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "회원가입 성공"},
        400: {"model": ErrorResponse, "description": "검증 실패 / 이메일 중복"},
    },
)
async def signup(
    request: SignupRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
    auth_config: AuthConfig = Depends(get_auth_config),
):
    """
    회원가입

    Args:
        request: 회원가입 요청 (firstName, lastName, email, password, passwordConfirm)
        auth_service: 인증 서비스

    Returns:
        AuthResponse: 토큰 + 사용자 정보
    """
    user, token = await auth_service.signup(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        password=request.password,
    )
    set_auth_cookie(response, token, settings, auth_config)

    return _auth_response(user, token)


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        200: {"description": "로그인 성공"},
        401: {"model": ErrorResponse, "description": "인증 실패"},
    },
)
async def login(
    request: LoginRequest,
    response: Response,
    auth_service: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_app_settings),
    auth_config: AuthConfig = Depends(get_auth_config),
):
    """
    로그인

    Returns:
        AuthResponse: 토큰 + 사용자 정보
    """
    user, token = await auth_service.login(email=request.email, password=request.password)
    set_auth_cookie(response, token, settings, auth_config)

    return _auth_response(user, token)


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    responses={401: {"model": ErrorResponse, "description": "인증 실패"}},
)
async def get_me(current_user: User = Depends(get_current_user)):
    """현재 로그인한 사용자 정보"""
    return CurrentUserResponse(data=UserData(user=UserPublic.model_validate(current_user)))


@router.post(
    "/logout",
    response_model=MessageResponse,
    responses={401: {"model": ErrorResponse, "description": "인증 실패"}},
)
async def logout(
    response: Response,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings),
    auth_config: AuthConfig = Depends(get_auth_config),
):
    """
    로그아웃

    인증 쿠키만 삭제한다. 토큰은 서버에서 폐기하지 않으므로 만료 시까지 유효하다.
    """
    clear_auth_cookie(response, settings, auth_config)
    return MessageResponse(message="Logged out successfully")


@router.get("/test")
async def test_auth(request: Request):
    """
    인증 서비스 가용성 확인 (인증 불필요)

    DB 연결 실패도 200 으로 응답하고 database 필드로만 알린다.
    """
    db_connected = await check_connection(request.app.state.engine)
    return {
        "status": "success",
        "message": "Auth service is available",
        "database": "connected" if db_connected else "not connected",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
