"""
Storefront Backend - Main Application
FastAPI 애플리케이션 팩토리

실행:
    uvicorn storefront.main:create_app --factory
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .api.v1.router import api_router
from .core.auth.jwt_manager import JWTManager
from .core.auth.providers.credentials import CredentialsAuthProvider
from .core.config import Settings, get_settings
from .core.database import Base, check_connection, create_engine, create_session_factory
from .core.exceptions import ErrorCode, ServiceUnavailableException
from .core.exceptions.handlers import register_exception_handlers
from .core.logging import configure_logging, get_logger
from .core.middleware import setup_correlation_id, setup_cors, setup_security_headers
from .core.rate_limiter import create_rate_limiter

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    애플리케이션 생명주기 관리

    Startup:
        - 로깅 초기화
        - 테이블 생성 (운영 환경 제외)

    Shutdown:
        - 데이터베이스 / Redis 연결 종료
    """
    settings: Settings = app.state.settings
    engine = app.state.engine

    configure_logging(settings)
    logger.info(
        "Application starting",
        service=settings.app_title,
        version=settings.app_version,
        environment=settings.app_env,
    )

    # 운영 환경의 스키마 관리는 마이그레이션 도구 담당
    if settings.app_env != "prod":
        try:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created")
        except Exception as e:
            logger.warning("Database table creation failed", error=str(e))

    yield

    await engine.dispose()
    logger.info("Database connections closed")

    redis_client = app.state.rate_limiter.redis
    if redis_client is not None:
        await redis_client.aclose()
        logger.info("Redis connection closed")


tags_metadata = [
    {
        "name": "Authentication",
        "description": """
회원가입 / 로그인 / 로그아웃 / 현재 사용자

**인증 방식:**
- 헤더: `Authorization: Bearer <token>`
- 또는 `jwt` 쿠키 (로그인 시 설정)

IP 당 15분에 100회로 요청 수가 제한된다 (초과 시 429).
        """,
    },
    {
        "name": "Users",
        "description": "사용자 프로필, 비밀번호 재설정, 관리자용 사용자 관리 API",
    },
    {
        "name": "Products",
        "description": "상품 카탈로그 조회 (공개) 및 관리 (관리자)",
    },
    {
        "name": "Orders",
        "description": "장바구니(진행 중 주문), 주문 내역, 결제 기록 API (로그인 필요)",
    },
    {
        "name": "Health",
        "description": "서비스 상태 확인 API",
    },
]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    FastAPI 애플리케이션 생성

    협력 객체는 여기서 한 번 생성되어 app.state 에 보관된다.

    Args:
        settings: 애플리케이션 설정 (기본값: 환경 변수 기반 설정)

    Returns:
        FastAPI: 구성된 애플리케이션

    Raises:
        ConfigurationError: JWT 서명 키가 없거나 너무 짧은 경우
    """
    settings = settings or get_settings()
    auth_config = settings.auth_config()

    app = FastAPI(
        title=settings.app_title,
        description=settings.app_description,
        version=settings.app_version,
        openapi_tags=tags_metadata,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
    )

    engine = create_engine(settings)
    app.state.settings = settings
    app.state.auth_config = auth_config
    app.state.credentials_provider = CredentialsAuthProvider()
    app.state.jwt_manager = JWTManager(auth_config)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.rate_limiter = create_rate_limiter(settings.redis_url)

    # 미들웨어 설정
    setup_security_headers(app, settings)
    setup_cors(app, settings)
    setup_correlation_id(app)

    register_exception_handlers(app)

    app.include_router(api_router, prefix="/api")

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        헬스 체크 엔드포인트

        Returns:
            dict: 서비스 상태 정보

        Raises:
            ServiceUnavailableException: 데이터베이스 연결 실패 (503)
        """
        if not await check_connection(engine):
            raise ServiceUnavailableException(
                error_code=ErrorCode.SYS_DATABASE_ERROR,
                message="Database connection failed",
            )
        return {
            "status": "ok",
            "service": settings.app_title,
            "version": settings.app_version,
            "environment": settings.app_env,
        }

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("storefront.main:create_app", factory=True, host="0.0.0.0", port=8000)
