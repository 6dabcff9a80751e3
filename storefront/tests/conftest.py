"""
Pytest Configuration and Fixtures
테스트용 Fixture 정의

각 테스트는 독립된 인메모리 SQLite(aiosqlite) 데이터베이스를 사용한다.
"""

from typing import AsyncGenerator, Awaitable, Callable

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from storefront.core.auth.providers.credentials import CredentialsAuthProvider
from storefront.core.config import Settings
from storefront.core.database import Base
from storefront.domain.models.user import User, UserRole
from storefront.main import create_app

TEST_SECRET_KEY = "test-secret-key-for-storefront-0123456789abcdef"
DEFAULT_PASSWORD = "SecurePass123"


def build_settings(**overrides) -> Settings:
    """테스트용 설정 (환경 변수보다 인자가 우선)"""
    values = {
        "app_env": "test",
        "debug": True,
        "log_level": "WARNING",
        "database_url": "sqlite+aiosqlite:///:memory:",
        "jwt_secret_key": TEST_SECRET_KEY,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return build_settings()


@pytest.fixture
async def app(settings: Settings) -> AsyncGenerator[FastAPI, None]:
    """
    테스트용 애플리케이션

    ASGITransport 는 lifespan 을 실행하지 않으므로 테이블을 직접 생성한다.
    """
    application = create_app(settings)
    engine = application.state.engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield application

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """테스트용 HTTP 클라이언트"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def create_user(app: FastAPI) -> Callable[..., Awaitable[User]]:
    """
    저장소에 직접 사용자를 생성하는 헬퍼

    관리자 계정처럼 API 로 만들 수 없는 사용자를 준비할 때 사용한다.
    """

    async def _create_user(
        email: str = "user@example.com",
        password: str = DEFAULT_PASSWORD,
        role: UserRole = UserRole.CUSTOMER,
        first_name: str = "Test",
        last_name: str = "User",
    ) -> User:
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email.lower(),
            password_digest=CredentialsAuthProvider().hash_password(password),
            role=role,
        )
        async with app.state.session_factory() as session:
            session.add(user)
            await session.commit()
            await session.refresh(user)
        return user

    return _create_user


@pytest.fixture
def login(client: AsyncClient) -> Callable[..., Awaitable[str]]:
    """
    로그인 후 토큰 반환

    응답 쿠키는 비워서 이후 요청이 헤더 인증만 사용하도록 한다.
    """

    async def _login(email: str, password: str = DEFAULT_PASSWORD) -> str:
        response = await client.post(
            "/api/auth/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        client.cookies.clear()
        return response.json()["token"]

    return _login


@pytest.fixture
async def admin_token(create_user, login) -> str:
    await create_user(email="admin@example.com", role=UserRole.ADMIN)
    return await login("admin@example.com")


@pytest.fixture
async def customer_token(create_user, login) -> str:
    await create_user(email="customer@example.com")
    return await login("customer@example.com")
