"""
Auth Service Unit Tests
협력 객체를 대역으로 주입한 인증 서비스 테스트
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from storefront.core.auth.jwt_manager import JWTManager
from storefront.core.config import AuthConfig
from storefront.domain.models.user import User, UserRole
from storefront.features.auth.exceptions import (
    EmailAlreadyExistsException,
    InvalidCredentialsException,
)
from storefront.features.auth.service import AuthService

SECRET = "unit-test-secret-key-0123456789abcdef"


@pytest.fixture
def user_repo():
    repo = AsyncMock()
    repo.exists_by_email.return_value = False

    async def save(user):
        user.id = 1
        return user

    repo.save.side_effect = save
    return repo


@pytest.fixture
def hasher():
    provider = MagicMock()
    provider.hash_password.return_value = "digest"
    provider.verify_password.return_value = True
    return provider


@pytest.fixture
def jwt_manager():
    return JWTManager(AuthConfig(secret_key=SECRET))


@pytest.fixture
def service(user_repo, hasher, jwt_manager):
    return AuthService(user_repo=user_repo, credentials_provider=hasher, jwt_manager=jwt_manager)


class TestSignup:
    async def test_signup_creates_customer(self, service, user_repo, hasher, jwt_manager):
        user, token = await service.signup("Jane", "Doe", "Jane@Example.com", "SecurePass123")

        assert user.email == "jane@example.com"
        assert user.role == UserRole.CUSTOMER
        assert user.password_digest == "digest"
        hasher.hash_password.assert_called_once_with("SecurePass123")
        assert jwt_manager.verify_token(token).user_id == "1"

    async def test_signup_duplicate_email(self, service, user_repo, hasher):
        user_repo.exists_by_email.return_value = True

        with pytest.raises(EmailAlreadyExistsException):
            await service.signup("Jane", "Doe", "jane@example.com", "SecurePass123")

        hasher.hash_password.assert_not_called()

    async def test_signup_race_on_unique_constraint(self, service, user_repo):
        """동시 가입으로 INSERT 가 실패하면 이메일 중복으로 처리"""
        user_repo.save.side_effect = IntegrityError("INSERT", {}, Exception("unique"))

        with pytest.raises(EmailAlreadyExistsException) as exc_info:
            await service.signup("Jane", "Doe", "jane@example.com", "SecurePass123")

        assert exc_info.value.status_code == 400


class TestLogin:
    def make_user(self):
        return User(
            id=7,
            first_name="Jane",
            last_name="Doe",
            email="jane@example.com",
            password_digest="digest",
            role=UserRole.CUSTOMER,
        )

    async def test_login_success(self, service, user_repo, jwt_manager):
        user_repo.get_by_email.return_value = self.make_user()

        user, token = await service.login("jane@example.com", "SecurePass123")

        assert user.id == 7
        assert jwt_manager.verify_token(token).user_id == "7"

    async def test_login_unknown_email(self, service, user_repo, hasher):
        user_repo.get_by_email.return_value = None

        with pytest.raises(InvalidCredentialsException) as exc_info:
            await service.login("nobody@example.com", "SecurePass123")

        assert exc_info.value.message == "Incorrect email or password"
        hasher.verify_password.assert_not_called()

    async def test_login_wrong_password(self, service, user_repo, hasher):
        user_repo.get_by_email.return_value = self.make_user()
        hasher.verify_password.return_value = False

        with pytest.raises(InvalidCredentialsException) as exc_info:
            await service.login("jane@example.com", "WrongPass123")

        assert exc_info.value.message == "Incorrect email or password"
