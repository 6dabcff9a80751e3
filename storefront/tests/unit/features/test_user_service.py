"""
User Service Unit Tests
저장소 대역을 주입한 사용자 서비스 테스트
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from storefront.domain.models.user import User, UserRole
from storefront.features.user.exceptions import EmailInUseException
from storefront.features.user.service import UserService


@pytest.fixture
def user_repo():
    repo = AsyncMock()
    repo.exists_by_email.return_value = False

    async def save(user):
        return user

    repo.save.side_effect = save
    return repo


@pytest.fixture
def service(user_repo):
    return UserService(user_repo=user_repo, auth_service=MagicMock())


def make_user() -> User:
    return User(
        id=7,
        first_name="Jane",
        last_name="Doe",
        email="jane@example.com",
        password_digest="digest",
        role=UserRole.CUSTOMER,
    )


class TestUpdateProfile:
    async def test_email_is_lowercased(self, service):
        user = await service.update_profile(make_user(), email="Jane.New@Example.com")

        assert user.email == "jane.new@example.com"

    async def test_email_taken(self, service, user_repo):
        user_repo.exists_by_email.return_value = True

        with pytest.raises(EmailInUseException):
            await service.update_profile(make_user(), email="taken@example.com")

        user_repo.save.assert_not_called()

    async def test_concurrent_email_change(self, service, user_repo):
        """조회 이후 다른 요청이 같은 이메일을 차지하면 unique 제약 위반을 400 으로 변환"""
        user_repo.save.side_effect = IntegrityError("UPDATE", {}, Exception("unique"))

        with pytest.raises(EmailInUseException) as exc_info:
            await service.update_profile(make_user(), email="race@example.com")

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Email is already in use"

    async def test_same_email_skips_lookup(self, service, user_repo):
        await service.update_profile(make_user(), email="jane@example.com", first_name="Janet")

        user_repo.exists_by_email.assert_not_called()
