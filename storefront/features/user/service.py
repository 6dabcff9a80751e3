"""
User Service
사용자 프로필, 비밀번호 재설정, 관리자 기능 비즈니스 로직
"""

import hashlib
import logging
import secrets
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from ...domain.models.user import User, UserRole
from ...domain.repositories import UserRepository
from ..auth.service import AuthService
from .exceptions import (
    EmailInUseException,
    InvalidResetTokenException,
    NoUserWithEmailException,
    UserNotFoundException,
    WrongCurrentPasswordException,
)

logger = logging.getLogger(__name__)


def hash_reset_token(token: str) -> str:
    """재설정 토큰은 sha256 해시로만 저장한다"""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class UserService:
    """
    사용자 서비스

    해싱과 토큰 발급은 AuthService 에 위임한다.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        auth_service: AuthService,
        reset_token_lifetime: timedelta = timedelta(minutes=10),
    ):
        self.user_repo = user_repo
        self.auth_service = auth_service
        self.reset_token_lifetime = reset_token_lifetime

    async def get_user(self, user_id: int) -> User:
        """
        ID로 사용자 조회

        Raises:
            UserNotFoundException: 사용자 없음
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundException(user_id)
        return user

    async def update_profile(
        self,
        user: User,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> User:
        """
        프로필 수정

        Raises:
            EmailInUseException: 다른 사용자가 사용 중인 이메일
        """
        if email:
            email = email.lower()
            if email != user.email and await self.user_repo.exists_by_email(email):
                raise EmailInUseException()
            user.email = email

        if first_name:
            user.first_name = first_name
        if last_name:
            user.last_name = last_name

        # 동시 변경 경합은 DB unique 제약으로 판정
        try:
            return await self.user_repo.save(user)
        except IntegrityError as e:
            raise EmailInUseException() from e

    async def update_password(
        self, user: User, current_password: str, new_password: str
    ) -> Tuple[User, str]:
        """
        비밀번호 변경 (현재 비밀번호 확인 후 재해싱)

        Returns:
            Tuple[User, str]: (사용자, 새 Access Token)

        Raises:
            WrongCurrentPasswordException: 현재 비밀번호 불일치
        """
        if not await self.auth_service.verify_password(current_password, user.password_digest):
            raise WrongCurrentPasswordException()

        user.password_digest = await self.auth_service.hash_password(new_password)
        user = await self.user_repo.save(user)

        logger.info("Password updated", extra={"user_id": user.id})

        return user, self.auth_service.issue_token(user)

    async def create_password_reset_token(self, email: str) -> str:
        """
        비밀번호 재설정 토큰 생성

        원본 토큰은 반환만 하고, DB 에는 sha256 해시와 만료 시각만 저장한다.

        Raises:
            NoUserWithEmailException: 해당 이메일 사용자 없음
        """
        user = await self.user_repo.get_by_email(email)
        if user is None:
            raise NoUserWithEmailException()

        reset_token = secrets.token_hex(32)
        user.reset_password_token = hash_reset_token(reset_token)
        user.reset_password_expires = datetime.utcnow() + self.reset_token_lifetime
        await self.user_repo.save(user)

        logger.info("Password reset token created", extra={"user_id": user.id})

        return reset_token

    async def reset_password(self, token: str, password: str) -> User:
        """
        재설정 토큰으로 비밀번호 변경

        Raises:
            InvalidResetTokenException: 토큰 불일치 또는 만료
        """
        user = await self.user_repo.get_by_reset_token(
            hash_reset_token(token), now=datetime.utcnow()
        )
        if user is None:
            raise InvalidResetTokenException()

        user.password_digest = await self.auth_service.hash_password(password)
        user.reset_password_token = None
        user.reset_password_expires = None

        logger.info("Password reset completed", extra={"user_id": user.id})

        return await self.user_repo.save(user)

    # ==================== Admin ====================

    async def list_users(self) -> List[User]:
        """전체 사용자 조회"""
        return await self.user_repo.list_all()

    async def update_role(self, user_id: int, role: UserRole) -> User:
        """사용자 역할 변경"""
        user = await self.get_user(user_id)
        user.role = role

        logger.info("User role updated", extra={"user_id": user_id, "role": role.value})

        return await self.user_repo.save(user)

    async def delete_user(self, user_id: int) -> None:
        """
        사용자 삭제

        삭제된 사용자의 기존 토큰은 Access Gate 의 Resolve 단계에서 거부된다.
        """
        user = await self.get_user(user_id)
        await self.user_repo.delete(user)

        logger.info("User deleted", extra={"user_id": user_id})
