"""
Auth Service
인증 비즈니스 로직
"""

import logging
from typing import Tuple

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import IntegrityError

from ...core.auth.jwt_manager import JWTManager
from ...core.auth.providers.credentials import CredentialsAuthProvider
from ...domain.models.user import User, UserRole
from ...domain.repositories import UserRepository
from .exceptions import EmailAlreadyExistsException, InvalidCredentialsException

logger = logging.getLogger(__name__)


class AuthService:
    """
    인증 서비스

    회원가입, 로그인, 토큰 발급 처리

    DI Pattern: 모든 의존성을 생성자를 통해 주입받습니다.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        credentials_provider: CredentialsAuthProvider,
        jwt_manager: JWTManager,
    ):
        """
        Args:
            user_repo: 사용자 레포지토리
            credentials_provider: 비밀번호 해셔
            jwt_manager: JWT 토큰 관리자
        """
        self.user_repo = user_repo
        self.credentials_provider = credentials_provider
        self.jwt_manager = jwt_manager

    def issue_token(self, user: User) -> str:
        """사용자에 대한 Access Token 발급"""
        return self.jwt_manager.create_access_token(user_id=user.id, email=user.email)

    async def hash_password(self, password: str) -> str:
        """CPU 비용이 큰 해싱은 스레드풀에서 수행"""
        return await run_in_threadpool(self.credentials_provider.hash_password, password)

    async def verify_password(self, password: str, digest: str) -> bool:
        return await run_in_threadpool(
            self.credentials_provider.verify_password, password, digest
        )

    async def signup(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
    ) -> Tuple[User, str]:
        """
        회원가입

        신규 사용자는 항상 customer 역할로 생성된다.

        Returns:
            Tuple[User, str]: (생성된 사용자, Access Token)

        Raises:
            EmailAlreadyExistsException: 이메일 중복
        """
        email = email.lower()

        if await self.user_repo.exists_by_email(email):
            raise EmailAlreadyExistsException(email)

        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_digest=await self.hash_password(password),
            role=UserRole.CUSTOMER,
        )

        # 동시 가입 경합은 DB unique 제약으로 판정 (단일 INSERT)
        try:
            user = await self.user_repo.save(user)
        except IntegrityError as e:
            raise EmailAlreadyExistsException(email) from e

        logger.info("User signed up", extra={"user_id": user.id})

        return user, self.issue_token(user)

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        로그인

        Returns:
            Tuple[User, str]: (사용자, Access Token)

        Raises:
            InvalidCredentialsException: 이메일 없음 또는 비밀번호 불일치 (동일 응답)
        """
        user = await self.user_repo.get_by_email(email)

        if user is None:
            logger.info("Login failed: unknown email")
            raise InvalidCredentialsException()

        if not await self.verify_password(password, user.password_digest):
            logger.info("Login failed: wrong password", extra={"user_id": user.id})
            raise InvalidCredentialsException()

        logger.info("User logged in", extra={"user_id": user.id})

        return user, self.issue_token(user)
