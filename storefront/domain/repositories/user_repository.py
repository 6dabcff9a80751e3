"""
User Repository
사용자 데이터 접근 계층
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.user import User
from .base import AbstractRepository


class UserRepository(AbstractRepository[User]):
    """
    사용자 Repository

    AbstractRepository를 상속받아 기본 CRUD 제공 및
    사용자 특화 검색 기능 추가
    """

    def __init__(self, session: AsyncSession):
        super().__init__(session, User)

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """ID로 사용자 조회"""
        return await self.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        """이메일로 사용자 조회"""
        result = await self.session.execute(
            select(User).where(User.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """이메일 존재 여부 확인"""
        result = await self.session.execute(
            select(User.id).where(User.email == email.lower())
        )
        return result.scalar_one_or_none() is not None

    async def get_by_reset_token(self, token_hash: str, now: datetime) -> Optional[User]:
        """
        유효한 비밀번호 재설정 토큰으로 사용자 조회

        Args:
            token_hash: 재설정 토큰의 sha256 hex
            now: 만료 비교 기준 시각

        Returns:
            Optional[User]: 토큰이 일치하고 만료되지 않은 사용자
        """
        result = await self.session.execute(
            select(User).where(
                User.reset_password_token == token_hash,
                User.reset_password_expires > now,
            )
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> List[User]:
        """전체 사용자 조회 (ID 순)"""
        result = await self.session.execute(select(User).order_by(User.id))
        return list(result.scalars().all())
