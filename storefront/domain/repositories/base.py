"""
Base Repository Interface
Repository 패턴을 위한 추상 베이스 클래스
"""

from abc import ABC
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.database.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class AbstractRepository(ABC, Generic[ModelType]):
    """
    Abstract Repository Interface

    기본적인 CRUD 작업을 정의하는 추상 클래스
    """

    def __init__(self, session: AsyncSession, model: Type[ModelType]):
        self.session = session
        self.model = model

    async def get(self, id: Any) -> Optional[ModelType]:
        """ID로 단일 엔티티 조회"""
        return await self.session.get(self.model, id)

    async def save(self, instance: ModelType) -> ModelType:
        """엔티티 저장 (Create/Update)"""
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, instance: ModelType) -> None:
        """엔티티 삭제"""
        await self.session.delete(instance)
        await self.session.flush()
