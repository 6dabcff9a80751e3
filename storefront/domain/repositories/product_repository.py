"""
Product Repository
상품 데이터 접근 계층
"""

from datetime import datetime
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.product import Product, ProductCategory
from .base import AbstractRepository


class ProductRepository(AbstractRepository[Product]):
    """상품 Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Product)

    async def list_all(self) -> List[Product]:
        """전체 상품 조회 (상품명 오름차순)"""
        result = await self.session.execute(
            select(Product).order_by(Product.product_name.asc())
        )
        return list(result.scalars().all())

    async def list_by_category(self, category: ProductCategory) -> List[Product]:
        """카테고리별 상품 조회"""
        result = await self.session.execute(
            select(Product)
            .where(Product.category == category)
            .order_by(Product.product_name.asc())
        )
        return list(result.scalars().all())

    async def list_new(self, since: datetime) -> List[Product]:
        """신상품 조회 (since 이후 등록, 최신순)"""
        result = await self.session.execute(
            select(Product)
            .where(Product.created_at >= since)
            .order_by(Product.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_by_ids(self, product_ids: List[str]) -> List[Product]:
        """ID 목록으로 상품 일괄 조회 (없는 ID 는 결과에서 빠진다)"""
        if not product_ids:
            return []
        result = await self.session.execute(
            select(Product).where(Product.id.in_(product_ids))
        )
        return list(result.scalars().all())
