"""
Product Service
상품 카탈로그 비즈니스 로직
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import List

from sqlalchemy.exc import IntegrityError

from ...domain.models.product import NEW_PRODUCT_WINDOW, Product, ProductCategory
from ...domain.repositories import ProductRepository
from .exceptions import (
    InvalidCategoryException,
    ProductAlreadyExistsException,
    ProductNotFoundException,
)
from .schemas import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    """상품 서비스"""

    def __init__(self, product_repo: ProductRepository):
        self.product_repo = product_repo

    async def list_products(self) -> List[Product]:
        return await self.product_repo.list_all()

    async def list_featured(self) -> List[Product]:
        """최근 30일 이내 등록된 상품"""
        return await self.product_repo.list_new(since=datetime.utcnow() - NEW_PRODUCT_WINDOW)

    async def list_by_category(self, category: str) -> List[Product]:
        """
        카테고리별 상품 조회

        Raises:
            InvalidCategoryException: 존재하지 않는 카테고리
        """
        try:
            parsed = ProductCategory(category)
        except ValueError:
            raise InvalidCategoryException(category)
        return await self.product_repo.list_by_category(parsed)

    async def get_product(self, product_id: str) -> Product:
        """
        ID로 상품 조회

        Raises:
            ProductNotFoundException: 상품 없음
        """
        product = await self.product_repo.get(product_id)
        if product is None:
            raise ProductNotFoundException(product_id)
        return product

    async def create_product(self, data: ProductCreate) -> Product:
        """
        상품 등록

        Raises:
            ProductAlreadyExistsException: 상품 ID 중복
        """
        if await self.product_repo.get(data.id) is not None:
            raise ProductAlreadyExistsException(data.id)

        values = data.model_dump()
        values["price"] = Decimal(str(data.price))
        product = Product(**values)

        try:
            product = await self.product_repo.save(product)
        except IntegrityError as e:
            raise ProductAlreadyExistsException(data.id) from e

        logger.info("Product created", extra={"product_id": product.id})
        return product

    async def update_product(self, product_id: str, data: ProductUpdate) -> Product:
        """요청에 포함된 필드만 갱신"""
        product = await self.get_product(product_id)

        for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
            if field == "price":
                value = Decimal(str(value))
            setattr(product, field, value)

        logger.info("Product updated", extra={"product_id": product_id})
        return await self.product_repo.save(product)

    async def delete_product(self, product_id: str) -> None:
        product = await self.get_product(product_id)
        await self.product_repo.delete(product)

        logger.info("Product deleted", extra={"product_id": product_id})
