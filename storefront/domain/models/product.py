"""
Product Model
상품 ORM 모델
"""

import enum
from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import JSON, DateTime, Enum, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.core.database.base import Base

NEW_PRODUCT_WINDOW = timedelta(days=30)


class ProductCategory(str, enum.Enum):
    """상품 카테고리"""

    HEADPHONES = "headphones"
    SPEAKERS = "speakers"
    EARPHONES = "earphones"


class Product(Base):
    """
    상품 모델

    Attributes:
        id: 상품 코드 (Primary Key, 문자열)
        product_name: 상품명
        price: 가격 (소수점 2자리)
        category: 카테고리
        product_desc: 설명
        image_name: 이미지 파일명 (스토리지 업로드는 범위 밖)
        product_features / product_accessories: 문자열 목록
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    product_name: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    category: Mapped[ProductCategory] = mapped_column(
        Enum(
            ProductCategory,
            name="product_category",
            values_callable=lambda categories: [c.value for c in categories],
        ),
        nullable=False,
        index=True,
    )
    product_desc: Mapped[Optional[str]] = mapped_column(String(250), nullable=True)
    image_name: Mapped[str] = mapped_column(String(255), nullable=False)
    product_features: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)
    product_accessories: Mapped[Optional[List[str]]] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    @property
    def is_new(self) -> bool:
        """등록 후 30일 이내 상품 여부"""
        if self.created_at is None:
            return True
        return datetime.utcnow() - self.created_at < NEW_PRODUCT_WINDOW

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name={self.product_name})>"
