"""
Product Schemas
상품 API Request/Response 스키마
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ...domain.models.product import ProductCategory
from ..auth.schemas import CamelModel

CATEGORY_ERROR_MESSAGE = "Category must be one of: " + ", ".join(
    c.value for c in ProductCategory
)


def parse_category(value):
    """카테고리 문자열을 ProductCategory 로 변환"""
    if value is None or isinstance(value, ProductCategory):
        return value
    try:
        return ProductCategory(value)
    except ValueError:
        raise ValueError(CATEGORY_ERROR_MESSAGE)


# ==================== Request Schemas ====================


class ProductCreate(CamelModel):
    """상품 등록 요청 (관리자)"""

    id: str = Field(..., min_length=3, max_length=50, examples=["zx10-speaker"])
    product_name: str = Field(..., min_length=3, max_length=100, examples=["ZX10 Speaker"])
    price: float = Field(..., gt=0, examples=[499.99])
    category: ProductCategory = Field(..., examples=["speakers"])
    product_desc: Optional[str] = Field(None, max_length=250)
    image_name: str = Field(..., min_length=1, examples=["product-zx10-speaker"])
    product_features: Optional[List[str]] = None
    product_accessories: Optional[List[str]] = None

    @field_validator("category", mode="before")
    @classmethod
    def check_category(cls, v):
        return parse_category(v)


class ProductUpdate(CamelModel):
    """상품 수정 요청 (관리자, 모든 필드 선택)"""

    product_name: Optional[str] = Field(None, min_length=3, max_length=100)
    price: Optional[float] = Field(None, gt=0)
    category: Optional[ProductCategory] = None
    product_desc: Optional[str] = Field(None, max_length=250)
    image_name: Optional[str] = Field(None, min_length=1)
    product_features: Optional[List[str]] = None
    product_accessories: Optional[List[str]] = None

    @field_validator("category", mode="before")
    @classmethod
    def check_category(cls, v):
        return parse_category(v)


# ==================== Response Schemas ====================


class ProductPublic(CamelModel):
    """상품 정보"""

    id: str
    product_name: str
    price: float
    category: ProductCategory
    product_desc: Optional[str] = None
    image_name: str
    product_features: Optional[List[str]] = None
    product_accessories: Optional[List[str]] = None
    is_new: bool

    @field_validator("price", mode="before")
    @classmethod
    def decimal_to_float(cls, v):
        return float(v) if isinstance(v, Decimal) else v


class ProductData(BaseModel):
    product: ProductPublic


class ProductResponse(BaseModel):
    """단일 상품 응답"""

    status: str = "success"
    data: ProductData


class ProductListData(BaseModel):
    products: List[ProductPublic]


class ProductListResponse(BaseModel):
    """상품 목록 응답"""

    status: str = "success"
    results: int
    data: ProductListData
