"""
Order Schemas
주문 / 결제 API Request/Response 스키마
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ...domain.models.order import OrderStatus
from ...domain.models.payment import PaymentProvider, PaymentStatus
from ..auth.schemas import CamelModel
from ..product.schemas import ProductPublic

ORDER_STATUS_MESSAGE = 'Status must be either "active" or "complete"'
QUANTITY_MESSAGE = "Quantity must be a positive integer"


def _enum_choices(enum_cls) -> str:
    return ", ".join(member.value for member in enum_cls)


def _parse_enum(enum_cls, value, message: str):
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise ValueError(message)


def _check_quantity(value):
    # bool 은 int 의 하위 타입이므로 별도로 거부
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(QUANTITY_MESSAGE)
    return value


def _to_float(value):
    return float(value) if isinstance(value, Decimal) else value


# ==================== Request Schemas ====================


class OrderItemRequest(CamelModel):
    """주문 상품 (productId, quantity)"""

    product_id: str = Field(..., min_length=1, max_length=50, examples=["xx99-mark-two"])
    quantity: int = Field(..., examples=[1])

    @field_validator("quantity", mode="before")
    @classmethod
    def check_quantity(cls, v):
        return _check_quantity(v)


class CreateOrderRequest(CamelModel):
    """주문 생성 요청"""

    items: List[OrderItemRequest] = Field(..., min_length=1)


class UpdateOrderItemRequest(CamelModel):
    """주문 상품 수량 변경 요청"""

    quantity: int = Field(..., examples=[2])

    @field_validator("quantity", mode="before")
    @classmethod
    def check_quantity(cls, v):
        return _check_quantity(v)


class UpdateOrderStatusRequest(CamelModel):
    """주문 상태 변경 요청 (관리자)"""

    status: OrderStatus

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return _parse_enum(OrderStatus, v, ORDER_STATUS_MESSAGE)


class CheckoutRequest(CamelModel):
    """체크아웃 요청 (결제 기록 생성)"""

    provider: PaymentProvider = Field(..., examples=["stripe"])
    provider_transaction_id: Optional[str] = Field(None, max_length=255)

    @field_validator("provider", mode="before")
    @classmethod
    def check_provider(cls, v):
        return _parse_enum(
            PaymentProvider, v, "Provider must be one of: " + _enum_choices(PaymentProvider)
        )


class UpdatePaymentRequest(CamelModel):
    """결제 상태 변경 요청 (관리자)"""

    status: PaymentStatus
    provider_transaction_id: Optional[str] = Field(None, max_length=255)

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, v):
        return _parse_enum(
            PaymentStatus, v, "Payment status must be one of: " + _enum_choices(PaymentStatus)
        )


# ==================== Response Schemas ====================


class PaymentPublic(CamelModel):
    id: str
    amount: float
    provider: PaymentProvider
    status: PaymentStatus
    provider_transaction_id: Optional[str] = None
    created_at: datetime

    @field_validator("amount", mode="before")
    @classmethod
    def decimal_to_float(cls, v):
        return _to_float(v)


class OrderItemPublic(CamelModel):
    id: int
    product_id: str
    quantity: int
    subtotal: float
    product: ProductPublic

    @field_validator("subtotal", mode="before")
    @classmethod
    def decimal_to_float(cls, v):
        return _to_float(v)


class OrderPublic(CamelModel):
    """주문 정보 (상품, 합계, 결제 포함)"""

    id: int
    user_id: int
    status: OrderStatus
    items: List[OrderItemPublic]
    total: float
    payment: Optional[PaymentPublic] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("total", mode="before")
    @classmethod
    def decimal_to_float(cls, v):
        return _to_float(v)


class OrderData(BaseModel):
    order: OrderPublic


class OrderResponse(BaseModel):
    """단일 주문 응답"""

    status: str = "success"
    data: OrderData


class OrderHistoryData(CamelModel):
    active_order: Optional[OrderPublic] = None
    completed_orders: List[OrderPublic]


class OrderHistoryResponse(BaseModel):
    """진행 중 주문 + 완료 주문 목록"""

    status: str = "success"
    data: OrderHistoryData


class OrderItemRemovedResponse(BaseModel):
    """
    주문 상품 삭제 응답

    마지막 상품을 삭제하면 주문도 삭제되며 data 는 null 이다.
    """

    status: str = "success"
    message: Optional[str] = None
    data: Optional[OrderData] = None
