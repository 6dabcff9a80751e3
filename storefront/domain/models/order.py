"""
Order Model
주문(장바구니) ORM 모델
"""

import enum
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.core.database.base import Base

if TYPE_CHECKING:
    from .order_product import OrderProduct
    from .payment import Payment


class OrderStatus(str, enum.Enum):
    """주문 상태 (active: 장바구니, complete: 결제 완료)"""

    ACTIVE = "active"
    COMPLETE = "complete"


class Order(Base):
    """
    주문 모델

    사용자당 active 주문은 최대 1개이며, DB 부분 unique 인덱스로도 보장한다.

    Attributes:
        id: 주문 ID (Primary Key)
        user_id: 주문자 (Foreign Key -> users.id)
        status: 주문 상태
        items: 주문 상품 목록
        payment: 결제 기록 (체크아웃 이후)
    """

    __tablename__ = "orders"
    __table_args__ = (
        Index(
            "uq_orders_user_active",
            "user_id",
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[OrderStatus] = mapped_column(
        Enum(
            OrderStatus,
            name="order_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        default=OrderStatus.ACTIVE,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    # Relationships (비동기 세션에서는 지연 로딩 불가 -> selectin)
    items: Mapped[List["OrderProduct"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="OrderProduct.id",
    )
    payment: Mapped[Optional["Payment"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
        uselist=False,
    )

    @property
    def total(self) -> Decimal:
        """상품 가격 x 수량 합계"""
        return sum((item.subtotal for item in self.items), Decimal("0"))

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, user_id={self.user_id}, status={self.status})>"
