"""
Order Repository
주문 / 결제 데이터 접근 계층
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..models.order import Order, OrderStatus
from ..models.order_product import OrderProduct
from ..models.payment import Payment
from .base import AbstractRepository


def _with_details(stmt):
    """주문 상품, 상품, 결제를 함께 로딩 (세션에 있는 객체도 다시 채움)"""
    return stmt.options(
        selectinload(Order.items).selectinload(OrderProduct.product),
        selectinload(Order.payment),
    ).execution_options(populate_existing=True)


class OrderRepository(AbstractRepository[Order]):
    """주문 Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Order)

    async def get_with_details(self, order_id: int) -> Optional[Order]:
        """상세 정보 포함 주문 조회"""
        result = await self.session.execute(
            _with_details(select(Order).where(Order.id == order_id))
        )
        return result.scalar_one_or_none()

    async def get_active_for_user(self, user_id: int) -> Optional[Order]:
        """사용자의 진행 중 주문 (최대 1건)"""
        result = await self.session.execute(
            _with_details(
                select(Order).where(
                    Order.user_id == user_id, Order.status == OrderStatus.ACTIVE
                )
            )
        )
        return result.scalar_one_or_none()

    async def list_completed_for_user(self, user_id: int) -> List[Order]:
        """사용자의 완료된 주문 (최신순)"""
        result = await self.session.execute(
            _with_details(
                select(Order)
                .where(Order.user_id == user_id, Order.status == OrderStatus.COMPLETE)
                .order_by(Order.created_at.desc(), Order.id.desc())
            )
        )
        return list(result.scalars().all())


class PaymentRepository(AbstractRepository[Payment]):
    """결제 Repository"""

    def __init__(self, session: AsyncSession):
        super().__init__(session, Payment)

    async def get_by_order_id(self, order_id: int) -> Optional[Payment]:
        result = await self.session.execute(
            select(Payment).where(Payment.order_id == order_id)
        )
        return result.scalar_one_or_none()
