"""
Order Service
장바구니(진행 중 주문), 주문 내역, 체크아웃/결제 기록 비즈니스 로직

요청 단위 세션이 하나의 트랜잭션이므로, 예외가 발생하면 주문과 주문 상품 변경은 함께 롤백된다.
"""

import logging
from collections import OrderedDict
from typing import Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from ...domain.models.order import Order, OrderStatus
from ...domain.models.order_product import OrderProduct
from ...domain.models.payment import Payment, PaymentProvider, PaymentStatus
from ...domain.models.user import User, UserRole
from ...domain.repositories import OrderRepository, PaymentRepository, ProductRepository
from ..product.exceptions import ProductNotFoundException
from .exceptions import (
    ActiveOrderExistsException,
    OrderAccessDeniedException,
    OrderCompletedException,
    OrderItemNotFoundException,
    OrderNotFoundException,
    OrderProductsNotFoundException,
    PaymentAlreadyExistsException,
    PaymentNotFoundException,
)
from .schemas import OrderItemRequest

logger = logging.getLogger(__name__)


def merge_order_items(items: List[OrderItemRequest]) -> Dict[str, int]:
    """같은 상품이 여러 번 요청되면 수량을 합산 (요청 순서 유지)"""
    merged: Dict[str, int] = OrderedDict()
    for item in items:
        merged[item.product_id] = merged.get(item.product_id, 0) + item.quantity
    return merged


class OrderService:
    """
    주문 서비스

    사용자당 진행 중(active) 주문은 하나뿐이며, 완료된 주문은 수정할 수 없다.
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        payment_repo: PaymentRepository,
    ):
        self.order_repo = order_repo
        self.product_repo = product_repo
        self.payment_repo = payment_repo

    # ==================== 조회 ====================

    async def get_order_history(self, user: User) -> Tuple[Optional[Order], List[Order]]:
        """
        사용자 주문 내역

        Returns:
            Tuple[Optional[Order], List[Order]]: (진행 중 주문, 완료된 주문 최신순)
        """
        active = await self.order_repo.get_active_for_user(user.id)
        completed = await self.order_repo.list_completed_for_user(user.id)
        return active, completed

    async def _load(self, order_id: int) -> Order:
        order = await self.order_repo.get_with_details(order_id)
        if order is None:
            raise OrderNotFoundException(order_id)
        return order

    async def get_order(self, user: User, order_id: int) -> Order:
        """
        주문 상세 (본인 또는 관리자)

        Raises:
            OrderNotFoundException: 주문 없음
            OrderAccessDeniedException: 다른 사용자의 주문
        """
        order = await self._load(order_id)
        if order.user_id != user.id and user.role != UserRole.ADMIN:
            raise OrderAccessDeniedException(order_id)
        return order

    async def _get_modifiable(self, user: User, order_id: int) -> Order:
        """본인의 진행 중 주문만 수정 가능"""
        order = await self._load(order_id)
        if order.user_id != user.id:
            raise OrderAccessDeniedException(order_id)
        if order.status != OrderStatus.ACTIVE:
            raise OrderCompletedException(order_id)
        return order

    # ==================== 장바구니 ====================

    async def create_order(self, user: User, items: List[OrderItemRequest]) -> Order:
        """
        주문 생성

        Raises:
            ActiveOrderExistsException: 이미 진행 중 주문이 있음
            OrderProductsNotFoundException: 존재하지 않는 상품 포함
        """
        if await self.order_repo.get_active_for_user(user.id) is not None:
            raise ActiveOrderExistsException()

        quantities = merge_order_items(items)
        products = await self.product_repo.list_by_ids(list(quantities))
        found = {product.id for product in products}
        missing = [product_id for product_id in quantities if product_id not in found]
        if missing:
            raise OrderProductsNotFoundException(missing)

        order = Order(
            user_id=user.id,
            status=OrderStatus.ACTIVE,
            items=[
                OrderProduct(product_id=product_id, quantity=quantity)
                for product_id, quantity in quantities.items()
            ],
        )

        # 동시 생성 경합은 (user_id, active) 부분 unique 인덱스로 판정
        try:
            order = await self.order_repo.save(order)
        except IntegrityError as e:
            raise ActiveOrderExistsException() from e

        logger.info(
            "Order created",
            extra={"order_id": order.id, "user_id": user.id, "items": len(quantities)},
        )
        return await self._load(order.id)

    async def add_item(
        self, user: User, order_id: int, product_id: str, quantity: int
    ) -> Order:
        """
        주문에 상품 추가 (이미 담긴 상품이면 수량 증가)

        Raises:
            ProductNotFoundException: 상품 없음
        """
        order = await self._get_modifiable(user, order_id)

        if await self.product_repo.get(product_id) is None:
            raise ProductNotFoundException(product_id)

        existing = next((item for item in order.items if item.product_id == product_id), None)
        if existing is not None:
            existing.quantity += quantity
        else:
            order.items.append(OrderProduct(product_id=product_id, quantity=quantity))

        await self.order_repo.save(order)
        return await self._load(order_id)

    async def update_item_quantity(
        self, user: User, order_id: int, item_id: int, quantity: int
    ) -> Order:
        order = await self._get_modifiable(user, order_id)
        item = self._find_item(order, item_id)
        item.quantity = quantity

        await self.order_repo.save(order)
        return await self._load(order_id)

    async def remove_item(self, user: User, order_id: int, item_id: int) -> Optional[Order]:
        """
        주문 상품 삭제

        Returns:
            Optional[Order]: 갱신된 주문, 마지막 상품을 삭제해 주문이 삭제되면 None
        """
        order = await self._get_modifiable(user, order_id)
        order.items.remove(self._find_item(order, item_id))

        if not order.items:
            await self.order_repo.delete(order)
            logger.info("Empty order deleted", extra={"order_id": order_id, "user_id": user.id})
            return None

        await self.order_repo.save(order)
        return await self._load(order_id)

    @staticmethod
    def _find_item(order: Order, item_id: int) -> OrderProduct:
        for item in order.items:
            if item.id == item_id:
                return item
        raise OrderItemNotFoundException(order.id, item_id)

    # ==================== 체크아웃 / 결제 ====================

    async def checkout(
        self,
        user: User,
        order_id: int,
        provider: PaymentProvider,
        provider_transaction_id: Optional[str] = None,
    ) -> Order:
        """
        체크아웃: 현재 합계로 결제 기록(pending)을 만들고 주문을 완료 처리

        Raises:
            PaymentAlreadyExistsException: 이미 결제 기록이 있음
        """
        order = await self._get_modifiable(user, order_id)
        if order.payment is not None:
            raise PaymentAlreadyExistsException(order_id)

        order.payment = Payment(
            amount=order.total,
            provider=provider,
            status=PaymentStatus.PENDING,
            provider_transaction_id=provider_transaction_id,
        )
        order.status = OrderStatus.COMPLETE
        await self.order_repo.save(order)

        logger.info(
            "Order checked out",
            extra={"order_id": order_id, "user_id": user.id, "provider": provider.value},
        )
        return await self._load(order_id)

    # ==================== 관리자 ====================

    async def update_status(self, order_id: int, status: OrderStatus) -> Order:
        """
        주문 상태 변경 (관리자)

        Raises:
            ActiveOrderExistsException: active 로 되돌릴 때 해당 사용자에게 다른 active 주문이 있음
        """
        order = await self._load(order_id)

        if status == OrderStatus.ACTIVE and order.status != OrderStatus.ACTIVE:
            active = await self.order_repo.get_active_for_user(order.user_id)
            if active is not None:
                raise ActiveOrderExistsException()

        order.status = status
        try:
            await self.order_repo.save(order)
        except IntegrityError as e:
            raise ActiveOrderExistsException() from e

        logger.info("Order status updated", extra={"order_id": order_id, "status": status.value})
        return await self._load(order_id)

    async def update_payment(
        self,
        order_id: int,
        status: PaymentStatus,
        provider_transaction_id: Optional[str] = None,
    ) -> Order:
        """결제 상태 변경 (관리자, 대행사 결과 반영)"""
        await self._load(order_id)

        payment = await self.payment_repo.get_by_order_id(order_id)
        if payment is None:
            raise PaymentNotFoundException(order_id)

        payment.status = status
        if provider_transaction_id:
            payment.provider_transaction_id = provider_transaction_id
        await self.payment_repo.save(payment)

        logger.info(
            "Payment status updated",
            extra={"order_id": order_id, "payment_id": payment.id, "status": status.value},
        )
        return await self._load(order_id)
