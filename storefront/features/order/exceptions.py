"""
Order Domain Exceptions
주문 도메인 전용 커스텀 예외
"""

from typing import List

from ...core.exceptions import (
    AuthorizationException,
    ConflictException,
    ErrorCode,
    NotFoundException,
    ValidationException,
)


class OrderNotFoundException(NotFoundException):
    def __init__(self, order_id: int):
        super().__init__(
            error_code=ErrorCode.BIZ_ORDER_NOT_FOUND,
            message="Order not found",
            details={"order_id": order_id},
        )


class OrderItemNotFoundException(NotFoundException):
    def __init__(self, order_id: int, item_id: int):
        super().__init__(
            error_code=ErrorCode.BIZ_ORDER_ITEM_NOT_FOUND,
            message="Order item not found",
            details={"order_id": order_id, "item_id": item_id},
        )


class OrderProductsNotFoundException(NotFoundException):
    """주문 요청에 존재하지 않는 상품이 포함됨"""

    def __init__(self, product_ids: List[str]):
        super().__init__(
            error_code=ErrorCode.BIZ_PRODUCT_NOT_FOUND,
            message="One or more products not found: " + ", ".join(product_ids),
            details={"product_ids": product_ids},
        )


class OrderAccessDeniedException(AuthorizationException):
    """다른 사용자의 주문 접근"""

    def __init__(self, order_id: int):
        super().__init__(
            error_code=ErrorCode.AUTHZ_ORDER_ACCESS_DENIED,
            message="Not authorized to access this order",
            details={"order_id": order_id},
        )


class ActiveOrderExistsException(ConflictException):
    """사용자당 진행 중 주문은 1건"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.BIZ_ACTIVE_ORDER_EXISTS,
            message="You already have an active order",
        )


class OrderCompletedException(ValidationException):
    """완료된 주문 수정 시도"""

    def __init__(self, order_id: int):
        super().__init__(
            error_code=ErrorCode.BIZ_ORDER_COMPLETED,
            message="Cannot modify a completed order",
            details={"order_id": order_id},
        )


class PaymentAlreadyExistsException(ConflictException):
    def __init__(self, order_id: int):
        super().__init__(
            error_code=ErrorCode.BIZ_PAYMENT_EXISTS,
            message="Payment already recorded for this order",
            details={"order_id": order_id},
        )


class PaymentNotFoundException(NotFoundException):
    def __init__(self, order_id: int):
        super().__init__(
            error_code=ErrorCode.BIZ_RESOURCE_NOT_FOUND,
            message="No payment recorded for this order",
            details={"order_id": order_id},
        )
