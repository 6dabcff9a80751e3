"""
Order API Endpoints (v1)
주문 / 장바구니 / 결제 기록 API 라우터 (로그인 필요)
"""

from fastapi import APIRouter, Depends, status

from storefront.core.auth.dependencies import get_current_user, restrict_to
from storefront.core.dependencies import (
    get_order_repository,
    get_payment_repository,
    get_product_repository,
)
from storefront.core.exceptions import ErrorResponse
from storefront.domain.models.order import Order
from storefront.domain.models.user import User, UserRole
from storefront.domain.repositories import OrderRepository, PaymentRepository, ProductRepository
from storefront.features.order.schemas import (
    CheckoutRequest,
    CreateOrderRequest,
    OrderData,
    OrderHistoryData,
    OrderHistoryResponse,
    OrderItemRemovedResponse,
    OrderItemRequest,
    OrderPublic,
    OrderResponse,
    UpdateOrderItemRequest,
    UpdateOrderStatusRequest,
    UpdatePaymentRequest,
)
from storefront.features.order.service import OrderService

router = APIRouter()

require_admin = restrict_to(UserRole.ADMIN)

ORDER_ERRORS = {
    401: {"model": ErrorResponse, "description": "인증 실패"},
    403: {"model": ErrorResponse, "description": "다른 사용자의 주문"},
    404: {"model": ErrorResponse, "description": "주문 / 상품 없음"},
}


def get_order_service(
    order_repo: OrderRepository = Depends(get_order_repository),
    product_repo: ProductRepository = Depends(get_product_repository),
    payment_repo: PaymentRepository = Depends(get_payment_repository),
) -> OrderService:
    """OrderService 의존성 주입"""
    return OrderService(order_repo, product_repo, payment_repo)


def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(data=OrderData(order=OrderPublic.model_validate(order)))


# ==================== Customer ====================


@router.get("", response_model=OrderHistoryResponse, responses={401: ORDER_ERRORS[401]})
async def get_my_orders(
    current_user: User = Depends(get_current_user),
    order_service: OrderService = Depends(get_order_service),
):
    """내 주문: 진행 중 주문 + 완료된 주문 (최신순)"""
    active, completed = await order_service.get_order_history(current_user)
    return OrderHistoryResponse(
        data=OrderHistoryData(
            active_order=OrderPublic.model_validate(active) if active else None,
            completed_orders=[OrderPublic.model_validate(order) for order in completed],
        )
    )


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "검증 실패 / 진행 중 주문 존재"},
        **ORDER_ERRORS,
    },
)
async def create_order(
    request: CreateOrderRequest,
    current_user: User = Depends(get_current_user),
    order_service: OrderService = Depends(get_order_service),
):
    """
    주문 생성

    사용자당 진행 중 주문은 하나이며, 같은 상품은 수량이 합산된다.
    """
    order = await order_service.create_order(current_user, request.items)
    return _order_response(order)


@router.get("/{order_id}", response_model=OrderResponse, responses=ORDER_ERRORS)
async def get_order(
    order_id: int,
    current_user: User = Depends(get_current_user),
    order_service: OrderService = Depends(get_order_service),
):
    """주문 상세 (본인 또는 관리자)"""
    return _order_response(await order_service.get_order(current_user, order_id))


@router.post("/{order_id}/items", response_model=OrderResponse, responses=ORDER_ERRORS)
async def add_order_item(
    order_id: int,
    request: OrderItemRequest,
    current_user: User = Depends(get_current_user),
    order_service: OrderService = Depends(get_order_service),
):
    """진행 중 주문에 상품 추가"""
    order = await order_service.add_item(
        current_user, order_id, request.product_id, request.quantity
    )
    return _order_response(order)


@router.patch(
    "/{order_id}/items/{item_id}", response_model=OrderResponse, responses=ORDER_ERRORS
)
async def update_order_item(
    order_id: int,
    item_id: int,
    request: UpdateOrderItemRequest,
    current_user: User = Depends(get_current_user),
    order_service: OrderService = Depends(get_order_service),
):
    """주문 상품 수량 변경"""
    order = await order_service.update_item_quantity(
        current_user, order_id, item_id, request.quantity
    )
    return _order_response(order)


@router.delete(
    "/{order_id}/items/{item_id}",
    response_model=OrderItemRemovedResponse,
    responses=ORDER_ERRORS,
)
async def remove_order_item(
    order_id: int,
    item_id: int,
    current_user: User = Depends(get_current_user),
    order_service: OrderService = Depends(get_order_service),
):
    """주문 상품 삭제 (마지막 상품이면 주문도 삭제)"""
    order = await order_service.remove_item(current_user, order_id, item_id)
    if order is None:
        return OrderItemRemovedResponse(message="Order deleted because it had no items")
    return OrderItemRemovedResponse(data=OrderData(order=OrderPublic.model_validate(order)))


@router.post(
    "/{order_id}/checkout",
    response_model=OrderResponse,
    responses={
        400: {"model": ErrorResponse, "description": "완료된 주문 / 결제 기록 존재"},
        **ORDER_ERRORS,
    },
)
async def checkout_order(
    order_id: int,
    request: CheckoutRequest,
    current_user: User = Depends(get_current_user),
    order_service: OrderService = Depends(get_order_service),
):
    """체크아웃: 결제 기록(pending) 생성 후 주문 완료"""
    order = await order_service.checkout(
        current_user, order_id, request.provider, request.provider_transaction_id
    )
    return _order_response(order)


# ==================== Admin ====================


@router.patch(
    "/{order_id}",
    response_model=OrderResponse,
    dependencies=[Depends(require_admin)],
    responses=ORDER_ERRORS,
)
async def update_order_status(
    order_id: int,
    request: UpdateOrderStatusRequest,
    order_service: OrderService = Depends(get_order_service),
):
    """주문 상태 변경 (관리자)"""
    return _order_response(await order_service.update_status(order_id, request.status))


@router.patch(
    "/{order_id}/payment",
    response_model=OrderResponse,
    dependencies=[Depends(require_admin)],
    responses=ORDER_ERRORS,
)
async def update_order_payment(
    order_id: int,
    request: UpdatePaymentRequest,
    order_service: OrderService = Depends(get_order_service),
):
    """결제 상태 변경 (관리자)"""
    order = await order_service.update_payment(
        order_id, request.status, request.provider_transaction_id
    )
    return _order_response(order)
