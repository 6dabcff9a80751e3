"""
Product API Endpoints (v1)
상품 카탈로그 API 라우터
"""

from fastapi import APIRouter, Depends, Response, status

from storefront.core.auth.dependencies import restrict_to
from storefront.core.dependencies import get_product_repository
from storefront.core.exceptions import ErrorResponse
from storefront.domain.models.user import UserRole
from storefront.domain.repositories import ProductRepository
from storefront.features.product.schemas import (
    ProductCreate,
    ProductData,
    ProductListData,
    ProductListResponse,
    ProductPublic,
    ProductResponse,
    ProductUpdate,
)
from storefront.features.product.service import ProductService

router = APIRouter()

require_admin = restrict_to(UserRole.ADMIN)


def get_product_service(
    product_repo: ProductRepository = Depends(get_product_repository),
) -> ProductService:
    """ProductService 의존성 주입"""
    return ProductService(product_repo)


def _list_response(products) -> ProductListResponse:
    return ProductListResponse(
        results=len(products),
        data=ProductListData(products=[ProductPublic.model_validate(p) for p in products]),
    )


def _product_response(product) -> ProductResponse:
    return ProductResponse(data=ProductData(product=ProductPublic.model_validate(product)))


# ==================== Public ====================


@router.get("", response_model=ProductListResponse)
async def list_products(product_service: ProductService = Depends(get_product_service)):
    """전체 상품 목록"""
    return _list_response(await product_service.list_products())


@router.get("/featured", response_model=ProductListResponse)
async def list_featured_products(
    product_service: ProductService = Depends(get_product_service),
):
    """신상품 목록 (최근 30일)"""
    return _list_response(await product_service.list_featured())


@router.get(
    "/category/{category}",
    response_model=ProductListResponse,
    responses={400: {"model": ErrorResponse, "description": "잘못된 카테고리"}},
)
async def list_products_by_category(
    category: str,
    product_service: ProductService = Depends(get_product_service),
):
    """카테고리별 상품 목록"""
    return _list_response(await product_service.list_by_category(category))


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse, "description": "상품 없음"}},
)
async def get_product(
    product_id: str,
    product_service: ProductService = Depends(get_product_service),
):
    """상품 상세"""
    return _product_response(await product_service.get_product(product_id))


# ==================== Admin ====================


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    responses={
        400: {"model": ErrorResponse, "description": "검증 실패 / ID 중복"},
        403: {"model": ErrorResponse, "description": "관리자 전용"},
    },
)
async def create_product(
    request: ProductCreate,
    product_service: ProductService = Depends(get_product_service),
):
    """상품 등록 (관리자)"""
    return _product_response(await product_service.create_product(request))


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    dependencies=[Depends(require_admin)],
    responses={404: {"model": ErrorResponse, "description": "상품 없음"}},
)
async def update_product(
    product_id: str,
    request: ProductUpdate,
    product_service: ProductService = Depends(get_product_service),
):
    """상품 수정 (관리자)"""
    return _product_response(await product_service.update_product(product_id, request))


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
    responses={404: {"model": ErrorResponse, "description": "상품 없음"}},
)
async def delete_product(
    product_id: str,
    product_service: ProductService = Depends(get_product_service),
):
    """상품 삭제 (관리자)"""
    await product_service.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
