"""
Product Domain Exceptions
상품 도메인 전용 커스텀 예외
"""

from ...core.exceptions import (
    ConflictException,
    ErrorCode,
    NotFoundException,
    ValidationException,
)


class ProductNotFoundException(NotFoundException):
    """상품 없음"""

    def __init__(self, product_id: str):
        super().__init__(
            error_code=ErrorCode.BIZ_PRODUCT_NOT_FOUND,
            message=f"Product not found with id: {product_id}",
            details={"product_id": product_id},
        )


class InvalidCategoryException(ValidationException):
    """존재하지 않는 카테고리로 조회"""

    def __init__(self, category: str):
        super().__init__(
            error_code=ErrorCode.VAL_INVALID_CATEGORY,
            message=f"Invalid category: {category}",
        )


class ProductAlreadyExistsException(ConflictException):
    """상품 ID 중복"""

    def __init__(self, product_id: str):
        super().__init__(
            error_code=ErrorCode.BIZ_DUPLICATE_RESOURCE,
            message=f"Product already exists with id: {product_id}",
            details={"product_id": product_id},
        )
