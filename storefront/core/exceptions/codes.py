"""
Error Code Definitions
에러 코드 정의
"""

from enum import Enum


class ErrorCode(str, Enum):
    """
    애플리케이션 에러 코드

    규칙:
    - AUTH_xxx: 인증 관련 에러 (401)
    - AUTHZ_xxx: 권한 관련 에러 (403)
    - VAL_xxx: 검증 관련 에러 (400)
    - BIZ_xxx: 비즈니스 로직 에러 (400, 404)
    - RATE_xxx: 속도 제한 에러 (429)
    - SYS_xxx: 시스템 에러 (500, 503)
    """

    # ==================== Authentication (AUTH_xxx) ====================
    AUTH_INVALID_CREDENTIALS = "AUTH_001"
    """이메일 또는 비밀번호가 일치하지 않습니다"""

    AUTH_NOT_LOGGED_IN = "AUTH_002"
    """토큰이 없습니다 (로그인 필요)"""

    AUTH_TOKEN_EXPIRED = "AUTH_003"
    """토큰이 만료되었습니다"""

    AUTH_TOKEN_INVALID = "AUTH_004"
    """유효하지 않은 토큰입니다"""

    AUTH_EMAIL_ALREADY_EXISTS = "AUTH_005"
    """이미 등록된 이메일입니다"""

    AUTH_USER_NO_LONGER_EXISTS = "AUTH_006"
    """토큰 소유 사용자가 삭제되었습니다"""

    AUTH_WRONG_CURRENT_PASSWORD = "AUTH_007"
    """현재 비밀번호가 일치하지 않습니다"""

    # ==================== Authorization (AUTHZ_xxx) ====================
    AUTHZ_FORBIDDEN = "AUTHZ_001"
    """접근 권한이 없습니다"""

    AUTHZ_ORDER_ACCESS_DENIED = "AUTHZ_002"
    """다른 사용자의 주문에 접근할 수 없습니다"""

    # ==================== Validation (VAL_xxx) ====================
    VAL_INVALID_INPUT = "VAL_001"
    """입력 데이터가 유효하지 않습니다"""

    VAL_INVALID_RESET_TOKEN = "VAL_002"
    """비밀번호 재설정 토큰이 유효하지 않거나 만료되었습니다"""

    VAL_INVALID_CATEGORY = "VAL_003"
    """존재하지 않는 상품 카테고리입니다"""

    # ==================== Business Logic (BIZ_xxx) ====================
    BIZ_RESOURCE_NOT_FOUND = "BIZ_001"
    """리소스를 찾을 수 없습니다"""

    BIZ_DUPLICATE_RESOURCE = "BIZ_002"
    """중복된 리소스입니다"""

    BIZ_USER_NOT_FOUND = "BIZ_101"
    """사용자를 찾을 수 없습니다"""

    BIZ_PRODUCT_NOT_FOUND = "BIZ_201"
    """상품을 찾을 수 없습니다"""

    BIZ_ORDER_NOT_FOUND = "BIZ_301"
    """주문을 찾을 수 없습니다"""

    BIZ_ORDER_ITEM_NOT_FOUND = "BIZ_302"
    """주문 상품을 찾을 수 없습니다"""

    BIZ_ACTIVE_ORDER_EXISTS = "BIZ_303"
    """이미 진행 중인 주문이 있습니다"""

    BIZ_ORDER_COMPLETED = "BIZ_304"
    """완료된 주문은 수정할 수 없습니다"""

    BIZ_PAYMENT_EXISTS = "BIZ_305"
    """이미 결제 기록이 있는 주문입니다"""

    # ==================== Rate Limit (RATE_xxx) ====================
    RATE_LIMIT_EXCEEDED = "RATE_001"
    """요청 속도 제한을 초과했습니다"""

    # ==================== System (SYS_xxx) ====================
    SYS_INTERNAL_ERROR = "SYS_001"
    """서버 내부 오류가 발생했습니다"""

    SYS_DATABASE_ERROR = "SYS_002"
    """데이터베이스 오류가 발생했습니다"""

    SYS_HASHING_ERROR = "SYS_003"
    """비밀번호 해싱/비교에 실패했습니다"""

    SYS_TOKEN_SIGNING_ERROR = "SYS_004"
    """토큰 서명에 실패했습니다"""
