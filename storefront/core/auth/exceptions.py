"""
Core Authentication Exceptions
핵심 인증 관련 예외
"""

from ..exceptions import (
    AuthenticationException,
    AuthorizationException,
    ErrorCode,
    InternalServerException,
)


class NotLoggedInException(AuthenticationException):
    """토큰 없음 (헤더/쿠키 모두 비어 있음)"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.AUTH_NOT_LOGGED_IN,
            message="You are not logged in. Please log in to get access.",
        )


class TokenExpiredException(AuthenticationException):
    """토큰 만료"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.AUTH_TOKEN_EXPIRED,
            message="Your token has expired! Please log in again.",
        )


class InvalidTokenException(AuthenticationException):
    """유효하지 않은 토큰 (서명 불일치, 형식 오류 등)"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.AUTH_TOKEN_INVALID,
            message="Invalid token. Please log in again.",
        )


class UserNoLongerExistsException(AuthenticationException):
    """토큰은 유효하지만 사용자가 삭제됨"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.AUTH_USER_NO_LONGER_EXISTS,
            message="The user belonging to this token no longer exists.",
        )


class PermissionDeniedException(AuthorizationException):
    """역할 불일치"""

    def __init__(self, required_roles=None):
        super().__init__(
            error_code=ErrorCode.AUTHZ_FORBIDDEN,
            message="You do not have permission to perform this action",
            details={"required_roles": [str(r) for r in (required_roles or [])]},
        )


class HashingError(InternalServerException):
    """비밀번호 해싱 프리미티브 실패"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.SYS_HASHING_ERROR,
            message="Password hashing failed",
        )


class ComparisonError(InternalServerException):
    """저장된 해시 형식 오류로 비교 불가"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.SYS_HASHING_ERROR,
            message="Password comparison failed",
        )


class TokenSigningError(InternalServerException):
    """토큰 서명 실패"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.SYS_TOKEN_SIGNING_ERROR,
            message="Failed to generate authentication token",
        )
