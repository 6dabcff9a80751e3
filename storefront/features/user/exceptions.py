"""
User Domain Exceptions
사용자 도메인 전용 커스텀 예외
"""

from ...core.exceptions import (
    AuthenticationException,
    ConflictException,
    ErrorCode,
    NotFoundException,
    ValidationException,
)


class UserNotFoundException(NotFoundException):
    """사용자 없음"""

    def __init__(self, user_id=None):
        super().__init__(
            error_code=ErrorCode.BIZ_USER_NOT_FOUND,
            message="User not found",
            details={"user_id": user_id} if user_id is not None else None,
        )


class NoUserWithEmailException(NotFoundException):
    """비밀번호 재설정 요청 이메일에 해당하는 사용자 없음"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.BIZ_USER_NOT_FOUND,
            message="There is no user with this email address",
        )


class EmailInUseException(ConflictException):
    """프로필 이메일 변경 시 중복"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.BIZ_DUPLICATE_RESOURCE,
            message="Email is already in use",
        )


class WrongCurrentPasswordException(AuthenticationException):
    """현재 비밀번호 불일치"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.AUTH_WRONG_CURRENT_PASSWORD,
            message="Your current password is wrong",
        )


class InvalidResetTokenException(ValidationException):
    """재설정 토큰이 없거나 만료됨"""

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.VAL_INVALID_RESET_TOKEN,
            message="Token is invalid or has expired",
        )
