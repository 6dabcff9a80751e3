"""
Auth Domain Exceptions
인증 도메인 전용 커스텀 예외
"""

from ...core.exceptions import (
    AuthenticationException,
    ConflictException,
    ErrorCode,
)


class InvalidCredentialsException(AuthenticationException):
    """
    이메일 또는 비밀번호 불일치

    존재하지 않는 이메일과 잘못된 비밀번호에 동일한 메시지를 사용한다.
    """

    def __init__(self):
        super().__init__(
            error_code=ErrorCode.AUTH_INVALID_CREDENTIALS,
            message="Incorrect email or password",
        )


class EmailAlreadyExistsException(ConflictException):
    """이메일 중복"""

    def __init__(self, email: str):
        super().__init__(
            error_code=ErrorCode.AUTH_EMAIL_ALREADY_EXISTS,
            message="Email already in use",
            details={"email": email},
        )
