"""
Base Exception Classes
기본 예외 클래스
"""

from typing import Optional, Dict, Any
from fastapi import status


class AppException(Exception):
    """
    애플리케이션 기본 예외

    모든 운영상(예상된) 예외의 베이스 클래스.
    전역 핸들러가 {status, message} 응답으로 변환한다.
    """

    def __init__(
        self,
        error_code: str,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Args:
            error_code: 에러 코드 (예: AUTH_001)
            message: 사용자 친화적 에러 메시지
            status_code: HTTP 상태 코드
            details: 추가 에러 정보 (로그 전용, 응답에 포함되지 않음)
            headers: 응답에 추가할 HTTP 헤더
        """
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.headers = headers
        super().__init__(self.message)

    @property
    def status(self) -> str:
        """응답 status 판별값 (4xx: fail, 5xx: error)"""
        return "fail" if 400 <= self.status_code < 500 else "error"

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"error_code={self.error_code!r}, "
            f"message={self.message!r}, "
            f"status_code={self.status_code})"
        )


class AuthenticationException(AppException):
    """
    인증 실패 예외 (401 Unauthorized)

    토큰 누락/만료/위조 또는 잘못된 자격 증명
    """

    def __init__(
        self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
        )


class AuthorizationException(AppException):
    """
    권한 부족 예외 (403 Forbidden)

    인증은 되었으나 역할(Role)이 맞지 않는 경우
    """

    def __init__(
        self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
        )


class ValidationException(AppException):
    """
    검증 실패 예외 (400 Bad Request)
    """

    def __init__(
        self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class NotFoundException(AppException):
    """
    리소스 없음 예외 (404 Not Found)
    """

    def __init__(
        self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
        )


class ConflictException(AppException):
    """
    충돌 예외 (예: 이메일 중복)

    이 서비스의 API 규약상 409가 아닌 400으로 응답한다.
    """

    def __init__(
        self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class InternalServerException(AppException):
    """
    서버 내부 오류 예외 (500 Internal Server Error)

    해싱/서명 프리미티브 실패 등 예상치 못한 오류
    """

    def __init__(
        self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
        )


class ServiceUnavailableException(AppException):
    """
    서비스 이용 불가 예외 (503 Service Unavailable)

    데이터베이스 등 외부 협력자에 연결할 수 없는 경우
    """

    def __init__(
        self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details=details,
        )


class RateLimitExceededException(AppException):
    """
    속도 제한 초과 예외 (429 Too Many Requests)

    요청 속도 제한을 초과한 경우 발생
    """

    def __init__(
        self,
        error_code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            details=details,
            headers=headers,
        )
