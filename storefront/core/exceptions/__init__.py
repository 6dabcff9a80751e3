"""
Core Exceptions Module
"""

from .base import (
    AppException,
    AuthenticationException,
    AuthorizationException,
    ValidationException,
    NotFoundException,
    ConflictException,
    InternalServerException,
    ServiceUnavailableException,
    RateLimitExceededException,
)
from .codes import ErrorCode
from .schemas import ErrorResponse

__all__ = [
    # Base Exceptions
    "AppException",
    "AuthenticationException",
    "AuthorizationException",
    "ValidationException",
    "NotFoundException",
    "ConflictException",
    "InternalServerException",
    "ServiceUnavailableException",
    "RateLimitExceededException",
    # Error Codes
    "ErrorCode",
    # Schemas
    "ErrorResponse",
]
