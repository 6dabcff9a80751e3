"""
Authentication Module
JWT, 비밀번호 인증 관리

접근 제어 의존성은 storefront.core.auth.dependencies 에서 직접 import 한다.
"""

from .jwt_manager import JWTManager, TokenFailure, TokenVerification
from .providers import CredentialsAuthProvider

__all__ = [
    "JWTManager",
    "TokenFailure",
    "TokenVerification",
    "CredentialsAuthProvider",
]
