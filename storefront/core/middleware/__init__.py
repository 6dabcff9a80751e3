"""
Middleware Module
CORS, 요청 추적, 보안 헤더 미들웨어 관리
"""

from .cors import setup_cors
from .correlation import setup_correlation_id
from .security_headers import SecurityHeadersMiddleware, setup_security_headers

__all__ = [
    "setup_cors",
    "setup_correlation_id",
    "SecurityHeadersMiddleware",
    "setup_security_headers",
]
