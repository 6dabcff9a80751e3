"""
Security Headers Middleware
보안 헤더 설정 미들웨어
"""

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..config import Settings


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    보안 헤더를 모든 HTTP 응답에 추가하는 미들웨어

    XSS, 클릭재킹, MIME 타입 혼동 공격 등으로부터 보호
    """

    def __init__(self, app, settings: Settings):
        super().__init__(app)
        self.settings = settings

    def hsts_value(self) -> str:
        value = f"max-age={self.settings.hsts_max_age}"
        if self.settings.hsts_include_subdomains:
            value += "; includeSubDomains"
        if self.settings.hsts_preload:
            value += "; preload"
        return value

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        headers = response.headers
        headers["Content-Security-Policy"] = self.settings.csp_directives
        headers["X-Content-Type-Options"] = "nosniff"
        headers["X-Frame-Options"] = self.settings.x_frame_options
        headers["Referrer-Policy"] = self.settings.referrer_policy
        headers["Cross-Origin-Opener-Policy"] = "same-origin"
        headers["X-DNS-Prefetch-Control"] = "off"
        # 최신 브라우저는 XSS 필터를 제거했으므로 비활성화가 권장값
        headers["X-XSS-Protection"] = "0"

        # HTTPS 요청에만 HSTS 적용
        if request.url.scheme == "https":
            headers["Strict-Transport-Security"] = self.hsts_value()

        return response


def setup_security_headers(app: FastAPI, settings: Settings) -> None:
    """보안 헤더 미들웨어 등록 (ENABLE_SECURITY_HEADERS=false 이면 생략)"""
    if settings.enable_security_headers:
        app.add_middleware(SecurityHeadersMiddleware, settings=settings)
