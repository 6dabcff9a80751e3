"""
Request Correlation Middleware
요청 추적 ID (X-Request-ID) 설정
"""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI


def setup_correlation_id(app: FastAPI) -> None:
    """
    요청마다 X-Request-ID 를 부여하고 응답 헤더로 반환

    에러 핸들러는 이 값을 request_id 로 로그와 응답에 포함한다.
    """
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name="X-Request-ID",
        update_request_header=True,
    )
