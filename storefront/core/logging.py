"""
Core Logging Configuration
structlog 기반의 구조화된 로깅 설정

모든 로그 레코드에는 요청 추적 ID(request_id)가 붙고,
비밀번호/토큰 계열 필드는 렌더링 전에 마스킹된다.
"""

import logging
import sys
from typing import Any, List, Optional

import structlog
from asgi_correlation_id import correlation_id
from structlog.types import EventDict, Processor, WrappedLogger

from storefront.core.config import Settings

REDACTED = "***"

# 로그에 원문이 남으면 안 되는 필드 (extra 인자 포함)
SENSITIVE_KEYS = frozenset(
    {
        "password",
        "password_confirm",
        "current_password",
        "password_digest",
        "token",
        "reset_token",
        "authorization",
        "cookie",
        "jwt_secret_key",
    }
)

_NOISY_LOGGERS = ["uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine"]


def add_request_id(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """현재 요청의 X-Request-ID 를 request_id 로 추가 (요청 밖에서는 생략)"""
    request_id = correlation_id.get()
    if request_id and "request_id" not in event_dict:
        event_dict["request_id"] = request_id
    return event_dict


def redact_sensitive_fields(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    for key in event_dict.keys() & SENSITIVE_KEYS:
        event_dict[key] = REDACTED
    return event_dict


def build_shared_processors() -> List[Processor]:
    """structlog 와 표준 logging 레코드에 공통으로 적용할 프로세서"""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.ExtraAdder(),
        add_request_id,
        redact_sensitive_fields,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def build_renderer(settings: Settings) -> Processor:
    """LOG_JSON_FORMAT 이면 JSON, 아니면 개발용 콘솔 출력"""
    if settings.log_json_format:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=not settings.is_production, pad_event=20)


def configure_logging(settings: Settings) -> None:
    """
    structlog 및 표준 로깅 설정

    표준 logging 로거(logging.getLogger)로 남긴 로그도 같은 프로세서 체인을 거쳐
    structlog 렌더러로 출력된다.

    Args:
        settings: 애플리케이션 설정 (log_level, log_json_format)
    """
    shared_processors = build_shared_processors()

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            build_renderer(settings),
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(settings.log_level.upper())

    # 라이브러리 로거는 루트로 전파시켜 같은 포맷으로 출력
    for name in _NOISY_LOGGERS:
        library_logger = logging.getLogger(name)
        library_logger.handlers = []
        library_logger.propagate = True


def get_logger(name: Optional[str] = None) -> Any:
    """구조화된 로거 반환"""
    return structlog.get_logger(name)
