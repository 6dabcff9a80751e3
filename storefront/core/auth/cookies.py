"""
Cookie Utility Module
인증 쿠키 설정 및 관리 헬퍼 함수
"""

import logging
from typing import Any, Dict

from fastapi import Response

from ..config import AuthConfig, Settings

logger = logging.getLogger(__name__)


def get_cookie_settings(settings: Settings) -> Dict[str, Any]:
    """
    쿠키 보안 설정 반환

    Returns:
        Dict[str, Any]: 쿠키 설정 딕셔너리 (httponly, secure, samesite, path, domain)
    """
    cookie_settings = {
        "httponly": settings.cookie_httponly,
        "secure": settings.cookie_secure,
        "samesite": settings.cookie_samesite,
        "path": settings.cookie_path,
    }

    # domain은 None이 아닐 때만 추가 (same-origin의 경우 None)
    if settings.cookie_domain is not None:
        cookie_settings["domain"] = settings.cookie_domain

    return cookie_settings


def set_auth_cookie(
    response: Response,
    token: str,
    settings: Settings,
    auth_config: AuthConfig,
) -> None:
    """
    인증 쿠키 설정 (토큰 수명과 동일한 max_age)

    Args:
        response: FastAPI Response 객체
        token: JWT Access Token
        settings: 쿠키 보안 설정
        auth_config: 쿠키 이름 / 토큰 수명
    """
    max_age = int(auth_config.token_lifetime.total_seconds())
    response.set_cookie(
        key=auth_config.cookie_name,
        value=token,
        max_age=max_age,
        **get_cookie_settings(settings),
    )

    logger.debug(
        "Auth cookie set",
        extra={"cookie_name": auth_config.cookie_name, "max_age_seconds": max_age},
    )


def clear_auth_cookie(
    response: Response,
    settings: Settings,
    auth_config: AuthConfig,
) -> None:
    """
    인증 쿠키 삭제 (로그아웃 시 사용)

    클라이언트 쿠키만 삭제하며, 이미 발급된 토큰은 만료 시까지 유효하다.
    """
    response.set_cookie(
        key=auth_config.cookie_name,
        value="",
        max_age=0,
        **get_cookie_settings(settings),
    )

    logger.debug("Auth cookie cleared", extra={"cookie_name": auth_config.cookie_name})
