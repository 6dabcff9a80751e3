"""
Exception Handler Unit Tests
전역 예외 핸들러 및 에러 응답 포맷 테스트
"""

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, field_validator

from storefront.core.config import Settings
from storefront.core.exceptions import (
    AppException,
    AuthenticationException,
    ConflictException,
    ErrorCode,
    ErrorResponse,
    InternalServerException,
    NotFoundException,
    RateLimitExceededException,
)
from storefront.core.exceptions.handlers import (
    GENERIC_ERROR_MESSAGE,
    format_validation_errors,
    register_exception_handlers,
)


def build_settings(**overrides) -> Settings:
    values = {"app_env": "test", "debug": True, "jwt_secret_key": "x" * 32}
    values.update(overrides)
    return Settings(**values)


class Payload(BaseModel):
    name: str
    age: int

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        if len(v) < 2:
            raise ValueError("Name is too short")
        return v


def build_app(settings) -> FastAPI:
    app = FastAPI()
    app.state.settings = settings
    register_exception_handlers(app)

    @app.get("/not-found")
    async def not_found():
        raise NotFoundException(error_code=ErrorCode.BIZ_RESOURCE_NOT_FOUND, message="Nothing here")

    @app.get("/unauthorized")
    async def unauthorized():
        raise AuthenticationException(
            error_code=ErrorCode.AUTH_TOKEN_INVALID, message="Invalid token. Please log in again."
        )

    @app.get("/conflict")
    async def conflict():
        raise ConflictException(error_code=ErrorCode.BIZ_DUPLICATE_RESOURCE, message="Duplicate")

    @app.get("/hashing-failure")
    async def hashing_failure():
        raise InternalServerException(
            error_code=ErrorCode.SYS_HASHING_ERROR, message="Password hashing failed"
        )

    @app.get("/throttled")
    async def throttled():
        raise RateLimitExceededException(
            error_code=ErrorCode.RATE_LIMIT_EXCEEDED,
            message="Too many requests",
            headers={"Retry-After": "60"},
        )

    @app.get("/crash")
    async def crash():
        raise RuntimeError("database exploded")

    @app.post("/validate")
    async def validate(payload: Payload):
        return payload

    return app


async def request(app: FastAPI, method: str, url: str, **kwargs):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.request(method, url, **kwargs)


class TestAppException:
    """AppException status 판별값"""

    def test_client_error_is_fail(self):
        exc = AppException(error_code="X", message="m", status_code=400)
        assert exc.status == "fail"

    def test_server_error_is_error(self):
        exc = AppException(error_code="X", message="m", status_code=503)
        assert exc.status == "error"

    def test_conflict_uses_400(self):
        exc = ConflictException(error_code="X", message="dup")
        assert exc.status_code == 400


class TestErrorEnvelope:
    """에러 응답 포맷"""

    async def test_app_exception_envelope(self):
        response = await request(build_app(build_settings()), "GET", "/not-found")

        assert response.status_code == 404
        body = response.json()
        assert body["status"] == "fail"
        assert body["message"] == "Nothing here"
        assert body["error_code"] == ErrorCode.BIZ_RESOURCE_NOT_FOUND.value

    async def test_error_code_logged_by_value(self, caplog):
        with caplog.at_level("WARNING", logger="storefront.core.exceptions.handlers"):
            await request(build_app(build_settings()), "GET", "/not-found")

        record = next(r for r in caplog.records if "AppException occurred" in r.getMessage())
        assert f"[{ErrorCode.BIZ_RESOURCE_NOT_FOUND.value}]" in record.getMessage()
        assert "ErrorCode." not in record.getMessage()
        assert record.error_code == ErrorCode.BIZ_RESOURCE_NOT_FOUND.value

    async def test_authentication_envelope(self):
        response = await request(build_app(build_settings()), "GET", "/unauthorized")

        assert response.status_code == 401
        assert response.json()["status"] == "fail"

    async def test_conflict_envelope(self):
        response = await request(build_app(build_settings()), "GET", "/conflict")

        assert response.status_code == 400
        assert response.json()["message"] == "Duplicate"

    async def test_validation_error_envelope(self):
        response = await request(
            build_app(build_settings()), "POST", "/validate", json={"name": "A", "age": 3}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "fail"
        assert body["message"] == "Validation error: name: Name is too short"

    async def test_unknown_route_envelope(self):
        response = await request(build_app(build_settings()), "GET", "/missing")

        assert response.status_code == 404
        assert response.json()["status"] == "fail"

    async def test_unexpected_error_verbose_mode(self):
        """개발 모드: 일반 메시지 + 예외 상세"""
        response = await request(build_app(build_settings(debug=True)), "GET", "/crash")

        assert response.status_code == 500
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == GENERIC_ERROR_MESSAGE
        assert body["error"]["type"] == "RuntimeError"
        assert "database exploded" in body["error"]["detail"]

    async def test_unexpected_error_production_mode(self):
        """운영 모드: 내부 정보 노출 없음"""
        settings = build_settings(app_env="prod", debug=False)
        response = await request(build_app(settings), "GET", "/crash")

        assert response.status_code == 500
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == GENERIC_ERROR_MESSAGE
        assert "error" not in body
        assert "database exploded" not in response.text

    async def test_internal_app_exception_production_mode(self):
        """운영 모드: 5xx AppException 메시지도 숨긴다"""
        settings = build_settings(app_env="prod", debug=False)
        response = await request(build_app(settings), "GET", "/hashing-failure")

        assert response.status_code == 500
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == GENERIC_ERROR_MESSAGE
        assert body["error_code"] == ErrorCode.SYS_HASHING_ERROR.value
        assert "error" not in body
        assert "Password hashing failed" not in response.text

    async def test_internal_app_exception_verbose_mode(self):
        """개발 모드: 원래 메시지와 예외 상세를 함께 반환"""
        response = await request(build_app(build_settings(debug=True)), "GET", "/hashing-failure")

        assert response.status_code == 500
        body = response.json()
        assert body["message"] == "Password hashing failed"
        assert body["error"] == {
            "type": "InternalServerException",
            "detail": "Password hashing failed",
        }

    async def test_client_error_message_kept_in_production_mode(self):
        settings = build_settings(app_env="prod", debug=False)
        response = await request(build_app(settings), "GET", "/not-found")

        assert response.json()["message"] == "Nothing here"

    async def test_rate_limit_envelope_carries_headers(self):
        response = await request(build_app(build_settings()), "GET", "/throttled")

        assert response.status_code == 429
        assert response.json()["status"] == "fail"
        assert response.headers["Retry-After"] == "60"


class TestFormatValidationErrors:
    """검증 에러 메시지 변환"""

    def test_multiple_errors(self):
        errors = [
            {"loc": ("body", "email"), "msg": "value is not a valid email address", "type": "value_error"},
            {"loc": ("body", "age"), "msg": "Field required", "type": "missing"},
        ]

        message = format_validation_errors(errors)

        assert message == (
            "Validation error: email: value is not a valid email address; age: Field required"
        )

    def test_value_error_context(self):
        errors = [
            {
                "loc": ("body", "password"),
                "msg": "Value error, Password must be at least 8 characters",
                "type": "value_error",
                "ctx": {"error": ValueError("Password must be at least 8 characters")},
            }
        ]

        assert format_validation_errors(errors) == (
            "Validation error: password: Password must be at least 8 characters"
        )


class TestErrorResponse:
    def test_enum_error_code_is_unwrapped(self):
        response = ErrorResponse(
            status="fail", message="m", error_code=ErrorCode.AUTH_TOKEN_INVALID
        )

        assert response.to_content() == {
            "status": "fail",
            "message": "m",
            "error_code": ErrorCode.AUTH_TOKEN_INVALID.value,
        }
