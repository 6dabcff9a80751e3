"""
Auth Flow Integration Tests
인증 플로우 통합 테스트 (DB 연동)
"""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient

from storefront.core.auth.providers.credentials import CredentialsAuthProvider
from storefront.core.exceptions.handlers import GENERIC_ERROR_MESSAGE
from storefront.domain.models.user import User, UserRole
from storefront.domain.repositories import UserRepository

SIGNUP_PAYLOAD = {
    "firstName": "Jane",
    "lastName": "Doe",
    "email": "test@example.com",
    "password": "SecurePass123",
    "passwordConfirm": "SecurePass123",
}


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def signup(client: AsyncClient, **overrides):
    payload = {**SIGNUP_PAYLOAD, **overrides}
    return await client.post("/api/auth/signup", json=payload)


class TestSignup:
    """회원가입 플로우 통합 테스트"""

    async def test_signup_new_user(self, client: AsyncClient, app):
        """신규 사용자 회원가입"""
        response = await signup(client)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "success"
        assert body["token"]
        assert body["data"]["user"] == {
            "id": body["data"]["user"]["id"],
            "firstName": "Jane",
            "lastName": "Doe",
            "email": "test@example.com",
            "role": "customer",
        }
        assert "jwt" in response.cookies

        # DB 에는 평문이 아닌 digest 가 저장됨
        async with app.state.session_factory() as session:
            user = await UserRepository(session).get_by_email("test@example.com")
        assert user is not None
        assert user.password_digest != "SecurePass123"
        assert user.password_digest not in response.text

    async def test_signup_always_creates_customer(self, client: AsyncClient):
        """요청 본문의 role 은 무시된다"""
        response = await signup(client, role="admin")

        assert response.status_code == 201
        assert response.json()["data"]["user"]["role"] == "customer"

    async def test_signup_normalises_email(self, client: AsyncClient):
        """이메일은 소문자로 저장"""
        response = await signup(client, email="Jane.Doe@Example.com")

        assert response.status_code == 201
        assert response.json()["data"]["user"]["email"] == "jane.doe@example.com"

    async def test_signup_duplicate_email(self, client: AsyncClient):
        """중복 이메일 회원가입 실패"""
        await signup(client)

        response = await signup(client)

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "fail"
        assert "Email already in use" in body["message"]

    async def test_signup_duplicate_email_different_case(self, client: AsyncClient):
        await signup(client)

        response = await signup(client, email="TEST@example.com")

        assert response.status_code == 400
        assert "Email already in use" in response.json()["message"]

    async def test_signup_weak_password(self, client: AsyncClient):
        """비밀번호 정책 위반"""
        response = await signup(client, password="weak", passwordConfirm="weak")

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "fail"
        assert "Password must be" in body["message"]

    async def test_signup_password_without_digit(self, client: AsyncClient):
        response = await signup(
            client, password="NoDigitsHere", passwordConfirm="NoDigitsHere"
        )

        assert response.status_code == 400
        assert "Password must be" in response.json()["message"]

    async def test_signup_password_mismatch(self, client: AsyncClient):
        response = await signup(client, passwordConfirm="SecurePass124")

        assert response.status_code == 400
        assert "Passwords do not match" in response.json()["message"]

    async def test_signup_invalid_email(self, client: AsyncClient):
        response = await signup(client, email="not-an-email")

        assert response.status_code == 400
        assert "email" in response.json()["message"]

    async def test_signup_short_name(self, client: AsyncClient):
        response = await signup(client, firstName="J")

        assert response.status_code == 400
        assert response.json()["status"] == "fail"

    async def test_signup_missing_fields(self, client: AsyncClient):
        response = await client.post("/api/auth/signup", json={"email": "a@example.com"})

        assert response.status_code == 400
        assert response.json()["message"].startswith("Validation error")


class TestLogin:
    """로그인 플로우 통합 테스트"""

    async def test_login_success(self, client: AsyncClient, create_user):
        await create_user(email="test@example.com")

        response = await client.post(
            "/api/auth/login",
            json={"email": "test@example.com", "password": "SecurePass123"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["token"]
        assert body["data"]["user"]["email"] == "test@example.com"
        assert "passwordDigest" not in body["data"]["user"]
        assert "jwt" in response.cookies

    async def test_login_email_case_insensitive(self, client: AsyncClient, create_user):
        await create_user(email="test@example.com")

        response = await client.post(
            "/api/auth/login",
            json={"email": "TEST@example.com", "password": "SecurePass123"},
        )

        assert response.status_code == 200

    async def test_login_wrong_password(self, client: AsyncClient, create_user):
        """비밀번호 불일치"""
        await create_user(email="test@example.com")

        response = await client.post(
            "/api/auth/login",
            json={"email": "test@example.com", "password": "WrongPass123"},
        )

        assert response.status_code == 401
        assert response.json()["status"] == "fail"
        assert response.json()["message"] == "Incorrect email or password"

    async def test_login_unknown_email_same_response(self, client: AsyncClient, create_user):
        """존재하지 않는 이메일도 동일한 응답 (사용자 존재 여부 노출 금지)"""
        await create_user(email="test@example.com")

        wrong_password = await client.post(
            "/api/auth/login",
            json={"email": "test@example.com", "password": "WrongPass123"},
        )
        unknown_email = await client.post(
            "/api/auth/login",
            json={"email": "nobody@example.com", "password": "WrongPass123"},
        )

        assert unknown_email.status_code == wrong_password.status_code == 401
        assert unknown_email.json()["message"] == wrong_password.json()["message"]


class TestCurrentUser:
    """현재 사용자 조회"""

    async def test_me_with_bearer_token(self, client: AsyncClient):
        token = (await signup(client)).json()["token"]
        client.cookies.clear()

        response = await client.get("/api/auth/me", headers=bearer(token))

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["data"]["user"]["email"] == "test@example.com"
        assert body["data"]["user"]["role"] == "customer"

    async def test_me_with_cookie(self, client: AsyncClient):
        """헤더가 없으면 쿠키의 토큰 사용"""
        token = (await signup(client)).json()["token"]
        client.cookies.clear()

        response = await client.get("/api/auth/me", headers={"Cookie": f"jwt={token}"})

        assert response.status_code == 200
        assert response.json()["data"]["user"]["email"] == "test@example.com"

    async def test_me_without_token(self, client: AsyncClient):
        """토큰이 없으면 401"""
        response = await client.get("/api/auth/me")

        assert response.status_code == 401
        body = response.json()
        assert body["status"] == "fail"
        assert "Please log in" in body["message"]

    async def test_me_with_non_bearer_scheme(self, client: AsyncClient):
        response = await client.get("/api/auth/me", headers={"Authorization": "Basic abc"})

        assert response.status_code == 401
        assert "Please log in" in response.json()["message"]

    async def test_me_for_deleted_user(self, client: AsyncClient, app):
        """토큰 발급 후 삭제된 사용자"""
        body = (await signup(client)).json()
        client.cookies.clear()

        async with app.state.session_factory() as session:
            user = await session.get(User, body["data"]["user"]["id"])
            await session.delete(user)
            await session.commit()

        response = await client.get("/api/auth/me", headers=bearer(body["token"]))

        assert response.status_code == 401
        assert "user belonging to this token no longer exists" in response.json()["message"]

    async def test_me_reflects_role_change(self, client: AsyncClient, app):
        """역할은 요청마다 저장소에서 다시 읽는다"""
        body = (await signup(client)).json()
        client.cookies.clear()

        async with app.state.session_factory() as session:
            user = await session.get(User, body["data"]["user"]["id"])
            user.role = UserRole.ADMIN
            await session.commit()

        response = await client.get("/api/auth/me", headers=bearer(body["token"]))

        assert response.json()["data"]["user"]["role"] == "admin"


class TestLogout:
    """로그아웃"""

    async def test_logout_clears_cookie(self, client: AsyncClient):
        token = (await signup(client)).json()["token"]
        client.cookies.clear()

        response = await client.post("/api/auth/logout", headers=bearer(token))

        assert response.status_code == 200
        assert response.json() == {"status": "success", "message": "Logged out successfully"}
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("jwt=")
        assert "Max-Age=0" in set_cookie

    async def test_logout_requires_token(self, client: AsyncClient):
        response = await client.post("/api/auth/logout")

        assert response.status_code == 401

    async def test_token_still_valid_after_logout(self, client: AsyncClient):
        """서버 측 폐기는 없으므로 로그아웃 후에도 토큰은 만료 시까지 유효"""
        token = (await signup(client)).json()["token"]
        client.cookies.clear()

        await client.post("/api/auth/logout", headers=bearer(token))
        response = await client.get("/api/auth/me", headers=bearer(token))

        assert response.status_code == 200


class TestAvailability:
    """가용성 엔드포인트"""

    async def test_auth_test_route(self, client: AsyncClient):
        response = await client.get("/api/auth/test")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    async def test_request_id_header(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.headers.get("X-Request-ID")

    async def test_health_database_down(self, client: AsyncClient):
        """DB 연결 실패 시 503"""
        with patch("storefront.main.check_connection", AsyncMock(return_value=False)):
            response = await client.get("/health")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == "Database connection failed"


class TestProductionErrors:
    """운영 모드 내부 오류 응답"""

    @pytest.fixture
    def settings(self, settings):
        return settings.model_copy(update={"app_env": "prod", "debug": False})

    async def test_hashing_failure_message_withheld(self, client: AsyncClient):
        """해싱 프리미티브 실패 시 내부 메시지를 노출하지 않는다"""
        with patch.object(
            CredentialsAuthProvider.pwd_context, "hash", side_effect=RuntimeError("argon2 down")
        ):
            response = await signup(client)

        assert response.status_code == 500
        body = response.json()
        assert body["status"] == "error"
        assert body["message"] == GENERIC_ERROR_MESSAGE
        assert "Password hashing failed" not in response.text
        assert "argon2 down" not in response.text

    async def test_client_errors_keep_message(self, client: AsyncClient):
        response = await client.post(
            "/api/auth/login", json={"email": "nobody@example.com", "password": "Whatever123"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Incorrect email or password"
