"""
Username login tests
"""

import httpx
import pytest
from supabase import AuthApiError

from school_auth.services.login_service import LoginService

INVALID_CREDENTIALS = "نام کاربری یا رمز عبور اشتباه است."


class TestLoginRoute:
    def test_success_returns_session_payload(self, client, gateway, public_gateway):
        response = client.post("/login-with-username", json={"username": "sara", "password": "pw"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["session"]["access_token"] == "access-token"
        assert data["user"]["id"] == "teacher-1"

        gateway.find_email_by_username.assert_awaited_once_with("sara")
        public_gateway.sign_in_with_password.assert_awaited_once_with("teacher@school.ir", "pw")
        gateway.sign_in_with_password.assert_not_called()

    def test_unknown_username_and_wrong_password_are_indistinguishable(
        self, client, gateway, public_gateway
    ):
        gateway.find_email_by_username.return_value = None
        unknown = client.post("/login-with-username", json={"username": "nobody", "password": "pw"})

        gateway.find_email_by_username.return_value = "teacher@school.ir"
        public_gateway.sign_in_with_password.side_effect = AuthApiError(
            "Invalid login credentials", 400, "invalid_credentials"
        )
        wrong = client.post("/login-with-username", json={"username": "sara", "password": "bad"})

        assert unknown.status_code == wrong.status_code == 400
        assert unknown.json() == wrong.json() == {"success": False, "error": INVALID_CREDENTIALS}

    def test_unknown_username_does_not_attempt_sign_in(self, client, gateway, public_gateway):
        gateway.find_email_by_username.return_value = None

        client.post("/login-with-username", json={"username": "nobody", "password": "pw"})

        public_gateway.sign_in_with_password.assert_not_called()

    def test_unreachable_profile_store_returns_generic_error(self, client, gateway, public_gateway):
        gateway.find_email_by_username.side_effect = httpx.ConnectError("connection refused")

        response = client.post("/login-with-username", json={"username": "sara", "password": "pw"})

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": INVALID_CREDENTIALS}

    @pytest.mark.parametrize("body", [{"username": "sara"}, {"password": "pw"}, {}])
    def test_missing_fields(self, client, gateway, body):
        response = client.post("/login-with-username", json=body)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "نام کاربری و رمز عبور الزامی است."}
        gateway.find_email_by_username.assert_not_called()


class TestLoginService:
    @pytest.mark.asyncio
    async def test_lookup_error_is_reported_as_bad_credentials(self, gateway, public_gateway, api_error):
        gateway.find_email_by_username.side_effect = api_error("PGRST116", "JSON object requested, multiple (or no) rows returned")

        result = await LoginService(gateway, public_gateway).login("sara", "pw")

        assert result == {"success": False, "error": INVALID_CREDENTIALS}
        public_gateway.sign_in_with_password.assert_not_called()

    @pytest.mark.asyncio
    async def test_lookup_network_error_is_reported_as_bad_credentials(self, gateway, public_gateway):
        gateway.find_email_by_username.side_effect = httpx.ConnectError("connection refused")

        result = await LoginService(gateway, public_gateway).login("sara", "pw")

        assert result == {"success": False, "error": INVALID_CREDENTIALS}
        public_gateway.sign_in_with_password.assert_not_called()

    @pytest.mark.asyncio
    async def test_sign_in_network_error_is_reported_as_bad_credentials(self, gateway, public_gateway):
        public_gateway.sign_in_with_password.side_effect = httpx.ReadTimeout("timed out")

        result = await LoginService(gateway, public_gateway).login("sara", "pw")

        assert result == {"success": False, "error": INVALID_CREDENTIALS}
