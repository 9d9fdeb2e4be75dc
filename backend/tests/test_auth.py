"""
Tests for the authorization pipeline: bearer token -> role gate ->
permission checker, as seen through the HTTP API.
"""

from datetime import timedelta

import pytest

from medmall.main import app
from medmall.security import Principal, decode_token, get_permission_checker
from medmall.exceptions import AuthenticationError


class DenyingChecker:
    async def authorize(self, principal: Principal, permission_code: str) -> bool:
        return False


class TestDecodeToken:
    def test_reads_identity_claims(self, make_token):
        principal = decode_token(
            make_token(roles=["SuperAdmin"], permissions=["refunds.view"], subject="user-1")
        )

        assert principal.user_id == "user-1"
        assert principal.name == "Test Operator"
        assert principal.has_role("SuperAdmin")
        assert principal.has_permission("refunds.view")

    def test_expired_token_is_rejected(self, make_token):
        token = make_token(expires_in=timedelta(minutes=-5))

        with pytest.raises(AuthenticationError) as exc_info:
            decode_token(token)
        assert exc_info.value.message == "Token has expired"

    def test_wrong_signature_is_rejected(self, make_token):
        token = make_token(secret="another-secret-that-is-long-enough-too")

        with pytest.raises(AuthenticationError):
            decode_token(token)


class TestPipeline:
    @pytest.mark.asyncio
    async def test_missing_token_is_401(self, client):
        response = await client.get("/api/refunds")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["error"] == "unauthorized"

    @pytest.mark.asyncio
    async def test_garbage_token_is_401(self, client):
        response = await client.get(
            "/api/refunds", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token"

    @pytest.mark.asyncio
    async def test_non_admin_role_is_403(self, client, make_token):
        token = make_token(roles=["Pharmacist"], permissions=["refunds.view"])

        response = await client.get(
            "/api/refunds", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"

    @pytest.mark.asyncio
    async def test_admin_without_explicit_code_is_allowed(self, client, make_token):
        token = make_token(roles=["Admin"], permissions=[])

        response = await client.get(
            "/api/refunds", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
        assert response.json() == {"items": [], "total": 0}

    @pytest.mark.asyncio
    async def test_checker_denial_is_403_naming_the_code(self, client, admin_headers):
        app.dependency_overrides[get_permission_checker] = lambda: DenyingChecker()

        response = await client.delete(
            "/api/productcategories/00000000-0000-0000-0000-000000000001",
            headers=admin_headers,
        )

        assert response.status_code == 403
        body = response.json()
        assert body["details"]["permission"] == "product-categories.delete"
        assert "product-categories.delete" in body["message"]

    @pytest.mark.asyncio
    async def test_denied_request_never_reaches_the_handler(self, client, admin_headers):
        app.dependency_overrides[get_permission_checker] = lambda: DenyingChecker()

        response = await client.post(
            "/api/shipcompanies",
            json={"name": "SF Express", "code": "SF"},
            headers=admin_headers,
        )
        app.dependency_overrides.pop(get_permission_checker)
        listing = await client.get("/api/shipcompanies", headers=admin_headers)

        assert response.status_code == 403
        assert listing.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_health_needs_no_token(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert "uptimeSeconds" in body
