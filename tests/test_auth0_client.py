# =============================================================================
# tests/test_auth0_client.py - Auth0 Management API Client Tests
# =============================================================================
# Exercises the httpx client against an in-process MockTransport.
#
# Run with: poetry run pytest tests/test_auth0_client.py -v
# =============================================================================

import json

import httpx
import pytest

from lib.auth0_client import Auth0ClientError, Auth0ManagementClient


class FakeAuth0:
    """Minimal Auth0 tenant: token endpoint plus /api/v2/users."""

    def __init__(self, expires_in=86400):
        self.expires_in = expires_in
        self.requests: list[httpx.Request] = []
        self.token_requests = 0
        self.fail_users_with: int | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == "/oauth/token":
            self.token_requests += 1
            return httpx.Response(
                200,
                json={"access_token": f"token-{self.token_requests}", "expires_in": self.expires_in},
            )

        if self.fail_users_with:
            return httpx.Response(self.fail_users_with, json={"message": "Upstream says no"})

        if request.method == "GET" and request.url.path == "/api/v2/users":
            return httpx.Response(200, json=[{"user_id": "auth0|1"}])
        if request.method == "DELETE":
            return httpx.Response(204)
        if request.method in ("POST", "PATCH"):
            return httpx.Response(200, json={"user_id": "auth0|1", **json.loads(request.content)})
        return httpx.Response(200, json={"user_id": "auth0|1"})


@pytest.fixture
def fake():
    return FakeAuth0()


@pytest.fixture
def client(fake):
    return Auth0ManagementClient(
        domain="https://tenant.auth0.com/",
        client_id="cid",
        client_secret="secret",
        transport=httpx.MockTransport(fake),
    )


class TestToken:

    def test_client_credentials_grant(self, client, fake):
        assert client.get_token() == "token-1"

        body = json.loads(fake.requests[0].content)
        assert fake.requests[0].url == "https://tenant.auth0.com/oauth/token"
        assert body == {
            "client_id": "cid",
            "client_secret": "secret",
            "audience": "https://tenant.auth0.com/api/v2/",
            "grant_type": "client_credentials",
        }

    def test_token_is_reused(self, client, fake):
        client.list_users()
        client.list_users()

        assert fake.token_requests == 1

    def test_token_renewed_when_about_to_expire(self, fake):
        fake.expires_in = 30
        client = Auth0ManagementClient("tenant.auth0.com", "cid", "secret", transport=httpx.MockTransport(fake))

        client.get_token()
        client.get_token()

        assert fake.token_requests == 2

    def test_token_failure(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(401, json={"error": "access_denied"}))
        client = Auth0ManagementClient("tenant.auth0.com", "cid", "bad", transport=transport)

        with pytest.raises(Auth0ClientError) as exc_info:
            client.get_token()

        assert exc_info.value.code == "AUTH0_TOKEN_FAILED"
        assert exc_info.value.status_code == 401


class TestUsers:

    def test_list_users_query(self, client, fake):
        users = client.list_users({"page": 0, "per_page": 50, "include_fields": True, "q": None})

        assert users == [{"user_id": "auth0|1"}]
        request = fake.requests[-1]
        assert request.headers["Authorization"] == "Bearer token-1"
        assert request.url.params["include_fields"] == "true"
        assert request.url.params["per_page"] == "50"
        assert "q" not in request.url.params

    def test_user_id_is_encoded(self, client, fake):
        client.get_user("auth0|123")

        assert fake.requests[-1].url.raw_path == b"/api/v2/users/auth0%7C123"

    def test_create_and_update(self, client, fake):
        created = client.create_user({"email": "a@b.pe"})
        updated = client.update_user("auth0|1", {"blocked": True})

        assert created["email"] == "a@b.pe"
        assert updated["blocked"] is True
        assert fake.requests[-1].method == "PATCH"

    def test_delete(self, client, fake):
        client.delete_user("auth0|1")

        assert fake.requests[-1].method == "DELETE"

    def test_upstream_error_message(self, client, fake):
        fake.fail_users_with = 400

        with pytest.raises(Auth0ClientError) as exc_info:
            client.create_user({"email": "bad"})

        assert exc_info.value.message == "Upstream says no"
        assert exc_info.value.status_code == 400

    def test_transport_error(self):
        def unreachable(request):
            raise httpx.ConnectError("connection refused")

        client = Auth0ManagementClient("tenant.auth0.com", "cid", "secret", transport=httpx.MockTransport(unreachable))

        with pytest.raises(Auth0ClientError) as exc_info:
            client.get_token()

        assert exc_info.value.code == "AUTH0_TOKEN_UNREACHABLE"
        assert exc_info.value.status_code is None
