# =============================================================================
# lib/auth0_client.py - Auth0 Management API Client
# =============================================================================
# Thin httpx wrapper around the Auth0 Management API v2 (users endpoints).
#
# The client obtains a management token with the client-credentials grant
# and keeps it until shortly before it expires, so a burst of requests
# shares one token.
#
# Usage:
#   from lib.auth0_client import Auth0ManagementClient
#   client = Auth0ManagementClient("tenant.auth0.com", client_id, secret)
#   users = client.list_users({"page": 0, "per_page": 50})
# =============================================================================

from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import Any
from urllib.parse import quote

import httpx

from app.config import settings
from lib.utils import ApplicationError, drop_none

logger = logging.getLogger(__name__)

# Renew the token this many seconds before Auth0 says it expires
TOKEN_EXPIRY_MARGIN = 60

# Error codes raised by get_token (management credentials or reachability)
TOKEN_ERROR_CODES = ("AUTH0_TOKEN_FAILED", "AUTH0_TOKEN_UNREACHABLE")

# Fields requested when listing users
USER_FIELDS = (
    "user_id,email,name,nickname,picture,user_metadata,app_metadata,"
    "created_at,updated_at,last_login,blocked"
)


class Auth0ClientError(ApplicationError):
    """
    Error talking to the Auth0 Management API.

    status_code carries the upstream HTTP status (None for transport errors).
    """

    def __init__(
        self,
        message: str,
        code: str = "AUTH0_ERROR",
        status_code: int | None = None,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)
        self.status_code = status_code


class Auth0ManagementClient:
    """
    Client for the Auth0 Management API users endpoints.

    Example:
        client = Auth0ManagementClient(
            domain="contaempresa.us.auth0.com",
            client_id="...",
            client_secret="...",
        )
        user = client.get_user("auth0|123456789")
    """

    def __init__(
        self,
        domain: str,
        client_id: str,
        client_secret: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.domain = domain.removeprefix("https://").rstrip("/")
        self.client_id = client_id
        self.client_secret = client_secret
        self._http = httpx.Client(
            base_url=f"https://{self.domain}",
            timeout=timeout,
            transport=transport,
        )
        self._token: str | None = None
        self._token_expires_at: float = 0

    @property
    def audience(self) -> str:
        return f"https://{self.domain}/api/v2/"

    # -------------------------------------------------------------------------
    # Token
    # -------------------------------------------------------------------------

    def get_token(self) -> str:
        """
        Return a management API token, requesting a new one when needed.

        Raises:
            Auth0ClientError: If the token request fails
        """
        now = time.time()
        if self._token and now < self._token_expires_at:
            return self._token

        logger.info("Requesting Auth0 Management API token")
        try:
            response = self._http.post(
                "/oauth/token",
                json={
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "audience": self.audience,
                    "grant_type": "client_credentials",
                },
            )
        except httpx.HTTPError as e:
            raise Auth0ClientError(
                message=f"Could not reach Auth0 token endpoint: {e}",
                code="AUTH0_TOKEN_UNREACHABLE",
                suggestion="Check AUTH0_DOMAIN and network connectivity",
            )

        if response.is_error:
            logger.error(f"Auth0 token request failed: {response.status_code} {response.text}")
            raise Auth0ClientError(
                message=f"Error obtaining Auth0 token: {response.status_code} {response.reason_phrase}",
                code="AUTH0_TOKEN_FAILED",
                status_code=response.status_code,
                suggestion="Check AUTH0_MGMT_CLIENT_ID and AUTH0_MGMT_CLIENT_SECRET",
            )

        payload = response.json()
        self._token = payload["access_token"]
        expires_in = int(payload.get("expires_in", 86400))
        self._token_expires_at = now + max(expires_in - TOKEN_EXPIRY_MARGIN, 0)
        logger.info("Auth0 Management API token obtained")
        return self._token

    # -------------------------------------------------------------------------
    # Requests
    # -------------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send an authenticated request and raise Auth0ClientError on failure."""
        token = self.get_token()
        try:
            response = self._http.request(
                method,
                path,
                params=params,
                json=json,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            raise Auth0ClientError(
                message=f"Could not reach Auth0: {e}",
                code="AUTH0_UNREACHABLE",
                details={"method": method, "path": path},
            )

        if response.is_error:
            try:
                upstream_message = response.json().get("message")
            except ValueError:
                upstream_message = None
            logger.error(f"Auth0 {method} {path} failed: {response.status_code} {response.text}")
            raise Auth0ClientError(
                message=upstream_message or f"Auth0 request failed: {response.status_code} {response.reason_phrase}",
                code="AUTH0_REQUEST_FAILED",
                status_code=response.status_code,
                details={"method": method, "path": path},
            )

        return response

    @staticmethod
    def _user_path(user_id: str) -> str:
        return f"/api/v2/users/{quote(user_id, safe='')}"

    def list_users(self, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        """
        List users.

        None values in params are dropped; booleans are sent as
        lowercase strings as Auth0 expects.
        """
        query = {
            key: (str(value).lower() if isinstance(value, bool) else value)
            for key, value in drop_none(params or {}).items()
        }
        users = self._request("GET", "/api/v2/users", params=query).json()
        logger.info(f"Fetched {len(users)} users from Auth0")
        return users

    def get_user(self, user_id: str) -> dict[str, Any]:
        return self._request("GET", self._user_path(user_id)).json()

    def create_user(self, data: dict[str, Any]) -> dict[str, Any]:
        user = self._request("POST", "/api/v2/users", json=data).json()
        logger.info(f"Created Auth0 user {user.get('user_id')}")
        return user

    def update_user(self, user_id: str, data: dict[str, Any]) -> dict[str, Any]:
        user = self._request("PATCH", self._user_path(user_id), json=data).json()
        logger.info(f"Updated Auth0 user {user_id}")
        return user

    def delete_user(self, user_id: str) -> None:
        self._request("DELETE", self._user_path(user_id))
        logger.info(f"Deleted Auth0 user {user_id}")


@lru_cache
def get_management_client() -> Auth0ManagementClient:
    """
    Shared client built from settings.

    Only call when settings.auth0_management_configured is true.
    """
    return Auth0ManagementClient(
        domain=settings.AUTH0_DOMAIN or "",
        client_id=settings.AUTH0_MGMT_CLIENT_ID or "",
        client_secret=settings.AUTH0_MGMT_CLIENT_SECRET or "",
        timeout=settings.AUTH0_TIMEOUT_SECONDS,
    )
