"""Password sign-in and token lookup against the project's auth endpoint."""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger
from pydantic import ValidationError

from src.catalog_admin.core.errors import AuthenticationError
from src.catalog_admin.core.models.auth import AuthSession, AuthUser
from src.catalog_admin.core.services.supabase.client import SupabaseClient, response_payload


def _auth_error(payload: Any, status_code: int) -> AuthenticationError:
    # The provider has used both {"error", "error_description"} and
    # {"code", "error_code", "msg"} shapes.
    if isinstance(payload, dict):
        message = (
            payload.get("error_description")
            or payload.get("msg")
            or payload.get("message")
            or payload.get("error")
        )
        code = payload.get("error_code") or payload.get("error")
        return AuthenticationError(message, code=str(code) if code else None)
    if isinstance(payload, str) and payload:
        return AuthenticationError(payload)
    return AuthenticationError(f"Authentication failed with status {status_code}")


class AuthService:
    """Thin wrapper around ``/auth/v1``."""

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Exchange credentials for a session.

        Raises:
            AuthenticationError: the provider rejected the credentials.
        """
        try:
            response = await self._client.request(
                "POST",
                "/auth/v1/token",
                params={"grant_type": "password"},
                json={"email": email, "password": password},
            )
        except httpx.HTTPError as exc:
            raise AuthenticationError(f"Auth provider unreachable: {exc}") from exc

        payload = response_payload(response)
        if response.is_error:
            raise _auth_error(payload, response.status_code)

        try:
            return AuthSession.model_validate(payload)
        except ValidationError as exc:
            logger.error("auth.unexpected_session_payload: {}", exc)
            raise AuthenticationError("Authentication failed") from exc

    async def get_user(self, access_token: str) -> AuthUser:
        """Resolve a bearer token to the user it was issued for.

        Raises:
            AuthenticationError: the token is invalid or expired.
        """
        try:
            response = await self._client.request(
                "GET",
                "/auth/v1/user",
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as exc:
            raise AuthenticationError(f"Auth provider unreachable: {exc}") from exc

        payload = response_payload(response)
        if response.is_error:
            raise _auth_error(payload, response.status_code)

        try:
            return AuthUser.model_validate(payload)
        except ValidationError as exc:
            raise AuthenticationError("Invalid user payload") from exc
