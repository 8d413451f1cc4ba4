"""Admin access checks on top of the managed auth provider.

Authentication is delegated to the provider; authorization is a second,
independent gate: the authenticated email must be on the configured
allow-list.
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from src.catalog_admin.core.errors import AccessDenied, AuthenticationError
from src.catalog_admin.core.models.auth import AdminAuthResult, AuthUser
from src.catalog_admin.core.services.supabase.auth import AuthService

ACCESS_DENIED_MESSAGE = "Access denied. Admin access required."
AUTHENTICATION_FAILED_MESSAGE = "Authentication failed"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AdminAllowList:
    """Immutable set of admin emails, normalized on construction."""

    def __init__(self, emails: Iterable[str]) -> None:
        self._emails = frozenset(
            normalize_email(email) for email in emails if email and email.strip()
        )

    def __contains__(self, email: object) -> bool:
        return isinstance(email, str) and normalize_email(email) in self._emails

    def __len__(self) -> int:
        return len(self._emails)

    def __bool__(self) -> bool:
        return bool(self._emails)


class AdminAuthService:
    def __init__(self, allow_list: AdminAllowList, auth_service: AuthService) -> None:
        self._allow_list = allow_list
        self._auth = auth_service

    def is_admin(self, email: str | None) -> bool:
        """Whether ``email`` is on the allow-list (trimmed, case-insensitive).

        Never raises; any internal failure counts as "not an admin".
        """
        try:
            if not email:
                return False
            return normalize_email(email) in self._allow_list
        except Exception:
            logger.exception("admin.check_failed")
            return False

    async def authenticate_admin(self, email: str, password: str) -> AdminAuthResult:
        """Sign in with the provider, then require allow-list membership.

        Bad credentials report the provider's message; a valid account that is
        not on the allow-list reports ``ACCESS_DENIED_MESSAGE``. Unexpected
        failures are logged and reported generically.
        """
        try:
            try:
                session = await self._auth.sign_in_with_password(email, password)
            except AuthenticationError as exc:
                logger.bind(email=normalize_email(email)).info("admin.sign_in_rejected")
                return AdminAuthResult(success=False, error=exc.message)

            if session.user is None:
                return AdminAuthResult(success=False, error=AUTHENTICATION_FAILED_MESSAGE)

            if not self.is_admin(session.user.email or ""):
                logger.bind(user_id=session.user.id).warning("admin.access_denied")
                return AdminAuthResult(success=False, error=ACCESS_DENIED_MESSAGE)

            logger.bind(user_id=session.user.id).info("admin.authenticated")
            return AdminAuthResult(success=True, session=session)
        except Exception:
            logger.exception("admin.authentication_error")
            return AdminAuthResult(success=False, error=AUTHENTICATION_FAILED_MESSAGE)

    async def authorize_token(self, access_token: str) -> AuthUser:
        """Resolve a bearer token and require the user to be an admin.

        Raises:
            AuthenticationError: the provider rejected the token.
            AccessDenied: the token belongs to a non-admin.
        """
        user = await self._auth.get_user(access_token)
        if not self.is_admin(user.email):
            logger.bind(user_id=user.id).warning("admin.access_denied")
            raise AccessDenied(ACCESS_DENIED_MESSAGE)
        return user
