"""Models returned by the managed auth provider."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """The subset of the provider's user object the catalog relies on."""

    model_config = ConfigDict(extra="ignore")

    id: str
    email: str | None = None
    role: str | None = None


class AuthSession(BaseModel):
    """Session issued by a password sign-in.

    The token lifetime is owned entirely by the provider; nothing here
    refreshes or persists it.
    """

    model_config = ConfigDict(extra="ignore")

    access_token: str
    token_type: str = "bearer"
    expires_in: int | None = None
    expires_at: int | None = None
    refresh_token: str | None = None
    user: AuthUser | None = None


class AdminAuthResult(BaseModel):
    """Outcome of an admin sign-in attempt."""

    success: bool
    error: str | None = None
    session: AuthSession | None = Field(default=None, exclude=True)
