from .auth import AdminAuthResult, AuthSession, AuthUser

__all__ = ["AdminAuthResult", "AuthSession", "AuthUser"]
