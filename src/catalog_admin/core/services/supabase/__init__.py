"""Handles and services for the hosted Supabase project."""

from .auth import AuthService
from .client import AnonClient, ServiceRoleClient, SupabaseClient
from .database import DatabaseService
from .storage import StorageService

__all__ = [
    "AnonClient",
    "AuthService",
    "DatabaseService",
    "ServiceRoleClient",
    "StorageService",
    "SupabaseClient",
]
