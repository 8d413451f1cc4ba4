"""Shared pytest fixtures and helpers."""

from .app import *  # noqa: F401,F403
from .services import *  # noqa: F401,F403
from .supabase import *  # noqa: F401,F403
