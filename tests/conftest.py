"""Test configuration shared by the whole suite.

The application reads ``config.yaml`` at import time, so the environment it
needs is put in place before any ``src`` module is imported.
"""

import os
from pathlib import Path

os.environ.setdefault("APP_CONFIG_FILE", str(Path(__file__).parent.parent / "config.yaml"))
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://project.supabase.test")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "service-role-key")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-key")
os.environ.setdefault("ADMIN_EMAILS", "admin@example.com, Ops@Example.com ")
os.environ.setdefault("LOG_FILE", "")

from tests.fixtures import *  # noqa: E402,F401,F403
