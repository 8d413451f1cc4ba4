"""Stress-test suites for the products table and the admin product API."""

from .api_suite import run_api_suite
from .db_suite import run_database_suite
from .harness import CheckFailed, StressRunner

__all__ = ["CheckFailed", "StressRunner", "run_api_suite", "run_database_suite"]
