"""Shared utilities for the cohort_tools package.

This module groups small, reusable helpers to keep use cases and controllers
focused on business logic while minimizing duplication.
"""

__all__ = [
    "asyncio_utils",
    "http",
]
