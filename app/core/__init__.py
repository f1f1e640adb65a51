"""
BYAMN Learning Backend - Core Module

This module contains configuration, date normalization, caching, the
shared HTTP client and token verification.
"""

from app.core.config import get_settings, settings

__all__ = ["settings", "get_settings"]
