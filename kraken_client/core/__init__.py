"""Core client components.

This package contains components shared across the client, currently
the configuration settings.
"""

from .config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
