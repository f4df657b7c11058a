"""Configuration helpers for the JSON client."""

from .settings import get_settings, Settings

__all__ = ["get_settings", "Settings"]
