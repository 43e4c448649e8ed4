"""Configuration management for the environmental data client."""

from __future__ import annotations

from .settings import get_settings, reset_settings

__all__ = ["get_settings", "reset_settings"]
