"""Configuration package for the consolidation service."""

from .settings import AppSettings, get_settings

__all__ = ["AppSettings", "get_settings"]
