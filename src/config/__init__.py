"""
Configuration package for emphdown

Provides application settings via environment variables using pydantic-settings.
"""

from .settings import appsettings, AppSettings, HTML_ELEMENT_PATTERN

__all__ = ["appsettings", "AppSettings", "HTML_ELEMENT_PATTERN"]
