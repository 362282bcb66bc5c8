"""
Configuration helpers for the navigation fitter.
"""

from .models import LayoutConfig, NavLinkConfig, SiteConfig, ConfigError, load_config
from .settings import Settings, get_settings

__all__ = ["LayoutConfig", "NavLinkConfig", "SiteConfig", "ConfigError", "load_config", "Settings", "get_settings"]
