"""
envcfg Configuration Package.

Provides Pydantic Settings for the library itself.
"""

from envcfg_config.settings import Settings, get_settings, reset_settings

__all__ = ["Settings", "get_settings", "reset_settings"]
