"""Configuration module for SOL Tools.

Usage:
    from soltools.config import get_settings

    settings = get_settings()  # Cached singleton
    print(settings.helius_api_url)
"""

from soltools.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
