"""Configuration management for hoardview.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments, the HOARDVIEW_CACHE_DIR
environment variable, or defaults.

Key classes:
- RemoteConfig: GitHub repository location
- CacheConfig: Cache store location and listing lifetime
- RenderConfig: Preview sample and scaling
- CollectionConfig: Recognised font source extensions
- EngineConfig: Font engine session settings
- ConversionConfig: Output formats
- LoggingConfig: Logging settings
- ViewerSettings: Main application settings
"""

from hoardview.config.settings import (
    CacheConfig,
    CollectionConfig,
    ConversionConfig,
    EngineConfig,
    LoggingConfig,
    RemoteConfig,
    RenderConfig,
    ViewerSettings,
    get_default_settings,
)

__all__ = [
    "CacheConfig",
    "CollectionConfig",
    "ConversionConfig",
    "EngineConfig",
    "LoggingConfig",
    "RemoteConfig",
    "RenderConfig",
    "ViewerSettings",
    "get_default_settings",
]
