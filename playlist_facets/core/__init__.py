"""
Core module for playlist-facets.

This module provides the foundational components used throughout the application:
    - exceptions: Custom exception classes for error handling
    - config: Configuration loading and validation
    - logger: Logging system with multiple outputs

The Rich progress bar lives in core.progress and is imported directly
by the code that displays it.

Usage:
    from playlist_facets.core import (
        Config, load_config,
        setup_logging, get_logger,
        PlaylistFacetsError, ConfigError, ApiError
    )
"""

from playlist_facets.core.config import (
    ApiConfig,
    Config,
    OutputConfig,
    default_config,
    load_config,
)
from playlist_facets.core.exceptions import (
    ApiError,
    ConfigError,
    InputError,
    PlaylistFacetsError,
    PlaylistFetchError,
    TrackMetadataError,
)
from playlist_facets.core.logger import (
    get_logger,
    log_enrichment_failure,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "ApiConfig",
    "OutputConfig",
    "default_config",
    "load_config",
    # Exceptions
    "PlaylistFacetsError",
    "ConfigError",
    "InputError",
    "ApiError",
    "PlaylistFetchError",
    "TrackMetadataError",
    # Logger
    "setup_logging",
    "get_logger",
    "log_enrichment_failure",
    "shutdown_logging",
]
