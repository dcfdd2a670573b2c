"""
Configuration management for playlist-facets.

This module handles loading, validating, and providing access to the
application configuration stored in config.yaml.

The configuration file contains:
    - Music API base URL and per-request timeout
    - Output directory for log files

Configuration File Location:
    An explicit path can be passed with --config. Otherwise config.yaml
    is looked up in the current working directory. Unlike an explicit
    path, a missing default file is not an error: built-in defaults apply.

Example config.yaml:
    api:
      base_url: "https://wyy.jrenc.com"
      timeout: 10

    output:
      directory: "~/PlaylistFacets"
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from playlist_facets.core.exceptions import ConfigError


# Default configuration file name (looked up in current working directory)
CONFIG_FILENAME = "config.yaml"

DEFAULT_BASE_URL = "https://wyy.jrenc.com"
DEFAULT_TIMEOUT = 10.0
DEFAULT_OUTPUT_DIRECTORY = "~/PlaylistFacets"


@dataclass(frozen=True)
class ApiConfig:
    """
    Music API configuration.

    Attributes:
        base_url: Base URL of the public music API, without trailing slash.
                  Example: "https://wyy.jrenc.com"
        timeout: Timeout in seconds applied to every single request.
                 A request that exceeds it fails on its own; during
                 enrichment only that track is skipped.
    """
    base_url: str
    timeout: float


@dataclass(frozen=True)
class OutputConfig:
    """
    Output directory configuration.

    Attributes:
        directory: Absolute path where the logs/ subdirectory is created.
                   Path expansion is performed (~ is expanded to home directory).
    """
    directory: Path


@dataclass(frozen=True)
class Config:
    """
    Complete application configuration.

    Created by load_config() and treated as immutable.

    Example:
        config = load_config()
        print(f"API: {config.api.base_url} (timeout {config.api.timeout}s)")
        print(f"Logs in: {config.output.directory / 'logs'}")
    """
    api: ApiConfig
    output: OutputConfig


def default_config() -> Config:
    """Return the configuration used when no config.yaml exists."""
    return Config(
        api=ApiConfig(base_url=DEFAULT_BASE_URL, timeout=DEFAULT_TIMEOUT),
        output=OutputConfig(
            directory=Path(DEFAULT_OUTPUT_DIRECTORY).expanduser().resolve()
        )
    )


def load_config(config_path: Path | None = None) -> Config:
    """
    Load and validate configuration from config.yaml.

    Args:
        config_path: Optional explicit path to config file.
                     If None, looks for config.yaml in current working directory
                     and falls back to defaults when it is absent.

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If an explicit config file is not found, the file has
                     invalid YAML syntax, or contains invalid values.
    """
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILENAME
        if not config_path.exists():
            return default_config()
    elif not config_path.exists():
        raise ConfigError(
            f"Configuration file not found: {config_path}",
            details={"file_path": str(config_path)}
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(config_path), "original_error": str(e)}
        ) from e

    # An empty file means "all defaults"
    if raw_config is None:
        raw_config = {}

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(config_path)}
        )

    return Config(
        api=_parse_api_config(_section(raw_config, "api")),
        output=_parse_output_config(_section(raw_config, "output"))
    )


def _section(raw_config: dict[str, Any], name: str) -> dict[str, Any]:
    """
    Return an optional top-level section, validating its type.

    Raises:
        ConfigError: If the section is present but not a dictionary.
    """
    section = raw_config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section '{name}' must be a dictionary",
            details={"section": name}
        )
    return section


def _parse_api_config(api_section: dict[str, Any]) -> ApiConfig:
    """
    Parse and validate the api configuration section.

    Args:
        api_section: The 'api' section from config.yaml (may be empty).

    Returns:
        ApiConfig with defaults applied.

    Raises:
        ConfigError: If base_url is empty or timeout is not a positive number.
    """
    base_url = api_section.get("base_url", DEFAULT_BASE_URL)
    if not isinstance(base_url, str) or not base_url.strip():
        raise ConfigError(
            "'api.base_url' must be a non-empty string",
            details={"field": "api.base_url"}
        )

    timeout = api_section.get("timeout", DEFAULT_TIMEOUT)
    # bool is an int subclass; reject it explicitly
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(
            "'api.timeout' must be a positive number of seconds",
            details={"field": "api.timeout", "value": timeout}
        )

    return ApiConfig(
        base_url=base_url.strip().rstrip("/"),
        timeout=float(timeout)
    )


def _parse_output_config(output_section: dict[str, Any]) -> OutputConfig:
    """
    Parse and validate the output configuration section.

    Expands ~ to home directory and converts to absolute Path.
    Does NOT create the directory (that happens in setup_logging).

    Raises:
        ConfigError: If directory is present but empty.
    """
    directory = output_section.get("directory", DEFAULT_OUTPUT_DIRECTORY)

    if not isinstance(directory, str) or not directory.strip():
        raise ConfigError(
            "'output.directory' must be a non-empty string",
            details={"field": "output.directory"}
        )

    return OutputConfig(directory=Path(directory.strip()).expanduser().resolve())
