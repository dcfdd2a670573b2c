"""Test configuration loading"""

from pathlib import Path

import pytest

from playlist_facets.core.config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    default_config,
    load_config,
)
from playlist_facets.core.exceptions import ConfigError


def write_config(directory: Path, content: str) -> Path:
    path = directory / "config.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadConfig:
    """Test load_config()"""

    def test_defaults_without_file(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)

        config = load_config()

        assert config == default_config()
        assert config.api.base_url == DEFAULT_BASE_URL
        assert config.api.timeout == DEFAULT_TIMEOUT
        assert config.output.directory.is_absolute()

    def test_explicit_missing_file(self, temp_dir):
        with pytest.raises(ConfigError, match="not found"):
            load_config(temp_dir / "missing.yaml")

    def test_full_file(self, temp_dir):
        logs_root = temp_dir / "facets-output"
        path = write_config(temp_dir, (
            "api:\n"
            "  base_url: \"https://api.example.com/\"\n"
            "  timeout: 3\n"
            "output:\n"
            f"  directory: \"{logs_root}\"\n"
        ))

        config = load_config(path)

        assert config.api.base_url == "https://api.example.com"
        assert config.api.timeout == 3.0
        assert isinstance(config.api.timeout, float)
        assert config.output.directory == logs_root.resolve()
        assert not logs_root.exists()

    def test_cwd_file_is_used(self, temp_dir, monkeypatch):
        write_config(temp_dir, "api:\n  timeout: 2.5\n")
        monkeypatch.chdir(temp_dir)

        config = load_config()

        assert config.api.timeout == 2.5
        assert config.api.base_url == DEFAULT_BASE_URL

    def test_empty_file_gives_defaults(self, temp_dir):
        path = write_config(temp_dir, "")

        assert load_config(path) == default_config()

    def test_home_is_expanded(self, temp_dir):
        path = write_config(temp_dir, "output:\n  directory: \"~/SomeFacets\"\n")

        config = load_config(path)

        assert config.output.directory == (Path.home() / "SomeFacets").resolve()

    def test_invalid_yaml(self, temp_dir):
        path = write_config(temp_dir, "api: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_document_must_be_mapping(self, temp_dir):
        path = write_config(temp_dir, "- a\n- b\n")

        with pytest.raises(ConfigError):
            load_config(path)

    def test_section_must_be_mapping(self, temp_dir):
        path = write_config(temp_dir, "api: \"https://api.example.com\"\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert exc_info.value.details["section"] == "api"

    @pytest.mark.parametrize("timeout", ["0", "-1", "ten", "true"])
    def test_invalid_timeout(self, temp_dir, timeout):
        path = write_config(temp_dir, f"api:\n  timeout: {timeout}\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert exc_info.value.details["field"] == "api.timeout"

    def test_empty_base_url(self, temp_dir):
        path = write_config(temp_dir, "api:\n  base_url: \"  \"\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert exc_info.value.details["field"] == "api.base_url"

    def test_empty_directory(self, temp_dir):
        path = write_config(temp_dir, "output:\n  directory: \"\"\n")

        with pytest.raises(ConfigError):
            load_config(path)
