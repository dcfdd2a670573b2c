"""Test the command-line interface"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from playlist_facets import __version__
from playlist_facets.cli import cli
from playlist_facets.core.exceptions import ApiError


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(temp_dir):
    path = temp_dir / "config.yaml"
    path.write_text(
        "api:\n"
        "  base_url: \"https://api.test\"\n"
        "  timeout: 2\n"
        "output:\n"
        f"  directory: \"{temp_dir / 'out'}\"\n",
        encoding="utf-8"
    )
    return path


@pytest.fixture
def patched_client(mock_client, build_wiki_response):
    """Route the CLI's NeteaseClient.init() to the mock client"""
    mock_client.song_wiki_summary.side_effect = [
        build_wiki_response(styles=["Pop"], language="英语", bpm="100"),
        build_wiki_response(styles=["Rock"], bpm="140"),
    ]
    with patch("playlist_facets.cli.NeteaseClient") as client_class:
        client_class.init.return_value = mock_client
        yield client_class


class TestGroup:
    """Test group options"""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert f"playlist-facets {__version__}" in result.output

    def test_help_without_command(self, runner):
        result = runner.invoke(cli, [])

        assert result.exit_code == 0
        assert "analyze" in result.output

    def test_missing_explicit_config(self, runner, temp_dir):
        result = runner.invoke(cli, ["--config", str(temp_dir / "nope.yaml"), "tracks", "1"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestTracks:
    """Test the tracks command"""

    def test_lists_tracks(self, runner, config_file, patched_client, mock_client):
        result = runner.invoke(cli, ["--config", str(config_file), "tracks", "123"])

        assert result.exit_code == 0, result.output
        assert "Playlist (2 tracks)" in result.output
        assert "Y / Z" in result.output
        patched_client.init.assert_called_once_with(base_url="https://api.test", timeout=2.0)
        patched_client.reset.assert_called_once()
        mock_client.playlist_tracks.assert_called_once_with("123")

    def test_accepts_url(self, runner, config_file, patched_client, mock_client):
        result = runner.invoke(cli, [
            "--config", str(config_file),
            "tracks", "https://music.163.com/#/playlist?id=24381616",
        ])

        assert result.exit_code == 0, result.output
        mock_client.playlist_tracks.assert_called_once_with("24381616")

    def test_fetch_failure(self, runner, config_file, patched_client, mock_client):
        mock_client.playlist_tracks.side_effect = ApiError("HTTP error 500", status_code=500)

        result = runner.invoke(cli, ["--config", str(config_file), "tracks", "123"])

        assert result.exit_code == 1
        assert "Failed to fetch playlist, please check that the ID is correct" in result.output

    def test_logs_written_to_output_directory(self, runner, config_file, patched_client, temp_dir):
        runner.invoke(cli, ["--config", str(config_file), "tracks", "123"])

        assert list((temp_dir / "out" / "logs").glob("log_full_*.log"))


class TestAnalyze:
    """Test the analyze command"""

    def test_exports_to_stdout(self, runner, config_file, patched_client):
        result = runner.invoke(cli, ["--config", str(config_file), "analyze", "123"])

        assert result.exit_code == 0, result.output
        assert "Available filters" in result.output
        assert "A - X" in result.output
        assert "B - Y / Z" in result.output

    def test_style_filter_to_file(self, runner, config_file, patched_client, temp_dir):
        output = temp_dir / "songs.txt"

        result = runner.invoke(cli, [
            "--config", str(config_file),
            "analyze", "123", "--style", "Pop", "--output", str(output),
        ])

        assert result.exit_code == 0, result.output
        assert output.read_text(encoding="utf-8") == "A - X\n"

    def test_bpm_min_alone_uses_available_max(self, runner, config_file, patched_client, temp_dir):
        output = temp_dir / "songs.txt"

        result = runner.invoke(cli, [
            "--config", str(config_file),
            "analyze", "123", "--bpm-min", "120", "--output", str(output),
        ])

        assert result.exit_code == 0, result.output
        assert output.read_text(encoding="utf-8") == "B - Y / Z\n"

    def test_language_filter_excludes_unknown(self, runner, config_file, patched_client, temp_dir):
        output = temp_dir / "songs.txt"

        result = runner.invoke(cli, [
            "--config", str(config_file),
            "analyze", "123", "--language", "英语", "--output", str(output),
        ])

        assert result.exit_code == 0, result.output
        assert output.read_text(encoding="utf-8") == "A - X\n"

    def test_repeated_style_selected_once(self, runner, config_file, patched_client, temp_dir):
        output = temp_dir / "songs.txt"

        result = runner.invoke(cli, [
            "--config", str(config_file),
            "analyze", "123", "--style", "Pop", "--style", "Pop", "--output", str(output),
        ])

        assert result.exit_code == 0, result.output
        assert output.read_text(encoding="utf-8") == "A - X\n"

    def test_unwritable_output(self, runner, config_file, patched_client, temp_dir):
        output = temp_dir / "missing_dir" / "songs.txt"

        result = runner.invoke(cli, [
            "--config", str(config_file),
            "analyze", "123", "--output", str(output),
        ])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Unexpected error" in result.output
        assert "Available filters" in result.output
        patched_client.reset.assert_called_once()

    def test_crossed_bpm_bounds_rejected(self, runner, config_file, patched_client):
        result = runner.invoke(cli, [
            "--config", str(config_file),
            "analyze", "123", "--bpm-min", "150", "--bpm-max", "100",
        ])

        assert result.exit_code == 2
        patched_client.init.assert_not_called()

    def test_empty_id(self, runner, config_file, patched_client, mock_client):
        result = runner.invoke(cli, ["--config", str(config_file), "analyze", "  "])

        assert result.exit_code == 1
        assert "Please enter a playlist ID" in result.output
        mock_client.playlist_tracks.assert_not_called()


class TestDevice:
    """Test the device command"""

    def test_single_object(self, runner, temp_dir):
        path = temp_dir / "capture.json"
        path.write_text(json.dumps({
            "id": 7, "name": "Stall 1", "type": "capture",
            "value": {"status": 1, "battery": 80, "distance": 12},
        }), encoding="utf-8")

        result = runner.invoke(cli, ["device", str(path), "--kind", "capture"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["value"] == {
            "status": "occupied", "battery": 80, "distance": 12, "updatedAt": None,
        }

    def test_list_of_objects(self, runner, temp_dir):
        path = temp_dir / "counters.json"
        path.write_text(json.dumps([
            {"id": 1, "name": "North", "type": "counter", "value": {"in": 5, "out": 2}},
            {"id": 2, "name": "South", "type": "counter", "value": None},
        ]), encoding="utf-8")

        result = runner.invoke(cli, ["device", str(path), "--kind", "people_counter"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [item["value"]["in"] for item in data] == [5, 0]

    def test_unknown_kind(self, runner, temp_dir):
        path = temp_dir / "x.json"
        path.write_text("{}", encoding="utf-8")

        result = runner.invoke(cli, ["device", str(path), "--kind", "thermostat"])

        assert result.exit_code == 2

    def test_invalid_json(self, runner, temp_dir):
        path = temp_dir / "x.json"
        path.write_text("{not json", encoding="utf-8")

        result = runner.invoke(cli, ["device", str(path), "--kind", "capture"])

        assert result.exit_code == 1
        assert "cannot read" in result.output
