"""
playlist-facets: Style, tag, language and BPM facets for NetEase playlists.

This package fetches the tracks of a NetEase Cloud Music playlist, looks
up each track's wiki summary, extracts its facets and lets the user
filter the tracks by them and export the result as a plain song list.

Architecture:
    The analysis runs in three steps:

    STEP 1 (netease/): Fetch the playlist
        - Accept a playlist ID or a music.163.com playlist URL
        - Request the full track list
        - Build Track objects (ID, name, artists, album art)

    STEP 2 (facets/pipeline): Enrich each track
        - Request the track's wiki summary, one track at a time
        - Extract styles, tags, language and BPM from the basic info block
        - Report progress per track; failed tracks are logged and skipped

    STEP 3 (facets/filters, facets/export): Filter and export
        - Derive the available filter values from the records
        - Keep records matching every active filter
        - Export "name - artists" lines

    session.AppState holds the state of one run and is what the CLI
    drives. devices/ holds the unrelated device dashboard normalizers.

Modules:
    core/       - Configuration, logging, exceptions, progress bar
    netease/    - NetEase API client, track models, playlist fetching
    facets/     - Facet extraction, enrichment pipeline, filters, export
    devices/    - Device dashboard payload normalization
    utils/      - Input parsing and small helpers
    session.py  - AppState
    cli.py      - Command-line interface

Usage:
    Command Line:
        facets tracks 24381616
        facets analyze "https://music.163.com/#/playlist?id=24381616" --style 流行
        facets device payload.json --kind door_window

    Python API:
        from playlist_facets.core import load_config, setup_logging
        from playlist_facets.netease import NeteaseClient
        from playlist_facets.session import AppState

        config = load_config()
        setup_logging(config.output.directory)
        client = NeteaseClient.init(config.api.base_url, config.api.timeout)

        state = AppState(client)
        state.set_input("24381616")
        state.fetch_playlist()
        state.analyze()
        state.toggle_style("流行")
        print(state.export_text())

Configuration:
    Optional config.yaml in the current directory:

        api:
          base_url: "https://wyy.jrenc.com"
          timeout: 10

        output:
          directory: "~/PlaylistFacets"

Dependencies:
    - requests: HTTP client for the music API
    - click: CLI framework
    - rich-click: CLI colors
    - rich: Progress bar and tables
    - tqdm: Log output that does not break progress bars
    - pyyaml: Configuration file parsing
    - pypinyin: Pinyin collation of Chinese style names
"""

__version__ = "0.1.0"
__author__ = "playlist-facets"
__license__ = "MIT"

# Convenience imports for common usage
from playlist_facets.core import (
    ApiError,
    Config,
    ConfigError,
    InputError,
    PlaylistFacetsError,
    PlaylistFetchError,
    get_logger,
    load_config,
    setup_logging,
)
from playlist_facets.netease import NeteaseClient, Track

__all__ = [
    # Version
    "__version__",
    # Core
    "Config",
    "load_config",
    "setup_logging",
    "get_logger",
    # Exceptions
    "PlaylistFacetsError",
    "ConfigError",
    "InputError",
    "ApiError",
    "PlaylistFetchError",
    # Models
    "NeteaseClient",
    "Track",
]
