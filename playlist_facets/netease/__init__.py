"""
NetEase Cloud Music API module for playlist-facets.

This module handles all interaction with the public music API:
    - client: NeteaseClient singleton (requests.Session wrapper)
    - models: Track and Artist dataclasses
    - fetcher: Playlist track list fetching

Usage:
    from playlist_facets.netease import NeteaseClient, fetch_playlist_tracks

    NeteaseClient.init(base_url=config.api.base_url, timeout=config.api.timeout)
    tracks = fetch_playlist_tracks("24381616")
"""

from playlist_facets.netease.client import NeteaseClient
from playlist_facets.netease.fetcher import PlaylistFetcher, fetch_playlist_tracks
from playlist_facets.netease.models import Artist, Track

__all__ = [
    "NeteaseClient",
    "PlaylistFetcher",
    "fetch_playlist_tracks",
    "Artist",
    "Track",
]
