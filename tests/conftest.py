"""Test configuration and fixtures"""

import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

from playlist_facets.core.logger import shutdown_logging
from playlist_facets.netease.client import NeteaseClient


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture(autouse=True)
def reset_netease_client():
    """Make every test start without a NeteaseClient singleton"""
    NeteaseClient.reset()
    yield
    NeteaseClient.reset()


@pytest.fixture
def clean_logging():
    """Remove the handlers installed by setup_logging() after the test"""
    yield
    shutdown_logging()


@pytest.fixture
def sample_playlist_response():
    """Playlist response with two tracks"""
    return {
        "code": 200,
        "songs": [
            {
                "id": 1,
                "name": "A",
                "ar": [{"id": 11, "name": "X"}],
                "al": {"id": 101, "name": "Album A", "picUrl": "https://img.test/a.jpg"},
            },
            {
                "id": 2,
                "name": "B",
                "ar": [{"id": 12, "name": "Y"}, {"id": 13, "name": "Z"}],
                "al": {"id": 102, "name": "Album B", "picUrl": "https://img.test/b.jpg"},
            },
        ],
    }


def _resource(title):
    return {"uiElement": {"mainTitle": {"title": title}}}


def _text_creative(creative_type, text):
    return {"creativeType": creative_type, "uiElement": {"textLinks": [{"text": text}]}}


@pytest.fixture
def build_wiki_response():
    """
    Factory for song wiki summary responses.

    Only the facets that are given get a creative in the basic block.
    """

    def build(styles=None, tags=None, language=None, bpm=None):
        creatives = []
        if styles is not None:
            creatives.append({
                "creativeType": "songTag",
                "resources": [_resource(s) for s in styles],
            })
        if tags is not None:
            creatives.append({
                "creativeType": "songBizTag",
                "resources": [_resource(t) for t in tags],
            })
        if language is not None:
            creatives.append(_text_creative("language", language))
        if bpm is not None:
            creatives.append(_text_creative("bpm", bpm))

        return {
            "code": 200,
            "data": {
                "blocks": [
                    {"code": "SONG_PLAY_ABOUT_SONG_WIKI", "creatives": []},
                    {"code": "SONG_PLAY_ABOUT_SONG_BASIC", "creatives": creatives},
                ]
            },
        }

    return build


@pytest.fixture
def mock_client(sample_playlist_response):
    """Mock NeteaseClient returning the sample playlist"""
    client = Mock(spec=NeteaseClient)
    client.playlist_tracks.return_value = sample_playlist_response
    return client
