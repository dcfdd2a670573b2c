"""Test the NetEase API client"""

from unittest.mock import Mock

import pytest
import requests

from playlist_facets.core.exceptions import ApiError, PlaylistFacetsError, TrackMetadataError
from playlist_facets.netease.client import NeteaseClient


def make_response(payload=None, status_code=200, json_error=None):
    response = Mock()
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Server Error"
        )
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def session():
    return Mock(spec=requests.Session)


@pytest.fixture
def client(session):
    return NeteaseClient.init(base_url="https://api.test/", timeout=5, session=session)


class TestSingleton:
    """Test the singleton lifecycle"""

    def test_not_initialized(self):
        assert not NeteaseClient.is_initialized()
        with pytest.raises(PlaylistFacetsError):
            NeteaseClient()

    def test_init_returns_shared_instance(self, client):
        assert NeteaseClient.is_initialized()
        assert NeteaseClient() is client

    def test_double_init_rejected(self, client, session):
        with pytest.raises(PlaylistFacetsError):
            NeteaseClient.init(base_url="https://api.test", session=session)

    def test_reset_closes_session(self, client, session):
        NeteaseClient.reset()

        session.close.assert_called_once()
        assert not NeteaseClient.is_initialized()

    def test_base_url_trailing_slash_stripped(self, client):
        assert client.base_url == "https://api.test"


class TestRequests:
    """Test request building and response validation"""

    def test_playlist_tracks(self, client, session):
        payload = {"code": 200, "songs": []}
        session.get.return_value = make_response(payload)

        assert client.playlist_tracks("24381616") == payload
        session.get.assert_called_once_with(
            "https://api.test/playlist/track/all",
            params={"id": "24381616"},
            timeout=5
        )

    def test_song_wiki_summary(self, client, session):
        payload = {"code": 200, "data": {"blocks": []}}
        session.get.return_value = make_response(payload)

        assert client.song_wiki_summary(186016) == payload
        session.get.assert_called_once_with(
            "https://api.test/song/wiki/summary",
            params={"id": 186016},
            timeout=5
        )

    def test_timeout(self, client, session):
        session.get.side_effect = requests.exceptions.ReadTimeout("read timed out")

        with pytest.raises(ApiError) as exc_info:
            client.playlist_tracks("1")

        assert exc_info.value.is_timeout
        assert "timed out" in exc_info.value.message

    def test_connection_error(self, client, session):
        session.get.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(ApiError) as exc_info:
            client.playlist_tracks("1")

        assert not exc_info.value.is_timeout
        assert exc_info.value.status_code is None

    def test_http_error(self, client, session):
        session.get.return_value = make_response(status_code=502)

        with pytest.raises(ApiError) as exc_info:
            client.playlist_tracks("1")

        assert exc_info.value.status_code == 502

    def test_invalid_json(self, client, session):
        session.get.return_value = make_response(json_error=ValueError("Expecting value"))

        with pytest.raises(ApiError, match="not valid JSON"):
            client.playlist_tracks("1")

    def test_non_object_json(self, client, session):
        session.get.return_value = make_response([1, 2, 3])

        with pytest.raises(ApiError, match="not a JSON object"):
            client.playlist_tracks("1")

    def test_api_code_not_200(self, client, session):
        session.get.return_value = make_response({"code": 404, "message": "not found"})

        with pytest.raises(ApiError) as exc_info:
            client.playlist_tracks("1")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "API returned code 404"

    def test_wiki_summary_failure_is_track_error(self, client, session):
        session.get.side_effect = requests.exceptions.ReadTimeout("read timed out")

        with pytest.raises(TrackMetadataError) as exc_info:
            client.song_wiki_summary(186016)

        assert exc_info.value.is_timeout
        assert exc_info.value.details["track_id"] == 186016
        assert isinstance(exc_info.value.__cause__, ApiError)
