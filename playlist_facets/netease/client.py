"""
NetEase Cloud Music API client singleton for playlist-facets.

This module provides a singleton wrapper around a requests.Session that
talks to a public NetEase Cloud Music API deployment, ensuring that only
one client (and one connection pool) exists throughout the application
lifetime.

Singleton Pattern:
    NeteaseClient must be initialized once with init(), and subsequent
    calls to NeteaseClient() return the same instance. Calling init()
    twice raises an error; tests use reset() between cases.

Endpoints:
    GET {base_url}/playlist/track/all?id={playlist_id}
        -> {"code": 200, "songs": [...]}
    GET {base_url}/song/wiki/summary?id={track_id}
        -> {"code": 200, "data": {"blocks": [...]}}

    A response only counts as a success when the HTTP status is OK, the
    body is a JSON object and its 'code' field equals 200.

Usage:
    from playlist_facets.netease.client import NeteaseClient

    NeteaseClient.init(base_url="https://wyy.jrenc.com", timeout=10)

    client = NeteaseClient()
    payload = client.playlist_tracks("24381616")
"""

from typing import Any

import requests

from playlist_facets.core.exceptions import ApiError, PlaylistFacetsError, TrackMetadataError
from playlist_facets.core.logger import get_logger

logger = get_logger(__name__)


PLAYLIST_TRACKS_PATH = "/playlist/track/all"
SONG_WIKI_SUMMARY_PATH = "/song/wiki/summary"

# Value of the JSON 'code' field on success
API_SUCCESS_CODE = 200

USER_AGENT = "playlist-facets/0.1"


class NeteaseClientMeta(type):
    """
    Metaclass implementing the singleton pattern for NeteaseClient.

    Attributes:
        _instance: The singleton NeteaseClient instance, or None.
        _initialized: Flag indicating whether init() has been called.
    """

    _instance: "NeteaseClient | None" = None
    _initialized: bool = False

    def __call__(cls) -> "NeteaseClient":
        """
        Get the NeteaseClient singleton instance.

        Raises:
            PlaylistFacetsError: If init() has not been called yet.
        """
        if cls._instance is None:
            raise PlaylistFacetsError(
                "NeteaseClient not initialized. Call NeteaseClient.init("
                "base_url, timeout) first."
            )
        return cls._instance

    def init(
        cls,
        base_url: str,
        timeout: float = 10.0,
        session: requests.Session | None = None
    ) -> "NeteaseClient":
        """
        Initialize the NeteaseClient singleton.

        Args:
            base_url: API base URL, e.g. "https://wyy.jrenc.com".
            timeout: Seconds before a single request is abandoned.
            session: Optional pre-built session (mainly for tests).

        Returns:
            The initialized NeteaseClient singleton instance.

        Raises:
            PlaylistFacetsError: If init() has already been called.
        """
        if cls._initialized:
            raise PlaylistFacetsError(
                "NeteaseClient.init() has already been called. "
                "Use NeteaseClient() to get the existing instance."
            )

        if session is None:
            session = requests.Session()
            session.headers.update({"User-Agent": USER_AGENT})

        instance = super().__call__(base_url.rstrip("/"), timeout, session)
        cls._instance = instance
        cls._initialized = True
        return instance

    def is_initialized(cls) -> bool:
        """Check if the NeteaseClient has been initialized."""
        return cls._initialized

    def reset(cls) -> None:
        """
        Reset the singleton state (for testing only).

        Closes the session of the current instance, if any, so init()
        can be called again.
        """
        if cls._instance is not None:
            cls._instance.close()
        cls._instance = None
        cls._initialized = False


class NeteaseClient(metaclass=NeteaseClientMeta):
    """
    Singleton NeteaseClient.

    Wraps a requests.Session and exposes one method per endpoint. Every
    method returns the decoded JSON object of a successful response and
    raises ApiError otherwise; it never retries.

    Attributes:
        base_url: API base URL without trailing slash.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float,
        session: requests.Session
    ) -> None:
        """
        Create the client wrapper.

        Note:
            Called by the metaclass init() method, not directly.
        """
        self.base_url = base_url
        self.timeout = timeout
        self._session = session

    def playlist_tracks(self, playlist_id: str) -> dict[str, Any]:
        """
        Fetch every track of a playlist.

        Args:
            playlist_id: Playlist ID as typed by the user (digits).

        Returns:
            Decoded response, {"code": 200, "songs": [...]}.

        Raises:
            ApiError: On transport error, HTTP error or non-200 code.
        """
        return self._get(PLAYLIST_TRACKS_PATH, {"id": playlist_id})

    def song_wiki_summary(self, track_id: int) -> dict[str, Any]:
        """
        Fetch the wiki summary (genre, tags, language, BPM) of one track.

        Args:
            track_id: NetEase track ID.

        Returns:
            Decoded response, {"code": 200, "data": {"blocks": [...]}}.

        Raises:
            TrackMetadataError: On transport error, HTTP error or non-200 code.
        """
        try:
            return self._get(SONG_WIKI_SUMMARY_PATH, {"id": track_id})
        except ApiError as e:
            raise TrackMetadataError(
                e.message,
                details={"track_id": track_id, **e.details},
                status_code=e.status_code,
                is_timeout=e.is_timeout
            ) from e

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        """
        Perform a GET request and validate the envelope.

        Args:
            path: Endpoint path starting with '/'.
            params: Query parameters.

        Returns:
            The decoded JSON object.

        Raises:
            ApiError: With is_timeout set on timeouts and status_code set
                      on HTTP errors or non-200 API codes.
        """
        url = f"{self.base_url}{path}"
        details = {"url": url, "params": dict(params)}
        logger.debug(f"GET {url} {params}")

        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise ApiError(
                f"Request timed out after {self.timeout}s",
                details={**details, "original_error": str(e)},
                is_timeout=True
            ) from e
        except requests.exceptions.RequestException as e:
            raise ApiError(
                f"Request failed: {e}",
                details={**details, "original_error": str(e)}
            ) from e

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise ApiError(
                f"HTTP error {response.status_code}",
                details={**details, "original_error": str(e)},
                status_code=response.status_code
            ) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise ApiError(
                "Response is not valid JSON",
                details={**details, "original_error": str(e)},
                status_code=response.status_code
            ) from e

        if not isinstance(payload, dict):
            raise ApiError(
                "Response is not a JSON object",
                details=details,
                status_code=response.status_code
            )

        code = payload.get("code")
        if code != API_SUCCESS_CODE:
            raise ApiError(
                f"API returned code {code}",
                details={**details, "api_code": code, "api_message": payload.get("message")},
                status_code=code if isinstance(code, int) else None
            )

        return payload
