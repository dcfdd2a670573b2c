"""
Playlist fetcher for playlist-facets.

This module turns a playlist ID into the ordered list of Track objects
that the enrichment pipeline walks over.

Workflow:
    1. Request {base_url}/playlist/track/all?id={playlist_id}
    2. Reject the whole fetch on any API failure (generic user message)
    3. Convert each 'songs' entry to a Track, skipping malformed entries
    4. Return tracks in playlist order

Any failure is reported as PlaylistFetchError, which always carries the
same user-facing message; the technical cause is chained and kept in
the error details for the log files. No partial result is ever returned.
"""

from typing import Any

from playlist_facets.core.exceptions import ApiError, PlaylistFetchError
from playlist_facets.core.logger import get_logger
from playlist_facets.netease.client import NeteaseClient
from playlist_facets.netease.models import Track

logger = get_logger(__name__)


class PlaylistFetcher:
    """
    Fetches playlist track lists from the NetEase API.

    Attributes:
        _client: The NeteaseClient used for requests.
    """

    def __init__(self, client: NeteaseClient | None = None) -> None:
        """
        Args:
            client: Client to use. Defaults to the NeteaseClient singleton.
        """
        self._client = client if client is not None else NeteaseClient()

    def fetch_tracks(self, playlist_id: str) -> list[Track]:
        """
        Fetch all tracks of a playlist.

        Args:
            playlist_id: Playlist ID (already extracted from a URL if needed).

        Returns:
            List of Track objects in playlist order.

        Raises:
            PlaylistFetchError: If the request fails, the API reports an
                                error or the payload has no 'songs' list.
        """
        logger.info(f"Fetching playlist: {playlist_id}")

        try:
            payload = self._client.playlist_tracks(playlist_id)
        except ApiError as e:
            logger.error(f"Playlist {playlist_id} could not be fetched: {e.message}")
            raise PlaylistFetchError(
                details={"playlist_id": playlist_id, "original_error": e.message, **e.details},
                status_code=e.status_code,
                is_timeout=e.is_timeout
            ) from e

        songs = payload.get("songs")
        if not isinstance(songs, list):
            logger.error(f"Playlist {playlist_id} response has no 'songs' list")
            raise PlaylistFetchError(
                details={"playlist_id": playlist_id, "original_error": "missing 'songs' list"}
            )

        tracks = self._create_track_objects(songs)
        logger.info(f"Found {len(tracks)} tracks")
        return tracks

    def _create_track_objects(self, songs: list[Any]) -> list[Track]:
        """
        Convert raw song objects to Track objects, dropping invalid ones.

        Entries that are not objects or lack an integer ID are skipped
        with a warning; the rest keep their playlist order.
        """
        tracks: list[Track] = []
        skipped = 0

        for song in songs:
            if not isinstance(song, dict):
                skipped += 1
                continue
            try:
                tracks.append(Track.from_api(song))
            except ValueError as e:
                logger.debug(f"Skipping song entry: {e}")
                skipped += 1

        if skipped > 0:
            logger.warning(f"Skipped {skipped} invalid song entries")

        return tracks


def fetch_playlist_tracks(
    playlist_id: str,
    client: NeteaseClient | None = None
) -> list[Track]:
    """
    Convenience function wrapping PlaylistFetcher.fetch_tracks().

    Args:
        playlist_id: Playlist ID.
        client: Optional client; defaults to the NeteaseClient singleton.

    Returns:
        List of Track objects.
    """
    return PlaylistFetcher(client).fetch_tracks(playlist_id)
