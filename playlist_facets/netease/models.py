"""
Data models for NetEase Cloud Music playlist entities.

This module defines immutable dataclasses for the tracks returned by the
playlist endpoint. They are created once per playlist fetch and never
mutated afterwards; a new fetch replaces the whole track list.

Design Decisions:
    - All dataclasses are frozen (immutable) to prevent accidental modification
    - Sequences are tuples for immutability
    - Field names are Pythonic; from_api() maps the API's short keys
      ('ar', 'al', 'picUrl') onto them

Usage:
    from playlist_facets.netease.models import Track

    track = Track.from_api({"id": 1, "name": "A", "ar": [{"name": "X"}], "al": {}})
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Artist:
    """
    An artist credited on a track.

    Attributes:
        name: Display name. Example: "周杰伦"
    """
    name: str

    @classmethod
    def from_api(cls, artist_data: dict[str, Any]) -> "Artist":
        name = artist_data.get("name")
        return cls(name=name if isinstance(name, str) else "")


@dataclass(frozen=True)
class Track:
    """
    Immutable representation of one playlist track.

    Attributes:
        id: NetEase track ID. Used to fetch the track's wiki summary.
            Example: 186016
        name: Track title. Example: "晴天"
        artists: Ordered artists as they appear on the track.
        album_art_url: Album cover URL ('' when the API gave none).

    Class Methods:
        from_api: Create Track from a 'songs' entry of the playlist response.
    """

    id: int
    name: str
    artists: tuple[Artist, ...] = field(default_factory=tuple)
    album_art_url: str = ""

    @classmethod
    def from_api(cls, song_data: dict[str, Any]) -> "Track":
        """
        Create a Track from one element of the playlist 'songs' array.

        Args:
            song_data: Raw song object: {id, name, ar: [{name}], al: {picUrl}}.

        Returns:
            Track populated from the response.

        Raises:
            ValueError: If the song has no usable integer ID.
        """
        raw_id = song_data.get("id")
        # bool is an int subclass and never a real ID
        if isinstance(raw_id, bool) or not isinstance(raw_id, int):
            raise ValueError(f"Song has no integer id: {raw_id!r}")

        name = song_data.get("name")

        artists_raw = song_data.get("ar") or []
        artists = tuple(
            Artist.from_api(a) for a in artists_raw if isinstance(a, dict)
        )

        album = song_data.get("al") or {}
        pic_url = album.get("picUrl") if isinstance(album, dict) else None

        return cls(
            id=raw_id,
            name=name if isinstance(name, str) else "",
            artists=artists,
            album_art_url=pic_url if isinstance(pic_url, str) else ""
        )

    @property
    def artist_names(self) -> list[str]:
        """Names of all artists, in credit order."""
        return [artist.name for artist in self.artists]

    @property
    def artists_display(self) -> str:
        """Artists joined for display. Example: "A / B"."""
        return " / ".join(self.artist_names)
