"""
Plain-text export of filtered records.

One line per record, "{track name} - {artist1 / artist2 / ...}", lines
joined with newlines and no trailing newline. Artists come from the
Track the record belongs to.
"""

from typing import Sequence

from playlist_facets.facets.models import FacetRecord
from playlist_facets.netease.models import Track


def format_song_line(record: FacetRecord, track: Track | None) -> str:
    """
    Format one export line.

    A record whose track is not in the current track list gets an empty
    artist part ("Name - ").
    """
    artists = track.artists_display if track is not None else ""
    return f"{record.track_name} - {artists}"


def format_song_list(
    records: Sequence[FacetRecord],
    tracks: Sequence[Track]
) -> str:
    """
    Format the export text for a list of records.

    Args:
        records: Records to export, usually the filtered list.
        tracks: Current playlist tracks, used to look up artists.

    Returns:
        Newline-delimited text, '' for no records.
    """
    tracks_by_id = {track.id: track for track in tracks}
    return "\n".join(
        format_song_line(record, tracks_by_id.get(record.track_id))
        for record in records
    )
