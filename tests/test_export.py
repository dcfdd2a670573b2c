"""Test song list export"""

from playlist_facets.facets.export import format_song_line, format_song_list
from playlist_facets.facets.models import FacetRecord
from playlist_facets.netease.models import Artist, Track


TRACKS = [
    Track(id=1, name="晴天", artists=(Artist("周杰伦"),)),
    Track(id=2, name="Duet", artists=(Artist("Y"), Artist("Z"))),
]


def test_format_song_line():
    record = FacetRecord(track_id=1, track_name="晴天")

    assert format_song_line(record, TRACKS[0]) == "晴天 - 周杰伦"


def test_format_song_line_without_track():
    record = FacetRecord(track_id=99, track_name="Lost")

    assert format_song_line(record, None) == "Lost - "


def test_format_song_list():
    records = [
        FacetRecord(track_id=2, track_name="Duet"),
        FacetRecord(track_id=1, track_name="晴天"),
    ]

    assert format_song_list(records, TRACKS) == "Duet - Y / Z\n晴天 - 周杰伦"


def test_format_song_list_empty():
    assert format_song_list([], TRACKS) == ""
