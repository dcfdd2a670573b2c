"""
Application state for one playlist-facets session.

AppState replaces a set of globally shared mutable cells with one
explicit object. Each field has a single writer:

    playlist_id, tracks, loading, error   fetch_playlist() / set_input()
    records, progress, analyzing          analyze()
    filters                               toggle_* / set_bpm_* / reset_filters()

Everything else (available filters, filtered records, export text) is
derived on read from those fields and never stored.

Record lists are published as new tuples, so a reader holding a
previous snapshot never sees it change.

Fetching a new playlist clears the records and progress but keeps the
filter selections; call reset_filters() to clear them.

Usage:
    state = AppState(client)
    state.set_input("https://music.163.com/#/playlist?id=24381616")
    state.fetch_playlist()
    state.analyze()
    state.toggle_style("流行")
    print(state.export_text())
"""

from dataclasses import replace
from typing import Callable

from playlist_facets.core.exceptions import InputError, PlaylistFetchError
from playlist_facets.core.logger import get_logger
from playlist_facets.core.progress import EnrichmentProgressBar
from playlist_facets.facets.export import format_song_list
from playlist_facets.facets.filters import derive_options, filter_records
from playlist_facets.facets.models import (
    AvailableFilters,
    BpmRange,
    FacetRecord,
    FilterOptions,
    Progress,
    StepStatus,
)
from playlist_facets.facets.pipeline import iter_enrichment
from playlist_facets.netease.client import NeteaseClient
from playlist_facets.netease.fetcher import PlaylistFetcher
from playlist_facets.netease.models import Track
from playlist_facets.utils import parse_playlist_input

logger = get_logger(__name__)


EMPTY_ID_MESSAGE = "Please enter a playlist ID"
NO_TRACKS_MESSAGE = "Please fetch a playlist first"


def _toggle(values: tuple[str, ...], value: str) -> tuple[str, ...]:
    """Remove value if selected, otherwise append it."""
    if value in values:
        return tuple(v for v in values if v != value)
    return values + (value,)


class AppState:
    """
    Mutable state of one session.

    Attributes:
        playlist_id: Working playlist ID (already extracted from a URL).
        tracks: Tracks of the last successfully fetched playlist.
        records: Facet records collected so far for those tracks.
        filters: Current filter selections.
        progress: Enrichment progress, idle outside a run.
        loading: True while the playlist request is in flight.
        analyzing: True while an enrichment run is in progress.
        error: Last user-visible error message ('' when none).
    """

    def __init__(self, client: NeteaseClient | None = None) -> None:
        self._client = client if client is not None else NeteaseClient()

        self.playlist_id = ""
        self.tracks: tuple[Track, ...] = ()
        self.records: tuple[FacetRecord, ...] = ()
        self.filters = FilterOptions()
        self.progress = Progress.idle()
        self.loading = False
        self.analyzing = False
        self.error = ""

        # Observers notified after every published record
        self._record_listeners: list[Callable[[tuple[FacetRecord, ...]], None]] = []

    # ------------------------------------------------------------------
    # Input and fetching
    # ------------------------------------------------------------------

    def set_input(self, value: str) -> str:
        """
        Set the working playlist ID from raw user input.

        Returns:
            The extracted playlist ID.
        """
        self.playlist_id = parse_playlist_input(value)
        return self.playlist_id

    def fetch_playlist(self) -> tuple[Track, ...]:
        """
        Fetch the tracks of the current playlist ID.

        On success the track list is replaced, records are cleared and
        progress is reset; filter selections are kept. On failure the
        previous tracks and records stay as they were.

        Returns:
            The new track list.

        Raises:
            InputError: If the playlist ID is empty.
            PlaylistFetchError: If the playlist could not be fetched.
        """
        if not self.playlist_id.strip():
            self.error = EMPTY_ID_MESSAGE
            raise InputError(EMPTY_ID_MESSAGE)

        self.loading = True
        self.error = ""
        try:
            tracks = PlaylistFetcher(self._client).fetch_tracks(self.playlist_id)
        except PlaylistFetchError as e:
            self.error = e.message
            raise
        finally:
            self.loading = False

        self.tracks = tuple(tracks)
        self._publish_records(())
        self.progress = Progress.idle()
        return self.tracks

    # ------------------------------------------------------------------
    # Enrichment
    # ------------------------------------------------------------------

    def add_record_listener(
        self,
        listener: Callable[[tuple[FacetRecord, ...]], None]
    ) -> None:
        """Register a callback receiving every new record list snapshot."""
        self._record_listeners.append(listener)

    def analyze(
        self,
        progress_bar: EnrichmentProgressBar | None = None
    ) -> tuple[FacetRecord, ...]:
        """
        Run the enrichment pipeline over the current tracks.

        Records of a previous run are dropped first; new records are
        then published one at a time as they are extracted. Progress
        and the analyzing flag are reset when the run ends, whether it
        completed or raised.

        Args:
            progress_bar: Optional started progress bar to drive.

        Returns:
            All records collected for the current tracks.

        Raises:
            InputError: If no playlist has been fetched.
        """
        if not self.tracks:
            self.error = NO_TRACKS_MESSAGE
            raise InputError(NO_TRACKS_MESSAGE)

        tracks = self.tracks
        self.analyzing = True
        self.progress = Progress(current=0, total=len(tracks))
        collected: list[FacetRecord] = []
        self._publish_records(())

        try:
            for step in iter_enrichment(self._client, tracks):
                if step.status is StepStatus.STARTED:
                    self.progress = step.progress
                    if progress_bar is not None:
                        progress_bar.set_current(step.progress.current_label)
                    continue

                if step.status is StepStatus.FINISHED:
                    continue

                if step.record is not None:
                    collected.append(step.record)
                    self._publish_records(tuple(collected))

                if progress_bar is not None:
                    progress_bar.update(step.status)
        finally:
            self.analyzing = False
            self.progress = Progress.idle()

        return self.records

    def _publish_records(self, records: tuple[FacetRecord, ...]) -> None:
        self.records = records
        for listener in self._record_listeners:
            listener(records)

    # ------------------------------------------------------------------
    # Filter selections
    # ------------------------------------------------------------------

    def toggle_style(self, style: str) -> None:
        self.filters = replace(self.filters, styles=_toggle(self.filters.styles, style))

    def toggle_tag(self, tag: str) -> None:
        self.filters = replace(self.filters, tags=_toggle(self.filters.tags, tag))

    def toggle_language(self, language: str) -> None:
        self.filters = replace(
            self.filters,
            languages=_toggle(self.filters.languages, language)
        )

    def set_bpm_min(self, value: int) -> None:
        """
        Move the lower BPM bound.

        The upper bound stays at the selected (or available) maximum and
        is raised to value if value would exceed it.
        """
        current = self.bpm_display_range
        upper = current.max if current is not None else value
        self.filters = replace(
            self.filters,
            bpm_range=BpmRange(min=value, max=max(upper, value))
        )

    def set_bpm_max(self, value: int) -> None:
        """
        Move the upper BPM bound.

        The lower bound stays at the selected (or available) minimum and
        is lowered to value if value would fall below it.
        """
        current = self.bpm_display_range
        lower = current.min if current is not None else value
        self.filters = replace(
            self.filters,
            bpm_range=BpmRange(min=min(lower, value), max=value)
        )

    def reset_filters(self) -> None:
        """Clear every filter selection."""
        self.filters = FilterOptions()

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def available_filters(self) -> AvailableFilters:
        return derive_options(self.records)

    @property
    def filtered_records(self) -> list[FacetRecord]:
        return filter_records(self.records, self.filters)

    @property
    def bpm_display_range(self) -> BpmRange | None:
        """Selected BPM range, else the available one, else None."""
        if self.filters.bpm_range is not None:
            return self.filters.bpm_range
        return self.available_filters.bpm_range

    @property
    def filtered_count_label(self) -> str:
        """'shown/total' when filters hide records, '' otherwise."""
        shown = len(self.filtered_records)
        total = len(self.records)
        if shown == total:
            return ""
        return f"{shown}/{total}"

    def export_text(self) -> str:
        """Newline-delimited "name - artists" lines for the filtered records."""
        return format_song_list(self.filtered_records, self.tracks)
