"""
Data models for extracted facets, filter selections and progress.

All models are frozen dataclasses. Collections are tuples: a record
list, a filter selection or a derived option list is replaced as a
whole, never modified in place.

Models:
    FacetRecord      - Facets extracted for one track
    BpmRange         - Inclusive BPM interval (min <= max)
    FilterOptions    - The user's current filter selections
    AvailableFilters - Filter values present in the current records
    Progress         - Enrichment progress snapshot
    StepStatus       - What an EnrichmentStep reports
    EnrichmentStep   - One event yielded by the enrichment pipeline
"""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class FacetRecord:
    """
    Facets extracted from one track's wiki summary.

    Only tracks whose summary contains the basic-info block get a record;
    there are no placeholder records for failed tracks.

    Attributes:
        track_id: ID of the Track this record belongs to.
        track_name: Track title, copied for display and export.
        styles: Genre titles, unique, in response order. Example: ("流行", "民谣")
        tags: Business tag titles, unique, in response order.
        language: Language name, '' when unknown. Example: "国语"
        bpm: Beats per minute, None when absent or unparsable.
    """
    track_id: int
    track_name: str
    styles: tuple[str, ...] = field(default_factory=tuple)
    tags: tuple[str, ...] = field(default_factory=tuple)
    language: str = ""
    bpm: int | None = None


@dataclass(frozen=True)
class BpmRange:
    """
    Inclusive BPM interval.

    Raises:
        ValueError: On construction with min > max.
    """
    min: int
    max: int

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValueError(f"BPM range min {self.min} is greater than max {self.max}")

    def contains(self, bpm: int) -> bool:
        return self.min <= bpm <= self.max


@dataclass(frozen=True)
class FilterOptions:
    """
    Current filter selections.

    An empty selection means "no constraint" for that category, and
    bpm_range None means no BPM constraint. Selections keep the order in
    which the user picked values.
    """
    styles: tuple[str, ...] = field(default_factory=tuple)
    tags: tuple[str, ...] = field(default_factory=tuple)
    languages: tuple[str, ...] = field(default_factory=tuple)
    bpm_range: BpmRange | None = None

    @property
    def is_empty(self) -> bool:
        """True when no category is constrained."""
        return not (self.styles or self.tags or self.languages or self.bpm_range)


@dataclass(frozen=True)
class AvailableFilters:
    """
    Filter values present in the current record list.

    Always derived from the records (see filters.derive_options), never
    edited directly.

    Attributes:
        styles: Unique styles, collated for Chinese text (pinyin order).
        tags: Unique tags in encounter order.
        languages: Unique non-empty languages in encounter order.
        bpm_range: Min/max over records with a BPM, None if none has one.
    """
    styles: tuple[str, ...] = field(default_factory=tuple)
    tags: tuple[str, ...] = field(default_factory=tuple)
    languages: tuple[str, ...] = field(default_factory=tuple)
    bpm_range: BpmRange | None = None


@dataclass(frozen=True)
class Progress:
    """
    Enrichment progress snapshot.

    Attributes:
        current: 1-based index of the track being fetched (0 when idle).
        total: Number of tracks in the run (0 when idle).
        current_label: Name of the track being fetched ('' when idle).
    """
    current: int = 0
    total: int = 0
    current_label: str = ""

    @classmethod
    def idle(cls) -> "Progress":
        """The reset state: {0, 0, ''}."""
        return cls()

    @property
    def is_idle(self) -> bool:
        return self.total == 0


class StepStatus(Enum):
    """
    What an EnrichmentStep reports.

    STARTED: the track's metadata request is about to be made.
    EXTRACTED: a FacetRecord was extracted (step.record is set).
    NO_FACETS: the request succeeded but carried no basic-info block.
    FAILED: the request failed (step.error describes why).
    FINISHED: the run is over; progress is back to idle.
    """
    STARTED = "started"
    EXTRACTED = "extracted"
    NO_FACETS = "no_facets"
    FAILED = "failed"
    FINISHED = "finished"


@dataclass(frozen=True)
class EnrichmentStep:
    """
    One event yielded by pipeline.iter_enrichment().

    Attributes:
        status: Kind of event.
        progress: Progress snapshot at the time of the event.
        record: New FacetRecord for EXTRACTED steps, else None.
        error: Failure description for FAILED steps, else ''.
    """
    status: StepStatus
    progress: Progress
    record: FacetRecord | None = None
    error: str = ""
