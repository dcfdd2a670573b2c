"""
Enrichment pipeline: fetch and extract facets for every playlist track.

Tracks are processed strictly one at a time, in playlist order. The API
is a public third-party deployment that does not cope with bursts, and
a sequential run is what makes "current / total" progress meaningful.

Failure policy is skip-and-continue: when one track's request fails it
is logged (and written to enrichment_failures.log) and the run moves on.
There is no retry, and nothing already collected is ever discarded.

Two entry points:

    iter_enrichment(client, tracks)
        Generator yielding EnrichmentStep events. Per track it yields a
        STARTED step before the request and one outcome step after it
        (EXTRACTED, NO_FACETS or FAILED), then a final FINISHED step with
        an idle Progress. The caller owns all state; closing the
        generator early stops the run before the next request.

    enrich(client, tracks, on_progress, on_record)
        Callback driver over iter_enrichment. Returns the extracted
        records and always reports idle progress at the end, even when
        a callback raises.
"""

from typing import Callable, Iterator, Protocol, Sequence

from playlist_facets.core.exceptions import ApiError
from playlist_facets.core.logger import get_logger, log_enrichment_failure
from playlist_facets.facets.extractor import extract_facet
from playlist_facets.facets.models import (
    EnrichmentStep,
    FacetRecord,
    Progress,
    StepStatus,
)
from playlist_facets.netease.models import Track
from playlist_facets.utils import format_percentage

logger = get_logger(__name__)


class WikiSummarySource(Protocol):
    """Anything that can fetch a song wiki summary (NeteaseClient in practice)."""

    def song_wiki_summary(self, track_id: int) -> dict: ...


def iter_enrichment(
    client: WikiSummarySource,
    tracks: Sequence[Track]
) -> Iterator[EnrichmentStep]:
    """
    Enrich tracks one by one, yielding an event for every stage.

    Args:
        client: Source of wiki summaries.
        tracks: Tracks to analyze, in the order they should be fetched.

    Yields:
        EnrichmentStep events as described in the module docstring.
    """
    total = len(tracks)
    extracted = 0
    empty = 0
    failed = 0

    logger.info(f"Analyzing {total} tracks")

    for index, track in enumerate(tracks):
        progress = Progress(current=index + 1, total=total, current_label=track.name)
        yield EnrichmentStep(StepStatus.STARTED, progress)

        try:
            response = client.song_wiki_summary(track.id)
        except ApiError as e:
            failed += 1
            log_enrichment_failure(logger, track.id, track.name, e.message)
            yield EnrichmentStep(StepStatus.FAILED, progress, error=e.message)
            continue
        except Exception as e:
            failed += 1
            logger.error(f"Unexpected error fetching track {track.id} ({track.name}): {e}")
            log_enrichment_failure(logger, track.id, track.name, str(e))
            yield EnrichmentStep(StepStatus.FAILED, progress, error=str(e))
            continue

        record = extract_facet(track.id, track.name, response)
        if record is None:
            empty += 1
            logger.debug(f"No basic info block for track {track.id} ({track.name})")
            yield EnrichmentStep(StepStatus.NO_FACETS, progress)
        else:
            extracted += 1
            logger.debug(f"Extracted facets for {track.name}: {record}")
            yield EnrichmentStep(StepStatus.EXTRACTED, progress, record=record)

    logger.info(
        f"Analysis finished: {extracted}/{total} with facets "
        f"({format_percentage(extracted, total)}), {empty} without, {failed} failed"
    )
    yield EnrichmentStep(StepStatus.FINISHED, Progress.idle())


def enrich(
    client: WikiSummarySource,
    tracks: Sequence[Track],
    on_progress: Callable[[Progress], None] | None = None,
    on_record: Callable[[FacetRecord], None] | None = None
) -> list[FacetRecord]:
    """
    Run the enrichment pipeline with callbacks.

    Args:
        client: Source of wiki summaries.
        tracks: Tracks to analyze.
        on_progress: Called with the progress snapshot before each
                     track's request, and with Progress.idle() at the end.
        on_record: Called with each new FacetRecord as soon as it exists.

    Returns:
        All extracted records, in track order.
    """
    records: list[FacetRecord] = []

    try:
        for step in iter_enrichment(client, tracks):
            if step.status is StepStatus.STARTED:
                if on_progress is not None:
                    on_progress(step.progress)
            elif step.status is StepStatus.EXTRACTED and step.record is not None:
                records.append(step.record)
                if on_record is not None:
                    on_record(step.record)
    finally:
        if on_progress is not None:
            on_progress(Progress.idle())

    return records
