"""
Facet analysis for playlist-facets.

This module extracts style/tag/language/BPM facets from track wiki
summaries and filters the resulting records:
    - models: FacetRecord, FilterOptions, AvailableFilters, Progress, ...
    - extractor: extract_facet() for one wiki summary response
    - pipeline: sequential enrichment over a whole playlist
    - filters: derive_options(), matches(), filter_records()
    - export: newline-delimited "name - artists" text

Usage:
    from playlist_facets.facets import enrich, derive_options, filter_records

    records = enrich(client, tracks)
    available = derive_options(records)
    shown = filter_records(records, FilterOptions(styles=("流行",)))
"""

from playlist_facets.facets.export import format_song_line, format_song_list
from playlist_facets.facets.extractor import extract_facet, parse_bpm
from playlist_facets.facets.filters import (
    derive_options,
    filter_records,
    matches,
    style_sort_key,
)
from playlist_facets.facets.models import (
    AvailableFilters,
    BpmRange,
    EnrichmentStep,
    FacetRecord,
    FilterOptions,
    Progress,
    StepStatus,
)
from playlist_facets.facets.pipeline import enrich, iter_enrichment

__all__ = [
    # Models
    "AvailableFilters",
    "BpmRange",
    "EnrichmentStep",
    "FacetRecord",
    "FilterOptions",
    "Progress",
    "StepStatus",
    # Extraction
    "extract_facet",
    "parse_bpm",
    # Pipeline
    "enrich",
    "iter_enrichment",
    # Filters
    "derive_options",
    "filter_records",
    "matches",
    "style_sort_key",
    # Export
    "format_song_line",
    "format_song_list",
]
