"""
Filter option derivation and the filter predicate.

derive_options() computes which filter values exist in the current
records; matches() decides whether one record passes the current
selections. Both are pure functions, so they are simply recomputed
whenever the record list or the selections change.

Matching is conjunctive across categories (every active category must
pass) and disjunctive within a category (one shared value suffices):

    styles     passes if nothing selected, or record shares a style
    tags       passes if nothing selected, or record shares a tag
    languages  passes if nothing selected, or record.language is selected
               (a record with unknown language fails any language filter)
    bpm_range  passes if no range, or record has no BPM, or BPM in range
               (a record with unknown BPM passes any BPM filter)

The last two rules are deliberately asymmetric.
"""

import re
from typing import Iterable, Sequence

from pypinyin import Style, lazy_pinyin

from playlist_facets.facets.models import (
    AvailableFilters,
    BpmRange,
    FacetRecord,
    FilterOptions,
)

# CJK unified ideographs, extension A and compatibility ideographs
_HAN_PATTERN = re.compile(r"[\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff]")


def style_sort_key(text: str) -> tuple[int, list[str], str]:
    """
    Collation key for style names in Chinese (zh-CN) order.

    Names starting with a Han character come first, compared by their
    toned pinyin, so "爵士" (jue2) sorts before "民谣" (min2) and "摇滚"
    (yao2) rather than by code point. All other names follow, compared
    case-insensitively ("ACG", "Funk", "Jazz"). The original text breaks
    ties so the order is total.
    """
    group = 0 if _HAN_PATTERN.match(text) else 1
    syllables = lazy_pinyin(text, style=Style.TONE3, neutral_tone_with_five=True)
    return group, [syllable.lower() for syllable in syllables], text


def _unique(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


def derive_options(records: Sequence[FacetRecord]) -> AvailableFilters:
    """
    Compute the filter values available in a list of records.

    Args:
        records: Current facet records.

    Returns:
        AvailableFilters with collated styles, tags and non-empty
        languages in encounter order, and the BPM range of the records
        that have a BPM (None if none has).
    """
    styles = _unique(style for record in records for style in record.styles)
    tags = _unique(tag for record in records for tag in record.tags)
    languages = _unique(record.language for record in records if record.language)

    bpms = [record.bpm for record in records if record.bpm is not None]
    bpm_range = BpmRange(min=min(bpms), max=max(bpms)) if bpms else None

    return AvailableFilters(
        styles=tuple(sorted(styles, key=style_sort_key)),
        tags=tags,
        languages=languages,
        bpm_range=bpm_range
    )


def matches(record: FacetRecord, options: FilterOptions) -> bool:
    """
    Check whether a record passes every active filter category.

    Args:
        record: Record to test.
        options: Current selections.

    Returns:
        True if the record should be shown.
    """
    if options.styles and not set(record.styles) & set(options.styles):
        return False

    if options.tags and not set(record.tags) & set(options.tags):
        return False

    if options.languages and record.language not in options.languages:
        return False

    if options.bpm_range is not None and record.bpm is not None:
        if not options.bpm_range.contains(record.bpm):
            return False

    return True


def filter_records(
    records: Sequence[FacetRecord],
    options: FilterOptions
) -> list[FacetRecord]:
    """Records passing matches(), in their original order."""
    return [record for record in records if matches(record, options)]
