"""Test filter option derivation and matching"""

import pytest

from playlist_facets.facets.filters import (
    derive_options,
    filter_records,
    matches,
    style_sort_key,
)
from playlist_facets.facets.models import BpmRange, FacetRecord, FilterOptions


def record(track_id, styles=(), tags=(), language="", bpm=None):
    return FacetRecord(
        track_id=track_id,
        track_name=f"Track {track_id}",
        styles=tuple(styles),
        tags=tuple(tags),
        language=language,
        bpm=bpm
    )


class TestDeriveOptions:
    """Test derive_options()"""

    def test_empty_records(self):
        available = derive_options([])

        assert available.styles == ()
        assert available.tags == ()
        assert available.languages == ()
        assert available.bpm_range is None

    def test_union_of_values(self):
        records = [
            record(1, styles=["Pop"], tags=["KTV", "Live"], language="英语", bpm=100),
            record(2, styles=["Rock", "Pop"], tags=["Live", "Remix"], language="", bpm=None),
            record(3, tags=["Cover"], language="国语", bpm=140),
        ]

        available = derive_options(records)

        assert available.styles == ("Pop", "Rock")
        assert available.tags == ("KTV", "Live", "Remix", "Cover")
        assert available.languages == ("英语", "国语")
        assert available.bpm_range == BpmRange(min=100, max=140)

    def test_is_idempotent(self):
        records = [record(1, styles=["摇滚"], bpm=90), record(2, styles=["爵士"], bpm=120)]

        assert derive_options(records) == derive_options(records)

    def test_bpm_range_absent_without_bpm(self):
        records = [record(1, styles=["Pop"]), record(2, language="国语")]

        assert derive_options(records).bpm_range is None

    def test_bpm_zero_is_a_value(self):
        records = [record(1, bpm=0), record(2, bpm=80)]

        assert derive_options(records).bpm_range == BpmRange(min=0, max=80)

    def test_styles_are_collated_by_pinyin(self):
        records = [record(1, styles=["民谣"]), record(2, styles=["摇滚"]), record(3, styles=["爵士"])]

        # jue2 < min2 < yao2, not code point order
        assert derive_options(records).styles == ("爵士", "民谣", "摇滚")

    def test_han_styles_sort_before_latin(self):
        styles = ["流行", "Funk", "爵士", "Jazz", "电子", "ACG", "说唱"]
        records = [record(i, styles=[style]) for i, style in enumerate(styles)]

        assert derive_options(records).styles == (
            "电子", "爵士", "流行", "说唱", "ACG", "Funk", "Jazz"
        )

    def test_tags_keep_encounter_order(self):
        records = [record(1, tags=["摇滚"]), record(2, tags=["爵士"])]

        assert derive_options(records).tags == ("摇滚", "爵士")


class TestStyleSortKey:
    """Test style_sort_key()"""

    def test_latin_is_case_insensitive(self):
        assert sorted(["rock", "Pop", "Jazz"], key=style_sort_key) == ["Jazz", "Pop", "rock"]

    def test_tones_order_same_syllable(self):
        # 流 liu2 before 柳 liu3
        assert sorted(["柳", "流"], key=style_sort_key) == ["流", "柳"]


class TestMatches:
    """Test matches() and filter_records()"""

    def test_empty_options_pass_everything(self):
        records = [record(1), record(2, styles=["Pop"], language="国语", bpm=100)]

        assert all(matches(r, FilterOptions()) for r in records)
        assert FilterOptions().is_empty

    def test_style_selection(self):
        records = [record(1, styles=["Pop"]), record(2, styles=["Rock"])]

        result = filter_records(records, FilterOptions(styles=("Pop",)))

        assert result == [records[0]]

    def test_any_selected_value_within_category(self):
        records = [record(1, tags=["KTV"]), record(2, tags=["Live"]), record(3, tags=["Cover"])]

        result = filter_records(records, FilterOptions(tags=("Live", "KTV")))

        assert result == [records[0], records[1]]

    def test_categories_are_conjunctive(self):
        both = record(1, styles=["Pop"], language="国语")
        style_only = record(2, styles=["Pop"], language="英语")
        options = FilterOptions(styles=("Pop",), languages=("国语",))

        assert matches(both, options)
        assert not matches(style_only, options)

    def test_missing_bpm_passes_bpm_filter(self):
        no_bpm = record(1)

        assert matches(no_bpm, FilterOptions(bpm_range=BpmRange(min=100, max=120)))

    def test_missing_language_fails_language_filter(self):
        no_language = record(1)

        assert not matches(no_language, FilterOptions(languages=("国语",)))

    def test_bpm_range_is_inclusive(self):
        options = FilterOptions(bpm_range=BpmRange(min=100, max=120))

        assert matches(record(1, bpm=100), options)
        assert matches(record(2, bpm=120), options)
        assert not matches(record(3, bpm=99), options)
        assert not matches(record(4, bpm=121), options)

    def test_filter_keeps_record_order(self):
        records = [record(i, styles=["Pop"]) for i in range(5)]

        assert filter_records(records, FilterOptions(styles=("Pop",))) == records


class TestBpmRange:
    """Test BpmRange invariant"""

    def test_min_greater_than_max_rejected(self):
        with pytest.raises(ValueError):
            BpmRange(min=130, max=120)
