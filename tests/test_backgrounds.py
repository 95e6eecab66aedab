"""Tests for size rewriting and list merging."""

import pytest

from cast_backgrounds.backgrounds import merge_backgrounds, update_size
from cast_backgrounds.models import BackgroundEntry


def _keys(entries):
    return {entry.name for entry in entries}


class TestUpdateSize:

    def test_rewrites_size_segment(self):
        entries = [BackgroundEntry(url="https://x/s220/a.jpg")]
        update_size("s1920", entries)
        assert entries[0].url == "https://x/s1920/a.jpg"

    def test_rewrites_compound_segment(self, entries):
        update_size("s1920", entries)
        assert entries[0].url == "https://lh3.googleusercontent.com/abc/s1920/lake.jpg"

    def test_is_idempotent(self, entries):
        update_size("s1920", entries)
        once = [entry.url for entry in entries]
        update_size("s1920", entries)
        assert [entry.url for entry in entries] == once

    def test_only_first_match_replaced(self):
        entries = [BackgroundEntry(url="https://x/s100/s200/a.jpg")]
        update_size("s50", entries)
        assert entries[0].url == "https://x/s50/s200/a.jpg"

    def test_url_without_segment_unchanged(self):
        entries = [BackgroundEntry(url="https://x/photos/a.jpg")]
        update_size("s1920", entries)
        assert entries[0].url == "https://x/photos/a.jpg"

    def test_keeps_extra_fields(self, entries):
        update_size("s1920", entries)
        assert entries[0].extra == {"author": "Ansel"}


class TestMergeBackgrounds:

    @pytest.fixture
    def fresh(self):
        return [
            BackgroundEntry(url="https://x/s220/a.jpg", extra={"author": "fresh"}),
            BackgroundEntry(url="https://x/s220/b.jpg"),
        ]

    @pytest.fixture
    def saved(self):
        return [
            BackgroundEntry(url="https://y/s1920/a.jpg", extra={"author": "saved"}),
            BackgroundEntry(url="https://y/s1920/c.jpg"),
        ]

    def test_union_of_keys(self, fresh, saved):
        merged, _ = merge_backgrounds(fresh, saved)
        assert _keys(merged) == _keys(fresh) | _keys(saved)

    def test_union_independent_of_order(self, fresh, saved):
        forward, _ = merge_backgrounds(fresh, saved)
        backward, _ = merge_backgrounds(saved, fresh)
        assert _keys(forward) == _keys(backward)

    def test_first_occurrence_wins(self, fresh, saved):
        merged, _ = merge_backgrounds(fresh, saved)
        assert merged[0].extra == {"author": "fresh"}
        merged, _ = merge_backgrounds(saved, fresh)
        assert merged[0].extra == {"author": "saved"}

    def test_order_preserved(self, fresh, saved):
        merged, _ = merge_backgrounds(fresh, saved)
        assert [entry.name for entry in merged] == ["a.jpg", "b.jpg", "c.jpg"]

    def test_new_count_is_keys_missing_from_saved(self, fresh, saved):
        merged, new_count = merge_backgrounds(fresh, saved)
        assert new_count == len(_keys(fresh) - _keys(saved)) == 1
        assert new_count == len(merged) - len(saved)

    def test_saved_only_entries_preserved(self, fresh, saved):
        merged, _ = merge_backgrounds(fresh, saved)
        assert "c.jpg" in _keys(merged)

    def test_duplicate_saved_entry_gives_zero_new(self):
        fresh = [BackgroundEntry(url="https://x/s220/a.jpg")]
        saved = [BackgroundEntry(url="https://x/s1920/a.jpg")]
        merged, new_count = merge_backgrounds(fresh, saved)
        assert new_count == 0
        assert len(merged) == 1

    def test_key_is_percent_decoded(self):
        fresh = [BackgroundEntry(url="https://x/s220/my%20photo.jpg")]
        saved = [BackgroundEntry(url="https://y/s220/my photo.jpg")]
        merged, new_count = merge_backgrounds(fresh, saved)
        assert len(merged) == 1
        assert new_count == 0
