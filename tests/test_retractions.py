"""Tests for merging version records and applying retractions."""

from datetime import datetime, timezone

import pytest

from versioning.models import RetractionRange, VersionRecord
from versioning.retractions import apply_retractions, sort_descending, unique


def _versions(records):
    return [r.version for r in records]


class TestVersionRecord:
    """Records compare by version only."""

    def test_equal_ignores_build_and_time(self):
        a = VersionRecord("v1.0.0", published_at=datetime(2023, 1, 1, tzinfo=timezone.utc))
        b = VersionRecord("v1.0.0+build")

        assert a == b
        assert hash(a) == hash(b)

    def test_retract_returns_copy(self):
        rec = VersionRecord("v1.0.0")
        retracted = rec.retract("oops")

        assert not rec.retracted
        assert retracted.retracted
        assert retracted.retraction_reason == "oops"

    def test_retract_without_reason(self):
        assert VersionRecord("v1.0.0").retract("").retraction_reason is None


class TestSortAndUnique:
    """Descending order without duplicates."""

    def test_sort_descending_numeric(self):
        records = [VersionRecord(v) for v in ("v1.2.0", "v1.10.0", "v1.9.1", "v1.10.0-rc.1")]

        assert _versions(sort_descending(records)) == ["v1.10.0", "v1.10.0-rc.1", "v1.9.1", "v1.2.0"]

    def test_unique_removes_duplicates(self):
        first = datetime(2023, 1, 1, tzinfo=timezone.utc)
        second = datetime(2024, 1, 1, tzinfo=timezone.utc)
        records = [
            VersionRecord("v1.0.0", published_at=first),
            VersionRecord("v1.2.0"),
            VersionRecord("v1.0.0", published_at=second),
            VersionRecord("v1.10.0"),
        ]

        merged = unique(records)

        assert _versions(merged) == ["v1.10.0", "v1.2.0", "v1.0.0"]
        assert merged[-1].published_at == first

    def test_unique_is_strictly_descending(self):
        records = [VersionRecord(v) for v in ("v0.1.0", "v0.3.0", "v0.2.0", "v0.3.0", "v0.1.0")]

        merged = unique(records)

        for newer, older in zip(merged, merged[1:]):
            assert newer.version != older.version
        assert _versions(merged) == ["v0.3.0", "v0.2.0", "v0.1.0"]

    def test_invalid_versions_sort_last(self):
        records = [VersionRecord("junk"), VersionRecord("v0.0.1")]

        assert _versions(unique(records)) == ["v0.0.1", "junk"]


class TestApplyRetractions:
    """Inclusive range containment and reasons."""

    RANGE = RetractionRange(low="v1.1.0", high="v1.3.0", reason="bad")

    @pytest.mark.parametrize(
        "version, retracted",
        [
            ("v1.1.0", True),
            ("v1.2.0", True),
            ("v1.3.0", True),
            ("v1.0.9", False),
            ("v1.3.1", False),
            ("v1.1.0-rc.1", False),
        ],
    )
    def test_range_is_inclusive(self, version, retracted):
        out = apply_retractions([VersionRecord(version)], [self.RANGE])

        assert out[0].retracted is retracted

    def test_reason_is_attached(self):
        out = apply_retractions([VersionRecord("v1.2.0")], [self.RANGE])

        assert out[0].retraction_reason == "bad"

    def test_range_order_does_not_change_flags(self):
        ranges = [self.RANGE, RetractionRange(low="v0.5.0", high="v0.5.0")]
        records = [VersionRecord(v) for v in ("v1.4.0", "v1.2.0", "v0.5.0", "v0.4.0")]

        forward = apply_retractions(records, ranges)
        backward = apply_retractions(records, list(reversed(ranges)))

        assert [r.retracted for r in forward] == [r.retracted for r in backward]
        assert [r.retracted for r in forward] == [False, True, True, False]

    def test_last_matching_range_supplies_reason(self):
        ranges = [self.RANGE, RetractionRange(low="v1.2.0", high="v1.2.0", reason="worse")]

        out = apply_retractions([VersionRecord("v1.2.0")], ranges)

        assert out[0].retraction_reason == "worse"

    def test_inverted_range_contains_nothing(self):
        inverted = RetractionRange(low="v1.3.0", high="v1.1.0")

        out = apply_retractions([VersionRecord("v1.2.0")], [inverted])

        assert not out[0].retracted

    def test_input_not_mutated_and_order_kept(self):
        records = [VersionRecord("v1.4.0"), VersionRecord("v1.2.0")]

        out = apply_retractions(records, [self.RANGE])

        assert _versions(out) == ["v1.4.0", "v1.2.0"]
        assert not records[1].retracted
