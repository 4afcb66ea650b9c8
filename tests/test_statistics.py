"""
Tests for report statistics
"""
import pytest

import sys
sys.path.insert(0, '.')

from featherguard.analysis.statistics import (
    StatisticsSummary,
    latest_reports,
    normalize_species,
    status_key,
    summarize,
)
from featherguard.core.models import Report, StrikeStatus


class TestNormalizeSpecies:
    """Test species grouping keys."""

    def test_strips_confidence(self):
        assert normalize_species("五色鳥 (95%)") == "五色鳥"

    def test_no_parenthesis(self):
        assert normalize_species("  麻雀  ") == "麻雀"

    def test_only_first_parenthesis_matters(self):
        assert normalize_species("紅嘴黑鵯 (82%) (juvenile)") == "紅嘴黑鵯"

    @pytest.mark.parametrize("value", ["", "   ", "(95%)", None, 42])
    def test_unknown_species(self, value):
        assert normalize_species(value) == "unknown species"


class TestStatusKey:
    """Test status grouping keys."""

    def test_enum_member(self):
        assert status_key(StrikeStatus.INJURED) == "injured"

    def test_raw_value_and_label(self):
        assert status_key("dead") == "dead"
        assert status_key("死亡") == "dead"

    @pytest.mark.parametrize("value", [None, "", "asleep", "DEAD"])
    def test_unknown_status(self, value):
        assert status_key(value) == "unknown"


class TestSummarize:
    """Test summarize()."""

    def test_empty_collection(self):
        assert summarize([]) is None

    def test_species_collapse(self):
        reports = [
            Report(bird_species="五色鳥 (95%)"),
            Report(bird_species="五色鳥 (60%)"),
            Report(bird_species="麻雀 (80%)"),
        ]

        summary = summarize(reports)

        assert summary.species_counts == {"五色鳥": 2, "麻雀": 1}
        assert summary.top_species[0] == ("五色鳥", 2)
        assert summary.top_species == [("五色鳥", 2), ("麻雀", 1)]

    def test_status_counts(self, sample_reports):
        summary = summarize(sample_reports)

        assert summary.total == 3
        assert summary.status_counts == {"dead": 1, "stunned": 1, "injured": 1}

    def test_unknown_status_bucket(self):
        reports = [Report(status=None), Report(), {"status": "asleep"}]

        summary = summarize(reports)

        assert summary.status_counts == {"unknown": 2, "dead": 1}

    def test_raw_rows_with_missing_fields(self):
        rows = [{}, {"bird_species": None}, {"bird_species": "綠繡眼 (88%)", "status": "暈眩"}]

        summary = summarize(rows)

        assert summary.total == 3
        assert summary.species_counts == {"unknown species": 2, "綠繡眼": 1}
        assert summary.status_counts == {"unknown": 2, "stunned": 1}

    def test_top_five_only(self):
        species = ["A", "B", "C", "D", "E", "F"]
        reports = [Report(bird_species=f"{s} (90%)") for s in species]
        reports += [Report(bird_species="F (50%)")] * 2

        summary = summarize(reports)

        assert len(summary.top_species) == 5
        assert summary.top_species[0] == ("F", 3)
        assert len(summary.species_counts) == 6

    def test_ties_keep_first_seen_order(self):
        reports = [
            Report(bird_species="麻雀"),
            Report(bird_species="白頭翁"),
            Report(bird_species="綠繡眼"),
            Report(bird_species="白頭翁"),
            Report(bird_species="麻雀"),
        ]

        summary = summarize(reports)

        assert [name for name, _ in summary.top_species] == ["麻雀", "白頭翁", "綠繡眼"]

    def test_custom_top_n(self, sample_reports):
        summary = summarize(sample_reports, top_n=1)
        assert summary.top_species == [("五色鳥", 2)]

    def test_does_not_mutate_reports(self, sample_reports):
        before = [Report(**vars(r)) for r in sample_reports]
        summarize(sample_reports)
        assert sample_reports == before

    def test_to_dict(self, sample_reports):
        data = summarize(sample_reports).to_dict()

        assert data["total"] == 3
        assert data["top_species"][0] == {"species": "五色鳥", "count": 2}
        assert data["status_counts"]["dead"] == 1


class TestLatestReports:
    """Test the latest-reports projection."""

    def test_limit(self, sample_reports):
        assert [r.id for r in latest_reports(sample_reports, limit=2)] == ["3", "2"]

    def test_shorter_than_limit(self, sample_reports):
        assert len(latest_reports(sample_reports)) == 3

    def test_empty(self):
        assert latest_reports([]) == []


def test_summary_defaults():
    summary = StatisticsSummary(total=0)
    assert summary.top_species == []
