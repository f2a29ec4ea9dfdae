"""Tests for the per-chart aggregations and summary statistics."""

import pytest

from insightboard.aggregations import (
    CHART_AGGREGATIONS,
    OTHER,
    count_by,
    intensity_counts,
    likelihood_counts,
    pestle_counts,
    region_counts,
    relevance_counts,
    scatter_points,
    sector_counts,
    summary_stats,
    topic_counts,
    year_counts,
)
from insightboard.filters import FilterState, apply_filters
from insightboard.insights import UNKNOWN, insights_frame

from conftest import make_insight


def _as_dict(data):
    return dict(zip(data.iloc[:, 0], data["count"]))


class TestCountBy:
    def test_sorted_by_count_desc(self):
        df = insights_frame([make_insight(sector=s) for s in ["A", "B", "B", "C", "C", "C"]])
        data = count_by(df, "sector")
        assert data["sector"].tolist() == ["C", "B", "A"]
        assert data["count"].tolist() == [3, 2, 1]

    def test_ties_keep_first_occurrence(self):
        df = insights_frame([make_insight(sector=s) for s in ["B", "A", "A", "B"]])
        assert count_by(df, "sector")["sector"].tolist() == ["B", "A"]

    def test_missing_excluded_without_fill(self):
        df = insights_frame([make_insight(sector=""), make_insight(sector="A")])
        assert _as_dict(count_by(df, "sector")) == {"A": 1}

    def test_missing_filled(self):
        df = insights_frame([make_insight(sector=""), make_insight(sector="A")])
        assert _as_dict(count_by(df, "sector", fill=UNKNOWN)) == {"A": 1, UNKNOWN: 1}

    def test_empty_frame(self):
        data = count_by(insights_frame([]), "sector")
        assert data.empty
        assert list(data.columns) == ["sector", "count"]

    def test_unknown_field(self, three_frame):
        assert count_by(three_frame, "colour").empty

    def test_name_override(self, three_frame):
        assert list(count_by(three_frame, "sector", name="label").columns) == ["label", "count"]


class TestScoreCounts:
    def test_scenario_intensity_after_sector_filter(self, three_frame):
        filtered = apply_filters(three_frame, FilterState(sector="Energy"))
        data = intensity_counts(filtered)
        assert data["intensity"].tolist() == [3]
        assert data["count"].tolist() == [2]

    def test_ordered_by_value(self):
        df = insights_frame([make_insight(likelihood=v) for v in [4, 1, 4, 2]])
        data = likelihood_counts(df)
        assert data["likelihood"].tolist() == [1, 2, 4]
        assert data["count"].tolist() == [1, 1, 2]

    def test_labels_are_integers(self, three_frame):
        labels = relevance_counts(three_frame)["relevance"].tolist()
        assert all(isinstance(v, int) for v in labels)

    def test_missing_scores_excluded(self):
        df = insights_frame([make_insight(intensity=""), make_insight(intensity=6)])
        assert _as_dict(intensity_counts(df)) == {6: 1}


class TestCategoryCounts:
    def test_sector_other_bucket(self):
        sectors = [f"S{i:02d}" for i in range(12) for _ in range(12 - i)]
        df = insights_frame([make_insight(sector=s) for s in sectors])
        data = sector_counts(df)
        assert len(data) == 11
        assert data["sector"].iloc[-1] == OTHER
        # S10 has 2 records, S11 has 1
        assert data["count"].iloc[-1] == 3
        assert data["count"].sum() == len(df)

    def test_existing_other_category_absorbs_remainder(self):
        sectors = ["Other"] * 5 + [f"S{i}" for i in range(10) for _ in range(4 - i // 3)]
        df = insights_frame([make_insight(sector=s) for s in sectors])
        data = sector_counts(df)
        labels = data["sector"].tolist()
        assert labels.count(OTHER) == 1
        assert len(data) == 10
        assert data["count"].sum() == len(df)
        # Other (5) plus the folded S9 (1)
        assert _as_dict(data)[OTHER] == 6

    def test_no_other_at_cutoff(self):
        df = insights_frame([make_insight(sector=f"S{i}") for i in range(10)])
        data = sector_counts(df)
        assert len(data) == 10
        assert OTHER not in data["sector"].tolist()

    def test_topic_cutoff_is_eight(self):
        df = insights_frame([make_insight(topic=f"t{i}") for i in range(9)])
        data = topic_counts(df)
        assert len(data) == 9
        assert data["topic"].iloc[-1] == OTHER
        assert data["count"].iloc[-1] == 1

    def test_missing_category_is_unknown(self):
        df = insights_frame([make_insight(pestle=""), make_insight(pestle="Economic"), make_insight(region=None)])
        assert _as_dict(pestle_counts(df))[UNKNOWN] == 1
        assert _as_dict(region_counts(df))[UNKNOWN] == 1

    def test_counts_sum_to_collection_size(self, sample_frame):
        for chart in ("sector", "topic", "pestle", "region"):
            assert CHART_AGGREGATIONS[chart](sample_frame)["count"].sum() == len(sample_frame)


class TestYearCounts:
    def test_published_fallback(self):
        df = insights_frame([
            make_insight(start_year="", published="03, June 2019, 00:00"),
            make_insight(start_year="2016"),
            make_insight(start_year="2019"),
        ])
        data = year_counts(df)
        assert data["year"].tolist() == ["2016", "2019"]
        assert data["count"].tolist() == [1, 2]

    def test_records_without_year_excluded(self):
        df = insights_frame([make_insight(start_year="", published=""), make_insight(start_year="2017")])
        assert _as_dict(year_counts(df)) == {"2017": 1}

    def test_empty(self):
        assert year_counts(insights_frame([])).empty


class TestScatterPoints:
    def test_defaults_for_missing_fields(self):
        df = insights_frame([make_insight(sector="", country="", start_year="", title="")])
        points = scatter_points(df)
        row = points.iloc[0]
        assert row["category"] == UNKNOWN
        assert row["country"] == "Global"
        assert row["start_year"] == "N/A"
        assert row["title"] == ""

    def test_color_by_pestle(self, sample_frame):
        points = scatter_points(sample_frame, color_by="pestle")
        assert set(points["category"]) <= set(sample_frame["pestle"].dropna()) | {UNKNOWN}

    def test_unplaceable_records_dropped(self):
        df = insights_frame([make_insight(likelihood=""), make_insight()])
        assert len(scatter_points(df)) == 1

    def test_bad_color_by(self, three_frame):
        with pytest.raises(ValueError):
            scatter_points(three_frame, color_by="topic")

    def test_empty(self):
        assert scatter_points(insights_frame([])).empty


class TestSummaryStats:
    def test_scenario_mean_intensity(self, three_frame):
        filtered = apply_filters(three_frame, FilterState(sector="Energy"))
        stats = summary_stats(filtered)
        assert stats["count"] == 2
        assert stats["avg_intensity"] == 3.0
        assert stats["avg_likelihood"] == 3.0
        assert stats["avg_relevance"] == 2.5

    def test_empty_collection_is_zero(self):
        stats = summary_stats(insights_frame([]))
        assert stats == {"count": 0, "avg_intensity": 0.0, "avg_likelihood": 0.0, "avg_relevance": 0.0}

    def test_missing_scores_ignored(self):
        df = insights_frame([make_insight(intensity=""), make_insight(intensity=4)])
        assert summary_stats(df)["avg_intensity"] == 4.0
