"""Tests for the Plotly chart builders."""

import plotly.graph_objects as go
import pytest

from insightboard import charts
from insightboard.insights import insights_frame

from conftest import make_insight


@pytest.fixture
def empty_frame():
    return insights_frame([])


class TestEmptyFigures:
    @pytest.mark.parametrize("name", sorted(charts.CHART_BUILDERS))
    def test_empty_collection_renders_placeholder(self, name, empty_frame):
        fig = charts.CHART_BUILDERS[name](empty_frame)
        assert isinstance(fig, go.Figure)
        assert len(fig.data) == 0
        assert fig.layout.annotations[0].text == "No insights match the current filters"


class TestBarCharts:
    def test_intensity_bars(self, three_frame):
        fig = charts.build_intensity_chart(three_frame)
        bar = fig.data[0]
        assert list(bar.x) == ["3", "7"]
        assert list(bar.y) == [2, 1]
        assert len(bar.marker.color) == 2
        assert fig.layout.title.text == "Intensity Distribution"

    def test_likelihood_and_relevance(self, three_frame):
        assert list(charts.build_likelihood_chart(three_frame).data[0].x) == ["1", "2", "4"]
        assert list(charts.build_relevance_chart(three_frame).data[0].x) == ["1", "4", "5"]

    def test_single_value_gradient(self):
        df = insights_frame([make_insight(intensity=5)])
        fig = charts.build_intensity_chart(df)
        assert len(fig.data[0].marker.color) == 1

    def test_sector_bars_horizontal(self, three_frame):
        fig = charts.build_sector_distribution(three_frame)
        bar = fig.data[0]
        assert bar.orientation == "h"
        assert list(bar.y) == ["Energy", "Health"]
        assert list(bar.x) == [2, 1]
        assert fig.layout.yaxis.autorange == "reversed"


class TestPieCharts:
    def test_topics_pie(self, three_frame):
        fig = charts.build_topics_chart(three_frame)
        pie = fig.data[0]
        assert list(pie.labels) == ["oil", "gas"]
        assert list(pie.values) == [2, 1]

    def test_pestle_donut(self, sample_frame):
        fig = charts.build_pestle_analysis(sample_frame)
        assert fig.data[0].hole == 0.5
        assert sum(fig.data[0].values) == len(sample_frame)


class TestYearTrend:
    def test_line_points(self):
        df = insights_frame([
            make_insight(start_year="2017"),
            make_insight(start_year="", published="03, June 2019, 00:00"),
        ])
        fig = charts.build_year_trend(df)
        line = fig.data[0]
        assert list(line.x) == ["2017", "2019"]
        assert list(line.y) == [1, 1]
        assert line.line.shape == "spline"


class TestScatterPlot:
    def test_one_trace_per_category(self, three_frame):
        fig = charts.build_scatter_plot(three_frame)
        assert [t.name for t in fig.data] == ["Energy", "Health"]
        assert sum(len(t.x) for t in fig.data) == 3

    def test_legend_capped(self):
        df = insights_frame([make_insight(sector=f"S{i}") for i in range(12)])
        fig = charts.build_scatter_plot(df)
        assert len(fig.data) == 12
        assert sum(1 for t in fig.data if t.showlegend) == charts.SCATTER_LEGEND_LIMIT

    def test_quadrants(self, three_frame):
        fig = charts.build_scatter_plot(three_frame)
        texts = {a.text for a in fig.layout.annotations}
        assert "High Impact, High Likelihood" in texts
        assert "Low Impact, Low Likelihood" in texts
        assert len(fig.layout.shapes) == 2

    def test_color_by_pestle(self):
        df = insights_frame([make_insight(pestle="Economic"), make_insight(pestle="Political")])
        fig = charts.build_scatter_plot(df, color_by="pestle")
        assert [t.name for t in fig.data] == ["Economic", "Political"]
        assert fig.layout.legend.title.text == "PESTLE"

    def test_bad_color_by(self, three_frame):
        with pytest.raises(ValueError):
            charts.build_scatter_plot(three_frame, color_by="region")
