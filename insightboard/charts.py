from __future__ import annotations

from typing import List, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from plotly.colors import sample_colorscale

from . import aggregations as agg


CATEGORY10 = px.colors.qualitative.D3
SET2 = px.colors.qualitative.Set2

INTENSITY_GRADIENT = ("#60a5fa", "#2563eb")
LIKELIHOOD_GRADIENT = ("#10b981", "#047857")
RELEVANCE_GRADIENT = ("#f59e0b", "#d97706")
TREND_COLOR = "#3b82f6"

SCATTER_LEGEND_LIMIT = 10
# Quadrant split: middle of the likelihood (1-5) and intensity (1-10) scales
LIKELIHOOD_MID = 3
INTENSITY_MID = 5


def _gradient(colors: Sequence[str], values: Sequence[float], lo: float, hi: float) -> List[str]:
    """Map each value linearly onto a two-colour gradient over [lo, hi]."""
    span = hi - lo
    points = []
    for v in values:
        t = (float(v) - lo) / span if span else 0.0
        points.append(min(max(t, 0.0), 1.0))
    if not points:
        return []
    return sample_colorscale([[0.0, colors[0]], [1.0, colors[1]]], points)


def _palette(colors: Sequence[str], n: int) -> List[str]:
    return [colors[i % len(colors)] for i in range(n)]


def _style(fig: go.Figure, title: str, height: int = 320) -> go.Figure:
    fig.update_layout(
        title={"text": title, "x": 0.01, "xanchor": "left"},
        template="plotly_white",
        height=height,
        margin=dict(t=50, l=40, r=30, b=40),
    )
    return fig


def empty_figure(title: str, message: str = "No insights match the current filters") -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(text=message, x=0.5, y=0.5, xref="paper", yref="paper", showarrow=False, font=dict(size=13, color="#6b7280"))
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    return _style(fig, title)


def _score_bar(data: pd.DataFrame, field: str, colors: List[str], title: str, x_title: str) -> go.Figure:
    fig = go.Figure(go.Bar(
        x=data[field].astype(str),
        y=data["count"],
        marker=dict(color=colors),
        hovertemplate=f"{x_title} %{{x}}: %{{y}}<extra></extra>",
    ))
    fig.update_xaxes(title_text=x_title, type="category")
    fig.update_yaxes(title_text="Frequency")
    return _style(fig, title)


def build_intensity_chart(df: pd.DataFrame) -> go.Figure:
    title = "Intensity Distribution"
    data = agg.intensity_counts(df)
    if data.empty:
        return empty_figure(title)
    values = data["intensity"].astype(float)
    colors = _gradient(INTENSITY_GRADIENT, values, values.min(), values.max())
    return _score_bar(data, "intensity", colors, title, "Intensity")


def build_likelihood_chart(df: pd.DataFrame) -> go.Figure:
    title = "Likelihood Analysis"
    data = agg.likelihood_counts(df)
    if data.empty:
        return empty_figure(title)
    colors = _gradient(LIKELIHOOD_GRADIENT, data["likelihood"].astype(float), 1, 5)
    return _score_bar(data, "likelihood", colors, title, "Likelihood")


def build_relevance_chart(df: pd.DataFrame) -> go.Figure:
    title = "Relevance Distribution"
    data = agg.relevance_counts(df)
    if data.empty:
        return empty_figure(title)
    colors = _gradient(RELEVANCE_GRADIENT, data["relevance"].astype(float), 1, 5)
    return _score_bar(data, "relevance", colors, title, "Relevance")


def build_topics_chart(df: pd.DataFrame) -> go.Figure:
    title = "Topics Distribution"
    data = agg.topic_counts(df)
    if data.empty:
        return empty_figure(title)
    fig = go.Figure(go.Pie(
        labels=data["topic"],
        values=data["count"],
        sort=False,
        marker=dict(colors=_palette(CATEGORY10, len(data)), line=dict(color="white", width=2)),
        textinfo="label",
        textposition="outside",
        hovertemplate="%{label}: %{value}<extra></extra>",
    ))
    fig.update_layout(legend=dict(title_text="Topic"))
    return _style(fig, title)


def build_year_trend(df: pd.DataFrame) -> go.Figure:
    title = "Year Trend Analysis"
    data = agg.year_counts(df)
    if data.empty:
        return empty_figure(title)
    fig = go.Figure(go.Scatter(
        x=data["year"],
        y=data["count"],
        mode="lines+markers",
        line=dict(color=TREND_COLOR, width=2, shape="spline"),
        marker=dict(color=TREND_COLOR, size=10),
        hovertemplate="%{x}: %{y} insights<extra></extra>",
    ))
    fig.update_xaxes(title_text="Year", type="category")
    fig.update_yaxes(title_text="Number of Insights", rangemode="tozero", showgrid=True)
    return _style(fig, title)


def build_sector_distribution(df: pd.DataFrame) -> go.Figure:
    title = "Sector Distribution"
    data = agg.sector_counts(df)
    if data.empty:
        return empty_figure(title)
    fig = go.Figure(go.Bar(
        x=data["count"],
        y=data["sector"],
        orientation="h",
        marker=dict(color=_palette(CATEGORY10, len(data))),
        hovertemplate="%{y}: %{x}<extra></extra>",
    ))
    fig.update_xaxes(title_text="Number of Insights")
    # largest sector on top
    fig.update_yaxes(autorange="reversed", automargin=True)
    return _style(fig, title)


def build_pestle_analysis(df: pd.DataFrame) -> go.Figure:
    title = "PESTLE Analysis"
    data = agg.pestle_counts(df)
    if data.empty:
        return empty_figure(title)
    fig = go.Figure(go.Pie(
        labels=data["pestle"],
        values=data["count"],
        hole=0.5,
        sort=False,
        marker=dict(colors=_palette(SET2, len(data)), line=dict(color="white", width=2)),
        hovertemplate="%{label}: %{value} (%{percent})<extra></extra>",
    ))
    return _style(fig, title)


def build_scatter_plot(df: pd.DataFrame, color_by: str = "sector") -> go.Figure:
    """Intensity vs. likelihood, one marker per insight, split into risk quadrants."""
    title = "Intensity vs. Likelihood Analysis"
    points = agg.scatter_points(df, color_by=color_by)
    if points.empty:
        return empty_figure(title)

    label = "Sector" if color_by == "sector" else "PESTLE"
    categories = list(dict.fromkeys(points["category"].tolist()))
    fig = go.Figure()
    for i, category in enumerate(categories):
        sub = points[points["category"] == category]
        short = [t[:50] + ("..." if len(t) > 50 else "") for t in sub["title"]]
        fig.add_trace(go.Scatter(
            x=sub["likelihood"],
            y=sub["intensity"],
            mode="markers",
            name=str(category),
            showlegend=i < SCATTER_LEGEND_LIMIT,
            marker=dict(size=12, color=CATEGORY10[i % len(CATEGORY10)], opacity=0.7, line=dict(color="#fff", width=1)),
            customdata=list(zip(short, [category] * len(sub), sub["country"], sub["start_year"])),
            hovertemplate=(
                "<b>Title:</b> %{customdata[0]}<br>"
                "<b>Intensity:</b> %{y}<br>"
                "<b>Likelihood:</b> %{x}<br>"
                f"<b>{label}:</b> %{{customdata[1]}}<br>"
                "<b>Country:</b> %{customdata[2]}<br>"
                "<b>Year:</b> %{customdata[3]}<extra></extra>"
            ),
        ))

    x_max = float(points["likelihood"].max()) or 5.0
    y_max = float(points["intensity"].max()) or 10.0
    fig.add_vline(x=LIKELIHOOD_MID, line=dict(color="gray", dash="dash", width=1))
    fig.add_hline(y=INTENSITY_MID, line=dict(color="gray", dash="dash", width=1))
    quadrants = [
        ("High Impact, Low Likelihood", LIKELIHOOD_MID, INTENSITY_MID, "right", "bottom"),
        ("High Impact, High Likelihood", LIKELIHOOD_MID, INTENSITY_MID, "left", "bottom"),
        ("Low Impact, Low Likelihood", LIKELIHOOD_MID, INTENSITY_MID, "right", "top"),
        ("Low Impact, High Likelihood", LIKELIHOOD_MID, INTENSITY_MID, "left", "top"),
    ]
    for text, x, y, xanchor, yanchor in quadrants:
        fig.add_annotation(
            text=text, x=x, y=y, xanchor=xanchor, yanchor=yanchor,
            xshift=-10 if xanchor == "right" else 10,
            yshift=10 if yanchor == "bottom" else -10,
            showarrow=False, font=dict(size=10, color="gray"),
        )
    fig.update_xaxes(title_text="Likelihood", range=[0, max(x_max, LIKELIHOOD_MID) + 0.5])
    fig.update_yaxes(title_text="Intensity", range=[0, max(y_max, INTENSITY_MID) + 1])
    fig.update_layout(legend=dict(title_text=label))
    return _style(fig, title, height=560)


CHART_BUILDERS = {
    "intensity": build_intensity_chart,
    "likelihood": build_likelihood_chart,
    "relevance": build_relevance_chart,
    "year": build_year_trend,
    "sector": build_sector_distribution,
    "topic": build_topics_chart,
    "pestle": build_pestle_analysis,
    "scatter": build_scatter_plot,
}
