"""
Aggregations behind every dashboard chart.
All grouping goes through count_by; the per-chart helpers only choose the field,
the ordering and the "Other" cutoff.
"""
from __future__ import annotations

from typing import Callable, Dict, Optional

import pandas as pd

from .insights import UNKNOWN, year_series


SECTOR_TOP_N = 10
TOPIC_TOP_N = 8
OTHER = "Other"

SCATTER_COLOR_FIELDS = ("sector", "pestle")


def _tidy_number(v):
    if isinstance(v, float) and v.is_integer():
        return int(v)
    return v


def count_by(
    df: Optional[pd.DataFrame],
    field: Optional[str] = None,
    *,
    values: Optional[pd.Series] = None,
    name: Optional[str] = None,
    fill: Optional[str] = None,
    sort: Optional[str] = "count",
    top_n: Optional[int] = None,
    other_label: str = OTHER,
) -> pd.DataFrame:
    """Group records by one value and count each group.

    Args:
        df: Normalised insights frame.
        field: Column to group by. Ignored when ``values`` is given.
        values: Pre-computed grouping key per record (e.g. derived year).
        name: Name of the key column in the result; defaults to ``field``.
        fill: Label for missing values. When None, records without a value
            are left out of the grouping.
        sort: ``"count"`` for descending counts (ties keep first-occurrence
            order), ``"value"`` for the key's natural order, None to keep
            first-occurrence order.
        top_n: Keep this many groups and fold the rest into ``other_label``,
            merging into an existing group of that name.

    Returns:
        DataFrame with columns ``[name, "count"]``.
    """
    key = name or field or "value"
    if values is None:
        if df is None or df.empty or field not in df.columns:
            return pd.DataFrame({key: [], "count": []}).astype({"count": int})
        values = df[field]

    series = values.astype(object)
    if fill is not None:
        missing = series.isna() | (series.astype(str).str.strip() == "")
        series = series.where(~missing, fill)
    else:
        series = series.dropna()
    if series.empty:
        return pd.DataFrame({key: [], "count": []}).astype({"count": int})

    counts = series.groupby(series, sort=False).size()
    if sort == "count":
        counts = counts.sort_values(ascending=False, kind="stable")
    elif sort == "value":
        counts = counts.sort_index()

    labels = [_tidy_number(v) for v in counts.index.tolist()]
    sizes = [int(c) for c in counts.tolist()]
    if top_n is not None and len(labels) > top_n:
        other_count = sum(sizes[top_n:])
        labels, sizes = labels[:top_n], sizes[:top_n]
        # an existing "Other" group absorbs the folded ones
        if other_label in labels:
            sizes[labels.index(other_label)] += other_count
        else:
            labels.append(other_label)
            sizes.append(other_count)

    return pd.DataFrame({key: labels, "count": sizes})


def intensity_counts(df: pd.DataFrame) -> pd.DataFrame:
    return count_by(df, "intensity", sort="value")


def likelihood_counts(df: pd.DataFrame) -> pd.DataFrame:
    return count_by(df, "likelihood", sort="value")


def relevance_counts(df: pd.DataFrame) -> pd.DataFrame:
    return count_by(df, "relevance", sort="value")


def year_counts(df: pd.DataFrame) -> pd.DataFrame:
    """Insights per year, years in lexicographic order."""
    if df is None or df.empty:
        return count_by(None, "year")
    return count_by(df, values=year_series(df), name="year", sort="value")


def sector_counts(df: pd.DataFrame, top_n: int = SECTOR_TOP_N) -> pd.DataFrame:
    return count_by(df, "sector", fill=UNKNOWN, top_n=top_n)


def topic_counts(df: pd.DataFrame, top_n: int = TOPIC_TOP_N) -> pd.DataFrame:
    return count_by(df, "topic", fill=UNKNOWN, top_n=top_n)


def pestle_counts(df: pd.DataFrame) -> pd.DataFrame:
    return count_by(df, "pestle", fill=UNKNOWN)


def region_counts(df: pd.DataFrame) -> pd.DataFrame:
    return count_by(df, "region", fill=UNKNOWN)


CHART_AGGREGATIONS: Dict[str, Callable[[pd.DataFrame], pd.DataFrame]] = {
    "intensity": intensity_counts,
    "likelihood": likelihood_counts,
    "relevance": relevance_counts,
    "year": year_counts,
    "sector": sector_counts,
    "topic": topic_counts,
    "pestle": pestle_counts,
    "region": region_counts,
}


def scatter_points(df: pd.DataFrame, color_by: str = "sector") -> pd.DataFrame:
    """One point per insight at (likelihood, intensity), keyed for colour.

    Records lacking either coordinate cannot be placed and are dropped.
    """
    if color_by not in SCATTER_COLOR_FIELDS:
        raise ValueError(f"color_by must be one of {SCATTER_COLOR_FIELDS}, got {color_by!r}")
    cols = ["likelihood", "intensity", "category", "title", "country", "start_year"]
    if df is None or df.empty:
        return pd.DataFrame(columns=cols)

    points = df.dropna(subset=["likelihood", "intensity"])
    out = pd.DataFrame({
        "likelihood": points["likelihood"].astype(float),
        "intensity": points["intensity"].astype(float),
        "category": points[color_by].where(points[color_by].notna(), UNKNOWN),
        "title": points["title"].fillna(""),
        "country": points["country"].where(points["country"].notna(), "Global"),
        "start_year": points["start_year"].where(points["start_year"].notna(), "N/A"),
    })
    return out.reset_index(drop=True)


def _mean(df: pd.DataFrame, col: str) -> float:
    if df is None or df.empty or col not in df.columns:
        return 0.0
    values = pd.to_numeric(df[col], errors="coerce").dropna()
    if values.empty:
        return 0.0
    return float(values.mean())


def summary_stats(df: Optional[pd.DataFrame]) -> Dict[str, float]:
    """Record count and mean scores; every mean is 0 for an empty collection."""
    return {
        "count": int(len(df)) if df is not None else 0,
        "avg_intensity": _mean(df, "intensity"),
        "avg_likelihood": _mean(df, "likelihood"),
        "avg_relevance": _mean(df, "relevance"),
    }
