"""
Sidebar filtering for the insights dashboard.
Every active filter is an independent predicate; records must satisfy all of them.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Optional

import pandas as pd


# FilterState key -> Insight field it constrains
FILTER_FIELDS: Dict[str, str] = {
    "end_year": "end_year",
    "topics": "topic",
    "sector": "sector",
    "region": "region",
    "pestle": "pestle",
    "source": "source",
    "country": "country",
    "city": "city",
}

# Keys as the frontend historically named them
_KEY_ALIASES = {"endYear": "end_year", "topic": "topics"}

ALL = "all"


def _is_active(value: Optional[str]) -> bool:
    return bool(value) and value != ALL


@dataclass
class FilterState:
    end_year: str = ""
    topics: str = ""
    sector: str = ""
    region: str = ""
    pestle: str = ""
    source: str = ""
    country: str = ""
    city: str = ""

    @staticmethod
    def resolve_key(key: str) -> str:
        name = _KEY_ALIASES.get(key, key)
        if name not in FILTER_FIELDS:
            raise KeyError(f"Unknown filter: {key}")
        return name

    @classmethod
    def from_dict(cls, values: Optional[Dict[str, Any]]) -> "FilterState":
        state = cls()
        for key, value in (values or {}).items():
            state.set(key, value)
        return state

    def set(self, key: str, value: Optional[str]) -> None:
        setattr(self, self.resolve_key(key), "" if value is None else str(value))

    def clear(self) -> None:
        for f in fields(self):
            setattr(self, f.name, "")

    def active(self) -> Dict[str, str]:
        """Only the keys that currently constrain the collection."""
        return {k: v for k, v in asdict(self).items() if _is_active(v)}

    def is_empty(self) -> bool:
        return not self.active()


def apply_filters(df: pd.DataFrame, filters: Optional[FilterState]) -> pd.DataFrame:
    """Return the records of ``df`` matching every active filter.

    All keys use exact equality against their field except ``topics``, which
    is a case-insensitive substring match on ``topic``. Records missing the
    constrained field never match. The input frame is not modified.
    """
    if df is None:
        return pd.DataFrame()
    if filters is None or df.empty:
        return df.copy()

    m = pd.Series(True, index=df.index)
    for key, value in filters.active().items():
        col = FILTER_FIELDS[key]
        if col not in df.columns:
            m &= False
            continue
        series = df[col]
        present = series.notna()
        if key == "topics":
            needle = value.lower()
            contains = series.map(lambda v: v is not None and needle in str(v).lower()).astype(bool)
            m &= present & contains
        else:
            m &= present & (series.astype(str) == value)
    return df[m].copy()


def unique_values(df: pd.DataFrame, field: str) -> List[str]:
    """Distinct non-empty values of ``field`` in first-occurrence order."""
    if df is None or df.empty or field not in df.columns:
        return []
    series = df[field].dropna().astype(str)
    series = series[series.str.strip() != ""]
    return list(dict.fromkeys(series.tolist()))


def filter_options(df: pd.DataFrame) -> Dict[str, List[str]]:
    """Dropdown options for every filter key."""
    return {key: unique_values(df, col) for key, col in FILTER_FIELDS.items()}


def get_filter_summary(
    df_original: Optional[pd.DataFrame],
    df_filtered: Optional[pd.DataFrame],
    filters: Optional[FilterState],
) -> dict:
    """Impact of the active filters on the collection size."""
    original_count = len(df_original) if df_original is not None else 0
    filtered_count = len(df_filtered) if df_filtered is not None else 0
    active_filters = filters.active() if filters is not None else {}

    return {
        "original_count": original_count,
        "filtered_count": filtered_count,
        "records_removed": original_count - filtered_count,
        "retention_rate": (filtered_count / original_count * 100) if original_count > 0 else 0,
        "active_filters": active_filters,
        "filter_count": len(active_filters),
    }


def describe_filtered(summary: dict) -> str:
    if summary["filtered_count"] == summary["original_count"]:
        return "Showing all insights"
    return f"Filtered from {summary['original_count']} total"
