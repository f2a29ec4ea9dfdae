"""
Insight record normalisation.
Turns raw JSON records into a DataFrame every filter and chart can rely on.
"""
from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd


NUMERIC_FIELDS = ["intensity", "likelihood", "relevance"]
TEXT_FIELDS = [
    "sector",
    "pestle",
    "topic",
    "region",
    "country",
    "city",
    "source",
    "end_year",
    "start_year",
    "published",
    "title",
]
INSIGHT_FIELDS = NUMERIC_FIELDS + TEXT_FIELDS

UNKNOWN = "Unknown"

_YEAR_RE = re.compile(r"^\d{4}$")
_ANY_YEAR_RE = re.compile(r"\b(\d{4})\b")


def _as_text(value: Any) -> Optional[str]:
    """Normalise one textual value; empty and null-like values become None."""
    if value is None:
        return None
    if isinstance(value, float):
        if not np.isfinite(value):
            return None
        if value.is_integer():
            return str(int(value))
    if isinstance(value, np.generic):
        return _as_text(value.item())
    text = str(value).strip()
    return text or None


def insights_frame(records: Optional[Iterable[Dict[str, Any]]]) -> pd.DataFrame:
    """Build a normalised DataFrame from insight records.

    Every known field is present as a column. Numeric scores are coerced to
    floats (NaN when missing or unparseable) and textual fields hold either a
    stripped string or None. Unknown keys are kept as-is.
    """
    rows: List[Dict[str, Any]] = [r for r in (records or []) if isinstance(r, dict)]
    df = pd.DataFrame.from_records(rows) if rows else pd.DataFrame()
    for col in INSIGHT_FIELDS:
        if col not in df.columns:
            df[col] = None
    for col in NUMERIC_FIELDS:
        df[col] = pd.to_numeric(df[col].replace("", np.nan), errors="coerce").astype(float)
    for col in TEXT_FIELDS:
        df[col] = pd.Series([_as_text(v) for v in df[col]], index=df.index, dtype=object)
    return df.reset_index(drop=True)


def derive_year(start_year: Any, published: Any) -> Optional[str]:
    """Year an insight belongs to on the trend chart.

    ``start_year`` wins. Otherwise ``published`` looks like
    ``"03, June 2019, 00:00"`` or ``"January, 20 2017 03:51:25"``: the second
    comma segment is split on whitespace and its first four-digit token is
    the year.
    """
    year = _as_text(start_year)
    if year:
        return year
    text = _as_text(published)
    if not text:
        return None
    parts = text.split(",")
    if len(parts) > 1:
        for token in parts[1].strip().split():
            if _YEAR_RE.match(token):
                return token
    m = _ANY_YEAR_RE.search(text)
    return m.group(1) if m else None


def year_series(df: pd.DataFrame) -> pd.Series:
    if df is None or df.empty:
        return pd.Series(dtype=object)
    years = [derive_year(s, p) for s, p in zip(df["start_year"], df["published"])]
    return pd.Series(years, index=df.index, dtype=object)


def to_records(df: Optional[pd.DataFrame]) -> List[Dict[str, Any]]:
    """DataFrame back to plain records, NaN/None fields dropped per record."""
    if df is None or df.empty:
        return []
    out = []
    for row in df.to_dict(orient="records"):
        out.append({k: v for k, v in row.items() if v is not None and not (isinstance(v, float) and np.isnan(v))})
    return out
