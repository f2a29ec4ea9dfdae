from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

import pandas as pd

from . import aggregations
from .config import INSIGHTS_API_URL
from .filters import FILTER_FIELDS, FilterState, apply_filters, get_filter_summary, unique_values
from .insights import insights_frame
from .loader import fetch_insights

logger = logging.getLogger(__name__)


class InsightsController:
    """Holds the fetched collection and the sidebar filters for one session.

    The base collection is written once by ``load`` (or ``set_records``) and
    only read afterwards. Every filter change recomputes ``filtered`` from
    the base; nothing is updated incrementally.
    """

    def __init__(self, api_url: str = INSIGHTS_API_URL):
        self.api_url = api_url
        self.filters = FilterState()
        self._base = insights_frame([])
        self.filtered = self._base
        self.loaded = False

    @property
    def base(self) -> pd.DataFrame:
        return self._base

    def load(self, fetch: Optional[Callable[..., List[Dict[str, Any]]]] = None, **fetch_kwargs) -> pd.DataFrame:
        """Fetch the collection from ``api_url``; on failure the base stays empty.

        ``fetch`` replaces ``fetch_insights``, e.g. with a cached wrapper.
        """
        if self.loaded:
            logger.debug("Insights already loaded, skipping fetch")
            return self._base
        fetch = fetch or fetch_insights
        return self.set_records(fetch(self.api_url, **fetch_kwargs))

    def set_records(self, records: Optional[Iterable[Dict[str, Any]]]) -> pd.DataFrame:
        self._base = insights_frame(records)
        self.loaded = True
        self._refresh()
        return self._base

    def set_filter(self, key: str, value: Optional[str]) -> pd.DataFrame:
        self.filters.set(key, value)
        return self._refresh()

    def update_filters(self, values: Dict[str, Optional[str]]) -> pd.DataFrame:
        for key, value in values.items():
            self.filters.set(key, value)
        return self._refresh()

    def clear_filters(self) -> pd.DataFrame:
        self.filters.clear()
        return self._refresh()

    def options(self, key: str) -> List[str]:
        """Dropdown values for one filter key, taken from the unfiltered base."""
        return unique_values(self._base, FILTER_FIELDS[FilterState.resolve_key(key)])

    def summary(self) -> dict:
        stats = aggregations.summary_stats(self.filtered)
        stats.update(get_filter_summary(self._base, self.filtered, self.filters))
        return stats

    def _refresh(self) -> pd.DataFrame:
        self.filtered = apply_filters(self._base, self.filters)
        return self.filtered
