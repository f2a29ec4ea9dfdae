from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from insightboard.insights import insights_frame

from .. import config

logger = logging.getLogger(__name__)


def read_records(path: Path) -> List[Dict[str, Any]]:
    """Read a JSON array of insight records.
    A missing or unreadable file yields an empty list.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except FileNotFoundError:
        logger.warning("Insights file not found at %s", path)
        return []
    except (OSError, ValueError) as e:
        logger.warning("Insights file %s is unreadable: %s", path, e)
        return []
    if not isinstance(payload, list):
        logger.warning("Insights file %s does not hold a JSON array", path)
        return []
    records = [r for r in payload if isinstance(r, dict)]
    logger.info("Loaded %d insights from %s", len(records), path)
    return records


@lru_cache(maxsize=1)
def load_default_records() -> List[Dict[str, Any]]:
    return read_records(config.INSIGHTS_DATA_PATH)


def get_records() -> List[Dict[str, Any]]:
    return load_default_records()


def get_insights_df() -> pd.DataFrame:
    return insights_frame(get_records())


def reload() -> int:
    """Drop the cached collection and read the data file again."""
    load_default_records.cache_clear()
    return len(load_default_records())
