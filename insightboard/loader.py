"""
Fetching the insight collection.
Failures never raise: they are logged and the dashboard falls back to an empty collection.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import FETCH_TIMEOUT

logger = logging.getLogger(__name__)


def _unwrap(payload: Any) -> Optional[List[Dict[str, Any]]]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ("data", "records", "insights"):
            if isinstance(payload.get(key), list):
                return payload[key]
    return None


def fetch_insights(
    url: str,
    *,
    timeout: float = FETCH_TIMEOUT,
    transport: Optional[httpx.BaseTransport] = None,
) -> List[Dict[str, Any]]:
    """GET the insight collection from ``url``.

    Returns the list of raw records, or an empty list when the request fails
    or the body is not a JSON array of records.
    """
    try:
        with httpx.Client(timeout=timeout, transport=transport) as client:
            resp = client.get(url)
            resp.raise_for_status()
            payload = resp.json()
    except httpx.HTTPError as e:
        logger.error("Error fetching insights from %s: %s", url, e)
        return []
    except ValueError as e:
        logger.error("Insights endpoint %s returned invalid JSON: %s", url, e)
        return []

    records = _unwrap(payload)
    if records is None:
        logger.error("Insights endpoint %s returned %s, expected a list", url, type(payload).__name__)
        return []
    logger.info("Fetched %d insights from %s", len(records), url)
    return records


def load_insights_file(file) -> List[Dict[str, Any]]:
    """Read an uploaded JSON export (path or file-like); invalid content yields []."""
    try:
        if hasattr(file, "read"):
            # uploads are re-read on every rerun; getvalue ignores the stream position
            raw = file.getvalue() if hasattr(file, "getvalue") else file.read()
            payload = json.loads(raw.decode("utf-8") if isinstance(raw, bytes) else raw)
        else:
            with open(file, "r", encoding="utf-8") as f:
                payload = json.load(f)
    except (OSError, ValueError) as e:
        logger.error("Could not read insights file %s: %s", getattr(file, "name", file), e)
        return []

    records = _unwrap(payload)
    if records is None:
        logger.error("Insights file %s does not contain a list of records", getattr(file, "name", file))
        return []
    return records


def fetch_world_geometry(url: str, *, timeout: float = FETCH_TIMEOUT, transport: Optional[httpx.BaseTransport] = None) -> Optional[dict]:
    """Country boundaries for the region map (TopoJSON or GeoJSON); None when unavailable."""
    if not url:
        return None
    try:
        with httpx.Client(timeout=timeout, transport=transport, follow_redirects=True) as client:
            resp = client.get(url)
            resp.raise_for_status()
            geo = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("World geometry unavailable from %s: %s", url, e)
        return None
    if not isinstance(geo, dict) or geo.get("type") not in ("Topology", "FeatureCollection", "Feature"):
        logger.warning("World geometry at %s is neither TopoJSON nor GeoJSON", url)
        return None
    return geo
