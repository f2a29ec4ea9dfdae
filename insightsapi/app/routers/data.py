from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from insightboard.filters import FilterState, apply_filters
from insightboard.insights import to_records

from ..models.schemas import Insight, ReloadResponse
from ..services import store
from ..services.json_utils import to_native_json
from .filters import filter_state

router = APIRouter(tags=["data"])


@router.get("/data/", response_model=List[Insight], response_model_exclude_unset=True)
async def list_insights():
    """The full insight collection, as stored."""
    return to_native_json(store.get_records())


@router.get("/data/filtered", response_model=List[Insight], response_model_exclude_unset=True)
async def list_filtered_insights(filters: FilterState = Depends(filter_state)):
    """Insights matching the given filters, normalised (empty fields dropped)."""
    df = apply_filters(store.get_insights_df(), filters)
    return to_native_json(to_records(df))


@router.get("/data/reload", response_model=ReloadResponse)
async def reload_insights():
    """Clear the cached collection and read the data file from disk again."""
    return ReloadResponse(reloaded=True, total_records=store.reload())
