"""
Filters Router
Dropdown options for every sidebar filter, plus the query-parameter parser shared by other routers.
"""
from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from insightboard.filters import FILTER_FIELDS, FilterState, filter_options, unique_values

from ..models.schemas import FilterOptionsResponse
from ..services import store


router = APIRouter(prefix="/filters", tags=["filters"])


def filter_state(
    end_year: str = Query("", description="Exact end year"),
    topics: str = Query("", description="Case-insensitive topic substring"),
    sector: str = Query(""),
    region: str = Query(""),
    pestle: str = Query(""),
    source: str = Query(""),
    country: str = Query(""),
    city: str = Query(""),
) -> FilterState:
    """FilterState from query parameters; empty or "all" means unconstrained."""
    return FilterState(
        end_year=end_year,
        topics=topics,
        sector=sector,
        region=region,
        pestle=pestle,
        source=source,
        country=country,
        city=city,
    )


@router.get("/options", response_model=FilterOptionsResponse)
async def get_filter_options():
    """
    Unique values for every filter key, in first-occurrence order.

    Example:
        GET /filters/options
    """
    df = store.get_insights_df()
    return FilterOptionsResponse(**filter_options(df), total_records=len(df))


@router.get("/options/{key}")
async def get_filter_values(key: str):
    try:
        name = FilterState.resolve_key(key)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown filter '{key}'")
    values = unique_values(store.get_insights_df(), FILTER_FIELDS[name])
    return {"filter": name, "values": values, "count": len(values)}
