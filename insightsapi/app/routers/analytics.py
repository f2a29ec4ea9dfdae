from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from insightboard import charts
from insightboard.aggregations import CHART_AGGREGATIONS, SCATTER_COLOR_FIELDS, summary_stats
from insightboard.filters import FilterState, apply_filters, get_filter_summary

from ..models.schemas import CountItem, CountsResponse, PlotlyFigureResponse, SummaryResponse
from ..services import store
from ..services.json_utils import to_native_json
from .filters import filter_state


router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/summary", response_model=SummaryResponse)
async def summary(filters: FilterState = Depends(filter_state)):
    """Record count and mean scores of the filtered collection."""
    base = store.get_insights_df()
    filtered = apply_filters(base, filters)
    stats = summary_stats(filtered)
    return SummaryResponse(**stats, filters=get_filter_summary(base, filtered, filters))


@router.get("/counts/{chart}", response_model=CountsResponse)
async def chart_counts(chart: str, filters: FilterState = Depends(filter_state)):
    """
    Grouped counts behind one chart.

    Example:
        GET /analytics/counts/sector?region=Asia
    """
    aggregate = CHART_AGGREGATIONS.get(chart)
    if aggregate is None:
        raise HTTPException(status_code=404, detail=f"Unknown chart '{chart}'")
    data = aggregate(apply_filters(store.get_insights_df(), filters))
    key = data.columns[0]
    items = [CountItem(label=to_native_json(row[key]), count=int(row["count"])) for _, row in data.iterrows()]
    return CountsResponse(chart=chart, total=int(data["count"].sum()) if not data.empty else 0, items=items)


@router.get("/figures/{chart}", response_model=PlotlyFigureResponse)
async def chart_figure(
    chart: str,
    filters: FilterState = Depends(filter_state),
    color_by: str = Query("sector", description="Scatter colour key: sector or pestle"),
):
    builder = charts.CHART_BUILDERS.get(chart)
    if builder is None:
        raise HTTPException(status_code=404, detail=f"Unknown chart '{chart}'")
    df = apply_filters(store.get_insights_df(), filters)
    if chart == "scatter":
        if color_by not in SCATTER_COLOR_FIELDS:
            raise HTTPException(status_code=422, detail=f"color_by must be one of {list(SCATTER_COLOR_FIELDS)}")
        fig = builder(df, color_by=color_by)
    else:
        fig = builder(df)
    return JSONResponse(content={"figure": to_native_json(fig.to_plotly_json())})
