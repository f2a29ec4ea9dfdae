from fastapi import APIRouter, Depends

from insightboard.filters import FilterState, apply_filters
from insightboard.maps import build_region_map_html

from ..models.schemas import MapResponse
from ..services import store
from .filters import filter_state


router = APIRouter(prefix="/maps", tags=["maps"])


@router.get("/regions", response_model=MapResponse)
async def region_map(filters: FilterState = Depends(filter_state)):
    df = apply_filters(store.get_insights_df(), filters)
    return MapResponse(html=build_region_map_html(df))
