from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


# ---------- Records ----------
class Insight(BaseModel):
    """One insight record. Unknown keys pass through; raw feeds leave blank scores as ""."""
    model_config = ConfigDict(extra="allow")

    intensity: Optional[Union[float, str]] = None
    likelihood: Optional[Union[float, str]] = None
    relevance: Optional[Union[float, str]] = None
    sector: Optional[str] = None
    pestle: Optional[str] = None
    topic: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    source: Optional[str] = None
    end_year: Optional[Union[str, int]] = None
    start_year: Optional[Union[str, int]] = None
    published: Optional[str] = None
    title: Optional[str] = None


# ---------- Filters ----------
class FilterOptionsResponse(BaseModel):
    end_year: List[str] = Field(default_factory=list)
    topics: List[str] = Field(default_factory=list)
    sector: List[str] = Field(default_factory=list)
    region: List[str] = Field(default_factory=list)
    pestle: List[str] = Field(default_factory=list)
    source: List[str] = Field(default_factory=list)
    country: List[str] = Field(default_factory=list)
    city: List[str] = Field(default_factory=list)
    total_records: int = 0


class FilterSummary(BaseModel):
    original_count: int
    filtered_count: int
    records_removed: int
    retention_rate: float
    active_filters: Dict[str, str] = Field(default_factory=dict)
    filter_count: int = 0


# ---------- Analytics ----------
class SummaryResponse(BaseModel):
    count: int
    avg_intensity: float
    avg_likelihood: float
    avg_relevance: float
    filters: FilterSummary


class CountItem(BaseModel):
    label: Union[str, int, float]
    count: int


class CountsResponse(BaseModel):
    chart: str
    total: int
    items: List[CountItem] = Field(default_factory=list)


class ReloadResponse(BaseModel):
    reloaded: bool
    total_records: int


class PlotlyFigureResponse(BaseModel):
    figure: Dict[str, Any]


# ---------- Maps ----------
class MapResponse(BaseModel):
    html: str
