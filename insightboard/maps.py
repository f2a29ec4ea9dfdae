import math
from typing import Optional

import folium
import pandas as pd
from plotly.colors import sample_colorscale

from .aggregations import region_counts


# Region name -> (lon, lat) anchor for its circle
REGION_COORDINATES = {
    "Northern America": (-100, 40),
    "South America": (-60, -20),
    "Europe": (15, 50),
    "Asia": (100, 30),
    "Africa": (20, 0),
    "World": (0, 0),
    "Oceania": (130, -25),
}

RADIUS_SCALE = 5
MIN_ZOOM, MAX_ZOOM = 1, 8

# world-atlas keeps country shapes under objects.countries
TOPOLOGY_OBJECT = "countries"


def _country_style(_feature):
    return {"fillColor": "#e5e7eb", "color": "#d1d5db", "weight": 0.5, "fillOpacity": 0.6}


def region_markers(df: pd.DataFrame) -> pd.DataFrame:
    """Per-region circle geometry: area grows linearly with the insight count.

    Regions without a known anchor (including "Unknown") are counted but not drawn.
    """
    cols = ["region", "count", "lat", "lon", "radius", "color"]
    counts = region_counts(df)
    counts = counts[counts["region"].isin(list(REGION_COORDINATES))]
    if counts.empty:
        return pd.DataFrame(columns=cols)
    max_count = int(counts["count"].max()) or 1
    colors = sample_colorscale("Blues", [c / max_count for c in counts["count"]])
    return pd.DataFrame({
        "region": counts["region"].tolist(),
        "count": counts["count"].astype(int).tolist(),
        "lat": [REGION_COORDINATES[r][1] for r in counts["region"]],
        "lon": [REGION_COORDINATES[r][0] for r in counts["region"]],
        "radius": [math.sqrt(c) * RADIUS_SCALE for c in counts["count"]],
        "color": colors,
    }, columns=cols)


def build_region_map(df: pd.DataFrame, world: Optional[dict] = None) -> folium.Map:
    m = folium.Map(
        location=[20, 0],
        zoom_start=MIN_ZOOM + 1,
        min_zoom=MIN_ZOOM,
        max_zoom=MAX_ZOOM,
        tiles="CartoDB Positron",
        world_copy_jump=True,
        control_scale=True,
    )

    if world and world.get("type") == "Topology":
        if TOPOLOGY_OBJECT in (world.get("objects") or {}):
            folium.TopoJson(
                world,
                f"objects.{TOPOLOGY_OBJECT}",
                name="Countries",
                style_function=_country_style,
            ).add_to(m)
    elif world:
        folium.GeoJson(world, name="Countries", style_function=_country_style).add_to(m)

    markers = region_markers(df)
    if markers.empty:
        return m

    css = """
    <style>
        .region-label {font-size: 10px; color: #111827; text-align: center; white-space: nowrap; transform: translateX(-50%);}
    </style>
    """
    m.get_root().header.add_child(folium.Element(css))

    fg = folium.FeatureGroup(name="Insights by Region", show=True)
    for _, r in markers.iterrows():
        folium.CircleMarker(
            location=[float(r["lat"]), float(r["lon"])],
            radius=float(r["radius"]),
            color="#fff",
            weight=1,
            fill=True,
            fill_color=r["color"],
            fill_opacity=0.8,
            tooltip=f"{r['region']}: {int(r['count'])}",
        ).add_to(fg)
        # label sits just below the circle
        folium.Marker(
            location=[float(r["lat"]), float(r["lon"])],
            icon=folium.DivIcon(
                html=f"<div class='region-label' style='margin-top:{int(r['radius']) + 4}px'>{r['region']}</div>",
                icon_size=(0, 0),
            ),
        ).add_to(fg)
    fg.add_to(m)

    folium.LayerControl().add_to(m)
    return m


def build_region_map_html(df: pd.DataFrame, world: Optional[dict] = None) -> str:
    return build_region_map(df, world).get_root().render()
