import logging

import plotly.express as px
import plotly.io as pio
import streamlit as st
import streamlit.components.v1 as components

from insightboard import charts
from insightboard.aggregations import SCATTER_COLOR_FIELDS
from insightboard.config import CACHE_TTL, INSIGHTS_API_URL, LOG_LEVEL, WORLD_TOPOLOGY_URL
from insightboard.controller import InsightsController
from insightboard.filters import ALL, describe_filtered
from insightboard.loader import fetch_insights, fetch_world_geometry, load_insights_file
from insightboard.maps import build_region_map_html

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

pio.templates.default = "plotly_white"
px.defaults.template = "plotly_white"

st.set_page_config(
    page_title="Global Insights Dashboard",
    page_icon="🌍",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
    <style>
    .block-container { padding-top: 1rem !important; padding-bottom: 0.75rem !important; }
    [data-testid="stMetricValue"] { font-size: 1.6rem; }
    .stTabs [data-baseweb="tab-list"] { gap: 4px; border-bottom: 1px solid #E5E7EB; }
    .stTabs [aria-selected="true"] { border-bottom: 2px solid #2563eb !important; }
    </style>
""", unsafe_allow_html=True)

# (filter key, sidebar label, "all" option label)
SIDEBAR_FILTERS = [
    ("end_year", "End Year", "All Years"),
    ("topics", "Topics", "All Topics"),
    ("sector", "Sector", "All Sectors"),
    ("region", "Region", "All Regions"),
    ("pestle", "PEST", "All Categories"),
    ("source", "Source", "All Sources"),
    ("country", "Country", "All Countries"),
    ("city", "City", "All Cities"),
]


@st.cache_data(ttl=CACHE_TTL, show_spinner="Loading insights...")
def load_records(url: str):
    return fetch_insights(url)


@st.cache_data(show_spinner=False)
def load_world_geometry(url: str):
    return fetch_world_geometry(url)


def _clear_filters():
    for key, _, _ in SIDEBAR_FILTERS:
        st.session_state[f"filter_{key}"] = ALL


# Sidebar: data source
with st.sidebar:
    st.header("📁 Data")
    uploaded_file = st.file_uploader(
        "Upload insights export (.json)",
        type=["json"],
        help="Leave empty to load from the insights API",
    )
    st.caption(f"API: {INSIGHTS_API_URL}")
    st.markdown("---")

controller = InsightsController(INSIGHTS_API_URL)
if uploaded_file is not None:
    controller.set_records(load_insights_file(uploaded_file))
else:
    controller.load(fetch=load_records)

# Sidebar: filters
with st.sidebar:
    st.header("🎛️ Filters")
    st.caption("Refine dashboard data")
    selections = {}
    for key, label, all_label in SIDEBAR_FILTERS:
        values = controller.options(key)
        # nothing to choose from: the feed carries no such field
        if not values and key == "city":
            continue
        selections[key] = st.selectbox(
            label,
            options=[ALL] + values,
            format_func=lambda v, _all=all_label: _all if v == ALL else v,
            key=f"filter_{key}",
        )
    st.button("Clear Filters", on_click=_clear_filters, use_container_width=True)

filtered_df = controller.update_filters(selections)
summary = controller.summary()

st.title("Global Insights Dashboard")

c1, c2, c3, c4 = st.columns(4)
with c1:
    st.metric("Total Insights", f"{summary['count']:,}")
    st.caption(describe_filtered(summary))
with c2:
    st.metric("Avg. Intensity", f"{summary['avg_intensity']:.1f}")
    st.caption("Scale: 1-10")
with c3:
    st.metric("Avg. Likelihood", f"{summary['avg_likelihood']:.1f}")
    st.caption("Scale: 1-5")
with c4:
    st.metric("Avg. Relevance", f"{summary['avg_relevance']:.1f}")
    st.caption("Scale: 1-5")

tab_charts, tab_map, tab_analysis = st.tabs(["📊 Charts", "🌍 Geographic", "⚠️ Risk Analysis"])

with tab_charts:
    grid = [
        (charts.build_intensity_chart, charts.build_likelihood_chart),
        (charts.build_topics_chart, charts.build_year_trend),
        (charts.build_sector_distribution, charts.build_pestle_analysis),
        (charts.build_relevance_chart, None),
    ]
    for left, right in grid:
        col_l, col_r = st.columns(2)
        with col_l:
            st.plotly_chart(left(filtered_df), use_container_width=True)
        if right is not None:
            with col_r:
                st.plotly_chart(right(filtered_df), use_container_width=True)

with tab_map:
    st.subheader("Regional Distribution")
    st.caption("Insights by geographic region")
    world = load_world_geometry(WORLD_TOPOLOGY_URL) if WORLD_TOPOLOGY_URL else None
    components.html(build_region_map_html(filtered_df, world), height=600, scrolling=False)

with tab_analysis:
    col_title, col_color = st.columns([3, 1])
    with col_title:
        st.caption("Identify high-risk events for strategic prioritization")
    with col_color:
        color_by = st.selectbox(
            "Color by",
            options=list(SCATTER_COLOR_FIELDS),
            format_func=lambda v: "Color by Sector" if v == "sector" else "Color by PESTLE",
            key="color_by",
        )
    st.plotly_chart(charts.build_scatter_plot(filtered_df, color_by=color_by), use_container_width=True)
