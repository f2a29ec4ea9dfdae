"""Dashboard configuration, loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

# Endpoint serving the insight collection (JSON array)
INSIGHTS_API_URL = os.environ.get("INSIGHTS_API_URL", "http://127.0.0.1:8000/data/")
FETCH_TIMEOUT = float(os.environ.get("FETCH_TIMEOUT", "10"))

# Seconds the fetched collection stays in st.cache_data
CACHE_TTL = int(os.environ.get("CACHE_TTL", "600"))

# Country boundaries drawn under the region circles (TopoJSON or GeoJSON); empty disables them
WORLD_TOPOLOGY_URL = os.environ.get(
    "WORLD_TOPOLOGY_URL", "https://cdn.jsdelivr.net/npm/world-atlas@2/countries-110m.json"
)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
