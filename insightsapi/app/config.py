"""Insights data service configuration, loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

APP_DIR = Path(__file__).resolve().parent

load_dotenv(APP_DIR.parent.parent / ".env")

# JSON array of insight records served at /data/
INSIGHTS_DATA_PATH = Path(os.environ.get("INSIGHTS_DATA_PATH", str(APP_DIR / "data" / "insights.json")))

# Comma-separated origins allowed by CORS
CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# Server
HOST = os.environ.get("HOST", "127.0.0.1")
PORT = int(os.environ.get("PORT", "8000"))
