"""Shared fixtures for the insights dashboard tests.

Provides:
- make_insight: record factory with sensible defaults
- three_insights / three_frame: the small Energy/Health collection
- sample_records: the bundled sample export
- client: TestClient for the insights API, served from a temp JSON file
"""

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from insightboard.insights import insights_frame
from insightsapi.app import config
from insightsapi.app.main import create_app
from insightsapi.app.services import store

SAMPLE_PATH = Path(__file__).resolve().parent.parent / "insightsapi" / "app" / "data" / "insights.json"


# ---------------------------------------------------------------------------
# Data factories
# ---------------------------------------------------------------------------

def make_insight(**overrides):
    defaults = {
        "end_year": "",
        "intensity": 6,
        "sector": "Energy",
        "topic": "oil",
        "insight": "Annual Energy Outlook",
        "url": "http://www.eia.gov/outlooks/aeo/",
        "region": "Northern America",
        "start_year": "",
        "impact": "",
        "added": "January, 20 2017 03:51:25",
        "published": "January, 09 2017 00:00:00",
        "country": "United States of America",
        "relevance": 2,
        "pestle": "Industries",
        "source": "EIA",
        "title": "U.S. crude oil production is projected to recover.",
        "likelihood": 3,
    }
    defaults.update(overrides)
    return defaults


THREE_INSIGHTS = [
    {"sector": "Energy", "intensity": 3, "likelihood": 2, "relevance": 4, "topic": "oil"},
    {"sector": "Energy", "intensity": 3, "likelihood": 4, "relevance": 1, "topic": "gas"},
    {"sector": "Health", "intensity": 7, "likelihood": 1, "relevance": 5, "topic": "oil"},
]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def three_insights():
    return [dict(r) for r in THREE_INSIGHTS]


@pytest.fixture
def three_frame(three_insights):
    return insights_frame(three_insights)


@pytest.fixture
def sample_records():
    with open(SAMPLE_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def sample_frame(sample_records):
    return insights_frame(sample_records)


@pytest.fixture
def records_file(tmp_path, three_insights):
    path = tmp_path / "insights.json"
    path.write_text(json.dumps(three_insights), encoding="utf-8")
    return path


@pytest.fixture
def client(records_file, monkeypatch):
    monkeypatch.setattr(config, "INSIGHTS_DATA_PATH", records_file)
    store.load_default_records.cache_clear()
    with TestClient(create_app()) as c:
        yield c
    store.load_default_records.cache_clear()
