"""
Shared fixtures for the Monastery360 tests.

The catalogue below is small on purpose: four monasteries (one region
written in two different cases) and five events, two of which share a
date so the stable date ordering can be checked.
"""

import datetime as dt
import json

import pytest
from fastapi.testclient import TestClient

from monastery360.catalog.query import QueryEngine
from monastery360.catalog.router import get_today
from monastery360.catalog.schemas import Event, Monastery
from monastery360.catalog.store import CatalogStore
from monastery360.config import Settings
from monastery360.main import create_app

TODAY = dt.date(2024, 3, 1)

MONASTERY_RECORDS = [
    {
        "id": 1,
        "name": "Rumtek Monastery",
        "region": "East Sikkim",
        "latitude": 27.2886,
        "longitude": 88.5613,
        "description": "Seat of the Karma Kagyu lineage",
        "establishedYear": 1740,
        "audioGuideAvailable": True,
        "virtualTourUrl": "/panoramas/rumtek.jpg",
        "images": ["/images/rumtek-1.jpg"],
        "contactInfo": {"phone": "+91-3592-252329"},
    },
    {
        "id": 2,
        "name": "Pemayangtse Monastery",
        "region": "West Sikkim",
        "latitude": 27.3053,
        "longitude": 88.2517,
        "description": "Nyingma monastery near Pelling",
        "virtualTourUrl": "https://example.com/tours/pemayangtse",
    },
    {
        "id": 3,
        "name": "Enchey Monastery",
        "region": "east sikkim",
        "latitude": 27.3366,
        "longitude": 88.6186,
        "description": "Hilltop monastery above Gangtok",
        "virtualTourUrl": "",
    },
    {
        "id": 4,
        "name": "Phodong Monastery",
        "region": "North Sikkim",
        "latitude": 27.4147,
        "longitude": 88.5836,
        "description": "Kagyu monastery with old murals",
    },
]

EVENT_RECORDS = [
    {"id": 1, "monasteryId": 1, "name": "Losar", "date": "2024-01-01", "type": "Festival"},
    {"id": 2, "monasteryId": 4, "name": "Bumchu", "date": "2024-06-01", "type": "Sacred Ritual"},
    {"id": 3, "monasteryId": 1, "name": "Chaam Dance", "date": "2024-03-01", "type": "Dance Festival"},
    {"id": 4, "monasteryId": 2, "name": "Saga Dawa", "date": "2024-06-01", "type": "Religious Observance"},
    {"id": 5, "monasteryId": 3, "name": "Retreat", "date": "2024-02-15", "type": "Retreat",
     "registrationRequired": True},
]


@pytest.fixture
def monasteries():
    return [Monastery.model_validate(r) for r in MONASTERY_RECORDS]


@pytest.fixture
def events():
    return [Event.model_validate(r) for r in EVENT_RECORDS]


@pytest.fixture
def store(monasteries, events) -> CatalogStore:
    return CatalogStore(monasteries, events)


@pytest.fixture
def engine(store) -> QueryEngine:
    return QueryEngine(store)


@pytest.fixture
def today() -> dt.date:
    return TODAY


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        data_dir=tmp_path,
        google_maps_api_key="test-key",
        google_maps_map_id="map-123",
    )


@pytest.fixture
def data_dir(tmp_path):
    """Temporary data directory holding the fixture catalogue as JSON."""
    (tmp_path / "monasteries.json").write_text(json.dumps(MONASTERY_RECORDS), encoding="utf-8")
    (tmp_path / "events.json").write_text(json.dumps(EVENT_RECORDS), encoding="utf-8")
    return tmp_path


@pytest.fixture
def client(settings, store):
    app = create_app(settings=settings, store=store)
    app.dependency_overrides[get_today] = lambda: TODAY
    with TestClient(app) as test_client:
        yield test_client
