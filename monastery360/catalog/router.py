"""
Route definitions for the catalogue API.

Endpoints under /api:
- GET  /config                          : public map configuration
- GET  /monasteries                     : all monasteries
- GET  /monasteries/{monastery_id}      : one monastery (404 when unknown)
- GET  /monasteries/region/{region}     : monasteries in a region
- GET  /events                          : all events, optional ?filter=
- GET  /events/upcoming                 : upcoming events, earliest first
- GET  /events/monastery/{monastery_id} : events held at a monastery
- GET  /search?q=                       : free-text search
- GET  /stats                           : aggregate counts
- GET  /tours                           : monasteries with a virtual tour
"""

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ..config import Settings, get_settings
from .query import QueryEngine
from .schemas import CatalogStats, Event, Monastery, PublicConfig, VirtualTour

router = APIRouter(prefix="/api", tags=["catalog"])


def get_engine(request: Request) -> QueryEngine:
    """Query engine built at startup and kept on ``app.state``."""
    return request.app.state.engine


def get_today() -> dt.date:
    """Reference date for "upcoming"; overridden in tests."""
    return dt.date.today()


@router.get("/config", response_model=PublicConfig)
def public_config(settings: Settings = Depends(get_settings)) -> PublicConfig:
    return PublicConfig(
        google_maps_api_key=settings.google_maps_api_key or None,
        google_maps_map_id=settings.google_maps_map_id,
    )


@router.get("/monasteries", response_model=List[Monastery])
def list_monasteries(engine: QueryEngine = Depends(get_engine)) -> List[Monastery]:
    return list(engine.store.all_monasteries())


@router.get("/monasteries/region/{region}", response_model=List[Monastery])
def monasteries_in_region(region: str, engine: QueryEngine = Depends(get_engine)) -> List[Monastery]:
    return engine.filter_by_region(region)


@router.get("/monasteries/{monastery_id}", response_model=Monastery)
def get_monastery(monastery_id: str, engine: QueryEngine = Depends(get_engine)) -> Monastery:
    # Taken as a string so that "abc" is a 404 like any other unknown id.
    monastery = engine.get_by_id(monastery_id)
    if monastery is None:
        raise HTTPException(status_code=404, detail="Monastery not found")
    return monastery


@router.get("/events", response_model=List[Event])
def list_events(
    category: Optional[str] = Query(
        default=None, alias="filter", description="all, upcoming, festivals or rituals"
    ),
    engine: QueryEngine = Depends(get_engine),
    today: dt.date = Depends(get_today),
) -> List[Event]:
    """
    Returns every event in file order, or the events of one category
    sorted by date when ``?filter=`` is given. Unknown filters list all
    events.
    """
    if category is None:
        return list(engine.store.all_events())
    return engine.events_by_category(category, today)


@router.get("/events/upcoming", response_model=List[Event])
def upcoming_events(
    engine: QueryEngine = Depends(get_engine),
    today: dt.date = Depends(get_today),
) -> List[Event]:
    return engine.upcoming_events(today)


@router.get("/events/monastery/{monastery_id}", response_model=List[Event])
def monastery_events(monastery_id: str, engine: QueryEngine = Depends(get_engine)) -> List[Event]:
    return engine.events_for_monastery(monastery_id)


@router.get("/search", response_model=List[Monastery])
def search_monasteries(
    q: Optional[str] = Query(default=None, description="Text searched in name, description and region"),
    engine: QueryEngine = Depends(get_engine),
) -> List[Monastery]:
    return engine.search(q)


@router.get("/stats", response_model=CatalogStats)
def catalog_stats(
    engine: QueryEngine = Depends(get_engine),
    today: dt.date = Depends(get_today),
) -> CatalogStats:
    return engine.stats(today)


@router.get("/tours", response_model=List[VirtualTour])
def virtual_tours(engine: QueryEngine = Depends(get_engine)) -> List[VirtualTour]:
    return [VirtualTour.from_monastery(m) for m in engine.virtual_tours()]
