"""
Pydantic schema definitions for the catalog module.

``Monastery`` and ``Event`` describe the records stored in the two data
files under ``data/``. Attributes are snake_case in Python, while the
JSON documents and API responses use the camelCase names the front‑end
expects (``establishedYear``, ``virtualTourUrl``, ``monasteryId`` ...).
All models are frozen: once the catalogue is loaded nothing mutates it.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class CatalogModel(BaseModel):
    """Base class sharing the camelCase aliasing and immutability."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _null_means_default(cls, data):
        """Treat an explicit ``null`` like a missing key for fields with a default.

        Required fields are left alone so a ``null`` id or name still
        fails validation.
        """
        if not isinstance(data, dict):
            return data
        optional = set()
        for name, field in cls.model_fields.items():
            if not field.is_required():
                optional.add(name)
                if field.alias:
                    optional.add(field.alias)
        return {k: v for k, v in data.items() if v is not None or k not in optional}


class ContactInfo(CatalogModel):
    phone: Optional[str] = None
    email: Optional[str] = None


class Monastery(CatalogModel):
    """A single monastery entry.

    Only ``id``, ``name``, ``region`` and the coordinates are required.
    Every other field falls back to an "unavailable" value: ``None`` for
    the optional display strings, empty tuples for ``images``,
    ``highlights`` and ``nearby_attractions``. ``virtual_tour_url`` is
    ``None`` when the monastery has no tour; an empty string in the data
    file is treated the same way.
    """

    id: int = Field(gt=0)
    name: str
    region: str
    latitude: float
    longitude: float
    description: str = ""
    established_year: Optional[int] = None
    # Display strings such as "2,000 m" or "Free". Bare numbers in the
    # data file are turned into strings.
    altitude: Optional[str] = None
    visiting_hours: Optional[str] = None
    entry_fee: Optional[str] = None
    accessibility: Optional[str] = None
    audio_guide_available: bool = False
    virtual_tour_url: Optional[str] = None
    images: Tuple[str, ...] = ()
    highlights: Tuple[str, ...] = ()
    nearby_attractions: Tuple[str, ...] = ()
    contact_info: ContactInfo = Field(default_factory=ContactInfo)

    @field_validator("altitude", "visiting_hours", "entry_fee", "accessibility", mode="before")
    @classmethod
    def _number_to_text(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("virtual_tour_url", mode="before")
    @classmethod
    def _blank_url_is_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def has_virtual_tour(self) -> bool:
        return self.virtual_tour_url is not None

    @property
    def tour_kind(self) -> Optional[str]:
        """``"panorama"`` for a self-hosted 360° image, ``"external"`` otherwise."""
        if self.virtual_tour_url is None:
            return None
        return "panorama" if self.virtual_tour_url.startswith("/") else "external"


class Event(CatalogModel):
    """A festival, ritual or observance held at a monastery.

    ``monastery_id`` is not checked against the monastery collection;
    ``monastery_name`` is a display copy kept in the data file.
    """

    id: int
    monastery_id: int
    name: str
    date: dt.date
    type: str = ""
    description: str = ""
    registration_required: bool = False
    monastery_name: str = ""

    @field_validator("date", mode="before")
    @classmethod
    def _date_part_only(cls, value):
        # "2024-06-01T18:00:00Z" -> "2024-06-01"
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value


class EventFilter(str, Enum):
    """Category filters accepted by the events listing."""

    ALL = "all"
    UPCOMING = "upcoming"
    FESTIVALS = "festivals"
    RITUALS = "rituals"

    @classmethod
    def parse(cls, key: Optional[str]) -> "EventFilter":
        """Map a raw filter key to a member; unknown keys mean ``ALL``."""
        if not isinstance(key, str):
            return cls.ALL
        try:
            return cls(key.strip().lower())
        except ValueError:
            return cls.ALL


class CatalogStats(CatalogModel):
    """Aggregate counts returned by ``/api/stats``."""

    total_monasteries: int
    total_events: int
    regions: Tuple[str, ...] = ()
    upcoming_event_count: int = Field(alias="upcomingEvents")


class VirtualTour(CatalogModel):
    """Summary card for a monastery that has a virtual tour."""

    id: int
    name: str
    region: str
    virtual_tour_url: str
    tour_kind: str
    audio_guide_available: bool = False

    @classmethod
    def from_monastery(cls, monastery: Monastery) -> "VirtualTour":
        return cls(
            id=monastery.id,
            name=monastery.name,
            region=monastery.region,
            virtual_tour_url=monastery.virtual_tour_url,
            tour_kind=monastery.tour_kind,
            audio_guide_available=monastery.audio_guide_available,
        )


class PublicConfig(CatalogModel):
    """Client-safe configuration for the map view."""

    google_maps_api_key: Optional[str] = None
    google_maps_map_id: str
