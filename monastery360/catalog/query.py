"""
Read-only queries over the catalogue.

``QueryEngine`` answers every lookup the API needs: by id, by region,
free-text search, events per monastery, upcoming events, category
filters and aggregate statistics. Methods never modify the store and
never read the clock; callers pass ``now`` explicitly so results are
deterministic.

Region and category comparisons are case-insensitive. Date sorts are
stable, so events sharing a date keep their order from the data file.
"""

from __future__ import annotations

import datetime as dt
import re
from typing import Any, FrozenSet, List, Optional

from .schemas import CatalogStats, Event, EventFilter, Monastery
from .store import CatalogStore

FESTIVAL_TYPES: FrozenSet[str] = frozenset({"festival", "dance festival"})
RITUAL_TYPES: FrozenSet[str] = frozenset({"sacred ritual", "religious observance"})

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def _norm(s: Optional[str]) -> str:
    """Normalize a string for case-insensitive comparison."""
    return (s or "").strip().lower()


def _to_id(value: Any) -> Optional[int]:
    """Normalize an id to ``int``.

    Accepts integers and digit strings (``"3"``, ``" 3 "``). Anything
    else, booleans included, gives ``None``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _ID_PATTERN.fullmatch(text):
            try:
                return int(text)
            except ValueError:
                # beyond the interpreter's digit limit
                return None
    return None


def _by_date(events: List[Event]) -> List[Event]:
    return sorted(events, key=lambda e: e.date)


class QueryEngine:
    """Pure query functions bound to one ``CatalogStore`` snapshot."""

    def __init__(self, store: CatalogStore):
        self.store = store

    # -- monasteries ----------------------------------------------------

    def get_by_id(self, monastery_id: Any) -> Optional[Monastery]:
        """Return the monastery with this id, or ``None``.

        ``monastery_id`` may be an int or a numeric string; a value that
        is not a valid id simply finds nothing.
        """
        wanted = _to_id(monastery_id)
        if wanted is None:
            return None
        return next((m for m in self.store.all_monasteries() if m.id == wanted), None)

    def filter_by_region(self, region: Optional[str]) -> List[Monastery]:
        # Exact match apart from case; surrounding spaces are significant.
        wanted = (region or "").lower()
        return [m for m in self.store.all_monasteries() if m.region.lower() == wanted]

    def search(self, query: Optional[str] = None) -> List[Monastery]:
        """Free-text search over name, description and region.

        Parameters
        ----------
        query : Optional[str]
            Text to look for. ``None`` or an empty string returns the
            whole collection.

        Returns
        -------
        List[Monastery]
            Monasteries containing the query (case-insensitive, anywhere
            in the field) in at least one of the three fields, in
            collection order.
        """
        monasteries = self.store.all_monasteries()
        if not query:
            return list(monasteries)
        term = query.lower()
        return [
            m for m in monasteries
            if term in m.name.lower()
            or term in m.description.lower()
            or term in m.region.lower()
        ]

    def regions(self) -> List[str]:
        """Distinct region names in first-seen order."""
        return list(dict.fromkeys(m.region for m in self.store.all_monasteries()))

    def virtual_tours(self) -> List[Monastery]:
        return [m for m in self.store.all_monasteries() if m.has_virtual_tour]

    # -- events ---------------------------------------------------------

    def events_for_monastery(self, monastery_id: Any) -> List[Event]:
        wanted = _to_id(monastery_id)
        if wanted is None:
            return []
        return [e for e in self.store.all_events() if e.monastery_id == wanted]

    def upcoming_events(self, now: dt.date) -> List[Event]:
        """Events on or after ``now``, earliest first."""
        return _by_date([e for e in self.store.all_events() if e.date >= now])

    def events_by_category(self, filter_key: Any, now: dt.date) -> List[Event]:
        """Events matching a category filter, sorted by date.

        ``filter_key`` is an ``EventFilter`` or its string value; unknown
        keys behave like ``"all"``. ``now`` is only used by the
        ``"upcoming"`` filter.
        """
        category = filter_key if isinstance(filter_key, EventFilter) else EventFilter.parse(filter_key)
        events = list(self.store.all_events())
        if category is EventFilter.UPCOMING:
            events = [e for e in events if e.date >= now]
        elif category is EventFilter.FESTIVALS:
            events = [e for e in events if _norm(e.type) in FESTIVAL_TYPES]
        elif category is EventFilter.RITUALS:
            events = [e for e in events if _norm(e.type) in RITUAL_TYPES]
        return _by_date(events)

    # -- aggregates -----------------------------------------------------

    def stats(self, now: dt.date) -> CatalogStats:
        return CatalogStats(
            total_monasteries=len(self.store.all_monasteries()),
            total_events=len(self.store.all_events()),
            regions=tuple(self.regions()),
            upcoming_event_count=len(self.upcoming_events(now)),
        )
