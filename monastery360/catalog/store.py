"""
Data store for the catalogue API.

The monastery and event collections are read once from the JSON files
in ``data/`` and kept as tuples of frozen ``schemas`` models. Nothing in
the application writes to them afterwards; the ``QueryEngine`` receives
the store at construction and only reads from it.

Loading never fails the application. A missing or malformed file gives
an empty collection, and individual records that do not validate are
skipped. Both cases are logged.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple, Type, TypeVar, Union

from pydantic import ValidationError

from ..config import Settings
from .schemas import Event, Monastery

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", Monastery, Event)


def _read_json(source: Path, label: str) -> Optional[list]:
    """Read a JSON array from ``source``.

    Returns
    -------
    Optional[list]
        The decoded array, or ``None`` when the file is missing,
        unreadable, not valid JSON or does not hold an array.
    """
    try:
        with source.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        logger.warning("%s data file not found at %s, using empty collection", label, source)
        return None
    except (OSError, ValueError) as exc:
        logger.warning("Could not read %s data from %s: %s", label, source, exc)
        return None
    if not isinstance(raw, list):
        logger.warning(
            "%s data in %s must be a JSON array, got %s", label, source, type(raw).__name__
        )
        return None
    return raw


def _unique_ids(records: Iterable[RecordT], label: str) -> Tuple[RecordT, ...]:
    """Keep the first record for each ``id`` and drop the rest."""
    kept: List[RecordT] = []
    seen: Set[int] = set()
    for position, record in enumerate(records):
        if record.id in seen:
            logger.warning("Skipping duplicate %s id %s at position %d", label, record.id, position)
            continue
        seen.add(record.id)
        kept.append(record)
    return tuple(kept)


def _validate_records(raw: Iterable, model: Type[RecordT], label: str) -> List[RecordT]:
    """Validate raw entries into ``model`` instances, skipping invalid ones."""
    records: List[RecordT] = []
    for index, entry in enumerate(raw):
        try:
            record = model.model_validate(entry)
        except ValidationError as exc:
            logger.warning(
                "Skipping invalid %s record at index %d: %s",
                label, index, exc.errors(include_url=False),
            )
            continue
        records.append(record)
    return records


def load_collection(
    source: Union[str, Path], model: Type[RecordT], label: Optional[str] = None
) -> Tuple[RecordT, ...]:
    """Load one collection from a JSON file.

    Parameters
    ----------
    source : Union[str, Path]
        Path of the JSON document. It must contain an array of objects.
    model : Type[RecordT]
        ``Monastery`` or ``Event``.
    label : Optional[str]
        Name used in log messages. Defaults to the model name.

    Returns
    -------
    Tuple[RecordT, ...]
        The validated records in file order. Empty when the file cannot
        be used; this function does not raise.
    """
    label = label or model.__name__
    raw = _read_json(Path(source), label)
    if raw is None:
        return ()
    return _unique_ids(_validate_records(raw, model, label), label)


class CatalogStore:
    """Immutable snapshot of the monastery and event collections."""

    def __init__(self, monasteries: Iterable[Monastery] = (), events: Iterable[Event] = ()):
        self._monasteries: Tuple[Monastery, ...] = _unique_ids(monasteries, "Monasteries")
        self._events: Tuple[Event, ...] = _unique_ids(events, "Events")

    @classmethod
    def empty(cls) -> "CatalogStore":
        return cls()

    @classmethod
    def from_files(cls, monasteries_path: Union[str, Path], events_path: Union[str, Path]) -> "CatalogStore":
        """Load both collections; each one falls back to empty on its own."""
        store = cls(
            load_collection(monasteries_path, Monastery, "Monasteries"),
            load_collection(events_path, Event, "Events"),
        )
        logger.info(
            "Loaded %d monasteries and %d events",
            len(store.all_monasteries()), len(store.all_events()),
        )
        return store

    @classmethod
    def from_directory(
        cls,
        data_dir: Union[str, Path],
        monasteries_file: str = "monasteries.json",
        events_file: str = "events.json",
    ) -> "CatalogStore":
        data_dir = Path(data_dir)
        return cls.from_files(data_dir / monasteries_file, data_dir / events_file)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CatalogStore":
        return cls.from_files(settings.monasteries_path, settings.events_path)

    def all_monasteries(self) -> Tuple[Monastery, ...]:
        return self._monasteries

    def all_events(self) -> Tuple[Event, ...]:
        return self._events
