"""Pointer-event file loading.

Capture tools write an ``*.input-events.json`` file: a JSON array of
objects shaped like::

    {"type": "mouse", "x": 0.42, "y": 0.17,
     "time": {"seconds": 3.25}, "mouseEventType": "down"}

``time`` may also be a bare number.  Some exporters wrap the array in
log noise, so when the file is not valid JSON the first ``[...]`` span
is extracted and parsed instead.
"""

import json
import logging
import re
from typing import Any, List, Optional

from .models import EventStore, PointerSample, kind_from_event_type

logger = logging.getLogger(__name__)


EVENTS_EXT = (".json", ".txt")

_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


class EventFileError(ValueError):
    """Raised when an event file has no usable pointer samples."""


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a coordinate
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _sample_time(raw: Any) -> float:
    """Extract seconds from ``time`` (object with ``seconds`` or number)."""
    if isinstance(raw, dict) and _is_number(raw.get("seconds")):
        return float(raw["seconds"])
    if _is_number(raw):
        return float(raw)
    return 0.0


def _decode(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        match = _ARRAY_RE.search(text)
        if not match:
            raise EventFileError("No valid JSON array found in file")
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError as exc:
            raise EventFileError(f"No valid JSON array found in file ({exc.msg})") from exc


def to_sample(event: Any) -> Optional[PointerSample]:
    """Convert one raw event dict to a sample, or None if it is not a mouse event."""
    if not isinstance(event, dict) or event.get("type") != "mouse":
        return None
    x, y = event.get("x"), event.get("y")
    if not _is_number(x) or not _is_number(y):
        return None
    return PointerSample(
        x=float(x),
        y=float(y),
        time=_sample_time(event.get("time")),
        kind=kind_from_event_type(event.get("mouseEventType")),
    )


def parse_events(text: str) -> EventStore:
    """Parse event-file text into a time-sorted :class:`EventStore`."""
    data = _decode(text)
    if not isinstance(data, list):
        raise EventFileError("Data must be an array of cursor events")

    samples: List[PointerSample] = []
    skipped = 0
    for event in data:
        sample = to_sample(event)
        if sample is None:
            skipped += 1
            continue
        samples.append(sample)

    if not samples:
        raise EventFileError("No valid cursor events found in data")

    if skipped:
        logger.debug("Skipped %d non-mouse or malformed events", skipped)
    return EventStore(samples)


def load_events(path: str) -> EventStore:
    """Read and parse an event file from disk."""
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    store = parse_events(text)
    logger.info(
        "Loaded %d pointer samples from %s (%.1fs, %d clicks)",
        len(store), path, store.duration, store.click_count,
    )
    return store
