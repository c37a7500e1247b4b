# weekplan/events.py
from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional, Tuple

from .model import Event, RecordId
from .timerange import TimeRange


class EventStore:
    """Flat list of calendar events.

    Day membership is the calendar day of `start`; an event crossing midnight
    is shown on its start day only.
    """

    def __init__(self, events: Optional[Iterable[Event]] = None) -> None:
        self._events: Tuple[Event, ...] = tuple(events or ())

    def all(self) -> Tuple[Event, ...]:
        return self._events

    def __len__(self) -> int:
        return len(self._events)

    def get(self, event_id: RecordId) -> Optional[Event]:
        for e in self._events:
            if e.id == event_id:
                return e
        return None

    def add(self, event: Event) -> None:
        self._events = self._events + (event,)

    def update(self, event: Event) -> bool:
        """Replace the record with the same id; no-op if absent."""
        if self.get(event.id) is None:
            return False
        self._events = tuple(event if e.id == event.id else e for e in self._events)
        return True

    def delete(self, event_id: RecordId) -> bool:
        kept = tuple(e for e in self._events if e.id != event_id)
        if len(kept) == len(self._events):
            return False
        self._events = kept
        return True

    def clear(self) -> None:
        self._events = ()

    def for_day(self, day: dt.date) -> List[Event]:
        """Timed events starting on `day`, ascending by start (stable for ties)."""
        out = [e for e in self._events if not e.all_day and e.day == day]
        out.sort(key=lambda e: e.start)
        return out

    def all_day_for_day(self, day: dt.date) -> List[Event]:
        return [e for e in self._events if e.all_day and e.day == day]

    def visible_for_day(self, day: dt.date, time_range: TimeRange) -> List[Event]:
        """Timed events of `day` that intersect the visible hour window."""
        return [e for e in self.for_day(day) if is_visible(e, time_range)]


def is_visible(event: Event, time_range: TimeRange) -> bool:
    return not (event.end.hour < time_range.start or event.start.hour >= time_range.end)
