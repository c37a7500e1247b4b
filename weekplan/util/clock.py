# weekplan/util/clock.py
from __future__ import annotations

import datetime as dt
import uuid
from typing import Callable, Protocol


class Clock(Protocol):
    def now(self) -> dt.datetime:
        """Current host-local time (naive)."""


class SystemClock:
    def now(self) -> dt.datetime:
        return dt.datetime.now()


class FixedClock:
    """Clock pinned to one instant; `advance` moves it forward."""

    def __init__(self, at: dt.datetime) -> None:
        self._at = at

    def now(self) -> dt.datetime:
        return self._at

    def advance(self, delta: dt.timedelta) -> None:
        self._at = self._at + delta


def today_date(clock: Clock) -> dt.date:
    return clock.now().date()


IdFactory = Callable[[], str]


def new_id() -> str:
    return uuid.uuid4().hex


def counter_ids(prefix: str = "id") -> IdFactory:
    """Deterministic id factory: id-1, id-2, ..."""
    n = 0

    def _next() -> str:
        nonlocal n
        n += 1
        return f"{prefix}-{n}"

    return _next
