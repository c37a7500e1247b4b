# weekplan/timerange.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

MIN_HOUR = 0
MAX_HOUR = 24


def _is_hour(v: Any) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def is_valid_range(start: Any, end: Any) -> bool:
    return _is_hour(start) and _is_hour(end) and MIN_HOUR <= start < end <= MAX_HOUR


@dataclass(frozen=True)
class TimeRange:
    """Visible hour window [start, end) of the day timeline."""

    start: int = 8
    end: int = 20

    def __post_init__(self) -> None:
        if not is_valid_range(self.start, self.end):
            raise ValueError(f"invalid time range: {self.start}-{self.end}")

    def set_range(self, start: Any, end: Any) -> "TimeRange":
        """Return the new range, or this one unchanged if start/end are out of order or bounds."""
        if not is_valid_range(start, end):
            return self
        return TimeRange(start=int(start), end=int(end))

    def with_start(self, start: Any) -> "TimeRange":
        return self.set_range(start, self.end)

    def with_end(self, end: Any) -> "TimeRange":
        return self.set_range(self.start, end)

    def contains_hour(self, hour: int) -> bool:
        return self.start <= hour < self.end

    @property
    def span_hours(self) -> int:
        return self.end - self.start

    def hours(self) -> Tuple[int, ...]:
        return tuple(range(self.start, self.end))

    def start_choices(self) -> Tuple[int, ...]:
        return tuple(range(MIN_HOUR, self.end))

    def end_choices(self) -> Tuple[int, ...]:
        return tuple(range(self.start + 1, MAX_HOUR + 1))

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}
