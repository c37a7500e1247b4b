# weekplan/view.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .model import ViewMode


def start_of_week(d: dt.date) -> dt.date:
    """Sunday on or before `d`."""
    return d - dt.timedelta(days=(d.weekday() + 1) % 7)


@dataclass(frozen=True)
class ViewState:
    """Week/day view selection.

    `selected_day` is kept while in week mode so a later show_day() without a
    day resumes where the user left off. `anchor` picks the visible week.
    """

    mode: ViewMode
    anchor: dt.date
    selected_day: Optional[dt.date] = None

    def __post_init__(self) -> None:
        if self.mode is ViewMode.DAY and self.selected_day is None:
            raise ValueError("day view requires a selected day")

    @classmethod
    def initial(cls, today: dt.date, mode: ViewMode = ViewMode.WEEK, selected_day: Optional[dt.date] = None) -> "ViewState":
        if mode is ViewMode.DAY and selected_day is None:
            selected_day = today
        return cls(mode=mode, anchor=today, selected_day=selected_day)

    @property
    def is_day(self) -> bool:
        return self.mode is ViewMode.DAY

    def show_day(self, day: Optional[dt.date] = None) -> "ViewState":
        target = day or self.selected_day or self.anchor
        return replace(self, mode=ViewMode.DAY, selected_day=target)

    def anchor_at(self, day: dt.date) -> "ViewState":
        return replace(self, anchor=day)

    def show_week(self) -> "ViewState":
        return replace(self, mode=ViewMode.WEEK)

    def go_to_today(self, today: dt.date) -> "ViewState":
        return replace(self, mode=ViewMode.DAY, selected_day=today)

    def navigate(self, direction: int) -> "ViewState":
        if direction not in (-1, 1) or isinstance(direction, bool):
            raise ValueError(f"direction must be -1 or +1, got {direction!r}")
        if self.mode is ViewMode.DAY and self.selected_day is not None:
            return replace(self, selected_day=self.selected_day + dt.timedelta(days=direction))
        return replace(self, anchor=self.anchor + dt.timedelta(days=7 * direction))

    def week_bounds(self) -> Tuple[dt.date, dt.date]:
        first = start_of_week(self.anchor)
        return first, first + dt.timedelta(days=6)

    def week_days(self) -> Tuple[dt.date, ...]:
        first, _last = self.week_bounds()
        return tuple(first + dt.timedelta(days=i) for i in range(7))

    def title(self) -> str:
        if self.mode is ViewMode.DAY and self.selected_day is not None:
            d = self.selected_day
            return f"{d:%A}, {d:%B} {d.day}, {d.year}"
        first, last = self.week_bounds()
        return f"Week of {first:%b} {first.day} - {last:%b} {last.day}, {last.year}"
