# weekplan/model.py
from __future__ import annotations

import datetime as dt
import enum
from dataclasses import dataclass
from typing import Optional, Union

DEFAULT_EVENT_COLOR = "#9333EA"

# Legacy records carry numeric ids (epoch ms); new records use opaque strings.
RecordId = Union[str, int]


@dataclass(frozen=True)
class Event:
    id: RecordId
    title: str
    start: dt.datetime
    end: dt.datetime
    all_day: bool = False
    color: str = DEFAULT_EVENT_COLOR
    description: Optional[str] = None

    # Provenance, set only by task conversion.
    from_task: bool = False
    task_id: Optional[RecordId] = None

    @property
    def day(self) -> dt.date:
        """Calendar day the event belongs to (day of its start)."""
        return self.start.date()


@dataclass(frozen=True)
class Task:
    id: RecordId
    text: str = ""
    completed: bool = False


@dataclass(frozen=True)
class TaskRef:
    """Points at a task inside a day's list."""

    day: dt.date
    task_id: RecordId


class ViewMode(str, enum.Enum):
    WEEK = "week"
    DAY = "day"


@dataclass(frozen=True)
class Outcome:
    """Result of a command that may be softly rejected.

    Rejections never raise; callers that do not care simply ignore the value.
    """

    ok: bool = True
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok


OK = Outcome()


def rejected(reason: str) -> Outcome:
    return Outcome(ok=False, reason=reason)


@dataclass(frozen=True)
class Layout:
    offset: float
    extent: float


@dataclass(frozen=True)
class LaneSlot:
    event: Event
    lane: int
    total_lanes: int
    cluster_id: int

    @property
    def overlap(self) -> bool:
        return self.total_lanes > 1


@dataclass(frozen=True)
class HourMark:
    hour: int
    offset: float
    label: str
    major: bool


__all__ = [
    "DEFAULT_EVENT_COLOR",
    "RecordId",
    "Event",
    "Task",
    "TaskRef",
    "ViewMode",
    "Outcome",
    "OK",
    "rejected",
    "Layout",
    "LaneSlot",
    "HourMark",
]
