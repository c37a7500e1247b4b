# weekplan/convert.py
"""Promotion of a day task into a timed event."""

from __future__ import annotations

import datetime as dt
import logging

from .config import DEFAULT_CONFIG
from .events import EventStore
from .model import OK, Event, Outcome, RecordId, Task, TaskRef, rejected
from .tasks import TaskStore
from .timerange import TimeRange
from .util.timeparse import at_hour

logger = logging.getLogger(__name__)


def default_hour(time_range: TimeRange, now: dt.datetime, fallback_hour: int = DEFAULT_CONFIG.fallback_hour) -> int:
    """Current hour when it is inside the visible window, else the fallback (noon)."""
    return now.hour if time_range.contains_hour(now.hour) else int(fallback_hour)


def begin(
    day: dt.date,
    task: Task,
    *,
    time_range: TimeRange,
    now: dt.datetime,
    event_id: RecordId,
    fallback_hour: int = DEFAULT_CONFIG.fallback_hour,
    color: str = DEFAULT_CONFIG.default_color,
) -> Event:
    """Draft event for `task`: its text as title, a one-hour slot on `day`."""
    start = at_hour(day, default_hour(time_range, now, fallback_hour))
    return Event(
        id=event_id,
        title=task.text,
        start=start,
        end=start + dt.timedelta(hours=1),
        color=color,
        from_task=True,
        task_id=task.id,
    )


def commit(
    draft: Event,
    source: TaskRef,
    remove_original: bool,
    *,
    events: EventStore,
    tasks: TaskStore,
) -> Outcome:
    """Add the draft as an event and optionally drop the source task.

    A blank title adds nothing and leaves the task in place.
    """
    if not draft.title.strip():
        logger.info("dropping task conversion with blank title (task %s)", source.task_id)
        return rejected("blank title")
    events.add(draft)
    if remove_original:
        tasks.delete(source.day, source.task_id)
    return OK
