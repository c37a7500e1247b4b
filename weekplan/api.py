"""weekplan.api

Stable *library* entrypoint for weekplan.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from weekplan.config import ALL_KEYS, DEFAULT_CONFIG, PlannerConfig
from weekplan.events import EventStore
from weekplan.modal import AddingEvent, Closed, ConvertingTask, EditingEvent, ModalController, ModalState
from weekplan.model import OK, Event, HourMark, LaneSlot, Layout, Outcome, Task, TaskRef, ViewMode
from weekplan.persist import PersistenceAdapter
from weekplan.planner import Planner
from weekplan.storage import FileStorage, MemoryStorage, Storage, StorageQuotaError
from weekplan.tasks import TaskStore
from weekplan.timeline import assign_lanes, format_hour, hour_marks, layout, timeline_height
from weekplan.timerange import TimeRange
from weekplan.util.clock import Clock, FixedClock, SystemClock
from weekplan.view import ViewState


__all__ = [
    "ALL_KEYS",
    "DEFAULT_CONFIG",
    "PlannerConfig",
    "Planner",
    "Event",
    "Task",
    "TaskRef",
    "ViewMode",
    "Outcome",
    "OK",
    "Layout",
    "LaneSlot",
    "HourMark",
    "TimeRange",
    "ViewState",
    "EventStore",
    "TaskStore",
    "ModalController",
    "ModalState",
    "Closed",
    "AddingEvent",
    "EditingEvent",
    "ConvertingTask",
    "PersistenceAdapter",
    "Storage",
    "MemoryStorage",
    "FileStorage",
    "StorageQuotaError",
    "Clock",
    "SystemClock",
    "FixedClock",
    "layout",
    "assign_lanes",
    "timeline_height",
    "hour_marks",
    "format_hour",
]
