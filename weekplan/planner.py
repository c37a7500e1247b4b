# weekplan/planner.py
"""Planner session: stores, view and modal wired to persistence.

Each command mutates in memory first, then writes every slot whose value
changed. A failed write is logged by the adapter and the in-memory state
stays authoritative for the rest of the session.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from . import convert, timeline
from .config import ALL_KEYS, DEFAULT_CONFIG, PlannerConfig
from .events import EventStore
from .modal import AddingEvent, ConvertingTask, EditingEvent, ModalController, ModalState
from .model import OK, Event, HourMark, LaneSlot, Layout, Outcome, RecordId, Task, TaskRef, rejected
from .persist import PersistenceAdapter
from .storage import Storage
from .tasks import TaskStore
from .timerange import TimeRange
from .util.clock import Clock, IdFactory, SystemClock, new_id, today_date
from .view import ViewState

logger = logging.getLogger(__name__)


class Planner:
    def __init__(
        self,
        storage: Storage,
        *,
        clock: Optional[Clock] = None,
        config: PlannerConfig = DEFAULT_CONFIG,
        id_factory: IdFactory = new_id,
    ) -> None:
        self.clock = clock or SystemClock()
        self.config = config
        self.persist = PersistenceAdapter(storage, config)
        self._new_id = id_factory
        self._saved: Dict[str, Any] = {}
        self.reload()

    # --- loading / saving -----------------------------------------------------

    def reload(self) -> None:
        """(Re)read every slot from storage; any open modal is discarded."""
        p = self.persist
        self.events = EventStore(p.load_events())
        self.tasks = TaskStore(p.load_tasks(), id_factory=self._new_id)
        self.time_range = p.load_time_range()
        self.view = ViewState.initial(self.today(), mode=p.load_view(), selected_day=p.load_selected_day())
        self.modal = ModalController(self.events, self.tasks, config=self.config, id_factory=self._new_id)
        self._saved = self._slices()

    def _slices(self) -> Dict[str, Any]:
        return {
            "events": self.events.all(),
            "tasks": self.tasks.snapshot(),
            "view": self.view.mode,
            "selected_day": self.view.selected_day,
            "time_range": self.time_range,
        }

    def _sync(self) -> None:
        cur = self._slices()
        prev = self._saved
        p = self.persist
        if cur["events"] is not prev.get("events"):
            p.save_events(cur["events"])
        if cur["tasks"] != prev.get("tasks"):
            p.save_tasks(cur["tasks"])
        if cur["view"] != prev.get("view"):
            p.save_view(cur["view"])
        if cur["selected_day"] != prev.get("selected_day"):
            p.save_selected_day(cur["selected_day"])
        if cur["time_range"] != prev.get("time_range"):
            p.save_time_range(cur["time_range"])
        self._saved = cur

    def save_all(self) -> None:
        """Write every slot regardless of change tracking (e.g. after a failed write)."""
        p = self.persist
        p.save_events(self.events.all())
        p.save_tasks(self.tasks.snapshot())
        p.save_view(self.view.mode)
        p.save_selected_day(self.view.selected_day)
        p.save_time_range(self.time_range)
        self._saved = self._slices()

    def reset(self) -> None:
        """Remove all planner keys and restore defaults. Callers confirm first."""
        self.persist.clear(ALL_KEYS)
        self.events.clear()
        self.tasks.clear()
        self.time_range = TimeRange(self.config.default_range_start, self.config.default_range_end)
        self.view = ViewState.initial(self.today())
        self.modal.cancel()
        self._saved = self._slices()
        logger.info("planner data reset")

    # --- clock ----------------------------------------------------------------

    def now(self) -> dt.datetime:
        return self.clock.now()

    def today(self) -> dt.date:
        return today_date(self.clock)

    def is_today(self, day: dt.date) -> bool:
        return day == self.today()

    # --- time range -----------------------------------------------------------

    def set_time_range(self, start: int, end: int) -> Outcome:
        new = self.time_range.set_range(start, end)
        if new is self.time_range:
            return rejected("invalid time range")
        self.time_range = new
        self._sync()
        return OK

    def set_range_start(self, start: int) -> Outcome:
        return self.set_time_range(start, self.time_range.end)

    def set_range_end(self, end: int) -> Outcome:
        return self.set_time_range(self.time_range.start, end)

    # --- tasks ----------------------------------------------------------------

    def tasks_for_day(self, day: dt.date) -> Tuple[Task, ...]:
        return self.tasks.for_day(day)

    def add_task(self, day: dt.date, text: str = "") -> Task:
        task = self.tasks.add(day)
        if text:
            self.tasks.update(day, task.id, text)
            task = self.tasks.get(day, task.id) or task
        self._sync()
        return task

    def update_task(self, day: dt.date, task_id: RecordId, text: str) -> bool:
        changed = self.tasks.update(day, task_id, text)
        self._sync()
        return changed

    def toggle_task(self, day: dt.date, task_id: RecordId) -> bool:
        changed = self.tasks.toggle(day, task_id)
        self._sync()
        return changed

    def delete_task(self, day: dt.date, task_id: RecordId) -> bool:
        changed = self.tasks.delete(day, task_id)
        self._sync()
        return changed

    # --- events ---------------------------------------------------------------

    def events_for_day(self, day: dt.date) -> List[Event]:
        return self.events.for_day(day)

    def all_day_for_day(self, day: dt.date) -> List[Event]:
        return self.events.all_day_for_day(day)

    def visible_events(self, day: dt.date) -> List[Event]:
        return self.events.visible_for_day(day, self.time_range)

    def add_event(self, event: Event) -> None:
        self.events.add(event)
        self._sync()

    def update_event(self, event: Event) -> bool:
        changed = self.events.update(event)
        self._sync()
        return changed

    def delete_event(self, event_id: RecordId) -> bool:
        changed = self.events.delete(event_id)
        self._sync()
        return changed

    def layout(self, event: Event) -> Layout:
        return timeline.layout(event, self.time_range, self.config.scale)

    def lanes_for_day(self, day: dt.date) -> List[LaneSlot]:
        return timeline.assign_lanes(self.visible_events(day))

    def timeline_height(self) -> float:
        return timeline.timeline_height(self.time_range, self.config.scale)

    def hour_marks(self) -> List[HourMark]:
        return timeline.hour_marks(self.time_range, self.config.scale)

    # --- view -----------------------------------------------------------------

    def _set_view(self, view: ViewState) -> ViewState:
        self.view = view
        self._sync()
        return view

    def show_day(self, day: Optional[dt.date] = None) -> ViewState:
        return self._set_view(self.view.show_day(day))

    def set_anchor(self, day: dt.date) -> ViewState:
        return self._set_view(self.view.anchor_at(day))

    def show_week(self) -> ViewState:
        return self._set_view(self.view.show_week())

    def go_to_today(self) -> ViewState:
        return self._set_view(self.view.go_to_today(self.today()))

    def navigate(self, direction: int) -> ViewState:
        return self._set_view(self.view.navigate(direction))

    def week_days(self) -> Tuple[dt.date, ...]:
        return self.view.week_days()

    def title(self) -> str:
        return self.view.title()

    # --- modal ----------------------------------------------------------------

    @property
    def modal_state(self) -> ModalState:
        return self.modal.state

    def quick_add_hour(self) -> int:
        """Hour used by the day view's add button: now, but not before the range start."""
        return max(self.time_range.start, self.now().hour)

    def open_add(self, day: dt.date, hour: Optional[int] = None, minute: int = 0) -> ModalState:
        return self.modal.open_add(day, self.quick_add_hour() if hour is None else hour, minute)

    def open_edit(self, event: Union[Event, RecordId]) -> Outcome:
        ev = event if isinstance(event, Event) else self.events.get(event)
        if ev is None:
            return rejected("event not found")
        self.modal.open_edit(ev)
        return OK

    def convert_task(self, day: dt.date, task_id: RecordId, remove_original: bool = True) -> Outcome:
        """Open the conversion modal with a draft built from the task."""
        task = self.tasks.get(day, task_id)
        if task is None:
            return rejected("task not found")
        draft = convert.begin(
            day,
            task,
            time_range=self.time_range,
            now=self.now(),
            event_id=self._new_id(),
            fallback_hour=self.config.fallback_hour,
            color=self.config.default_color,
        )
        self.modal.open_convert(draft, TaskRef(day=day, task_id=task.id), remove_original)
        return OK

    def cancel_modal(self) -> None:
        self.modal.cancel()

    def confirm_add(self) -> Outcome:
        out = self.modal.confirm_add()
        self._sync()
        return out

    def confirm_edit(self) -> Outcome:
        out = self.modal.confirm_edit()
        self._sync()
        return out

    def confirm_convert(self, remove_original: Optional[bool] = None) -> Outcome:
        out = self.modal.confirm_convert(remove_original)
        self._sync()
        return out

    def confirm(self) -> Outcome:
        """Confirm whichever modal is open."""
        st = self.modal.state
        if isinstance(st, AddingEvent):
            return self.confirm_add()
        if isinstance(st, EditingEvent):
            return self.confirm_edit()
        if isinstance(st, ConvertingTask):
            return self.confirm_convert()
        return rejected("no open modal")
