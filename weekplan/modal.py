# weekplan/modal.py
"""Modal/editor controller.

The open modal is a single tagged value, so at most one of adding, editing
or converting can be active at a time.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, replace
from typing import Optional, Union

from . import convert
from .config import DEFAULT_CONFIG, PlannerConfig
from .events import EventStore
from .model import OK, Event, Outcome, TaskRef, rejected
from .tasks import TaskStore
from .util.clock import IdFactory, new_id
from .util.timeparse import at_hour

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Closed:
    label = ""
    action_label = ""


@dataclass(frozen=True)
class AddingEvent:
    draft: Event
    label = "Add New Event"
    action_label = "Add Event"


@dataclass(frozen=True)
class EditingEvent:
    draft: Event
    label = "Edit Event"
    action_label = "Save Changes"


@dataclass(frozen=True)
class ConvertingTask:
    draft: Event
    source: TaskRef
    remove_original: bool = True
    label = "Convert Task to Event"
    action_label = "Convert to Event"


ModalState = Union[Closed, AddingEvent, EditingEvent, ConvertingTask]
OpenModal = Union[AddingEvent, EditingEvent, ConvertingTask]

CLOSED = Closed()

_NOT_OPEN = "no open modal"


def _inverted(draft: Event) -> bool:
    return draft.end < draft.start


class ModalController:
    def __init__(
        self,
        events: EventStore,
        tasks: TaskStore,
        *,
        config: PlannerConfig = DEFAULT_CONFIG,
        id_factory: IdFactory = new_id,
    ) -> None:
        self.events = events
        self.tasks = tasks
        self.config = config
        self._new_id = id_factory
        self.state: ModalState = CLOSED

    @property
    def is_open(self) -> bool:
        return not isinstance(self.state, Closed)

    @property
    def draft(self) -> Optional[Event]:
        return None if isinstance(self.state, Closed) else self.state.draft

    # --- opening ------------------------------------------------------------

    def open_add(self, day: dt.date, hour: int, minute: int = 0) -> AddingEvent:
        start = at_hour(day, hour, minute)
        draft = Event(
            id=self._new_id(),
            title="",
            start=start,
            end=start + dt.timedelta(hours=1),
            color=self.config.default_color,
        )
        self.state = AddingEvent(draft=draft)
        return self.state

    def open_edit(self, event: Event) -> EditingEvent:
        # Frozen records: the draft is an independent value already.
        self.state = EditingEvent(draft=replace(event))
        return self.state

    def open_convert(self, draft: Event, source: TaskRef, remove_original: bool = True) -> ConvertingTask:
        self.state = ConvertingTask(draft=draft, source=source, remove_original=bool(remove_original))
        return self.state

    def cancel(self) -> None:
        self.state = CLOSED

    # --- draft editing ------------------------------------------------------

    def _edit(self, **changes) -> Outcome:
        if isinstance(self.state, Closed):
            return rejected(_NOT_OPEN)
        self.state = replace(self.state, draft=replace(self.state.draft, **changes))
        return OK

    def set_title(self, title: str) -> Outcome:
        return self._edit(title=str(title))

    def set_description(self, description: Optional[str]) -> Outcome:
        return self._edit(description=description or None)

    def set_color(self, color: str) -> Outcome:
        return self._edit(color=str(color))

    def set_all_day(self, all_day: bool) -> Outcome:
        return self._edit(all_day=bool(all_day))

    def set_date(self, day: dt.date) -> Outcome:
        """Move both instants to `day`, keeping times of day and their offset."""
        d = self.draft
        if d is None:
            return rejected(_NOT_OPEN)
        shift = dt.timedelta(days=(day - d.day).days)
        return self._edit(start=d.start + shift, end=d.end + shift)

    def set_start_time(self, hour: int, minute: int = 0) -> Outcome:
        """New start time of day; the end moves along so the duration is kept."""
        d = self.draft
        if d is None:
            return rejected(_NOT_OPEN)
        new_start = d.start.replace(hour=int(hour), minute=int(minute), second=0, microsecond=0)
        return self._edit(start=new_start, end=d.end + (new_start - d.start))

    def set_end_time(self, hour: int, minute: int = 0) -> Outcome:
        """New end time of day, on the start's calendar day."""
        d = self.draft
        if d is None:
            return rejected(_NOT_OPEN)
        return self._edit(end=d.start.replace(hour=int(hour), minute=int(minute), second=0, microsecond=0))

    def set_remove_original(self, flag: bool) -> Outcome:
        if not isinstance(self.state, ConvertingTask):
            return rejected("not converting a task")
        self.state = replace(self.state, remove_original=bool(flag))
        return OK

    # --- confirming ---------------------------------------------------------

    def confirm_add(self) -> Outcome:
        st = self.state
        if not isinstance(st, AddingEvent):
            return rejected("not adding an event")
        if not st.draft.title.strip():
            self.state = CLOSED
            return rejected("blank title")
        if _inverted(st.draft):
            self.state = CLOSED
            return rejected("end before start")
        self.events.add(st.draft)
        self.state = CLOSED
        return OK

    def confirm_edit(self) -> Outcome:
        st = self.state
        if not isinstance(st, EditingEvent):
            return rejected("not editing an event")
        if _inverted(st.draft):
            self.state = CLOSED
            return rejected("end before start")
        found = self.events.update(st.draft)
        self.state = CLOSED
        if not found:
            logger.info("edited event %s no longer exists", st.draft.id)
            return rejected("event not found")
        return OK

    def confirm_convert(self, remove_original: Optional[bool] = None) -> Outcome:
        st = self.state
        if not isinstance(st, ConvertingTask):
            return rejected("not converting a task")
        remove = st.remove_original if remove_original is None else bool(remove_original)
        if st.draft.title.strip() and _inverted(st.draft):
            self.state = CLOSED
            return rejected("end before start")
        out = convert.commit(st.draft, st.source, remove, events=self.events, tasks=self.tasks)
        self.state = CLOSED
        return out
