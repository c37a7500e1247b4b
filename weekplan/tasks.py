# weekplan/tasks.py
from __future__ import annotations

import datetime as dt
from dataclasses import replace
from typing import Callable, Dict, Mapping, Optional, Tuple

from .model import RecordId, Task
from .util.clock import IdFactory, new_id
from .util.timeparse import day_key

TaskMap = Dict[str, Tuple[Task, ...]]


class TaskStore:
    """Per-day task lists keyed by day key.

    Every mutation builds a new map and a new tuple for the touched day, so a
    snapshot handed out earlier is never affected.
    """

    def __init__(self, tasks: Optional[Mapping[str, Tuple[Task, ...]]] = None, *, id_factory: IdFactory = new_id) -> None:
        self._tasks: TaskMap = {k: tuple(v) for k, v in (tasks or {}).items() if v}
        self._new_id = id_factory

    def snapshot(self) -> TaskMap:
        return dict(self._tasks)

    def for_day(self, day: dt.date) -> Tuple[Task, ...]:
        return self._tasks.get(day_key(day), ())

    def get(self, day: dt.date, task_id: RecordId) -> Optional[Task]:
        for t in self.for_day(day):
            if t.id == task_id:
                return t
        return None

    def _replace_day(self, day: dt.date, tasks: Tuple[Task, ...]) -> None:
        key = day_key(day)
        new_map = dict(self._tasks)
        if tasks:
            new_map[key] = tasks
        else:
            new_map.pop(key, None)
        self._tasks = new_map

    def _map_one(self, day: dt.date, task_id: RecordId, fn: Callable[[Task], Task]) -> bool:
        cur = self.for_day(day)
        if not any(t.id == task_id for t in cur):
            return False
        self._replace_day(day, tuple(fn(t) if t.id == task_id else t for t in cur))
        return True

    def add(self, day: dt.date) -> Task:
        task = Task(id=self._new_id(), text="", completed=False)
        self._replace_day(day, self.for_day(day) + (task,))
        return task

    def update(self, day: dt.date, task_id: RecordId, text: str) -> bool:
        return self._map_one(day, task_id, lambda t: replace(t, text=str(text)))

    def toggle(self, day: dt.date, task_id: RecordId) -> bool:
        return self._map_one(day, task_id, lambda t: replace(t, completed=not t.completed))

    def delete(self, day: dt.date, task_id: RecordId) -> bool:
        cur = self.for_day(day)
        kept = tuple(t for t in cur if t.id != task_id)
        if len(kept) == len(cur):
            return False
        self._replace_day(day, kept)
        return True

    def clear(self) -> None:
        self._tasks = {}
