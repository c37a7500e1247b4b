# weekplan/persist.py
"""Persistence adapter: named slots of planner state in a flat key/value store.

On-disk shapes (one value per key, JSON unless noted):
  planner-events        [ {id, title, start, end, allDay, color, description?, fromTask?, taskId?}, ... ]
  planner-tasks         { "yyyy-MM-dd": [ {id, text, completed}, ... ], ... }
  planner-view          week | day          (plain text)
  planner-selected-day  yyyy-MM-dd          (plain text)
  planner-time-range    {start, end}

Every read of persisted events goes through `decode_events`, so callers past
this module only ever see native datetimes.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import orjson

from .config import (
    ALL_KEYS,
    KEY_EVENTS,
    KEY_SELECTED_DAY,
    KEY_TASKS,
    KEY_TIME_RANGE,
    KEY_VIEW,
    PlannerConfig,
    DEFAULT_CONFIG,
)
from .model import Event, Task, ViewMode
from .storage import Storage
from .timerange import TimeRange, is_valid_range
from .util.timeparse import day_key, parse_day, parse_instant

logger = logging.getLogger(__name__)


def _is_id(v: Any) -> bool:
    if isinstance(v, bool):
        return False
    return isinstance(v, (int, str))


# --- encoders -----------------------------------------------------------------


def encode_event(ev: Event) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "id": ev.id,
        "title": ev.title,
        "start": ev.start,
        "end": ev.end,
        "allDay": bool(ev.all_day),
        "color": ev.color,
    }
    if ev.description is not None:
        out["description"] = ev.description
    if ev.from_task:
        out["fromTask"] = True
    if ev.task_id is not None:
        out["taskId"] = ev.task_id
    return out


def encode_task(t: Task) -> Dict[str, Any]:
    return {"id": t.id, "text": t.text, "completed": bool(t.completed)}


def encode_tasks(tasks: Mapping[str, Iterable[Task]]) -> Dict[str, List[Dict[str, Any]]]:
    return {k: [encode_task(t) for t in v] for k, v in tasks.items()}


# --- decoders -----------------------------------------------------------------


def _instant(v: Any) -> Optional[dt.datetime]:
    if isinstance(v, dt.datetime):
        return v
    if not isinstance(v, str) or not v.strip():
        return None
    try:
        return parse_instant(v)
    except ValueError:
        return None


def decode_event(obj: Any, *, default_color: str = DEFAULT_CONFIG.default_color) -> Optional[Event]:
    """Rehydrate one stored event; None when the record is unusable."""
    if not isinstance(obj, dict):
        return None
    ev_id = obj.get("id")
    if not _is_id(ev_id):
        return None
    start = _instant(obj.get("start"))
    end = _instant(obj.get("end"))
    if start is None or end is None:
        return None

    title = obj.get("title")
    color = obj.get("color")
    desc = obj.get("description")
    task_id = obj.get("taskId")
    from_task = obj.get("fromTask") is True
    return Event(
        id=ev_id,
        title=title if isinstance(title, str) else "",
        start=start,
        end=end,
        all_day=obj.get("allDay") is True,
        color=color if isinstance(color, str) else default_color,
        description=desc if isinstance(desc, str) else None,
        from_task=from_task,
        task_id=task_id if _is_id(task_id) else None,
    )


def decode_events(obj: Any, *, default_color: str = DEFAULT_CONFIG.default_color) -> Tuple[Event, ...]:
    if not isinstance(obj, list):
        return ()
    out: List[Event] = []
    for i, raw in enumerate(obj):
        ev = decode_event(raw, default_color=default_color)
        if ev is None:
            logger.warning("skipping malformed stored event at index %d", i)
            continue
        out.append(ev)
    return tuple(out)


def decode_task(obj: Any) -> Optional[Task]:
    if not isinstance(obj, dict) or not _is_id(obj.get("id")):
        return None
    text = obj.get("text")
    return Task(id=obj["id"], text=text if isinstance(text, str) else "", completed=obj.get("completed") is True)


def decode_tasks(obj: Any) -> Dict[str, Tuple[Task, ...]]:
    if not isinstance(obj, dict):
        return {}
    out: Dict[str, Tuple[Task, ...]] = {}
    for key, arr in obj.items():
        try:
            key = day_key(parse_day(str(key)))
        except ValueError:
            logger.warning("skipping stored tasks under bad day key %r", key)
            continue
        if not isinstance(arr, list):
            continue
        decoded = [decode_task(x) for x in arr]
        if any(t is None for t in decoded):
            logger.warning("skipping malformed stored tasks under %s", key)
        tasks = tuple(t for t in decoded if t is not None)
        if tasks:
            out[key] = out.get(key, ()) + tasks
    return out


def decode_view(raw: Any) -> Optional[ViewMode]:
    if isinstance(raw, str):
        try:
            return ViewMode(raw.strip().lower())
        except ValueError:
            return None
    return None


def decode_day(raw: Any) -> Optional[dt.date]:
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        return parse_day(raw)
    except ValueError:
        return None


def decode_time_range(obj: Any) -> Optional[TimeRange]:
    if not isinstance(obj, dict):
        return None
    start, end = obj.get("start"), obj.get("end")
    if not is_valid_range(start, end):
        return None
    return TimeRange(start=start, end=end)


# --- adapter ------------------------------------------------------------------


class PersistenceAdapter:
    def __init__(self, storage: Storage, config: PlannerConfig = DEFAULT_CONFIG) -> None:
        self.storage = storage
        self.config = config

    def save(self, key: str, value: Any) -> bool:
        """Serialize and store `value`. Failures are logged, never raised."""
        try:
            data = orjson.dumps(value).decode("utf-8")
        except orjson.JSONEncodeError as e:
            logger.warning("could not encode %s: %s", key, e)
            return False
        return self._save_text(key, data)

    def _save_text(self, key: str, text: str) -> bool:
        try:
            self.storage.set_item(key, text)
        except OSError as e:
            logger.warning("could not save %s: %s", key, e)
            return False
        return True

    def _raw(self, key: str) -> Optional[str]:
        try:
            return self.storage.get_item(key)
        except OSError as e:
            logger.warning("could not read %s: %s", key, e)
            return None

    def load(self, key: str, default: Any = None) -> Any:
        """Stored value for `key`, or `default` when absent, null or unparseable."""
        raw = self._raw(key)
        if not raw:
            return default
        try:
            obj = orjson.loads(raw)
        except orjson.JSONDecodeError:
            logger.warning("discarding unparseable value under %s", key)
            return default
        return default if obj is None else obj

    def _load_text(self, key: str) -> Any:
        # Written as plain text; JSON-quoted values are accepted too.
        raw = self._raw(key)
        if not raw:
            return None
        try:
            return orjson.loads(raw)
        except orjson.JSONDecodeError:
            return raw

    def remove(self, key: str) -> None:
        try:
            self.storage.remove_item(key)
        except OSError as e:
            logger.warning("could not remove %s: %s", key, e)

    def clear(self, keys: Iterable[str] = ALL_KEYS) -> None:
        for k in keys:
            self.remove(k)

    # typed slots

    def load_events(self) -> Tuple[Event, ...]:
        return decode_events(self.load(KEY_EVENTS, []), default_color=self.config.default_color)

    def save_events(self, events: Iterable[Event]) -> bool:
        return self.save(KEY_EVENTS, [encode_event(e) for e in events])

    def load_tasks(self) -> Dict[str, Tuple[Task, ...]]:
        return decode_tasks(self.load(KEY_TASKS, {}))

    def save_tasks(self, tasks: Mapping[str, Iterable[Task]]) -> bool:
        return self.save(KEY_TASKS, encode_tasks(tasks))

    def load_view(self) -> ViewMode:
        return decode_view(self._load_text(KEY_VIEW)) or ViewMode.WEEK

    def save_view(self, mode: ViewMode) -> bool:
        return self._save_text(KEY_VIEW, ViewMode(mode).value)

    def load_selected_day(self) -> Optional[dt.date]:
        return decode_day(self._load_text(KEY_SELECTED_DAY))

    def save_selected_day(self, day: Optional[dt.date]) -> bool:
        if day is None:
            # Only written once a day has been selected.
            return True
        return self._save_text(KEY_SELECTED_DAY, day_key(day))

    def load_time_range(self) -> TimeRange:
        default = TimeRange(self.config.default_range_start, self.config.default_range_end)
        return decode_time_range(self.load(KEY_TIME_RANGE, None)) or default

    def save_time_range(self, time_range: TimeRange) -> bool:
        return self.save(KEY_TIME_RANGE, time_range.to_dict())
