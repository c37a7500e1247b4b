# weekplan/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .model import DEFAULT_EVENT_COLOR

KEY_EVENTS = "planner-events"
KEY_TASKS = "planner-tasks"
KEY_VIEW = "planner-view"
KEY_SELECTED_DAY = "planner-selected-day"
KEY_TIME_RANGE = "planner-time-range"

ALL_KEYS = (KEY_EVENTS, KEY_TASKS, KEY_VIEW, KEY_SELECTED_DAY, KEY_TIME_RANGE)

ENV_HOME = "WEEKPLAN_HOME"


@dataclass(frozen=True)
class PlannerConfig:
    default_range_start: int = 8
    default_range_end: int = 20
    fallback_hour: int = 12
    # Vertical units per hour in the day timeline.
    scale: float = 60.0
    slot_min: int = 15
    default_color: str = DEFAULT_EVENT_COLOR


DEFAULT_CONFIG = PlannerConfig()


def default_store_path() -> Path:
    """Storage file used by the CLI: $WEEKPLAN_HOME/storage.json or ~/.weekplan/storage.json."""
    home = os.getenv(ENV_HOME)
    base = Path(home).expanduser() if home else Path.home() / ".weekplan"
    return base / "storage.json"
