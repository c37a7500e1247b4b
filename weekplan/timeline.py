# weekplan/timeline.py
"""Day-timeline geometry: block layout, overlap lanes, hour ruler, click slots."""

from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Tuple

from .model import Event, HourMark, LaneSlot, Layout
from .timerange import TimeRange

DEFAULT_SCALE = 60.0


def _hour_of_day(t: dt.datetime) -> float:
    return t.hour + t.minute / 60.0 + t.second / 3600.0


def layout(event: Event, time_range: TimeRange, scale: float = DEFAULT_SCALE) -> Layout:
    """Vertical offset/extent of an event block, `scale` units per hour.

    Assumes the event is at least partly visible (see events.is_visible).
    An event ending before it starts gets a zero extent.
    """
    start_h = _hour_of_day(event.start)
    end_h = _hour_of_day(event.end)
    return Layout(
        offset=(start_h - time_range.start) * scale,
        extent=max(0.0, (end_h - start_h) * scale),
    )


def assign_lanes(events: Iterable[Event]) -> List[LaneSlot]:
    """Place overlapping events side by side.

    Events are grouped into clusters of transitively overlapping intervals;
    inside a cluster each event takes the first lane that is free at its start.
    Touching intervals (one ends when the next starts) do not overlap.
    """
    items = sorted(events, key=lambda e: (e.start, e.end))
    groups: List[List[Event]] = []
    cur: List[Event] = []
    max_end = None
    for ev in items:
        if cur and max_end is not None and ev.start < max_end:
            cur.append(ev)
            max_end = max(max_end, ev.end)
            continue
        if cur:
            groups.append(cur)
        cur = [ev]
        max_end = ev.end
    if cur:
        groups.append(cur)

    out: List[LaneSlot] = []
    for cluster_id, g in enumerate(groups):
        lanes: List[dt.datetime] = []
        assigned: List[Tuple[Event, int]] = []
        for ev in g:
            lane_index = -1
            for i, lane_end in enumerate(lanes):
                if lane_end <= ev.start:
                    lane_index = i
                    break
            if lane_index < 0:
                lane_index = len(lanes)
                lanes.append(ev.end)
            else:
                lanes[lane_index] = ev.end
            assigned.append((ev, lane_index))
        total = max(1, len(lanes))
        for ev, lane in assigned:
            out.append(LaneSlot(event=ev, lane=lane, total_lanes=total, cluster_id=cluster_id))
    return out


def timeline_height(time_range: TimeRange, scale: float = DEFAULT_SCALE) -> float:
    return time_range.span_hours * scale


def format_hour(hour: int) -> str:
    h = int(hour) % 24
    if h == 0:
        return "12 AM"
    if h < 12:
        return f"{h} AM"
    if h == 12:
        return "12 PM"
    return f"{h - 12} PM"


def hour_marks(time_range: TimeRange, scale: float = DEFAULT_SCALE) -> List[HourMark]:
    """Ruler lines from range start to range end inclusive; even hours are major."""
    return [
        HourMark(hour=h, offset=(h - time_range.start) * scale, label=format_hour(h), major=h % 2 == 0)
        for h in range(time_range.start, time_range.end + 1)
    ]


def slot_count(time_range: TimeRange, slot_min: int = 15) -> int:
    return time_range.span_hours * (60 // slot_min)


def slot_at(time_range: TimeRange, index: int, slot_min: int = 15) -> Tuple[int, int]:
    """(hour, minute) of the index-th click slot of the timeline."""
    if not 0 <= index < slot_count(time_range, slot_min):
        raise ValueError(f"slot index out of range: {index}")
    per_hour = 60 // slot_min
    return time_range.start + index // per_hour, (index % per_hour) * slot_min
