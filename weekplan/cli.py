from __future__ import annotations

import argparse
import datetime as dt
import logging
from pathlib import Path

from .config import default_store_path
from .model import Event, RecordId
from .planner import Planner
from .storage import FileStorage
from .util.console import warn
from .util.timeparse import parse_date_yyyy_mm_dd, parse_hhmm


def _date(s: str) -> dt.date:
    try:
        return parse_date_yyyy_mm_dd(s)
    except ValueError:
        raise SystemExit(f"Invalid date (expected YYYY-MM-DD): {s!r}")


def _hhmm(s: str) -> tuple[int, int]:
    try:
        return parse_hhmm(s)
    except ValueError as e:
        raise SystemExit(str(e))


def _task_id(planner: Planner, day: dt.date, raw: str) -> RecordId:
    for t in planner.tasks_for_day(day):
        if str(t.id) == raw:
            return t.id
    raise SystemExit(f"No task {raw!r} on {day.isoformat()}")


def _event_id(planner: Planner, raw: str) -> RecordId:
    for e in planner.events.all():
        if str(e.id) == raw:
            return e.id
    raise SystemExit(f"No event {raw!r}")


def _require_yes(args: argparse.Namespace, what: str) -> None:
    if not getattr(args, "yes", False):
        raise SystemExit(f"Refusing to {what} without --yes")


def _fmt_event(planner: Planner, ev: Event) -> str:
    lay = planner.layout(ev)
    return (
        f"  {ev.start:%H:%M}-{ev.end:%H:%M}  {ev.title}  "
        f"[top={lay.offset:g} height={lay.extent:g}]  id={ev.id}"
    )


def _print_week(planner: Planner) -> None:
    print(planner.title())
    for day in planner.week_days():
        mark = " *" if planner.is_today(day) else ""
        print(f"{day:%a} {day.isoformat()}{mark}")
        for ev in planner.all_day_for_day(day):
            print(f"  (all day) {ev.title}  id={ev.id}")
        for ev in planner.events_for_day(day):
            print(f"  {ev.start:%H:%M} {ev.title}  id={ev.id}")
        for t in planner.tasks_for_day(day):
            box = "x" if t.completed else " "
            print(f"  [{box}] {t.text or '(empty)'}  id={t.id}")


def _print_day(planner: Planner, day: dt.date) -> None:
    print(planner.title())
    tr = planner.time_range
    print(f"Hours {tr.start:02d}:00-{tr.end:02d}:00")
    all_day = planner.all_day_for_day(day)
    for ev in all_day:
        print(f"  (all day) {ev.title}  id={ev.id}")
    if not all_day:
        print("  No all-day events scheduled")
    for ev in planner.visible_events(day):
        print(_fmt_event(planner, ev))
    for t in planner.tasks_for_day(day):
        box = "x" if t.completed else " "
        print(f"  [{box}] {t.text or '(empty)'}  id={t.id}")


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Weekly planner: day tasks and calendar events stored locally.")
    ap.add_argument(
        "--store",
        default=None,
        help="Storage file (default: $WEEKPLAN_HOME/storage.json or ~/.weekplan/storage.json)",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Log informational messages")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("week", help="Show the week grid")
    p.add_argument("--anchor", default=None, help="Any date inside the week (default: today)")
    p.add_argument("--offset", type=int, default=0, help="Weeks to move from the anchor (e.g. -1, 1)")

    p = sub.add_parser("day", help="Show the day timeline")
    p.add_argument("date", nargs="?", default=None, help="YYYY-MM-DD (default: last viewed day)")
    p.add_argument("--today", action="store_true", help="Jump to today")

    p = sub.add_parser("task", help="Manage day tasks")
    tsub = p.add_subparsers(dest="task_cmd", required=True)
    tp = tsub.add_parser("add")
    tp.add_argument("date")
    tp.add_argument("text", nargs="?", default="")
    tp = tsub.add_parser("text")
    tp.add_argument("date")
    tp.add_argument("id")
    tp.add_argument("text")
    tp = tsub.add_parser("toggle")
    tp.add_argument("date")
    tp.add_argument("id")
    tp = tsub.add_parser("rm")
    tp.add_argument("date")
    tp.add_argument("id")
    tp.add_argument("--yes", action="store_true", help="Confirm deletion")

    p = sub.add_parser("event", help="Manage calendar events")
    esub = p.add_subparsers(dest="event_cmd", required=True)
    ep = esub.add_parser("add")
    ep.add_argument("date")
    ep.add_argument("start", help="HH:MM")
    ep.add_argument("end", help="HH:MM")
    ep.add_argument("title")
    ep.add_argument("--all-day", action="store_true")
    ep.add_argument("--color", default=None)
    ep.add_argument("--description", default=None)
    ep = esub.add_parser("rm")
    ep.add_argument("id")
    ep.add_argument("--yes", action="store_true", help="Confirm deletion")

    p = sub.add_parser("convert", help="Turn a day task into a one-hour event")
    p.add_argument("date")
    p.add_argument("id")
    p.add_argument("--at", default=None, help="Start time HH:MM (default: current hour or noon)")
    p.add_argument("--keep", action="store_true", help="Keep the original task")

    p = sub.add_parser("range", help="Set the visible hour window")
    p.add_argument("start", type=int)
    p.add_argument("end", type=int)

    p = sub.add_parser("reset", help="Delete all planner data")
    p.add_argument("--yes", action="store_true", help="Confirm reset")
    return ap


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    store = Path(args.store).expanduser() if args.store else default_store_path()
    planner = Planner(FileStorage(store))

    if args.cmd == "week":
        if args.anchor:
            planner.set_anchor(_date(args.anchor))
        planner.show_week()
        for _ in range(abs(args.offset)):
            planner.navigate(1 if args.offset > 0 else -1)
        _print_week(planner)
        return

    if args.cmd == "day":
        if args.today:
            view = planner.go_to_today()
        else:
            view = planner.show_day(_date(args.date) if args.date else None)
        _print_day(planner, view.selected_day)
        return

    if args.cmd == "task":
        day = _date(args.date)
        if args.task_cmd == "add":
            task = planner.add_task(day, args.text)
            print(task.id)
        elif args.task_cmd == "text":
            planner.update_task(day, _task_id(planner, day, args.id), args.text)
        elif args.task_cmd == "toggle":
            planner.toggle_task(day, _task_id(planner, day, args.id))
        elif args.task_cmd == "rm":
            tid = _task_id(planner, day, args.id)
            _require_yes(args, "delete a task")
            planner.delete_task(day, tid)
        return

    if args.cmd == "event":
        if args.event_cmd == "add":
            day = _date(args.date)
            sh, sm = _hhmm(args.start)
            eh, em = _hhmm(args.end)
            planner.open_add(day, sh, sm)
            planner.modal.set_title(args.title)
            planner.modal.set_end_time(eh, em)
            planner.modal.set_all_day(args.all_day)
            if args.color:
                planner.modal.set_color(args.color)
            if args.description:
                planner.modal.set_description(args.description)
            draft = planner.modal.draft
            out = planner.confirm_add()
            if not out.ok:
                planner.cancel_modal()
                raise SystemExit(f"Event not added: {out.reason}")
            print(draft.id if draft is not None else "")
        elif args.event_cmd == "rm":
            eid = _event_id(planner, args.id)
            _require_yes(args, "delete an event")
            planner.delete_event(eid)
        return

    if args.cmd == "convert":
        day = _date(args.date)
        out = planner.convert_task(day, _task_id(planner, day, args.id), remove_original=not args.keep)
        if not out.ok:
            raise SystemExit(f"Cannot convert task: {out.reason}")
        if args.at:
            planner.modal.set_start_time(*_hhmm(args.at))
        draft = planner.modal.draft
        out = planner.confirm_convert()
        if not out.ok:
            warn(f"task not converted: {out.reason}")
            return
        print(draft.id if draft is not None else "")
        return

    if args.cmd == "range":
        out = planner.set_time_range(args.start, args.end)
        if not out.ok:
            raise SystemExit(f"Invalid range {args.start}-{args.end}: need 0 <= start < end <= 24")
        return

    if args.cmd == "reset":
        _require_yes(args, "reset all planner data")
        planner.reset()
        print("planner data cleared")
        return


if __name__ == "__main__":
    main()
