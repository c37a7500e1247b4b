from __future__ import annotations

import datetime as dt
import unittest

from weekplan.config import KEY_EVENTS, KEY_SELECTED_DAY, KEY_TASKS, KEY_TIME_RANGE, KEY_VIEW
from weekplan.model import Event, Task, ViewMode
from weekplan.persist import PersistenceAdapter, decode_event
from weekplan.storage import MemoryStorage
from weekplan.timerange import TimeRange


def _event(**kw) -> Event:
    base = dict(
        id="e1",
        title="Standup",
        start=dt.datetime(2025, 2, 18, 9, 0),
        end=dt.datetime(2025, 2, 18, 9, 30),
    )
    base.update(kw)
    return Event(**base)


class TestPersistenceContract(unittest.TestCase):
    def setUp(self) -> None:
        self.storage = MemoryStorage()
        self.p = PersistenceAdapter(self.storage)

    def test_events_round_trip_as_instants(self) -> None:
        events = (
            _event(),
            _event(id="e2", title="Lunch", start=dt.datetime(2025, 2, 18, 12, 0, 0, 500), end=dt.datetime(2025, 2, 18, 13, 0), description="with Sam"),
            _event(id="e3", title="From task", from_task=True, task_id=42, color="hsl(270, 80%, 50%)"),
            _event(id=7, title="Offsite", all_day=True),
            _event(id="e4", title="Linked", task_id="t1"),
            _event(id="e5", title="No color", color=""),
            _event(id="", title="Blank id"),
        )
        self.assertTrue(self.p.save_events(events))
        self.assertEqual(self.p.load_events(), events)

    def test_dates_are_iso_strings_on_disk(self) -> None:
        self.p.save_events([_event(from_task=True, task_id="t1")])
        raw = self.storage.get_item(KEY_EVENTS)
        self.assertIn('"start":"2025-02-18T09:00:00"', raw)
        self.assertIn('"allDay":false', raw)
        self.assertIn('"fromTask":true', raw)
        self.assertIn('"taskId":"t1"', raw)

    def test_tasks_round_trip(self) -> None:
        tasks = {
            "2025-02-18": (Task(id=1739870000000, text="buy milk"), Task(id="b", text="", completed=True)),
            "2025-02-19": (Task(id="c", text="call"),),
            "2025-02-20": (Task(id="", text="blank id"),),
        }
        self.p.save_tasks(tasks)
        self.assertEqual(self.p.load_tasks(), tasks)

    def test_browser_written_events_are_rehydrated(self) -> None:
        self.storage.set_item(
            KEY_EVENTS,
            '[{"id":1,"title":"Hackathon","start":"2025-02-18T09:00:00.000Z",'
            '"end":"2025-02-18T17:00:00.000Z","allDay":true,"color":"#9333EA"}]',
        )
        (ev,) = self.p.load_events()
        want = dt.datetime(2025, 2, 18, 9, 0, tzinfo=dt.timezone.utc).astimezone().replace(tzinfo=None)
        self.assertEqual(ev.start, want)
        self.assertIsInstance(ev.end, dt.datetime)
        self.assertTrue(ev.all_day)
        self.assertEqual(ev.id, 1)

    def test_missing_slots_use_defaults(self) -> None:
        self.assertEqual(self.p.load_events(), ())
        self.assertEqual(self.p.load_tasks(), {})
        self.assertIs(self.p.load_view(), ViewMode.WEEK)
        self.assertIsNone(self.p.load_selected_day())
        self.assertEqual(self.p.load_time_range(), TimeRange(8, 20))
        self.assertEqual(self.p.load("nope", {"x": 1}), {"x": 1})

    def test_corrupt_slot_falls_back_and_logs(self) -> None:
        self.storage.set_item(KEY_TASKS, "{broken")
        with self.assertLogs("weekplan.persist", level="WARNING") as cm:
            self.assertEqual(self.p.load_tasks(), {})
        self.assertTrue(any(KEY_TASKS in line for line in cm.output))

    def test_malformed_records_are_skipped(self) -> None:
        self.storage.set_item(
            KEY_EVENTS,
            '[{"id":"ok","title":"A","start":"2025-02-18T09:00:00","end":"2025-02-18T10:00:00"},'
            '{"id":"bad","title":"B","start":"yesterday"},'
            '"junk"]',
        )
        with self.assertLogs("weekplan.persist", level="WARNING"):
            events = self.p.load_events()
        self.assertEqual([e.id for e in events], ["ok"])

    def test_decode_event_defaults(self) -> None:
        ev = decode_event({"id": "x", "start": "2025-02-18T09:00:00", "end": "2025-02-18T10:00:00", "taskId": "t"})
        self.assertIsNotNone(ev)
        self.assertEqual(ev.title, "")
        self.assertEqual(ev.color, "#9333EA")
        self.assertFalse(ev.from_task)
        self.assertEqual(ev.task_id, "t")
        self.assertEqual(decode_event({"id": "x", "start": "2025-02-18T09:00:00", "end": "2025-02-18T10:00:00", "color": 5}).color, "#9333EA")
        self.assertIsNone(decode_event({"start": "2025-02-18T09:00:00", "end": "2025-02-18T10:00:00"}))

    def test_view_accepts_json_and_plain_strings(self) -> None:
        self.p.save_view(ViewMode.DAY)
        self.assertEqual(self.storage.get_item(KEY_VIEW), "day")
        self.assertIs(self.p.load_view(), ViewMode.DAY)

        self.storage.set_item(KEY_VIEW, '"day"')
        self.assertIs(self.p.load_view(), ViewMode.DAY)

        self.storage.set_item(KEY_VIEW, "month")
        self.assertIs(self.p.load_view(), ViewMode.WEEK)

    def test_selected_day_only_written_when_present(self) -> None:
        self.assertTrue(self.p.save_selected_day(None))
        self.assertIsNone(self.storage.get_item(KEY_SELECTED_DAY))

        self.p.save_selected_day(dt.date(2025, 2, 18))
        self.assertEqual(self.storage.get_item(KEY_SELECTED_DAY), "2025-02-18")
        self.assertEqual(self.p.load_selected_day(), dt.date(2025, 2, 18))

        self.storage.set_item(KEY_SELECTED_DAY, '"2025-02-20"')
        self.assertEqual(self.p.load_selected_day(), dt.date(2025, 2, 20))

        self.storage.set_item(KEY_SELECTED_DAY, "2025-02-19T12:00:00")
        self.assertEqual(self.p.load_selected_day(), dt.date(2025, 2, 19))

    def test_invalid_stored_time_range_uses_default(self) -> None:
        self.storage.set_item(KEY_TIME_RANGE, '{"start":20,"end":8}')
        self.assertEqual(self.p.load_time_range(), TimeRange(8, 20))
        self.p.save_time_range(TimeRange(6, 22))
        self.assertEqual(self.p.load_time_range(), TimeRange(6, 22))

    def test_write_failure_is_logged_not_raised(self) -> None:
        p = PersistenceAdapter(MemoryStorage(quota_bytes=16))
        with self.assertLogs("weekplan.persist", level="WARNING") as cm:
            ok = p.save_events([_event()])
        self.assertFalse(ok)
        self.assertTrue(any("could not save" in line for line in cm.output))

    def test_clear_removes_keys(self) -> None:
        self.p.save_view(ViewMode.DAY)
        self.p.save_time_range(TimeRange(6, 22))
        self.p.clear()
        self.assertEqual(list(self.storage.keys()), [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
