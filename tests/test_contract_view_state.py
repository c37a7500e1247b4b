from __future__ import annotations

import datetime as dt
import unittest

from weekplan.model import ViewMode
from weekplan.view import ViewState, start_of_week


class TestViewStateContract(unittest.TestCase):
    def test_navigate_week_moves_anchor_by_seven_days(self) -> None:
        v = ViewState.initial(dt.date(2025, 2, 16))
        self.assertEqual(v.navigate(1).anchor, dt.date(2025, 2, 23))
        self.assertEqual(v.navigate(-1).anchor, dt.date(2025, 2, 9))
        self.assertIs(v.navigate(1).mode, ViewMode.WEEK)

    def test_navigate_day_moves_selected_day(self) -> None:
        v = ViewState.initial(dt.date(2025, 2, 16)).show_day(dt.date(2025, 2, 18))
        self.assertEqual(v.navigate(1).selected_day, dt.date(2025, 2, 19))
        self.assertEqual(v.navigate(-1).selected_day, dt.date(2025, 2, 17))
        self.assertEqual(v.navigate(1).anchor, v.anchor)

    def test_navigate_rejects_other_directions(self) -> None:
        v = ViewState.initial(dt.date(2025, 2, 16))
        for bad in (0, 2, -7, True):
            with self.assertRaises(ValueError):
                v.navigate(bad)

    def test_week_keeps_selected_day_for_resume(self) -> None:
        v = ViewState.initial(dt.date(2025, 2, 16)).show_day(dt.date(2025, 2, 20))
        w = v.show_week()
        self.assertIs(w.mode, ViewMode.WEEK)
        self.assertEqual(w.selected_day, dt.date(2025, 2, 20))
        self.assertEqual(w.show_day().selected_day, dt.date(2025, 2, 20))

    def test_show_day_without_history_uses_anchor(self) -> None:
        v = ViewState.initial(dt.date(2025, 2, 16)).show_day()
        self.assertEqual(v.selected_day, dt.date(2025, 2, 16))
        self.assertTrue(v.is_day)

    def test_go_to_today(self) -> None:
        v = ViewState.initial(dt.date(2025, 2, 16)).go_to_today(dt.date(2025, 3, 1))
        self.assertIs(v.mode, ViewMode.DAY)
        self.assertEqual(v.selected_day, dt.date(2025, 3, 1))

    def test_day_mode_requires_selected_day(self) -> None:
        with self.assertRaises(ValueError):
            ViewState(mode=ViewMode.DAY, anchor=dt.date(2025, 2, 16))
        restored = ViewState.initial(dt.date(2025, 2, 16), mode=ViewMode.DAY)
        self.assertEqual(restored.selected_day, dt.date(2025, 2, 16))

    def test_week_days_start_on_sunday(self) -> None:
        self.assertEqual(start_of_week(dt.date(2025, 2, 16)), dt.date(2025, 2, 16))
        self.assertEqual(start_of_week(dt.date(2025, 2, 22)), dt.date(2025, 2, 16))
        days = ViewState.initial(dt.date(2025, 2, 19)).week_days()
        self.assertEqual(days[0], dt.date(2025, 2, 16))
        self.assertEqual(days[-1], dt.date(2025, 2, 22))
        self.assertEqual(len(days), 7)

    def test_titles(self) -> None:
        v = ViewState.initial(dt.date(2025, 2, 19))
        self.assertEqual(v.title(), "Week of Feb 16 - Feb 22, 2025")
        self.assertEqual(v.show_day(dt.date(2025, 2, 18)).title(), "Tuesday, February 18, 2025")


if __name__ == "__main__":
    unittest.main(verbosity=2)
