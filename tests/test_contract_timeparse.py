from __future__ import annotations

import datetime as dt
import unittest

from weekplan.util.timeparse import at_hour, day_key, parse_date_yyyy_mm_dd, parse_day, parse_hhmm, parse_instant


class TestTimeparseContract(unittest.TestCase):
    def test_parse_hhmm(self) -> None:
        self.assertEqual(parse_hhmm("09:30"), (9, 30))
        self.assertEqual(parse_hhmm(" 7:05 "), (7, 5))
        for bad in ("24:00", "12:60", "noon", "9", ""):
            with self.assertRaises(ValueError):
                parse_hhmm(bad)

    def test_day_key_format(self) -> None:
        self.assertEqual(day_key(dt.date(2025, 2, 3)), "2025-02-03")
        self.assertEqual(parse_date_yyyy_mm_dd("2025-02-03"), dt.date(2025, 2, 3))

    def test_parse_instant_naive_is_kept(self) -> None:
        self.assertEqual(parse_instant("2025-02-18T09:00:00"), dt.datetime(2025, 2, 18, 9, 0))
        self.assertEqual(parse_instant("2025-02-18T09:00:00.250000"), dt.datetime(2025, 2, 18, 9, 0, 0, 250000))

    def test_parse_instant_utc_suffix_converts_to_local(self) -> None:
        got = parse_instant("2025-02-18T09:00:00.000Z")
        want = dt.datetime(2025, 2, 18, 9, 0, tzinfo=dt.timezone.utc).astimezone().replace(tzinfo=None)
        self.assertIsNone(got.tzinfo)
        self.assertEqual(got, want)

    def test_parse_day_accepts_date_or_timestamp(self) -> None:
        self.assertEqual(parse_day("2025-02-18"), dt.date(2025, 2, 18))
        self.assertEqual(parse_day("2025-02-18T12:00:00"), dt.date(2025, 2, 18))
        with self.assertRaises(ValueError):
            parse_day("not a date")

    def test_at_hour(self) -> None:
        self.assertEqual(at_hour(dt.date(2025, 2, 18), 9, 15), dt.datetime(2025, 2, 18, 9, 15))


if __name__ == "__main__":
    unittest.main(verbosity=2)
