import unittest
from datetime import datetime, date, timezone
from freezegun import freeze_time

from utils.date_utils import (
    InvalidDateError,
    parse_date,
    to_midnight,
    elapsed_days,
    add_days,
    current_time,
)


class TestParseDate(unittest.TestCase):

    def test_parses_date_only_string_as_midnight(self):
        self.assertEqual(parse_date("2023-10-01", "entryDate"), datetime(2023, 10, 1))

    def test_parses_string_with_time(self):
        self.assertEqual(parse_date("2023-11-10T10:00:00", "date"), datetime(2023, 11, 10, 10, 0))

    def test_promotes_date_objects(self):
        self.assertEqual(parse_date(date(2023, 10, 1), "entryDate"), datetime(2023, 10, 1))

    def test_keeps_naive_datetimes(self):
        value = datetime(2023, 10, 1, 15, 30)
        self.assertEqual(parse_date(value, "date"), value)

    def test_converts_aware_datetimes_to_app_timezone(self):
        # Buenos Aires is UTC-3 all year
        value = datetime(2023, 10, 1, 12, 0, tzinfo=timezone.utc)
        self.assertEqual(parse_date(value, "date"), datetime(2023, 10, 1, 9, 0))

    def test_converts_utc_strings_to_app_timezone(self):
        self.assertEqual(parse_date("2023-10-01T02:00:00Z", "date"), datetime(2023, 9, 30, 23, 0))

    def test_rejects_missing_and_malformed_values(self):
        for value in (None, "", "   ", "not-a-date", "2023-13-45", 20231001, []):
            with self.subTest(value=value):
                with self.assertRaises(InvalidDateError):
                    parse_date(value, "entryDate", "tenant-1")

    def test_error_names_field_and_record(self):
        with self.assertRaises(InvalidDateError) as ctx:
            parse_date("garbage", "dueDate", "payment-9")
        self.assertEqual(ctx.exception.field, "dueDate")
        self.assertEqual(ctx.exception.record_id, "payment-9")
        self.assertIn("dueDate", str(ctx.exception))
        self.assertIn("payment-9", str(ctx.exception))
        self.assertIsInstance(ctx.exception, ValueError)


class TestDateArithmetic(unittest.TestCase):

    def test_elapsed_days_floors_partial_days(self):
        self.assertEqual(elapsed_days(datetime(2023, 11, 10, 10, 0), datetime(2023, 11, 15)), 4)

    def test_elapsed_days_is_negative_for_future_dates(self):
        self.assertEqual(elapsed_days(datetime(2023, 11, 19), datetime(2023, 11, 15)), -4)
        # Floors toward negative infinity, like whole-day buckets
        self.assertEqual(elapsed_days(datetime(2023, 11, 15, 12, 0), datetime(2023, 11, 15)), -1)

    def test_to_midnight(self):
        self.assertEqual(to_midnight(datetime(2023, 11, 15, 23, 59, 59, 999)), datetime(2023, 11, 15))

    def test_add_days_crosses_month_boundaries(self):
        self.assertEqual(add_days(datetime(2023, 10, 1), 30), datetime(2023, 10, 31))
        self.assertEqual(add_days(datetime(2024, 2, 1), 30), datetime(2024, 3, 2))

    @freeze_time("2023-11-15 12:00:00")
    def test_current_time_is_naive_app_local_time(self):
        now = current_time()
        self.assertIsNone(now.tzinfo)
        self.assertEqual(now, datetime(2023, 11, 15, 9, 0))


if __name__ == '__main__':
    unittest.main()
