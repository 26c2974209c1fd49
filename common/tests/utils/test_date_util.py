from datetime import datetime, timezone
from unittest import TestCase

from common.utils.date_util import (
    get_full_date_str,
    get_short_date_str,
    parse_iso_datetime,
)


class Test(TestCase):
    def test_parse_iso_datetime(self):
        self.assertEqual(datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc),
                         parse_iso_datetime("2024-05-01T08:30:00+00:00"))
        self.assertEqual(datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc),
                         parse_iso_datetime("2024-05-01T08:30:00Z"))
        self.assertIsNone(parse_iso_datetime("not a date"))
        self.assertIsNone(parse_iso_datetime(""))

    def test_get_short_date_str(self):
        now = datetime(2024, 5, 1, 18, 0, tzinfo=timezone.utc)

        # same day
        self.assertEqual("08:30", get_short_date_str(datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc), now))
        # same year
        self.assertEqual("Mar 7", get_short_date_str(datetime(2024, 3, 7, 8, 30, tzinfo=timezone.utc), now))
        # other year
        self.assertEqual("2023/12/31", get_short_date_str(datetime(2023, 12, 31, tzinfo=timezone.utc), now))

    def test_get_full_date_str(self):
        self.assertEqual("Wed, May 1, 2024, 08:30",
                         get_full_date_str(datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)))
