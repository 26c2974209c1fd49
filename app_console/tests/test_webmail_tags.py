"""
单元测试：控制台模板标签
"""
from datetime import datetime, timezone

from django.test import SimpleTestCase

from app_console.templatetags.webmail_tags import full_date, short_date, static_mtime


class TestWebmailTags(SimpleTestCase):

    def test_static_mtime_adds_version(self):
        url = static_mtime("console/css/webmail.css")
        self.assertRegex(url, r"^/static/console/css/webmail\.css\?v=\d+$")

    def test_static_mtime_missing_file(self):
        self.assertEqual(static_mtime("console/css/missing.css"), "/static/console/css/missing.css")

    def test_date_filters_ignore_non_dates(self):
        self.assertEqual(short_date(None), "")
        self.assertEqual(full_date("2024-05-01"), "")

    def test_short_date_other_year(self):
        self.assertEqual(short_date(datetime(2001, 5, 1, 8, 30, tzinfo=timezone.utc)), "2001/05/01")
