from unittest import TestCase


class Test(TestCase):
    def test_explode(self):
        # lazy load
        from common.utils.string_util import explode

        # normal case
        origin_str = "a,b,c"
        expected_result = ["a", "b", "c"]
        actual_result = explode(origin_str)
        self.assertEqual(expected_result, actual_result)

        # blank items case
        origin_str = " a@x.com , ,b@y.com,"
        expected_result = ["a@x.com", "b@y.com"]
        actual_result = explode(origin_str)
        self.assertEqual(expected_result, actual_result)

        # empty case
        origin_str = ""
        expected_result = []
        actual_result = explode(origin_str)
        self.assertEqual(expected_result, actual_result)

        # None case
        origin_str = None
        expected_result = []
        actual_result = explode(origin_str)
        self.assertEqual(expected_result, actual_result)

    def test_implode(self):
        # lazy load
        from common.utils.string_util import implode

        self.assertEqual("a,b", implode(["a", "b"]))
        self.assertEqual("1;2", implode([1, 2], ";"))
        self.assertEqual("", implode([]))

    def test_check_blank(self):
        # lazy load
        from common.utils.string_util import check_blank

        # normal case
        origin_str = "a"
        expected_result = False
        actual_result = check_blank(origin_str)
        self.assertEqual(expected_result, actual_result)

        # empty case
        origin_str = ""
        expected_result = True
        actual_result = check_blank(origin_str)
        self.assertEqual(expected_result, actual_result)

        # None case
        origin_str = None
        expected_result = True
        actual_result = check_blank(origin_str)
        self.assertEqual(expected_result, actual_result)

        # blank case
        origin_str = " "
        expected_result = True
        actual_result = check_blank(origin_str)
        self.assertEqual(expected_result, actual_result)

    def test_truncate(self):
        # lazy load
        from common.utils.string_util import truncate

        self.assertEqual("abc", truncate("abc", 5))
        self.assertEqual("abc..", truncate("abcdefg", 5))
        with self.assertRaises(Exception):
            truncate("abc", 2)

    def test_collapse_whitespace(self):
        # lazy load
        from common.utils.string_util import collapse_whitespace

        self.assertEqual("Hello world", collapse_whitespace(" Hello \n\n  world "))
        self.assertEqual("", collapse_whitespace("\t\r\n"))
