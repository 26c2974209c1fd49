"""
单元测试：MailboxState

测试覆盖：
- 加载、切换文件夹、分页
- 打开邮件标记已读
- 星标、删除、批量删除
- 选择、全选
- 搜索
- 发送校验
"""
from unittest.mock import MagicMock

from django.test import SimpleTestCase

from app_console.clients.base_provider import MailDataProvider
from app_console.clients.demo_provider import DEMO_USER, DemoDataProvider
from app_console.exceptions.mail_data_exception import MailDataException
from app_console.session import ClientSession
from app_console.state import MailboxState, email_key, matches


class TestHelpers(SimpleTestCase):

    def test_email_key_prefers_uid(self):
        self.assertEqual(email_key({"id": 3, "uid": "1700.M1.host"}), "1700.M1.host")
        self.assertEqual(email_key({"id": 3, "uid": ""}), "3")
        self.assertEqual(email_key({"id": 0}), "0")

    def test_matches(self):
        email = {"sender": "John Smith", "subject": "Invoice", "snippet": None, "body": "Due Friday"}
        self.assertTrue(matches(email, "john"))
        self.assertTrue(matches(email, "INVOICE"))
        self.assertTrue(matches(email, "friday"))
        self.assertFalse(matches(email, "monday"))


class TestMailboxState(SimpleTestCase):

    def setUp(self):
        """每个测试前设置"""
        self.provider = DemoDataProvider(seed=3)
        self.session = ClientSession("demo-token", dict(DEMO_USER))
        self.state = MailboxState(self.provider, self.session).load()

    def test_default_folder(self):
        self.assertEqual(self.state.folder, "inbox")
        self.assertEqual(len(self.state.emails), min(self.state.total, 50))

    def test_switch_folder_resets_selection(self):
        self.state.select(email_key(self.state.emails[0]))
        self.state.search("x")
        self.state.switch_folder("trash")
        self.assertEqual(self.state.folder, "trash")
        self.assertEqual(self.state.selected, set())
        self.assertEqual(self.state.query, "")
        self.assertTrue(all(email["folder"] == "trash" for email in self.state.emails))

    def test_open_marks_read(self):
        unread = next(email for email in self.provider.emails if email["folder"] == "inbox" and email["unread"])
        opened = self.state.open(str(unread["id"]))
        self.assertFalse(opened["unread"])
        self.assertFalse(self.provider.get_email(self.session, "inbox", unread["id"])["unread"])
        self.assertIs(self.state.current, opened)

    def test_open_read_message_does_not_mark(self):
        provider = MagicMock(spec=MailDataProvider)
        provider.default_folder = "INBOX"
        provider.get_email.return_value = {"id": 1, "unread": False}
        state = MailboxState(provider, self.session)
        state.open("1")
        provider.mark_as_read.assert_not_called()

    def test_toggle_star(self):
        email = self.state.emails[0]
        key = email_key(email)
        starred = self.state.toggle_star(key)
        self.assertEqual(starred, not email["starred"])
        reloaded = next(e for e in self.state.emails if email_key(e) == key)
        self.assertEqual(reloaded["starred"], starred)
        self.assertEqual(self.state.toggle_star(key), not starred)

    def test_toggle_star_of_unlisted_message(self):
        """测试未在列表中的邮件也可星标"""
        trash_state = MailboxState(self.provider, self.session, "trash")
        email = self.state.emails[0]
        self.assertEqual(trash_state.toggle_star(email_key(email)), not email["starred"])

    def test_delete(self):
        key = email_key(self.state.emails[0])
        total = self.state.total
        self.state.select(key)
        self.state.delete(key)
        self.assertEqual(self.state.total, total - 1)
        self.assertNotIn(key, self.state.selected)
        self.assertNotIn(key, [email_key(email) for email in self.state.emails])

    def test_select(self):
        key = email_key(self.state.emails[0])
        self.state.select(key)
        self.assertIn(key, self.state.selected)
        self.state.select(key, False)
        self.assertNotIn(key, self.state.selected)

    def test_select_all(self):
        self.state.select_all()
        self.assertTrue(self.state.all_selected)
        self.assertEqual(len(self.state.selected), len(self.state.emails))
        self.state.select_all(False)
        self.assertEqual(self.state.selected, set())

    def test_select_all_only_visible(self):
        """测试全选只作用于搜索结果"""
        self.state.search(self.state.emails[0]["subject"])
        self.state.select_all()
        self.assertEqual(len(self.state.selected), len(self.state.visible_emails))

    def test_delete_selected(self):
        keys = [email_key(email) for email in self.state.emails[:3]]
        total = self.state.total
        self.state.select_many(keys)
        self.assertEqual(self.state.delete_selected(), 3)
        self.assertEqual(self.state.total, total - 3)
        self.assertEqual(self.state.selected, set())
        trash = self.provider.get_emails(self.session, "trash", limit=1000)["emails"]
        self.assertTrue(set(keys).issubset({email_key(email) for email in trash}))

    def test_delete_selected_skips_missing(self):
        self.state.select_many([email_key(self.state.emails[0]), "9999"])
        self.assertEqual(self.state.delete_selected(), 1)

    def test_delete_selected_stops_on_auth_error(self):
        provider = MagicMock(spec=MailDataProvider)
        provider.default_folder = "INBOX"
        provider.delete_email.side_effect = MailDataException("Invalid token", status=403)
        state = MailboxState(provider, self.session)
        state.select("1")
        with self.assertRaises(MailDataException):
            state.delete_selected()

    def test_search(self):
        sender = self.state.emails[0]["sender"]
        results = self.state.search(sender.upper())
        self.assertTrue(results)
        self.assertTrue(all(matches(email, sender) for email in results))
        self.assertEqual(self.state.search(""), self.state.emails)
        self.assertEqual(self.state.search("no-such-text-anywhere"), [])

    def test_pagination(self):
        self.assertEqual(self.state.has_next_page, self.state.total > 50)
        self.state.load(offset=-5)
        self.assertEqual(self.state.offset, 0)

    def test_send(self):
        self.state.switch_folder("sent")
        total = self.state.total
        result = self.state.send("a@x.com, b@x.com", " Hello ", "Body")
        self.assertEqual(result["message"], "Email sent successfully")
        self.assertEqual(self.state.total, total + 1)
        self.assertEqual(self.state.emails[0]["subject"], "Hello")

    def test_send_passes_lists(self):
        provider = MagicMock(spec=MailDataProvider)
        provider.default_folder = "INBOX"
        provider.send_email.return_value = {"message": "Email sent successfully"}
        state = MailboxState(provider, self.session)
        state.send("a@x.com,b@x.com", "Hi", cc="c@x.com", password="pw")
        provider.send_email.assert_called_once_with(
            self.session,
            to=["a@x.com", "b@x.com"],
            subject="Hi",
            body="",
            cc=["c@x.com"],
            bcc=[],
            password="pw",
        )

    def test_send_requires_to_and_subject(self):
        for to, subject in (("", "Hi"), ("a@x.com", "  ")):
            with self.assertRaises(MailDataException) as ctx:
                self.state.send(to, subject)
            self.assertEqual(ctx.exception.status, 400)
