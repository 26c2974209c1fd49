"""
单元测试：MailboxService

测试覆盖：
- limit / offset 规范化
- list_emails / list_folders 在存储故障时返回默认值
- 已读、星标、删除找不到邮件时抛出异常
"""
from unittest import TestCase
from unittest.mock import MagicMock

from app_webmail.exceptions.dependency_failure_exception import DependencyFailureException
from app_webmail.exceptions.mailbox_not_found_exception import MailboxNotFoundException
from app_webmail.exceptions.message_not_found_exception import MessageNotFoundException
from app_webmail.pojo.mail_user import MailUser
from app_webmail.services.maildir_reader import MaildirReader
from app_webmail.services.mailbox_service import MailboxService, clamp_limit, clamp_offset

USER = MailUser(username="bob@example.com", name="Bob", domain="example.com")


class TestClamp(TestCase):
    """测试分页参数"""

    def test_clamp_limit(self):
        """测试 limit 限制在 1..1000"""
        self.assertEqual(clamp_limit("10"), 10)
        self.assertEqual(clamp_limit(0), 1)
        self.assertEqual(clamp_limit(-5), 1)
        self.assertEqual(clamp_limit(5000), 1000)
        self.assertEqual(clamp_limit("abc"), 50)
        self.assertEqual(clamp_limit(None), 50)

    def test_clamp_offset(self):
        """测试 offset 不小于 0"""
        self.assertEqual(clamp_offset("20"), 20)
        self.assertEqual(clamp_offset(-1), 0)
        self.assertEqual(clamp_offset("x"), 0)


class TestMailboxService(TestCase):
    """测试 MailboxService"""

    def setUp(self):
        """每个测试前设置"""
        self.service = MailboxService.__new__(MailboxService)
        self.service.reader = MagicMock()
        self.service.writer = MagicMock()
        self.service.reader.fallback_folders.side_effect = MaildirReader.fallback_folders

    def test_list_emails(self):
        """测试列表参数规范化"""
        self.service.reader.list_page.return_value = ([], 0)

        result = self.service.list_emails(USER, folder="inbox", limit="5000", offset="-3")

        self.assertEqual(result, {"emails": [], "total": 0, "folder": "INBOX"})
        self.service.reader.list_page.assert_called_once_with("bob@example.com", "INBOX", 1000, 0)
        self.service.reader.count_messages.assert_not_called()

    def test_list_emails_storage_failure(self):
        """测试存储故障时返回空列表"""
        self.service.reader.list_page.side_effect = DependencyFailureException("Mail storage unavailable")

        result = self.service.list_emails(USER)

        self.assertEqual(result["emails"], [])
        self.assertEqual(result["total"], 0)

    def test_list_emails_unknown_mailbox(self):
        """测试邮箱不存在时抛出异常"""
        self.service.reader.list_page.side_effect = MailboxNotFoundException("Mailbox not found")
        with self.assertRaises(MailboxNotFoundException):
            self.service.list_emails(USER)

    def test_list_folders_directory_failure(self):
        """测试邮箱目录故障时返回回退文件夹"""
        self.service.reader.list_folders.side_effect = DependencyFailureException("Mailbox directory unavailable")

        result = self.service.list_folders(USER)

        self.assertEqual([f["name"] for f in result["folders"]], ["INBOX", "Sent", "Drafts", "Trash", "Junk"])
        self.assertEqual(result["folders"][4]["displayName"], "Spam")

    def test_get_email_not_found(self):
        """测试邮件不存在"""
        self.service.reader.get_message.return_value = None
        with self.assertRaises(MessageNotFoundException):
            self.service.get_email(USER, "INBOX", "1")

    def test_flags_not_found(self):
        """测试已读、星标、删除找不到邮件"""
        self.service.writer.set_flag.return_value = False
        self.service.writer.move_to_trash.return_value = False

        with self.assertRaises(MessageNotFoundException):
            self.service.mark_as_read(USER, "INBOX", "1")
        with self.assertRaises(MessageNotFoundException):
            self.service.toggle_star(USER, "INBOX", "1", True)
        with self.assertRaises(MessageNotFoundException):
            self.service.delete_email(USER, "INBOX", "1")

    def test_toggle_star(self):
        """测试星标使用 F 标志位"""
        self.service.writer.set_flag.return_value = True

        self.assertEqual(self.service.toggle_star(USER, "Sent", "uid-1", False), {"message": "Email unstarred"})
        self.service.writer.set_flag.assert_called_once_with("bob@example.com", "Sent", "uid-1", "F", False)
