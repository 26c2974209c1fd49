"""
单元测试：AuthService 登录与会话令牌

测试覆盖：
- login（成功、缺少参数、邮箱不存在、密码错误、服务被禁用）
- issue_token / verify_token（篡改、过期）
"""
from unittest import TestCase
from unittest.mock import patch

from app_webmail.exceptions.auth_exception import AuthException
from app_webmail.exceptions.dependency_failure_exception import DependencyFailureException
from app_webmail.exceptions.token_expired_exception import TokenExpiredException
from app_webmail.exceptions.validation_exception import ValidationException
from app_webmail.models.vmail_mailbox import VmailMailbox
from app_webmail.pojo.mail_user import MailUser
from app_webmail.services.auth_service import AuthService
from common.consts.response_const import RET_ACCOUNT_DISABLED

APP_CONFIG = {
    "token_secret": "test-token-secret",
    "token_max_age": 86400,
    "doveadm_path": "doveadm-not-installed",
    "password_check_timeout": 1,
}


def make_mailbox(**kwargs):
    values = {
        "username": "bob@example.com",
        "password": "{PLAIN}secret",
        "name": "Bob",
        "domain": "example.com",
        "active": True,
        "enablesmtp": True,
        "enableimap": True,
    }
    values.update(kwargs)
    return VmailMailbox(**values)


class TestAuthService(TestCase):
    """测试 AuthService"""

    def setUp(self):
        """每个测试前设置"""
        AuthService.reset_instances()
        self.config_patcher = patch('app_webmail.services.auth_service.get_app_config',
                                    return_value=dict(APP_CONFIG))
        self.repo_patcher = patch('app_webmail.services.auth_service.get_mailbox_by_username')
        self.config_patcher.start()
        self.mock_repo = self.repo_patcher.start()
        self.mock_repo.return_value = make_mailbox()
        self.service = AuthService()

    def tearDown(self):
        """每个测试后清理"""
        self.config_patcher.stop()
        self.repo_patcher.stop()
        AuthService.reset_instances()

    def test_login_success(self):
        """测试登录成功"""
        result = self.service.login(" Bob@Example.com ", "secret")

        self.mock_repo.assert_called_once_with("bob@example.com")
        self.assertEqual(result["user"], {"username": "bob@example.com", "name": "Bob", "domain": "example.com"})
        self.assertEqual(self.service.verify_token(result["token"]).username, "bob@example.com")

    def test_login_missing_fields(self):
        """测试缺少邮箱或密码"""
        with self.assertRaises(ValidationException):
            self.service.login("", "secret")
        with self.assertRaises(ValidationException):
            self.service.login("bob@example.com", "")

    def test_login_unknown_mailbox(self):
        """测试邮箱不存在"""
        self.mock_repo.return_value = None
        with self.assertRaises(AuthException):
            self.service.login("nobody@example.com", "secret")

    def test_login_wrong_password(self):
        """测试密码错误"""
        with self.assertRaises(AuthException):
            self.service.login("bob@example.com", "wrong")

    def test_login_smtp_disabled(self):
        """测试密码正确但 SMTP 被禁用"""
        self.mock_repo.return_value = make_mailbox(enablesmtp=False)
        with self.assertRaises(AuthException) as context:
            self.service.login("bob@example.com", "secret")
        self.assertIn("disabled", context.exception.message)
        self.assertEqual(context.exception.ret_code, RET_ACCOUNT_DISABLED)

    def test_login_inactive(self):
        """测试账户未激活"""
        self.mock_repo.return_value = make_mailbox(active=False)
        with self.assertRaises(AuthException):
            self.service.login("bob@example.com", "secret")

    def test_login_directory_failure(self):
        """测试邮箱目录不可用"""
        self.mock_repo.side_effect = DependencyFailureException("Mailbox directory unavailable")
        with self.assertRaises(DependencyFailureException):
            self.service.login("bob@example.com", "secret")

    def test_verify_token_round_trip(self):
        """测试令牌签发与校验"""
        user = MailUser(username="bob@example.com", name="Bob", domain="example.com")
        self.assertEqual(self.service.verify_token(self.service.issue_token(user)), user)

    def test_verify_token_tampered(self):
        """测试被篡改的令牌"""
        token = self.service.issue_token(MailUser(username="bob@example.com"))
        with self.assertRaises(AuthException):
            self.service.verify_token(token[:-2] + ("AA" if not token.endswith("AA") else "BB"))
        with self.assertRaises(AuthException):
            self.service.verify_token("garbage")

    def test_verify_token_other_secret(self):
        """测试用其他密钥签发的令牌"""
        token = self.service.issue_token(MailUser(username="bob@example.com"))
        AuthService.reset_instances()
        with patch('app_webmail.services.auth_service.get_app_config',
                   return_value=dict(APP_CONFIG, token_secret="another-secret")):
            with self.assertRaises(AuthException):
                AuthService().verify_token(token)

    def test_verify_token_expired(self):
        """测试过期令牌"""
        token = self.service.issue_token(MailUser(username="bob@example.com"))
        AuthService.reset_instances()
        with patch('app_webmail.services.auth_service.get_app_config',
                   return_value=dict(APP_CONFIG, token_max_age=-1)):
            with self.assertRaises(TokenExpiredException):
                AuthService().verify_token(token)
