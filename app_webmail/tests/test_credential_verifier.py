"""
单元测试：CredentialVerifier 密码校验

测试覆盖：
- {SSHA512} / {SSHA} / {PLAIN} / {MD5} 方案
- 格式错误（base64 错误、缺少 salt）
- 外部校验器（bcrypt 等）及其不可用时的回退
- DoveadmPasswordChecker 子进程调用
"""
import base64
import hashlib
import subprocess
from unittest import TestCase
from unittest.mock import MagicMock, patch

from app_webmail.exceptions.external_checker_unavailable_exception import ExternalCheckerUnavailableException
from app_webmail.services.credential_verifier import CredentialVerifier, PasswordScheme
from app_webmail.services.external_password_checker import DoveadmPasswordChecker, ExternalPasswordChecker


def make_ssha512(password: str, salt: bytes) -> str:
    digest = hashlib.sha512(password.encode() + salt).digest()
    return "{SSHA512}" + base64.b64encode(digest + salt).decode()


def make_ssha(password: str, salt: bytes) -> str:
    digest = hashlib.sha1(password.encode() + salt).digest()
    return "{SSHA}" + base64.b64encode(digest + salt).decode()


class FakeChecker(ExternalPasswordChecker):

    def __init__(self, result=True, unavailable=False):
        self.result = result
        self.unavailable = unavailable
        self.calls = []

    def check(self, plaintext, stored):
        self.calls.append((plaintext, stored))
        if self.unavailable:
            raise ExternalCheckerUnavailableException("not installed")
        return self.result


class TestPasswordScheme(TestCase):
    """测试 PasswordScheme 前缀识别"""

    def test_of(self):
        """测试按前缀识别方案，{SSHA512} 优先于 {SSHA}"""
        self.assertEqual(PasswordScheme.of("{SSHA512}abc"), PasswordScheme.SSHA512)
        self.assertEqual(PasswordScheme.of("{SSHA}abc"), PasswordScheme.SSHA)
        self.assertEqual(PasswordScheme.of("{PLAIN}abc"), PasswordScheme.PLAIN)
        self.assertEqual(PasswordScheme.of("{MD5}abc"), PasswordScheme.MD5)
        self.assertEqual(PasswordScheme.of("$2y$10$abc"), PasswordScheme.EXTERNAL)
        self.assertEqual(PasswordScheme.of("abc"), PasswordScheme.EXTERNAL)

    def test_of_case_insensitive(self):
        """测试前缀大小写不敏感"""
        self.assertEqual(PasswordScheme.of("{ssha512}abc"), PasswordScheme.SSHA512)
        self.assertEqual(PasswordScheme.of("{plain}abc"), PasswordScheme.PLAIN)


class TestCredentialVerifier(TestCase):
    """测试 CredentialVerifier"""

    def setUp(self):
        """每个测试前设置"""
        self.verifier = CredentialVerifier(FakeChecker(result=False))

    def test_ssha512(self):
        """测试 SSHA512：正确密码通过，其他都不通过"""
        stored = make_ssha512("secret", b"saltsalt")
        self.assertTrue(self.verifier.verify("secret", stored))
        self.assertFalse(self.verifier.verify("secreT", stored))
        self.assertFalse(self.verifier.verify("secre", stored))
        self.assertFalse(self.verifier.verify("", stored))

    def test_ssha512_with_whitespace(self):
        """测试存储值前后空白被去掉"""
        stored = "  " + make_ssha512("secret", b"1234") + "\n"
        self.assertTrue(self.verifier.verify("secret", stored))

    def test_ssha(self):
        """测试 SSHA"""
        stored = make_ssha("secret", b"\x01\x02\x03\x04")
        self.assertTrue(self.verifier.verify("secret", stored))
        self.assertFalse(self.verifier.verify("secrets", stored))
        self.assertFalse(self.verifier.verify("", stored))

    def test_plain(self):
        """测试 PLAIN"""
        self.assertTrue(self.verifier.verify("secret", "{PLAIN}secret"))
        self.assertFalse(self.verifier.verify("secret1", "{PLAIN}secret"))
        self.assertFalse(self.verifier.verify("", "{PLAIN}secret"))

    def test_md5(self):
        """测试 MD5（十六进制，大小写不敏感）"""
        hex_digest = hashlib.md5(b"secret").hexdigest()
        self.assertTrue(self.verifier.verify("secret", "{MD5}" + hex_digest))
        self.assertTrue(self.verifier.verify("secret", "{MD5}" + hex_digest.upper()))
        self.assertFalse(self.verifier.verify("secreu", "{MD5}" + hex_digest))
        self.assertFalse(self.verifier.verify("", "{MD5}" + hex_digest))

    def test_malformed_base64(self):
        """测试 base64 错误时返回 False 而不抛异常"""
        self.assertFalse(self.verifier.verify("secret", "{SSHA512}not*base64!"))
        self.assertFalse(self.verifier.verify("secret", "{SSHA}@@@"))

    def test_missing_salt(self):
        """测试只有摘要、没有 salt 时返回 False"""
        digest = hashlib.sha512(b"secret").digest()
        self.assertFalse(self.verifier.verify("secret", "{SSHA512}" + base64.b64encode(digest).decode()))
        truncated = base64.b64encode(hashlib.sha1(b"secret").digest()[:10]).decode()
        self.assertFalse(self.verifier.verify("secret", "{SSHA}" + truncated))

    def test_none_values(self):
        """测试 None 输入返回 False"""
        self.assertFalse(self.verifier.verify(None, "{PLAIN}secret"))
        self.assertFalse(self.verifier.verify("secret", None))

    def test_non_ascii_md5_remainder(self):
        """测试异常输入不抛异常"""
        self.assertFalse(self.verifier.verify("secret", "{MD5}密码"))

    def test_external_checker(self):
        """测试 bcrypt 交给外部校验器"""
        checker = FakeChecker(result=True)
        verifier = CredentialVerifier(checker)

        self.assertTrue(verifier.verify("secret", "$2y$10$abcdefghijklmnopqrstuv"))
        self.assertEqual(checker.calls, [("secret", "$2y$10$abcdefghijklmnopqrstuv")])

    def test_external_checker_unavailable_falls_back_to_equality(self):
        """测试外部校验器不可用时按明文比较"""
        verifier = CredentialVerifier(FakeChecker(unavailable=True))

        self.assertTrue(verifier.verify("$2y$10$abc", "$2y$10$abc"))
        self.assertFalse(verifier.verify("secret", "$2y$10$abc"))

    def test_no_external_checker(self):
        """测试未配置外部校验器时按明文比较"""
        verifier = CredentialVerifier()
        self.assertTrue(verifier.verify("legacy", "legacy"))
        self.assertFalse(verifier.verify("other", "legacy"))

    def test_external_checker_error_returns_false(self):
        """测试外部校验器抛出意外异常时返回 False"""
        checker = MagicMock(spec=ExternalPasswordChecker)
        checker.check.side_effect = RuntimeError("boom")
        verifier = CredentialVerifier(checker)

        self.assertFalse(verifier.verify("secret", "$2y$10$abc"))


class TestDoveadmPasswordChecker(TestCase):
    """测试 DoveadmPasswordChecker"""

    @patch('app_webmail.services.external_password_checker.shutil.which', return_value=None)
    def test_missing_binary(self, mock_which):
        """测试找不到 doveadm 时抛出不可用异常"""
        checker = DoveadmPasswordChecker("doveadm")
        with self.assertRaises(ExternalCheckerUnavailableException):
            checker.check("secret", "$2y$10$abc")

    @patch('app_webmail.services.external_password_checker.subprocess.run')
    @patch('app_webmail.services.external_password_checker.shutil.which', return_value="/usr/bin/doveadm")
    def test_match(self, mock_which, mock_run):
        """测试退出码 0 为匹配，裸 crypt 串加 {CRYPT} 前缀"""
        mock_run.return_value = MagicMock(returncode=0)
        checker = DoveadmPasswordChecker("doveadm", timeout=3)

        self.assertTrue(checker.check("secret", "$2y$10$abc"))
        args, kwargs = mock_run.call_args
        self.assertEqual(args[0], ["/usr/bin/doveadm", "pw", "-t", "{CRYPT}$2y$10$abc", "-p", "secret"])
        self.assertEqual(kwargs["timeout"], 3)

    @patch('app_webmail.services.external_password_checker.subprocess.run')
    @patch('app_webmail.services.external_password_checker.shutil.which', return_value="/usr/bin/doveadm")
    def test_mismatch(self, mock_which, mock_run):
        """测试非 0 退出码为不匹配"""
        mock_run.return_value = MagicMock(returncode=1)
        self.assertFalse(DoveadmPasswordChecker().check("secret", "{BLF-CRYPT}$2y$10$abc"))
        self.assertEqual(mock_run.call_args[0][0][3], "{BLF-CRYPT}$2y$10$abc")

    @patch('app_webmail.services.external_password_checker.subprocess.run')
    @patch('app_webmail.services.external_password_checker.shutil.which', return_value="/usr/bin/doveadm")
    def test_timeout_fails_closed(self, mock_which, mock_run):
        """测试超时视为不匹配"""
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="doveadm", timeout=5)
        self.assertFalse(DoveadmPasswordChecker().check("secret", "$2y$10$abc"))
