"""
Credential verifier

Checks a plaintext password against the password string stored in the mailbox
directory. Supported schemes, matched by prefix in this order:
- {SSHA512}: base64(sha512(password + salt) + salt)
- {SSHA}: base64(sha1(password + salt) + salt)
- {PLAIN}: the password itself
- {MD5}: hex md5 of the password
Anything else (bcrypt "$2y$...", sha-crypt, ...) goes to the external checker.
"""
import base64
import binascii
import hmac
import logging
from enum import Enum
from typing import Optional

from app_webmail.exceptions.external_checker_unavailable_exception import ExternalCheckerUnavailableException
from app_webmail.services.external_password_checker import ExternalPasswordChecker
from common.utils.hash_util import md5, salted_digest

logger = logging.getLogger(__name__)

SHA512_DIGEST_SIZE = 64
SHA1_DIGEST_SIZE = 20


class PasswordScheme(Enum):
    SSHA512 = "{SSHA512}"
    SSHA = "{SSHA}"
    PLAIN = "{PLAIN}"
    MD5 = "{MD5}"
    EXTERNAL = ""

    @classmethod
    def of(cls, stored: str) -> "PasswordScheme":
        """
        Get the scheme of a stored password string, EXTERNAL if no prefix matches.
        {SSHA512} is checked before {SSHA}.
        """
        upper = stored.upper()
        for scheme in (cls.SSHA512, cls.SSHA, cls.PLAIN, cls.MD5):
            if upper.startswith(scheme.value):
                return scheme
        return cls.EXTERNAL

    def strip(self, stored: str) -> str:
        return stored[len(self.value):]


def _verify_salted(algorithm: str, digest_size: int, plaintext: str, encoded: str) -> bool:
    try:
        decoded = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        return False
    # no salt
    if len(decoded) <= digest_size:
        return False
    digest, salt = decoded[:digest_size], decoded[digest_size:]
    return hmac.compare_digest(salted_digest(algorithm, plaintext.encode("utf-8"), salt), digest)


def _verify_plain(plaintext: str, remainder: str) -> bool:
    return hmac.compare_digest(plaintext.encode("utf-8"), remainder.encode("utf-8"))


def _verify_md5(plaintext: str, remainder: str) -> bool:
    return hmac.compare_digest(md5(plaintext), remainder.strip().lower())


class CredentialVerifier:
    """
    Password verifier. verify() never raises, any failure is a mismatch.
    """

    def __init__(self, external_checker: Optional[ExternalPasswordChecker] = None):
        self.external_checker = external_checker

    def verify(self, plaintext: str, stored: str) -> bool:
        if plaintext is None or stored is None:
            return False
        try:
            stored = stored.strip()
            scheme = PasswordScheme.of(stored)
            remainder = scheme.strip(stored)

            if scheme == PasswordScheme.SSHA512:
                return _verify_salted("sha512", SHA512_DIGEST_SIZE, plaintext, remainder)
            if scheme == PasswordScheme.SSHA:
                return _verify_salted("sha1", SHA1_DIGEST_SIZE, plaintext, remainder)
            if scheme == PasswordScheme.PLAIN:
                return _verify_plain(plaintext, remainder)
            if scheme == PasswordScheme.MD5:
                return _verify_md5(plaintext, remainder)
            return self._verify_external(plaintext, stored)
        except Exception as e:
            logger.warning(f"[CredentialVerifier.verify] Verification failed: {type(e).__name__}")
            return False

    def _verify_external(self, plaintext: str, stored: str) -> bool:
        if self.external_checker is not None:
            try:
                return self.external_checker.check(plaintext, stored)
            except ExternalCheckerUnavailableException as e:
                logger.warning(f"[CredentialVerifier._verify_external] External checker unavailable: {e}")
        # no checker, compare as plain text
        return _verify_plain(plaintext, stored)
