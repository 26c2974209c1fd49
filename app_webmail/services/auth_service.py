"""
Auth service

This service handles sign-in against the mail server's mailbox directory:
- Credential check (see CredentialVerifier)
- Mail service status check (active, SMTP and IMAP enabled)
- Session token issue and verification

Tokens are signed with django.core.signing and expire after token_max_age seconds.
There is no server-side revocation, logout only discards the token on the client.
"""
import logging
from typing import Any, Dict

from django.core import signing

from app_webmail.config import get_app_config
from app_webmail.exceptions.auth_exception import AuthException
from app_webmail.exceptions.token_expired_exception import TokenExpiredException
from app_webmail.exceptions.validation_exception import ValidationException
from app_webmail.models.vmail_mailbox import VmailMailbox
from app_webmail.pojo.mail_user import MailUser
from app_webmail.repos.vmail_mailbox_repo import get_mailbox_by_username
from app_webmail.services.credential_verifier import CredentialVerifier
from app_webmail.services.external_password_checker import DoveadmPasswordChecker
from common.components.singleton import Singleton
from common.consts.response_const import RET_ACCOUNT_DISABLED
from common.utils.string_util import check_blank

logger = logging.getLogger(__name__)

TOKEN_SALT = "app_webmail.session"

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
SERVICE_DISABLED_MESSAGE = "Mail services are disabled for this account"


class AuthService(Singleton):
    """Auth service"""

    def __init__(self):
        config = get_app_config()
        self.token_secret = config["token_secret"]
        self.token_max_age = config["token_max_age"]
        self.verifier = CredentialVerifier(
            DoveadmPasswordChecker(config["doveadm_path"], config["password_check_timeout"])
        )

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Sign in a mailbox user

        Args:
            email: Mailbox username
            password: Plaintext password

        Returns:
            Dictionary with token and user

        Raises:
            ValidationException: If email or password is missing
            AuthException: If the credentials are wrong or mail services are disabled
            DependencyFailureException: If the mailbox directory cannot be queried
        """
        if check_blank(email) or not password:
            raise ValidationException("Email and password are required")

        username = email.strip().lower()
        mailbox = get_mailbox_by_username(username)
        if mailbox is None:
            logger.warning(f"[AuthService.login] Unknown mailbox: {username}")
            raise AuthException(INVALID_CREDENTIALS_MESSAGE)

        if not self.verifier.verify(password, mailbox.password):
            logger.warning(f"[AuthService.login] Wrong password: {username}")
            raise AuthException(INVALID_CREDENTIALS_MESSAGE)

        if not mailbox.is_service_enabled:
            logger.warning(f"[AuthService.login] Mail services disabled: {username}")
            raise AuthException(SERVICE_DISABLED_MESSAGE, ret_code=RET_ACCOUNT_DISABLED)

        user = self.to_user(mailbox)
        logger.info(f"[AuthService.login] Signed in: {username}")
        return {
            "token": self.issue_token(user),
            "user": user.to_dict(),
        }

    def issue_token(self, user: MailUser) -> str:
        """
        Sign the user's claims into a session token
        """
        return signing.dumps(user.to_dict(), key=self.token_secret, salt=TOKEN_SALT, compress=True)

    def verify_token(self, token: str) -> MailUser:
        """
        Verify a session token

        Args:
            token: Token from the Authorization header

        Returns:
            MailUser of the token

        Raises:
            TokenExpiredException: If the token is older than token_max_age
            AuthException: If the token is malformed or tampered with
        """
        try:
            claims = signing.loads(token, key=self.token_secret, salt=TOKEN_SALT, max_age=self.token_max_age)
            return MailUser.from_claims(claims)
        except signing.SignatureExpired as e:
            raise TokenExpiredException("Token expired") from e
        except (signing.BadSignature, KeyError, TypeError) as e:
            raise AuthException("Invalid token") from e

    @staticmethod
    def to_user(mailbox: VmailMailbox) -> MailUser:
        return MailUser(
            username=mailbox.username,
            name=mailbox.name or "",
            domain=mailbox.domain or "",
        )
