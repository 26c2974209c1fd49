from app_webmail.services.credential_verifier import CredentialVerifier, PasswordScheme
from app_webmail.services.external_password_checker import ExternalPasswordChecker, DoveadmPasswordChecker
from app_webmail.services.maildir_parser import MaildirParser
from app_webmail.services.maildir_reader import MaildirReader
from app_webmail.services.maildir_writer import MaildirWriter
from app_webmail.services.auth_service import AuthService
from app_webmail.services.mailbox_service import MailboxService
from app_webmail.services.send_service import SendService

__all__ = [
    'CredentialVerifier',
    'PasswordScheme',
    'ExternalPasswordChecker',
    'DoveadmPasswordChecker',
    'MaildirParser',
    'MaildirReader',
    'MaildirWriter',
    'AuthService',
    'MailboxService',
    'SendService',
]
