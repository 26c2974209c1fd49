from app_webmail.models.vmail_mailbox import VmailMailbox
from app_webmail.models.send_log import SendLog

__all__ = [
    'VmailMailbox',
    'SendLog',
]
