"""
Mailbox service

This service handles business logic for the signed-in user's mailbox:
- Message listing (with total) and detail
- Read / star / delete, stored as maildir flags
- Folder listing with unread counts
- Account info from the mailbox directory

Listing absorbs storage and directory failures and returns empty defaults.
"""
import logging
from typing import Any, Dict, Union

from app_webmail.consts.webmail_const import (
    FOLDER_INBOX,
    FLAG_SEEN,
    FLAG_FLAGGED,
    LIMIT_EMAILS_DEFAULT,
)
from app_webmail.exceptions.dependency_failure_exception import DependencyFailureException
from app_webmail.exceptions.mailbox_not_found_exception import MailboxNotFoundException
from app_webmail.exceptions.message_not_found_exception import MessageNotFoundException
from app_webmail.pojo.mail_user import MailUser
from app_webmail.repos.vmail_mailbox_repo import get_mailbox_by_username
from app_webmail.services.maildir_reader import MaildirReader, normalize_folder
from app_webmail.services.maildir_writer import MaildirWriter
from common.components.singleton import Singleton
from common.consts.query_const import LIMIT_LIST

logger = logging.getLogger(__name__)


def clamp_limit(limit) -> int:
    """
    Limit within 1..LIMIT_LIST, default when missing or not a number
    """
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        return LIMIT_EMAILS_DEFAULT
    return min(max(limit, 1), LIMIT_LIST)


def clamp_offset(offset) -> int:
    try:
        return max(int(offset), 0)
    except (TypeError, ValueError):
        return 0


class MailboxService(Singleton):
    """Mailbox service"""

    def __init__(self):
        self.reader = MaildirReader()
        self.writer = MaildirWriter()

    def list_emails(
            self,
            user: MailUser,
            folder: str = FOLDER_INBOX,
            limit: int = LIMIT_EMAILS_DEFAULT,
            offset: int = 0
    ) -> Dict[str, Any]:
        """
        List messages of a folder, newest first

        Args:
            user: Signed-in user
            folder: Folder name (default: INBOX)
            limit: Pagination limit (default: 50, max: 1000)
            offset: Pagination offset (default: 0)

        Returns:
            Dictionary with:
            - emails: List of message dictionaries
            - total: Number of messages in the folder
            - folder: Folder name

        Raises:
            MailboxNotFoundException: If the mailbox record does not exist
        """
        folder = normalize_folder(folder)
        limit = clamp_limit(limit)
        offset = clamp_offset(offset)
        try:
            messages, total = self.reader.list_page(user.username, folder, limit, offset)
        except DependencyFailureException as e:
            logger.warning(f"[MailboxService.list_emails] Listing {user.username}/{folder} failed: {e}")
            messages, total = [], 0

        return {
            "emails": [message.to_dict() for message in messages],
            "total": total,
            "folder": folder,
        }

    def get_email(self, user: MailUser, folder: str, email_id: Union[int, str]) -> Dict[str, Any]:
        """
        Get a message

        Raises:
            MessageNotFoundException: If the message does not exist
        """
        message = self.reader.get_message(user.username, folder, email_id)
        if message is None:
            raise MessageNotFoundException(f"Email not found: {email_id}")
        return message.to_dict()

    def mark_as_read(self, user: MailUser, folder: str, email_id: Union[int, str]) -> Dict[str, Any]:
        """
        Set the seen flag of a message

        Raises:
            MessageNotFoundException: If the message does not exist
        """
        if not self.writer.set_flag(user.username, folder, email_id, FLAG_SEEN, True):
            raise MessageNotFoundException(f"Email not found: {email_id}")
        return {"message": "Email marked as read"}

    def toggle_star(self, user: MailUser, folder: str, email_id: Union[int, str], starred: bool) -> Dict[str, Any]:
        """
        Set or clear the flagged flag of a message

        Raises:
            MessageNotFoundException: If the message does not exist
        """
        if not self.writer.set_flag(user.username, folder, email_id, FLAG_FLAGGED, starred):
            raise MessageNotFoundException(f"Email not found: {email_id}")
        return {"message": "Email starred" if starred else "Email unstarred"}

    def delete_email(self, user: MailUser, folder: str, email_id: Union[int, str]) -> Dict[str, Any]:
        """
        Move a message to Trash, or remove it when it is in Trash

        Raises:
            MessageNotFoundException: If the message does not exist
        """
        if not self.writer.move_to_trash(user.username, folder, email_id):
            raise MessageNotFoundException(f"Email not found: {email_id}")
        return {"message": "Email deleted"}

    def list_folders(self, user: MailUser) -> Dict[str, Any]:
        """
        List folders with unread counts, the fallback set if the mailbox cannot be read

        Raises:
            MailboxNotFoundException: If the mailbox record does not exist
        """
        try:
            folders = self.reader.list_folders(user.username)
        except DependencyFailureException as e:
            logger.warning(f"[MailboxService.list_folders] Listing folders of {user.username} failed: {e}")
            folders = self.reader.fallback_folders()
        return {"folders": [folder.to_dict() for folder in folders]}

    def get_user_info(self, user: MailUser) -> Dict[str, Any]:
        """
        Account info of the signed-in user

        Raises:
            MailboxNotFoundException: If the mailbox record does not exist
            DependencyFailureException: If the mailbox directory cannot be queried
        """
        mailbox = get_mailbox_by_username(user.username)
        if mailbox is None:
            raise MailboxNotFoundException(f"Mailbox not found: {user.username}")
        return {
            "username": mailbox.username,
            "name": mailbox.name,
            "domain": mailbox.domain,
            "quota": mailbox.quota,
            "created": mailbox.created.isoformat() if mailbox.created else None,
        }
