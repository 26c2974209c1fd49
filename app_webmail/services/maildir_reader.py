"""
Maildir reader

This service reads a user's maildir:
- Resolve the maildir root from the mailbox directory record
- List messages of a folder, newest first, with offset/limit paging
- Find a single message by position id or maildir unique name
- List folders with their unread counts

Layout: INBOX lives in <root>/cur, any other folder in <root>/.<folder>/cur.
"""
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from app_webmail.config import get_app_config
from app_webmail.consts.webmail_const import (
    FOLDER_INBOX,
    FALLBACK_FOLDERS,
    FOLDER_DISPLAY_NAMES,
    MAILDIR_CUR,
    MAILDIR_FOLDER_PREFIX,
    MAILDIR_FLAGS_DELIMITER,
    FLAG_SEEN,
    LIMIT_EMAILS_DEFAULT,
)
from app_webmail.exceptions.dependency_failure_exception import DependencyFailureException
from app_webmail.exceptions.mailbox_not_found_exception import MailboxNotFoundException
from app_webmail.exceptions.validation_exception import ValidationException
from app_webmail.models.vmail_mailbox import VmailMailbox
from app_webmail.pojo.folder_summary import FolderSummary
from app_webmail.pojo.message_summary import MessageSummary
from app_webmail.repos.vmail_mailbox_repo import get_mailbox_by_username
from app_webmail.services.maildir_parser import MaildirParser
from common.components.singleton import Singleton
from common.consts.response_const import RET_FILE_IO_ERROR, RET_INVALID_PARAM

logger = logging.getLogger(__name__)

_INVALID_FOLDER_CHARS = ("/", "\\", "\x00")


def build_maildir_path(mailbox: VmailMailbox, config: Dict) -> Path:
    """
    Join <storagebasedirectory>/<storagenode>/<maildir>/<subdir>, record values first,
    configured defaults when the record leaves them empty

    Args:
        mailbox: Mailbox directory record
        config: Connector configuration

    Returns:
        Maildir root
    """
    base = mailbox.storagebasedirectory or config["storage_base"]
    node = mailbox.storagenode or config["storage_node"]
    path = Path(base) / node / (mailbox.maildir or "").strip("/")
    subdir = config.get("maildir_subdir")
    if subdir:
        path = path / subdir
    return path


def is_inbox(folder: str) -> bool:
    return folder.upper() == FOLDER_INBOX


def normalize_folder(folder: Optional[str]) -> str:
    """
    Default to INBOX, spell INBOX in upper case, reject names that would leave the maildir

    Raises:
        ValidationException: If the folder name is not usable
    """
    folder = (folder or FOLDER_INBOX).strip()
    if not folder:
        return FOLDER_INBOX
    if is_inbox(folder):
        return FOLDER_INBOX
    if folder in (".", "..") or folder.startswith(MAILDIR_FOLDER_PREFIX) \
            or any(char in folder for char in _INVALID_FOLDER_CHARS):
        raise ValidationException(f"Invalid folder: {folder}", ret_code=RET_INVALID_PARAM)
    return folder


def folder_dir(root: Path, folder: str) -> Path:
    """
    Directory holding a folder's cur/, new/ and tmp/
    """
    folder = normalize_folder(folder)
    if folder == FOLDER_INBOX:
        return root
    return root / f"{MAILDIR_FOLDER_PREFIX}{folder}"


def folder_display_name(folder: str) -> str:
    """
    "INBOX" -> "Inbox", "Junk" -> "Spam", "Archive.2024" -> "Archive/2024"
    """
    if folder in FOLDER_DISPLAY_NAMES:
        return FOLDER_DISPLAY_NAMES[folder]
    return folder.replace(MAILDIR_FOLDER_PREFIX, "/")


def scan_folder(folder_path: Path) -> List[Tuple[str, float]]:
    """
    List the message files of a folder's cur/, newest first (ties by name, descending).
    Names without the flags delimiter are skipped.

    Args:
        folder_path: Folder directory

    Returns:
        List of (filename, mtime), empty if cur/ does not exist

    Raises:
        DependencyFailureException: If cur/ exists but cannot be read
    """
    cur = folder_path / MAILDIR_CUR
    entries = []
    try:
        with os.scandir(cur) as it:
            for entry in it:
                if MAILDIR_FLAGS_DELIMITER not in entry.name:
                    continue
                try:
                    if not entry.is_file():
                        continue
                    entries.append((entry.name, entry.stat().st_mtime))
                except FileNotFoundError:
                    # removed while scanning
                    continue
    except (FileNotFoundError, NotADirectoryError):
        return []
    except OSError as e:
        logger.exception(f"[scan_folder] Failed to read {cur}: {e}")
        raise DependencyFailureException("Mail storage unavailable", ret_code=RET_FILE_IO_ERROR) from e

    entries.sort(key=lambda item: (item[1], item[0]), reverse=True)
    return entries


def find_entry(entries: List[Tuple[str, float]], email_id: Union[int, str]) -> Optional[Tuple[int, str]]:
    """
    Find a message in a scanned listing by position id (1-based) or by maildir unique name

    Returns:
        Tuple of (position, filename), or None
    """
    email_id = str(email_id).strip()
    if email_id.isdigit():
        position = int(email_id)
        if 1 <= position <= len(entries):
            return position, entries[position - 1][0]
        return None

    for index, (filename, _) in enumerate(entries):
        uid, _ = MaildirParser.split_filename(filename)
        if uid == email_id:
            return index + 1, filename
    return None


class MaildirReader(Singleton):
    """Maildir reader service"""

    def resolve_maildir(self, username: str) -> Path:
        """
        Get the maildir root of a user

        Args:
            username: Mailbox username

        Returns:
            Maildir root path

        Raises:
            MailboxNotFoundException: If the mailbox record does not exist
            DependencyFailureException: If the mailbox directory cannot be queried
        """
        mailbox = get_mailbox_by_username(username)
        if mailbox is None:
            raise MailboxNotFoundException(f"Mailbox not found: {username}")
        return build_maildir_path(mailbox, get_app_config())

    def list_messages(
            self,
            username: str,
            folder: str = FOLDER_INBOX,
            limit: int = LIMIT_EMAILS_DEFAULT,
            offset: int = 0
    ) -> List[MessageSummary]:
        """
        List messages of a folder, newest first

        Args:
            username: Mailbox username
            folder: Folder name, INBOX by default
            limit: Max messages
            offset: Messages to skip

        Returns:
            List of MessageSummary, empty if the folder does not exist
        """
        messages, _ = self.list_page(username, folder, limit, offset)
        return messages

    def list_page(
            self,
            username: str,
            folder: str = FOLDER_INBOX,
            limit: int = LIMIT_EMAILS_DEFAULT,
            offset: int = 0
    ) -> Tuple[List[MessageSummary], int]:
        """
        One page of a folder together with the folder total, from a single scan of cur/

        Returns:
            Tuple of (messages, total)
        """
        folder = normalize_folder(folder)
        folder_path = folder_dir(self.resolve_maildir(username), folder)
        entries = scan_folder(folder_path)

        offset = max(offset, 0)
        messages = []
        for index, (filename, _) in enumerate(entries[offset:offset + limit]):
            message = self._read(folder_path, filename, offset + index + 1, folder)
            if message is not None:
                messages.append(message)
        return messages, len(entries)

    def count_messages(self, username: str, folder: str = FOLDER_INBOX) -> int:
        """
        Number of messages in a folder
        """
        folder = normalize_folder(folder)
        return len(scan_folder(folder_dir(self.resolve_maildir(username), folder)))

    def get_message(self, username: str, folder: str, email_id: Union[int, str]) -> Optional[MessageSummary]:
        """
        Get a single message

        Args:
            username: Mailbox username
            folder: Folder name
            email_id: Position id or maildir unique name

        Returns:
            MessageSummary, or None if not found
        """
        folder = normalize_folder(folder)
        folder_path = folder_dir(self.resolve_maildir(username), folder)
        found = find_entry(scan_folder(folder_path), email_id)
        if found is None:
            return None
        position, filename = found
        return self._read(folder_path, filename, position, folder)

    def list_folders(self, username: str) -> List[FolderSummary]:
        """
        List INBOX and every dot-prefixed folder under the maildir root, each with its
        unread count. If the maildir cannot be read the fixed fallback set is returned.

        Args:
            username: Mailbox username

        Returns:
            List of FolderSummary, INBOX first, then by name

        Raises:
            MailboxNotFoundException: If the mailbox record does not exist
        """
        root = self.resolve_maildir(username)
        try:
            names = sorted(
                entry.name[len(MAILDIR_FOLDER_PREFIX):]
                for entry in os.scandir(root)
                if entry.name.startswith(MAILDIR_FOLDER_PREFIX)
                and entry.name not in (".", "..")
                and len(entry.name) > len(MAILDIR_FOLDER_PREFIX)
                and entry.is_dir()
            )
            folders = [FolderSummary(FOLDER_INBOX, folder_display_name(FOLDER_INBOX), self._count_unread(root))]
            for name in names:
                folders.append(FolderSummary(
                    name,
                    folder_display_name(name),
                    self._count_unread(root / f"{MAILDIR_FOLDER_PREFIX}{name}")
                ))
            return folders
        except OSError as e:
            logger.warning(f"[MaildirReader.list_folders] Failed to read {root}, using fallback folders: {e}")
            return self.fallback_folders()

    @staticmethod
    def fallback_folders() -> List[FolderSummary]:
        return [FolderSummary(name, folder_display_name(name), 0) for name in FALLBACK_FOLDERS]

    @staticmethod
    def _count_unread(folder_path: Path) -> int:
        try:
            filenames = os.listdir(folder_path / MAILDIR_CUR)
        except (FileNotFoundError, NotADirectoryError):
            return 0
        return sum(
            1 for filename in filenames
            if MAILDIR_FLAGS_DELIMITER in filename
            and FLAG_SEEN not in MaildirParser.split_filename(filename)[1]
        )

    @staticmethod
    def _read(folder_path: Path, filename: str, position: int, folder: str) -> Optional[MessageSummary]:
        path = folder_path / MAILDIR_CUR / filename
        try:
            raw = path.read_bytes()
        except OSError as e:
            logger.warning(f"[MaildirReader._read] Failed to read {path}: {e}")
            return None
        try:
            return MaildirParser.parse_message(raw, filename, position, folder)
        except Exception as e:
            logger.warning(f"[MaildirReader._read] Failed to parse {path}, skipped: {e}")
            return None
