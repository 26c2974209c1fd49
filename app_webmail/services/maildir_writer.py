"""
Maildir writer

Read/star/delete are stored the way IMAP servers store them, in the maildir itself:
- Flags are letters after ":2," in the filename, kept sorted, changed by rename
- Delete moves the file to .Trash/cur, a message already in Trash is removed
"""
import logging
import os
from pathlib import Path
from typing import Union

from app_webmail.consts.webmail_const import (
    FOLDER_TRASH,
    MAILDIR_CUR,
    MAILDIR_NEW,
    MAILDIR_TMP,
    MAILDIR_FLAGS_DELIMITER,
)
from app_webmail.exceptions.dependency_failure_exception import DependencyFailureException
from app_webmail.services.maildir_parser import MaildirParser
from app_webmail.services.maildir_reader import (
    MaildirReader,
    normalize_folder,
    folder_dir,
    scan_folder,
    find_entry,
)
from common.components.singleton import Singleton
from common.consts.response_const import RET_FILE_IO_ERROR

logger = logging.getLogger(__name__)


def with_flag(filename: str, flag: str, value: bool) -> str:
    """
    Filename with a flag letter added or removed
    ("123.host:2,S", "F", True) -> "123.host:2,FS"
    """
    uid, flags = MaildirParser.split_filename(filename)
    letters = set(flags)
    if value:
        letters.add(flag)
    else:
        letters.discard(flag)
    return f"{uid}{MAILDIR_FLAGS_DELIMITER}{''.join(sorted(letters))}"


class MaildirWriter(Singleton):
    """Maildir writer service"""

    def __init__(self):
        self.reader = MaildirReader()

    def set_flag(self, username: str, folder: str, email_id: Union[int, str], flag: str, value: bool) -> bool:
        """
        Set or clear a flag letter on a message

        Args:
            username: Mailbox username
            folder: Folder name
            email_id: Position id or maildir unique name
            flag: Flag letter, S (read) or F (starred)
            value: True to set, False to clear

        Returns:
            False if the message does not exist

        Raises:
            DependencyFailureException: If the file cannot be renamed
        """
        folder = normalize_folder(folder)
        folder_path = folder_dir(self.reader.resolve_maildir(username), folder)
        cur = folder_path / MAILDIR_CUR
        found = find_entry(scan_folder(folder_path), email_id)
        if found is None:
            return False

        _, filename = found
        new_filename = with_flag(filename, flag, value)
        if new_filename == filename:
            return True
        try:
            os.rename(cur / filename, cur / new_filename)
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.exception(f"[MaildirWriter.set_flag] Failed to rename {filename}: {e}")
            raise DependencyFailureException("Mail storage unavailable", ret_code=RET_FILE_IO_ERROR) from e

        logger.info(f"[MaildirWriter.set_flag] {username} {folder}: {filename} -> {new_filename}")
        return True

    def move_to_trash(self, username: str, folder: str, email_id: Union[int, str]) -> bool:
        """
        Move a message to Trash, or remove it if it is already there

        Args:
            username: Mailbox username
            folder: Folder name
            email_id: Position id or maildir unique name

        Returns:
            False if the message does not exist

        Raises:
            DependencyFailureException: If the file cannot be moved
        """
        folder = normalize_folder(folder)
        root = self.reader.resolve_maildir(username)
        source_dir = folder_dir(root, folder)
        found = find_entry(scan_folder(source_dir), email_id)
        if found is None:
            return False

        _, filename = found
        source = source_dir / MAILDIR_CUR / filename
        try:
            if folder == FOLDER_TRASH:
                os.remove(source)
                logger.info(f"[MaildirWriter.move_to_trash] {username}: removed {filename} from {FOLDER_TRASH}")
                return True

            trash_dir = folder_dir(root, FOLDER_TRASH)
            self._ensure_maildir(trash_dir)
            os.rename(source, trash_dir / MAILDIR_CUR / filename)
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.exception(f"[MaildirWriter.move_to_trash] Failed to move {filename}: {e}")
            raise DependencyFailureException("Mail storage unavailable", ret_code=RET_FILE_IO_ERROR) from e

        logger.info(f"[MaildirWriter.move_to_trash] {username}: {folder}/{filename} -> {FOLDER_TRASH}")
        return True

    @staticmethod
    def _ensure_maildir(path: Path):
        for subdir in (MAILDIR_CUR, MAILDIR_NEW, MAILDIR_TMP):
            (path / subdir).mkdir(parents=True, exist_ok=True)
