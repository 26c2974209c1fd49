"""
Mailbox state of the console

Holds what the user is looking at during one request: the current folder, the
loaded message list, the search query, the selection and the open message. Every
action goes through the mail data provider and then reloads the list.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from app_console.clients.base_provider import MailDataProvider
from app_console.exceptions.mail_data_exception import MailDataException
from app_console.session import ClientSession
from common.consts.response_const import RET_MISSING_PARAM
from common.utils.string_util import check_blank, explode

logger = logging.getLogger(__name__)

PAGE_SIZE = 50


def email_key(email: Dict[str, Any]) -> str:
    """
    Id used in console urls: the maildir unique name when the connector gives one,
    the position id otherwise
    """
    return str(email.get("uid") or email.get("id"))


def matches(email: Dict[str, Any], query: str) -> bool:
    """
    Case-insensitive match over sender, subject, snippet and body
    """
    query = query.lower()
    return any(query in (email.get(field) or "").lower() for field in ("sender", "subject", "snippet", "body"))


class MailboxState:

    def __init__(self, provider: MailDataProvider, session: ClientSession, folder: Optional[str] = None):
        self.provider = provider
        self.session = session
        self.folder = folder or provider.default_folder
        self.emails: List[Dict[str, Any]] = []
        self.total = 0
        self.offset = 0
        self.query = ""
        self.selected = set()
        self.current: Optional[Dict[str, Any]] = None

    @property
    def visible_emails(self) -> List[Dict[str, Any]]:
        if check_blank(self.query):
            return self.emails
        return [email for email in self.emails if matches(email, self.query.strip())]

    @property
    def all_selected(self) -> bool:
        keys = [email_key(email) for email in self.visible_emails]
        return bool(keys) and all(key in self.selected for key in keys)

    @property
    def has_next_page(self) -> bool:
        return self.offset + PAGE_SIZE < self.total

    def load(self, offset: int = 0) -> "MailboxState":
        """
        Load one page of the current folder
        """
        self.offset = max(offset, 0)
        result = self.provider.get_emails(self.session, self.folder, PAGE_SIZE, self.offset)
        self.emails = result.get("emails", [])
        self.total = result.get("total", len(self.emails))
        # drop selections that are no longer listed
        self.selected &= {email_key(email) for email in self.emails}
        return self

    def switch_folder(self, folder: str) -> "MailboxState":
        self.folder = folder
        self.selected.clear()
        self.current = None
        self.query = ""
        return self.load()

    def search(self, query: str) -> List[Dict[str, Any]]:
        self.query = query or ""
        return self.visible_emails

    def open(self, email_id: str) -> Dict[str, Any]:
        """
        Open a message and mark it read
        """
        self.current = self.provider.get_email(self.session, self.folder, email_id)
        if self.current.get("unread"):
            self.provider.mark_as_read(self.session, self.folder, email_id)
            self.current["unread"] = False
        return self.current

    def toggle_star(self, email_id: str) -> bool:
        """
        Flip the star of a message

        Returns:
            The new starred value
        """
        email = self._find(email_id)
        if email is None:
            email = self.provider.get_email(self.session, self.folder, email_id)
        starred = not email.get("starred")
        self.provider.toggle_star(self.session, self.folder, email_id, starred)
        if self.current is not None and email_key(self.current) == email_id:
            self.current["starred"] = starred
        self.load(self.offset)
        return starred

    def delete(self, email_id: str):
        self.provider.delete_email(self.session, self.folder, email_id)
        self.selected.discard(email_id)
        if self.current is not None and email_key(self.current) == email_id:
            self.current = None
        self.load(self.offset)

    def select(self, email_id: str, selected: bool = True):
        if selected:
            self.selected.add(email_id)
        else:
            self.selected.discard(email_id)

    def select_all(self, selected: bool = True):
        keys = {email_key(email) for email in self.visible_emails}
        if selected:
            self.selected |= keys
        else:
            self.selected -= keys

    def select_many(self, email_ids: Iterable[str]):
        for email_id in email_ids:
            self.select(str(email_id))

    def delete_selected(self) -> int:
        """
        Delete every selected message

        Returns:
            Number of messages deleted
        """
        deleted = 0
        for email_id in sorted(self.selected):
            try:
                self.provider.delete_email(self.session, self.folder, email_id)
                deleted += 1
            except MailDataException as e:
                if e.is_auth_error:
                    raise
                logger.warning(f"[MailboxState.delete_selected] Failed to delete {email_id}: {e.message}")
        self.selected.clear()
        self.current = None
        self.load(self.offset)
        return deleted

    def send(self, to: str, subject: str, body: str = "", cc: str = "", bcc: str = "",
             password: Optional[str] = None) -> Dict[str, Any]:
        """
        Send a message, recipients are comma separated

        Raises:
            MailDataException: If To or Subject is empty, or the provider fails
        """
        to_list = explode(to)
        if not to_list or check_blank(subject):
            raise MailDataException("Please fill in the required fields (To and Subject)", status=400,
                                    code=RET_MISSING_PARAM)
        result = self.provider.send_email(
            self.session,
            to=to_list,
            subject=subject.strip(),
            body=body or "",
            cc=explode(cc),
            bcc=explode(bcc),
            password=password or None,
        )
        if self.folder.lower() == "sent":
            self.load()
        return result

    def _find(self, email_id: str) -> Optional[Dict[str, Any]]:
        for email in self.emails:
            if email_key(email) == email_id:
                return email
        return None
