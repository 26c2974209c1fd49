"""
Mail data provider interface

The console talks to mail data only through a MailDataProvider, so the real connector
and the in-process demo data can be swapped by configuration.
All methods raise MailDataException on failure.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from app_console.session import ClientSession

EmailId = Union[int, str]


class MailDataProvider(ABC):
    # folder shown after sign-in
    default_folder = "INBOX"

    @abstractmethod
    def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Returns:
            {"token": str, "user": {"username", "name", "domain"}}
        """
        raise NotImplementedError

    @abstractmethod
    def logout(self, session: ClientSession) -> Dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def get_emails(self, session: ClientSession, folder: str, limit: int = 50, offset: int = 0) -> Dict[str, Any]:
        """
        Returns:
            {"emails": [email dict], "total": int, "folder": str}, email dates are datetimes
        """
        raise NotImplementedError

    @abstractmethod
    def get_email(self, session: ClientSession, folder: str, email_id: EmailId) -> Dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def send_email(
            self,
            session: ClientSession,
            to: List[str],
            subject: str,
            body: str = "",
            cc: Optional[List[str]] = None,
            bcc: Optional[List[str]] = None,
            password: Optional[str] = None
    ) -> Dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def mark_as_read(self, session: ClientSession, folder: str, email_id: EmailId) -> Dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def toggle_star(self, session: ClientSession, folder: str, email_id: EmailId, starred: bool) -> Dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def delete_email(self, session: ClientSession, folder: str, email_id: EmailId) -> Dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def get_folders(self, session: ClientSession) -> List[Dict[str, Any]]:
        """
        Returns:
            [{"name", "displayName", "count"}]
        """
        raise NotImplementedError

    @abstractmethod
    def get_user_info(self, session: ClientSession) -> Dict[str, Any]:
        raise NotImplementedError
