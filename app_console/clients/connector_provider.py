"""
Connector data provider

HTTP client of the webmail connector API (app_webmail), over requests.
The bearer token comes from the ClientSession of the current request.
"""
import logging
from typing import Any, Dict, List, Optional

from app_console.clients.base_provider import MailDataProvider, EmailId
from app_console.exceptions.mail_data_exception import MailDataException
from app_console.session import ClientSession
from common.exceptions.http_exception import HttpException
from common.utils.date_util import parse_iso_datetime
from common.utils.http_util import request_json
from common.utils.url_util import join_url

logger = logging.getLogger(__name__)

EMAIL_PASSWORD_HEADER = "X-Email-Password"


def normalize_email(email: Dict[str, Any]) -> Dict[str, Any]:
    """
    Email dict from the connector with its ISO date turned into a datetime
    """
    email = dict(email)
    if isinstance(email.get("date"), str):
        email["date"] = parse_iso_datetime(email["date"])
    return email


class ConnectorDataProvider(MailDataProvider):

    def __init__(self, base_url: str, timeout: int = 10):
        self.base_url = base_url
        self.timeout = timeout

    def login(self, email: str, password: str) -> Dict[str, Any]:
        return self._call("POST", "auth/login", data={"email": email, "password": password})

    def logout(self, session: ClientSession) -> Dict[str, Any]:
        return self._call("POST", "auth/logout", session=session)

    def get_emails(self, session: ClientSession, folder: str, limit: int = 50, offset: int = 0) -> Dict[str, Any]:
        result = self._call("GET", "protected/emails", session=session,
                            params={"folder": folder, "limit": limit, "offset": offset})
        result["emails"] = [normalize_email(email) for email in result.get("emails", [])]
        return result

    def get_email(self, session: ClientSession, folder: str, email_id: EmailId) -> Dict[str, Any]:
        email = self._call("GET", "protected/emails", email_id, session=session, params={"folder": folder})
        return normalize_email(email)

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
        headers = {EMAIL_PASSWORD_HEADER: password} if password else None
        return self._call("POST", "protected/emails/send", session=session, headers=headers, data={
            "to": to,
            "cc": cc or [],
            "bcc": bcc or [],
            "subject": subject,
            "body": body,
        })

    def mark_as_read(self, session: ClientSession, folder: str, email_id: EmailId) -> Dict[str, Any]:
        return self._call("PUT", "protected/emails", email_id, "read", session=session, params={"folder": folder})

    def toggle_star(self, session: ClientSession, folder: str, email_id: EmailId, starred: bool) -> Dict[str, Any]:
        return self._call("PUT", "protected/emails", email_id, "star", session=session, params={"folder": folder},
                          data={"starred": starred})

    def delete_email(self, session: ClientSession, folder: str, email_id: EmailId) -> Dict[str, Any]:
        return self._call("DELETE", "protected/emails", email_id, session=session, params={"folder": folder})

    def get_folders(self, session: ClientSession) -> List[Dict[str, Any]]:
        return self._call("GET", "protected/folders", session=session).get("folders", [])

    def get_user_info(self, session: ClientSession) -> Dict[str, Any]:
        return self._call("GET", "protected/user/info", session=session)

    def _call(self, method, *path, session: Optional[ClientSession] = None, data=None, params=None, headers=None):
        url = join_url(self.base_url, *path)
        try:
            result = request_json(
                method,
                url,
                data=data,
                params=params,
                auth_token=session.token if session else None,
                headers=headers,
                timeout=self.timeout,
            )
        except HttpException as e:
            logger.warning(f"[ConnectorDataProvider._call] {method} {url} failed: status={e.status}, "
                           f"code={e.code}, message={e.message}")
            raise MailDataException(e.message, status=e.status, code=e.code) from e
        return result if result is not None else {}
