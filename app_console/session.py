"""
Console session

The connector token and the signed-in user are kept in the Django session (a signed
cookie). Views load a ClientSession at the start of each request and pass it to the
mail data provider explicitly.
"""
from typing import Any, Dict, Optional

SESSION_TOKEN_KEY = "webmail_token"
SESSION_USER_KEY = "webmail_user"


class ClientSession:

    def __init__(self, token: Optional[str] = None, user: Optional[Dict[str, Any]] = None):
        self.token = token
        self.user = user or {}

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def username(self) -> str:
        return self.user.get("username", "")

    @property
    def display_name(self) -> str:
        return self.user.get("name") or self.username

    @classmethod
    def load(cls, request) -> "ClientSession":
        return cls(
            token=request.session.get(SESSION_TOKEN_KEY),
            user=request.session.get(SESSION_USER_KEY),
        )

    def save(self, request):
        request.session[SESSION_TOKEN_KEY] = self.token
        request.session[SESSION_USER_KEY] = self.user

    def clear(self, request):
        self.token = None
        self.user = {}
        request.session.pop(SESSION_TOKEN_KEY, None)
        request.session.pop(SESSION_USER_KEY, None)
