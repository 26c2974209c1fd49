from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class MailUser:
    """The signed-in mailbox, as carried by the session token"""
    username: str
    name: str = ""
    domain: str = ""

    # DRF permission checks read this from request.user
    is_authenticated = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "MailUser":
        """
        Build from a decoded token payload

        Raises:
            KeyError: if username is missing
        """
        return cls(
            username=claims["username"],
            name=claims.get("name") or "",
            domain=claims.get("domain") or "",
        )
