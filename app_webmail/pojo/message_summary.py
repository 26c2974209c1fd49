from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass
class MessageSummary:
    """
    A message parsed from one maildir file.

    id is the 1-based position in the folder listing (newest first), so it changes
    whenever messages arrive or leave. uid is the maildir unique name and stays the
    same while the file exists.
    """
    id: int
    uid: str
    sender: str
    email: str
    subject: str
    date: datetime
    snippet: str
    body: str
    unread: bool
    starred: bool
    folder: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'uid': self.uid,
            'sender': self.sender,
            'email': self.email,
            'subject': self.subject,
            'date': self.date.isoformat(),
            'snippet': self.snippet,
            'body': self.body,
            'unread': self.unread,
            'starred': self.starred,
            'folder': self.folder,
        }
