from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class FolderSummary:
    name: str
    display_name: str
    # unread messages in the folder
    count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'displayName': self.display_name,
            'count': self.count,
        }
