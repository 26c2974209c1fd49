"""
Demo data provider

Synthetic mailbox for running the console without a mail server: 50 generated
messages across inbox, sent, drafts, spam and trash, plus a virtual "starred" folder.
State lives in the process and is shared by every demo session.
"""
import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from app_console.clients.base_provider import MailDataProvider, EmailId
from app_console.exceptions.mail_data_exception import MailDataException
from app_console.session import ClientSession
from common.consts.response_const import RET_MISSING_PARAM, RET_RESOURCE_NOT_FOUND
from common.consts.string_const import EMPTY_STRING
from common.utils.date_util import get_now_timestamp_ms
from common.utils.string_util import collapse_whitespace

logger = logging.getLogger(__name__)

DEMO_USER = {
    "username": "demo@fusionmail.com",
    "name": "Demo User",
    "domain": "fusionmail.com",
}
DEMO_PASSWORD = "demo123"
DEMO_EMAIL_COUNT = 50
# the first messages always land in the inbox
DEMO_INBOX_COUNT = 35

FOLDER_INBOX = "inbox"
FOLDER_STARRED = "starred"
FOLDER_SENT = "sent"
FOLDER_DRAFTS = "drafts"
FOLDER_SPAM = "spam"
FOLDER_TRASH = "trash"

DEMO_FOLDERS = (
    (FOLDER_INBOX, "Inbox"),
    (FOLDER_STARRED, "Starred"),
    (FOLDER_SENT, "Sent"),
    (FOLDER_DRAFTS, "Drafts"),
    (FOLDER_SPAM, "Spam"),
    (FOLDER_TRASH, "Trash"),
)
REAL_FOLDERS = (FOLDER_INBOX, FOLDER_SENT, FOLDER_DRAFTS, FOLDER_SPAM, FOLDER_TRASH)

SENDERS = (
    ("John Smith", "john@company.com"),
    ("Sarah Johnson", "sarah@startup.io"),
    ("GitHub", "noreply@github.com"),
    ("LinkedIn", "notifications@linkedin.com"),
    ("Amazon", "orders@amazon.com"),
    ("Netflix", "info@netflix.com"),
    ("Team Lead", "lead@company.com"),
    ("HR Department", "hr@company.com"),
    ("Support Team", "support@service.com"),
    ("Newsletter", "news@techblog.com"),
)

SUBJECTS = (
    "Weekly Team Meeting Notes",
    "Project Update - Q4 Goals",
    "Your order has been shipped",
    "Security Alert: New login detected",
    "Welcome to our platform!",
    "Invoice #12345 - Payment Due",
    "Meeting Reminder: Tomorrow 2PM",
    "New features available now",
    "Password reset request",
    "Monthly Newsletter - Tech Updates",
    "Vacation Request Approved",
    "System Maintenance Scheduled",
    "New comment on your post",
    "Quarterly Review Meeting",
    "Software Update Available",
)

OPENINGS = (
    "Hi there! I wanted to follow up on our conversation from yesterday.",
    "Please find attached the documents you requested. Let me know if you need anything else.",
    "Thank you for your recent purchase. Your order is being processed and will ship soon.",
    "We noticed a new login to your account from an unrecognized device.",
    "Welcome aboard! We're excited to have you join our community.",
    "Your monthly invoice is ready. Please review the charges and submit payment.",
    "Just a friendly reminder about our meeting scheduled for tomorrow.",
    "We've just released some exciting new features that we think you'll love.",
    "Someone requested a password reset for your account. If this wasn't you, ignore this email.",
    "Here's what's been happening in the tech world this month.",
    "Great news! Your vacation request has been approved by management.",
    "We'll be performing scheduled maintenance on our servers this weekend.",
    "John Smith commented on your recent post about project management.",
    "It's time for your quarterly performance review. Please schedule a meeting.",
    "A new software update is available for download.",
)

BODIES = (
    "{opening}\n\n"
    "I hope this email finds you well. I wanted to reach out regarding the upcoming project "
    "deadlines and discuss how we can best move forward.\n\n"
    "Key points to consider:\n"
    "- Timeline adjustments may be necessary\n"
    "- Resource allocation needs review\n"
    "- Stakeholder communication is crucial\n\n"
    "Please let me know your thoughts. I'm available for a call this week.\n\n"
    "Best regards,\nTeam Lead",

    "{opening}\n\n"
    "Thank you for your continued partnership. We want to make sure you have the best "
    "possible experience.\n\n"
    "This month's highlights:\n"
    "- New feature releases\n"
    "- Performance improvements\n"
    "- Enhanced security measures\n\n"
    "If you have any questions, please reach out to our support team.\n\n"
    "Sincerely,\nCustomer Success Team",

    "{opening}\n\n"
    "Here is an update on the status of your request.\n\n"
    "Current status:\n"
    "- Initial review completed\n"
    "- Documentation gathered\n"
    "- Final approval pending\n\n"
    "We expect to have everything completed by the end of this week.\n\n"
    "Best,\nProject Manager",
)


def generate_emails(rng: random.Random, now: datetime, count: int = DEMO_EMAIL_COUNT) -> List[Dict[str, Any]]:
    """
    Generate demo messages, newest first

    Args:
        rng: Random source, seeded for a repeatable mailbox
        now: Newest possible date
        count: Number of messages

    Returns:
        List of email dicts
    """
    emails = []
    for i in range(count):
        sender, address = rng.choice(SENDERS)
        opening = rng.choice(OPENINGS)
        body = rng.choice(BODIES).format(opening=opening)
        date = (now - timedelta(days=rng.randrange(30))).replace(
            hour=rng.randrange(24), minute=rng.randrange(60), second=0, microsecond=0
        )
        if date > now:
            date -= timedelta(days=1)
        emails.append({
            "id": i + 1,
            "sender": sender,
            "email": address,
            "subject": rng.choice(SUBJECTS),
            "snippet": collapse_whitespace(body)[:100],
            "body": body,
            "date": date,
            "unread": rng.random() > 0.6,
            "starred": rng.random() > 0.8,
            "folder": FOLDER_INBOX if i < DEMO_INBOX_COUNT else rng.choice(REAL_FOLDERS),
        })
    emails.sort(key=lambda email: email["date"], reverse=True)
    return emails


class DemoDataProvider(MailDataProvider):
    """In-process demo mailbox"""

    default_folder = FOLDER_INBOX

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)
        self.user = dict(DEMO_USER)
        self.emails = generate_emails(self.rng, datetime.now(timezone.utc))

    def login(self, email: str, password: str) -> Dict[str, Any]:
        if not email or not password:
            raise MailDataException("Email and password are required", status=400, code=RET_MISSING_PARAM)
        return {
            "token": f"demo-token-{get_now_timestamp_ms()}",
            "user": dict(self.user),
        }

    def logout(self, session: ClientSession) -> Dict[str, Any]:
        return {"message": "Logged out successfully"}

    def get_emails(self, session: ClientSession, folder: str, limit: int = 50, offset: int = 0) -> Dict[str, Any]:
        emails = self._filter(folder)
        return {
            "emails": [dict(email) for email in emails[offset:offset + limit]],
            "total": len(emails),
            "folder": folder,
        }

    def get_email(self, session: ClientSession, folder: str, email_id: EmailId) -> Dict[str, Any]:
        return dict(self._find(email_id))

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
        if not to or not subject:
            raise MailDataException("Recipients and subject are required", status=400, code=RET_MISSING_PARAM)
        email = {
            "id": max((e["id"] for e in self.emails), default=0) + 1,
            "sender": self.user["name"],
            "email": self.user["username"],
            "subject": subject,
            "snippet": collapse_whitespace(body or EMPTY_STRING)[:100],
            "body": body or EMPTY_STRING,
            "date": datetime.now(timezone.utc),
            "unread": False,
            "starred": False,
            "folder": FOLDER_SENT,
        }
        self.emails.insert(0, email)
        logger.info(f"[DemoDataProvider.send_email] Demo message {email['id']} to {len(to)} recipient(s)")
        return {"message": "Email sent successfully", "messageId": str(email["id"])}

    def mark_as_read(self, session: ClientSession, folder: str, email_id: EmailId) -> Dict[str, Any]:
        self._find(email_id)["unread"] = False
        return {"message": "Email marked as read"}

    def toggle_star(self, session: ClientSession, folder: str, email_id: EmailId, starred: bool) -> Dict[str, Any]:
        self._find(email_id)["starred"] = starred
        return {"message": "Email starred" if starred else "Email unstarred"}

    def delete_email(self, session: ClientSession, folder: str, email_id: EmailId) -> Dict[str, Any]:
        email = self._find(email_id)
        if email["folder"] == FOLDER_TRASH:
            self.emails.remove(email)
        else:
            email["folder"] = FOLDER_TRASH
        return {"message": "Email deleted"}

    def get_folders(self, session: ClientSession) -> List[Dict[str, Any]]:
        folders = []
        for name, display_name in DEMO_FOLDERS:
            if name == FOLDER_INBOX:
                count = sum(1 for email in self._filter(name) if email["unread"])
            else:
                count = len(self._filter(name))
            folders.append({"name": name, "displayName": display_name, "count": count})
        return folders

    def get_user_info(self, session: ClientSession) -> Dict[str, Any]:
        return dict(self.user, quota=0, created=None)

    def _filter(self, folder: str) -> List[Dict[str, Any]]:
        folder = (folder or FOLDER_INBOX).lower()
        if folder == FOLDER_STARRED:
            return [email for email in self.emails if email["starred"]]
        return [email for email in self.emails if email["folder"] == folder]

    def _find(self, email_id: EmailId) -> Dict[str, Any]:
        try:
            email_id = int(email_id)
        except (TypeError, ValueError):
            email_id = None
        for email in self.emails:
            if email["id"] == email_id:
                return email
        raise MailDataException("Email not found", status=404, code=RET_RESOURCE_NOT_FOUND)


# Singleton instance
_demo_provider = None


def get_demo_provider() -> DemoDataProvider:
    """Get the process wide demo provider"""
    global _demo_provider
    if _demo_provider is None:
        _demo_provider = DemoDataProvider()
    return _demo_provider


def reset_demo_provider():
    """Drop the demo mailbox, the next call regenerates it"""
    global _demo_provider
    _demo_provider = None
