"""
Maildir message parser

This service turns a maildir message file into a MessageSummary:
- Flags from the filename (S = read, F = starred)
- Sender display name and address from the From header
- Subject (RFC 2047 encoded words decoded)
- Date (current time if missing or invalid)
- Plain text body and a short snippet
"""
import html
import logging
import re
from datetime import datetime, timezone
from email import message_from_bytes
from email.charset import UNKNOWN8BIT
from email.header import Header, decode_header
from email.message import Message
from email.utils import parsedate_to_datetime
from typing import Optional, Tuple, Union

from app_webmail.consts.webmail_const import (
    MAILDIR_FLAGS_DELIMITER,
    FLAG_SEEN,
    FLAG_FLAGGED,
    SNIPPET_LENGTH,
)
from app_webmail.pojo.message_summary import MessageSummary
from common.components.singleton import Singleton
from common.consts.string_const import EMPTY_STRING
from common.utils.string_util import collapse_whitespace

logger = logging.getLogger(__name__)

_HTML_TAG_PATTERN = re.compile(r"<[^>]+>")


class MaildirParser(Singleton):
    """Maildir message parser"""

    @staticmethod
    def split_filename(filename: str) -> Tuple[str, str]:
        """
        Split a maildir filename into unique name and flag letters
        "1700000000.M1P1.host:2,FS" -> ("1700000000.M1P1.host", "FS")

        Args:
            filename: Maildir filename

        Returns:
            Tuple of (uid, flags), flags empty if the delimiter is missing
        """
        uid, delimiter, flags = filename.partition(MAILDIR_FLAGS_DELIMITER)
        if not delimiter:
            return filename, EMPTY_STRING
        return uid, flags

    @staticmethod
    def parse_flags(filename: str) -> Tuple[bool, bool]:
        """
        Get (unread, starred) from the flag letters of a filename
        """
        _, flags = MaildirParser.split_filename(filename)
        return FLAG_SEEN not in flags, FLAG_FLAGGED in flags

    @staticmethod
    def decode_header_value(value: Union[str, Header, None]) -> str:
        """
        Decode RFC 2047 encoded words, the raw value is kept if decoding fails
        "=?utf-8?b?5L2g5aW9?=" -> "你好"

        Raw 8-bit header bytes (no declared charset) are read as UTF-8.
        """
        if not value:
            return EMPTY_STRING
        try:
            chunks = []
            for chunk, charset in decode_header(value):
                if isinstance(chunk, bytes):
                    chunk = MaildirParser._decode_bytes(chunk, charset)
                chunks.append(chunk)
            return EMPTY_STRING.join(chunks).strip()
        except Exception as e:
            logger.warning(f"[MaildirParser.decode_header_value] Failed to decode header '{value}': {e}")
            return str(value).strip()

    @staticmethod
    def parse_sender(from_value: str) -> Tuple[str, str]:
        """
        Split a From header into display name and address
        'Jane <jane@x.com>'         -> ("Jane", "jane@x.com")
        '"Jane Doe" <jane@x.com>'   -> ("Jane Doe", "jane@x.com")
        'jane@x.com'                -> ("jane@x.com", "jane@x.com")

        Args:
            from_value: Decoded From header

        Returns:
            Tuple of (sender, email)
        """
        from_value = (from_value or EMPTY_STRING).strip()
        start = from_value.find("<")
        end = from_value.find(">", start + 1) if start >= 0 else -1
        if start < 0 or end < 0:
            return from_value, from_value

        address = from_value[start + 1:end].strip()
        name = from_value[:start].strip().strip('"').strip()
        return name or address, address

    @staticmethod
    def parse_date(date_value: Union[str, Header, None], now: Optional[datetime] = None) -> datetime:
        """
        Parse an RFC 2822 date, the current time if missing or invalid

        Args:
            date_value: Date header
            now: Value used when the header is unusable

        Returns:
            Aware datetime
        """
        if now is None:
            now = datetime.now(timezone.utc)
        date_value = MaildirParser.decode_header_value(date_value)
        if not date_value:
            return now
        try:
            date = parsedate_to_datetime(date_value)
        except Exception as e:
            logger.warning(f"[MaildirParser.parse_date] Failed to parse date '{date_value}': {e}")
            return now
        if date is None:
            return now
        if date.tzinfo is None:
            date = date.replace(tzinfo=timezone.utc)
        return date

    @staticmethod
    def make_snippet(body: str, length: int = SNIPPET_LENGTH) -> str:
        """
        First characters of the body with whitespace runs collapsed
        """
        return collapse_whitespace(body or EMPTY_STRING)[:length]

    @staticmethod
    def extract_body(msg: Message) -> str:
        """
        Get the text body of a message. Multipart messages use the first text/plain
        part, then the first text/html part with tags stripped.

        Args:
            msg: Parsed email message

        Returns:
            Body text
        """
        if not msg.is_multipart():
            body = MaildirParser._decode_payload(msg)
            if msg.get_content_type() == "text/html":
                return MaildirParser._strip_html(body)
            return body

        html_body = None
        for part in msg.walk():
            if part.is_multipart():
                continue
            if "attachment" in part.get("Content-Disposition", EMPTY_STRING):
                continue
            content_type = part.get_content_type()
            if content_type == "text/plain":
                return MaildirParser._decode_payload(part)
            if content_type == "text/html" and html_body is None:
                html_body = MaildirParser._decode_payload(part)

        if html_body is not None:
            return MaildirParser._strip_html(html_body)
        return EMPTY_STRING

    @staticmethod
    def parse_message(
            raw: bytes,
            filename: str,
            position: int,
            folder: str,
            now: Optional[datetime] = None
    ) -> MessageSummary:
        """
        Parse a maildir message file

        Args:
            raw: File content
            filename: Maildir filename (carries the flags)
            position: 1-based position in the folder listing
            folder: Folder name
            now: Date used when the Date header is unusable

        Returns:
            MessageSummary
        """
        msg = message_from_bytes(raw)

        uid, _ = MaildirParser.split_filename(filename)
        unread, starred = MaildirParser.parse_flags(filename)
        sender, address = MaildirParser.parse_sender(MaildirParser.decode_header_value(msg.get("From")))
        subject = MaildirParser.decode_header_value(msg.get("Subject"))
        date = MaildirParser.parse_date(msg.get("Date"), now)
        body = MaildirParser.extract_body(msg)

        return MessageSummary(
            id=position,
            uid=uid,
            sender=sender,
            email=address,
            subject=subject,
            date=date,
            snippet=MaildirParser.make_snippet(body),
            body=body,
            unread=unread,
            starred=starred,
            folder=folder,
        )

    @staticmethod
    def _decode_payload(part: Message) -> str:
        payload = part.get_payload(decode=True)
        if payload is None:
            payload = part.get_payload()
            return payload if isinstance(payload, str) else EMPTY_STRING
        charset = part.get_content_charset() or "utf-8"
        try:
            return payload.decode(charset, errors="replace")
        except LookupError:
            return payload.decode("utf-8", errors="replace")

    @staticmethod
    def _strip_html(body: str) -> str:
        return html.unescape(_HTML_TAG_PATTERN.sub(" ", body))

    @staticmethod
    def _decode_bytes(chunk: bytes, charset: Optional[str]) -> str:
        if not charset or charset == UNKNOWN8BIT:
            charset = "utf-8"
        try:
            return chunk.decode(charset, errors="replace")
        except LookupError:
            return chunk.decode("utf-8", errors="replace")
