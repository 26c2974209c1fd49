from datetime import datetime
from typing import Optional


def get_now_timestamp_ms() -> int:
    """
    Get the current timestamp in milliseconds
    """
    now = datetime.now()
    return int(round(now.timestamp() * 1000))


def get_date_str_of_datetime(date_obj: datetime, date_format: str) -> str:
    """
    Convert datetime to date string
    2024-05-01 00:00:00 -> "20240501"

    @param date_obj:
    @param date_format:
    @return: date string
    """
    return date_obj.strftime(date_format)


def parse_iso_datetime(date_str: str) -> Optional[datetime]:
    """
    Convert an ISO 8601 string to datetime, None if it cannot be parsed
    "2024-05-01T08:30:00+00:00" -> 2024-05-01 08:30:00+00:00

    @param date_str:
    @return: datetime or None
    """
    if not date_str:
        return None
    try:
        return datetime.fromisoformat(date_str.replace("Z", "+00:00"))
    except ValueError:
        return None


def get_short_date_str(date_obj: datetime, now: Optional[datetime] = None) -> str:
    """
    Convert datetime to the compact label shown in message lists
    same day   -> "08:30"
    same year  -> "May 1"
    otherwise  -> "2023/05/01"

    @param date_obj:
    @param now: reference time, defaults to the current time in date_obj's timezone
    @return: date string
    """
    if now is None:
        now = datetime.now(date_obj.tzinfo)
    if date_obj.date() == now.date():
        return date_obj.strftime("%H:%M")
    if date_obj.year == now.year:
        return f"{date_obj.strftime('%b')} {date_obj.day}"
    return date_obj.strftime("%Y/%m/%d")


def get_full_date_str(date_obj: datetime) -> str:
    """
    Convert datetime to the long label shown in message detail
    2024-05-01 08:30:00 -> "Wed, May 1, 2024, 08:30"

    @param date_obj:
    @return: date string
    """
    return f"{date_obj.strftime('%a, %b')} {date_obj.day}, {date_obj.strftime('%Y, %H:%M')}"
