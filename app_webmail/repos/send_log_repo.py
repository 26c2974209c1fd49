"""
Send log repository

This module provides database operations for SendLog model.
"""
import logging
from typing import List

from app_webmail.models.send_log import SendLog
from common.utils.date_util import get_now_timestamp_ms

logger = logging.getLogger(__name__)


def create_send_log(
        username: str,
        recipients: str,
        subject: str,
        message_id: str,
        ct: int = 0
) -> SendLog:
    """
    Create a send log entry

    Args:
        username: Sender mailbox
        recipients: Comma separated To/Cc/Bcc addresses
        subject: Message subject
        message_id: Message-ID header of the sent message
        ct: Create timestamp (milliseconds), now if 0

    Returns:
        Created SendLog instance
    """
    if ct == 0:
        ct = get_now_timestamp_ms()
    return SendLog.objects.create(
        username=username,
        recipients=recipients,
        subject=subject,
        message_id=message_id,
        ct=ct
    )


def list_send_logs_by_username(username: str, limit: int = 20) -> List[SendLog]:
    """
    List the latest send log entries of a mailbox, newest first

    Args:
        username: Sender mailbox
        limit: Max entries

    Returns:
        List of SendLog instances
    """
    return list(SendLog.objects.filter(username=username).order_by('-ct', '-id')[:limit])
