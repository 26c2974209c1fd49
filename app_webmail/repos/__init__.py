"""
Webmail repositories

This module exports all repository functions for database operations.
"""
from app_webmail.repos.vmail_mailbox_repo import (
    get_mailbox_by_username,
)
from app_webmail.repos.send_log_repo import (
    create_send_log,
    list_send_logs_by_username,
)

__all__ = [
    # Mailbox directory
    'get_mailbox_by_username',
    # Send log
    'create_send_log',
    'list_send_logs_by_username',
]
