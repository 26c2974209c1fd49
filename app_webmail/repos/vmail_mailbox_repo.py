"""
Mailbox directory repository

Read-only lookups against the mail server's mailbox table. Each request opens its
own connection (CONN_MAX_AGE=0), which Django closes when the request ends.
"""
import logging
from typing import Optional

from django.db import DatabaseError

from app_webmail.consts.webmail_const import VMAIL_DB_ALIAS
from app_webmail.exceptions.dependency_failure_exception import DependencyFailureException
from app_webmail.models.vmail_mailbox import VmailMailbox
from common.consts.response_const import RET_DB_ERROR

logger = logging.getLogger(__name__)


def get_mailbox_by_username(username: str, active_only: bool = False) -> Optional[VmailMailbox]:
    """
    Get mailbox record by username

    Args:
        username: Mailbox username (email address)
        active_only: Whether to filter by active status

    Returns:
        VmailMailbox instance or None if not found

    Raises:
        DependencyFailureException: If the mailbox directory cannot be queried
    """
    try:
        query = VmailMailbox.objects.using(VMAIL_DB_ALIAS).filter(username=username)
        if active_only:
            query = query.filter(active=True)
        return query.first()
    except DatabaseError as e:
        logger.exception(f"[get_mailbox_by_username] Error querying mailbox directory: {e}")
        raise DependencyFailureException("Mailbox directory unavailable", ret_code=RET_DB_ERROR) from e
