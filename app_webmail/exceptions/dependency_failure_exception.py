from rest_framework import status as http_status

from app_webmail.exceptions.webmail_exception import WebmailException
from common.consts.response_const import RET_DEPENDENCY_ERROR


class DependencyFailureException(WebmailException):
    """
    The mailbox directory, the maildir filesystem or the SMTP relay failed.
    The message is safe to return, details go to the log.
    """
    ret_code = RET_DEPENDENCY_ERROR
    http_status = http_status.HTTP_500_INTERNAL_SERVER_ERROR
