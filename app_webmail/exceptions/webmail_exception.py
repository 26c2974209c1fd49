"""
Base exception for the webmail connector
"""
from rest_framework import status as http_status

from common.consts.response_const import RET_ERR
from common.exceptions.base_exception import CheckedException


class WebmailException(CheckedException):
    """
    Base exception for webmail errors.
    Subclasses carry the error code and HTTP status the views respond with.
    """
    ret_code = RET_ERR
    http_status = http_status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "", ret_code: int = None):
        super(WebmailException, self).__init__(message)
        if ret_code is not None:
            self.ret_code = ret_code
