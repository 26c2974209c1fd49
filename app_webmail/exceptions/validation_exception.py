from rest_framework import status as http_status

from app_webmail.exceptions.webmail_exception import WebmailException
from common.consts.response_const import RET_MISSING_PARAM


class ValidationException(WebmailException):
    """A required field is missing or malformed"""
    ret_code = RET_MISSING_PARAM
    http_status = http_status.HTTP_400_BAD_REQUEST
