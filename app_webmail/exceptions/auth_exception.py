from rest_framework import status as http_status

from app_webmail.exceptions.webmail_exception import WebmailException
from common.consts.response_const import RET_UNAUTHORIZED


class AuthException(WebmailException):
    """Bad credentials, disabled mail services, or an unusable session token"""
    ret_code = RET_UNAUTHORIZED
    http_status = http_status.HTTP_401_UNAUTHORIZED
