from rest_framework import status as http_status

from app_webmail.exceptions.webmail_exception import WebmailException
from common.consts.response_const import RET_RESOURCE_NOT_FOUND


class MailboxNotFoundException(WebmailException):
    ret_code = RET_RESOURCE_NOT_FOUND
    http_status = http_status.HTTP_404_NOT_FOUND
