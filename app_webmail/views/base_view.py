"""
Base views of the connector API
"""
import logging
from typing import Any, Dict

from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from app_webmail.authentication import BearerTokenAuthentication
from app_webmail.exceptions.validation_exception import ValidationException
from app_webmail.exceptions.webmail_exception import WebmailException
from common.consts.response_const import RET_PARAM_FORMAT_ERROR
from common.utils.http_util import resp_err

logger = logging.getLogger(__name__)


def resp_webmail_exception(e: WebmailException):
    """
    Respond to an expected connector failure with its own code and HTTP status
    """
    return resp_err(e.message, code=e.ret_code, status=e.http_status)


def get_body(request) -> Dict[str, Any]:
    """
    JSON object of the request body

    Raises:
        ValidationException: If the body is not an object
    """
    data = request.data
    if not hasattr(data, "get"):
        raise ValidationException("Request body must be a JSON object", ret_code=RET_PARAM_FORMAT_ERROR)
    return data


class PublicAPIView(APIView):
    """Endpoints open to anyone"""
    authentication_classes = []
    permission_classes = []


class ProtectedAPIView(APIView):
    """Endpoints that need a valid session token, request.user is the MailUser"""
    authentication_classes = [BearerTokenAuthentication]
    permission_classes = [IsAuthenticated]
