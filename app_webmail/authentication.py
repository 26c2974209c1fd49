"""
Bearer token authentication for the protected connector endpoints

Authorization: Bearer <token>
- no header: not authenticated (401)
- invalid or expired token: forbidden (403)
"""
import logging

from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header

from app_webmail.exceptions.auth_exception import AuthException
from app_webmail.exceptions.token_expired_exception import TokenExpiredException
from app_webmail.services.auth_service import AuthService
from common.consts.response_const import RET_TOKEN_INVALID

logger = logging.getLogger(__name__)

KEYWORD = "Bearer"


class InvalidTokenException(exceptions.PermissionDenied):
    default_detail = "Invalid or expired token"
    ret_code = RET_TOKEN_INVALID

    def __init__(self, detail=None, code=None, ret_code=None):
        super().__init__(detail, code)
        if ret_code is not None:
            self.ret_code = ret_code


class BearerTokenAuthentication(BaseAuthentication):

    def authenticate(self, request):
        auth = get_authorization_header(request).split()
        if not auth or auth[0].lower() != KEYWORD.lower().encode():
            return None

        if len(auth) != 2:
            raise InvalidTokenException("Invalid token header")

        try:
            token = auth[1].decode()
        except UnicodeError:
            raise InvalidTokenException("Invalid token header")

        try:
            user = AuthService().verify_token(token)
        except TokenExpiredException as e:
            raise InvalidTokenException(e.message, ret_code=e.ret_code)
        except AuthException as e:
            logger.warning(f"[BearerTokenAuthentication.authenticate] {e.message}")
            raise InvalidTokenException(e.message)
        return user, token

    def authenticate_header(self, request):
        return f'{KEYWORD} realm="api"'
