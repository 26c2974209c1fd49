from app_webmail.exceptions.auth_exception import AuthException
from common.consts.response_const import RET_TOKEN_EXPIRED


class TokenExpiredException(AuthException):
    ret_code = RET_TOKEN_EXPIRED
