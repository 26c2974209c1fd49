import logging
from datetime import datetime, timedelta, timezone

import requests
from django.conf import settings
from rest_framework import exceptions
from rest_framework import status as http_status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from common.consts.response_const import (
    RET_OK,
    RET_ERR,
    RET_JSON_PARSE_ERROR,
    RET_TOKEN_MISSING,
    RET_UNAUTHORIZED,
    RET_FORBIDDEN,
    RET_RESOURCE_NOT_FOUND,
    RET_OPERATION_NOT_ALLOWED,
    RET_HTTP_TIMEOUT,
    RET_HTTP_5XX,
    RET_HTTP_RESPONSE_INVALID,
)
from common.exceptions.http_exception import HttpException
from common.utils.date_util import get_date_str_of_datetime
from common.utils.url_util import url_decode


logger = logging.getLogger(__name__)

# message returned instead of the exception text when DEBUG is off
INTERNAL_ERROR_MESSAGE = "Internal server error"

# DRF exception class -> error code, checked in order
_API_EXCEPTION_CODES = (
    (exceptions.ParseError, RET_JSON_PARSE_ERROR),
    (exceptions.NotAuthenticated, RET_TOKEN_MISSING),
    (exceptions.AuthenticationFailed, RET_UNAUTHORIZED),
    (exceptions.PermissionDenied, RET_FORBIDDEN),
    (exceptions.NotFound, RET_RESOURCE_NOT_FOUND),
    (exceptions.MethodNotAllowed, RET_OPERATION_NOT_ALLOWED),
)


def with_type(data):
    """
    Convert string to int, true to True, false to False

    @param data: data to convert
    @return: converted data
    """
    try:
        if isinstance(data, list):
            return [with_type(item) for item in data]
        if isinstance(data, dict):
            return {key: with_type(value) for key, value in data.items()}

        if data is None:
            return None
        if isinstance(data, (int, bool, float)):
            return data
        if isinstance(data, str):
            if data.isnumeric():
                return int(data)
            if data.lower() == "true":
                return True
            if data.lower() == "false":
                return False
            return url_decode(data)

        raise TypeError(f"Unsupported data type: {type(data)}")
    except Exception as e:
        logger.error(f"Error processing data: {data}, error: {e}")
        raise


def resp_ok(data=None):
    response = Response({
        "data": data,
        "code": RET_OK,
        "errmsg": ""
    }, status=http_status.HTTP_200_OK)
    response["Expires"] = get_date_str_of_datetime((datetime.now(timezone.utc) + timedelta(seconds=5)),
                                                   "%a, %d %b %Y %H:%M:%S %Z")
    return response


def resp_err(message, code=RET_ERR, status=http_status.HTTP_200_OK):
    return Response({
        "data": None,
        "code": code,
        "errmsg": message
    }, status=status)


def resp_exception(e: Exception, code=RET_ERR, status=http_status.HTTP_500_INTERNAL_SERVER_ERROR):
    """
    Respond to an unexpected exception. The exception text is only exposed in DEBUG mode.
    """
    code = getattr(e, "ret_code", code)
    if settings.DEBUG:
        message = repr(e)
    else:
        message = INTERNAL_ERROR_MESSAGE
    return Response({
        "data": None,
        "code": code,
        "errmsg": message
    }, status=status)


def api_exception_handler(exc, context):
    """
    DRF exception handler wrapping the default one, so that authentication, permission
    and parse errors use the same body as resp_err

    @param exc: exception raised by the view or by DRF
    @param context: DRF handler context
    @return: Response, or None to let Django handle it
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    code = getattr(exc, "ret_code", None)
    if code is None:
        code = RET_ERR
        for exception_class, exception_code in _API_EXCEPTION_CODES:
            if isinstance(exc, exception_class):
                code = exception_code
                break

    detail = getattr(exc, "detail", None)
    message = str(detail) if isinstance(detail, str) else str(exc)
    response.data = {
        "data": None,
        "code": code,
        "errmsg": message,
    }
    return response


def request_json(method, url, data=None, params=None, auth_token=None, headers=None, timeout=10):
    """
    发送请求，解析统一响应体 {"data", "code", "errmsg"}

    @param method: GET, POST, PUT, DELETE
    @param url:
    @param data: json 请求体
    @param params: 查询参数
    @param auth_token: Bearer 令牌
    @param headers: 额外的请求头
    @param timeout: 超时（秒）
    @return: 响应体中的 data
    @raise HttpException: 网络错误、非 json 响应、或 code 不为 RET_OK
    """
    logger.debug("[request_json] method=%s, url=%s", method, url)

    request_headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "Connection": "close",
    }
    if auth_token:
        request_headers["Authorization"] = "Bearer " + auth_token
    if headers:
        request_headers.update(headers)

    try:
        response = requests.request(method, url, json=data, params=params, headers=request_headers,
                                    timeout=timeout)
    except requests.Timeout as e:
        raise HttpException(f"request timeout, url={url}", code=RET_HTTP_TIMEOUT) from e
    except requests.RequestException as e:
        raise HttpException(f"request error, url={url}, error={e}") from e

    try:
        body = response.json()
    except ValueError as e:
        code = RET_HTTP_5XX if response.status_code >= 500 else RET_HTTP_RESPONSE_INVALID
        raise HttpException(f"invalid response, status={response.status_code}",
                            status=response.status_code, code=code) from e

    if not isinstance(body, dict):
        raise HttpException(f"invalid response, status={response.status_code}",
                            status=response.status_code, code=RET_HTTP_RESPONSE_INVALID)
    if response.status_code != 200 or body.get("code", RET_OK) != RET_OK:
        raise HttpException(body.get("errmsg") or f"request error, status={response.status_code}",
                            status=response.status_code, code=body.get("code", RET_ERR))
    return body.get("data")
