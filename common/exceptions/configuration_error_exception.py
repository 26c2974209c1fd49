"""
Configuration error exception
"""
from common.consts.response_const import RET_CONFIG_ERROR
from common.exceptions.base_exception import CheckedException


class ConfigurationErrorException(CheckedException):
    """Settings are missing or cannot be parsed, raised while loading an app config"""
    ret_code = RET_CONFIG_ERROR

    def __init__(self, message: str):
        super(ConfigurationErrorException, self).__init__(message)
