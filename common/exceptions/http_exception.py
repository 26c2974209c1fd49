from common.consts.response_const import RET_DEPENDENCY_ERROR
from common.exceptions.base_exception import CheckedException


class HttpException(CheckedException):
    """
    A remote JSON API call failed.
    status is the HTTP status (0 if no response), code is the remote error code if any.
    """

    def __init__(self, message: str, status: int = 0, code: int = RET_DEPENDENCY_ERROR):
        super(HttpException, self).__init__(message)
        self.status = status
        self.code = code
