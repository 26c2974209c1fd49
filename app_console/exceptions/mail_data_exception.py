from common.consts.response_const import RET_DEPENDENCY_ERROR
from common.exceptions.base_exception import CheckedException


class MailDataException(CheckedException):
    """
    A mail data provider call failed.
    status is the HTTP status of the connector response, 0 if there was none.
    """

    def __init__(self, message: str, status: int = 0, code: int = RET_DEPENDENCY_ERROR):
        super(MailDataException, self).__init__(message)
        self.status = status
        self.code = code

    @property
    def is_auth_error(self) -> bool:
        """The session token was rejected, the user has to sign in again"""
        return self.status in (401, 403)

    @property
    def is_not_found(self) -> bool:
        return self.status == 404
