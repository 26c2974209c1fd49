"""
Base exceptions shared by all apps
"""


class CheckedException(Exception):
    """
    An expected failure, raised on purpose and handled by the caller
    """

    def __init__(self, message: str = ""):
        super(CheckedException, self).__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class AbortException(CheckedException):
    """
    Abort, but is not error
    """
    pass
