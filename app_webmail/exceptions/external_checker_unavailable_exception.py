from app_webmail.exceptions.webmail_exception import WebmailException


class ExternalCheckerUnavailableException(WebmailException):
    """The external password check tool is not installed"""
    pass
