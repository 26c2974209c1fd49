"""
Error codes of the JSON envelope {"data", "code", "errmsg"}

The HTTP status carries the error class, the code tells the client which
failure it was. Codes are grouped by hundreds.
"""

RET_OK = 0                  # success
RET_ERR = 1                 # generic error


# Request (100-199)
RET_INVALID_PARAM = 100         # invalid value, e.g. a folder name outside the maildir
RET_MISSING_PARAM = 101         # missing required field
RET_PARAM_FORMAT_ERROR = 102    # wrong type or shape
RET_JSON_PARSE_ERROR = 104      # body is not valid json


# Auth (200-299)
RET_UNAUTHORIZED = 200          # wrong credentials
RET_FORBIDDEN = 201             # not allowed
RET_ACCOUNT_DISABLED = 202      # mailbox inactive or mail services turned off

RET_TOKEN_MISSING = 210         # no bearer token
RET_TOKEN_INVALID = 211         # bad signature or payload
RET_TOKEN_EXPIRED = 212         # signature older than the token max age


# Mailbox (300-399)
RET_RESOURCE_NOT_FOUND = 301     # mailbox or message does not exist
RET_OPERATION_NOT_ALLOWED = 305  # method not allowed


# Dependencies (400-499)
RET_DEPENDENCY_ERROR = 400         # generic dependency failure

RET_HTTP_TIMEOUT = 401             # connector request timed out
RET_HTTP_5XX = 402                 # connector answered 5xx without a body
RET_HTTP_RESPONSE_INVALID = 403    # connector answered something else than the envelope

RET_SMTP_ERROR = 440               # relay refused or unreachable


# Storage (500-599)
RET_DB_ERROR = 500               # mailbox directory query failed
RET_FILE_IO_ERROR = 520          # maildir read or rename failed


# Environment (800-899)
RET_CONFIG_ERROR = 800            # settings cannot be loaded
