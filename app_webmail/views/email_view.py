"""
Email REST API views

Listing, detail, send, read/star flags and delete of the signed-in user's messages.
Message ids are the position in the folder listing or the maildir unique name,
the folder is given by the "folder" query parameter (default: INBOX).
"""
import logging

from app_webmail.consts.webmail_const import FOLDER_INBOX, LIMIT_EMAILS_DEFAULT
from app_webmail.exceptions.validation_exception import ValidationException
from app_webmail.exceptions.webmail_exception import WebmailException
from app_webmail.services.mailbox_service import MailboxService
from app_webmail.services.send_service import SendService
from app_webmail.views.base_view import ProtectedAPIView, get_body, resp_webmail_exception
from common.consts.response_const import RET_PARAM_FORMAT_ERROR
from common.utils.http_util import resp_ok, resp_exception, with_type

logger = logging.getLogger(__name__)

EMAIL_PASSWORD_HEADER = "X-Email-Password"


def get_folder(request) -> str:
    return request.GET.get("folder") or FOLDER_INBOX


class EmailListView(ProtectedAPIView):

    def get(self, request, *args, **kwargs):
        """
        List messages of a folder, newest first

        Query parameters:
        - folder: Folder name (default: INBOX)
        - limit: Pagination limit (default: 50, max: 1000)
        - offset: Pagination offset (default: 0)
        """
        try:
            result = MailboxService().list_emails(
                request.user,
                folder=get_folder(request),
                limit=request.GET.get("limit", LIMIT_EMAILS_DEFAULT),
                offset=request.GET.get("offset", 0),
            )
            return resp_ok(result)
        except WebmailException as e:
            return resp_webmail_exception(e)
        except Exception as e:
            logger.exception(f"[EmailListView.get] Error listing emails: {e}")
            return resp_exception(e)


class EmailDetailView(ProtectedAPIView):

    def get(self, request, email_id, *args, **kwargs):
        try:
            return resp_ok(MailboxService().get_email(request.user, get_folder(request), email_id))
        except WebmailException as e:
            return resp_webmail_exception(e)
        except Exception as e:
            logger.exception(f"[EmailDetailView.get] Error getting email {email_id}: {e}")
            return resp_exception(e)

    def delete(self, request, email_id, *args, **kwargs):
        """
        Move a message to Trash (remove it, if it is in Trash)
        """
        try:
            return resp_ok(MailboxService().delete_email(request.user, get_folder(request), email_id))
        except WebmailException as e:
            return resp_webmail_exception(e)
        except Exception as e:
            logger.exception(f"[EmailDetailView.delete] Error deleting email {email_id}: {e}")
            return resp_exception(e)


class EmailSendView(ProtectedAPIView):

    def post(self, request, *args, **kwargs):
        """
        Send a message as the signed-in user

        Headers:
        - X-Email-Password: the user's mail password, for relay login

        Request body (JSON):
        {
            "to": ["a@example.com"],   # Required, list or comma separated string
            "cc": [],                  # Optional
            "bcc": [],                 # Optional
            "subject": "Hi",           # Required
            "body": "Hello"            # Optional
        }
        """
        try:
            data = get_body(request)
            result = SendService().send_email(
                request.user,
                to=data.get("to"),
                subject=data.get("subject", ""),
                body=data.get("body", ""),
                cc=data.get("cc"),
                bcc=data.get("bcc"),
                password=request.headers.get(EMAIL_PASSWORD_HEADER),
            )
            return resp_ok(result)
        except WebmailException as e:
            return resp_webmail_exception(e)
        except Exception as e:
            logger.exception(f"[EmailSendView.post] Error sending email: {e}")
            return resp_exception(e)


class EmailReadView(ProtectedAPIView):

    def put(self, request, email_id, *args, **kwargs):
        try:
            return resp_ok(MailboxService().mark_as_read(request.user, get_folder(request), email_id))
        except WebmailException as e:
            return resp_webmail_exception(e)
        except Exception as e:
            logger.exception(f"[EmailReadView.put] Error marking email {email_id} as read: {e}")
            return resp_exception(e)


class EmailStarView(ProtectedAPIView):

    def put(self, request, email_id, *args, **kwargs):
        """
        Star or unstar a message

        Request body (JSON):
        {
            "starred": true  # Required
        }
        """
        try:
            starred = with_type(get_body(request).get("starred"))
            if not isinstance(starred, bool):
                raise ValidationException("starred must be true or false", ret_code=RET_PARAM_FORMAT_ERROR)
            return resp_ok(MailboxService().toggle_star(request.user, get_folder(request), email_id, starred))
        except WebmailException as e:
            return resp_webmail_exception(e)
        except Exception as e:
            logger.exception(f"[EmailStarView.put] Error starring email {email_id}: {e}")
            return resp_exception(e)
