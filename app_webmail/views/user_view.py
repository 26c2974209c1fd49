import logging

from app_webmail.exceptions.webmail_exception import WebmailException
from app_webmail.services.mailbox_service import MailboxService
from app_webmail.views.base_view import ProtectedAPIView, resp_webmail_exception
from common.utils.http_util import resp_ok, resp_exception

logger = logging.getLogger(__name__)


class UserInfoView(ProtectedAPIView):

    def get(self, request, *args, **kwargs):
        """
        Account info of the signed-in user
        """
        try:
            return resp_ok(MailboxService().get_user_info(request.user))
        except WebmailException as e:
            return resp_webmail_exception(e)
        except Exception as e:
            logger.exception(f"[UserInfoView.get] Error getting user info: {e}")
            return resp_exception(e)
