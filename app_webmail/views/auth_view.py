"""
Auth REST API views

POST /api/auth/login, POST /api/auth/logout
"""
import logging

from app_webmail.exceptions.webmail_exception import WebmailException
from app_webmail.services.auth_service import AuthService
from app_webmail.views.base_view import PublicAPIView, get_body, resp_webmail_exception
from common.utils.http_util import resp_ok, resp_exception

logger = logging.getLogger(__name__)


class LoginView(PublicAPIView):

    def post(self, request, *args, **kwargs):
        """
        Sign in with mailbox credentials

        Request body (JSON):
        {
            "email": "user@example.com",  # Required
            "password": "secret"          # Required
        }
        """
        try:
            data = get_body(request)
            result = AuthService().login(data.get("email", ""), data.get("password", ""))
            return resp_ok(result)
        except WebmailException as e:
            return resp_webmail_exception(e)
        except Exception as e:
            logger.exception(f"[LoginView.post] Error signing in: {e}")
            return resp_exception(e)


class LogoutView(PublicAPIView):

    def post(self, request, *args, **kwargs):
        # tokens are not revoked, the client drops its copy
        return resp_ok({"message": "Logged out successfully"})
