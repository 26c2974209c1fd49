"""
Send service

This service sends mail as the signed-in user through the SMTP relay:
- Recipient and subject validation
- Plain text body with an HTML alternative (escaped, line breaks kept)
- Relay login with the user's own password, when given
- Best-effort send log
"""
import logging
import smtplib
from email.utils import formataddr, make_msgid
from typing import Any, Dict, List, Optional, Union

from django.core.mail import BadHeaderError, EmailMultiAlternatives, get_connection
from django.utils.html import escape, linebreaks

from app_webmail.config import get_app_config
from app_webmail.exceptions.dependency_failure_exception import DependencyFailureException
from app_webmail.exceptions.validation_exception import ValidationException
from app_webmail.pojo.mail_user import MailUser
from app_webmail.repos.send_log_repo import create_send_log
from common.components.singleton import Singleton
from common.consts.response_const import RET_INVALID_PARAM, RET_PARAM_FORMAT_ERROR, RET_SMTP_ERROR
from common.utils.string_util import check_blank, explode, implode, truncate

logger = logging.getLogger(__name__)

SUBJECT_LOG_LENGTH = 255


def to_address_list(value: Union[None, str, List[str]], field: str = "to") -> List[str]:
    """
    Recipients as a list, from a list of strings or a comma separated string
    "a@x.com, b@y.com" -> ["a@x.com", "b@y.com"]

    Raises:
        ValidationException: If the value is neither a string nor a list of strings
    """
    if value is None:
        return []
    if isinstance(value, str):
        return explode(value)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValidationException(f"Field '{field}' must be a string or a list of strings",
                                  ret_code=RET_PARAM_FORMAT_ERROR)
    return [item.strip() for item in value if item.strip()]


def to_html(body: str) -> str:
    return linebreaks(escape(body), autoescape=False)


class SendService(Singleton):
    """Send service"""

    def send_email(
            self,
            user: MailUser,
            to: Union[str, List[str]],
            subject: str,
            body: str = "",
            cc: Union[None, str, List[str]] = None,
            bcc: Union[None, str, List[str]] = None,
            password: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Send a message from the user's mailbox

        Args:
            user: Signed-in user (sender)
            to: Recipients
            subject: Subject
            body: Plain text body
            cc: Carbon copy recipients
            bcc: Blind carbon copy recipients
            password: The user's mail password for relay login

        Returns:
            Dictionary with message and messageId

        Raises:
            ValidationException: If recipients or subject are missing or not strings
            DependencyFailureException: If the relay refuses or cannot be reached
        """
        to_list = to_address_list(to, "to")
        cc_list = to_address_list(cc, "cc")
        bcc_list = to_address_list(bcc, "bcc")
        for field, value in (("subject", subject), ("body", body)):
            if value is not None and not isinstance(value, str):
                raise ValidationException(f"Field '{field}' must be a string", ret_code=RET_PARAM_FORMAT_ERROR)
        if not to_list or check_blank(subject):
            raise ValidationException("Recipients and subject are required")

        config = get_app_config()
        domain = user.domain or user.username.rpartition("@")[2] or None
        message_id = make_msgid(domain=domain)

        connection = get_connection(
            backend=config["email_backend"],
            host=config["smtp_host"],
            port=config["smtp_port"],
            username=user.username if password else None,
            password=password or None,
            use_tls=config["smtp_use_tls"],
            timeout=config["smtp_timeout"],
        )
        message = EmailMultiAlternatives(
            subject=subject,
            body=body or "",
            from_email=formataddr((user.name, user.username)) if user.name else user.username,
            to=to_list,
            cc=cc_list,
            bcc=bcc_list,
            headers={"Message-ID": message_id},
            connection=connection,
        )
        message.attach_alternative(to_html(body or ""), "text/html")

        try:
            message.send(fail_silently=False)
        except BadHeaderError as e:
            logger.warning(f"[SendService.send_email] Rejected header from {user.username}: {e}")
            raise ValidationException("Invalid header value", ret_code=RET_INVALID_PARAM) from e
        except (smtplib.SMTPException, OSError) as e:
            logger.exception(f"[SendService.send_email] Relay failed for {user.username}: {e}")
            raise DependencyFailureException("Failed to send email", ret_code=RET_SMTP_ERROR) from e

        recipients = to_list + cc_list + bcc_list
        logger.info(f"[SendService.send_email] Sent {message_id} from {user.username} "
                    f"to {len(recipients)} recipient(s)")
        self._log_send(user, recipients, subject, message_id)

        return {
            "message": "Email sent successfully",
            "messageId": message_id,
        }

    @staticmethod
    def _log_send(user: MailUser, recipients: List[str], subject: str, message_id: str):
        try:
            create_send_log(
                username=user.username,
                recipients=implode(recipients),
                subject=truncate(subject, SUBJECT_LOG_LENGTH),
                message_id=message_id,
            )
        except Exception as e:
            logger.warning(f"[SendService._log_send] Failed to write send log for {message_id}: {e}")
