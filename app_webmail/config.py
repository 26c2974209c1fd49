"""
Webmail connector configuration

This module loads the connector's environment variables (layered .env, .env.test,
.env.prod) and exposes them as a plain dict. The mailbox directory database itself
is configured in settings (VMAIL_DB_*), since Django owns the connection.
"""
from pathlib import Path
from typing import Dict

from django.conf import settings

from common.utils.env_util import load_env


def get_base_dir() -> Path:
    """
    Get the project root directory.

    Returns:
        Path to the project root directory
    """
    # app_webmail/config.py -> app_webmail -> project root
    return Path(__file__).resolve().parent.parent


def get_env():
    """
    Load and return environment variables with layered support.

    Returns:
        environ.Env instance with loaded environment variables
    """
    base_dir = get_base_dir()
    return load_env(base_dir)


def get_app_config() -> Dict:
    """
    Get webmail connector configuration from environment variables.

    Returns:
        Dictionary containing connector configuration values

    Raises:
        ConfigurationErrorException: If configuration values are invalid
    """
    from common.exceptions.configuration_error_exception import ConfigurationErrorException

    env = get_env()

    try:
        # Outbound relay (Postfix submission)
        smtp_host = env("WEBMAIL_SMTP_HOST", default="localhost")
        smtp_port = env.int("WEBMAIL_SMTP_PORT", default=587)
        smtp_use_tls = env.bool("WEBMAIL_SMTP_USE_TLS", default=False)
        smtp_timeout = env.int("WEBMAIL_SMTP_TIMEOUT", default=30)
        email_backend = env("WEBMAIL_EMAIL_BACKEND", default="django.core.mail.backends.smtp.EmailBackend")

        # Maildir storage: <base>/<node>/<maildir>/<subdir>
        storage_base = env("WEBMAIL_STORAGE_BASE", default="/var/vmail")
        storage_node = env("WEBMAIL_STORAGE_NODE", default="vmail1")
        maildir_subdir = env("WEBMAIL_MAILDIR_SUBDIR", default="Maildir")

        # Session token
        token_secret = env("WEBMAIL_TOKEN_SECRET", default="") or settings.SECRET_KEY
        token_max_age = env.int("WEBMAIL_TOKEN_MAX_AGE", default=86400)

        # External password check (bcrypt, crypt and other schemes)
        doveadm_path = env("WEBMAIL_DOVEADM_PATH", default="doveadm")
        password_check_timeout = env.float("WEBMAIL_PASSWORD_CHECK_TIMEOUT", default=5.0)

        return {
            "smtp_host": smtp_host,
            "smtp_port": smtp_port,
            "smtp_use_tls": smtp_use_tls,
            "smtp_timeout": smtp_timeout,
            "email_backend": email_backend,
            "storage_base": storage_base,
            "storage_node": storage_node,
            "maildir_subdir": maildir_subdir,
            "token_secret": token_secret,
            "token_max_age": token_max_age,
            "doveadm_path": doveadm_path,
            "password_check_timeout": password_check_timeout,
        }
    except Exception as e:
        raise ConfigurationErrorException(
            f"Failed to load webmail configuration: {str(e)}"
        ) from e
