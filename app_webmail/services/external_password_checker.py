"""
External password checker

Hashes the connector cannot verify itself (bcrypt, sha-crypt, ...) are handed to an
external tool. The default implementation runs dovecot's `doveadm pw -t`.
"""
import logging
import shutil
import subprocess
from abc import ABC, abstractmethod

from app_webmail.exceptions.external_checker_unavailable_exception import ExternalCheckerUnavailableException

logger = logging.getLogger(__name__)

CRYPT_PREFIX = "{CRYPT}"


class ExternalPasswordChecker(ABC):
    """Checks a plaintext password against a hash string"""

    @abstractmethod
    def check(self, plaintext: str, stored: str) -> bool:
        """
        Check plaintext against stored

        Args:
            plaintext: Password to check
            stored: Hash string as kept in the mailbox directory

        Returns:
            True if the password matches

        Raises:
            ExternalCheckerUnavailableException: If the checker cannot run at all
        """
        raise NotImplementedError


class DoveadmPasswordChecker(ExternalPasswordChecker):
    """
    Runs `doveadm pw -t <hash> -p <plaintext>`, exit code 0 means the password matches.
    Timeouts and other failures are treated as a mismatch.
    """

    def __init__(self, doveadm_path: str = "doveadm", timeout: float = 5.0):
        self.doveadm_path = doveadm_path
        self.timeout = timeout

    def check(self, plaintext: str, stored: str) -> bool:
        executable = shutil.which(self.doveadm_path)
        if executable is None:
            raise ExternalCheckerUnavailableException(f"{self.doveadm_path} not found")

        # doveadm needs a scheme prefix to recognize a bare crypt string
        if stored.startswith("$"):
            stored = CRYPT_PREFIX + stored

        try:
            result = subprocess.run(
                [executable, "pw", "-t", stored, "-p", plaintext],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise ExternalCheckerUnavailableException(f"{self.doveadm_path} not found") from e
        except subprocess.TimeoutExpired:
            logger.warning(f"[DoveadmPasswordChecker.check] doveadm timed out after {self.timeout}s")
            return False
        except OSError as e:
            logger.warning(f"[DoveadmPasswordChecker.check] doveadm failed: {e}")
            return False

        return result.returncode == 0
