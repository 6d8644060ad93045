"""
Credential loading module.

Reads the account user name and password from the .auth file in the data
directory. The file holds ``key:value`` lines::

    user:someone@internode.on.net
    password:secret
"""

import logging
import os
import re

from ..constants import AUTH_FILE
from ..models import Credentials

logger = logging.getLogger(__name__)

_USER_RE = re.compile(r"user:(.*)")
_PASSWORD_RE = re.compile(r"password:(.*)")


class CredentialsError(Exception):
    """Raised when the .auth file cannot be read."""
    pass


def load_credentials(data_dir: str) -> Credentials:
    """
    Load credentials from ``<data_dir>/.auth``.

    A line containing ``user:`` sets the user name to the rest of the line
    and a line containing ``password:`` sets the password. Values are not
    validated; a missing password is left as None.

    Args:
        data_dir: Directory holding the .auth file

    Returns:
        Credentials read from the file

    Raises:
        CredentialsError: If the file cannot be opened or read
    """
    path = os.path.join(data_dir, AUTH_FILE)
    logger.info(f"Reading auth config from data dir: {data_dir}")

    username = None
    password = None
    try:
        # Non-UTF-8 bytes survive as surrogates and are restored for the auth header
        with open(path, "r", encoding="utf-8", errors="surrogateescape") as f:
            for raw_line in f:
                line = raw_line.rstrip("\r\n")
                user_match = _USER_RE.search(line)
                if user_match:
                    username = user_match.group(1)
                    logger.info(f"Config for user: {username}")
                    continue
                password_match = _PASSWORD_RE.search(line)
                if password_match:
                    password = password_match.group(1)
    except OSError as e:
        raise CredentialsError(f"Failed to read {path}: {e}") from e

    if password is None:
        logger.warning(f"No password found in {path}; requests will be rejected")

    return Credentials(username=username, password=password)
