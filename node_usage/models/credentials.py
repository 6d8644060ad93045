#!/usr/bin/env python3
"""
Credential Models

This module contains the account credentials read from the data directory.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


def _to_bytes(value: Optional[str]) -> bytes:
    return (value or "").encode("utf-8", "surrogateescape")


@dataclass(frozen=True)
class Credentials:
    """
    HTTP Basic credentials for the usage API.

    Either value may be None when the .auth file omits it; the API then
    rejects the request rather than the loader.

    Attributes:
        username: Account user name
        password: Account password
    """
    username: Optional[str] = None
    password: Optional[str] = None

    def as_basic_auth(self) -> Tuple[bytes, bytes]:
        """Return the (username, password) bytes as they appeared in the .auth file."""
        return (_to_bytes(self.username), _to_bytes(self.password))

    def __repr__(self) -> str:
        masked = "***" if self.password else None
        return f"Credentials(username={self.username!r}, password={masked!r})"
