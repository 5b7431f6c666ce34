"""API key extraction from the Authorization header.

Accepted format: ``Authorization: ApiKey <key>``

- Header name lookup is case-insensitive; only the first value is used.
- The value is split on its first space; the scheme must be exactly
  ``ApiKey`` (case-sensitive).
- The remainder is returned verbatim, interior spaces included.

Errors are returned alongside an empty key, never raised or logged here.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from apikeygate.headers import HeaderCollection, as_header_collection

AUTHORIZATION = "Authorization"
SCHEME = "ApiKey"


class AuthErrorKind(enum.Enum):
    NO_AUTH_HEADER = "NoAuthHeader"
    MALFORMED_HEADER = "MalformedHeader"


class AuthHeaderError(Exception):
    """Raisable form of an AuthError, for callers that prefer exceptions."""

    def __init__(self, error: AuthError) -> None:
        super().__init__(error.message)
        self.error = error
        self.kind = error.kind


@dataclass(frozen=True)
class AuthError:
    """Classified extraction failure. ``message`` is safe to send to clients."""

    kind: AuthErrorKind
    message: str
    status: int = 401

    def __str__(self) -> str:
        return self.message

    def to_exception(self) -> AuthHeaderError:
        return AuthHeaderError(self)


ERR_NO_AUTH_HEADER = AuthError(
    AuthErrorKind.NO_AUTH_HEADER, "no authorization header included"
)
ERR_MALFORMED_HEADER = AuthError(
    AuthErrorKind.MALFORMED_HEADER, "malformed authorization header"
)


def extract_api_key(
    headers: HeaderCollection | object,
) -> tuple[str, AuthError | None]:
    """Return ``(key, None)`` on success or ``("", error)`` on failure."""
    value = as_header_collection(headers).getone(AUTHORIZATION)
    if not value:
        return "", ERR_NO_AUTH_HEADER

    scheme, sep, key = value.partition(" ")
    if not sep or scheme != SCHEME:
        return "", ERR_MALFORMED_HEADER
    return key, None
