"""API key extraction from the Authorization header.

Accepted form: ``Authorization: ApiKey <key>``. The scheme is matched exactly
and case-sensitively. Only the first Authorization value is consulted.

The value is split on single spaces, so ``"ApiKey  <key>"`` (two spaces)
yields an empty key with no error. Callers must treat an empty key as
unauthenticated.
"""

from __future__ import annotations

import enum

from keygate.headers import HeaderMap

AUTH_HEADER = "Authorization"
API_KEY_SCHEME = "ApiKey"
MASK_MAX_CHARS = 6


class AuthErrorKind(enum.Enum):
    NO_AUTH_HEADER_INCLUDED = "no authorization header included"
    MALFORMED_AUTH_HEADER = "malformed authorization header"

    @property
    def message(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


ErrNoAuthHeaderIncluded = AuthErrorKind.NO_AUTH_HEADER_INCLUDED
ErrMalformedAuthHeader = AuthErrorKind.MALFORMED_AUTH_HEADER


class AuthHeaderError(Exception):
    """Raised by require_api_key when the header is absent or malformed."""

    def __init__(self, kind: AuthErrorKind) -> None:
        super().__init__(kind.message)
        self.kind = kind


def get_api_key(headers: HeaderMap) -> tuple[str, AuthErrorKind | None]:
    """Return (key, None) on success or ("", kind) on failure."""
    value = headers.get(AUTH_HEADER)
    if value == "":
        return "", ErrNoAuthHeaderIncluded

    parts = value.split(" ")
    if len(parts) < 2 or parts[0] != API_KEY_SCHEME:
        return "", ErrMalformedAuthHeader

    return parts[1], None


def require_api_key(headers: HeaderMap) -> str:
    """Like get_api_key but raises AuthHeaderError instead of returning a kind."""
    key, err = get_api_key(headers)
    if err is not None:
        raise AuthHeaderError(err)
    return key


def mask_key(key: str) -> str:
    """Return a trailing slice of the key for log lines and response headers.

    At most half the key and never more than MASK_MAX_CHARS characters, so a
    short key is never echoed whole.
    """
    visible = min(MASK_MAX_CHARS, len(key) // 2)
    if visible == 0:
        return ""
    return key[-visible:]
