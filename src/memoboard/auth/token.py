"""Bearer token extraction from request headers."""

from collections.abc import Mapping

BEARER_SCHEME = "bearer"


def extract_bearer_token(headers: Mapping[str, str]) -> str | None:
    """Return the token from an `Authorization: Bearer <token>` header.

    Header name and scheme are matched case-insensitively. Returns None
    when the header is missing, uses another scheme, or carries no token.
    """
    value = None
    for name, header_value in headers.items():
        if name.lower() == "authorization":
            value = header_value
            break

    if not value or not isinstance(value, str):
        return None

    parts = value.split(None, 1)
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        return None

    token = parts[1].strip()
    return token or None
