"""
Error taxonomy.

Every failure a caller can observe is one of these kinds. The message is
the public, human-readable text placed in the `{"error": ...}` envelope;
store-native error detail never goes into it.
"""


class MemoboardError(Exception):
    """Base error with an HTTP status."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(MemoboardError):
    """Store not configured or unreachable at process start."""

    status_code = 500


class AuthenticationError(MemoboardError):
    """Missing, malformed, or rejected credential."""

    status_code = 401


class ValidationError(MemoboardError):
    """Bad input: empty content, unknown memo id, malformed body."""

    status_code = 400


class UpstreamError(MemoboardError):
    """Store failed on an otherwise well-formed request."""

    status_code = 500
