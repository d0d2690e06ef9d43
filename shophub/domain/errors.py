# shophub/domain/errors.py


class StorefrontError(Exception):
    """Base for every failure surfaced to a UI action."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NetworkError(StorefrontError):
    """Connection refused, timeout or no response at all."""


class ServerError(StorefrontError):
    """Backend answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(StorefrontError):
    """Response body does not have the expected shape."""


class ValidationError(StorefrontError):
    """Draft field missing or malformed, detected before any request."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class DraftNotActiveError(StorefrontError):
    pass
