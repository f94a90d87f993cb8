"""Douyin Open Platform client exceptions."""


class DouyinError(Exception):
    """Base exception for Douyin API client errors."""


class TokenError(DouyinError):
    """Access token could not be obtained for an open id."""

    def __init__(self, open_id: str, reason: str):
        self.open_id = open_id
        self.reason = reason
        super().__init__(f"Failed to get access token for {open_id}: {reason}")


class TransportError(DouyinError):
    """HTTP request failed (connection, timeout, unreadable error response)."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(DouyinError):
    """Response body is not a valid JSON envelope."""


class ProviderError(DouyinError):
    """Provider reported a non-zero errcode in the response envelope."""

    def __init__(self, operation: str, error_code: int, error_message: str):
        self.operation = operation
        self.error_code = error_code
        self.error_message = error_message
        super().__init__(f"{operation} error: errcode={error_code}, errmsg={error_message}")
