"""
Error types raised while exporting issues.

Every failure the tool reports to the user is an ExportError. The API errors
keep the HTTP status code that produced them.
"""

from typing import Optional


class ExportError(Exception):
    """Base class for all export failures."""


class MissingCredentialError(ExportError):
    """No GitHub token in the environment or the local .env file."""


class InvalidTargetError(ExportError):
    """The owner/repo[#issue] argument could not be parsed."""


class ExportIOError(ExportError):
    """The output directory or an output file could not be written."""


class ApiError(ExportError):
    """
    A GitHub API request failed.

    Attributes:
        status_code (Optional[int]): HTTP status of the response, or None
            when no response was received.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthFailedError(ApiError):
    """The token was rejected (401) or lacks access (403)."""


class NotFoundError(ApiError):
    """The repository or issue does not exist or is not visible."""


class RateLimitedError(ApiError):
    """
    The API rate limit is exhausted.

    Attributes:
        reset_at (Optional[int]): Epoch seconds at which the limit resets,
            taken from the X-RateLimit-Reset header when present.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, reset_at: Optional[int] = None):
        super().__init__(message, status_code)
        self.reset_at = reset_at


class ServerError(ApiError):
    """Any other unsuccessful response, transport failure or bad payload."""
