"""Domain-specific exceptions raised by xpisubmit runtime components."""

from __future__ import annotations


class XpiSubmitError(Exception):
    """Base exception for xpisubmit-specific runtime failures."""


class ValidationError(XpiSubmitError, ValueError):
    """Raised when a required submission argument is empty."""

    def __init__(self, field: str) -> None:
        """Store the offending field name and build the fixed message."""
        super().__init__(f"argument was empty: {field}")
        self.field = field


class XpiFileError(XpiSubmitError):
    """Raised when the package file to upload cannot be found."""


class APIResponseError(XpiSubmitError):
    """Raised when the signing API answers with a non-success status."""

    def __init__(self, status_code: int, body: str, url: str = "") -> None:
        """Store response details for callers and logging."""
        super().__init__(f"Received bad response from the server ({status_code}) for {url}: {body}")
        self.status_code = status_code
        self.body = body
        self.url = url


class SubmissionTimeoutError(XpiSubmitError):
    """Raised when upload validation does not finish before the deadline."""


class ConfigurationError(XpiSubmitError):
    """Raised when an environment setting cannot be interpreted."""
