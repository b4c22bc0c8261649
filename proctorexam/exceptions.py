"""
Custom exceptions for the ProctorExam client library.
"""


class ProctorExamError(Exception):
    """Base exception for ProctorExam client errors."""
    pass


class ConfigurationError(ProctorExamError):
    """Raised when client configuration is missing or invalid."""
    pass


class RequestBuildError(ProctorExamError):
    """Raised when an outbound request cannot be assembled."""
    pass


class HTTPError(ProctorExamError):
    """Raised when the HTTP round trip fails."""
    pass


class HTTPStatusError(HTTPError):
    """Raised when the server answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str, payload=None):
        super().__init__(f"HTTP {status_code}: {body[:200]}")
        self.status_code = status_code
        self.body = body
        # decoded vendor error document, or None when the body is not JSON
        self.payload = payload


class DecodeError(ProctorExamError):
    """Raised when a response body does not match the expected shape."""
    pass
