"""
ProctorExam Client Library

A Python client for the ProctorExam v3 REST API. Requests are signed
with HMAC-SHA256 over their nonce, timestamp and identifier parameters.

Example usage:
    from proctorexam import ProctorExamClient

    client = ProctorExamClient("https://example.proctorexam.com", "api-key", "api-secret")
    exams = client.list_exams()
"""

from .client import ProctorExamClient, SignedRequestSpec, PreparedRequest
from .config import ClientConfig
from .exceptions import (
    ProctorExamError,
    ConfigurationError,
    RequestBuildError,
    HTTPError,
    HTTPStatusError,
    DecodeError
)
from .models import Exam, User, Student
from .signer import Signer, canonical_string, sign_params
from .constants import (
    API_PREFIX,
    ACCEPT_HEADER,
    DEFAULT_CONFIG,
    NONCE_UPPER_BOUND
)

__version__ = "1.0.0"
__all__ = [
    "ProctorExamClient",
    "SignedRequestSpec",
    "PreparedRequest",
    "ClientConfig",
    "ProctorExamError",
    "ConfigurationError",
    "RequestBuildError",
    "HTTPError",
    "HTTPStatusError",
    "DecodeError",
    "Exam",
    "User",
    "Student",
    "Signer",
    "canonical_string",
    "sign_params",
    "API_PREFIX",
    "ACCEPT_HEADER",
    "DEFAULT_CONFIG",
    "NONCE_UPPER_BOUND"
]
