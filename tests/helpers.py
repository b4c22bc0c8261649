"""
Shared constants and helpers for ProctorExam client tests.
"""

from pathlib import Path
from unittest.mock import Mock

FIXTURES = Path(__file__).parent / "fixtures"

BASE_URL = "http://localhost:8080"
API_KEY = "test-api-key"
API_SECRET = "test-api-secret"
FIXED_TIME = 1700000000.5


def fixture_bytes(name: str) -> bytes:
    """Read a JSON fixture file."""
    return (FIXTURES / name).read_bytes()


def make_response(content: bytes = b"{}", status_code: int = 200) -> Mock:
    """Create a fake requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.content = content
    return response
