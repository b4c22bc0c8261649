"""
Constants for the ProctorExam client library.
Values match the vendor's v3 REST API contract.
"""

# Versioned path prefix for every endpoint
API_PREFIX = "/api/v3"

# HTTP headers
ACCEPT_HEADER = "application/vnd.procwise.v3"
HEADER_AUTHORIZATION = "Authorization"
HEADER_ACCEPT = "Accept"
HEADER_USER_AGENT = "User-Agent"
HEADER_CONTENT_TYPE = "Content-Type"

# Authentication query parameters
PARAM_NONCE = "nonce"
PARAM_TIMESTAMP = "timestamp"
PARAM_SIGNATURE = "signature"

DEFAULT_USER_AGENT = "ProctorExam python SDK"

# Default configuration values
DEFAULT_CONFIG = {
    'user_agent': DEFAULT_USER_AGENT,
    'timeout': 30,              # HTTP timeout in seconds
    'debug': False,             # dump requests, responses and signing input
    'raise_for_status': True,   # non-2xx responses raise HTTPStatusError
}

# Nonces are drawn from [0, NONCE_UPPER_BOUND)
NONCE_UPPER_BOUND = 10 ** 16

# Environment variables read by ClientConfig.from_env
ENV_ENDPOINT = "PE_ENDPOINT"
ENV_API_KEY = "PE_API_KEY"
ENV_API_SECRET_KEY = "PE_API_SECRET_KEY"
