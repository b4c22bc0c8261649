"""
Request parameter signing for the ProctorExam v3 API.

The server rebuilds the canonical parameter string from the query it
receives and compares HMAC-SHA256 digests, so the format below must stay
byte-for-byte identical to what it expects: every pair, including the
first, is written as ``?key=value``.
"""

import hashlib
import hmac
import logging
from typing import Mapping, Optional, Union


def canonical_string(params: Mapping[str, str]) -> str:
    """
    Build the canonical signing input for a parameter set.

    Args:
        params: Parameters to sign

    Returns:
        ``?k1=v1?k2=v2...`` with keys in ascending order
    """
    return ''.join(f"?{key}={params[key]}" for key in sorted(params))


def sign_params(params: Mapping[str, str], secret: Union[str, bytes],
                logger: Optional[logging.Logger] = None) -> str:
    """
    Generate the HMAC-SHA256 signature of a parameter set.

    Args:
        params: Parameters to sign
        secret: Shared API secret (str is encoded as UTF-8)
        logger: When given, the signing input and result are logged at DEBUG

    Returns:
        Lowercase hex-encoded signature (64 characters)
    """
    key = secret if isinstance(secret, bytes) else secret.encode('utf-8')
    base_string = canonical_string(params)
    signature = hmac.new(
        key,
        base_string.encode('utf-8'),
        hashlib.sha256
    ).hexdigest()

    if logger is not None:
        logger.debug("base string: %s", base_string)
        logger.debug("signature: %s", signature)

    return signature


class Signer:
    """Signs and verifies parameter sets with a bound secret."""

    def __init__(self, secret: Union[str, bytes], logger: Optional[logging.Logger] = None):
        self.secret = secret
        self.logger = logger

    def sign(self, params: Mapping[str, str]) -> str:
        return sign_params(params, self.secret, self.logger)

    def verify(self, params: Mapping[str, str], signature: str) -> bool:
        """Check a signature the way the server does (constant-time)."""
        return hmac.compare_digest(self.sign(params), signature)
