"""
Client configuration for the ProctorExam client library.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Union
from urllib.parse import urlparse

from .constants import (
    DEFAULT_CONFIG,
    ENV_API_KEY,
    ENV_API_SECRET_KEY,
    ENV_ENDPOINT,
)
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class ClientConfig:
    """
    Immutable settings owned by a single client instance.

    Validation happens on construction so a bad configuration fails
    before the first request is attempted.
    """

    base_url: str
    api_key: str
    api_secret: Union[str, bytes]
    user_agent: str = DEFAULT_CONFIG['user_agent']
    timeout: float = DEFAULT_CONFIG['timeout']
    debug: bool = DEFAULT_CONFIG['debug']
    raise_for_status: bool = DEFAULT_CONFIG['raise_for_status']

    def __post_init__(self):
        if not self.base_url:
            raise ConfigurationError("base_url cannot be empty")

        parsed = urlparse(self.base_url)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ConfigurationError(f"base_url is not an absolute http(s) URL: {self.base_url!r}")

        if not self.api_key:
            raise ConfigurationError("api_key cannot be empty")

        if not self.api_secret:
            raise ConfigurationError("api_secret cannot be empty")

        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
            raise ConfigurationError(f"timeout must be a number of seconds, got {self.timeout!r}")

        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "ClientConfig":
        """
        Build a configuration from PE_ENDPOINT, PE_API_KEY and PE_API_SECRET_KEY.

        Args:
            environ: Mapping to read instead of os.environ
            **overrides: Optional settings (user_agent, timeout, debug, raise_for_status)

        Raises:
            ConfigurationError: If a variable is missing or a value is invalid
        """
        if environ is None:
            environ = os.environ

        missing = [name for name in (ENV_ENDPOINT, ENV_API_KEY, ENV_API_SECRET_KEY)
                   if not environ.get(name)]
        if missing:
            raise ConfigurationError(f"missing environment variables: {', '.join(missing)}")

        try:
            return cls(
                base_url=environ[ENV_ENDPOINT],
                api_key=environ[ENV_API_KEY],
                api_secret=environ[ENV_API_SECRET_KEY],
                **overrides
            )
        except TypeError as e:
            raise ConfigurationError(f"invalid configuration: {e}") from e
