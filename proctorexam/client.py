"""
ProctorExam v3 REST API client.

This module builds signed requests (nonce, timestamp and HMAC-SHA256
signature as query parameters, API key in the Authorization header),
sends them over a shared requests session and decodes the JSON
envelopes into read-only records.
"""

import dataclasses
import json
import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional
from urllib.parse import urlencode, urljoin, urlparse

import requests

from .config import ClientConfig
from .constants import (
    ACCEPT_HEADER,
    API_PREFIX,
    HEADER_ACCEPT,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_USER_AGENT,
    NONCE_UPPER_BOUND,
    PARAM_NONCE,
    PARAM_SIGNATURE,
    PARAM_TIMESTAMP,
)
from .exceptions import (
    ConfigurationError,
    DecodeError,
    HTTPError,
    HTTPStatusError,
    RequestBuildError,
)
from .models import Exam, Student, User
from .signer import Signer

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignedRequestSpec:
    """Complete description of one outbound call before signing."""

    method: str
    path: str
    body: Any = None
    params: Mapping[str, str] = field(default_factory=dict)
    query: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PreparedRequest:
    """A signed request, ready to send."""

    method: str
    url: str
    headers: Dict[str, str]
    body: Optional[bytes]
    nonce: str
    timestamp: str
    signature: str


class ProctorExamClient:
    """
    Client for the ProctorExam v3 API.

    Every call performs exactly one blocking round trip. Configuration is
    immutable after construction, so one client can be shared between
    threads.
    """

    def __init__(self, base_url: str, api_key: str, api_secret: str,
                 rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], float]] = None,
                 logger: Optional[logging.Logger] = None,
                 session: Optional[requests.Session] = None,
                 **config):
        """
        Initialize the client.

        Args:
            base_url: Vendor base URL (scheme, host and optional prefix)
            api_key: API key sent in the Authorization header
            api_secret: Shared secret used to sign parameters
            rng: Random source for nonces (defaults to random.SystemRandom)
            clock: Returns epoch seconds (defaults to time.time)
            logger: Logger for debug dumps (defaults to this module's logger)
            session: requests session to reuse
            **config: Configuration options (user_agent, timeout, debug, raise_for_status)

        Raises:
            ConfigurationError: If any setting is missing or invalid
        """
        try:
            self.config = ClientConfig(base_url, api_key, api_secret, **config)
        except TypeError as e:
            raise ConfigurationError(f"invalid configuration: {e}") from e

        self.rng = rng if rng is not None else random.SystemRandom()
        self.clock = clock if clock is not None else time.time
        self.logger = logger if logger is not None else _logger

        # signing input is only logged in debug mode
        self.signer = Signer(self.config.api_secret,
                             self.logger if self.config.debug else None)

        self.session = session if session is not None else requests.Session()

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs) -> "ProctorExamClient":
        """Create a client from an existing ClientConfig."""
        return cls(**dataclasses.asdict(config), **kwargs)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **kwargs) -> "ProctorExamClient":
        """
        Create a client from PE_ENDPOINT, PE_API_KEY and PE_API_SECRET_KEY.

        Keyword arguments are split between configuration options and
        collaborators (rng, clock, logger, session).
        """
        deps = {name: kwargs.pop(name) for name in ('rng', 'clock', 'logger', 'session')
                if name in kwargs}
        return cls.from_config(ClientConfig.from_env(environ, **kwargs), **deps)

    def _new_nonce(self) -> str:
        return str(self.rng.randrange(NONCE_UPPER_BOUND))

    def _new_timestamp(self) -> str:
        return str(int(self.clock() * 1000))

    def _resolve_url(self, path: str) -> str:
        parsed = urlparse(path)
        if parsed.scheme or parsed.netloc:
            raise RequestBuildError(f"path must be relative to the base URL: {path!r}")

        # the auth query string is appended after the path
        if '?' in path or '#' in path:
            raise RequestBuildError(f"path cannot carry a query or fragment: {path!r}")

        if any(segment in ('.', '..') for segment in path.split('/')):
            raise RequestBuildError(f"path cannot contain dot segments: {path!r}")

        try:
            return urljoin(self.config.base_url.rstrip('/') + '/', path.lstrip('/'))
        except ValueError as e:
            raise RequestBuildError(f"cannot resolve {path!r} against base URL: {e}") from e

    def _encode_body(self, body: Any) -> Optional[bytes]:
        if body is None:
            return None
        try:
            return json.dumps(body, separators=(',', ':')).encode('utf-8')
        except (TypeError, ValueError) as e:
            raise RequestBuildError(f"cannot encode request body as JSON: {e}") from e

    def build_request(self, spec: SignedRequestSpec) -> PreparedRequest:
        """
        Turn a SignedRequestSpec into a signed, ready-to-send request.

        A fresh nonce and timestamp are generated on every call and merged
        into the signed parameters.

        Raises:
            RequestBuildError: If the body cannot be encoded or the path resolved
        """
        url = self._resolve_url(spec.path)
        body = self._encode_body(spec.body)

        nonce = self._new_nonce()
        timestamp = self._new_timestamp()

        params = {key: str(value) for key, value in spec.params.items()}
        params[PARAM_NONCE] = nonce
        params[PARAM_TIMESTAMP] = timestamp
        signature = self.signer.sign(params)

        query = [
            (PARAM_NONCE, nonce),
            (PARAM_TIMESTAMP, timestamp),
            (PARAM_SIGNATURE, signature),
        ]
        query.extend((key, str(value)) for key, value in spec.query.items())

        headers = {
            HEADER_ACCEPT: ACCEPT_HEADER,
            HEADER_USER_AGENT: self.config.user_agent,
            HEADER_AUTHORIZATION: f"Token token={self.config.api_key}",
        }
        if body is not None:
            headers[HEADER_CONTENT_TYPE] = 'application/json'

        return PreparedRequest(
            method=spec.method.upper(),
            url=f"{url}?{urlencode(query)}",
            headers=headers,
            body=body,
            nonce=nonce,
            timestamp=timestamp,
            signature=signature,
        )

    def _dump_request(self, prepared: PreparedRequest):
        lines = [f"{prepared.method} {prepared.url}"]
        lines.extend(f"\t{name.lower()}: {value}" for name, value in prepared.headers.items())
        if prepared.body is not None:
            lines.append(prepared.body.decode('utf-8'))
        self.logger.debug("REQUEST:\n%s", '\n'.join(lines))

    def send(self, prepared: PreparedRequest) -> Any:
        """
        Execute a prepared request and decode its JSON body.

        Returns:
            Decoded JSON document

        Raises:
            HTTPError: If the request fails in transport
            HTTPStatusError: If the status is not 2xx and raise_for_status is on
            DecodeError: If the body is not valid JSON
        """
        if self.config.debug:
            self._dump_request(prepared)

        try:
            response = self.session.request(
                prepared.method,
                prepared.url,
                headers=prepared.headers,
                data=prepared.body,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            raise HTTPError(f"HTTP request failed: {e}") from e

        try:
            try:
                content = response.content
            except requests.RequestException as e:
                raise HTTPError(f"reading response body failed: {e}") from e

            text = content.decode('utf-8', errors='replace')
            if self.config.debug:
                self.logger.debug("RESPONSE %s:\n%s", response.status_code, text)

            if self.config.raise_for_status and not 200 <= response.status_code < 300:
                try:
                    payload = json.loads(content)
                except ValueError:
                    payload = None
                raise HTTPStatusError(response.status_code, text, payload)

            try:
                return json.loads(content)
            except ValueError as e:
                raise DecodeError(f"response is not valid JSON: {e}") from e
        finally:
            response.close()

    def request(self, method: str, path: str, params: Optional[Mapping[str, Any]] = None,
                json: Any = None, query: Optional[Mapping[str, Any]] = None) -> Any:
        """Build, sign and send a request, returning the decoded JSON body."""
        spec = SignedRequestSpec(method, path, json, params or {}, query or {})
        return self.send(self.build_request(spec))

    def get(self, path: str, params=None, query=None) -> Any:
        """Make a signed GET request."""
        return self.request('GET', path, params=params, query=query)

    def post(self, path: str, json=None, params=None, query=None) -> Any:
        """Make a signed POST request."""
        return self.request('POST', path, params=params, json=json, query=query)

    def fetch(self, path: str, key: str, params=None, query=None) -> Any:
        """
        GET a resource and unwrap its JSON envelope.

        Args:
            path: Endpoint path
            key: Envelope key (singular for one item, plural for lists)

        Raises:
            DecodeError: If the body is not an object holding ``key``
        """
        document = self.get(path, params=params, query=query)
        if not isinstance(document, dict) or key not in document:
            raise DecodeError(f"response has no {key!r} envelope")
        return document[key]

    def _fetch_list(self, path: str, key: str, record, params=None) -> list:
        items = self.fetch(path, key, params=params)
        if not isinstance(items, list):
            raise DecodeError(f"{key!r} envelope is not a list")
        return [record.from_dict(item) for item in items]

    def list_exams(self) -> List[Exam]:
        """List all exams visible to the API key."""
        return self._fetch_list(f"{API_PREFIX}/exams", 'exams', Exam)

    def get_exam(self, exam_id: int) -> Exam:
        """Get a single exam by id."""
        data = self.fetch(f"{API_PREFIX}/exams/{exam_id}", 'exam',
                          params={'id': exam_id})
        return Exam.from_dict(data)

    def list_users(self, institute_id: int) -> List[User]:
        """List the users of an institute."""
        return self._fetch_list(f"{API_PREFIX}/institutes/{institute_id}/users", 'users', User,
                                params={'institute_id': institute_id})

    def get_user(self, institute_id: int, user_id: int) -> User:
        """Get a single user of an institute."""
        data = self.fetch(f"{API_PREFIX}/institutes/{institute_id}/users/{user_id}", 'user',
                          params={'institute_id': institute_id, 'id': user_id})
        return User.from_dict(data)

    def show_student(self, exam_id: int, student_session_id: int) -> Student:
        """
        Get the student of an exam by student session.

        The session id is signed and also sent as a plain query parameter.
        """
        data = self.fetch(f"{API_PREFIX}/exams/{exam_id}/show_student", 'student',
                          params={'id': exam_id, 'student_session_id': student_session_id},
                          query={'student_session_id': student_session_id})
        return Student.from_dict(data)

    def index_students(self, exam_id: int) -> List[Student]:
        """List the students of an exam."""
        return self._fetch_list(f"{API_PREFIX}/exams/{exam_id}/index_students", 'students', Student,
                                params={'id': exam_id})

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
