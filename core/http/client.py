"""
HTTP Client

Small requests-based client used by the smoke command to talk to a running
signing service. Transport failures (connection refused, timeouts, TLS) are
raised as HttpError; any HTTP status, including 4xx/5xx, is returned as a
ServiceResponse so callers can read the error envelope.
"""

from __future__ import annotations

import json as jsonlib
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import requests


logger = logging.getLogger(__name__)


DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "sigil-cli/0.1",
}


class HttpError(Exception):
    """The request never produced an HTTP response."""

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


@dataclass
class ServiceResponse:
    """Status, headers and raw body of one service call."""
    status_code: int
    content: bytes
    headers: dict[str, str] = field(default_factory=dict)
    elapsed_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Decode the body; raises ValueError when it is not JSON."""
        return jsonlib.loads(self.content)


class HttpClient:
    """
    Session-backed JSON client.

    Usage:
        with HttpClient(timeout=10) as client:
            response = client.post("http://localhost:8080/keypair")
            envelope = response.json()
    """

    def __init__(self, *, timeout: float = 30.0, headers: Optional[dict[str, str]] = None) -> None:
        self.timeout = timeout
        self.headers = {**DEFAULT_HEADERS, **(headers or {})}
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(self.headers)
        return self._session

    def request(self, method: str, url: str, *, json: Optional[Any] = None) -> ServiceResponse:
        """
        Send one request.

        Raises:
            HttpError: If no response was received
        """
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, json=json, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"{method} {url} failed: {type(e).__name__}")
            raise HttpError(str(e), url=url) from e

        return ServiceResponse(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
            elapsed_ms=response.elapsed.total_seconds() * 1000,
        )

    def post(self, url: str, *, json: Optional[Any] = None) -> ServiceResponse:
        return self.request("POST", url, json=json)

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()
