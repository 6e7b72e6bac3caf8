"""Shared HTTP helpers used by the API client.

Provides an immutable request description and the default transport that
executes it with ``requests``. The transport performs exactly one attempt per
request: no retries, no caching. Error handling is left to the caller so
that transport failures can be mapped to soft failures at the API boundary.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

HEADERS_JSON = {"Accept": "application/json", "Content-Type": "application/json"}


@dataclass(frozen=True)
class HttpRequest:
    """A single HTTP request to send through a transport."""
    method: str
    url: str
    body: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def get(cls, url: str) -> "HttpRequest":
        return cls(method="GET", url=url)

    @classmethod
    def post_json(cls, url: str, payload: Any) -> "HttpRequest":
        """Build a POST request carrying ``payload`` serialized as JSON."""
        return cls(
            method="POST",
            url=url,
            body=json.dumps(payload),
            headers=dict(HEADERS_JSON),
        )


class HttpTransport:
    """Default transport backed by a ``requests.Session``.

    Timeout and User-Agent policy live here rather than in the API client.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        """Initialize the transport.

        Args:
            session: Session to send requests with (a new one if omitted).
            timeout: Per-request timeout in seconds (defaults to Constants.REQUEST_TIMEOUT).
            user_agent: User-Agent header value (defaults to Constants.USER_AGENT).
        """
        self._session = session or requests.Session()
        self.timeout = timeout if timeout is not None else Constants.REQUEST_TIMEOUT
        self.user_agent = user_agent or Constants.USER_AGENT

    def execute(self, request: HttpRequest) -> requests.Response:
        """Send ``request`` once and return the response, whatever its status.

        Raises:
            requests.RequestException: on connection errors and timeouts.
        """
        headers = {"User-Agent": self.user_agent}
        headers.update(request.headers)
        safe_target = safe_url(request.url)
        with Timer() as t:
            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP request",
                    extra=extra_context(
                        event="http_request",
                        component="http_client",
                        action=request.method,
                        target=safe_target,
                    ),
                )
            res = self._session.request(
                request.method,
                request.url,
                data=request.body.encode("utf-8") if request.body is not None else None,
                headers=headers,
                timeout=self.timeout,
            )
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action=request.method,
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                ),
            )
        return res

    def close(self) -> None:
        """Release the underlying session."""
        self._session.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
