"""
HTTP Client

Thin requests-based transport for the execution-layer node. Only JSON
POSTs are needed; responses are copied out of requests so callers and
tests never touch requests objects.
"""

from __future__ import annotations

import json as jsonlib
from dataclasses import dataclass
from typing import Any, Optional

import requests


@dataclass
class HttpResponse:
    status_code: int
    content: bytes
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Parse the body as JSON; raises ValueError on malformed content."""
        return jsonlib.loads(self.content)

    def raise_for_status(self) -> None:
        if not self.ok:
            raise HttpError(
                f"HTTP {self.status_code} from {self.url or 'node'}",
                status_code=self.status_code,
                response=self,
            )


class HttpError(Exception):
    """Transport failure or non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response: Optional[HttpResponse] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class HttpClient:
    """
    POST-only client over a lazily created requests session.

    Usage:
        with HttpClient(timeout=10) as client:
            response = client.post(url, json=payload)
            response.raise_for_status()
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        default_headers: Optional[dict[str, str]] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.default_headers = default_headers or {}
        self._session = session

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update(self.default_headers)
        return self._session

    def post(
        self,
        url: str,
        *,
        json: Optional[Any] = None,
        headers: Optional[dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> HttpResponse:
        """
        POST a JSON body.

        Raises:
            HttpError: If the request never produced a response
        """
        try:
            response = self.session.post(
                url,
                json=json,
                headers=headers,
                timeout=timeout or self.timeout,
            )
        except requests.RequestException as e:
            raise HttpError(f"POST {url} failed: {e}") from e

        return HttpResponse(
            status_code=response.status_code,
            content=response.content,
            url=str(response.url),
        )

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()
