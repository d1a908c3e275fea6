from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import requests

from .errors import TransportError

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    text: str


class Transport(Protocol):
    def send(self, method: str, path: str, body: Optional[bytes] = None) -> TransportResponse: ...


class HTTPTransport:
    """
    Synchronous transport over a `requests.Session`.

    `server_url` is the Appium base URL (e.g. http://127.0.0.1:4723 or
    http://host:4723/wd/hub); command paths are appended to it as-is.
    """

    def __init__(self, server_url: str, *, timeout_s: float = 30.0, session: Optional[requests.Session] = None) -> None:
        if not server_url:
            raise ValueError("server_url is required")
        if timeout_s <= 0:
            raise ValueError("timeout_s must be > 0")
        self.server_url = server_url.rstrip("/")
        self.timeout_s = timeout_s
        self._session = session if session is not None else requests.Session()

    def send(self, method: str, path: str, body: Optional[bytes] = None) -> TransportResponse:
        url = f"{self.server_url}{path}"
        headers = {"Accept": "application/json"}
        if body is not None:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        try:
            response = self._session.request(method, url, data=body, headers=headers, timeout=self.timeout_s)
        except requests.RequestException as e:
            logger.warning("Request to Appium server failed: %s %s: %s", method, url, e)
            raise TransportError(message=f"Failed to call Appium server: {e}", method=method, url=url) from e
        return TransportResponse(status_code=response.status_code, text=response.text)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
