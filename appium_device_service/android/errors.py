from __future__ import annotations

from typing import Any, Optional


class InvalidArgument(ValueError):
    """Raised before any request is sent when a command argument is invalid."""


class UnknownCommandError(KeyError):
    pass


class ProtocolError(RuntimeError):
    def __init__(
        self,
        *,
        message: str,
        method: str,
        path: str,
        status_code: Optional[int] = None,
        response_text: Optional[str] = None,
        response_json: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.path = path
        self.status_code = status_code
        self.response_text = response_text
        self.response_json = response_json


class TransportError(RuntimeError):
    def __init__(self, *, message: str, method: str, url: str) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
