from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union
from urllib.parse import quote

from .commands import COMMANDS, CommandSpec
from .encoder import dump_body, encode_hide_keyboard_body, encode_keycode_body, encode_value_body
from .errors import InvalidArgument, ProtocolError, UnknownCommandError
from .transport import Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ElementRef:
    element_id: str


def _error_details(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    value = payload.get("value")
    if isinstance(value, dict):
        return value.get("error") or value.get("message")
    if isinstance(value, str) and value:
        return value
    return None


def _quote_id(value: str) -> str:
    return quote(value, safe="")


class MJSONWPDispatcher:
    """
    Maps a command name plus ids onto one HTTP exchange and returns the
    envelope's `value`.

    Holds nothing but the transport and the (read-only) command table, so a
    single dispatcher can be shared between sessions and threads as long as the
    transport allows it.
    """

    def __init__(self, transport: Transport, *, commands: Mapping[str, CommandSpec] = COMMANDS) -> None:
        self._transport = transport
        self._commands = commands

    def resolve_path(self, name: str, *, session_id: str, element_id: Optional[str] = None) -> str:
        spec = self.command(name)
        if not session_id:
            raise InvalidArgument("session_id is required")
        if spec.element_scoped:
            if not element_id:
                raise InvalidArgument(f"{name} requires an element id")
            return spec.path.format(session_id=_quote_id(session_id), element_id=_quote_id(element_id))
        return spec.path.format(session_id=_quote_id(session_id))

    def command(self, name: str) -> CommandSpec:
        try:
            return self._commands[name]
        except KeyError:
            raise UnknownCommandError(name) from None

    def execute(
        self,
        name: str,
        *,
        session_id: str,
        element_id: Optional[str] = None,
        body: Optional[dict[str, Any]] = None,
    ) -> Any:
        spec = self.command(name)
        path = self.resolve_path(name, session_id=session_id, element_id=element_id)
        if not spec.has_body and body is not None:
            raise InvalidArgument(f"{name} is a {spec.method} command and takes no body")

        payload = dump_body(body if body is not None else {}) if spec.has_body else None
        logger.debug("MJSONWP %s %s", spec.method, path)
        response = self._transport.send(spec.method, path, payload)
        return self._decode(spec.method, path, response.status_code, response.text)

    def _decode(self, method: str, path: str, status_code: int, text: str) -> Any:
        response_json: Any = None
        try:
            response_json = json.loads(text) if text else None
        except ValueError:
            response_json = None

        def fail(message: str) -> ProtocolError:
            logger.warning("MJSONWP %s", message)
            return ProtocolError(
                message=message,
                method=method,
                path=path,
                status_code=status_code,
                response_text=text,
                response_json=response_json,
            )

        if not 200 <= status_code < 300:
            details = _error_details(response_json)
            raise fail(f"Appium HTTP {status_code} for {method} {path}" + (f": {details}" if details else ""))

        if not isinstance(response_json, dict):
            raise fail(f"Appium returned a non-JSON-object response for {method} {path}")

        if "value" not in response_json:
            raise fail(f"Appium response for {method} {path} has no 'value'")

        # Legacy JSONWire envelopes report failures through a non-zero `status` even on HTTP 200.
        status = response_json.get("status")
        if isinstance(status, int) and not isinstance(status, bool) and status != 0:
            details = _error_details(response_json)
            raise fail(f"Appium status {status} for {method} {path}" + (f": {details}" if details else ""))

        return response_json["value"]


ElementLike = Union[ElementRef, str]


def _element_id(element: ElementLike) -> str:
    if isinstance(element, ElementRef):
        element_id = element.element_id
    elif isinstance(element, str):
        element_id = element
    else:
        raise InvalidArgument(f"Expected an ElementRef or element id string, got {type(element).__name__}")
    if not element_id:
        raise InvalidArgument("element id must not be empty")
    return element_id


class AndroidDeviceClient:
    """
    Android device commands bound to one Appium session.

    The session must already exist; this client never creates or deletes it.
    Arguments are validated and encoded before the request is sent, so an
    InvalidArgument means nothing reached the server.
    """

    def __init__(self, transport: Transport, session_id: str) -> None:
        if not session_id:
            raise InvalidArgument("session_id is required")
        self._session_id = session_id
        self._dispatcher = MJSONWPDispatcher(transport)

    @property
    def session_id(self) -> str:
        return self._session_id

    def _execute(self, name: str, *, element_id: Optional[str] = None, body: Optional[dict[str, Any]] = None) -> Any:
        return self._dispatcher.execute(name, session_id=self._session_id, element_id=element_id, body=body)

    def is_keyboard_shown(self) -> Any:
        return self._execute("is_keyboard_shown")

    def hide_keyboard(self, key: Optional[str] = None, *, strategy: Optional[str] = None) -> Any:
        return self._execute("hide_keyboard", body=encode_hide_keyboard_body(key, strategy))

    def keyevent(self, keycode: int, *, metastate: Optional[Sequence[int]] = None) -> Any:
        return self._execute("keyevent", body=encode_keycode_body(keycode, metastate=metastate))

    def press_keycode(
        self,
        keycode: int,
        *,
        metastate: Optional[Sequence[int]] = None,
        flags: Optional[Sequence[int]] = None,
    ) -> Any:
        return self._execute("press_keycode", body=encode_keycode_body(keycode, metastate=metastate, flags=flags))

    def long_press_keycode(
        self,
        keycode: int,
        *,
        metastate: Optional[Sequence[int]] = None,
        flags: Optional[Sequence[int]] = None,
    ) -> Any:
        return self._execute(
            "long_press_keycode",
            body=encode_keycode_body(keycode, metastate=metastate, flags=flags),
        )

    def set_immediate_value(self, element: ElementLike, keys: Union[str, Sequence[str]]) -> Any:
        element_id = _element_id(element)
        return self._execute("set_immediate_value", element_id=element_id, body=encode_value_body(keys))

    def replace_value(self, element: ElementLike, keys: Union[str, Sequence[str]]) -> Any:
        element_id = _element_id(element)
        return self._execute("replace_value", element_id=element_id, body=encode_value_body(keys))
