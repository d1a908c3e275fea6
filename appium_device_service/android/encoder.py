from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any, Optional

from .errors import InvalidArgument
from .keyevent import aggregate_key_flags, aggregate_metastate

# WebDriver `Keys.NULL`: marks the end of a key sequence for text entry.
NULL_KEY = "\ue000"


def _require_keycode(keycode: Any) -> int:
    if isinstance(keycode, bool) or not isinstance(keycode, int):
        raise InvalidArgument(f"keycode must be an integer, got {keycode!r}")
    if keycode < 0:
        raise InvalidArgument(f"keycode must be >= 0, got {keycode}")
    return int(keycode)


def _has_items(values: Any) -> bool:
    # An empty list means "not supplied", a bare scalar is left for the aggregator to reject.
    if values is None:
        return False
    if isinstance(values, Sequence) and not isinstance(values, (str, bytes)):
        return len(values) > 0
    return True


def encode_keycode_body(
    keycode: Any,
    *,
    metastate: Optional[Sequence[int]] = None,
    flags: Optional[Sequence[int]] = None,
) -> dict[str, Any]:
    """
    Body for `keyevent`, `press_keycode` and `long_press_keycode`.

    `metastate` and `flags` are omitted unless at least one value is supplied;
    a single value is still sent as an aggregated integer.
    """
    body: dict[str, Any] = {"keycode": _require_keycode(keycode)}
    if _has_items(metastate):
        body["metastate"] = aggregate_metastate(metastate)
    if _has_items(flags):
        body["flags"] = aggregate_key_flags(flags)
    return body


def encode_hide_keyboard_body(key: Optional[str] = None, strategy: Optional[str] = None) -> dict[str, Any]:
    body: dict[str, Any] = {}
    if key is not None:
        if not isinstance(key, str) or not key:
            raise InvalidArgument(f"key must be a non-empty string, got {key!r}")
        body["key"] = key
    if strategy is not None:
        if not isinstance(strategy, str) or not strategy:
            raise InvalidArgument(f"strategy must be a non-empty string, got {strategy!r}")
        body["strategy"] = strategy
    return body


def encode_value_body(keys: Any) -> dict[str, Any]:
    """
    Body for `set_immediate_value` and `replace_value`: all parts joined into a
    single string terminated by one NULL_KEY.
    """
    if isinstance(keys, str):
        parts = [keys]
    elif isinstance(keys, Sequence) and not isinstance(keys, bytes):
        parts = list(keys)
    else:
        raise InvalidArgument(f"keys must be a string or a list of strings, got {type(keys).__name__}")

    for part in parts:
        if not isinstance(part, str):
            raise InvalidArgument(f"keys must only contain strings, got {part!r}")
    return {"value": ["".join(parts) + NULL_KEY]}


def dump_body(body: dict[str, Any]) -> bytes:
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
