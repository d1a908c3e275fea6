from __future__ import annotations

import enum
from collections.abc import Sequence
from typing import Any

from .errors import InvalidArgument


class MetaState(enum.IntFlag):
    """Android `KeyEvent.META_*` modifier state constants."""

    META_SHIFT_ON = 0x00000001
    META_ALT_ON = 0x00000002
    META_SYM_ON = 0x00000004
    META_FUNCTION_ON = 0x00000008
    META_ALT_LEFT_ON = 0x00000010
    META_ALT_RIGHT_ON = 0x00000020
    META_SHIFT_LEFT_ON = 0x00000040
    META_SHIFT_RIGHT_ON = 0x00000080
    META_CTRL_ON = 0x00001000
    META_CTRL_LEFT_ON = 0x00002000
    META_CTRL_RIGHT_ON = 0x00004000
    META_META_ON = 0x00010000
    META_META_LEFT_ON = 0x00020000
    META_META_RIGHT_ON = 0x00040000
    META_CAPS_LOCK_ON = 0x00100000
    META_NUM_LOCK_ON = 0x00200000
    META_SCROLL_LOCK_ON = 0x00400000

    META_SHIFT_MASK = 0x000000C1
    META_ALT_MASK = 0x00000032
    META_CTRL_MASK = 0x00007000
    META_META_MASK = 0x00070000


class KeyEventFlags(enum.IntFlag):
    """Android `KeyEvent.FLAG_*` constants."""

    FLAG_WOKE_HERE = 0x00000001
    FLAG_SOFT_KEYBOARD = 0x00000002
    FLAG_KEEP_TOUCH_MODE = 0x00000004
    FLAG_FROM_SYSTEM = 0x00000008
    FLAG_EDITOR_ACTION = 0x00000010
    FLAG_CANCELED = 0x00000020
    FLAG_VIRTUAL_HARD_KEY = 0x00000040
    FLAG_LONG_PRESS = 0x00000080
    FLAG_CANCELED_LONG_PRESS = 0x00000100
    FLAG_TRACKING = 0x00000200
    FLAG_FALLBACK = 0x00000400
    FLAG_PREDISPATCH = 0x20000000
    FLAG_START_TRACKING = 0x40000000
    FLAG_TAINTED = 0x80000000


def _recognized_values(valid: type[enum.IntFlag]) -> frozenset[int]:
    return frozenset(int(member.value) for member in valid.__members__.values())


_RECOGNIZED: dict[type[enum.IntFlag], frozenset[int]] = {
    MetaState: _recognized_values(MetaState),
    KeyEventFlags: _recognized_values(KeyEventFlags),
}


def aggregate_flags(values: Any, *, valid: type[enum.IntFlag], name: str) -> int:
    """
    OR a sequence of flag constants into one integer bitmask.

    Every item must be one of the constants declared on `valid`; ORed
    combinations of constants are not accepted as a single item (except for the
    named `*_MASK` members). A bare int is rejected as well, so callers cannot
    mistake a pre-combined mask for a flag set.
    """
    if isinstance(values, (str, bytes)) or not isinstance(values, Sequence):
        raise InvalidArgument(f"{name} must be a list of {valid.__name__} constants, got {type(values).__name__}")

    recognized = _RECOGNIZED.get(valid)
    if recognized is None:
        recognized = _recognized_values(valid)

    result = 0
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgument(f"{name} contains a non-integer value: {value!r}")
        if int(value) not in recognized:
            raise InvalidArgument(f"{name} contains an unrecognized {valid.__name__} value: {int(value):#x}")
        result |= int(value)
    return result


def aggregate_metastate(values: Any) -> int:
    return aggregate_flags(values, valid=MetaState, name="metastate")


def aggregate_key_flags(values: Any) -> int:
    return aggregate_flags(values, valid=KeyEventFlags, name="flags")


def parse_flag_token(token: str, *, valid: type[enum.IntFlag]) -> int:
    """
    Parse a command-line flag token: a constant name (`META_SHIFT_ON`), a hex
    literal (`0x200000`) or a decimal integer. Membership is checked later by
    `aggregate_flags`.
    """
    text = (token or "").strip()
    if not text:
        raise InvalidArgument("flag value must not be empty")
    member = valid.__members__.get(text.upper())
    if member is not None:
        return int(member.value)
    try:
        return int(text, 0)
    except ValueError as e:
        raise InvalidArgument(f"Unknown {valid.__name__} value: {token!r}") from e
