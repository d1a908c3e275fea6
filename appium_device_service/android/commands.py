from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class CommandSpec:
    name: str
    method: str
    path: str

    @property
    def element_scoped(self) -> bool:
        return "{element_id}" in self.path

    @property
    def has_body(self) -> bool:
        return self.method != "GET"


def _table(*specs: CommandSpec) -> Mapping[str, CommandSpec]:
    return MappingProxyType({spec.name: spec for spec in specs})


COMMANDS: Mapping[str, CommandSpec] = _table(
    CommandSpec("is_keyboard_shown", "GET", "/session/{session_id}/appium/device/is_keyboard_shown"),
    CommandSpec("hide_keyboard", "POST", "/session/{session_id}/appium/device/hide_keyboard"),
    CommandSpec("keyevent", "POST", "/session/{session_id}/appium/device/keyevent"),
    CommandSpec("press_keycode", "POST", "/session/{session_id}/appium/device/press_keycode"),
    CommandSpec("long_press_keycode", "POST", "/session/{session_id}/appium/device/long_press_keycode"),
    CommandSpec("set_immediate_value", "POST", "/session/{session_id}/appium/element/{element_id}/value"),
    CommandSpec("replace_value", "POST", "/session/{session_id}/appium/element/{element_id}/replace_value"),
)
