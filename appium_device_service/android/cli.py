#!/usr/bin/env python3
"""
Command-line entry point: send one Android device command to an existing
Appium session and print the returned value as JSON.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Optional, Sequence

from .config import ClientSettings
from .errors import InvalidArgument, ProtocolError, TransportError
from .keyevent import KeyEventFlags, MetaState, parse_flag_token
from .mjsonwp_client import AndroidDeviceClient, ElementRef
from .transport import HTTPTransport

logger = logging.getLogger(__name__)


def _add_keycode_arguments(parser: argparse.ArgumentParser, *, with_flags: bool) -> None:
    parser.add_argument("keycode", type=int, help="Android keycode (e.g. Back=4, Home=3, Enter=66).")
    parser.add_argument(
        "--metastate",
        action="append",
        default=[],
        help="Metastate constant; name (META_SHIFT_ON), hex or decimal. Repeatable.",
    )
    if with_flags:
        parser.add_argument(
            "--flag",
            dest="flags",
            action="append",
            default=[],
            help="Key event flag constant; name (FLAG_CANCELED), hex or decimal. Repeatable.",
        )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="appium-device",
        description=(
            "Send one Android device command to an existing Appium session. "
            "Defaults come from APPIUM_SERVER_URL, APPIUM_SESSION_ID and APPIUM_TIMEOUT_S."
        ),
    )
    parser.add_argument(
        "--config",
        default="",
        help="JSON settings file with server_url, session_id and timeout_s (replaces the APPIUM_* variables).",
    )
    parser.add_argument("--server-url", default="", help="Appium server URL.")
    parser.add_argument("--session-id", default="", help="Existing Appium session id.")
    parser.add_argument("--timeout-s", type=float, default=None, help="HTTP timeout in seconds.")
    parser.add_argument("--verbose", action="store_true", help="Log every request.")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("is-keyboard-shown", help="Report whether the soft keyboard is visible.")

    hide = sub.add_parser("hide-keyboard", help="Hide the soft keyboard.")
    hide.add_argument("key", nargs="?", default=None, help="Key to press to close the keyboard (e.g. Done).")
    hide.add_argument("--strategy", default=None, help="Hide strategy (e.g. pressKey, tapOutside).")

    keyevent = sub.add_parser("keyevent", help="Send a key event (legacy, Selendroid).")
    _add_keycode_arguments(keyevent, with_flags=False)

    press = sub.add_parser("press-keycode", help="Press a keycode.")
    _add_keycode_arguments(press, with_flags=True)

    long_press = sub.add_parser("long-press-keycode", help="Long-press a keycode.")
    _add_keycode_arguments(long_press, with_flags=True)

    for name, help_text in (
        ("set-immediate-value", "Set an element's value immediately."),
        ("replace-value", "Replace an element's value."),
    ):
        value_parser = sub.add_parser(name, help=help_text)
        value_parser.add_argument("element_id", help="Element id within the session.")
        value_parser.add_argument("keys", nargs="+", help="Text parts; joined without separators.")

    return parser


def _resolve_settings(args: argparse.Namespace) -> ClientSettings:
    # Command-line options win over the --config file, which wins over the environment.
    base = ClientSettings.from_json_file(args.config) if args.config else ClientSettings.from_env()
    timeout_s = base.timeout_s if args.timeout_s is None else args.timeout_s
    if timeout_s <= 0:
        raise InvalidArgument("--timeout-s must be > 0")
    return ClientSettings(
        server_url=args.server_url.strip() or base.server_url,
        session_id=args.session_id.strip() or base.session_id,
        timeout_s=timeout_s,
    )


def run_command(client: AndroidDeviceClient, args: argparse.Namespace) -> Any:
    command = args.command
    if command == "is-keyboard-shown":
        return client.is_keyboard_shown()
    if command == "hide-keyboard":
        return client.hide_keyboard(args.key, strategy=args.strategy)

    if command in {"keyevent", "press-keycode", "long-press-keycode"}:
        metastate = [parse_flag_token(t, valid=MetaState) for t in args.metastate]
        if command == "keyevent":
            return client.keyevent(args.keycode, metastate=metastate)
        flags = [parse_flag_token(t, valid=KeyEventFlags) for t in args.flags]
        if command == "press-keycode":
            return client.press_keycode(args.keycode, metastate=metastate, flags=flags)
        return client.long_press_keycode(args.keycode, metastate=metastate, flags=flags)

    element = ElementRef(element_id=args.element_id)
    if command == "set-immediate-value":
        return client.set_immediate_value(element, args.keys)
    if command == "replace-value":
        return client.replace_value(element, args.keys)
    raise InvalidArgument(f"Unknown command: {command}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = _resolve_settings(args)
        if not settings.session_id:
            raise InvalidArgument("A session id is required (--session-id or APPIUM_SESSION_ID)")
        logger.debug("Using Appium server %s, session %s", settings.server_url, settings.session_id)
        with HTTPTransport(settings.server_url, timeout_s=settings.timeout_s) as transport:
            client = AndroidDeviceClient(transport, settings.session_id)
            value = run_command(client, args)
    except ValueError as e:
        print(f"Invalid argument: {e}", file=sys.stderr)
        return 2
    except (ProtocolError, TransportError) as e:
        print(f"Command failed: {e}", file=sys.stderr)
        return 1

    print(json.dumps(value, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
