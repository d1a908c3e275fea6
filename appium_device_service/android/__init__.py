"""
Android device commands (keyboard, key events, element values) over the
Mobile JSON Wire Protocol, built around Appium.

Sessions are created elsewhere; everything here is bound to an existing
session id and sends exactly one HTTP request per command.
"""

from .commands import COMMANDS, CommandSpec
from .config import ClientSettings
from .encoder import NULL_KEY
from .errors import InvalidArgument, ProtocolError, TransportError, UnknownCommandError
from .keyevent import KeyEventFlags, MetaState, aggregate_flags
from .mjsonwp_client import AndroidDeviceClient, ElementRef, MJSONWPDispatcher
from .transport import HTTPTransport, Transport, TransportResponse

__all__ = [
    "AndroidDeviceClient",
    "COMMANDS",
    "ClientSettings",
    "CommandSpec",
    "ElementRef",
    "HTTPTransport",
    "InvalidArgument",
    "KeyEventFlags",
    "MJSONWPDispatcher",
    "MetaState",
    "NULL_KEY",
    "ProtocolError",
    "Transport",
    "TransportError",
    "TransportResponse",
    "UnknownCommandError",
    "aggregate_flags",
]
