from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

DEFAULT_APPIUM_SERVER_URL = "http://127.0.0.1:4723"
DEFAULT_TIMEOUT_S = 30.0


def _parse_timeout(raw: Any, *, context: str) -> float:
    if isinstance(raw, bool):
        raise ValueError(f"Invalid timeout in {context}: {raw!r}")
    try:
        timeout_s = float(raw)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid timeout in {context}: {raw!r}") from e
    if timeout_s <= 0:
        raise ValueError(f"Timeout must be > 0 in {context}, got {timeout_s}")
    return timeout_s


@dataclass(frozen=True)
class ClientSettings:
    server_url: str = DEFAULT_APPIUM_SERVER_URL
    session_id: Optional[str] = None
    timeout_s: float = DEFAULT_TIMEOUT_S

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientSettings":
        """
        Read APPIUM_SERVER_URL, APPIUM_SESSION_ID and APPIUM_TIMEOUT_S.
        Unset or blank variables fall back to the defaults.
        """
        env = os.environ if environ is None else environ
        server_url = (env.get("APPIUM_SERVER_URL") or "").strip() or DEFAULT_APPIUM_SERVER_URL
        session_id = (env.get("APPIUM_SESSION_ID") or "").strip() or None
        raw_timeout = (env.get("APPIUM_TIMEOUT_S") or "").strip()
        timeout_s = _parse_timeout(raw_timeout, context="APPIUM_TIMEOUT_S") if raw_timeout else DEFAULT_TIMEOUT_S
        return cls(server_url=server_url, session_id=session_id, timeout_s=timeout_s)

    @classmethod
    def from_json_file(cls, path: str) -> "ClientSettings":
        """
        Read a settings object such as
          {"server_url": "http://127.0.0.1:4723", "session_id": "...", "timeout_s": 30}

        `server_url` is required; the other keys are optional.
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise ValueError(f"Settings file not found: {file_path}")
        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {file_path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Settings in {file_path} must be a JSON object")

        server_url = data.get("server_url")
        if not isinstance(server_url, str) or not server_url.strip():
            raise ValueError(f"'server_url' must be a non-empty string in {file_path}")
        session_id = data.get("session_id")
        if session_id is not None and (not isinstance(session_id, str) or not session_id.strip()):
            raise ValueError(f"'session_id' must be a non-empty string in {file_path}")
        timeout_s = (
            _parse_timeout(data["timeout_s"], context=str(file_path)) if "timeout_s" in data else DEFAULT_TIMEOUT_S
        )
        return cls(
            server_url=server_url.strip(),
            session_id=session_id.strip() if session_id else None,
            timeout_s=timeout_s,
        )
