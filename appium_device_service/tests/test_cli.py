"""Tests for the appium-device command line."""
import json

import pytest

from appium_device_service.android import cli
from stub_appium import SESSION, SESSION_ID, FlaskTestTransport


@pytest.fixture
def stub_transport(server, monkeypatch):
    created = []

    def factory(server_url, *, timeout_s):
        created.append((server_url, timeout_s))
        return FlaskTestTransport(server.app)

    monkeypatch.setattr(cli, "HTTPTransport", factory)
    for name in ("APPIUM_SERVER_URL", "APPIUM_SESSION_ID", "APPIUM_TIMEOUT_S"):
        monkeypatch.delenv(name, raising=False)
    return created


def test_is_keyboard_shown_prints_value(server, stub_transport, capsys):
    server.stub_request("GET", f"{SESSION}/appium/device/is_keyboard_shown", response={"value": True})

    exit_code = cli.main(["--session-id", SESSION_ID, "is-keyboard-shown"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) is True
    assert stub_transport == [("http://127.0.0.1:4723", 30.0)]


def test_press_keycode_with_named_and_numeric_flags(server, stub_transport):
    server.stub_request(
        "POST",
        f"{SESSION}/appium/device/press_keycode",
        body={"keycode": 86, "metastate": 2_097_153, "flags": 44},
    )

    exit_code = cli.main(
        [
            "--session-id",
            SESSION_ID,
            "press-keycode",
            "86",
            "--metastate",
            "META_SHIFT_ON",
            "--metastate",
            "0x00200000",
            "--flag",
            "FLAG_CANCELED",
            "--flag",
            "4",
            "--flag",
            "0x8",
        ]
    )

    assert exit_code == 0
    server.assert_requested("POST", f"{SESSION}/appium/device/press_keycode", times=1)


def test_replace_value_joins_keys(server, stub_transport):
    server.stub_request("POST", f"{SESSION}/appium/element/el/replace_value", body={"value": ["abc\ue000"]})

    assert cli.main(["--session-id", SESSION_ID, "replace-value", "el", "a", "b", "c"]) == 0
    server.assert_requested("POST", f"{SESSION}/appium/element/el/replace_value", times=1)


def test_session_id_from_env(server, stub_transport, monkeypatch):
    monkeypatch.setenv("APPIUM_SESSION_ID", SESSION_ID)
    monkeypatch.setenv("APPIUM_SERVER_URL", "http://farm:4723")
    server.stub_request("POST", f"{SESSION}/appium/device/hide_keyboard", body={"key": "Done"})

    assert cli.main(["hide-keyboard", "Done"]) == 0
    assert stub_transport == [("http://farm:4723", 30.0)]


def test_missing_session_id_exits_2(stub_transport, capsys):
    assert cli.main(["is-keyboard-shown"]) == 2
    assert "session id" in capsys.readouterr().err
    assert stub_transport == []


def test_unrecognized_flag_exits_2_without_request(server, stub_transport):
    assert cli.main(["--session-id", SESSION_ID, "long-press-keycode", "86", "--flag", "0x1000"]) == 2
    assert server.requests == []


def test_protocol_error_exits_1(server, stub_transport, capsys):
    assert cli.main(["--session-id", SESSION_ID, "keyevent", "4"]) == 1
    assert "404" in capsys.readouterr().err


def test_config_file_supplies_settings(server, stub_transport, tmp_path, monkeypatch):
    """Test --config replaces the environment, and explicit options still win."""
    monkeypatch.setenv("APPIUM_SERVER_URL", "http://ignored:4723")
    config = tmp_path / "appium.json"
    config.write_text(json.dumps({"server_url": "http://farm:4723", "session_id": "other", "timeout_s": 7}))
    server.stub_request("GET", f"{SESSION}/appium/device/is_keyboard_shown", response={"value": False})

    exit_code = cli.main(["--config", str(config), "--session-id", SESSION_ID, "is-keyboard-shown"])

    assert exit_code == 0
    assert stub_transport == [("http://farm:4723", 7.0)]
    server.assert_requested("GET", f"{SESSION}/appium/device/is_keyboard_shown", times=1)


def test_missing_config_file_exits_2(stub_transport, tmp_path, capsys):
    assert cli.main(["--config", str(tmp_path / "nope.json"), "is-keyboard-shown"]) == 2
    assert "not found" in capsys.readouterr().err
    assert stub_transport == []
