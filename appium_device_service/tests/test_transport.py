"""Tests for the requests-based HTTP transport."""
from unittest.mock import MagicMock

import pytest
import requests

from appium_device_service.android.errors import TransportError
from appium_device_service.android.transport import JSON_CONTENT_TYPE, HTTPTransport, TransportResponse


def _session_returning(status_code=200, text='{"value": ""}'):
    session = MagicMock(spec=requests.Session)
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    session.request.return_value = response
    return session


def test_post_sends_json_body():
    session = _session_returning()
    transport = HTTPTransport("http://127.0.0.1:4723/", timeout_s=5.0, session=session)

    result = transport.send("POST", "/session/abc/appium/device/keyevent", b'{"keycode":4}')

    assert result == TransportResponse(status_code=200, text='{"value": ""}')
    session.request.assert_called_once_with(
        "POST",
        "http://127.0.0.1:4723/session/abc/appium/device/keyevent",
        data=b'{"keycode":4}',
        headers={"Accept": "application/json", "Content-Type": JSON_CONTENT_TYPE},
        timeout=5.0,
    )


def test_get_sends_no_content_type():
    session = _session_returning(text='{"value": true}')
    transport = HTTPTransport("http://localhost:4723/wd/hub", session=session)

    transport.send("GET", "/session/abc/appium/device/is_keyboard_shown")

    args, kwargs = session.request.call_args
    assert args == ("GET", "http://localhost:4723/wd/hub/session/abc/appium/device/is_keyboard_shown")
    assert kwargs["data"] is None
    assert "Content-Type" not in kwargs["headers"]
    assert kwargs["timeout"] == 30.0


def test_error_status_is_returned_not_raised():
    session = _session_returning(status_code=500, text="boom")
    transport = HTTPTransport("http://localhost:4723", session=session)

    assert transport.send("GET", "/status") == TransportResponse(status_code=500, text="boom")


def test_connection_failure_raises_transport_error():
    session = MagicMock(spec=requests.Session)
    session.request.side_effect = requests.ConnectionError("refused")
    transport = HTTPTransport("http://localhost:4723", session=session)

    with pytest.raises(TransportError) as excinfo:
        transport.send("GET", "/status")

    assert excinfo.value.url == "http://localhost:4723/status"
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_context_manager_closes_session():
    session = _session_returning()
    with HTTPTransport("http://localhost:4723", session=session):
        pass
    session.close.assert_called_once_with()


@pytest.mark.parametrize("server_url,timeout_s", [("", 1.0), ("http://localhost:4723", 0), ("http://x", -1)])
def test_invalid_construction(server_url, timeout_s):
    with pytest.raises(ValueError):
        HTTPTransport(server_url, timeout_s=timeout_s, session=MagicMock(spec=requests.Session))
