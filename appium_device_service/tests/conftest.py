"""Shared fixtures for the Android device command tests."""
import pytest

from appium_device_service.android.mjsonwp_client import AndroidDeviceClient
from stub_appium import SESSION_ID, FlaskTestTransport, StubAppiumServer


@pytest.fixture
def server() -> StubAppiumServer:
    return StubAppiumServer()


@pytest.fixture
def transport(server: StubAppiumServer) -> FlaskTestTransport:
    return FlaskTestTransport(server.app)


@pytest.fixture
def driver(transport: FlaskTestTransport) -> AndroidDeviceClient:
    return AndroidDeviceClient(transport, SESSION_ID)
