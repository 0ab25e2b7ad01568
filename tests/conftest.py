from __future__ import annotations

from typing import Any

import pytest
import requests

from api_client import PosyanduApiClient
from auth_utils import AuthSession, MemoryStorage


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeHttp:
    """Pengganti requests.Session: mencatat permintaan dan membalas dari antrean respons."""

    def __init__(self):
        self.calls: list[dict] = []
        self.responses: list[Any] = []

    def queue(self, status_code: int = 200, payload: Any = None) -> None:
        self.responses.append(FakeResponse(status_code, payload))

    def fail_with(self, error: Exception) -> None:
        self.responses.append(error)

    def request(self, method, url, headers=None, timeout=None, **kwargs):
        self.calls.append({"method": method, "url": url, "headers": headers or {}, "timeout": timeout, **kwargs})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def http() -> FakeHttp:
    return FakeHttp()


@pytest.fixture
def auth_session() -> AuthSession:
    return AuthSession(MemoryStorage())


@pytest.fixture
def client(http: FakeHttp, auth_session: AuthSession) -> PosyanduApiClient:
    return PosyanduApiClient(
        "http://backend.test/api/",
        auth_session=auth_session,
        timeout=5,
        device_info="pytest",
        http=http,
    )


@pytest.fixture
def connection_error() -> requests.exceptions.ConnectionError:
    return requests.exceptions.ConnectionError("Connection refused")
