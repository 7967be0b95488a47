import json

import httpx
import pytest

from core.config import Config
from ui import log_utils


class RecordingLogger:
    """RequestLogger that keeps every call in memory."""

    def __init__(self):
        self.forwards = []
        self.errors = []

    def log_forward(self, route, method, url, status):
        self.forwards.append((route, method, url, status))

    def log_error(self, route, status, message):
        self.errors.append((route, status, message))


class UpstreamRecorder:
    """httpx.MockTransport handler that records requests and replays a canned reply."""

    def __init__(self, status=200, text='{"retCode":0}', headers=None, exc=None):
        self.status = status
        self.text = text
        self.headers = headers or {"content-type": "application/json"}
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return httpx.Response(self.status, text=self.text, headers=self.headers)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def raw_header_names(request: httpx.Request) -> list[bytes]:
    return [name for name, _ in request.headers.raw]


def json_body(response) -> dict:
    return json.loads(response.body)


@pytest.fixture(autouse=True)
def _isolated_logs(tmp_path, monkeypatch):
    monkeypatch.setattr(log_utils, "LOG_ROOT", tmp_path / "logs")
    monkeypatch.setattr(log_utils, "CLI_LOG_FILE", tmp_path / "logs" / "proxy.log")


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def logger():
    return RecordingLogger()
