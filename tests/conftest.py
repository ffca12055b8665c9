"""Shared fixtures: a fake build-tool process and a mocked API transport."""

import asyncio
import json

import httpx
import pytest

from core.api_client import ScalaApiClient
from core.config import ServerConfig


class FakeProcess:
    """Stands in for asyncio.subprocess.Process."""

    def __init__(self, stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0):
        self._stdout = stdout
        self._stderr = stderr
        self.returncode = returncode

    async def communicate(self):
        return self._stdout, self._stderr


@pytest.fixture
def config(tmp_path) -> ServerConfig:
    return ServerConfig(project_path=str(tmp_path))


@pytest.fixture
def fake_exec(monkeypatch):
    """Replace asyncio.create_subprocess_exec and record every spawn.

    Call the fixture with the output the fake process should produce (or an
    ``error`` to raise at spawn time); it returns the list of recorded
    ``(args, kwargs)`` calls.
    """

    def install(stdout=b"", stderr=b"", returncode=0, error=None):
        calls = []

        async def _exec(*args, **kwargs):
            calls.append((args, kwargs))
            if error is not None:
                raise error
            return FakeProcess(stdout, stderr, returncode)

        monkeypatch.setattr(asyncio, "create_subprocess_exec", _exec)
        return calls

    return install


class RecordingApi:
    """Mock code-intelligence API.  Records each request it receives."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body = None
        self.text = None
        self.error: Exception | None = None

    def respond_json(self, body, status_code: int = 200) -> None:
        self.body, self.text, self.status_code = body, None, status_code

    def respond_text(self, text: str, status_code: int) -> None:
        self.body, self.text, self.status_code = None, text, status_code

    def fail(self, error: Exception) -> None:
        self.error = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, content=json.dumps(self.body).encode())

    def client(self, base_url: str) -> ScalaApiClient:
        return ScalaApiClient(base_url, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def mock_api() -> RecordingApi:
    return RecordingApi()


@pytest.fixture
def api_client(mock_api, config) -> ScalaApiClient:
    return mock_api.client(config.api_base_url)
