import asyncio
import json
from contextlib import asynccontextmanager

import pytest

from watson_client.internal.transport.base import RawResponse, RawStream, Transport

SERVICE_ENV_VARS = [
    f"{service}_{suffix}"
    for service in ("LANGUAGE_TRANSLATOR", "DISCOVERY")
    for suffix in ("URL", "USERNAME", "PASSWORD", "USE_UNAUTHENTICATED", "VERSION_DATE")
]


def make_response(status_code=200, body=None, content_type="application/json"):
    if isinstance(body, (dict, list)):
        content = json.dumps(body).encode("utf-8")
    elif isinstance(body, str):
        content = body.encode("utf-8")
    else:
        content = body or b""
    return RawResponse(
        status_code=status_code,
        headers={"content-type": content_type},
        content=content,
        url="http://watson.test",
    )


class FakeTransport(Transport):
    """Транспорт без сети: запоминает запросы и отдает заготовленные ответы"""

    def __init__(self, *responses, error=None):
        self.requests = []
        self.responses = list(responses)
        self.error = error
        self.closed = False

    def _next_response(self):
        if self.responses:
            return self.responses.pop(0)
        return make_response(200, {})

    async def send(self, descriptor):
        self.requests.append(descriptor)
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self._next_response()

    @asynccontextmanager
    async def stream(self, descriptor):
        self.requests.append(descriptor)
        response = self._next_response()

        async def chunks():
            yield response.content[:2]
            yield response.content[2:]

        yield RawStream(response.status_code, response.headers, chunks())

    async def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Ни watson.toml из рабочей директории, ни переменные окружения не влияют на тесты"""
    monkeypatch.chdir(tmp_path)
    for name in SERVICE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return tmp_path


@pytest.fixture
def transport():
    return FakeTransport()
