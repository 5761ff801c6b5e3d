"""
Общий контракт транспорта
"""

import json
from abc import ABC, abstractmethod
from typing import Any, AsyncContextManager, AsyncIterator, Mapping

from ..request.descriptor import RequestDescriptor


class RawResponse:
    """Ответ сервиса, тело уже прочитано целиком"""

    def __init__(self, status_code: int, headers: Mapping[str, str], content: bytes, url: str = ""):
        self.status_code = status_code
        self.headers = headers
        self.content = content
        self.url = url
        self._json = None

    @property
    def content_type(self) -> str:
        return (self.headers.get("content-type") or "").lower()

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self) -> Any:
        if self._json is None:
            self._json = json.loads(self.text())
        return self._json

    def __repr__(self) -> str:
        return f"<RawResponse [{self.status_code}] {self.url}>"


class RawStream:
    """Потоковый ответ: статус и заголовки доступны сразу, тело читается по частям"""

    def __init__(self, status_code: int, headers: Mapping[str, str], chunks: AsyncIterator[bytes]):
        self.status_code = status_code
        self.headers = headers
        self._chunks = chunks

    def __aiter__(self) -> AsyncIterator[bytes]:
        return self._chunks


class Transport(ABC):
    """
    Транспорт выполняет сетевой I/O по готовому RequestDescriptor.

    send() возвращает полностью прочитанный ответ или поднимает
    TransportError. stream() отдает ответ без буферизации тела.
    """

    @abstractmethod
    async def send(self, descriptor: RequestDescriptor) -> RawResponse:
        ...

    @abstractmethod
    def stream(self, descriptor: RequestDescriptor) -> AsyncContextManager[RawStream]:
        ...

    async def close(self) -> None:
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
