"""
Отправка описания запроса через транспорт и доставка результата в callback
"""

import asyncio
import logging
from typing import Any, Callable, Optional, Type

from pydantic import BaseModel, ValidationError

from ...exceptions import RemoteError, TransportError
from .descriptor import RequestDescriptor

logger = logging.getLogger(__name__)

Callback = Callable[[Optional[Exception], Any, Any], Any]


def parse_body(response) -> Any:
    """Разбор тела ответа по content-type"""
    if not response.content:
        return None

    content_type = response.content_type

    try:
        if "json" in content_type:
            return response.json()
        elif content_type.startswith("text/") or "xml" in content_type:
            return response.text()
        elif "application/octet-stream" in content_type or "application/zip" in content_type:
            return response.content
        # Универсальная попытка JSON, fallback на text
        try:
            return response.json()
        except ValueError:
            return response.text()
    except ValueError:
        logger.debug(f"Can't decode response body as {content_type}")
        return response.text()


def parse_model(body: Any, response_model: Optional[Type[BaseModel]]) -> Any:
    """Приведение тела к модели ответа, при несовпадении возвращается исходное тело"""
    if response_model is None or not isinstance(body, (dict, list)):
        return body
    try:
        if isinstance(body, list):
            return [response_model.model_validate(item) for item in body]
        return response_model.model_validate(body)
    except ValidationError as exc:
        logger.debug(f"Response doesn't match {response_model.__name__}: {exc}")
        return body


async def complete(
    transport,
    descriptor: RequestDescriptor,
    callback: Callback,
    response_model: Optional[Type[BaseModel]] = None,
) -> Any:
    """
    Выполняет запрос и вызывает callback(error, body, response) ровно один раз.

    Ошибки транспорта и ответы вне 2xx не поднимаются, а передаются
    первым аргументом callback.
    """
    try:
        response = await transport.send(descriptor)
    except TransportError as exc:
        logger.debug(f"Transport failed for {descriptor.path}: {exc}")
        return callback(exc, None, None)
    except Exception as exc:
        logger.error(f"Unexpected transport error: {exc}")
        error = TransportError(str(exc), path=descriptor.path)
        error.__cause__ = exc
        return callback(error, None, None)

    body = parse_body(response)

    if not response.ok:
        error = RemoteError.from_response(descriptor.path, response, body)
        logger.debug(f"Remote error for {descriptor.path}: {error}")
        return callback(error, None, response)

    return callback(None, parse_model(body, response_model), response)


def report_error(callback: Callback, error: Exception) -> "asyncio.Future":
    """
    Асинхронная доставка локальной ошибки в callback.

    callback вызывается на следующей итерации цикла событий, как и
    после сетевого запроса, а не синхронно внутри вызова метода.
    """
    loop = asyncio.get_running_loop()
    future = loop.create_future()

    def _deliver():
        try:
            future.set_result(callback(error, None, None))
        except Exception as exc:
            future.set_exception(exc)

    loop.call_soon(_deliver)
    return future


class ResponseStream:
    """
    Потоковый ответ для вызова без callback.

    Запрос отправляется при входе в контекст, тело читается по частям:

        async with service.list_models() as stream:
            async for chunk in stream:
                ...

    Статус ответа не проверяется: за разбор отвечает вызывающий код.
    """

    def __init__(self, transport, descriptor: RequestDescriptor):
        self.descriptor = descriptor
        self._transport = transport
        self._context = None
        self._stream = None

    @property
    def status_code(self) -> Optional[int]:
        return self._stream.status_code if self._stream else None

    @property
    def headers(self):
        return self._stream.headers if self._stream else None

    async def __aenter__(self) -> "ResponseStream":
        if self._context is not None:
            raise RuntimeError("Response stream is already open")
        self._context = self._transport.stream(self.descriptor)
        try:
            self._stream = await self._context.__aenter__()
        except BaseException:
            # Неудачный вход не занимает поток, повторный async with допустим
            self._context = None
            raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return await self._context.__aexit__(exc_type, exc_val, exc_tb)

    def __aiter__(self):
        if self._stream is None:
            raise RuntimeError("Use 'async with' before iterating a response stream")
        return self._stream.__aiter__()

    async def read(self) -> bytes:
        """Чтение всего тела"""
        chunks = []
        async for chunk in self:
            chunks.append(chunk)
        return b"".join(chunks)


def create_request(
    transport,
    descriptor: RequestDescriptor,
    callback: Optional[Callback] = None,
    response_model: Optional[Type[BaseModel]] = None,
):
    """
    Отправка descriptor через транспорт.

    С callback запрос запускается задачей на текущем цикле событий и
    возвращается asyncio.Task - его можно дождаться. Без callback
    возвращается ResponseStream, запрос уходит при входе в его контекст.
    """
    if callback is None:
        return ResponseStream(transport, descriptor)

    if not callable(callback):
        raise TypeError(f"callback must be callable, got {type(callback).__name__}")

    loop = asyncio.get_running_loop()
    return loop.create_task(complete(transport, descriptor, callback, response_model))
