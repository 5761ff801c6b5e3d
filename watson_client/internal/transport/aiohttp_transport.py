import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import aiohttp
from aiohttp import ClientError, ClientSession, ClientTimeout, TCPConnector, hdrs
from multidict import CIMultiDict

from ...exceptions import TransportError
from ..request.descriptor import RequestDescriptor
from .base import RawResponse, RawStream, Transport

logger = logging.getLogger(__name__)


class ConnectionPool:
    """Пул соединений для эффективного управления ресурсами"""

    def __init__(self, max_connections: int = 100, max_connections_per_host: int = 10):
        self.max_connections = max_connections
        self.max_connections_per_host = max_connections_per_host
        self._connector: Optional[TCPConnector] = None

    def get_connector(self) -> TCPConnector:
        if self._connector is None or self._connector.closed:
            self._connector = TCPConnector(
                limit=self.max_connections,
                limit_per_host=self.max_connections_per_host,
                ttl_dns_cache=30,
                use_dns_cache=True,
                keepalive_timeout=60,
            )
        return self._connector

    async def close(self):
        if self._connector and not self._connector.closed:
            await self._connector.close()


def build_multipart(descriptor: RequestDescriptor) -> aiohttp.MultipartWriter:
    """Multipart тело из частей descriptor, файловые объекты читаются при отправке"""
    writer = aiohttp.MultipartWriter("form-data")
    for name, part in descriptor.form_data.items():
        headers = {}
        if part.content_type:
            headers[hdrs.CONTENT_TYPE] = part.content_type
        payload = writer.append(part.data, headers or None)

        disposition = {"name": name}
        if part.filename:
            disposition["filename"] = part.filename
        payload.set_content_disposition("form-data", **disposition)
    return writer


class AiohttpTransport(Transport):
    """HTTP транспорт на базе aiohttp с connection pooling"""

    def __init__(
        self,
        timeout: int = 30,
        retries: int = 1,
        max_connections: int = 100,
        max_connections_per_host: int = 10,
        trust_env: bool = True,
    ):
        self._session: Optional[ClientSession] = None
        self._timeout = int(timeout) if timeout else 30
        self._retries = max(int(retries), 1) if retries else 1
        self._trust_env = trust_env
        self._connection_pool = ConnectionPool(max_connections, max_connections_per_host)
        self._session_lock = asyncio.Lock()

    async def _ensure_session(self) -> ClientSession:
        # Быстрая проверка без блокировки
        if self._session is not None and not self._session.closed:
            return self._session

        async with self._session_lock:
            if self._session is not None and not self._session.closed:
                return self._session

            timeout = ClientTimeout(total=self._timeout, connect=10, sock_connect=10)
            self._session = ClientSession(
                connector=self._connection_pool.get_connector(),
                connector_owner=False,
                timeout=timeout,
                trust_env=self._trust_env,
            )

        return self._session

    def _request_kwargs(self, descriptor: RequestDescriptor) -> Dict[str, Any]:
        request_kwargs = {
            "method": descriptor.method,
            "url": descriptor.url,
            "params": descriptor.query or None,
            "headers": descriptor.headers or None,
        }

        if descriptor.form_data is not None:
            request_kwargs["data"] = build_multipart(descriptor)
        elif descriptor.json is not None:
            request_kwargs["json"] = descriptor.json
        elif descriptor.data is not None:
            request_kwargs["data"] = descriptor.data

        return request_kwargs

    async def send(self, descriptor: RequestDescriptor) -> RawResponse:
        session = await self._ensure_session()
        _retries = self._retries

        while True:
            try:
                logger.debug(f"Making {descriptor.method} request to {descriptor.full_url}")

                async with session.request(**self._request_kwargs(descriptor)) as response:
                    logger.debug(f"Response status: {response.status}")
                    content = await response.read()
                    return RawResponse(
                        status_code=response.status,
                        headers=CIMultiDict(response.headers),
                        content=content,
                        url=str(response.url),
                    )

            except (ClientError, asyncio.TimeoutError) as exc:
                _retries -= 1
                # Файловый объект уже вычитан, повторить такой запрос нельзя
                if not _retries or (
                    descriptor.form_data
                    and any(part.is_stream for part in descriptor.form_data.values())
                ):
                    raise TransportError(
                        str(exc) or type(exc).__name__, path=descriptor.path
                    ) from exc

                logger.warning(f"Request failed (retries left: {_retries}): {exc}")
                await asyncio.sleep(0.5)

    @asynccontextmanager
    async def stream(self, descriptor: RequestDescriptor):
        session = await self._ensure_session()
        logger.debug(f"Streaming {descriptor.method} request to {descriptor.full_url}")

        try:
            async with session.request(**self._request_kwargs(descriptor)) as response:
                yield RawStream(
                    status_code=response.status,
                    headers=CIMultiDict(response.headers),
                    chunks=response.content.iter_any(),
                )
        except (ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(
                str(exc) or type(exc).__name__, path=descriptor.path
            ) from exc

    async def close(self):
        """Закрытие транспорта и освобождение ресурсов"""
        async with self._session_lock:
            if self._session and not self._session.closed:
                await self._session.close()
            self._session = None

        await self._connection_pool.close()
