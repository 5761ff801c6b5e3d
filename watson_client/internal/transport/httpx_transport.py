import logging
import secrets
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import httpx

from ...exceptions import TransportError
from ..request.descriptor import RequestDescriptor
from .base import RawResponse, RawStream, Transport

logger = logging.getLogger(__name__)


class HttpxTransport(Transport):
    """HTTP транспорт на базе httpx.AsyncClient"""

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: float = 30.0):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @staticmethod
    def _request_kwargs(descriptor: RequestDescriptor) -> Dict[str, Any]:
        request_kwargs = {
            "method": descriptor.method,
            "url": descriptor.url,
            "params": descriptor.query or None,
            "headers": descriptor.headers or None,
        }

        if descriptor.form_data == {}:
            # Пустой список files httpx не кодирует, тело multipart собирается явно
            boundary = secrets.token_hex(16)
            request_kwargs["headers"] = {
                **descriptor.headers,
                "Content-Type": f"multipart/form-data; boundary={boundary}",
            }
            request_kwargs["content"] = f"--{boundary}--\r\n".encode("ascii")
        elif descriptor.form_data is not None:
            # Кортеж (filename, content, content_type) всегда дает multipart
            request_kwargs["files"] = [
                (name, (part.filename, part.data, part.content_type))
                for name, part in descriptor.form_data.items()
            ]
        elif descriptor.json is not None:
            request_kwargs["json"] = descriptor.json
        elif descriptor.data is not None:
            request_kwargs["content"] = descriptor.data

        return request_kwargs

    async def send(self, descriptor: RequestDescriptor) -> RawResponse:
        logger.debug(f"Making {descriptor.method} request to {descriptor.full_url}")

        try:
            response = await self._client.request(**self._request_kwargs(descriptor))
        except httpx.TransportError as exc:
            raise TransportError(
                str(exc) or type(exc).__name__, path=descriptor.path
            ) from exc

        logger.debug(f"Response status: {response.status_code}")
        return RawResponse(
            status_code=response.status_code,
            headers=response.headers,
            content=response.content,
            url=str(response.url),
        )

    @asynccontextmanager
    async def stream(self, descriptor: RequestDescriptor):
        logger.debug(f"Streaming {descriptor.method} request to {descriptor.full_url}")

        try:
            async with self._client.stream(**self._request_kwargs(descriptor)) as response:
                yield RawStream(
                    status_code=response.status_code,
                    headers=response.headers,
                    chunks=response.aiter_bytes(),
                )
        except httpx.TransportError as exc:
            raise TransportError(
                str(exc) or type(exc).__name__, path=descriptor.path
            ) from exc

    async def close(self):
        if self._owns_client:
            await self._client.aclose()
