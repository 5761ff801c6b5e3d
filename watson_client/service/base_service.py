import logging
from typing import Any, Dict, Optional

from ..config import ServiceConfig
from ..constants import HEADER_LEARNING_OPT_OUT
from ..internal.transport.aiohttp_transport import AiohttpTransport
from ..internal.transport.base import Transport
from ..internal.types.options import ServiceOptions

logger = logging.getLogger(__name__)


class BaseService:
    """
    Общая часть клиентов сервисов.

    Настройки собираются один раз при создании: аргументы конструктора,
    затем переменные окружения, затем watson.toml. После этого
    ServiceOptions не изменяются - каждый вызов работает с копией.
    """

    name: str = None
    version: str = None
    DEFAULT_URL: str = None

    def __init__(
        self,
        url: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_unauthenticated: Optional[bool] = None,
        headers: Optional[Dict[str, Any]] = None,
        learning_opt_out: bool = False,
        transport: Optional[Transport] = None,
        config_path: Optional[str] = None,
    ) -> None:
        overrides = ServiceConfig(
            url=url,
            username=username,
            password=password,
            use_unauthenticated=use_unauthenticated,
            headers=dict(headers or {}),
        )
        if learning_opt_out:
            overrides.headers[HEADER_LEARNING_OPT_OUT] = True

        self._config = ServiceConfig.load(self.name, config_path).merge_with_args(overrides)
        self._options = self._config.to_options(self.DEFAULT_URL, qs=self._default_qs())
        self._transport = transport or AiohttpTransport()

        logger.debug(f"{self.name} {self.version} client for {self._options.url}")

    def _default_qs(self) -> Dict[str, Any]:
        return {}

    @property
    def options(self) -> ServiceOptions:
        return self._options

    @property
    def transport(self) -> Transport:
        return self._transport

    async def close(self):
        await self._transport.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._options.url}>"
