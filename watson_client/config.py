"""
Конфигурация сервисов: файл watson.toml и переменные окружения
"""

import logging
import os
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Optional

import toml

from .constants import DEFAULT_CONFIG_FILE
from .internal.types.options import ServiceOptions

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class ServiceConfig:
    """Настройки подключения к одному сервису"""

    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    use_unauthenticated: Optional[bool] = None
    version_date: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_file(
        cls,
        service_name: str,
        config_path: str = DEFAULT_CONFIG_FILE,
        search_dir: str = None,
    ) -> Optional["ServiceConfig"]:
        """Загрузка секции сервиса из toml файла"""
        # Если указана директория для поиска, ищем конфиг там
        if search_dir and os.path.isdir(search_dir):
            config_in_dir = os.path.join(search_dir, DEFAULT_CONFIG_FILE)
            if os.path.exists(config_in_dir):
                config_path = config_in_dir

        if not os.path.exists(config_path):
            return None

        try:
            config_data = toml.load(config_path)
        except (toml.TomlDecodeError, OSError) as exc:
            logger.warning(f"Can't read config {config_path}: {exc}")
            return None

        section = config_data.get(service_name)
        if not isinstance(section, dict):
            return None

        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in section.items() if k in known})

    @classmethod
    def from_env(cls, service_name: str) -> "ServiceConfig":
        """Чтение LANGUAGE_TRANSLATOR_USERNAME, LANGUAGE_TRANSLATOR_PASSWORD и т.д."""
        prefix = service_name.upper()
        unauthenticated = os.environ.get(f"{prefix}_USE_UNAUTHENTICATED")

        return cls(
            url=os.environ.get(f"{prefix}_URL"),
            username=os.environ.get(f"{prefix}_USERNAME"),
            password=os.environ.get(f"{prefix}_PASSWORD"),
            use_unauthenticated=(
                unauthenticated.lower() in _TRUE_VALUES
                if unauthenticated is not None
                else None
            ),
            version_date=os.environ.get(f"{prefix}_VERSION_DATE"),
        )

    @classmethod
    def load(cls, service_name: str, config_path: str = None) -> "ServiceConfig":
        """Файл конфигурации, поверх него переменные окружения"""
        file_config = cls.from_file(service_name, config_path or DEFAULT_CONFIG_FILE)
        config = file_config or cls()
        return config.merge_with_args(cls.from_env(service_name))

    def save_to_file(self, service_name: str, config_path: str = DEFAULT_CONFIG_FILE) -> None:
        """Сохранение секции сервиса, остальные секции файла сохраняются"""
        config_data = {}
        if os.path.exists(config_path):
            config_data = toml.load(config_path)

        config_data[service_name] = {
            key: value for key, value in asdict(self).items() if value not in (None, {})
        }

        with open(config_path, "w") as f:
            toml.dump(config_data, f)

    def merge_with_args(self, args: Any) -> "ServiceConfig":
        """Объединение с аргументами: заданные значения args побеждают"""

        def _pick(name: str):
            value = getattr(args, name, None)
            return value if value is not None else getattr(self, name)

        return ServiceConfig(
            url=_pick("url"),
            username=_pick("username"),
            password=_pick("password"),
            use_unauthenticated=_pick("use_unauthenticated"),
            version_date=_pick("version_date"),
            headers={**self.headers, **(getattr(args, "headers", None) or {})},
        )

    def to_options(self, default_url: str, qs: Dict[str, Any] = None) -> ServiceOptions:
        return ServiceOptions(
            url=self.url or default_url,
            username=self.username,
            password=self.password,
            use_unauthenticated=bool(self.use_unauthenticated),
            headers=dict(self.headers),
            qs=dict(qs or {}),
        )
