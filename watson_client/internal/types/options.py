import base64
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, model_validator

from ...constants import HEADER_AUTHORIZATION


def merge_mapping(
    base: Optional[Mapping[str, Any]], overlay: Optional[Mapping[str, Any]]
) -> Dict[str, Any]:
    """Новый словарь: ключи overlay поверх ключей base, base не изменяется"""
    merged = dict(base or {})
    merged.update(overlay or {})
    return merged


class ServiceOptions(BaseModel):
    """Неизменяемые настройки сервиса: URL, авторизация, заголовки и query по умолчанию"""

    model_config = ConfigDict(frozen=True)

    url: str
    username: Optional[str] = None
    password: Optional[str] = None
    use_unauthenticated: bool = False
    headers: Dict[str, Any] = {}
    qs: Dict[str, Any] = {}

    @model_validator(mode="after")
    def check_credentials(self) -> "ServiceOptions":
        if not self.url:
            raise ValueError("Argument error: url is empty")
        if not self.use_unauthenticated and not (self.username and self.password):
            raise ValueError(
                "Argument error: username and password are required "
                "unless use_unauthenticated is set"
            )
        if not self.use_unauthenticated and ":" in self.username:
            raise ValueError("Argument error: username can not contain ':'")
        return self

    @property
    def auth_headers(self) -> Dict[str, str]:
        if self.use_unauthenticated:
            return {}
        credentials = f"{self.username}:{self.password}".encode("utf-8")
        token = base64.b64encode(credentials).decode("ascii")
        return {HEADER_AUTHORIZATION: f"Basic {token}"}

    def merge(
        self,
        headers: Optional[Mapping[str, str]] = None,
        qs: Optional[Mapping[str, Any]] = None,
    ) -> "ServiceOptions":
        """Наложение заголовков и query поверх текущих значений, возвращает новый объект"""
        return self.model_copy(
            update={
                "headers": merge_mapping(self.headers, headers),
                "qs": merge_mapping(self.qs, qs),
            }
        )
