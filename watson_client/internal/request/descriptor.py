"""
Сборка описания запроса (descriptor) из настроек сервиса и параметров вызова
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import quote, urlencode

from ...constants import HEADER_CONTENT_TYPE, is_missing
from ...exceptions import TemplateExpansionError
from ..types.options import ServiceOptions, merge_mapping
from ..utils.params import clean_query, serialize_query_value, serialize_value
from .files import MultipartField, build_file_object

PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")

METHODS = ("GET", "POST", "PUT", "DELETE")


@dataclass(frozen=True)
class CallOptions:
    """Параметры одного вызова, которые накладываются на настройки сервиса"""

    method: str
    url: str
    path: Dict[str, Any] = field(default_factory=dict)
    qs: Dict[str, Any] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = None
    form_data: Optional[Dict[str, Any]] = None


@dataclass(frozen=True)
class RequestDescriptor:
    """Полностью собранный запрос, не зависящий от транспорта"""

    method: str
    url: str
    path: str
    query: Dict[str, str] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    json: Any = None
    data: Any = None
    form_data: Optional[Dict[str, MultipartField]] = None

    @property
    def query_string(self) -> str:
        return urlencode(self.query)

    @property
    def full_url(self) -> str:
        if not self.query:
            return self.url
        return f"{self.url}?{self.query_string}"

    @property
    def is_multipart(self) -> bool:
        return self.form_data is not None


def expand_path(template: str, path_params: Optional[Dict[str, Any]]) -> str:
    """
    Подставляет значения в плейсхолдеры {name} шаблона URL.

    Значения экранируются как сегмент пути: '/', '?', '#', пробелы и
    не-ASCII символы кодируются.

    Raises:
        TemplateExpansionError: плейсхолдер без значения

    Examples:
        >>> expand_path("/v1/collections/{collection_id}", {"collection_id": "a b"})
        '/v1/collections/a%20b'
    """
    path_params = path_params or {}

    def _substitute(match: "re.Match") -> str:
        key = match.group(1)
        value = path_params.get(key)
        if is_missing(value):
            raise TemplateExpansionError(key, template)
        return quote(str(serialize_value(value)), safe="")

    return PLACEHOLDER_RE.sub(_substitute, template)


def _prepare_form_data(form_data: Dict[str, Any]) -> Dict[str, MultipartField]:
    """Поля без данных не попадают в multipart тело"""
    prepared = {}
    for name, value in form_data.items():
        if not isinstance(value, MultipartField):
            value = build_file_object(value)
        if value is None or is_missing(value.data):
            continue
        prepared[name] = value
    return prepared


def _build_headers(defaults: ServiceOptions, call: CallOptions) -> Dict[str, str]:
    # Заголовки сравниваются без учета регистра, вызов побеждает
    call_keys = {key.lower() for key in call.headers}
    base = merge_mapping(defaults.auth_headers, defaults.headers)
    base = {k: v for k, v in base.items() if k.lower() not in call_keys}
    headers = merge_mapping(base, call.headers)
    return {
        k: serialize_query_value(v) for k, v in headers.items() if not is_missing(v)
    }


def build_request(defaults: ServiceOptions, call: CallOptions) -> RequestDescriptor:
    """
    Собирает RequestDescriptor из настроек сервиса и параметров вызова.

    Заголовки и query вызова накладываются поверх значений сервиса
    (при совпадении ключей побеждает вызов). Настройки сервиса не
    изменяются - каждый вызов получает свои словари.

    Raises:
        TemplateExpansionError: в шаблоне URL есть плейсхолдер без значения
        ValueError: неизвестный метод или одновременно body и form_data
    """
    method = call.method.upper()
    if method not in METHODS:
        raise ValueError(f"Unsupported HTTP method: {call.method}")

    has_body = not is_missing(call.body)
    if has_body and call.form_data is not None:
        raise ValueError("A request can not carry both a body and form data")

    path = expand_path(call.url, call.path)
    headers = _build_headers(defaults, call)
    query = clean_query(merge_mapping(defaults.qs, call.qs))

    json_body = None
    data = None
    form_data = None

    if call.form_data is not None:
        form_data = _prepare_form_data(call.form_data)
        # Boundary выставляет кодировщик транспорта
        headers = {
            k: v for k, v in headers.items() if k.lower() != HEADER_CONTENT_TYPE.lower()
        }
    elif has_body:
        content_type = next(
            (v for k, v in headers.items() if k.lower() == HEADER_CONTENT_TYPE.lower()),
            "",
        )
        if isinstance(call.body, (str, bytes)) and "json" not in content_type:
            data = call.body
        else:
            json_body = serialize_value(call.body)

    return RequestDescriptor(
        method=method,
        url=defaults.url.rstrip("/") + path,
        path=path,
        query=query,
        headers=headers,
        json=json_body,
        data=data,
        form_data=form_data,
    )
