"""Утилиты для работы с параметрами запросов"""

import base64
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ...constants import is_missing


def get_missing_params(
    params: Optional[Mapping[str, Any]], required: Iterable[str]
) -> List[str]:
    """
    Возвращает обязательные параметры, которых нет в params.

    Отсутствующим считается только ключ, которого нет, или значение
    None/NOTSET. Пустая строка, 0 и False - переданные значения.

    Args:
        params: Параметры вызова (None равносилен пустому словарю)
        required: Упорядоченный список обязательных имен

    Returns:
        Имена отсутствующих параметров в порядке required

    Examples:
        >>> get_missing_params({"text": ""}, ["text"])
        []
        >>> get_missing_params(None, ["model_id", "text"])
        ['model_id', 'text']
    """
    params = params or {}
    return [name for name in required if is_missing(params.get(name))]


def serialize_value(value: Any) -> Any:
    """Рекурсивная сериализация значений для JSON"""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, bool):
        return value
    elif isinstance(value, bytes):
        return base64.b64encode(value).decode("utf-8")
    elif isinstance(value, dict):
        return {
            k: serialize_value(v) for k, v in value.items() if not is_missing(v)
        }
    elif isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    elif hasattr(value, "model_dump"):
        return serialize_value(value.model_dump(exclude_none=True))
    else:
        return value


def serialize_query_value(value: Any) -> str:
    """Сериализация query параметра в строку"""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    elif isinstance(value, Enum):
        return str(value.value)
    elif isinstance(value, bool):
        # Boolean значения для query параметров должны быть строками
        return str(value).lower()
    elif isinstance(value, (list, tuple, set)):
        return ",".join(serialize_query_value(item) for item in value)
    else:
        return str(value)


def clean_query(query: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Убирает незаданные значения и приводит остальные к строкам"""
    if not query:
        return {}
    return {
        key: serialize_query_value(value)
        for key, value in query.items()
        if not is_missing(value)
    }


def pick_params(
    params: Mapping[str, Any],
    names: Iterable[str],
    field_mapping: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """
    Выбирает из params заданные поля, переименовывая их по field_mapping.

    Незаданные значения пропускаются.
    """
    field_mapping = field_mapping or {}
    result = {}
    for name in names:
        value = params.get(name)
        if is_missing(value):
            continue
        result[field_mapping.get(name, name)] = value
    return result
