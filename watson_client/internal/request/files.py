"""Подготовка частей multipart тела"""

import json
import os
from dataclasses import dataclass
from typing import Any, Optional

from ...constants import CONTENT_TYPE_JSON, CONTENT_TYPE_OCTET_STREAM, is_missing


@dataclass(frozen=True)
class MultipartField:
    """
    Одна часть multipart тела.

    data - bytes, строка или файловый объект. Файловый объект не
    вычитывается заранее: его читает кодировщик транспорта при отправке.
    """

    data: Any
    content_type: Optional[str] = CONTENT_TYPE_OCTET_STREAM
    filename: Optional[str] = None

    @property
    def is_stream(self) -> bool:
        return hasattr(self.data, "read")


def _guess_filename(data: Any) -> Optional[str]:
    name = getattr(data, "name", None)
    if isinstance(name, (str, bytes)) and name:
        name = os.fsdecode(name)
        # Псевдоимена вроде <stdin> не являются именами файлов
        if not (name.startswith("<") and name.endswith(">")):
            return os.path.basename(name)
    return None


def build_file_object(
    data: Any, content_type: Optional[str] = None, filename: Optional[str] = None
) -> Optional[MultipartField]:
    """
    Собирает часть multipart тела из файлового объекта, bytes или структуры.

    Args:
        data: Файловый объект, bytes/bytearray, dict/list или строка
        content_type: MIME тип части
        filename: Имя файла (по умолчанию берется из data.name)

    Returns:
        MultipartField или None, если данных нет
    """
    if is_missing(data):
        return None

    if isinstance(data, MultipartField):
        return data

    if hasattr(data, "read"):
        return MultipartField(
            data=data,
            content_type=content_type or CONTENT_TYPE_OCTET_STREAM,
            filename=filename or _guess_filename(data),
        )

    if isinstance(data, (bytes, bytearray)):
        return MultipartField(
            data=bytes(data),
            content_type=content_type or CONTENT_TYPE_OCTET_STREAM,
            filename=filename,
        )

    if isinstance(data, (dict, list)):
        return MultipartField(
            data=json.dumps(data),
            content_type=content_type or CONTENT_TYPE_JSON,
            filename=filename,
        )

    # Строка без типа уходит обычным полем формы
    return MultipartField(
        data=str(data),
        content_type=content_type,
        filename=filename,
    )
