from typing import Any


class _NotSetType:
    def __repr__(self) -> str:
        return "NOTSET"

    def __bool__(self) -> bool:
        return False


NOTSET = _NotSetType()


def is_missing(value: Any) -> bool:
    """Значение отсутствует: None или NOTSET (пустые строки, 0 и False - нет)"""
    return value is None or value is NOTSET


DEFAULT_CONFIG_FILE = "watson.toml"

HEADER_ACCEPT = "Accept"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_AUTHORIZATION = "Authorization"
HEADER_LEARNING_OPT_OUT = "X-Watson-Learning-Opt-Out"

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_TEXT = "text/plain"
CONTENT_TYPE_OCTET_STREAM = "application/octet-stream"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"
