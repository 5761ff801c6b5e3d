"""
HTTP декораторы для методов сервисов
"""

import inspect
from functools import wraps
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, TypeVar

from ..constants import CONTENT_TYPE_JSON, HEADER_ACCEPT, HEADER_CONTENT_TYPE, is_missing
from ..exceptions import MissingParamsError
from ..internal.request.descriptor import PLACEHOLDER_RE, CallOptions, build_request
from ..internal.request.dispatcher import create_request, report_error
from ..internal.request.files import MultipartField, build_file_object
from ..internal.utils.params import get_missing_params, pick_params

DecoratedCallable = TypeVar("DecoratedCallable", bound=Callable[..., Any])


def _prepare_form(
    params: Mapping[str, Any], form: Mapping[str, Optional[str]]
) -> Dict[str, MultipartField]:
    """Части multipart тела: имя параметра -> MIME тип части"""
    form_data = {}
    for name, content_type in form.items():
        value = params.get(name)
        if is_missing(value):
            continue
        form_data[name] = build_file_object(value, content_type)
    return form_data


def http_method(
    method: str,
    path: str,
    required: Iterable[str] = (),
    query: Iterable[str] = (),
    body: Optional[Iterable[str]] = None,
    whole_body: Optional[str] = None,
    form: Optional[Mapping[str, Optional[str]]] = None,
    field_mapping: Optional[Mapping[str, str]] = None,
    accept: Optional[str] = CONTENT_TYPE_JSON,
    content_type: Optional[str] = None,
    response_model=None,
) -> Callable[[DecoratedCallable], DecoratedCallable]:
    """
    Базовый декоратор для методов сервиса.

    Аргументы метода раскладываются по частям запроса: path параметры
    берутся из плейсхолдеров шаблона, остальные - по спискам query, body
    и form. Тело декорируемой функции может вернуть словарь с
    нормализованными значениями параметров.

    Каждый метод дополнительно принимает keyword-only аргументы callback
    и headers (заголовки поверх настроек сервиса).
    """
    required = tuple(required)
    query = tuple(query)
    path_keys = tuple(PLACEHOLDER_RE.findall(path))

    def decorator(func: DecoratedCallable) -> DecoratedCallable:
        sig = inspect.signature(func)

        @wraps(func)
        def wrapper(self, *args, callback=None, headers=None, **kwargs):
            bound_args = sig.bind(self, *args, **kwargs)
            bound_args.apply_defaults()

            params = dict(bound_args.arguments)
            params.pop("self")

            missing = get_missing_params(params, required)
            if missing:
                error = MissingParamsError(missing)
                if callback is None:
                    raise error
                return report_error(callback, error)

            updates = func(*bound_args.args, **bound_args.kwargs)
            if updates:
                params.update(updates)

            call_headers = {}
            if accept:
                call_headers[HEADER_ACCEPT] = accept
            if content_type:
                call_headers[HEADER_CONTENT_TYPE] = content_type
            if headers:
                # Заголовки вызова заменяют значения метода без учета регистра
                overridden = {key.lower() for key in headers}
                call_headers = {
                    k: v for k, v in call_headers.items() if k.lower() not in overridden
                }
                call_headers.update(headers)

            if whole_body is not None:
                request_body = params.get(whole_body)
            elif body is not None:
                request_body = pick_params(params, body, field_mapping)
            else:
                request_body = None

            call = CallOptions(
                method=method,
                url=path,
                path={key: params.get(key) for key in path_keys},
                qs=pick_params(params, query, field_mapping),
                headers=call_headers,
                body=request_body,
                form_data=_prepare_form(params, form) if form is not None else None,
            )
            descriptor = build_request(self._options, call)

            return create_request(
                self._transport, descriptor, callback, response_model=response_model
            )

        # Сохраняем метаданные для отладки
        wrapper._http_method = method
        wrapper._http_path = path
        wrapper._required = required
        wrapper._response_model = response_model
        wrapper._original_func = func

        return wrapper

    return decorator


def get(path: str, **kwargs) -> Callable[[DecoratedCallable], DecoratedCallable]:
    return http_method("GET", path, **kwargs)


def post(path: str, **kwargs) -> Callable[[DecoratedCallable], DecoratedCallable]:
    return http_method("POST", path, **kwargs)


def put(path: str, **kwargs) -> Callable[[DecoratedCallable], DecoratedCallable]:
    return http_method("PUT", path, **kwargs)


def delete(path: str, **kwargs) -> Callable[[DecoratedCallable], DecoratedCallable]:
    return http_method("DELETE", path, **kwargs)
