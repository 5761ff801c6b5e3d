"""
Асинхронный клиент сервисов Watson: Language Translator v2 и Discovery v1
"""

from .config import ServiceConfig
from .constants import NOTSET
from .discovery import DiscoveryV1
from .exceptions import (
    MissingParamsError,
    RemoteError,
    SendRequestError,
    TemplateExpansionError,
    TransportError,
    WatsonClientError,
)
from .internal.request.descriptor import CallOptions, RequestDescriptor, build_request, expand_path
from .internal.request.dispatcher import ResponseStream, create_request
from .internal.request.files import MultipartField, build_file_object
from .internal.transport.aiohttp_transport import AiohttpTransport
from .internal.transport.httpx_transport import HttpxTransport
from .internal.types.options import ServiceOptions
from .internal.utils.params import get_missing_params
from .language_translator import LanguageTranslatorV2

__version__ = "0.1.0"

__all__ = [
    "AiohttpTransport",
    "CallOptions",
    "DiscoveryV1",
    "HttpxTransport",
    "LanguageTranslatorV2",
    "MissingParamsError",
    "MultipartField",
    "NOTSET",
    "RemoteError",
    "RequestDescriptor",
    "ResponseStream",
    "SendRequestError",
    "ServiceConfig",
    "ServiceOptions",
    "TemplateExpansionError",
    "TransportError",
    "WatsonClientError",
    "build_file_object",
    "build_request",
    "create_request",
    "expand_path",
    "get_missing_params",
]
