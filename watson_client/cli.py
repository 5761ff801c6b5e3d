import argparse
import asyncio
import json
import sys
from typing import Any

from watson_client.config import ServiceConfig
from watson_client.constants import DEFAULT_CONFIG_FILE
from watson_client.discovery import DiscoveryV1
from watson_client.exceptions import WatsonClientError
from watson_client.language_translator import LanguageTranslatorV2


def _to_jsonable(body: Any) -> Any:
    if hasattr(body, "model_dump"):
        return body.model_dump(exclude_none=True)
    if isinstance(body, list):
        return [_to_jsonable(item) for item in body]
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def init_config(config_path: str = DEFAULT_CONFIG_FILE):
    """Создание watson.toml с секциями обоих сервисов"""
    ServiceConfig(
        url=LanguageTranslatorV2.DEFAULT_URL, username="", password=""
    ).save_to_file(LanguageTranslatorV2.name, config_path)
    ServiceConfig(
        url=DiscoveryV1.DEFAULT_URL,
        username="",
        password="",
        version_date=DiscoveryV1.VERSION_DATE_2017_09_01,
    ).save_to_file(DiscoveryV1.name, config_path)


async def _run_call(service, method_name: str, **kwargs) -> Any:
    """Вызов метода сервиса через callback с ожиданием результата"""
    result = {}

    def callback(error, body, response):
        result["error"] = error
        result["body"] = body

    async with service:
        await getattr(service, method_name)(callback=callback, **kwargs)

    if result["error"] is not None:
        raise result["error"]
    return result["body"]


def _build_service(args):
    if args.command in ("translate", "identify", "list-models"):
        return LanguageTranslatorV2(config_path=args.config)
    return DiscoveryV1(config_path=args.config, version_date=args.version_date)


def _command_call(args):
    if args.command == "translate":
        return "translate", {
            "text": args.text,
            "source": args.source,
            "target": args.target,
            "model_id": args.model_id,
        }
    elif args.command == "identify":
        return "identify", {"text": args.text}
    elif args.command == "list-models":
        return "list_models", {"source": args.source, "target": args.target}
    return "query", {
        "environment_id": args.environment_id,
        "collection_id": args.collection_id,
        "natural_language_query": args.natural_language_query,
        "query": args.query,
        "count": args.count,
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Клиент сервисов Watson")
    parser.add_argument(
        "--config", type=str, default=DEFAULT_CONFIG_FILE, help="Путь к watson.toml"
    )
    parser.add_argument(
        "--init-config", action="store_true", help="Создать конфиг файл watson.toml"
    )

    subparsers = parser.add_subparsers(dest="command")

    translate = subparsers.add_parser("translate", help="Перевод текста")
    translate.add_argument("text", type=str)
    translate.add_argument("--source", type=str)
    translate.add_argument("--target", type=str)
    translate.add_argument("--model-id", type=str)

    identify = subparsers.add_parser("identify", help="Определение языка")
    identify.add_argument("text", type=str)

    list_models = subparsers.add_parser("list-models", help="Список моделей перевода")
    list_models.add_argument("--source", type=str)
    list_models.add_argument("--target", type=str)

    query = subparsers.add_parser("query", help="Поиск по коллекции Discovery")
    query.add_argument("environment_id", type=str)
    query.add_argument("collection_id", type=str)
    query.add_argument("--natural-language-query", type=str)
    query.add_argument("--query", type=str)
    query.add_argument("--count", type=int)
    query.add_argument("--version-date", type=str)

    return parser


def main(argv=None):
    """Точка входа watson-client"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.init_config:
        init_config(args.config)
        print(f"✅ Создан конфиг файл {args.config}")
        return

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        service = _build_service(args)
        method_name, kwargs = _command_call(args)
        body = asyncio.run(_run_call(service, method_name, **kwargs))
    except (WatsonClientError, ValueError) as e:
        print(f"❌ Ошибка: {e}")
        sys.exit(1)

    print(json.dumps(_to_jsonable(body), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
