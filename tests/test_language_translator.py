"""
Тесты клиента Language Translator v2
"""

import io
import json

import pytest

from conftest import FakeTransport, make_response
from watson_client.exceptions import MissingParamsError
from watson_client.internal.request.dispatcher import ResponseStream
from watson_client.language_translator import LanguageTranslatorV2, TranslationResult

URL = "https://watson.test/language-translator/api"


def make_service(transport, **kwargs):
    params = {"url": URL, "username": "user", "password": "pass", "transport": transport}
    params.update(kwargs)
    return LanguageTranslatorV2(**params)


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, error, body, response):
        self.calls.append((error, body, response))


class TestConstruction:
    """Тесты создания клиента"""

    def test_default_url(self, transport):
        service = LanguageTranslatorV2(username="user", password="pass", transport=transport)
        assert service.options.url == LanguageTranslatorV2.DEFAULT_URL

    def test_credentials_required(self, transport):
        with pytest.raises(ValueError):
            LanguageTranslatorV2(transport=transport)

    def test_unauthenticated(self, transport):
        service = LanguageTranslatorV2(use_unauthenticated=True, transport=transport)
        assert service.options.auth_headers == {}

    def test_credentials_from_env(self, transport, monkeypatch):
        monkeypatch.setenv("LANGUAGE_TRANSLATOR_USERNAME", "env-user")
        monkeypatch.setenv("LANGUAGE_TRANSLATOR_PASSWORD", "env-pass")

        service = LanguageTranslatorV2(transport=transport)

        assert service.options.username == "env-user"

    def test_arguments_win_over_env(self, transport, monkeypatch):
        monkeypatch.setenv("LANGUAGE_TRANSLATOR_USERNAME", "env-user")
        monkeypatch.setenv("LANGUAGE_TRANSLATOR_PASSWORD", "env-pass")

        service = LanguageTranslatorV2(username="arg-user", transport=transport)

        assert service.options.username == "arg-user"
        assert service.options.password == "env-pass"

    @pytest.mark.asyncio
    async def test_context_manager_closes_transport(self, transport):
        async with make_service(transport):
            pass
        assert transport.closed


class TestTranslate:
    """Тесты перевода"""

    @pytest.mark.asyncio
    async def test_translate(self):
        transport = FakeTransport(
            make_response(
                200,
                {
                    "word_count": 1,
                    "character_count": 5,
                    "translations": [{"translation": "Hola"}],
                },
            )
        )
        callback = Recorder()

        await make_service(transport).translate(
            text="Hello", source="en", target="es", callback=callback
        )

        descriptor = transport.requests[0]
        assert descriptor.method == "POST"
        assert descriptor.url == f"{URL}/v2/translate"
        assert descriptor.json == {"text": ["Hello"], "source": "en", "target": "es"}
        assert descriptor.headers["Content-Type"] == "application/json"
        assert descriptor.headers["Accept"] == "application/json"
        assert descriptor.headers["Authorization"].startswith("Basic ")

        error, body, response = callback.calls[0]
        assert error is None
        assert isinstance(body, TranslationResult)
        assert body.translations[0].text == "Hola"

    @pytest.mark.asyncio
    async def test_translate_paragraphs_with_model(self):
        transport = FakeTransport()

        await make_service(transport).translate(
            text=["one", "two"], model_id="en-es", callback=Recorder()
        )

        assert transport.requests[0].json == {"text": ["one", "two"], "model_id": "en-es"}

    @pytest.mark.asyncio
    async def test_missing_text_reported_through_callback(self):
        transport = FakeTransport()
        callback = Recorder()

        future = make_service(transport).translate(source="en", callback=callback)
        assert callback.calls == []
        await future

        error, body, response = callback.calls[0]
        assert isinstance(error, MissingParamsError)
        assert error.missing == ["text"]
        assert transport.requests == []

    def test_missing_text_raises_without_callback(self, transport):
        with pytest.raises(MissingParamsError):
            make_service(transport).translate(source="en")
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_empty_text_is_sent(self):
        transport = FakeTransport()

        await make_service(transport).translate(text="", callback=Recorder())

        assert transport.requests[0].json == {"text": [""]}

    @pytest.mark.asyncio
    async def test_per_call_headers(self):
        transport = FakeTransport()
        service = make_service(transport, headers={"X-Custom": "service"})

        await service.translate(
            text="Hi", headers={"x-custom": "call"}, callback=Recorder()
        )

        headers = transport.requests[0].headers
        assert headers["x-custom"] == "call"
        assert "X-Custom" not in headers
        assert service.options.headers == {"X-Custom": "service"}

    @pytest.mark.asyncio
    async def test_per_call_headers_replace_method_defaults(self):
        """Заголовки вызова в нижнем регистре заменяют Accept и Content-Type метода"""
        transport = FakeTransport()

        await make_service(transport).identify(
            text="hi",
            headers={"accept": "text/html", "content-type": "application/json"},
            callback=Recorder(),
        )

        descriptor = transport.requests[0]
        assert [k for k in descriptor.headers if k.lower() == "accept"] == ["accept"]
        assert [k for k in descriptor.headers if k.lower() == "content-type"] == ["content-type"]
        assert descriptor.headers["accept"] == "text/html"
        assert descriptor.json == "hi"
        assert descriptor.data is None

    @pytest.mark.asyncio
    async def test_learning_opt_out(self):
        transport = FakeTransport()

        await make_service(transport, learning_opt_out=True).translate(
            text="Hi", callback=Recorder()
        )

        assert transport.requests[0].headers["X-Watson-Learning-Opt-Out"] == "true"

    @pytest.mark.asyncio
    async def test_stream_mode(self):
        transport = FakeTransport(make_response(200, {"translations": []}))

        stream = make_service(transport).translate(text="Hi")
        assert isinstance(stream, ResponseStream)

        async with stream:
            assert json.loads(await stream.read()) == {"translations": []}


class TestIdentify:
    """Тесты определения языка"""

    @pytest.mark.asyncio
    async def test_identify(self):
        transport = FakeTransport(
            make_response(200, {"languages": [{"language": "es", "confidence": 0.98}]})
        )
        callback = Recorder()

        await make_service(transport).identify(text="Hola mundo", callback=callback)

        descriptor = transport.requests[0]
        assert descriptor.url == f"{URL}/v2/identify"
        assert descriptor.data == "Hola mundo"
        assert descriptor.json is None
        assert descriptor.headers["Content-Type"] == "text/plain"
        assert callback.calls[0][1].languages[0].language == "es"

    @pytest.mark.asyncio
    async def test_list_identifiable_languages(self):
        transport = FakeTransport()

        await make_service(transport).list_identifiable_languages(callback=Recorder())

        descriptor = transport.requests[0]
        assert descriptor.method == "GET"
        assert descriptor.path == "/v2/identifiable_languages"


class TestModels:
    """Тесты работы с моделями"""

    @pytest.mark.asyncio
    async def test_create_model(self):
        transport = FakeTransport()
        glossary = io.BytesIO(b"<tmx/>")
        glossary.name = "glossary.tmx"

        await make_service(transport).create_model(
            base_model_id="en-fr",
            name="custom",
            forced_glossary=glossary,
            monolingual_corpus="bonjour",
            callback=Recorder(),
        )

        descriptor = transport.requests[0]
        assert descriptor.method == "POST"
        assert descriptor.query == {"base_model_id": "en-fr", "name": "custom"}
        assert set(descriptor.form_data) == {"forced_glossary", "monolingual_corpus"}
        assert descriptor.form_data["forced_glossary"].data is glossary
        assert descriptor.form_data["forced_glossary"].filename == "glossary.tmx"
        assert descriptor.form_data["monolingual_corpus"].content_type == "text/plain"
        assert "Content-Type" not in descriptor.headers

    def test_create_model_requires_base_model(self, transport):
        with pytest.raises(MissingParamsError) as exc_info:
            make_service(transport).create_model(name="custom")
        assert exc_info.value.missing == ["base_model_id"]

    @pytest.mark.asyncio
    async def test_get_and_delete_model(self):
        transport = FakeTransport(
            make_response(200, {"model_id": "a/b", "status": "available"}),
            make_response(200, {"status": "OK"}),
        )
        callback = Recorder()
        service = make_service(transport)

        await service.get_model(model_id="a/b", callback=callback)
        await service.delete_model("a/b", callback=callback)

        assert [d.method for d in transport.requests] == ["GET", "DELETE"]
        assert transport.requests[0].path == "/v2/models/a%2Fb"
        assert callback.calls[0][1].status == "available"
        assert callback.calls[1][1].status == "OK"

    @pytest.mark.asyncio
    async def test_list_models_default_flag(self):
        transport = FakeTransport()

        await make_service(transport).list_models(
            source="en", default_models=False, callback=Recorder()
        )

        descriptor = transport.requests[0]
        assert descriptor.query == {"source": "en", "default": "false"}
        assert descriptor.headers["Content-Type"] == "application/x-www-form-urlencoded"

    def test_unknown_argument_raises(self, transport):
        with pytest.raises(TypeError):
            make_service(transport).list_models(unknown=True, callback=Recorder())
