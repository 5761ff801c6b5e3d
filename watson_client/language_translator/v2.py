"""
Language Translator v2: перевод текста, определение языка и кастомные модели
"""

from typing import BinaryIO, List, Union

from ..constants import (
    CONTENT_TYPE_FORM,
    CONTENT_TYPE_JSON,
    CONTENT_TYPE_OCTET_STREAM,
    CONTENT_TYPE_TEXT,
    NOTSET,
)
from ..service.base_service import BaseService
from ..service.decorators import delete, get, post
from .models import (
    DeleteModelResult,
    IdentifiableLanguages,
    IdentifiedLanguages,
    TranslationModel,
    TranslationModels,
    TranslationResult,
)

FileData = Union[bytes, str, dict, list, BinaryIO]


class LanguageTranslatorV2(BaseService):
    """
    Клиент Language Translator v2.

    Каждый метод либо вызывает callback(error, body, response) и
    возвращает asyncio.Task, либо без callback возвращает ResponseStream.
    """

    name = "language_translator"
    version = "v2"
    DEFAULT_URL = "https://gateway.watsonplatform.net/language-translator/api"

    # translate

    @post(
        "/v2/translate",
        required=["text"],
        body=["text", "model_id", "source", "target"],
        content_type=CONTENT_TYPE_JSON,
        response_model=TranslationResult,
    )
    def translate(
        self,
        text: Union[str, List[str]] = NOTSET,
        model_id: str = NOTSET,
        source: str = NOTSET,
        target: str = NOTSET,
    ):
        """
        Перевод текста с языка source на язык target.

        text - строка или список абзацев. model_id задает исходный язык,
        целевой язык и домен; если он указан, source и target игнорируются
        сервисом.
        """
        if isinstance(text, str):
            return {"text": [text]}

    @post(
        "/v2/identify",
        required=["text"],
        whole_body="text",
        content_type=CONTENT_TYPE_TEXT,
        response_model=IdentifiedLanguages,
    )
    def identify(self, text: str = NOTSET):
        """Определение языка текста"""

    @get("/v2/identifiable_languages", response_model=IdentifiableLanguages)
    def list_identifiable_languages(self):
        """Языки, которые сервис умеет определять (двухбуквенный код и название)"""

    # models

    @post(
        "/v2/models",
        required=["base_model_id"],
        query=["base_model_id", "name"],
        form={
            "forced_glossary": CONTENT_TYPE_OCTET_STREAM,
            "parallel_corpus": CONTENT_TYPE_OCTET_STREAM,
            "monolingual_corpus": CONTENT_TYPE_TEXT,
        },
        response_model=TranslationModel,
    )
    def create_model(
        self,
        base_model_id: str = NOTSET,
        name: str = NOTSET,
        forced_glossary: FileData = NOTSET,
        parallel_corpus: FileData = NOTSET,
        monolingual_corpus: FileData = NOTSET,
    ):
        """
        Кастомизация модели перевода поверх доменной модели base_model_id.

        forced_glossary - TMX глоссарий, полностью перекрывающий перевод
        домена; parallel_corpus - TMX параллельный корпус;
        monolingual_corpus - текст UTF-8 на целевом языке.
        """

    @delete("/v2/models/{model_id}", required=["model_id"], response_model=DeleteModelResult)
    def delete_model(self, model_id: str = NOTSET):
        """Удаление кастомной модели"""

    @get("/v2/models/{model_id}", required=["model_id"], response_model=TranslationModel)
    def get_model(self, model_id: str = NOTSET):
        """Информация о модели, включая статус обучения"""

    @get(
        "/v2/models",
        query=["source", "target", "default_models"],
        field_mapping={"default_models": "default"},
        content_type=CONTENT_TYPE_FORM,
        response_model=TranslationModels,
    )
    def list_models(
        self,
        source: str = NOTSET,
        target: str = NOTSET,
        default_models: bool = NOTSET,
    ):
        """
        Стандартные и кастомные модели с фильтром по языкам.

        default_models=True оставляет только модели по умолчанию, False -
        только остальные, без значения - все.
        """
