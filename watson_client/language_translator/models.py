from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class TranslatorModel(BaseModel):
    # Новые поля ответов сервиса не теряются
    model_config = ConfigDict(extra="allow", protected_namespaces=())


class DeleteModelResult(TranslatorModel):
    status: str


class IdentifiableLanguage(TranslatorModel):
    language: str
    name: str


class IdentifiableLanguages(TranslatorModel):
    languages: List[IdentifiableLanguage]


class IdentifiedLanguage(TranslatorModel):
    language: str
    confidence: float


class IdentifiedLanguages(TranslatorModel):
    languages: List[IdentifiedLanguage]


class Translation(TranslatorModel):
    translation_output: Optional[str] = None

    # Сервис отдает перевод в поле "translation"
    translation: Optional[str] = None

    @property
    def text(self) -> Optional[str]:
        return self.translation if self.translation is not None else self.translation_output


class TranslationModel(TranslatorModel):
    model_id: str
    name: Optional[str] = None
    source: Optional[str] = None
    target: Optional[str] = None
    base_model_id: Optional[str] = None
    domain: Optional[str] = None
    customizable: Optional[bool] = None
    default_model: Optional[bool] = None
    owner: Optional[str] = None
    status: Optional[str] = None


class TranslationModels(TranslatorModel):
    models: List[TranslationModel]


class TranslationResult(TranslatorModel):
    word_count: int
    character_count: int
    translations: List[Translation]
