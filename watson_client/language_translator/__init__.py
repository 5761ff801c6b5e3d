from .models import (
    DeleteModelResult,
    IdentifiableLanguage,
    IdentifiableLanguages,
    IdentifiedLanguage,
    IdentifiedLanguages,
    Translation,
    TranslationModel,
    TranslationModels,
    TranslationResult,
)
from .v2 import LanguageTranslatorV2

__all__ = [
    "LanguageTranslatorV2",
    "DeleteModelResult",
    "IdentifiableLanguage",
    "IdentifiableLanguages",
    "IdentifiedLanguage",
    "IdentifiedLanguages",
    "Translation",
    "TranslationModel",
    "TranslationModels",
    "TranslationResult",
]
