from enum import Enum


class Size(int, Enum):
    ONE = 1
    TWO = 2
    THREE = 3


class Step(str, Enum):
    HTML_INPUT = "html_input"
    HTML_OUTPUT = "html_output"
    JSON_OUTPUT = "json_output"
    JSON_NORMALIZATIONS_OUTPUT = "json_normalizations_output"
    ENRICHMENTS_OUTPUT = "enrichments_output"
    NORMALIZATIONS_OUTPUT = "normalizations_output"


class FileContentType(str, Enum):
    APPLICATION_JSON = "application/json"
    APPLICATION_MSWORD = "application/msword"
    APPLICATION_VND_OPENXMLFORMATS_OFFICEDOCUMENT_WORDPROCESSINGML_DOCUMENT = (
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    )
    APPLICATION_PDF = "application/pdf"
    TEXT_HTML = "text/html"
    APPLICATION_XHTML_XML = "application/xhtml+xml"


class Language(str, Enum):
    EN = "en"
    ES = "es"
    DE = "de"
    AR = "ar"
    FR = "fr"
    IT = "it"
    JA = "ja"
    KO = "ko"
    PT_BR = "pt-br"
