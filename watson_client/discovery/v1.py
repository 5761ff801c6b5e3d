"""
Discovery v1: окружения, конфигурации, коллекции, документы, поиск и обучение
"""

import json
from typing import Any, BinaryIO, Dict, List, Optional, Union

from ..constants import CONTENT_TYPE_JSON, NOTSET, is_missing
from ..internal.request.files import build_file_object
from ..service.base_service import BaseService
from ..service.decorators import delete, get, post, put
from . import models
from .enums import FileContentType, Language, Size, Step

FileData = Union[bytes, str, dict, list, BinaryIO]

QUERY_FIELDS = [
    "filter",
    "query",
    "natural_language_query",
    "passages",
    "aggregation",
    "count",
    "return_fields",
    "offset",
    "sort",
    "highlight",
    "passages_fields",
    "passages_count",
    "passages_characters",
    "deduplicate",
    "deduplicate_field",
]

FEDERATED_QUERY_FIELDS = [
    "collection_ids",
    "filter",
    "query",
    "natural_language_query",
    "aggregation",
    "count",
    "return_fields",
    "offset",
    "sort",
    "highlight",
    "deduplicate",
    "deduplicate_field",
]


def _json_field(value: Any) -> Any:
    """Структурированные значения формы уходят JSON строкой"""
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return value


def _document_form(file: Any, file_content_type: Any, metadata: Any) -> Dict[str, Any]:
    content_type = None if is_missing(file_content_type) else file_content_type
    if hasattr(content_type, "value"):
        content_type = content_type.value
    return {
        "file": build_file_object(file, content_type),
        "metadata": _json_field(metadata),
    }


class DiscoveryV1(BaseService):
    """
    Клиент Discovery v1.

    Все запросы получают query параметр version со значением version_date.
    """

    name = "discovery"
    version = "v1"
    DEFAULT_URL = "https://gateway.watsonplatform.net/discovery/api"

    VERSION_DATE_2017_09_01 = "2017-09-01"
    VERSION_DATE_2017_08_01 = "2017-08-01"
    VERSION_DATE_2017_07_19 = "2017-07-19"
    VERSION_DATE_2017_06_25 = "2017-06-25"
    VERSION_DATE_2016_12_01 = "2016-12-01"

    Size = Size
    Step = Step
    FileContentType = FileContentType
    Language = Language

    def __init__(self, version_date: Optional[str] = None, **kwargs) -> None:
        self._version_date = version_date
        super().__init__(**kwargs)

    def _default_qs(self) -> Dict[str, Any]:
        version_date = self._version_date or self._config.version_date
        if not version_date:
            raise ValueError(
                "Argument error: version_date was not specified, "
                "use DiscoveryV1.VERSION_DATE_2017_09_01"
            )
        return {"version": version_date}

    # environments

    @post(
        "/v1/environments",
        required=["name"],
        body=["name", "description", "size"],
        content_type=CONTENT_TYPE_JSON,
        response_model=models.Environment,
    )
    def create_environment(
        self,
        name: str = NOTSET,
        description: str = NOTSET,
        size: Union[Size, int] = NOTSET,
    ):
        """Создание окружения. В одном экземпляре сервиса может быть только одно окружение"""

    @delete(
        "/v1/environments/{environment_id}",
        required=["environment_id"],
        response_model=models.DeleteEnvironmentResponse,
    )
    def delete_environment(self, environment_id: str = NOTSET):
        pass

    @get(
        "/v1/environments/{environment_id}",
        required=["environment_id"],
        response_model=models.Environment,
    )
    def get_environment(self, environment_id: str = NOTSET):
        pass

    @get(
        "/v1/environments",
        query=["name"],
        response_model=models.ListEnvironmentsResponse,
    )
    def list_environments(self, name: str = NOTSET):
        """Список окружений, name - точное совпадение имени"""

    @get(
        "/v1/environments/{environment_id}/fields",
        required=["environment_id", "collection_ids"],
        query=["collection_ids"],
        response_model=models.ListCollectionFieldsResponse,
    )
    def list_fields(self, environment_id: str = NOTSET, collection_ids: List[str] = NOTSET):
        """Объединенный список полей нескольких коллекций окружения"""

    @put(
        "/v1/environments/{environment_id}",
        required=["environment_id"],
        body=["name", "description"],
        content_type=CONTENT_TYPE_JSON,
        response_model=models.Environment,
    )
    def update_environment(
        self, environment_id: str = NOTSET, name: str = NOTSET, description: str = NOTSET
    ):
        pass

    # configurations

    @post(
        "/v1/environments/{environment_id}/configurations",
        required=["environment_id", "name"],
        body=["name", "description", "conversions", "enrichments", "normalizations"],
        content_type=CONTENT_TYPE_JSON,
        response_model=models.Configuration,
    )
    def create_configuration(
        self,
        environment_id: str = NOTSET,
        name: str = NOTSET,
        description: str = NOTSET,
        conversions: Union[models.Conversions, dict] = NOTSET,
        enrichments: List[Union[models.Enrichment, dict]] = NOTSET,
        normalizations: List[Union[models.NormalizationOperation, dict]] = NOTSET,
    ):
        """
        Создание конфигурации обработки документов.

        conversions, enrichments и normalizations принимают как модели,
        так и словари.
        """

    @delete(
        "/v1/environments/{environment_id}/configurations/{configuration_id}",
        required=["environment_id", "configuration_id"],
        response_model=models.DeleteConfigurationResponse,
    )
    def delete_configuration(self, environment_id: str = NOTSET, configuration_id: str = NOTSET):
        """
        Удаление конфигурации.

        Коллекции, которые ее используют, продолжат работать со старыми
        настройками, пока не будут обновлены.
        """

    @get(
        "/v1/environments/{environment_id}/configurations/{configuration_id}",
        required=["environment_id", "configuration_id"],
        response_model=models.Configuration,
    )
    def get_configuration(self, environment_id: str = NOTSET, configuration_id: str = NOTSET):
        pass

    @get(
        "/v1/environments/{environment_id}/configurations",
        required=["environment_id"],
        query=["name"],
        response_model=models.ListConfigurationsResponse,
    )
    def list_configurations(self, environment_id: str = NOTSET, name: str = NOTSET):
        pass

    @put(
        "/v1/environments/{environment_id}/configurations/{configuration_id}",
        required=["environment_id", "configuration_id", "name"],
        body=["name", "description", "conversions", "enrichments", "normalizations"],
        content_type=CONTENT_TYPE_JSON,
        response_model=models.Configuration,
    )
    def update_configuration(
        self,
        environment_id: str = NOTSET,
        configuration_id: str = NOTSET,
        name: str = NOTSET,
        description: str = NOTSET,
        conversions: Union[models.Conversions, dict] = NOTSET,
        enrichments: List[Union[models.Enrichment, dict]] = NOTSET,
        normalizations: List[Union[models.NormalizationOperation, dict]] = NOTSET,
    ):
        """Замена конфигурации целиком: незаданные поля сбрасываются"""

    @post(
        "/v1/environments/{environment_id}/preview",
        required=["environment_id"],
        query=["step", "configuration_id"],
        form={"configuration": None, "file": None, "metadata": None},
        response_model=models.TestDocument,
    )
    def test_configuration_in_environment(
        self,
        environment_id: str = NOTSET,
        configuration: Union[str, dict] = NOTSET,
        step: Union[Step, str] = NOTSET,
        configuration_id: str = NOTSET,
        file: FileData = NOTSET,
        metadata: Union[str, dict] = NOTSET,
        file_content_type: Union[FileContentType, str] = NOTSET,
    ):
        """
        Прогон документа через конфигурацию без индексации.

        Конфигурация задается либо configuration (JSON), либо
        configuration_id - оба сразу сервис отклоняет. step ограничивает
        прогон одним шагом.
        """
        form = _document_form(file, file_content_type, metadata)
        form["configuration"] = _json_field(configuration)
        return form

    # collections

    @post(
        "/v1/environments/{environment_id}/collections",
        required=["environment_id", "name"],
        body=["name", "description", "configuration_id", "language"],
        content_type=CONTENT_TYPE_JSON,
        response_model=models.Collection,
    )
    def create_collection(
        self,
        environment_id: str = NOTSET,
        name: str = NOTSET,
        description: str = NOTSET,
        configuration_id: str = NOTSET,
        language: Union[Language, str] = NOTSET,
    ):
        pass

    @delete(
        "/v1/environments/{environment_id}/collections/{collection_id}",
        required=["environment_id", "collection_id"],
        response_model=models.DeleteCollectionResponse,
    )
    def delete_collection(self, environment_id: str = NOTSET, collection_id: str = NOTSET):
        pass

    @get(
        "/v1/environments/{environment_id}/collections/{collection_id}",
        required=["environment_id", "collection_id"],
        response_model=models.Collection,
    )
    def get_collection(self, environment_id: str = NOTSET, collection_id: str = NOTSET):
        pass

    @get(
        "/v1/environments/{environment_id}/collections/{collection_id}/fields",
        required=["environment_id", "collection_id"],
        response_model=models.ListCollectionFieldsResponse,
    )
    def list_collection_fields(self, environment_id: str = NOTSET, collection_id: str = NOTSET):
        pass

    @get(
        "/v1/environments/{environment_id}/collections",
        required=["environment_id"],
        query=["name"],
        response_model=models.ListCollectionsResponse,
    )
    def list_collections(self, environment_id: str = NOTSET, name: str = NOTSET):
        pass

    @put(
        "/v1/environments/{environment_id}/collections/{collection_id}",
        required=["environment_id", "collection_id"],
        body=["name", "description", "configuration_id"],
        content_type=CONTENT_TYPE_JSON,
        response_model=models.Collection,
    )
    def update_collection(
        self,
        environment_id: str = NOTSET,
        collection_id: str = NOTSET,
        name: str = NOTSET,
        description: str = NOTSET,
        configuration_id: str = NOTSET,
    ):
        pass

    # documents

    @post(
        "/v1/environments/{environment_id}/collections/{collection_id}/documents",
        required=["environment_id", "collection_id"],
        form={"file": None, "metadata": None},
        response_model=models.DocumentAccepted,
    )
    def add_document(
        self,
        environment_id: str = NOTSET,
        collection_id: str = NOTSET,
        file: FileData = NOTSET,
        metadata: Union[str, dict] = NOTSET,
        file_content_type: Union[FileContentType, str] = NOTSET,
    ):
        """
        Загрузка документа в коллекцию (до 50 МБ).

        metadata - произвольный JSON (до 1 МБ), словарь кодируется
        автоматически.
        """
        return _document_form(file, file_content_type, metadata)

    @delete(
        "/v1/environments/{environment_id}/collections/{collection_id}/documents/{document_id}",
        required=["environment_id", "collection_id", "document_id"],
        response_model=models.DeleteDocumentResponse,
    )
    def delete_document(
        self, environment_id: str = NOTSET, collection_id: str = NOTSET, document_id: str = NOTSET
    ):
        """Для неизвестного document_id сервис тоже отвечает 200 со статусом deleted"""

    @get(
        "/v1/environments/{environment_id}/collections/{collection_id}/documents/{document_id}",
        required=["environment_id", "collection_id", "document_id"],
        response_model=models.DocumentStatus,
    )
    def get_document_status(
        self, environment_id: str = NOTSET, collection_id: str = NOTSET, document_id: str = NOTSET
    ):
        pass

    @post(
        "/v1/environments/{environment_id}/collections/{collection_id}/documents/{document_id}",
        required=["environment_id", "collection_id", "document_id"],
        form={"file": None, "metadata": None},
        response_model=models.DocumentAccepted,
    )
    def update_document(
        self,
        environment_id: str = NOTSET,
        collection_id: str = NOTSET,
        document_id: str = NOTSET,
        file: FileData = NOTSET,
        metadata: Union[str, dict] = NOTSET,
        file_content_type: Union[FileContentType, str] = NOTSET,
    ):
        return _document_form(file, file_content_type, metadata)

    # queries

    @get(
        "/v1/environments/{environment_id}/query",
        required=["environment_id", "collection_ids"],
        query=FEDERATED_QUERY_FIELDS,
        response_model=models.QueryResponse,
    )
    def federated_query(
        self,
        environment_id: str = NOTSET,
        collection_ids: List[str] = NOTSET,
        filter: str = NOTSET,
        query: str = NOTSET,
        natural_language_query: str = NOTSET,
        aggregation: str = NOTSET,
        count: int = NOTSET,
        return_fields: List[str] = NOTSET,
        offset: int = NOTSET,
        sort: List[str] = NOTSET,
        highlight: bool = NOTSET,
        deduplicate: bool = NOTSET,
        deduplicate_field: str = NOTSET,
    ):
        """Поиск сразу по нескольким коллекциям окружения"""

    @get(
        "/v1/environments/{environment_id}/notices",
        required=["environment_id", "collection_ids"],
        query=[f for f in FEDERATED_QUERY_FIELDS if f != "deduplicate"],
        response_model=models.QueryNoticesResponse,
    )
    def federated_query_notices(
        self,
        environment_id: str = NOTSET,
        collection_ids: List[str] = NOTSET,
        filter: str = NOTSET,
        query: str = NOTSET,
        natural_language_query: str = NOTSET,
        aggregation: str = NOTSET,
        count: int = NOTSET,
        return_fields: List[str] = NOTSET,
        offset: int = NOTSET,
        sort: List[str] = NOTSET,
        highlight: bool = NOTSET,
        deduplicate_field: str = NOTSET,
    ):
        """Поиск по уведомлениям (ошибкам и предупреждениям) индексации"""

    @get(
        "/v1/environments/{environment_id}/collections/{collection_id}/query",
        required=["environment_id", "collection_id"],
        query=QUERY_FIELDS,
        field_mapping={"return_fields": "return"},
        response_model=models.QueryResponse,
    )
    def query(
        self,
        environment_id: str = NOTSET,
        collection_id: str = NOTSET,
        filter: str = NOTSET,
        query: str = NOTSET,
        natural_language_query: str = NOTSET,
        passages: bool = NOTSET,
        aggregation: str = NOTSET,
        count: int = NOTSET,
        return_fields: List[str] = NOTSET,
        offset: int = NOTSET,
        sort: List[str] = NOTSET,
        highlight: bool = NOTSET,
        passages_fields: List[str] = NOTSET,
        passages_count: int = NOTSET,
        passages_characters: int = NOTSET,
        deduplicate: bool = NOTSET,
        deduplicate_field: str = NOTSET,
    ):
        """
        Поиск по коллекции.

        query и filter используют язык запросов Discovery,
        natural_language_query - запрос на естественном языке. Ответ
        приходит в models.QueryResponse.
        """

    @get(
        "/v1/environments/{environment_id}/collections/{collection_id}/notices",
        required=["environment_id", "collection_id"],
        query=[f for f in QUERY_FIELDS if f != "deduplicate"],
        response_model=models.QueryNoticesResponse,
    )
    def query_notices(
        self,
        environment_id: str = NOTSET,
        collection_id: str = NOTSET,
        filter: str = NOTSET,
        query: str = NOTSET,
        natural_language_query: str = NOTSET,
        passages: bool = NOTSET,
        aggregation: str = NOTSET,
        count: int = NOTSET,
        return_fields: List[str] = NOTSET,
        offset: int = NOTSET,
        sort: List[str] = NOTSET,
        highlight: bool = NOTSET,
        passages_fields: List[str] = NOTSET,
        passages_count: int = NOTSET,
        passages_characters: int = NOTSET,
        deduplicate_field: str = NOTSET,
    ):
        pass

    # training data

    @post(
        "/v1/environments/{environment_id}/collections/{collection_id}/training_data",
        required=["environment_id", "collection_id"],
        body=["natural_language_query", "filter", "examples"],
        content_type=CONTENT_TYPE_JSON,
        response_model=models.TrainingQuery,
    )
    def add_training_data(
        self,
        environment_id: str = NOTSET,
        collection_id: str = NOTSET,
        natural_language_query: str = NOTSET,
        filter: str = NOTSET,
        examples: List[Union[models.TrainingExample, dict]] = NOTSET,
    ):
        pass

    @post(
        "/v1/environments/{environment_id}/collections/{collection_id}/training_data/{query_id}/examples",
        required=["environment_id", "collection_id", "query_id"],
        body=["document_id", "cross_reference", "relevance"],
        content_type=CONTENT_TYPE_JSON,
        response_model=models.TrainingExample,
    )
    def create_training_example(
        self,
        environment_id: str = NOTSET,
        collection_id: str = NOTSET,
        query_id: str = NOTSET,
        document_id: str = NOTSET,
        cross_reference: str = NOTSET,
        relevance: int = NOTSET,
    ):
        pass

    @delete(
        "/v1/environments/{environment_id}/collections/{collection_id}/training_data",
        required=["environment_id", "collection_id"],
    )
    def delete_all_training_data(self, environment_id: str = NOTSET, collection_id: str = NOTSET):
        pass

    @delete(
        "/v1/environments/{environment_id}/collections/{collection_id}/training_data/{query_id}",
        required=["environment_id", "collection_id", "query_id"],
    )
    def delete_training_data(
        self, environment_id: str = NOTSET, collection_id: str = NOTSET, query_id: str = NOTSET
    ):
        pass

    @delete(
        "/v1/environments/{environment_id}/collections/{collection_id}/training_data/{query_id}/examples/{example_id}",
        required=["environment_id", "collection_id", "query_id", "example_id"],
    )
    def delete_training_example(
        self,
        environment_id: str = NOTSET,
        collection_id: str = NOTSET,
        query_id: str = NOTSET,
        example_id: str = NOTSET,
    ):
        pass

    @get(
        "/v1/environments/{environment_id}/collections/{collection_id}/training_data/{query_id}",
        required=["environment_id", "collection_id", "query_id"],
        response_model=models.TrainingQuery,
    )
    def get_training_data(
        self, environment_id: str = NOTSET, collection_id: str = NOTSET, query_id: str = NOTSET
    ):
        pass

    @get(
        "/v1/environments/{environment_id}/collections/{collection_id}/training_data/{query_id}/examples/{example_id}",
        required=["environment_id", "collection_id", "query_id", "example_id"],
        response_model=models.TrainingExample,
    )
    def get_training_example(
        self,
        environment_id: str = NOTSET,
        collection_id: str = NOTSET,
        query_id: str = NOTSET,
        example_id: str = NOTSET,
    ):
        pass

    @get(
        "/v1/environments/{environment_id}/collections/{collection_id}/training_data",
        required=["environment_id", "collection_id"],
        response_model=models.TrainingDataSet,
    )
    def list_training_data(self, environment_id: str = NOTSET, collection_id: str = NOTSET):
        pass

    @put(
        "/v1/environments/{environment_id}/collections/{collection_id}/training_data/{query_id}/examples/{example_id}",
        required=["environment_id", "collection_id", "query_id", "example_id"],
        body=["cross_reference", "relevance"],
        content_type=CONTENT_TYPE_JSON,
        response_model=models.TrainingExample,
    )
    def update_training_example(
        self,
        environment_id: str = NOTSET,
        collection_id: str = NOTSET,
        query_id: str = NOTSET,
        example_id: str = NOTSET,
        cross_reference: str = NOTSET,
        relevance: int = NOTSET,
    ):
        pass
