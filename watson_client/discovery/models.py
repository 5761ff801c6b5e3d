from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class DiscoveryModel(BaseModel):
    model_config = ConfigDict(extra="allow", protected_namespaces=())


class Notice(DiscoveryModel):
    notice_id: Optional[str] = None
    created: Optional[str] = None
    document_id: Optional[str] = None
    query_id: Optional[str] = None
    severity: Optional[str] = None
    step: Optional[str] = None
    description: Optional[str] = None


# environments


class EnvironmentDocuments(DiscoveryModel):
    indexed: Optional[int] = None
    maximum_allowed: Optional[int] = None


class DiskUsage(DiscoveryModel):
    used_bytes: Optional[int] = None
    maximum_allowed_bytes: Optional[int] = None
    total_bytes: Optional[int] = None
    used: Optional[str] = None
    total: Optional[str] = None
    percent_used: Optional[float] = None


class MemoryUsage(DiscoveryModel):
    used_bytes: Optional[int] = None
    total_bytes: Optional[int] = None
    used: Optional[str] = None
    total: Optional[str] = None
    percent_used: Optional[float] = None


class IndexCapacity(DiscoveryModel):
    documents: Optional[EnvironmentDocuments] = None
    disk_usage: Optional[DiskUsage] = None
    memory_usage: Optional[MemoryUsage] = None


class Environment(DiscoveryModel):
    environment_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    created: Optional[str] = None
    updated: Optional[str] = None
    status: Optional[str] = None
    read_only: Optional[bool] = None
    size: Optional[int] = None
    index_capacity: Optional[IndexCapacity] = None


class ListEnvironmentsResponse(DiscoveryModel):
    environments: List[Environment] = []


class DeleteEnvironmentResponse(DiscoveryModel):
    environment_id: str
    status: str


class Field(DiscoveryModel):
    field_name: Optional[str] = None
    field_type: Optional[str] = None


class ListCollectionFieldsResponse(DiscoveryModel):
    fields: List[Field] = []


# configurations


class FontSetting(DiscoveryModel):
    level: Optional[int] = None
    min_size: Optional[int] = None
    max_size: Optional[int] = None
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    name: Optional[str] = None


class PdfHeadingDetection(DiscoveryModel):
    fonts: Optional[List[FontSetting]] = None


class PdfSettings(DiscoveryModel):
    heading: Optional[PdfHeadingDetection] = None


class WordStyle(DiscoveryModel):
    level: Optional[int] = None
    names: Optional[List[str]] = None


class WordHeadingDetection(DiscoveryModel):
    fonts: Optional[List[FontSetting]] = None
    styles: Optional[List[WordStyle]] = None


class WordSettings(DiscoveryModel):
    heading: Optional[WordHeadingDetection] = None


class XPathPatterns(DiscoveryModel):
    xpaths: Optional[List[str]] = None


class HtmlSettings(DiscoveryModel):
    exclude_tags_completely: Optional[List[str]] = None
    exclude_tags_keep_content: Optional[List[str]] = None
    keep_content: Optional[XPathPatterns] = None
    exclude_content: Optional[XPathPatterns] = None
    keep_tag_attributes: Optional[List[str]] = None
    exclude_tag_attributes: Optional[List[str]] = None


class NormalizationOperation(DiscoveryModel):
    operation: Optional[str] = None
    source_field: Optional[str] = None
    destination_field: Optional[str] = None


class Conversions(DiscoveryModel):
    pdf: Optional[PdfSettings] = None
    word: Optional[WordSettings] = None
    html: Optional[HtmlSettings] = None
    json_normalizations: Optional[List[NormalizationOperation]] = None


class EnrichmentOptions(DiscoveryModel):
    extract: Optional[List[str]] = None
    sentiment: Optional[bool] = None
    quotations: Optional[bool] = None
    show_source_text: Optional[bool] = None
    hierarchical_typed_relations: Optional[bool] = None
    model: Optional[str] = None
    language: Optional[str] = None


class Enrichment(DiscoveryModel):
    description: Optional[str] = None
    destination_field: str
    source_field: str
    overwrite: Optional[bool] = None
    enrichment_name: str
    ignore_downstream_errors: Optional[bool] = None
    options: Optional[EnrichmentOptions] = None


class Configuration(DiscoveryModel):
    configuration_id: Optional[str] = None
    name: str
    created: Optional[str] = None
    updated: Optional[str] = None
    description: Optional[str] = None
    conversions: Optional[Conversions] = None
    enrichments: Optional[List[Enrichment]] = None
    normalizations: Optional[List[NormalizationOperation]] = None


class ListConfigurationsResponse(DiscoveryModel):
    configurations: List[Configuration] = []


class DeleteConfigurationResponse(DiscoveryModel):
    configuration_id: str
    status: str
    notices: Optional[List[Notice]] = None


class DocumentSnapshot(DiscoveryModel):
    step: Optional[str] = None
    snapshot: Optional[Dict[str, Any]] = None


class TestDocument(DiscoveryModel):
    __test__ = False

    configuration_id: Optional[str] = None
    status: Optional[str] = None
    enriched_field_units: Optional[int] = None
    original_media_type: Optional[str] = None
    snapshots: Optional[List[DocumentSnapshot]] = None
    notices: Optional[List[Notice]] = None


# collections


class DocumentCounts(DiscoveryModel):
    available: Optional[int] = None
    processing: Optional[int] = None
    failed: Optional[int] = None


class CollectionDiskUsage(DiscoveryModel):
    used_bytes: Optional[int] = None


class TrainingStatus(DiscoveryModel):
    total_examples: Optional[int] = None
    available: Optional[bool] = None
    processing: Optional[bool] = None
    minimum_queries_added: Optional[bool] = None
    minimum_examples_added: Optional[bool] = None
    sufficient_label_diversity: Optional[bool] = None
    notices: Optional[int] = None
    successfully_trained: Optional[str] = None
    data_updated: Optional[str] = None


class Collection(DiscoveryModel):
    collection_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    created: Optional[str] = None
    updated: Optional[str] = None
    status: Optional[str] = None
    configuration_id: Optional[str] = None
    language: Optional[str] = None
    document_counts: Optional[DocumentCounts] = None
    disk_usage: Optional[CollectionDiskUsage] = None
    training_status: Optional[TrainingStatus] = None


class ListCollectionsResponse(DiscoveryModel):
    collections: List[Collection] = []


class DeleteCollectionResponse(DiscoveryModel):
    collection_id: str
    status: str


# documents


class DocumentAccepted(DiscoveryModel):
    document_id: Optional[str] = None
    status: Optional[str] = None
    notices: Optional[List[Notice]] = None


class DeleteDocumentResponse(DiscoveryModel):
    document_id: Optional[str] = None
    status: Optional[str] = None


class DocumentStatus(DiscoveryModel):
    document_id: str
    configuration_id: str
    created: str
    updated: str
    status: str
    status_description: str
    filename: Optional[str] = None
    file_type: Optional[str] = None
    sha1: Optional[str] = None
    notices: List[Notice] = []


# queries


class AggregationResult(DiscoveryModel):
    key: Optional[str] = None
    matching_results: Optional[int] = None
    aggregations: Optional[List["QueryAggregation"]] = None


class QueryAggregation(DiscoveryModel):
    type: Optional[str] = None
    field: Optional[str] = None
    results: Optional[List[AggregationResult]] = None
    match: Optional[str] = None
    matching_results: Optional[int] = None
    aggregations: Optional[List["QueryAggregation"]] = None


class QueryPassages(DiscoveryModel):
    document_id: Optional[str] = None
    passage_score: Optional[float] = None
    passage_text: Optional[str] = None
    start_offset: Optional[int] = None
    end_offset: Optional[int] = None
    field: Optional[str] = None


class QueryResult(DiscoveryModel):
    id: Optional[str] = None
    score: Optional[float] = None
    metadata: Optional[Dict[str, Any]] = None
    collection_id: Optional[str] = None


class QueryNoticesResult(QueryResult):
    pass


class QueryResponse(DiscoveryModel):
    matching_results: Optional[int] = None
    results: Optional[List[QueryResult]] = None
    aggregations: Optional[List[QueryAggregation]] = None
    passages: Optional[List[QueryPassages]] = None
    duplicates_removed: Optional[int] = None


class QueryNoticesResponse(DiscoveryModel):
    matching_results: Optional[int] = None
    results: Optional[List[QueryNoticesResult]] = None
    aggregations: Optional[List[QueryAggregation]] = None
    passages: Optional[List[QueryPassages]] = None
    duplicates_removed: Optional[int] = None


# training data


class TrainingExample(DiscoveryModel):
    document_id: Optional[str] = None
    cross_reference: Optional[str] = None
    relevance: Optional[int] = None


class TrainingQuery(DiscoveryModel):
    query_id: Optional[str] = None
    natural_language_query: Optional[str] = None
    filter: Optional[str] = None
    examples: Optional[List[TrainingExample]] = None


class TrainingDataSet(DiscoveryModel):
    environment_id: Optional[str] = None
    collection_id: Optional[str] = None
    queries: Optional[List[TrainingQuery]] = None


AggregationResult.model_rebuild()
QueryAggregation.model_rebuild()
