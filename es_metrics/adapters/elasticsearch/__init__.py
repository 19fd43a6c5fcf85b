"""Elasticsearch Adapters - Implémentations natives (httpx).

Architecture Hexagonale: Ces adapters implémentent le Port MetricsReportPort
pour indexer les métriques dans Elasticsearch.
"""

from es_metrics.adapters.elasticsearch.bulk import (
    AsyncBulkUploader,
    BulkUploader,
    serialize_bulk,
)
from es_metrics.adapters.elasticsearch.report_adapter import (
    ElasticsearchReportAdapter,
    field_namer_from_probe,
)
from es_metrics.adapters.elasticsearch.version_probe import (
    NodeInfo,
    ProbeResult,
    VersionInfo,
    probe_node_info,
)


__all__ = [
    "ElasticsearchReportAdapter",
    "field_namer_from_probe",
    "BulkUploader",
    "AsyncBulkUploader",
    "serialize_bulk",
    "NodeInfo",
    "VersionInfo",
    "ProbeResult",
    "probe_node_info",
]
