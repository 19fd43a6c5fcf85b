"""Adapters Layer - Driven Adapters (implementations).

Architecture Hexagonale: Les Adapters implémentent les Ports (interfaces).
Implémentations natives utilisant directement httpx.

Structure:
- elasticsearch/ : Reporter Elasticsearch (probe de version, bulk upload)
- memory/        : Reporter en mémoire pour les tests
"""

from es_metrics.adapters.elasticsearch import (
    ElasticsearchReportAdapter,
    BulkUploader,
    AsyncBulkUploader,
)
from es_metrics.adapters.memory import InMemoryReportAdapter


__all__ = [
    # Elasticsearch Adapters
    "ElasticsearchReportAdapter",
    "BulkUploader",
    "AsyncBulkUploader",
    # InMemory Adapters
    "InMemoryReportAdapter",
]
