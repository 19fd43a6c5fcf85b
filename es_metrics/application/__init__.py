"""Application Layer - nommage, construction des documents, passes de reporting."""

from es_metrics.application.naming import FieldNamer, index_name
from es_metrics.application.documents import DocumentBuilder
from es_metrics.application.reporting import BaseReport


__all__ = [
    "FieldNamer",
    "index_name",
    "DocumentBuilder",
    "BaseReport",
]
