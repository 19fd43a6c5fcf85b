"""Elasticsearch Report Adapter - Implémentation du MetricsReportPort.

Architecture Hexagonale: Adapter qui indexe chaque passe de reporting dans
Elasticsearch via l'API _bulk (un document par métrique, un POST par passe).

Usage:
    from es_metrics.adapters.elasticsearch import ElasticsearchReportAdapter

    report = ElasticsearchReportAdapter(
        bulk_url="http://localhost:9200/_bulk",
        index="metrics",
        node_info_url="http://localhost:9200/",
        rolling_index=RollingIndexType.DAILY,
    )
    report.run_report(metrics_data)
"""

import logging
import socket
from datetime import datetime
from typing import Callable, Optional

import httpx

from es_metrics.adapters.elasticsearch.bulk import BulkUploader
from es_metrics.adapters.elasticsearch.version_probe import (
    DEFAULT_TIMEOUT,
    ProbeResult,
    probe_node_info,
)
from es_metrics.application.documents import DocumentBuilder
from es_metrics.application.naming import FieldNamer
from es_metrics.application.reporting import BaseReport, utc_now
from es_metrics.domain.models import Document, RollingIndexType

logger = logging.getLogger(__name__)


def field_namer_from_probe(result: ProbeResult) -> FieldNamer:
    """Choisit la règle de nommage à partir du probe, avec repli explicite."""
    if result.ok:
        return FieldNamer.for_major_version(result.major_version)

    logger.warning(
        "Unable to get Elasticsearch version. Field names with dots won't be replaced.",
        exc_info=result.error,
    )
    return FieldNamer(replace_dots=False)


class ElasticsearchReportAdapter(BaseReport):
    """Reporter Elasticsearch.

    La version du cluster est détectée une seule fois, à la construction;
    la construction réussit même si le noeud est injoignable.
    """

    def __init__(
        self,
        bulk_url: str,
        index: str,
        node_info_url: str,
        rolling_index: RollingIndexType = RollingIndexType.NONE,
        host_name: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        clock: Callable[[], datetime] = utc_now,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialise le reporter et sonde la version du cluster.

        Args:
            bulk_url: URL de l'endpoint _bulk
            index: Nom de base de l'index
            node_info_url: URL de l'endpoint d'info du noeud
            rolling_index: Rotation de l'index (défaut: aucune)
            host_name: Valeur du champ ServerName (défaut: nom de la machine)
            client: Client httpx partagé par le probe et l'upload
            clock: Source du timestamp de passe (UTC)
            timeout: Timeout des clients créés à la volée, en secondes
        """
        self.bulk_url = bulk_url
        self.node_info_url = node_info_url
        self.probe_result = probe_node_info(node_info_url, client=client, timeout=timeout)
        field_namer = field_namer_from_probe(self.probe_result)

        builder = DocumentBuilder(
            index=index,
            host_name=host_name or socket.gethostname(),
            field_namer=field_namer,
            rolling_index=rolling_index,
        )
        super().__init__(builder, clock=clock)
        self.uploader = BulkUploader(bulk_url, client=client, timeout=timeout)

    @property
    def field_namer(self) -> FieldNamer:
        return self.builder.field_namer

    def deliver(self, documents: list[Document], context_name: str) -> None:
        """Envoie les documents de la passe; UploadFailure remonte à l'appelant."""
        sent = self.uploader.send(documents)
        logger.debug(f"Report '{context_name}': {sent} documents indexed")
