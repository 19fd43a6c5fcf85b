"""Factory - Dependency Injection / Wiring.

Architecture Hexagonale: Le Factory assemble le reporter à partir de la
configuration (es_metrics.core.config).
"""

from typing import Optional

import httpx

from es_metrics.adapters.elasticsearch import ElasticsearchReportAdapter
from es_metrics.core.config import Settings, get_settings
from es_metrics.ports.metrics_report import MetricsReportPort


def create_report_adapter(
    settings: Optional[Settings] = None,
    client: Optional[httpx.Client] = None,
) -> MetricsReportPort:
    """Crée le reporter Elasticsearch configuré.

    Args:
        settings: Configuration (défaut: get_settings())
        client: Client httpx partagé (optionnel)

    Returns:
        Le reporter, version du cluster déjà sondée
    """
    settings = settings or get_settings()
    return ElasticsearchReportAdapter(
        bulk_url=settings.bulk_url,
        index=settings.index,
        node_info_url=settings.node_info_url,
        rolling_index=settings.rolling_index,
        host_name=settings.host_name,
        client=client,
        timeout=settings.http_timeout_seconds,
    )
