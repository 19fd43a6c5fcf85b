"""Ports Layer - Abstract Interfaces.

Architecture Hexagonale: Les Ports définissent les interfaces abstraites
que les Adapters implémentent.
"""

from es_metrics.ports.metrics_report import MetricsReportPort

__all__ = [
    "MetricsReportPort",
]
