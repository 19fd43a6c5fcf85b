"""InMemory Adapters - pour les tests."""

from es_metrics.adapters.memory.in_memory_report_adapter import InMemoryReportAdapter


__all__ = [
    "InMemoryReportAdapter",
]
