"""Metrics Report Port - Interface abstraite pour le reporting de métriques.

Architecture Hexagonale: Port (interface) appelé par le scheduler de
reporting externe, une passe à la fois:

    batch = report.start_report("app")
    report.report_gauge(batch, ...)   # zéro ou plusieurs report_*
    report.end_report(batch, "app")
"""

from abc import ABC, abstractmethod
from datetime import datetime

from es_metrics.domain.batch import ReportBatch
from es_metrics.domain.models import (
    CounterValue,
    HealthStatus,
    HistogramValue,
    MeterValue,
    MetricTags,
    TimerValue,
    TimeUnit,
    Unit,
)


class MetricsReportPort(ABC):
    """Interface abstraite pour un reporter de métriques.

    Le batch retourné par start_report() appartient à la passe en cours;
    il est passé explicitement à chaque appel report_*() puis à end_report().
    Les adapters (Elasticsearch, InMemory) implémentent cette interface.
    """

    @abstractmethod
    def start_report(
        self, context_name: str, timestamp: datetime | None = None
    ) -> ReportBatch:
        """Démarre une passe de reporting.

        Args:
            context_name: Nom du contexte de métriques
            timestamp: Timestamp partagé de la passe (défaut: maintenant, UTC)

        Returns:
            Le batch de la passe
        """
        pass

    @abstractmethod
    def report_gauge(
        self, batch: ReportBatch, name: str, value: float, unit: Unit, tags: MetricTags
    ) -> None:
        """Reporte une gauge."""
        pass

    @abstractmethod
    def report_counter(
        self, batch: ReportBatch, name: str, value: CounterValue, unit: Unit, tags: MetricTags
    ) -> None:
        """Reporte un counter."""
        pass

    @abstractmethod
    def report_meter(
        self,
        batch: ReportBatch,
        name: str,
        value: MeterValue,
        unit: Unit,
        rate_unit: TimeUnit,
        tags: MetricTags,
    ) -> None:
        """Reporte un meter."""
        pass

    @abstractmethod
    def report_histogram(
        self, batch: ReportBatch, name: str, value: HistogramValue, unit: Unit, tags: MetricTags
    ) -> None:
        """Reporte un histogram."""
        pass

    @abstractmethod
    def report_timer(
        self,
        batch: ReportBatch,
        name: str,
        value: TimerValue,
        unit: Unit,
        rate_unit: TimeUnit,
        duration_unit: TimeUnit,
        tags: MetricTags,
    ) -> None:
        """Reporte un timer."""
        pass

    @abstractmethod
    def report_health(self, batch: ReportBatch, status: HealthStatus) -> None:
        """Reporte le statut de santé."""
        pass

    @abstractmethod
    def end_report(self, batch: ReportBatch, context_name: str) -> None:
        """Termine la passe et livre les documents accumulés.

        Args:
            batch: Batch de la passe
            context_name: Nom du contexte de métriques
        """
        pass
