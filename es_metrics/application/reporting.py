"""BaseReport - passe de reporting au-dessus du DocumentBuilder.

Implémente les report_*() du MetricsReportPort en construisant un document
par métrique dans le batch de la passe. Les sous-classes ne fournissent que
deliver(): l'envoi (ou le stockage) des documents en fin de passe.
"""

from abc import abstractmethod
from datetime import datetime, timezone
from typing import Callable

from es_metrics.application.documents import DocumentBuilder
from es_metrics.domain.batch import ReportBatch
from es_metrics.domain.models import (
    CounterValue,
    Document,
    HealthStatus,
    HistogramValue,
    MeterValue,
    MetricsData,
    MetricTags,
    TimerValue,
    TimeUnit,
    Unit,
)
from es_metrics.ports.metrics_report import MetricsReportPort


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def child_metric_name(context: str, name: str) -> str:
    """Préfixe le nom d'une métrique par son sous-contexte: "[db] queries"."""
    return f"[{context}] {name}"


class BaseReport(MetricsReportPort):
    """Reporter générique: document building + livraison en fin de passe."""

    def __init__(
        self,
        builder: DocumentBuilder,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.builder = builder
        self._clock = clock

    # -------------------------------------------------------------------------
    # Passe
    # -------------------------------------------------------------------------

    def start_report(
        self, context_name: str, timestamp: datetime | None = None
    ) -> ReportBatch:
        batch = ReportBatch(context_name)
        batch.begin(timestamp or self._clock())
        return batch

    def end_report(self, batch: ReportBatch, context_name: str) -> None:
        documents = batch.drain()
        self.deliver(documents, context_name)

    @abstractmethod
    def deliver(self, documents: list[Document], context_name: str) -> None:
        """Livre les documents d'une passe terminée."""
        pass

    # -------------------------------------------------------------------------
    # Métriques
    # -------------------------------------------------------------------------

    def report_gauge(
        self, batch: ReportBatch, name: str, value: float, unit: Unit, tags: MetricTags
    ) -> None:
        document = self.builder.gauge(batch.timestamp, name, value, unit, tags)
        if document is not None:
            batch.append(document)

    def report_counter(
        self, batch: ReportBatch, name: str, value: CounterValue, unit: Unit, tags: MetricTags
    ) -> None:
        batch.append(self.builder.counter(batch.timestamp, name, value, unit, tags))

    def report_meter(
        self,
        batch: ReportBatch,
        name: str,
        value: MeterValue,
        unit: Unit,
        rate_unit: TimeUnit,
        tags: MetricTags,
    ) -> None:
        batch.append(self.builder.meter(batch.timestamp, name, value, unit, tags))

    def report_histogram(
        self, batch: ReportBatch, name: str, value: HistogramValue, unit: Unit, tags: MetricTags
    ) -> None:
        batch.append(self.builder.histogram(batch.timestamp, name, value, unit, tags))

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
        batch.append(self.builder.timer(batch.timestamp, name, value, unit, tags))

    def report_health(self, batch: ReportBatch, status: HealthStatus) -> None:
        # Health checks are not indexed
        pass

    # -------------------------------------------------------------------------
    # Passe complète
    # -------------------------------------------------------------------------

    def run_report(self, data: MetricsData, health: HealthStatus | None = None) -> int:
        """Exécute une passe complète sur un snapshot de métriques.

        Args:
            data: Snapshot du contexte racine (et de ses sous-contextes)
            health: Statut de santé optionnel, reporté en dernier

        Returns:
            Nombre de documents produits pendant la passe
        """
        batch = self.start_report(data.context, data.timestamp)
        self._report_context(batch, data, prefixes=[])
        if health is not None:
            self.report_health(batch, health)
        produced = len(batch)
        self.end_report(batch, data.context)
        return produced

    def _report_context(
        self, batch: ReportBatch, data: MetricsData, prefixes: list[str]
    ) -> None:
        def qualify(name: str) -> str:
            for context in reversed(prefixes):
                name = child_metric_name(context, name)
            return name

        for g in data.gauges:
            self.report_gauge(batch, qualify(g.name), g.value, g.unit, g.tags)
        for c in data.counters:
            self.report_counter(batch, qualify(c.name), c.value, c.unit, c.tags)
        for m in data.meters:
            self.report_meter(batch, qualify(m.name), m.value, m.unit, m.rate_unit, m.tags)
        for h in data.histograms:
            self.report_histogram(batch, qualify(h.name), h.value, h.unit, h.tags)
        for t in data.timers:
            self.report_timer(
                batch,
                qualify(t.name),
                t.value,
                t.unit,
                t.rate_unit,
                t.duration_unit,
                t.tags,
            )

        for child in data.children:
            self._report_context(batch, child, [*prefixes, child.context])
