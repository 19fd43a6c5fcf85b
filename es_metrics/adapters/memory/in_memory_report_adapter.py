"""InMemory Report Adapter (pour les tests et le dry-run).

Construit les mêmes documents que l'adapter Elasticsearch mais les garde
en mémoire au lieu de les envoyer.
"""

from datetime import datetime
from typing import Callable

from es_metrics.adapters.elasticsearch.bulk import serialize_bulk
from es_metrics.application.documents import DocumentBuilder
from es_metrics.application.naming import FieldNamer
from es_metrics.application.reporting import BaseReport, utc_now
from es_metrics.domain.models import Document, RollingIndexType


class InMemoryReportAdapter(BaseReport):
    """Adapter en mémoire: une entrée par passe terminée."""

    def __init__(
        self,
        index: str = "metrics",
        host_name: str = "localhost",
        field_namer: FieldNamer | None = None,
        rolling_index: RollingIndexType = RollingIndexType.NONE,
        clock: Callable[[], datetime] = utc_now,
    ):
        builder = DocumentBuilder(
            index=index,
            host_name=host_name,
            field_namer=field_namer,
            rolling_index=rolling_index,
        )
        super().__init__(builder, clock=clock)
        self.reports: list[tuple[str, list[Document]]] = []

    def deliver(self, documents: list[Document], context_name: str) -> None:
        self.reports.append((context_name, documents))

    def clear(self) -> None:
        """Vide les passes enregistrées."""
        self.reports.clear()

    # Helpers pour les tests
    @property
    def documents(self) -> list[Document]:
        """Tous les documents, toutes passes confondues."""
        return [d for _, docs in self.reports for d in docs]

    @property
    def last_documents(self) -> list[Document]:
        return self.reports[-1][1] if self.reports else []

    def find(self, name: str, metric_type: str | None = None) -> list[Document]:
        """Documents d'une métrique donnée (optionnellement filtrés par type)."""
        found = [d for d in self.documents if d.get("Name") == name]
        if metric_type:
            found = [d for d in found if d.type == metric_type]
        return found

    def export(self) -> bytes:
        """Corps bulk de la dernière passe (format simplifié pour debug)."""
        return serialize_bulk(self.last_documents)
