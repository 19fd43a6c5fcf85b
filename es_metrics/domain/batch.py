"""ReportBatch - accumulateur de documents pour UNE passe de reporting.

Une instance par passe: créée par start_report(), passée explicitement
à chaque report_*(), vidée par end_report(). Pas de partage entre passes.
"""

from datetime import datetime

from es_metrics.domain.models import Document, format_timestamp


class ReportBatch:
    """Documents produits pendant une passe, dans l'ordre d'émission."""

    def __init__(self, context_name: str = ""):
        self.context_name = context_name
        self._timestamp: datetime | None = None
        self._documents: list[Document] = []

    def begin(self, timestamp: datetime) -> None:
        """Démarre la passe: vide l'état et fixe le timestamp partagé."""
        self._timestamp = timestamp
        self._documents = []

    @property
    def started(self) -> bool:
        return self._timestamp is not None

    @property
    def timestamp(self) -> datetime:
        if self._timestamp is None:
            raise RuntimeError("ReportBatch used before begin()")
        return self._timestamp

    @property
    def formatted_timestamp(self) -> str:
        return format_timestamp(self.timestamp)

    def append(self, document: Document) -> None:
        self._documents.append(document)

    def drain(self) -> list[Document]:
        """Retourne les documents accumulés et vide le batch."""
        documents, self._documents = self._documents, []
        return documents

    def __len__(self) -> int:
        return len(self._documents)
