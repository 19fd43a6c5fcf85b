"""Bulk Uploader - framing NDJSON et envoi vers l'API _bulk.

Format (une paire de lignes par document):
    {"index": {"_index": "metrics-2024-03-07", "_type": "Gauge"}}
    {"Timestamp": "...", "Type": "Gauge", "Name": "...", ..., "Value": 42.5}

Un seul POST par passe. Aucune relance ici: un échec lève UploadFailure
et c'est le scheduler qui décide de la suite.
"""

import json
import logging
import os
from typing import Iterable, Optional

import httpx

from es_metrics.core.errors import UploadFailure
from es_metrics.domain.models import Document

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
LINE_SEPARATOR = os.linesep
BULK_HEADERS = {"Content-Type": "application/x-ndjson"}


def action_line(document: Document) -> str:
    """Ligne de métadonnées: index et type de destination."""
    return json.dumps({"index": {"_index": document.index, "_type": document.type}})


def source_line(document: Document) -> str:
    """Ligne de données: les champs du document, dans l'ordre."""
    return json.dumps(document.source())


def serialize_bulk(
    documents: Iterable[Document],
    line_separator: str = LINE_SEPARATOR,
) -> bytes:
    """Sérialise un batch au format bulk (UTF-8).

    Chaque ligne, y compris la dernière, est terminée par line_separator.
    """
    parts: list[str] = []
    for document in documents:
        parts.append(action_line(document))
        parts.append(line_separator)
        parts.append(source_line(document))
        parts.append(line_separator)
    return "".join(parts).encode("utf-8")


def _raise_upload_failure(
    url: str, error: httpx.HTTPError | httpx.InvalidURL, document_count: int
) -> None:
    if isinstance(error, httpx.HTTPStatusError):
        status_code = error.response.status_code
        message = f"Bulk upload rejected: HTTP {status_code}"
    else:
        status_code = None
        message = f"Bulk upload failed: {error}"
    logger.error(f"{message} ({document_count} documents, {url})")
    raise UploadFailure(
        message,
        document_count=document_count,
        status_code=status_code,
        url=url,
    ) from error


class BulkUploader:
    """Envoi synchrone du corps bulk."""

    def __init__(
        self,
        url: str,
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialise l'uploader.

        Args:
            url: URL de l'endpoint _bulk
            client: Client httpx à réutiliser (sinon un client par envoi)
            timeout: Timeout du client créé par envoi, en secondes
        """
        self.url = url
        self._client = client
        self._timeout = timeout

    def _post(self, body: bytes) -> httpx.Response:
        if self._client is not None:
            return self._client.post(self.url, content=body, headers=BULK_HEADERS)
        with httpx.Client(timeout=self._timeout) as client:
            return client.post(self.url, content=body, headers=BULK_HEADERS)

    def upload(self, body: bytes, document_count: int = 0) -> None:
        """POST du corps bulk complet.

        Raises:
            UploadFailure: erreur réseau ou statut HTTP non-2xx
        """
        try:
            response = self._post(body)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            _raise_upload_failure(self.url, e, document_count)

        logger.debug(f"Bulk upload: {document_count} documents, {len(body)} bytes")

    def send(self, documents: list[Document]) -> int:
        """Sérialise et envoie un batch. Retourne le nombre de documents envoyés."""
        if not documents:
            logger.debug("Bulk upload skipped: empty batch")
            return 0
        self.upload(serialize_bulk(documents), document_count=len(documents))
        return len(documents)


class AsyncBulkUploader:
    """Envoi asynchrone du corps bulk (schedulers asyncio)."""

    def __init__(
        self,
        url: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.url = url
        self._client = client
        self._timeout = timeout

    async def _post(self, body: bytes) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(self.url, content=body, headers=BULK_HEADERS)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.post(self.url, content=body, headers=BULK_HEADERS)

    async def upload(self, body: bytes, document_count: int = 0) -> None:
        try:
            response = await self._post(body)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            _raise_upload_failure(self.url, e, document_count)

        logger.debug(f"Bulk upload: {document_count} documents, {len(body)} bytes")

    async def send(self, documents: list[Document]) -> int:
        if not documents:
            logger.debug("Bulk upload skipped: empty batch")
            return 0
        await self.upload(serialize_bulk(documents), document_count=len(documents))
        return len(documents)
