"""Exceptions de l'export de métriques."""

from typing import Optional


class MetricsExportError(Exception):
    """Base exception for the metrics reporter."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.url = url

    def __str__(self) -> str:
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


class ProbeFailure(MetricsExportError):
    """Raised when the store version cannot be detected."""
    pass


class UploadFailure(MetricsExportError):
    """Raised when the bulk upload fails (network error or non-2xx status)."""

    def __init__(
        self,
        message: str,
        document_count: int = 0,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.document_count = document_count
