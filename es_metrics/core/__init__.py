"""Core - configuration et exceptions."""

from es_metrics.core.errors import MetricsExportError, ProbeFailure, UploadFailure


# Lazy import: la configuration lit l'environnement au premier accès
def __getattr__(name):
    if name == "get_settings":
        from es_metrics.core.config import get_settings

        return get_settings
    elif name == "Settings":
        from es_metrics.core.config import Settings

        return Settings
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "MetricsExportError",
    "ProbeFailure",
    "UploadFailure",
    "get_settings",
    "Settings",
]
