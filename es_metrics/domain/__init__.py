"""Domain Layer - Pure Python.

Snapshots de métriques, documents et batch de reporting.
"""

from es_metrics.domain.models import (
    RollingIndexType,
    TimeUnit,
    MetricType,
    Unit,
    MetricTags,
    CounterItem,
    CounterValue,
    MeterItem,
    MeterValue,
    HistogramValue,
    TimerValue,
    HealthCheckResult,
    HealthStatus,
    GaugeSource,
    CounterSource,
    MeterSource,
    HistogramSource,
    TimerSource,
    MetricsData,
    DocumentField,
    Document,
    format_timestamp,
)
from es_metrics.domain.batch import ReportBatch

__all__ = [
    "RollingIndexType",
    "TimeUnit",
    "MetricType",
    "Unit",
    "MetricTags",
    "CounterItem",
    "CounterValue",
    "MeterItem",
    "MeterValue",
    "HistogramValue",
    "TimerValue",
    "HealthCheckResult",
    "HealthStatus",
    "GaugeSource",
    "CounterSource",
    "MeterSource",
    "HistogramSource",
    "TimerSource",
    "MetricsData",
    "DocumentField",
    "Document",
    "format_timestamp",
    "ReportBatch",
]
