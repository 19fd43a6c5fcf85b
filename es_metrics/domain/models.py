"""Domain Models - Pure Python, AUCUNE dépendance externe.

Ce module contient les snapshots de métriques (valeurs déjà agrégées par
la librairie de collecte) et les documents produits pour l'indexation.
INTERDIT: httpx, Pydantic, imports de es_metrics.adapters
AUTORISÉ: dataclasses, enum, typing, datetime
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Iterable


# =============================================================================
# Enums
# =============================================================================


class RollingIndexType(str, Enum):
    """Rotation de l'index de destination."""

    NONE = "none"
    DAILY = "daily"
    MONTHLY = "monthly"


class TimeUnit(str, Enum):
    """Unités de temps pour les taux et les durées."""

    NANOSECONDS = "ns"
    MICROSECONDS = "us"
    MILLISECONDS = "ms"
    SECONDS = "s"
    MINUTES = "min"
    HOURS = "h"
    DAYS = "days"


class MetricType(str, Enum):
    """Type de document écrit dans l'index."""

    GAUGE = "Gauge"
    COUNTER = "Counter"
    METER = "Meter"
    HISTOGRAM = "Histogram"
    TIMER = "Timer"


# =============================================================================
# Unit & Tags
# =============================================================================


@dataclass(frozen=True)
class Unit:
    """Unité de mesure d'une métrique (ex: Requests, bytes)."""

    name: str

    NONE: ClassVar["Unit"]
    CALLS: ClassVar["Unit"]
    REQUESTS: ClassVar["Unit"]
    ITEMS: ClassVar["Unit"]
    ERRORS: ClassVar["Unit"]
    RESULTS: ClassVar["Unit"]
    BYTES: ClassVar["Unit"]
    KILOBYTES: ClassVar["Unit"]
    MEGABYTES: ClassVar["Unit"]

    @classmethod
    def custom(cls, name: str) -> "Unit":
        return cls(name)

    def __str__(self) -> str:
        return self.name


Unit.NONE = Unit("")
Unit.CALLS = Unit("Calls")
Unit.REQUESTS = Unit("Requests")
Unit.ITEMS = Unit("Items")
Unit.ERRORS = Unit("Errors")
Unit.RESULTS = Unit("Results")
Unit.BYTES = Unit("bytes")
Unit.KILOBYTES = Unit("kb")
Unit.MEGABYTES = Unit("Mb")


@dataclass(frozen=True)
class MetricTags:
    """Labels attachés à une métrique, sérialisés tels quels (liste JSON)."""

    tags: tuple[str, ...] = ()

    @classmethod
    def of(cls, tags: "MetricTags | str | Iterable[str] | None") -> "MetricTags":
        """Construit des tags depuis None, une chaîne "a,b" ou un itérable."""
        if tags is None:
            return cls()
        if isinstance(tags, MetricTags):
            return tags
        if isinstance(tags, str):
            return cls(tuple(t.strip() for t in tags.split(",") if t.strip()))
        return cls(tuple(tags))

    def __iter__(self):
        return iter(self.tags)

    def __len__(self) -> int:
        return len(self.tags)


# =============================================================================
# Snapshot values (pré-agrégés par la librairie de collecte)
# =============================================================================


@dataclass(frozen=True)
class CounterItem:
    """Sous-compteur d'un counter (item, count, % du total)."""

    item: str
    count: int
    percent: float


@dataclass(frozen=True)
class CounterValue:
    """Valeur d'un counter."""

    count: int
    items: tuple[CounterItem, ...] = ()


@dataclass(frozen=True)
class MeterItem:
    """Sous-meter d'un meter, avec ses propres taux."""

    item: str
    percent: float
    value: "MeterValue"


@dataclass(frozen=True)
class MeterValue:
    """Valeur d'un meter (count + taux moyens)."""

    count: int
    mean_rate: float
    one_minute_rate: float
    five_minute_rate: float
    fifteen_minute_rate: float
    rate_unit: TimeUnit = TimeUnit.SECONDS
    items: tuple[MeterItem, ...] = ()


@dataclass(frozen=True)
class HistogramValue:
    """Distribution d'un histogram."""

    count: int
    last_value: float
    min: float
    max: float
    mean: float
    std_dev: float
    median: float
    percentile_75: float
    percentile_95: float
    percentile_98: float
    percentile_99: float
    percentile_999: float
    sample_size: int
    last_user_value: str | None = None
    min_user_value: str | None = None
    max_user_value: str | None = None


@dataclass(frozen=True)
class TimerValue:
    """Valeur d'un timer: taux (meter) + distribution (histogram)."""

    rate: MeterValue
    histogram: HistogramValue
    active_sessions: int = 0
    total_time: int = 0


@dataclass(frozen=True)
class HealthCheckResult:
    """Résultat d'un health check."""

    name: str
    is_healthy: bool
    message: str = ""


@dataclass(frozen=True)
class HealthStatus:
    """Statut global de santé."""

    results: tuple[HealthCheckResult, ...] = ()

    @property
    def is_healthy(self) -> bool:
        return all(r.is_healthy for r in self.results)

    @property
    def has_registered_checks(self) -> bool:
        return len(self.results) > 0


# =============================================================================
# Value sources (métrique nommée + unité + tags)
# =============================================================================


@dataclass(frozen=True)
class GaugeSource:
    name: str
    value: float
    unit: Unit = Unit.NONE
    tags: MetricTags = MetricTags()


@dataclass(frozen=True)
class CounterSource:
    name: str
    value: CounterValue
    unit: Unit = Unit.NONE
    tags: MetricTags = MetricTags()


@dataclass(frozen=True)
class MeterSource:
    name: str
    value: MeterValue
    unit: Unit = Unit.NONE
    rate_unit: TimeUnit = TimeUnit.SECONDS
    tags: MetricTags = MetricTags()


@dataclass(frozen=True)
class HistogramSource:
    name: str
    value: HistogramValue
    unit: Unit = Unit.NONE
    tags: MetricTags = MetricTags()


@dataclass(frozen=True)
class TimerSource:
    name: str
    value: TimerValue
    unit: Unit = Unit.NONE
    rate_unit: TimeUnit = TimeUnit.SECONDS
    duration_unit: TimeUnit = TimeUnit.MILLISECONDS
    tags: MetricTags = MetricTags()


@dataclass
class MetricsData:
    """Snapshot complet d'un contexte de métriques (et de ses enfants)."""

    context: str
    timestamp: datetime | None = None
    gauges: list[GaugeSource] = field(default_factory=list)
    counters: list[CounterSource] = field(default_factory=list)
    meters: list[MeterSource] = field(default_factory=list)
    histograms: list[HistogramSource] = field(default_factory=list)
    timers: list[TimerSource] = field(default_factory=list)
    children: list["MetricsData"] = field(default_factory=list)


# =============================================================================
# Documents
# =============================================================================


@dataclass(frozen=True)
class DocumentField:
    """Champ (nom, valeur) d'un document."""

    name: str
    value: Any


@dataclass(frozen=True)
class Document:
    """Document destiné à l'index (une métrique = un document)."""

    index: str
    type: str
    fields: tuple[DocumentField, ...]

    def source(self) -> dict[str, Any]:
        """Retourne les champs dans leur ordre d'insertion."""
        return {f.name: f.value for f in self.fields}

    def get(self, name: str, default: Any = None) -> Any:
        for f in self.fields:
            if f.name == name:
                return f.value
        return default

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


def format_timestamp(timestamp: datetime) -> str:
    """Formate un instant: 2024-03-07T10:15:00.1234Z (4 décimales).

    Un datetime naïf est considéré comme UTC.
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    base = timestamp.strftime("%Y-%m-%dT%H:%M:%S")
    fraction = f"{timestamp.microsecond // 100:04d}"
    offset = timestamp.utcoffset()
    if not offset:
        return f"{base}.{fraction}Z"
    total_minutes = int(offset.total_seconds()) // 60
    sign = "+" if total_minutes >= 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{base}.{fraction}{sign}{hours:02d}:{minutes:02d}"
