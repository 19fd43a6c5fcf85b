"""DocumentBuilder - mapping snapshot de métrique -> document plat.

Chaque type de métrique a sa propre méthode de mapping. Tous les documents
commencent par les mêmes champs (Timestamp, Type, Name, ServerName, Unit,
Tags), suivis des champs propres au type dans un ordre fixe.
"""

import math
from datetime import datetime
from typing import Any, Iterable

from es_metrics.application.naming import FieldNamer, index_name
from es_metrics.domain.models import (
    CounterValue,
    Document,
    DocumentField,
    HistogramValue,
    MeterValue,
    MetricTags,
    MetricType,
    RollingIndexType,
    TimerValue,
    Unit,
    format_timestamp,
)


PERCENTILE_999 = "Percentile 99.9%"


class DocumentBuilder:
    """Construit un document par métrique."""

    def __init__(
        self,
        index: str,
        host_name: str,
        field_namer: FieldNamer | None = None,
        rolling_index: RollingIndexType = RollingIndexType.NONE,
    ):
        """Initialise le builder.

        Args:
            index: Nom de base de l'index
            host_name: Identifiant de l'hôte (champ ServerName), résolu une fois
            field_namer: Règle de nommage des champs pointés
            rolling_index: Rotation de l'index (NONE, DAILY, MONTHLY)
        """
        self.index = index
        self.host_name = host_name
        self.field_namer = field_namer or FieldNamer()
        self.rolling_index = rolling_index

    def _pack(
        self,
        metric_type: MetricType,
        timestamp: datetime,
        name: str,
        unit: Unit,
        tags: MetricTags,
        properties: Iterable[tuple[str, Any]],
    ) -> Document:
        header = [
            ("Timestamp", format_timestamp(timestamp)),
            ("Type", metric_type.value),
            ("Name", name),
            ("ServerName", self.host_name),
            ("Unit", str(unit)),
            ("Tags", list(MetricTags.of(tags))),
        ]
        fields = tuple(DocumentField(k, v) for k, v in [*header, *properties])
        return Document(
            index=index_name(self.index, self.rolling_index, timestamp),
            type=metric_type.value,
            fields=fields,
        )

    # -------------------------------------------------------------------------
    # Gauge
    # -------------------------------------------------------------------------

    def gauge(
        self,
        timestamp: datetime,
        name: str,
        value: float,
        unit: Unit,
        tags: MetricTags,
    ) -> Document | None:
        """Document pour une gauge, None si la valeur est NaN ou infinie."""
        if math.isnan(value) or math.isinf(value):
            return None
        return self._pack(MetricType.GAUGE, timestamp, name, unit, tags, [("Value", value)])

    # -------------------------------------------------------------------------
    # Counter
    # -------------------------------------------------------------------------

    def counter(
        self,
        timestamp: datetime,
        name: str,
        value: CounterValue,
        unit: Unit,
        tags: MetricTags,
    ) -> Document:
        properties: list[tuple[str, Any]] = [("Count", value.count)]
        for item in value.items:
            properties.append((f"{item.item} - Count", item.count))
            properties.append((f"{item.item} - Percent", item.percent))
        return self._pack(MetricType.COUNTER, timestamp, name, unit, tags, properties)

    # -------------------------------------------------------------------------
    # Meter
    # -------------------------------------------------------------------------

    def meter(
        self,
        timestamp: datetime,
        name: str,
        value: MeterValue,
        unit: Unit,
        tags: MetricTags,
    ) -> Document:
        properties: list[tuple[str, Any]] = [
            ("Count", value.count),
            ("Mean Rate", value.mean_rate),
            ("1 Min Rate", value.one_minute_rate),
            ("5 Min Rate", value.five_minute_rate),
            ("15 Min Rate", value.fifteen_minute_rate),
        ]
        for item in value.items:
            properties.extend(
                [
                    (f"{item.item} - Count", item.value.count),
                    (f"{item.item} - Percent", item.percent),
                    (f"{item.item} - Mean Rate", item.value.mean_rate),
                    (f"{item.item} - 1 Min Rate", item.value.one_minute_rate),
                    (f"{item.item} - 5 Min Rate", item.value.five_minute_rate),
                    (f"{item.item} - 15 Min Rate", item.value.fifteen_minute_rate),
                ]
            )
        return self._pack(MetricType.METER, timestamp, name, unit, tags, properties)

    # -------------------------------------------------------------------------
    # Histogram & Timer
    # -------------------------------------------------------------------------

    def _distribution(self, value: HistogramValue) -> list[tuple[str, Any]]:
        """Champs de distribution communs à Histogram et Timer (hors count)."""
        return [
            ("Last", value.last_value),
            ("Last User Value", value.last_user_value),
            ("Min", value.min),
            ("Min User Value", value.min_user_value),
            ("Mean", value.mean),
            ("Max", value.max),
            ("Max User Value", value.max_user_value),
            ("StdDev", value.std_dev),
            ("Median", value.median),
            ("Percentile 75%", value.percentile_75),
            ("Percentile 95%", value.percentile_95),
            ("Percentile 98%", value.percentile_98),
            ("Percentile 99%", value.percentile_99),
            (self.field_namer.adjust(PERCENTILE_999), value.percentile_999),
            ("Sample Size", value.sample_size),
        ]

    def histogram(
        self,
        timestamp: datetime,
        name: str,
        value: HistogramValue,
        unit: Unit,
        tags: MetricTags,
    ) -> Document:
        properties = [("Total Count", value.count), *self._distribution(value)]
        return self._pack(MetricType.HISTOGRAM, timestamp, name, unit, tags, properties)

    def timer(
        self,
        timestamp: datetime,
        name: str,
        value: TimerValue,
        unit: Unit,
        tags: MetricTags,
    ) -> Document:
        properties = [
            ("Total Count", value.rate.count),
            ("Active Sessions", value.active_sessions),
            ("Mean Rate", value.rate.mean_rate),
            ("1 Min Rate", value.rate.one_minute_rate),
            ("5 Min Rate", value.rate.five_minute_rate),
            ("15 Min Rate", value.rate.fifteen_minute_rate),
            *self._distribution(value.histogram),
        ]
        return self._pack(MetricType.TIMER, timestamp, name, unit, tags, properties)
