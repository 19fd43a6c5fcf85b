"""Tests unitaires pour les modèles du domaine."""

from datetime import datetime, timedelta, timezone

import pytest

from es_metrics.domain.batch import ReportBatch
from es_metrics.domain.models import (
    Document,
    DocumentField,
    HealthCheckResult,
    HealthStatus,
    MetricTags,
    Unit,
    format_timestamp,
)


class TestFormatTimestamp:
    """Tests pour le formatage des timestamps."""

    def test_utc_instant(self):
        ts = datetime(2024, 3, 7, 10, 15, 30, 123456, tzinfo=timezone.utc)
        assert format_timestamp(ts) == "2024-03-07T10:15:30.1234Z"

    def test_naive_is_utc(self):
        ts = datetime(2024, 3, 7, 0, 0, 0)
        assert format_timestamp(ts) == "2024-03-07T00:00:00.0000Z"

    def test_offset(self):
        tz = timezone(timedelta(hours=-5, minutes=-30))
        ts = datetime(2024, 3, 7, 8, 0, 0, tzinfo=tz)
        assert format_timestamp(ts) == "2024-03-07T08:00:00.0000-05:30"


class TestMetricTags:
    """Tests pour les tags."""

    def test_none(self):
        assert MetricTags.of(None).tags == ()

    def test_from_string(self):
        assert MetricTags.of("a, b,,c").tags == ("a", "b", "c")

    def test_from_iterable_keeps_order(self):
        assert list(MetricTags.of(["z", "a"])) == ["z", "a"]

    def test_idempotent(self):
        tags = MetricTags(("x",))
        assert MetricTags.of(tags) is tags


class TestUnit:
    def test_str_is_name(self):
        assert str(Unit.REQUESTS) == "Requests"
        assert str(Unit.custom("widgets")) == "widgets"


class TestHealthStatus:
    def test_healthy_when_all_pass(self):
        status = HealthStatus(
            results=(HealthCheckResult("db", True), HealthCheckResult("cache", True))
        )
        assert status.is_healthy

    def test_unhealthy_when_one_fails(self):
        status = HealthStatus(
            results=(HealthCheckResult("db", True), HealthCheckResult("cache", False, "down"))
        )
        assert not status.is_healthy
        assert status.has_registered_checks


class TestDocument:
    def test_source_preserves_order(self):
        doc = Document(
            index="metrics",
            type="Gauge",
            fields=(DocumentField("b", 1), DocumentField("a", 2)),
        )
        assert list(doc.source()) == ["b", "a"]
        assert doc.get("a") == 2
        assert doc.get("missing", "x") == "x"


class TestReportBatch:
    """Tests pour l'accumulateur de passe."""

    def test_timestamp_before_begin_raises(self):
        batch = ReportBatch("app")
        assert not batch.started
        with pytest.raises(RuntimeError):
            _ = batch.timestamp

    def test_append_and_drain(self, fixed_now):
        batch = ReportBatch("app")
        batch.begin(fixed_now)
        doc = Document("metrics", "Gauge", ())
        batch.append(doc)
        batch.append(doc)

        assert len(batch) == 2
        assert batch.drain() == [doc, doc]
        assert len(batch) == 0
        assert batch.drain() == []

    def test_begin_resets(self, fixed_now):
        batch = ReportBatch("app")
        batch.begin(fixed_now)
        batch.append(Document("metrics", "Gauge", ()))

        batch.begin(fixed_now + timedelta(minutes=1))

        assert len(batch) == 0
        assert batch.timestamp == fixed_now + timedelta(minutes=1)
        assert batch.formatted_timestamp == "2024-03-07T10:16:30.1234Z"
