#!/usr/bin/env python3
"""
Metrics Reporter Demo

This script builds one metrics snapshot and runs a reporting pass:
1. Dry run with the in-memory reporter (prints the bulk body)
2. Real pass against Elasticsearch, if METRICS_ES_BULK_URL is reachable

Run: python examples/report_demo.py
"""

import logging
import sys
sys.path.insert(0, '.')

from es_metrics.adapters.memory import InMemoryReportAdapter
from es_metrics.application.factory import create_report_adapter
from es_metrics.core.errors import UploadFailure
from es_metrics.domain.models import (
    CounterItem,
    CounterSource,
    CounterValue,
    GaugeSource,
    HistogramSource,
    HistogramValue,
    MetricsData,
    MetricTags,
    Unit,
)

# ANSI colors
GREEN = "\033[92m"
RED = "\033[91m"
BLUE = "\033[94m"
RESET = "\033[0m"
BOLD = "\033[1m"


def print_header(text: str):
    print(f"\n{BOLD}{BLUE}{'='*60}{RESET}")
    print(f"{BOLD}{BLUE}{text}{RESET}")
    print(f"{BOLD}{BLUE}{'='*60}{RESET}\n")


def build_snapshot() -> MetricsData:
    return MetricsData(
        context="demo",
        gauges=[GaugeSource("queue.depth", 12.0, Unit.ITEMS, MetricTags.of("demo"))],
        counters=[
            CounterSource(
                "orders",
                CounterValue(10, (CounterItem("web", 7, 70.0), CounterItem("api", 3, 30.0))),
                Unit.ITEMS,
            )
        ],
        histograms=[
            HistogramSource(
                "payload.size",
                HistogramValue(
                    count=3,
                    last_value=512,
                    min=128,
                    max=2048,
                    mean=896,
                    std_dev=820.5,
                    median=512,
                    percentile_75=2048,
                    percentile_95=2048,
                    percentile_98=2048,
                    percentile_99=2048,
                    percentile_999=2048,
                    sample_size=3,
                ),
                Unit.BYTES,
            )
        ],
    )


def main():
    logging.basicConfig(level=logging.INFO)
    snapshot = build_snapshot()

    print_header("1. Dry run (in memory)")
    dry_run = InMemoryReportAdapter(host_name="demo-host")
    produced = dry_run.run_report(snapshot)
    print(f"  Documents: {produced}")
    print(dry_run.export().decode("utf-8"))

    print_header("2. Elasticsearch")
    report = create_report_adapter()
    try:
        produced = report.run_report(snapshot)
        print(f"  {GREEN}Indexed {produced} documents{RESET}")
    except UploadFailure as e:
        print(f"  {RED}Upload failed: {e}{RESET}")


if __name__ == "__main__":
    main()
