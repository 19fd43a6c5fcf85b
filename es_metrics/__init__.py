"""Metrics reporter for Elasticsearch.

Convertit un snapshot de métriques (gauges, counters, meters, histograms,
timers) en documents et les indexe via l'API _bulk.
"""

__version__ = "0.1.0"
