"""Prometheus metrics for monitoring client standing, imports and AI drafting"""

from typing import Iterable

from prometheus_client import Counter, Histogram

from aqsati.domain.models import ClientSummary

# Status metrics
status_counter = Counter(
    "aqsati_status_classified_total",
    "Client status classifications served",
    ["tier"],  # paid | current | late
)

payments_recorded_counter = Counter(
    "aqsati_payments_recorded_total",
    "Installment payments recorded",
)

clients_imported_counter = Counter(
    "aqsati_clients_imported_total",
    "Clients created through CSV import",
)

# Generative language metrics
genai_latency_histogram = Histogram(
    "genai_latency_seconds",
    "Generative language API response time",
    buckets=[0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

genai_failure_counter = Counter(
    "genai_failures_total",
    "Failed generative language API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_statuses(summaries: Iterable[ClientSummary]) -> None:
    """Count served classifications per tier"""
    for summary in summaries:
        status_counter.labels(tier=summary.status.tier.value).inc()
