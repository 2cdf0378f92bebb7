"""Prometheus metrics for classification runs."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

runs_total = Counter(
    "issueclass_runs_total",
    "Classification runs by outcome",
    ["outcome"],
)

anomalies_classified_total = Counter(
    "issueclass_anomalies_classified_total",
    "Main anomalies whose issue type was persisted",
    ["config_id"],
)

anomalies_filtered_total = Counter(
    "issueclass_anomalies_filtered_total",
    "Anomalies passed through an alert filter",
    ["function_id", "qualified"],
)

run_duration_seconds = Histogram(
    "issueclass_run_duration_seconds",
    "Wall-clock duration of a classification run",
    buckets=(0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 15.0, 60.0),
)
