"""End-time ordering of merged anomalies.

Anomalies are ordered by ``end_time`` ascending with ties broken by
``anomaly_id``, giving a total order that does not depend on the order the
store returned them in.  Keys are compared as Python ints, so arbitrarily
large timestamp differences are ordered correctly.
"""

from __future__ import annotations

from collections.abc import Iterable

from issueclass.models.anomalies import MergedAnomalyResult


def end_time_key(anomaly: MergedAnomalyResult) -> tuple[int, int]:
    return (anomaly.end_time, anomaly.anomaly_id)


def sort_by_end_time(anomalies: Iterable[MergedAnomalyResult]) -> list[MergedAnomalyResult]:
    return sorted(anomalies, key=end_time_key)
