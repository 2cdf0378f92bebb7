"""In-memory store implementations.

Records are kept by id.  Anomaly and function records are frozen and
returned as stored; their ``properties``/``alert_filter`` dicts are shared
with the store and must be treated as read-only.  Classification configs
are mutable and are copied in and out, so a config only changes through
``update``.  Used by the CLI (backed by a JSON state file) and by the test
suite.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable

from issueclass.errors import NotFoundError
from issueclass.models.anomalies import ClassificationConfig, FunctionConfig, MergedAnomalyResult


class InMemoryFunctionStore:
    """Anomaly function configurations keyed by function id."""

    def __init__(self, functions: Iterable[FunctionConfig] = ()) -> None:
        self._functions: dict[int, FunctionConfig] = {f.function_id: f for f in functions}

    def add(self, function: FunctionConfig) -> None:
        self._functions[function.function_id] = function

    def find_by_id(self, function_id: int) -> FunctionConfig:
        try:
            return self._functions[function_id]
        except KeyError:
            raise NotFoundError(f"Anomaly function {function_id} not found") from None

    def all(self) -> list[FunctionConfig]:
        return sorted(self._functions.values(), key=lambda f: f.function_id)


class InMemoryAnomalyStore:
    """Merged anomalies keyed by anomaly id.

    Overlap queries use closed intervals; a query window whose start lies
    after its end matches nothing.  Results are ordered by anomaly id.
    """

    def __init__(self, anomalies: Iterable[MergedAnomalyResult] = ()) -> None:
        self._anomalies: dict[int, MergedAnomalyResult] = {a.anomaly_id: a for a in anomalies}
        self.update_calls: int = 0

    def add(self, anomaly: MergedAnomalyResult) -> None:
        self._anomalies[anomaly.anomaly_id] = anomaly

    def get(self, anomaly_id: int) -> MergedAnomalyResult:
        try:
            return self._anomalies[anomaly_id]
        except KeyError:
            raise NotFoundError(f"Merged anomaly {anomaly_id} not found") from None

    def find_overlapping(
        self,
        function_id: int,
        start_time: int,
        end_time: int,
        exclude_child: bool = False,
    ) -> list[MergedAnomalyResult]:
        if start_time > end_time:
            return []
        return [
            anomaly
            for _, anomaly in sorted(self._anomalies.items())
            if anomaly.function_id == function_id
            and anomaly.overlaps(start_time, end_time)
            and not (exclude_child and anomaly.child)
        ]

    def find_overlapping_by_dimensions(
        self,
        function_id: int,
        start_time: int,
        end_time: int,
        dimensions: str,
        exclude_child: bool = False,
    ) -> list[MergedAnomalyResult]:
        return [
            anomaly
            for anomaly in self.find_overlapping(function_id, start_time, end_time, exclude_child)
            if anomaly.dimensions.canonical() == dimensions
        ]

    def update(self, anomaly: MergedAnomalyResult) -> None:
        if anomaly.anomaly_id not in self._anomalies:
            raise NotFoundError(f"Merged anomaly {anomaly.anomaly_id} not found")
        self._anomalies[anomaly.anomaly_id] = anomaly
        self.update_calls += 1

    def all(self) -> list[MergedAnomalyResult]:
        return [anomaly for _, anomaly in sorted(self._anomalies.items())]


class InMemoryClassificationConfigStore:
    """Classification configs keyed by config id."""

    def __init__(self, configs: Iterable[ClassificationConfig] = ()) -> None:
        self._configs: dict[int, ClassificationConfig] = {c.config_id: copy.deepcopy(c) for c in configs}

    def find_by_id(self, config_id: int) -> ClassificationConfig:
        try:
            return copy.deepcopy(self._configs[config_id])
        except KeyError:
            raise NotFoundError(f"Classification config {config_id} not found") from None

    def update(self, config: ClassificationConfig) -> None:
        if config.config_id not in self._configs:
            raise NotFoundError(f"Classification config {config.config_id} not found")
        self._configs[config.config_id] = copy.deepcopy(config)

    def all(self) -> list[ClassificationConfig]:
        return [copy.deepcopy(c) for _, c in sorted(self._configs.items())]
