"""Store interfaces consumed by the classification engine.

Implementations may block; they signal unknown ids with ``NotFoundError``
and any other failure with an exception of their choosing, which the engine
wraps into ``StoreFailure``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from issueclass.models.anomalies import ClassificationConfig, FunctionConfig, MergedAnomalyResult


@runtime_checkable
class AnomalyFunctionStore(Protocol):
    def find_by_id(self, function_id: int) -> FunctionConfig:
        ...


@runtime_checkable
class MergedAnomalyStore(Protocol):
    def find_overlapping(
        self,
        function_id: int,
        start_time: int,
        end_time: int,
        exclude_child: bool = False,
    ) -> Sequence[MergedAnomalyResult]:
        ...

    def find_overlapping_by_dimensions(
        self,
        function_id: int,
        start_time: int,
        end_time: int,
        dimensions: str,
        exclude_child: bool = False,
    ) -> Sequence[MergedAnomalyResult]:
        """Like ``find_overlapping`` restricted to an exact canonical dimension string."""
        ...

    def update(self, anomaly: MergedAnomalyResult) -> None:
        ...


@runtime_checkable
class ClassificationConfigStore(Protocol):
    def find_by_id(self, config_id: int) -> ClassificationConfig:
        ...

    def update(self, config: ClassificationConfig) -> None:
        ...
