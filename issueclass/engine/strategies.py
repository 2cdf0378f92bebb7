"""How correlated anomalies are obtained for inactive detection functions.

An active function's anomalies are read from the store.  An inactive one has
no stored anomalies for the window, so the engine defers to a strategy.
``SkipInactiveFunctions`` contributes nothing.  ``AdhocDetection`` is the
slot for running the function on demand over the correlated window; it is
not implemented yet and raises when selected.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum

from issueclass.engine.window import TimeWindow
from issueclass.errors import AdhocDetectionUnavailable
from issueclass.models.anomalies import FunctionConfig, MergedAnomalyResult
from issueclass.models.dimensions import DimensionKey


class InactiveFunctionPolicy(StrEnum):
    """Selects the strategy for inactive correlated functions."""

    SKIP = "skip"
    ADHOC = "adhoc"


class InactiveFunctionStrategy(ABC):
    policy: InactiveFunctionPolicy

    @abstractmethod
    def fetch(
        self,
        function: FunctionConfig,
        window: TimeWindow,
        dimensions: DimensionKey,
    ) -> list[MergedAnomalyResult]:
        """Return anomalies of *function* within *window* for *dimensions*."""


class SkipInactiveFunctions(InactiveFunctionStrategy):
    policy = InactiveFunctionPolicy.SKIP

    def fetch(
        self,
        function: FunctionConfig,
        window: TimeWindow,
        dimensions: DimensionKey,
    ) -> list[MergedAnomalyResult]:
        return []


class AdhocDetection(InactiveFunctionStrategy):
    policy = InactiveFunctionPolicy.ADHOC

    def fetch(
        self,
        function: FunctionConfig,
        window: TimeWindow,
        dimensions: DimensionKey,
    ) -> list[MergedAnomalyResult]:
        raise AdhocDetectionUnavailable(
            f"On-demand detection for inactive function {function.function_id} is not available"
        )


def strategy_for(policy: str | InactiveFunctionPolicy) -> InactiveFunctionStrategy:
    try:
        resolved = InactiveFunctionPolicy(policy)
    except ValueError:
        valid = ", ".join(p.value for p in InactiveFunctionPolicy)
        raise ValueError(f"Invalid inactive function policy: {policy}. Must be one of {valid}") from None
    if resolved is InactiveFunctionPolicy.ADHOC:
        return AdhocDetection()
    return SkipInactiveFunctions()
