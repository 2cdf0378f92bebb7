"""Alert filter capability."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping

from issueclass.models.anomalies import MergedAnomalyResult


class AlertFilter(ABC):
    """Decides whether a single anomaly is qualified for downstream processing.

    ``is_qualified`` must be a pure function of the anomaly and the filter's
    constructed state: no side effects, same answer on every call.
    """

    filter_type: str = ""

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> AlertFilter:
        """Build the filter from the spec parameters (the ``type`` key excluded)."""
        return cls()

    @abstractmethod
    def is_qualified(self, anomaly: MergedAnomalyResult) -> bool:
        ...

    def apply(self, anomalies: Iterable[MergedAnomalyResult]) -> list[MergedAnomalyResult]:
        """Return the qualified anomalies, preserving input order."""
        return [anomaly for anomaly in anomalies if self.is_qualified(anomaly)]
