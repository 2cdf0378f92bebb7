"""Anomaly classifier capability."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence

from issueclass.models.anomalies import ClassificationConfig, MergedAnomalyResult

AnomaliesByFunction = Mapping[int, Sequence[MergedAnomalyResult]]


class AnomalyClassifier(ABC):
    """Assigns issue types to the main anomalies of one dimensional slice.

    ``classify`` receives the slice's anomalies keyed by source function id.
    The main function's entry is always present; a correlated function only
    appears when it contributed at least one qualified anomaly.  Each list is
    ordered by end time.

    The return value holds only main-function anomalies taken from the input,
    each possibly carrying a new issue type.  Anomalies left out keep their
    stored issue type; records are never added or removed.
    """

    classifier_type: str = ""

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> AnomalyClassifier:
        return cls()

    @abstractmethod
    def classify(
        self,
        anomalies_by_function: AnomaliesByFunction,
        config: ClassificationConfig,
    ) -> list[MergedAnomalyResult]:
        ...
