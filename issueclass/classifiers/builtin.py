"""Built-in anomaly classifiers."""

from __future__ import annotations

from collections.abc import Mapping

from issueclass.classifiers.base import AnomaliesByFunction, AnomalyClassifier
from issueclass.models.anomalies import ClassificationConfig, MergedAnomalyResult

DEFAULT_CORRELATED_ISSUE_TYPE = "CORRELATED"


class DummyAnomalyClassifier(AnomalyClassifier):
    """Leaves every issue type untouched."""

    classifier_type = "dummy"

    def classify(
        self,
        anomalies_by_function: AnomaliesByFunction,
        config: ClassificationConfig,
    ) -> list[MergedAnomalyResult]:
        return []


class CorrelatedOverlapClassifier(AnomalyClassifier):
    """Labels main anomalies that overlap an anomaly of any correlated function.

    Params:
        issue_type              -- label for correlated anomalies; default CORRELATED.
        uncorrelated_issue_type -- optional label for the rest; when unset they
                                   are not returned and keep their issue type.
    """

    classifier_type = "correlated_overlap"

    def __init__(
        self,
        issue_type: str = DEFAULT_CORRELATED_ISSUE_TYPE,
        uncorrelated_issue_type: str | None = None,
    ) -> None:
        self._issue_type = issue_type
        self._uncorrelated_issue_type = uncorrelated_issue_type

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> CorrelatedOverlapClassifier:
        return cls(
            issue_type=params.get("issue_type") or DEFAULT_CORRELATED_ISSUE_TYPE,
            uncorrelated_issue_type=params.get("uncorrelated_issue_type") or None,
        )

    def classify(
        self,
        anomalies_by_function: AnomaliesByFunction,
        config: ClassificationConfig,
    ) -> list[MergedAnomalyResult]:
        correlated = [
            anomaly
            for function_id, anomalies in anomalies_by_function.items()
            if function_id != config.main_function_id
            for anomaly in anomalies
        ]

        updated: list[MergedAnomalyResult] = []
        for main in anomalies_by_function.get(config.main_function_id, ()):
            if any(main.overlaps(other.start_time, other.end_time) for other in correlated):
                updated.append(main.with_issue_type(self._issue_type))
            elif self._uncorrelated_issue_type is not None:
                updated.append(main.with_issue_type(self._uncorrelated_issue_type))
        return updated
