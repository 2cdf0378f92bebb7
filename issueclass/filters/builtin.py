"""Built-in alert filters."""

from __future__ import annotations

from collections.abc import Mapping

from issueclass.errors import InvalidSpecError
from issueclass.filters.base import AlertFilter
from issueclass.models.anomalies import MergedAnomalyResult

_TRUE_VALUES = ("true", "1", "yes")


def _float_param(params: Mapping[str, str], key: str, default: float) -> float:
    raw = params.get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise InvalidSpecError(f"Alert filter parameter '{key}' must be numeric, got {raw!r}") from None


class DummyAlertFilter(AlertFilter):
    """Qualifies every anomaly."""

    filter_type = "dummy"

    def is_qualified(self, anomaly: MergedAnomalyResult) -> bool:
        return True


class WeightThresholdAlertFilter(AlertFilter):
    """Qualifies anomalies whose absolute weight and score reach the thresholds.

    Params:
        min_weight -- minimum ``abs(anomaly.weight)``; default 0.
        min_score  -- minimum ``anomaly.score``; default 0.
    """

    filter_type = "weight_threshold"

    def __init__(self, min_weight: float = 0.0, min_score: float = 0.0) -> None:
        if min_weight < 0:
            raise InvalidSpecError(f"min_weight must be >= 0, got {min_weight}")
        self._min_weight = min_weight
        self._min_score = min_score

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> WeightThresholdAlertFilter:
        return cls(
            min_weight=_float_param(params, "min_weight", 0.0),
            min_score=_float_param(params, "min_score", 0.0),
        )

    def is_qualified(self, anomaly: MergedAnomalyResult) -> bool:
        return abs(anomaly.weight) >= self._min_weight and anomaly.score >= self._min_score


class IssueTypeAlertFilter(AlertFilter):
    """Qualifies anomalies by their current issue type.

    Params:
        issue_types -- comma-separated list; the literal ``none`` matches an
                       anomaly without an issue type.
        exclude     -- when true, qualify anomalies NOT in the list.
    """

    filter_type = "issue_type"

    def __init__(self, issue_types: frozenset[str | None], exclude: bool = False) -> None:
        self._issue_types = issue_types
        self._exclude = exclude

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> IssueTypeAlertFilter:
        raw = params.get("issue_types", "")
        names = [name.strip() for name in raw.split(",") if name.strip()]
        if not names:
            raise InvalidSpecError("issue_type filter requires a non-empty 'issue_types' parameter")
        issue_types = frozenset(None if name.lower() == "none" else name for name in names)
        exclude = params.get("exclude", "false").lower() in _TRUE_VALUES
        return cls(issue_types, exclude=exclude)

    def is_qualified(self, anomaly: MergedAnomalyResult) -> bool:
        listed = anomaly.issue_type in self._issue_types
        return not listed if self._exclude else listed
