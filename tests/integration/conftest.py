"""Shared fixtures for issueclass integration tests.

Provides in-memory stores seeded with a main function (1), an active
correlated function (2) and an inactive correlated function (3), plus a
classification config (7) tying them together, so integration tests can
exercise full runs without a real database.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import pytest

from issueclass.classifiers.base import AnomaliesByFunction, AnomalyClassifier
from issueclass.classifiers.factory import AnomalyClassifierFactory
from issueclass.engine.runner import ClassificationEngine
from issueclass.models.anomalies import ClassificationConfig, FunctionConfig, MergedAnomalyResult
from issueclass.models.dimensions import DimensionKey
from issueclass.store.memory import (
    InMemoryAnomalyStore,
    InMemoryClassificationConfigStore,
    InMemoryFunctionStore,
)

MAIN_FUNCTION_ID = 1
CORRELATED_FUNCTION_ID = 2
INACTIVE_FUNCTION_ID = 3
CONFIG_ID = 7

US = DimensionKey.of(country="US")
CA = DimensionKey.of(country="CA")


# ---------------------------------------------------------------------------
# Factory helpers
# ---------------------------------------------------------------------------


def make_anomaly(
    anomaly_id: int,
    function_id: int = MAIN_FUNCTION_ID,
    dimensions: DimensionKey = US,
    start_time: int = 1100,
    end_time: int = 1900,
    issue_type: str | None = None,
    weight: float = 0.5,
    score: float = 0.5,
    child: bool = False,
) -> MergedAnomalyResult:
    """Create a MergedAnomalyResult with sensible defaults for testing."""
    return MergedAnomalyResult(
        anomaly_id=anomaly_id,
        function_id=function_id,
        dimensions=dimensions,
        start_time=start_time,
        end_time=end_time,
        issue_type=issue_type,
        weight=weight,
        score=score,
        child=child,
    )


def make_config(
    correlated_function_ids: Sequence[int] = (CORRELATED_FUNCTION_ID,),
    classifier_config: dict[str, str] | None = None,
    end_time_watermark: int = 0,
) -> ClassificationConfig:
    return ClassificationConfig(
        config_id=CONFIG_ID,
        main_function_id=MAIN_FUNCTION_ID,
        correlated_function_ids=list(correlated_function_ids),
        classifier_config=classifier_config if classifier_config is not None else {"type": "correlated_overlap"},
        end_time_watermark=end_time_watermark,
    )


# ---------------------------------------------------------------------------
# Recording classifier
# ---------------------------------------------------------------------------


@dataclass
class ClassifierCall:
    anomalies_by_function: dict[int, list[MergedAnomalyResult]]
    config: ClassificationConfig


class RecordingClassifier(AnomalyClassifier):
    """Records every call and labels every main anomaly with ``issue_type``."""

    classifier_type = "recording"
    calls: list[ClassifierCall] = []

    def __init__(self, issue_type: str | None = "RECORDED") -> None:
        self._issue_type = issue_type

    @classmethod
    def from_params(cls, params: dict[str, str]) -> RecordingClassifier:  # type: ignore[override]
        issue_type = params.get("issue_type", "RECORDED")
        return cls(None if issue_type == "" else issue_type)

    def classify(
        self,
        anomalies_by_function: AnomaliesByFunction,
        config: ClassificationConfig,
    ) -> list[MergedAnomalyResult]:
        RecordingClassifier.calls.append(
            ClassifierCall({fid: list(a) for fid, a in anomalies_by_function.items()}, config)
        )
        if self._issue_type is None:
            return []
        return [a.with_issue_type(self._issue_type) for a in anomalies_by_function[config.main_function_id]]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def function_store() -> InMemoryFunctionStore:
    return InMemoryFunctionStore(
        [
            FunctionConfig(function_id=MAIN_FUNCTION_ID, name="page_views"),
            FunctionConfig(function_id=CORRELATED_FUNCTION_ID, name="error_rate"),
            FunctionConfig(function_id=INACTIVE_FUNCTION_ID, is_active=False, name="latency"),
        ]
    )


@pytest.fixture()
def anomaly_store() -> InMemoryAnomalyStore:
    return InMemoryAnomalyStore()


@pytest.fixture()
def config_store() -> InMemoryClassificationConfigStore:
    return InMemoryClassificationConfigStore([make_config()])


@pytest.fixture()
def classifier_factory() -> AnomalyClassifierFactory:
    RecordingClassifier.calls = []
    factory = AnomalyClassifierFactory()
    factory.register(RecordingClassifier.classifier_type, RecordingClassifier)
    return factory


@pytest.fixture()
def engine(
    function_store: InMemoryFunctionStore,
    anomaly_store: InMemoryAnomalyStore,
    config_store: InMemoryClassificationConfigStore,
    classifier_factory: AnomalyClassifierFactory,
) -> ClassificationEngine:
    return ClassificationEngine(
        function_store=function_store,
        anomaly_store=anomaly_store,
        config_store=config_store,
        classifier_factory=classifier_factory,
    )
