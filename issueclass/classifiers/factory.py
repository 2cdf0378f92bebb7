"""Anomaly classifier factory."""

from __future__ import annotations

from issueclass.classifiers.base import AnomalyClassifier
from issueclass.classifiers.builtin import CorrelatedOverlapClassifier, DummyAnomalyClassifier
from issueclass.plugins import SpecFactory

BUILTIN_CLASSIFIERS: dict[str, type[AnomalyClassifier]] = {
    cls.classifier_type: cls for cls in (DummyAnomalyClassifier, CorrelatedOverlapClassifier)
}


class AnomalyClassifierFactory(SpecFactory[AnomalyClassifier]):
    """Builds an ``AnomalyClassifier`` from a classification config's classifier spec."""

    kind = "anomaly classifier"

    def __init__(self) -> None:
        super().__init__(default_type=DummyAnomalyClassifier.classifier_type, plugins=BUILTIN_CLASSIFIERS)
