"""Anomaly classifiers: assign issue types to main anomalies per dimension."""

from issueclass.classifiers.base import AnomaliesByFunction, AnomalyClassifier
from issueclass.classifiers.builtin import CorrelatedOverlapClassifier, DummyAnomalyClassifier
from issueclass.classifiers.factory import AnomalyClassifierFactory

__all__ = [
    "AnomaliesByFunction",
    "AnomalyClassifier",
    "AnomalyClassifierFactory",
    "CorrelatedOverlapClassifier",
    "DummyAnomalyClassifier",
]
