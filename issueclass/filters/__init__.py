"""Alert filters: decide which anomalies qualify for classification."""

from issueclass.filters.base import AlertFilter
from issueclass.filters.builtin import DummyAlertFilter, IssueTypeAlertFilter, WeightThresholdAlertFilter
from issueclass.filters.factory import AlertFilterFactory

__all__ = [
    "AlertFilter",
    "AlertFilterFactory",
    "DummyAlertFilter",
    "IssueTypeAlertFilter",
    "WeightThresholdAlertFilter",
]
