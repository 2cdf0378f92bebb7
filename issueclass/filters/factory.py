"""Alert filter factory."""

from __future__ import annotations

from issueclass.filters.base import AlertFilter
from issueclass.filters.builtin import DummyAlertFilter, IssueTypeAlertFilter, WeightThresholdAlertFilter
from issueclass.plugins import SpecFactory

BUILTIN_FILTERS: dict[str, type[AlertFilter]] = {
    cls.filter_type: cls for cls in (DummyAlertFilter, WeightThresholdAlertFilter, IssueTypeAlertFilter)
}


class AlertFilterFactory(SpecFactory[AlertFilter]):
    """Builds an ``AlertFilter`` from a function's alert filter spec."""

    kind = "alert filter"

    def __init__(self) -> None:
        super().__init__(default_type=DummyAlertFilter.filter_type, plugins=BUILTIN_FILTERS)
