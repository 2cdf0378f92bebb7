"""Dimension grouping and correlated-window computation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from issueclass.models.anomalies import MergedAnomalyResult
from issueclass.models.dimensions import DimensionKey


@dataclass(frozen=True)
class TimeWindow:
    """A time range in epoch milliseconds.

    ``start > end`` is a valid, degenerate window: it contains no instant and
    a fetch over it returns nothing.
    """

    start: int
    end: int

    @property
    def is_degenerate(self) -> bool:
        return self.start > self.end

    def __str__(self) -> str:
        return f"[{self.start}, {self.end}]"


def group_by_dimensions(
    anomalies: Iterable[MergedAnomalyResult],
) -> dict[DimensionKey, list[MergedAnomalyResult]]:
    """Partition *anomalies* by dimension key.

    Groups are keyed in first-seen order and keep the input order within each
    group.  Every anomaly lands in exactly one group.
    """
    groups: dict[DimensionKey, list[MergedAnomalyResult]] = {}
    for anomaly in anomalies:
        groups.setdefault(anomaly.dimensions, []).append(anomaly)
    return groups


def correlated_window(
    window_start: int,
    window_end: int,
    group: Sequence[MergedAnomalyResult],
) -> TimeWindow:
    """Window used to fetch correlated anomalies for one dimension group.

    Start is the latest of the run start and every member's start; end is the
    earliest of the run end and every member's end.  Members whose spans do
    not overlap produce a degenerate window.
    """
    start = max([window_start, *(anomaly.start_time for anomaly in group)])
    end = min([window_end, *(anomaly.end_time for anomaly in group)])
    return TimeWindow(start=start, end=end)
