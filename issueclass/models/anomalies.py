"""Anomaly, detection-function and classification-config data structures."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from issueclass.models.dimensions import DimensionKey


@dataclass(frozen=True)
class MergedAnomalyResult:
    """A merged anomaly produced by a detection function.

    Owned by the anomaly store; identity is ``anomaly_id``.  Instances are
    immutable: an updated issue type is expressed as a new instance (see
    ``with_issue_type``) which the store persists through an explicit update.
    ``start_time`` and ``end_time`` are epoch milliseconds.
    """

    anomaly_id: int
    function_id: int
    dimensions: DimensionKey
    start_time: int
    end_time: int
    issue_type: str | None = None
    weight: float = 0.0
    score: float = 0.0
    child: bool = False
    properties: dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    def with_issue_type(self, issue_type: str | None) -> MergedAnomalyResult:
        return replace(self, issue_type=issue_type)

    def overlaps(self, start: int, end: int) -> bool:
        """Closed-interval overlap test against [start, end]."""
        return self.start_time <= end and self.end_time >= start


@dataclass(frozen=True)
class FunctionConfig:
    """Snapshot of an anomaly detection function's configuration."""

    function_id: int
    is_active: bool = True
    alert_filter: dict[str, str] = field(default_factory=dict)
    name: str = ""


@dataclass
class ClassificationConfig:
    """Persistent classification job configuration.

    ``end_time_watermark`` is the end of the last successfully processed
    window and only ever moves forward.
    """

    config_id: int
    main_function_id: int
    correlated_function_ids: list[int] = field(default_factory=list)
    classifier_config: dict[str, str] = field(default_factory=dict)
    end_time_watermark: int = 0
    name: str = ""
    active: bool = True
