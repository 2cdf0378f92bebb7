"""Core data structures for issueclass."""

from issueclass.models.anomalies import (
    ClassificationConfig,
    FunctionConfig,
    MergedAnomalyResult,
)
from issueclass.models.config import IssueClassConfig
from issueclass.models.dimensions import DimensionKey

__all__ = [
    "ClassificationConfig",
    "DimensionKey",
    "FunctionConfig",
    "IssueClassConfig",
    "MergedAnomalyResult",
]
