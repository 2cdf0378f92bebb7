"""Classification engine package.

Submodules:
    ordering    -- Total end-time ordering of anomalies.
    window      -- Dimension grouping and correlated-window computation.
    cache       -- Run-scoped function config / alert filter cache.
    strategies  -- Handling of inactive correlated functions.
    runner      -- ClassificationEngine, the per-window orchestrator.
    task        -- Adapter for the task-scheduling host.
"""

from issueclass.engine.cache import FunctionConfigCache, FunctionEntry
from issueclass.engine.runner import ClassificationEngine, RunSummary
from issueclass.engine.strategies import (
    AdhocDetection,
    InactiveFunctionPolicy,
    InactiveFunctionStrategy,
    SkipInactiveFunctions,
    strategy_for,
)
from issueclass.engine.task import (
    ClassificationTaskInfo,
    ClassificationTaskRunner,
    TaskContext,
    TaskResult,
    plan_windows,
)
from issueclass.engine.window import TimeWindow, correlated_window, group_by_dimensions

__all__ = [
    "AdhocDetection",
    "ClassificationEngine",
    "ClassificationTaskInfo",
    "ClassificationTaskRunner",
    "FunctionConfigCache",
    "FunctionEntry",
    "InactiveFunctionPolicy",
    "InactiveFunctionStrategy",
    "RunSummary",
    "SkipInactiveFunctions",
    "TaskContext",
    "TaskResult",
    "TimeWindow",
    "correlated_window",
    "group_by_dimensions",
    "plan_windows",
    "strategy_for",
]
