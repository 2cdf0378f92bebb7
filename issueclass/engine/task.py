"""Adapter between a task-scheduling host and the classification engine.

The host hands over a ``ClassificationTaskInfo`` (which window of which
config to process) together with a ``TaskContext`` holding the shared
collaborators.  Every ``execute`` builds a fresh engine so no run-scoped
state leaks between tasks.  Retries are the host's business: a failed task
raises ``RunFailure`` and leaves the watermark untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from issueclass.classifiers.factory import AnomalyClassifierFactory
from issueclass.engine.runner import ClassificationEngine, RunSummary
from issueclass.engine.strategies import strategy_for
from issueclass.filters.factory import AlertFilterFactory
from issueclass.models.anomalies import ClassificationConfig
from issueclass.models.config import EngineConfig
from issueclass.store.base import AnomalyFunctionStore, ClassificationConfigStore, MergedAnomalyStore


@dataclass(frozen=True)
class ClassificationTaskInfo:
    """One window of one classification config."""

    window_start: int
    window_end: int
    classification_config: ClassificationConfig


@dataclass
class TaskContext:
    """Collaborators shared by every task the host runs."""

    function_store: AnomalyFunctionStore
    anomaly_store: MergedAnomalyStore
    config_store: ClassificationConfigStore
    alert_filter_factory: AlertFilterFactory = field(default_factory=AlertFilterFactory)
    anomaly_classifier_factory: AnomalyClassifierFactory = field(default_factory=AnomalyClassifierFactory)
    engine_config: EngineConfig = field(default_factory=EngineConfig)


@dataclass(frozen=True)
class TaskResult:
    """Per-task output reported back to the host."""

    summary: RunSummary


class ClassificationTaskRunner:
    """Runs a classification task for the scheduling host."""

    def execute(self, task_info: ClassificationTaskInfo, task_context: TaskContext) -> list[TaskResult]:
        engine = ClassificationEngine(
            function_store=task_context.function_store,
            anomaly_store=task_context.anomaly_store,
            config_store=task_context.config_store,
            filter_factory=task_context.alert_filter_factory,
            classifier_factory=task_context.anomaly_classifier_factory,
            inactive_strategy=strategy_for(task_context.engine_config.inactive_function_policy),
            exclude_child_anomalies=task_context.engine_config.exclude_child_anomalies,
        )
        summary = engine.run(task_info.window_start, task_info.window_end, task_info.classification_config)
        return [TaskResult(summary=summary)]


def plan_windows(
    config: ClassificationConfig,
    now: int,
    period: int,
    max_windows: int | None = None,
) -> list[ClassificationTaskInfo]:
    """Split the time between the config's watermark and *now* into tasks.

    Windows are ``period`` long and start at the watermark; a trailing
    partial window is not emitted until it is complete.
    """
    if period <= 0:
        raise ValueError(f"Window period must be positive, got {period}")
    tasks: list[ClassificationTaskInfo] = []
    start = config.end_time_watermark
    while start + period <= now:
        if max_windows is not None and len(tasks) >= max_windows:
            break
        tasks.append(ClassificationTaskInfo(start, start + period, config))
        start += period
    return tasks
