"""Classification engine: assigns issue types to a main function's anomalies.

One run covers a window [window_start, window_end) of one classification
config:

1. Load the main function's config and alert filter.
2. Fetch the main anomalies overlapping the window and keep the qualified ones.
3. Sort them by end time and group them by dimension key.
4. For every group, fetch the qualified anomalies of each active correlated
   function within the group's correlated window and the same dimensions.
5. Hand each group to the classifier and collect the updated main anomalies.
6. Persist the updates, then advance and persist the config watermark.

Nothing is written until every group has been classified, and the watermark
is only written after every update succeeded.  A failure at any step raises
``RunFailure`` and leaves the watermark where it was.
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from dataclasses import dataclass, replace

from issueclass.classifiers.base import AnomalyClassifier
from issueclass.classifiers.factory import AnomalyClassifierFactory
from issueclass.engine.cache import FunctionConfigCache, FunctionEntry
from issueclass.engine.ordering import sort_by_end_time
from issueclass.engine.strategies import InactiveFunctionStrategy, SkipInactiveFunctions
from issueclass.engine.window import TimeWindow, correlated_window, group_by_dimensions
from issueclass.errors import ConfigLoadFailure, RunFailure, StoreFailure
from issueclass.filters.base import AlertFilter
from issueclass.filters.factory import AlertFilterFactory
from issueclass.models.anomalies import ClassificationConfig, MergedAnomalyResult
from issueclass.models.dimensions import DimensionKey
from issueclass.observability.logging import get_logger, run_context
from issueclass.observability.metrics import (
    anomalies_classified_total,
    anomalies_filtered_total,
    run_duration_seconds,
    runs_total,
)
from issueclass.store.base import AnomalyFunctionStore, ClassificationConfigStore, MergedAnomalyStore

_log = get_logger("engine.runner")


@dataclass(frozen=True)
class RunSummary:
    """Outcome of a successful run."""

    config_id: int
    window_start: int
    window_end: int
    qualified_main_anomalies: int = 0
    dimension_groups: int = 0
    updated_anomalies: int = 0
    watermark: int = 0


class ClassificationEngine:
    """Runs classification windows against a set of stores.

    The engine itself holds only collaborators.  Per-run state (the function
    config cache, the accumulated updates) is created inside ``run`` so two
    runs never share it.
    """

    def __init__(
        self,
        function_store: AnomalyFunctionStore,
        anomaly_store: MergedAnomalyStore,
        config_store: ClassificationConfigStore,
        filter_factory: AlertFilterFactory | None = None,
        classifier_factory: AnomalyClassifierFactory | None = None,
        inactive_strategy: InactiveFunctionStrategy | None = None,
        exclude_child_anomalies: bool = False,
    ) -> None:
        self._function_store = function_store
        self._anomaly_store = anomaly_store
        self._config_store = config_store
        self._filter_factory = filter_factory or AlertFilterFactory()
        self._classifier_factory = classifier_factory or AnomalyClassifierFactory()
        self._inactive_strategy = inactive_strategy or SkipInactiveFunctions()
        self._exclude_child = exclude_child_anomalies

    def run(self, window_start: int, window_end: int, config: ClassificationConfig) -> RunSummary:
        """Classify the main anomalies of *config* in [window_start, window_end).

        On success *config*'s watermark equals ``window_end`` (it never moves
        backwards) and the summary is returned.  Raises ``RunFailure``.
        """
        t_start = time.monotonic()
        with run_context(config.config_id, window_start, window_end):
            _log.info(
                "classification_run_started",
                main_function_id=config.main_function_id,
                correlated_function_ids=list(config.correlated_function_ids),
            )
            try:
                summary = self._run(window_start, window_end, config)
            except RunFailure as exc:
                runs_total.labels(outcome="failure").inc()
                _log.error("classification_run_failed", stage=exc.stage, error=str(exc))
                raise
            finally:
                run_duration_seconds.observe(time.monotonic() - t_start)

            runs_total.labels(outcome="success").inc()
            _log.info(
                "classification_run_completed",
                qualified=summary.qualified_main_anomalies,
                groups=summary.dimension_groups,
                updated=summary.updated_anomalies,
                watermark=summary.watermark,
            )
            return summary

    # ------------------------------------------------------------------
    # Run stages
    # ------------------------------------------------------------------

    def _run(self, window_start: int, window_end: int, config: ClassificationConfig) -> RunSummary:
        if window_start > window_end:
            raise RunFailure(
                "validate_window",
                ValueError("window start is after window end"),
                config_id=config.config_id,
                window=TimeWindow(window_start, window_end),
            )

        cache = FunctionConfigCache(self._function_store, self._filter_factory)
        main_id = config.main_function_id
        main_filter = cache.get(main_id).alert_filter

        main_anomalies = self._fetch(main_id, TimeWindow(window_start, window_end), None)
        qualified = self._filter(main_id, main_filter, main_anomalies)

        updates: list[MergedAnomalyResult] = []
        groups: dict[DimensionKey, list[MergedAnomalyResult]] = {}
        if qualified:
            _log.info("main_anomalies_qualified", count=len(qualified), fetched=len(main_anomalies))
            groups = group_by_dimensions(sort_by_end_time(qualified))
            correlated_ids = self._correlated_ids(config)
            cache.warm(correlated_ids)
            classifier = self._build_classifier(config)

            for dimensions, members in groups.items():
                updates.extend(
                    self._classify_group(
                        window_start, window_end, config, dimensions, members, correlated_ids, cache, classifier
                    )
                )
        else:
            _log.info("no_qualified_main_anomalies", fetched=len(main_anomalies))

        self._persist_updates(config, updates)
        watermark = self._advance_watermark(config, window_end)

        return RunSummary(
            config_id=config.config_id,
            window_start=window_start,
            window_end=window_end,
            qualified_main_anomalies=len(qualified),
            dimension_groups=len(groups),
            updated_anomalies=len(updates),
            watermark=watermark,
        )

    def _classify_group(
        self,
        window_start: int,
        window_end: int,
        config: ClassificationConfig,
        dimensions: DimensionKey,
        members: list[MergedAnomalyResult],
        correlated_ids: Sequence[int],
        cache: FunctionConfigCache,
        classifier: AnomalyClassifier,
    ) -> list[MergedAnomalyResult]:
        window = correlated_window(window_start, window_end, members)
        by_function: dict[int, list[MergedAnomalyResult]] = {config.main_function_id: members}

        # A degenerate window holds no instant, so no correlated anomaly can fall in it.
        for function_id in correlated_ids if not window.is_degenerate else ():
            entry = cache.get(function_id)
            if entry.config.is_active:
                fetched = self._fetch(function_id, window, dimensions)
                anomalies = sort_by_end_time(self._filter(function_id, entry.alert_filter, fetched))
            else:
                anomalies = self._fetch_inactive(entry, window, dimensions)
            if anomalies:
                by_function[function_id] = anomalies

        _log.debug(
            "dimension_group_assembled",
            dimensions=dimensions.canonical(),
            main=len(members),
            correlated={fid: len(a) for fid, a in by_function.items() if fid != config.main_function_id},
            correlated_window=str(window),
            degenerate_window=window.is_degenerate,
        )

        try:
            result = classifier.classify(by_function, config)
            return _checked_classifier_output(config, members, result)
        except Exception as exc:
            raise RunFailure(
                "classify", exc, config_id=config.config_id, dimensions=dimensions.canonical()
            ) from exc

    def _fetch_inactive(
        self,
        entry: FunctionEntry,
        window: TimeWindow,
        dimensions: DimensionKey,
    ) -> list[MergedAnomalyResult]:
        function_id = entry.config.function_id
        try:
            fetched = self._inactive_strategy.fetch(entry.config, window, dimensions)
        except Exception as exc:
            raise RunFailure(
                f"inactive_function_{self._inactive_strategy.policy}",
                exc,
                function_id=function_id,
                window=window,
                dimensions=dimensions.canonical(),
            ) from exc
        if not fetched:
            _log.debug("inactive_function_skipped", function_id=function_id, policy=str(self._inactive_strategy.policy))
            return []
        return sort_by_end_time(self._filter(function_id, entry.alert_filter, fetched))

    # ------------------------------------------------------------------
    # Collaborator calls
    # ------------------------------------------------------------------

    def _fetch(
        self,
        function_id: int,
        window: TimeWindow,
        dimensions: DimensionKey | None,
    ) -> list[MergedAnomalyResult]:
        try:
            if dimensions is None:
                return list(
                    self._anomaly_store.find_overlapping(function_id, window.start, window.end, self._exclude_child)
                )
            return list(
                self._anomaly_store.find_overlapping_by_dimensions(
                    function_id, window.start, window.end, dimensions.canonical(), self._exclude_child
                )
            )
        except Exception as exc:
            raise StoreFailure(
                "fetch_anomalies",
                exc,
                function_id=function_id,
                window=window,
                dimensions=dimensions.canonical() if dimensions is not None else None,
            ) from exc

    @staticmethod
    def _filter(
        function_id: int,
        alert_filter: AlertFilter,
        anomalies: Sequence[MergedAnomalyResult],
    ) -> list[MergedAnomalyResult]:
        try:
            qualified = alert_filter.apply(anomalies)
        except Exception as exc:
            raise RunFailure("alert_filter", exc, function_id=function_id) from exc
        label = str(function_id)
        if qualified:
            anomalies_filtered_total.labels(function_id=label, qualified="true").inc(len(qualified))
        if len(anomalies) > len(qualified):
            anomalies_filtered_total.labels(function_id=label, qualified="false").inc(len(anomalies) - len(qualified))
        return qualified

    @staticmethod
    def _correlated_ids(config: ClassificationConfig) -> list[int]:
        """Configured correlated ids in order, without duplicates or the main id."""
        seen = {config.main_function_id}
        ids: list[int] = []
        for function_id in config.correlated_function_ids:
            if function_id in seen:
                if function_id == config.main_function_id:
                    _log.warning("main_function_listed_as_correlated", function_id=function_id)
                continue
            seen.add(function_id)
            ids.append(function_id)
        return ids

    def _build_classifier(self, config: ClassificationConfig) -> AnomalyClassifier:
        try:
            return self._classifier_factory.from_spec(config.classifier_config)
        except Exception as exc:
            raise ConfigLoadFailure("build_classifier", exc, config_id=config.config_id) from exc

    def _persist_updates(self, config: ClassificationConfig, updates: Sequence[MergedAnomalyResult]) -> None:
        for anomaly in updates:
            try:
                self._anomaly_store.update(anomaly)
            except Exception as exc:
                raise StoreFailure(
                    "update_anomaly", exc, config_id=config.config_id, anomaly_id=anomaly.anomaly_id
                ) from exc
        if updates:
            anomalies_classified_total.labels(config_id=str(config.config_id)).inc(len(updates))
            _log.info("anomalies_updated", count=len(updates))

    def _advance_watermark(self, config: ClassificationConfig, window_end: int) -> int:
        advanced = replace(config, end_time_watermark=max(config.end_time_watermark, window_end))
        try:
            self._config_store.update(advanced)
        except Exception as exc:
            raise StoreFailure("update_watermark", exc, config_id=config.config_id) from exc
        config.end_time_watermark = advanced.end_time_watermark
        _log.info("watermark_advanced", watermark=advanced.end_time_watermark)
        return advanced.end_time_watermark


def _checked_classifier_output(
    config: ClassificationConfig,
    members: Sequence[MergedAnomalyResult],
    result: Sequence[MergedAnomalyResult],
) -> list[MergedAnomalyResult]:
    """Apply the issue types a classifier returned to the group's stored members.

    Only main anomalies of the group may be returned, and only their issue
    type is taken over.  Repeated ids collapse to the last occurrence.
    """
    members_by_id = {anomaly.anomaly_id: anomaly for anomaly in members}
    by_id: dict[int, MergedAnomalyResult] = {}
    for returned in result:
        member = members_by_id.get(returned.anomaly_id)
        if member is None or returned.function_id != config.main_function_id:
            raise ValueError(
                f"classifier returned anomaly {returned.anomaly_id} of function {returned.function_id}, "
                "which is not a main anomaly of this dimension group"
            )
        by_id[member.anomaly_id] = member.with_issue_type(returned.issue_type)
    return list(by_id.values())
