"""Run-scoped cache of function configs and their alert filters."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from issueclass.errors import ConfigLoadFailure, NotFoundError, StoreFailure
from issueclass.filters.base import AlertFilter
from issueclass.filters.factory import AlertFilterFactory
from issueclass.models.anomalies import FunctionConfig
from issueclass.observability.logging import get_logger
from issueclass.store.base import AnomalyFunctionStore

_log = get_logger("engine.cache")


class FunctionEntry(NamedTuple):
    config: FunctionConfig
    alert_filter: AlertFilter


class FunctionConfigCache:
    """Maps function id to (FunctionConfig, AlertFilter) for one run.

    The first ``get`` for an id reads the store and builds the filter; later
    calls return the memoised entry.  Entries are never evicted.  A cache
    belongs to exactly one run and is discarded with it, so configuration
    changes between runs are always picked up.
    """

    def __init__(self, function_store: AnomalyFunctionStore, filter_factory: AlertFilterFactory) -> None:
        self._function_store = function_store
        self._filter_factory = filter_factory
        self._entries: dict[int, FunctionEntry] = {}

    def __contains__(self, function_id: object) -> bool:
        return function_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, function_id: int) -> FunctionEntry:
        entry = self._entries.get(function_id)
        if entry is None:
            entry = self._load(function_id)
            self._entries[function_id] = entry
        return entry

    def warm(self, function_ids: Iterable[int]) -> None:
        """Populate entries for every id up front."""
        for function_id in function_ids:
            self.get(function_id)

    def _load(self, function_id: int) -> FunctionEntry:
        try:
            config = self._function_store.find_by_id(function_id)
        except NotFoundError as exc:
            raise ConfigLoadFailure("load_function", exc, function_id=function_id) from exc
        except Exception as exc:
            raise StoreFailure("load_function", exc, function_id=function_id) from exc

        try:
            alert_filter = self._filter_factory.from_spec(config.alert_filter)
        except Exception as exc:
            raise ConfigLoadFailure("build_alert_filter", exc, function_id=function_id) from exc

        _log.debug(
            "function_config_loaded",
            function_id=function_id,
            active=config.is_active,
            alert_filter=type(alert_filter).__name__,
        )
        return FunctionEntry(config=config, alert_filter=alert_filter)
