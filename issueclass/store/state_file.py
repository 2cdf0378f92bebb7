"""JSON state file backing the in-memory stores.

Layout::

    {
      "functions": [{"function_id": 1, "is_active": true, "alert_filter": {...}}],
      "anomalies": [{"anomaly_id": 10, "function_id": 1, "dimensions": {"country": "US"},
                     "start_time": 1100, "end_time": 1900, "issue_type": null}],
      "classification_configs": [{"config_id": 7, "main_function_id": 1,
                                  "correlated_function_ids": [2], "classifier_config": {...},
                                  "end_time_watermark": 0}]
    }
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from issueclass.models.anomalies import ClassificationConfig, FunctionConfig, MergedAnomalyResult
from issueclass.models.dimensions import DimensionKey
from issueclass.store.memory import (
    InMemoryAnomalyStore,
    InMemoryClassificationConfigStore,
    InMemoryFunctionStore,
)


@dataclass
class StateStores:
    """The three stores a classification run reads and writes."""

    functions: InMemoryFunctionStore = field(default_factory=InMemoryFunctionStore)
    anomalies: InMemoryAnomalyStore = field(default_factory=InMemoryAnomalyStore)
    configs: InMemoryClassificationConfigStore = field(default_factory=InMemoryClassificationConfigStore)


def _function_from_dict(raw: dict[str, Any]) -> FunctionConfig:
    return FunctionConfig(
        function_id=int(raw["function_id"]),
        is_active=bool(raw.get("is_active", True)),
        alert_filter={str(k): str(v) for k, v in (raw.get("alert_filter") or {}).items()},
        name=str(raw.get("name", "")),
    )


def _anomaly_from_dict(raw: dict[str, Any]) -> MergedAnomalyResult:
    return MergedAnomalyResult(
        anomaly_id=int(raw["anomaly_id"]),
        function_id=int(raw["function_id"]),
        dimensions=DimensionKey.of(raw.get("dimensions") or {}),
        start_time=int(raw["start_time"]),
        end_time=int(raw["end_time"]),
        issue_type=raw.get("issue_type"),
        weight=float(raw.get("weight", 0.0)),
        score=float(raw.get("score", 0.0)),
        child=bool(raw.get("child", False)),
        properties={str(k): str(v) for k, v in (raw.get("properties") or {}).items()},
    )


def _config_from_dict(raw: dict[str, Any]) -> ClassificationConfig:
    return ClassificationConfig(
        config_id=int(raw["config_id"]),
        main_function_id=int(raw["main_function_id"]),
        correlated_function_ids=[int(f) for f in raw.get("correlated_function_ids", [])],
        classifier_config={str(k): str(v) for k, v in (raw.get("classifier_config") or {}).items()},
        end_time_watermark=int(raw.get("end_time_watermark", 0)),
        name=str(raw.get("name", "")),
        active=bool(raw.get("active", True)),
    )


def _anomaly_to_dict(anomaly: MergedAnomalyResult) -> dict[str, Any]:
    raw = asdict(anomaly)
    raw["dimensions"] = dict(anomaly.dimensions)
    return raw


def load_state(path: str | os.PathLike[str]) -> StateStores:
    """Load stores from *path*.  A missing file yields empty stores."""
    state_path = Path(path)
    if not state_path.exists():
        return StateStores()
    data = json.loads(state_path.read_text(encoding="utf-8"))
    return StateStores(
        functions=InMemoryFunctionStore(_function_from_dict(f) for f in data.get("functions", [])),
        anomalies=InMemoryAnomalyStore(_anomaly_from_dict(a) for a in data.get("anomalies", [])),
        configs=InMemoryClassificationConfigStore(_config_from_dict(c) for c in data.get("classification_configs", [])),
    )


def save_state(stores: StateStores, path: str | os.PathLike[str]) -> None:
    """Write *stores* to *path* atomically (temp file + rename)."""
    state_path = Path(path)
    payload = {
        "functions": [asdict(f) for f in stores.functions.all()],
        "anomalies": [_anomaly_to_dict(a) for a in stores.anomalies.all()],
        "classification_configs": [asdict(c) for c in stores.configs.all()],
    }
    fd, tmp_name = tempfile.mkstemp(dir=state_path.parent, prefix=".issueclass-", suffix=".json")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2, sort_keys=True)
        os.replace(tmp_name, state_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
