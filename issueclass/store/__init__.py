"""Store interfaces and in-memory implementations.

Submodules:
    base        -- Protocols for the function, anomaly and config stores.
    memory      -- Dict-backed implementations.
    state_file  -- JSON state file load/save for the in-memory stores.
"""

from issueclass.store.base import AnomalyFunctionStore, ClassificationConfigStore, MergedAnomalyStore
from issueclass.store.memory import (
    InMemoryAnomalyStore,
    InMemoryClassificationConfigStore,
    InMemoryFunctionStore,
)
from issueclass.store.state_file import StateStores, load_state, save_state

__all__ = [
    "AnomalyFunctionStore",
    "ClassificationConfigStore",
    "InMemoryAnomalyStore",
    "InMemoryClassificationConfigStore",
    "InMemoryFunctionStore",
    "MergedAnomalyStore",
    "StateStores",
    "load_state",
    "save_state",
]
