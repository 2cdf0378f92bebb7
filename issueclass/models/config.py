"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class EngineConfig:
    """Classification engine configuration."""

    exclude_child_anomalies: bool = False
    inactive_function_policy: str = "skip"


@dataclass
class StateConfig:
    """Location of the JSON state file used by the CLI."""

    path: str = "issueclass-state.json"


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class IssueClassConfig:
    """Top-level issueclass configuration."""

    engine: EngineConfig = field(default_factory=EngineConfig)
    state: StateConfig = field(default_factory=StateConfig)
    log: LogConfig = field(default_factory=LogConfig)
