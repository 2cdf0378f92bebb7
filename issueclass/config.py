"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from issueclass.engine.strategies import InactiveFunctionPolicy
from issueclass.models.config import EngineConfig, IssueClassConfig, LogConfig, StateConfig


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"ISSUECLASS_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def _validate_inactive_policy(value: str) -> str:
    valid = {policy.value for policy in InactiveFunctionPolicy}
    if value.lower() not in valid:
        raise ValueError(f"Invalid inactive function policy: {value}. Must be one of {valid}")
    return value.lower()


def load_config() -> IssueClassConfig:
    """Load configuration from ISSUECLASS_* environment variables."""
    return IssueClassConfig(
        engine=EngineConfig(
            exclude_child_anomalies=_env_bool("EXCLUDE_CHILD_ANOMALIES", False),
            inactive_function_policy=_validate_inactive_policy(_env("INACTIVE_FUNCTION_POLICY", "skip")),
        ),
        state=StateConfig(
            path=_env("STATE_FILE", "issueclass-state.json"),
        ),
        log=LogConfig(
            level=_validate_log_level(_env("LOG_LEVEL", "info")),
        ),
    )
