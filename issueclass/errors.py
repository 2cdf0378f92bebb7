"""Error taxonomy for classification runs.

RunFailure        -- Base for every error that aborts a run.  Carries the
                     failing stage plus diagnostic context (config id,
                     function id, window, dimension key).
ConfigLoadFailure -- Unknown function id, or a filter/classifier could not
                     be built from its spec.
StoreFailure      -- A store read or update call failed.

Collaborators raise the plain errors below; the engine wraps them.
"""

from __future__ import annotations


class NotFoundError(LookupError):
    """Raised by a store when the requested id does not exist."""


class InvalidSpecError(ValueError):
    """Raised by a plugin factory for an unknown type or bad parameters."""


class AdhocDetectionUnavailable(NotImplementedError):
    """Raised when on-demand detection is requested for an inactive function."""


class RunFailure(Exception):
    """Raised when a classification run cannot complete."""

    def __init__(self, stage: str, cause: BaseException | None = None, **context: object) -> None:
        details = ", ".join(f"{key}={value}" for key, value in context.items() if value is not None)
        message = f"Classification run failed at stage '{stage}'"
        if details:
            message += f" ({details})"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
        self.stage = stage
        self.cause = cause
        self.context = context


class ConfigLoadFailure(RunFailure):
    pass


class StoreFailure(RunFailure):
    pass
