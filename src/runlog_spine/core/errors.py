"""
Structured error types for run log retrieval.

Callers poll for logs, so the error type has to tell them what to do next:
retry on the next poll, or stop and surface the failure. Every error carries
a category, a retryable flag, a structured context and an optional chained
cause.

Taxonomy::

    RunLogError
    ├── MissingResourceError     (NOT_FOUND, retryable)  stream not created yet
    ├── LogBackendError          (BACKEND)               fatal backend failure
    │   └── NamespaceProvisioningError                   startup provisioning
    ├── LogsNotSupportedError    (UNSUPPORTED)           variant lacks operation
    ├── ConfigError              (CONFIG)
    │   ├── MissingConfigError                           names missing settings
    │   └── InvalidConfigError
    ├── RunNotFoundError         (NOT_FOUND)
    └── ExecutableNotFoundError  (NOT_FOUND)

Two outcomes are deliberately *not* errors: a run whose status precludes
logs, and a throttled backend call. Both come back as an empty
:class:`~runlog_spine.core.models.LogChunk`.

Usage:
    from runlog_spine.core.errors import MissingResourceError

    try:
        chunk = service.logs(run_id, cursor)
    except MissingResourceError:
        chunk = LogChunk("", cursor)  # try again on the next poll
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories for classification and routing."""

    NOT_FOUND = "NOT_FOUND"
    BACKEND = "BACKEND"
    UNSUPPORTED = "UNSUPPORTED"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """Structured metadata attached to an error for logging."""

    run_id: str | None = None
    executable_id: str | None = None
    stream: str | None = None
    namespace: str | None = None
    operation: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["run_id", "executable_id", "stream", "namespace", "operation"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class RunLogError(Exception):
    """Base exception for all run log errors.

    Subclasses set ``default_category`` and ``default_retryable``.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> RunLogError:
        """
        Add context to this error (fluent API).

        Usage:
            raise MissingResourceError("no stream").with_context(
                run_id=run.run_id,
                stream=handle,
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# BACKEND ERRORS
# =============================================================================


class MissingResourceError(RunLogError):
    """The computed log stream does not exist (yet) in the backend."""

    default_category = ErrorCategory.NOT_FOUND
    default_retryable = True


class LogBackendError(RunLogError):
    """Unclassified backend failure: auth, network, malformed request."""

    default_category = ErrorCategory.BACKEND


class NamespaceProvisioningError(LogBackendError):
    """Checking for, creating, or configuring the log namespace failed."""


class LogsNotSupportedError(RunLogError):
    """The active backend variant does not implement the requested operation."""

    default_category = ErrorCategory.UNSUPPORTED


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(RunLogError):
    """Configuration problem detected during initialization."""

    default_category = ErrorCategory.CONFIG


class MissingConfigError(ConfigError):
    """One or more required settings are absent."""

    def __init__(self, owner: str, missing: list[str], **kwargs: Any):
        self.owner = owner
        self.missing = list(missing)
        super().__init__(
            f"{owner} needs {'; '.join(self.missing)} set in config",
            **kwargs,
        )


class InvalidConfigError(ConfigError):
    """A setting is present but holds an unusable value."""


# =============================================================================
# STATE ERRORS
# =============================================================================


class RunNotFoundError(RunLogError):
    """No run exists with the requested identifier."""

    default_category = ErrorCategory.NOT_FOUND


class ExecutableNotFoundError(RunLogError):
    """No executable exists for the requested (type, id) pair."""

    default_category = ErrorCategory.NOT_FOUND


def is_retryable(error: Exception) -> bool:
    """Check whether a caller may retry after this error."""
    if isinstance(error, RunLogError):
        return error.retryable
    return False
