"""Core module - settings, models, errors."""

from runlog_spine.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    ExecutableNotFoundError,
    InvalidConfigError,
    LogBackendError,
    LogsNotSupportedError,
    MissingConfigError,
    MissingResourceError,
    NamespaceProvisioningError,
    RunLogError,
    RunNotFoundError,
    is_retryable,
)
from runlog_spine.core.models import (
    LOGGABLE_STATUSES,
    Engine,
    Executable,
    ExecutableResources,
    ExecutableType,
    LogChunk,
    LogEvent,
    Run,
    RunStatus,
)
from runlog_spine.core.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "LOGGABLE_STATUSES",
    "Engine",
    "Executable",
    "ExecutableResources",
    "ExecutableType",
    "LogChunk",
    "LogEvent",
    "Run",
    "RunStatus",
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "ExecutableNotFoundError",
    "InvalidConfigError",
    "LogBackendError",
    "LogsNotSupportedError",
    "MissingConfigError",
    "MissingResourceError",
    "NamespaceProvisioningError",
    "RunLogError",
    "RunNotFoundError",
    "is_retryable",
]
