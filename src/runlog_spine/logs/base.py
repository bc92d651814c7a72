"""Base logs client interface.

Architecture:

    .. code-block:: text

        LogsClient (ABC)
        ├── name          → stable variant identifier
        ├── initialize()  → validate settings, connect, provision
        ├── logs()        → one page of text + next cursor
        └── logs_text()   → stream everything to a sink
              │
        ┌─────┴───────────────────────┐
        │                             │
        ▼                             ▼
    ECSCloudWatchLogsClient      MemoryLogsClient
    (CloudWatch Logs)            (in-process, for tests/dev)

New backends are added by subclassing :class:`LogsClient`; the log service
never branches on which variant it holds.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

from runlog_spine.core.models import Executable, LogChunk, Run
from runlog_spine.core.settings import Settings


@runtime_checkable
class LogSink(Protocol):
    """Anything log text can be written to (HTTP response, file, buffer)."""

    def write(self, data: str) -> object: ...


class LogsClient(ABC):
    """Abstract base class for log backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable identifier for this backend variant."""
        ...

    @abstractmethod
    def initialize(self, settings: Settings) -> None:
        """
        Validate settings and connect to the backend.

        Raises:
            MissingConfigError: If a required setting is absent
            NamespaceProvisioningError: If the log namespace cannot be ensured
        """
        ...

    @abstractmethod
    def logs(self, executable: Executable, run: Run, cursor: str | None = None) -> LogChunk:
        """
        Fetch log output for a run written after ``cursor``.

        Args:
            executable: Descriptor of what the run executed
            run: The run whose logs to fetch
            cursor: Opaque position from a previous call; None starts from head

        Returns:
            LogChunk with newline-joined text ordered by timestamp and the
            cursor to pass on the next call

        Raises:
            MissingResourceError: If the run's log stream does not exist yet
            LogBackendError: For any other backend failure
        """
        ...

    @abstractmethod
    def logs_text(self, executable: Executable, run: Run, sink: LogSink) -> None:
        """
        Write a run's full log output to ``sink``.

        Raises:
            LogsNotSupportedError: If this variant cannot stream logs
        """
        ...
