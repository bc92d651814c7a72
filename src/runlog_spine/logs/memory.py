"""In-memory logs client for tests and local development."""

import threading

from runlog_spine.core.errors import LogBackendError, MissingResourceError
from runlog_spine.core.models import Executable, LogChunk, LogEvent, Run, join_events
from runlog_spine.core.settings import Settings
from runlog_spine.logs.base import LogSink, LogsClient
from runlog_spine.observability.logging import get_logger

logger = get_logger(__name__)


class MemoryLogsClient(LogsClient):
    """
    Logs client that keeps events per run in process memory.

    The cursor is the index of the next unread event, encoded as a string.
    Callers still treat it as opaque.

    Usage:
        client = MemoryLogsClient()
        client.append("run-1", LogEvent(1, "hello"))
        chunk = client.logs(executable, run)
        chunk = client.logs(executable, run, chunk.next_cursor)
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._events: dict[str, list[LogEvent]] = {}

    @property
    def name(self) -> str:
        return "memory"

    def initialize(self, settings: Settings) -> None:
        logger.info("memory_logs_initialized", mode=settings.mode)

    def append(self, run_id: str, *events: LogEvent) -> None:
        """Record events for a run."""
        with self._lock:
            self._events.setdefault(run_id, []).extend(events)

    def logs(self, executable: Executable, run: Run, cursor: str | None = None) -> LogChunk:
        events = self._snapshot(run)
        start = self._position(cursor)
        if start > len(events):
            raise LogBackendError(f"malformed cursor [{cursor}]").with_context(run_id=run.run_id)
        return LogChunk(join_events(events[start:]), str(len(events)))

    def logs_text(self, executable: Executable, run: Run, sink: LogSink) -> None:
        for event in sorted(self._snapshot(run), key=lambda e: e.timestamp):
            sink.write(event.message + "\n")

    def _snapshot(self, run: Run) -> list[LogEvent]:
        with self._lock:
            if run.run_id not in self._events:
                raise MissingResourceError(
                    f"no log stream for run [{run.run_id}]"
                ).with_context(run_id=run.run_id)
            return list(self._events[run.run_id])

    @staticmethod
    def _position(cursor: str | None) -> int:
        if not cursor:
            return 0
        try:
            position = int(cursor)
        except ValueError as e:
            raise LogBackendError(f"malformed cursor [{cursor}]", cause=e)
        if position < 0:
            raise LogBackendError(f"malformed cursor [{cursor}]")
        return position
