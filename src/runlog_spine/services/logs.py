"""Run log service.

Entry point for callers polling a run's output::

    service = LogService(state_manager, logs_client)

    chunk = service.logs(run_id)                      # from the head
    chunk = service.logs(run_id, chunk.next_cursor)   # only new output

The service holds no per-run state. Everything positional lives in the
cursor the caller passes back, so many runs can be polled concurrently.
"""

from runlog_spine.core.errors import RunLogError
from runlog_spine.core.models import Engine, Executable, LogChunk, Run
from runlog_spine.logs.base import LogSink, LogsClient
from runlog_spine.observability.logging import get_logger, log_context
from runlog_spine.state.manager import StateManager

logger = get_logger(__name__)


class LogService:
    """Gates runs on status, resolves their executable and delegates to a logs client."""

    def __init__(self, state: StateManager, logs_client: LogsClient):
        self.state = state
        self.logs_client = logs_client

    def logs(self, run_id: str, cursor: str | None = None) -> LogChunk:
        """Fetch new output for ``run_id`` since ``cursor``.

        Runs that are not running or stopped have no logs yet; they return an
        empty chunk with no cursor rather than an error.
        """
        with log_context(run_id=run_id):
            run = self.state.get_run(run_id)
            if not run.has_logs:
                return LogChunk("", None)

            executable = self._resolve_executable(run)
            return self.logs_client.logs(executable, run, cursor)

    def logs_text(self, run_id: str, sink: LogSink) -> None:
        """Write all output for ``run_id`` to ``sink``."""
        with log_context(run_id=run_id):
            run = self.state.get_run(run_id)
            if not run.has_logs:
                return

            executable = self._resolve_executable(run)
            self.logs_client.logs_text(executable, run, sink)

    def _resolve_executable(self, run: Run) -> Executable:
        executable_type, executable_id = run.resolved_executable_key()
        try:
            return self.state.get_executable_by_type_and_id(executable_type, executable_id)
        except RunLogError as e:
            # ECS stream names need the container name; other engines don't
            if run.engine == Engine.ECS:
                raise
            logger.warning(
                "executable_unresolved",
                engine=run.engine.value,
                executable_type=executable_type.value,
                executable_id=executable_id,
                error=str(e),
            )
            return Executable.placeholder(executable_type, executable_id)
