"""State manager interface and an in-memory implementation.

The persistence layer that owns runs and executables lives outside this
package. :class:`StateManager` is the slice of it the log service reads;
:class:`InMemoryStateManager` backs tests and local development.
"""

from __future__ import annotations

import threading
from typing import Protocol, runtime_checkable

from runlog_spine.core.errors import ExecutableNotFoundError, RunNotFoundError
from runlog_spine.core.models import Executable, ExecutableType, Run


@runtime_checkable
class StateManager(Protocol):
    """Read access to runs and the executables they were launched from."""

    def get_run(self, run_id: str) -> Run:
        """Return the run or raise :class:`RunNotFoundError`."""
        ...

    def get_executable_by_type_and_id(
        self, executable_type: ExecutableType, executable_id: str
    ) -> Executable:
        """Return the executable or raise :class:`ExecutableNotFoundError`."""
        ...


class InMemoryStateManager:
    """Dictionary-backed :class:`StateManager`."""

    def __init__(
        self,
        runs: list[Run] | None = None,
        executables: list[Executable] | None = None,
    ):
        self._lock = threading.Lock()
        self._runs: dict[str, Run] = {}
        self._executables: dict[tuple[ExecutableType, str], Executable] = {}
        for run in runs or []:
            self.add_run(run)
        for executable in executables or []:
            self.add_executable(executable)

    def add_run(self, run: Run) -> None:
        with self._lock:
            self._runs[run.run_id] = run

    def add_executable(self, executable: Executable) -> None:
        with self._lock:
            self._executables[(executable.executable_type, executable.executable_id)] = executable

    def get_run(self, run_id: str) -> Run:
        with self._lock:
            run = self._runs.get(run_id)
        if run is None:
            raise RunNotFoundError(f"run with id [{run_id}] not found").with_context(run_id=run_id)
        return run

    def get_executable_by_type_and_id(
        self, executable_type: ExecutableType, executable_id: str
    ) -> Executable:
        executable_type = ExecutableType(executable_type)
        with self._lock:
            executable = self._executables.get((executable_type, executable_id))
        if executable is None:
            raise ExecutableNotFoundError(
                f"executable [{executable_type.value}:{executable_id}] not found"
            ).with_context(executable_id=executable_id)
        return executable
