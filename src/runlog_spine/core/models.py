"""Domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple


class RunStatus(str, Enum):
    """Lifecycle status of a run."""

    QUEUED = "QUEUED"
    PENDING = "PENDING"
    NEEDS_RETRY = "NEEDS_RETRY"
    RUNNING = "RUNNING"
    STOPPED = "STOPPED"


# Only these statuses can have log output
LOGGABLE_STATUSES: frozenset[RunStatus] = frozenset({RunStatus.RUNNING, RunStatus.STOPPED})


class ExecutableType(str, Enum):
    """Kind of executable a run was launched from."""

    DEFINITION = "task_definition"
    TEMPLATE = "template"


class Engine(str, Enum):
    """Execution engine a run was placed on."""

    ECS = "ecs"
    EKS = "eks"


@dataclass(frozen=True)
class ExecutableResources:
    """Where and how an executable's process runs."""

    container_name: str = ""
    image: str | None = None
    cpu: int | None = None
    memory: int | None = None


@dataclass(frozen=True)
class Executable:
    """A definition or template describing how a run was launched."""

    executable_type: ExecutableType
    executable_id: str
    resources: ExecutableResources = field(default_factory=ExecutableResources)

    @classmethod
    def placeholder(cls, executable_type: ExecutableType, executable_id: str) -> Executable:
        """Empty descriptor for engines that can locate logs without one."""
        return cls(executable_type=executable_type, executable_id=executable_id)


@dataclass(frozen=True)
class Run:
    """One execution instance, as read from the state layer."""

    run_id: str
    status: RunStatus
    definition_id: str
    engine: Engine = Engine.ECS
    task_arn: str = ""
    executable_type: ExecutableType | None = None
    executable_id: str | None = None

    def resolved_executable_key(self) -> tuple[ExecutableType, str]:
        """(type, id) of this run's executable with defaults applied.

        Older runs predate executable tagging; they were always launched
        from their task definition.
        """
        executable_type = self.executable_type or ExecutableType.DEFINITION
        executable_id = self.executable_id if self.executable_id is not None else self.definition_id
        return executable_type, executable_id

    @property
    def has_logs(self) -> bool:
        return self.status in LOGGABLE_STATUSES


@dataclass(frozen=True)
class LogEvent:
    """A single log line as delivered by a backend."""

    timestamp: int  # milliseconds since epoch
    message: str


class LogChunk(NamedTuple):
    """Text fetched in one call plus the cursor to resume from.

    ``next_cursor`` is opaque; ``None`` means "start from the head".
    """

    text: str
    next_cursor: str | None


def join_events(events: list[LogEvent]) -> str:
    """Order events by timestamp and join their messages with newlines.

    Backends do not guarantee delivery order. The sort is stable, so events
    sharing a timestamp keep the order they arrived in.
    """
    ordered = sorted(events, key=lambda event: event.timestamp)
    return "\n".join(event.message for event in ordered)
