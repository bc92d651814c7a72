"""Pytest configuration and fixtures."""

import os

import boto3
import pytest
from botocore.stub import Stubber

# Keep tests off real AWS credentials and regions
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
if "RUNLOG_LOG_LEVEL" not in os.environ:
    os.environ["RUNLOG_LOG_LEVEL"] = "WARNING"

from runlog_spine.core.models import (  # noqa: E402
    Engine,
    Executable,
    ExecutableResources,
    ExecutableType,
    Run,
    RunStatus,
)
from runlog_spine.core.settings import Settings  # noqa: E402
from runlog_spine.state.manager import InMemoryStateManager  # noqa: E402

NAMESPACE = "flotilla-runs"
STREAM_PREFIX = "runs"
TASK_ARN = "arn:aws:ecs:us-east-1:123456789012:task/default/abc123"


@pytest.fixture
def settings():
    """Settings for a fully configured CloudWatch client."""
    return Settings(
        mode="test",
        aws_default_region="us-east-1",
        ecs_log_namespace=NAMESPACE,
        ecs_log_driver_options={"awslogs-stream-prefix": STREAM_PREFIX},
        ecs_log_retention_days=14,
    )


@pytest.fixture
def boto_logs_client():
    """Real boto3 logs client; pair with ``stubber`` so nothing hits the network."""
    return boto3.client("logs", region_name="us-east-1")


@pytest.fixture
def stubber(boto_logs_client):
    """Stubber activated on the boto3 logs client."""
    with Stubber(boto_logs_client) as stub:
        yield stub


def make_run(
    run_id: str = "run-1",
    status: RunStatus = RunStatus.RUNNING,
    definition_id: str = "def-1",
    engine: Engine = Engine.ECS,
    executable_type: ExecutableType | None = None,
    executable_id: str | None = None,
) -> Run:
    """Build a run with sensible defaults."""
    return Run(
        run_id=run_id,
        status=status,
        definition_id=definition_id,
        engine=engine,
        task_arn=TASK_ARN,
        executable_type=executable_type,
        executable_id=executable_id,
    )


def make_executable(
    executable_id: str = "def-1",
    executable_type: ExecutableType = ExecutableType.DEFINITION,
    container_name: str = "main",
) -> Executable:
    """Build an executable with a container name."""
    return Executable(
        executable_type=executable_type,
        executable_id=executable_id,
        resources=ExecutableResources(container_name=container_name),
    )


@pytest.fixture
def state():
    """State manager holding one definition executable."""
    return InMemoryStateManager(executables=[make_executable()])
