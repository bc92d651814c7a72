"""CloudWatch Logs backend for runs on ECS.

ECS tasks configured with the ``awslogs`` driver ship container output to
``<group>/<stream-prefix>/<container-name>/<task-id>``. This client derives
the same stream name from a run and its executable and pages through it with
``GetLogEvents``.
"""

from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from runlog_spine.core.errors import (
    ConfigError,
    InvalidConfigError,
    LogBackendError,
    LogsNotSupportedError,
    MissingConfigError,
    MissingResourceError,
)
from runlog_spine.core.models import Executable, LogChunk, LogEvent, Run, join_events
from runlog_spine.core.settings import Settings
from runlog_spine.logs.base import LogSink, LogsClient
from runlog_spine.logs.namespace import NamespaceProvisioner
from runlog_spine.observability.logging import get_logger

logger = get_logger(__name__)

DEFAULT_RETENTION_DAYS = 30

# Values accepted by PutRetentionPolicy
VALID_RETENTION_DAYS = frozenset({
    1, 3, 5, 7, 14, 30, 60, 90, 120, 150, 180, 365, 400, 545,
    731, 1096, 1827, 2192, 2557, 2922, 3288, 3653,
})

# The rate-limit code CloudWatch Logs returns (GetLogEvents API reference).
# LimitExceededException is a resource quota, not throttling.
THROTTLE_ERROR_CODES = frozenset({"ThrottlingException"})


def is_throttle_error(error: ClientError) -> bool:
    """Check whether a botocore error is a rate-limit rejection."""
    code = error.response.get("Error", {}).get("Code", "")
    status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return code in THROTTLE_ERROR_CODES or status == 429


def stream_name(prefix: str, executable: Executable, run: Run) -> str:
    """Log stream name the ``awslogs`` driver writes a run's output to."""
    task_id = run.task_arn.split("/")[-1]
    return f"{prefix}/{executable.resources.container_name}/{task_id}"


class ECSCloudWatchLogsClient(LogsClient):
    """
    Logs client for the ``awslogs`` driver on ECS.

    Configuration is read once in :meth:`initialize` and never changed, so a
    single instance can serve concurrent requests for different runs.
    """

    def __init__(self, client: Any = None):
        self.client = client
        self.namespace = ""
        self.stream_prefix = ""
        self.retention_days = DEFAULT_RETENTION_DAYS
        self._ready = False

    @property
    def name(self) -> str:
        return "ecs-cloudwatch"

    def initialize(self, settings: Settings) -> None:
        """Validate settings, create the boto3 client and provision the log group."""
        options = settings.ecs_log_driver_options
        missing = []

        region = options.get("awslogs-region") or settings.aws_default_region
        if not region:
            missing.append("one of [ecs_log_driver_options.awslogs-region] or [aws_default_region]")

        # ecs_log_namespace takes precedence over the driver's awslogs-group
        namespace = settings.ecs_log_namespace or options.get("awslogs-group", "")
        if not namespace:
            missing.append("one of [ecs_log_driver_options.awslogs-group] or [ecs_log_namespace]")

        stream_prefix = options.get("awslogs-stream-prefix", "")
        if not stream_prefix:
            missing.append("[ecs_log_driver_options.awslogs-stream-prefix]")

        if missing:
            raise MissingConfigError("ECSCloudWatchLogsClient", missing)

        retention_days = settings.ecs_log_retention_days or DEFAULT_RETENTION_DAYS
        if retention_days not in VALID_RETENTION_DAYS:
            raise InvalidConfigError(
                f"ECSCloudWatchLogsClient got unsupported [ecs_log_retention_days] "
                f"value {retention_days}"
            )

        self.namespace = namespace
        self.stream_prefix = stream_prefix
        self.retention_days = retention_days

        if self.client is None and settings.mode != "test":
            self.client = boto3.client(
                "logs",
                region_name=region,
                config=Config(
                    retries={"max_attempts": settings.aws_max_attempts, "mode": "standard"},
                    connect_timeout=settings.aws_connect_timeout,
                    read_timeout=settings.aws_read_timeout,
                ),
            )

        if self.client is None:
            logger.warning("cloudwatch_client_skipped", mode=settings.mode)
            return

        NamespaceProvisioner(self.client).ensure_namespace(self.namespace, self.retention_days)
        self._ready = True

        logger.info(
            "cloudwatch_logs_initialized",
            region=region,
            namespace=self.namespace,
            stream_prefix=self.stream_prefix,
            retention_days=self.retention_days,
        )

    def logs(self, executable: Executable, run: Run, cursor: str | None = None) -> LogChunk:
        """Fetch events for the run's stream after ``cursor``."""
        if not self._ready:
            raise ConfigError("ECSCloudWatchLogsClient is not initialized")

        handle = stream_name(self.stream_prefix, executable, run)
        request: dict[str, Any] = {
            "logGroupName": self.namespace,
            "logStreamName": handle,
            "startFromHead": True,
        }
        if cursor:
            request["nextToken"] = cursor

        try:
            response = self.client.get_log_events(**request)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code == "ResourceNotFoundException":
                raise MissingResourceError(str(e), cause=e).with_context(
                    run_id=run.run_id,
                    stream=handle,
                    namespace=self.namespace,
                )
            if is_throttle_error(e):
                logger.warning(
                    "logs_throttled",
                    executable_id=executable.executable_id,
                    run_id=run.run_id,
                    error=str(e),
                )
                return LogChunk("", cursor)
            raise LogBackendError("problem getting logs", cause=e).with_context(
                run_id=run.run_id,
                stream=handle,
                namespace=self.namespace,
                operation="get_log_events",
            )
        except BotoCoreError as e:
            raise LogBackendError("problem getting logs", cause=e).with_context(
                run_id=run.run_id,
                stream=handle,
                namespace=self.namespace,
                operation="get_log_events",
            )

        next_cursor = response.get("nextForwardToken")
        events = [
            LogEvent(timestamp=event["timestamp"], message=event["message"])
            for event in response.get("events", [])
        ]
        if not events:
            return LogChunk("", next_cursor)

        return LogChunk(join_events(events), next_cursor)

    def logs_text(self, executable: Executable, run: Run, sink: LogSink) -> None:
        raise LogsNotSupportedError(
            "ECSCloudWatchLogsClient does not support LogsText method."
        ).with_context(run_id=run.run_id)
