"""Log backend clients."""

from typing import Any

from runlog_spine.core.errors import InvalidConfigError
from runlog_spine.core.settings import Settings
from runlog_spine.logs.base import LogSink, LogsClient
from runlog_spine.logs.cloudwatch import ECSCloudWatchLogsClient
from runlog_spine.logs.memory import MemoryLogsClient
from runlog_spine.logs.namespace import NamespaceProvisioner

__all__ = [
    "ECSCloudWatchLogsClient",
    "LogSink",
    "LogsClient",
    "MemoryLogsClient",
    "NamespaceProvisioner",
    "new_logs_client",
]


def new_logs_client(settings: Settings, client: Any = None) -> LogsClient:
    """Create and initialize the logs client named by ``settings.logs_client``.

    ``client`` is an optional pre-built boto3 logs client for the CloudWatch
    variant.
    """
    if settings.logs_client == "ecs-cloudwatch":
        logs_client: LogsClient = ECSCloudWatchLogsClient(client=client)
    elif settings.logs_client == "memory":
        logs_client = MemoryLogsClient()
    else:
        raise InvalidConfigError(
            f"unknown logs client [{settings.logs_client}]; "
            "expected one of [ecs-cloudwatch, memory]"
        )

    logs_client.initialize(settings)
    return logs_client
