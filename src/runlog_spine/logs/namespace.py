"""CloudWatch log group provisioning."""

from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from runlog_spine.core.errors import NamespaceProvisioningError
from runlog_spine.observability.logging import get_logger

logger = get_logger(__name__)


class NamespaceProvisioner:
    """
    Ensures a log group exists with a retention policy.

    Safe to call on every startup. The existence check and the create are not
    atomic; a concurrent provisioner winning the race shows up as
    ``ResourceAlreadyExistsException`` and is treated as success.
    """

    def __init__(self, client: Any):
        self.client = client

    def ensure_namespace(self, name: str, retention_days: int) -> None:
        """Create ``name`` with ``retention_days`` retention unless it exists."""
        if self.namespace_exists(name):
            logger.debug("namespace_exists", namespace=name)
            return
        self.create_namespace(name, retention_days)

    def namespace_exists(self, name: str) -> bool:
        """Check for a log group named exactly ``name``."""
        paginator = self.client.get_paginator("describe_log_groups")
        try:
            for page in paginator.paginate(logGroupNamePrefix=name):
                for group in page.get("logGroups", []):
                    if group.get("logGroupName") == name:
                        return True
        except (ClientError, BotoCoreError) as e:
            raise NamespaceProvisioningError(
                f"problem describing log groups with prefix [{name}]",
                cause=e,
            ).with_context(namespace=name, operation="describe_log_groups")
        return False

    def create_namespace(self, name: str, retention_days: int) -> None:
        """Create the log group and set its retention policy."""
        try:
            self.client.create_log_group(logGroupName=name)
            logger.info("namespace_created", namespace=name)
        except ClientError as e:
            if e.response["Error"]["Code"] != "ResourceAlreadyExistsException":
                raise NamespaceProvisioningError(
                    f"problem creating log group with log group name [{name}]",
                    cause=e,
                ).with_context(namespace=name, operation="create_log_group")
            logger.info("namespace_created_concurrently", namespace=name)
        except BotoCoreError as e:
            raise NamespaceProvisioningError(
                f"problem creating log group with log group name [{name}]",
                cause=e,
            ).with_context(namespace=name, operation="create_log_group")

        try:
            self.client.put_retention_policy(logGroupName=name, retentionInDays=retention_days)
        except (ClientError, BotoCoreError) as e:
            raise NamespaceProvisioningError(
                f"problem setting log group retention policy for log group name [{name}]",
                cause=e,
            ).with_context(namespace=name, operation="put_retention_policy")

        logger.info("namespace_retention_set", namespace=name, retention_days=retention_days)
