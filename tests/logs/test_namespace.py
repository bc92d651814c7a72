"""Tests for NamespaceProvisioner."""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from runlog_spine.core.errors import LogBackendError, NamespaceProvisioningError
from runlog_spine.logs.namespace import NamespaceProvisioner

NAME = "flotilla-runs"


class TestNamespaceExists:
    """Tests for the exact-match existence check."""

    def test_exact_match_found(self, boto_logs_client, stubber):
        stubber.add_response(
            "describe_log_groups",
            {"logGroups": [{"logGroupName": f"{NAME}-other"}, {"logGroupName": NAME}]},
            {"logGroupNamePrefix": NAME},
        )

        assert NamespaceProvisioner(boto_logs_client).namespace_exists(NAME) is True

    def test_prefix_only_match_is_not_found(self, boto_logs_client, stubber):
        stubber.add_response(
            "describe_log_groups",
            {"logGroups": [{"logGroupName": f"{NAME}-staging"}]},
            {"logGroupNamePrefix": NAME},
        )

        assert NamespaceProvisioner(boto_logs_client).namespace_exists(NAME) is False

    def test_scans_every_page(self, boto_logs_client, stubber):
        stubber.add_response(
            "describe_log_groups",
            {"logGroups": [{"logGroupName": f"{NAME}-a"}], "nextToken": "page-2"},
            {"logGroupNamePrefix": NAME},
        )
        stubber.add_response(
            "describe_log_groups",
            {"logGroups": [{"logGroupName": NAME}]},
            {"logGroupNamePrefix": NAME, "nextToken": "page-2"},
        )

        assert NamespaceProvisioner(boto_logs_client).namespace_exists(NAME) is True

    def test_describe_failure_raises(self, boto_logs_client, stubber):
        stubber.add_client_error(
            "describe_log_groups",
            service_error_code="AccessDeniedException",
            http_status_code=403,
        )

        with pytest.raises(NamespaceProvisioningError, match="problem describing log groups"):
            NamespaceProvisioner(boto_logs_client).namespace_exists(NAME)


class TestEnsureNamespace:
    """Tests for idempotent provisioning."""

    def test_existing_namespace_not_mutated(self, boto_logs_client, stubber):
        stubber.add_response(
            "describe_log_groups",
            {"logGroups": [{"logGroupName": NAME}]},
            {"logGroupNamePrefix": NAME},
        )

        NamespaceProvisioner(boto_logs_client).ensure_namespace(NAME, 30)

        stubber.assert_no_pending_responses()

    def test_creates_and_sets_retention(self, boto_logs_client, stubber):
        stubber.add_response("describe_log_groups", {"logGroups": []}, {"logGroupNamePrefix": NAME})
        stubber.add_response("create_log_group", {}, {"logGroupName": NAME})
        stubber.add_response(
            "put_retention_policy", {}, {"logGroupName": NAME, "retentionInDays": 30}
        )

        NamespaceProvisioner(boto_logs_client).ensure_namespace(NAME, 30)

        stubber.assert_no_pending_responses()

    def test_second_call_creates_nothing(self):
        """Provisioning twice in a row creates the log group once."""
        created = []
        client = MagicMock()

        def paginate(**kwargs):
            return [{"logGroups": [{"logGroupName": n} for n in created]}]

        client.get_paginator.return_value.paginate.side_effect = paginate
        client.create_log_group.side_effect = lambda logGroupName: created.append(logGroupName)

        provisioner = NamespaceProvisioner(client)
        provisioner.ensure_namespace(NAME, 30)
        provisioner.ensure_namespace(NAME, 30)

        assert client.create_log_group.call_count == 1
        assert client.put_retention_policy.call_count == 1

    def test_already_exists_on_create_is_success(self, boto_logs_client, stubber):
        stubber.add_response("describe_log_groups", {"logGroups": []}, {"logGroupNamePrefix": NAME})
        stubber.add_client_error(
            "create_log_group",
            service_error_code="ResourceAlreadyExistsException",
            http_status_code=400,
        )
        stubber.add_response(
            "put_retention_policy", {}, {"logGroupName": NAME, "retentionInDays": 7}
        )

        NamespaceProvisioner(boto_logs_client).ensure_namespace(NAME, 7)

        stubber.assert_no_pending_responses()

    def test_create_failure_raises(self, boto_logs_client, stubber):
        stubber.add_response("describe_log_groups", {"logGroups": []}, {"logGroupNamePrefix": NAME})
        stubber.add_client_error(
            "create_log_group",
            service_error_code="LimitExceededException",
            http_status_code=400,
        )

        with pytest.raises(NamespaceProvisioningError, match="problem creating log group") as exc_info:
            NamespaceProvisioner(boto_logs_client).ensure_namespace(NAME, 30)

        assert isinstance(exc_info.value, LogBackendError)
        assert isinstance(exc_info.value.__cause__, ClientError)
        assert exc_info.value.context.namespace == NAME

    def test_retention_failure_raises(self, boto_logs_client, stubber):
        stubber.add_response("describe_log_groups", {"logGroups": []}, {"logGroupNamePrefix": NAME})
        stubber.add_response("create_log_group", {}, {"logGroupName": NAME})
        stubber.add_client_error(
            "put_retention_policy",
            service_error_code="InvalidParameterException",
            http_status_code=400,
        )

        with pytest.raises(NamespaceProvisioningError, match="retention policy") as exc_info:
            NamespaceProvisioner(boto_logs_client).ensure_namespace(NAME, 30)

        assert exc_info.value.context.operation == "put_retention_policy"
