"""
Unit tests for baseline resolution from the Deployment inventory.
"""

from unittest.mock import MagicMock

import pytest
from kubernetes import client

from kubecharter.cluster import BaselineTable
from kubecharter.models import BaselineEntry
from kubecharter.validation import ClusterConnectionError


def _deployment(name, labels, requests=None, namespace="prod"):
    container = client.V1Container(
        name=name,
        resources=client.V1ResourceRequirements(requests=requests),
    )
    return client.V1Deployment(
        metadata=client.V1ObjectMeta(name=name, namespace=namespace, labels=labels),
        spec=client.V1DeploymentSpec(
            selector=client.V1LabelSelector(match_labels=labels),
            template=client.V1PodTemplateSpec(spec=client.V1PodSpec(containers=[container])),
        ),
    )


def _table(deployments, namespace="", **kwargs):
    table = BaselineTable(MagicMock(), namespace=namespace, **kwargs)
    table.api = MagicMock()
    listing = client.V1DeploymentList(items=deployments)
    table.api.list_deployment_for_all_namespaces.return_value = listing
    table.api.list_namespaced_deployment.return_value = listing
    return table


LABEL = "app.kubernetes.io/name"


@pytest.mark.unit
class TestBaselineTable:
    """Test cases for BaselineTable.resolve()."""

    def test_resolves_first_container_requests(self):
        table = _table(
            [
                _deployment("web", {LABEL: "web"}, {"cpu": "500m", "memory": "256Mi"}),
                _deployment("worker", {LABEL: "worker"}, {"cpu": "1", "memory": "1Gi"}),
            ]
        )

        baselines = table.resolve(["web", "worker"])

        assert baselines == {
            "web": BaselineEntry(cpu_request_m=500, mem_request_mi=256),
            "worker": BaselineEntry(cpu_request_m=1000, mem_request_mi=1024),
        }

    def test_ignores_unconfigured_groups(self):
        table = _table([_deployment("db", {LABEL: "db"}, {"cpu": "2"})])

        assert table.resolve(["web"]) == {}

    def test_group_without_requests_gets_no_entry(self, caplog):
        table = _table([_deployment("web", {LABEL: "web"}, None)])

        assert table.resolve(["web"]) == {}
        assert "No resource requests found for group 'web'" in caplog.text

    def test_partial_request_keeps_zero(self):
        table = _table([_deployment("web", {LABEL: "web"}, {"cpu": "250m"})])

        assert table.resolve(["web"])["web"] == BaselineEntry(cpu_request_m=250, mem_request_mi=0)

    def test_first_matching_deployment_wins(self, caplog):
        table = _table(
            [
                _deployment("web-a", {LABEL: "web"}, {"cpu": "100m", "memory": "64Mi"}),
                _deployment("web-b", {LABEL: "web"}, {"cpu": "900m", "memory": "900Mi"}),
            ]
        )

        baselines = table.resolve(["web"])

        assert baselines["web"].cpu_request_m == 100
        assert "more than one deployment" in caplog.text

    def test_custom_group_label(self):
        table = _table(
            [_deployment("web", {"team/component": "web"}, {"cpu": "1"})],
            group_label="team/component",
        )

        assert "web" in table.resolve(["web"])

    def test_namespaced_listing(self):
        table = _table([], namespace="prod", request_timeout=7)

        table.resolve(["web"])

        table.api.list_namespaced_deployment.assert_called_once_with("prod", _request_timeout=7)
        table.api.list_deployment_for_all_namespaces.assert_not_called()

    def test_listing_failure_raises_connection_error(self):
        table = _table([])
        table.api.list_deployment_for_all_namespaces.side_effect = RuntimeError("forbidden")

        with pytest.raises(ClusterConnectionError, match="forbidden"):
            table.resolve(["web"])
