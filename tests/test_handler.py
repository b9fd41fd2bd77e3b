"""Tests for the system agent handler and its in-memory collaborators."""

import pytest

from sysagent_kernel.fleet.store import (
    BundleStore,
    ManagedChartStore,
    NotFoundError,
    TransportError,
)
from sysagent_kernel.handler.system_agent import SystemAgentHandler
from sysagent_kernel.models.bundle import Bundle, BundleSummary
from sysagent_kernel.models.cluster import Cluster, ControlPlane, RKEConfig
from sysagent_kernel.models.condition import ConditionStatus
from sysagent_kernel.models.config import AgentConfig
from sysagent_kernel.naming.names import bundle_name


def _make_cluster(version: str) -> Cluster:
    return Cluster(name="prod", kubernetes_version=version, rke_config=RKEConfig())


class TestBundleStore:
    def test_get_missing_raises_not_found(self):
        with pytest.raises(NotFoundError) as exc:
            BundleStore().get("fleet-default", "missing")
        assert exc.value.name == "missing"

    def test_put_get_delete(self):
        store = BundleStore()
        bundle = Bundle(name="b", namespace="ns")
        store.put(bundle)
        assert store.get("ns", "b") == bundle
        assert store.list("ns") == [bundle]
        assert store.list("other") == []
        assert store.delete("ns", "b")
        assert not store.delete("ns", "b")

    def test_bundle_marked_absent_is_not_found(self):
        store = BundleStore()
        store.put(Bundle(name="b", namespace="ns", exists=False))
        with pytest.raises(NotFoundError):
            store.get("ns", "b")

    def test_failure_injection(self):
        store = BundleStore()
        store.fail_with("timeout")
        with pytest.raises(TransportError):
            store.get("ns", "b")
        store.fail_with(None)
        with pytest.raises(NotFoundError):
            store.get("ns", "b")


class TestSystemAgentHandler:
    def setup_method(self):
        self.bundles = BundleStore()
        self.charts = ManagedChartStore()
        self.handler = SystemAgentHandler(self.bundles, self.charts, AgentConfig())

    def test_cluster_change_upserts_chart(self):
        submitted = self.handler.on_cluster_change(_make_cluster("1.24.10"))
        assert len(submitted) == 1
        stored = self.charts.get("fleet-default", "prod-managed-system-upgrade-controller")
        assert stored.spec.values["global"]["cattle"]["psp"]["enabled"] is True

    def test_repeated_cluster_change_does_not_thrash(self):
        self.handler.on_cluster_change(_make_cluster("1.24.10"))
        self.handler.on_cluster_change(_make_cluster("1.24.10"))
        assert self.charts.write_count == 1

    def test_version_upgrade_rewrites_chart(self):
        self.handler.on_cluster_change(_make_cluster("1.24.10"))
        self.handler.on_cluster_change(_make_cluster("1.25.2"))
        assert self.charts.write_count == 2
        stored = self.charts.list()[0]
        assert stored.spec.values["global"]["cattle"]["psp"]["enabled"] is False

    def test_non_rke_cluster_submits_nothing(self):
        assert self.handler.on_cluster_change(Cluster(name="x", kubernetes_version="1.26.0")) == []
        assert self.charts.list() == []

    def test_upgrade_flow(self):
        """Cluster moves to 1.26: stale bundle blocks, updated bundle unblocks."""
        cluster = _make_cluster("1.26.0")
        cp = ControlPlane(name="prod", kubernetes_version="1.26.0")
        chart = self.handler.on_cluster_change(cluster)[0]

        stale = Bundle(
            name=bundle_name("prod"),
            namespace="fleet-default",
            summary=BundleSummary(ready=1, desired_ready=1),
            values={"global": {"cattle": {"psp": {"enabled": True}}}},
        )
        self.bundles.put(stale)
        status = self.handler.on_control_plane_change(cp)
        assert status.get_condition("SystemUpgradeControllerReady").reason == "Not Ready"

        self.bundles.put(stale.model_copy(update={"values": chart.spec.values}))
        status = self.handler.on_control_plane_change(cp, status)
        assert status.get_condition("SystemUpgradeControllerReady").status == ConditionStatus.TRUE
