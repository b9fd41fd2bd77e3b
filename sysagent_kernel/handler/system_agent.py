"""
System Agent Handler — wires the chart builder and the status reconciler to
their collaborators.

Two independent entry points, as the invoking controller calls them:
  on_cluster_change  → build desired charts → upsert (fire-and-forget)
  on_control_plane_change → look up bundle → derive condition

They share no state; a pass for one object never depends on the other.
"""

import logging
from typing import List, Optional

from sysagent_kernel.builder.chart import desired_charts
from sysagent_kernel.fleet.store import BundleClient, ManagedChartClient
from sysagent_kernel.models.chart import ManagedChart
from sysagent_kernel.models.cluster import Cluster, ControlPlane, ControlPlaneStatus
from sysagent_kernel.models.config import AgentConfig
from sysagent_kernel.status.reconciler import StatusReconciler

logger = logging.getLogger(__name__)


class SystemAgentHandler:

    def __init__(
        self,
        bundles: BundleClient,
        charts: ManagedChartClient,
        config: Optional[AgentConfig] = None,
    ):
        self.config = config or AgentConfig()
        self.charts = charts
        self.reconciler = StatusReconciler(bundles, self.config)

    def on_cluster_change(self, cluster: Cluster) -> List[ManagedChart]:
        """Build and submit the managed chart. Returns what was submitted."""
        charts = desired_charts(cluster, self.config)
        if not charts:
            logger.debug("cluster %s/%s is not RKE-provisioned", cluster.namespace, cluster.name)
        return [self.charts.upsert(chart) for chart in charts]

    def on_control_plane_change(
        self,
        control_plane: ControlPlane,
        status: Optional[ControlPlaneStatus] = None,
    ) -> ControlPlaneStatus:
        return self.reconciler.sync(control_plane, status)
