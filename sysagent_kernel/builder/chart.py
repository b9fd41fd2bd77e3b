"""
Chart Builder — computes the desired system-upgrade-controller chart for a
cluster.

Pure and deterministic: the same cluster version, registry and namespace
always produce the same request, so repeated upserts never thrash.
"""

import logging
from typing import List

from sysagent_kernel.models.chart import (
    BundleTarget,
    LabelSelector,
    LabelSelectorRequirement,
    ManagedChart,
    ManagedChartSpec,
    SelectorOperator,
)
from sysagent_kernel.models.cluster import Cluster
from sysagent_kernel.models.config import AgentConfig
from sysagent_kernel.naming.names import managed_chart_name
from sysagent_kernel.values.paths import (
    PSP_ENABLED_PATH,
    SYSTEM_DEFAULT_REGISTRY_PATH,
    set_path,
)
from sysagent_kernel.versioning.threshold import psp_enabled

logger = logging.getLogger(__name__)

REGISTRY_CONFIG_KEY = "system-default-registry"


def resolve_registry_url(cluster: Cluster, config: AgentConfig) -> str:
    """The cluster's registry whenever the key is set, else the system-wide default."""
    if cluster.rke_config is not None:
        global_config = cluster.rke_config.machine_global_config
        if REGISTRY_CONFIG_KEY in global_config:
            registry = global_config[REGISTRY_CONFIG_KEY]
            return "" if registry is None else str(registry)
    return config.system_default_registry


def build_values(kubernetes_version: str, registry_url: str, threshold: str) -> dict:
    """The chart values. Raises InvalidVersion on an unparseable version."""
    values: dict = {}
    set_path(values, SYSTEM_DEFAULT_REGISTRY_PATH, registry_url)
    set_path(values, PSP_ENABLED_PATH, psp_enabled(kubernetes_version, threshold))
    return values


def build_target(cluster_name: str, config: AgentConfig) -> BundleTarget:
    return BundleTarget(
        cluster_name=cluster_name,
        cluster_selector=LabelSelector(
            match_expressions=[
                LabelSelectorRequirement(
                    key=config.unmanaged_label,
                    operator=SelectorOperator.DOES_NOT_EXIST,
                )
            ]
        ),
    )


def build_managed_chart(
    cluster: Cluster,
    registry_url: str,
    config: AgentConfig,
) -> ManagedChart:
    return ManagedChart(
        name=managed_chart_name(cluster.name, config.name_limit),
        namespace=cluster.namespace,
        spec=ManagedChartSpec(
            default_namespace=config.default_namespace,
            repo_name=config.repo_name,
            chart=config.chart_name,
            version=config.chart_version,
            values=build_values(
                cluster.kubernetes_version,
                registry_url,
                config.psp_threshold_version,
            ),
            targets=[build_target(cluster.name, config)],
        ),
    )


def desired_charts(cluster: Cluster, config: AgentConfig) -> List[ManagedChart]:
    """
    Charts to submit for `cluster`: one managed chart for RKE-provisioned
    clusters, nothing for anything else.
    """
    if cluster.rke_config is None:
        return []
    chart = build_managed_chart(cluster, resolve_registry_url(cluster, config), config)
    logger.debug(
        "desired chart %s/%s psp.enabled=%s",
        chart.namespace,
        chart.name,
        chart.spec.values["global"]["cattle"]["psp"]["enabled"],
    )
    return [chart]
