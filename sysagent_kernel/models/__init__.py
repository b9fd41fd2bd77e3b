"""System agent kernel data models."""

from sysagent_kernel.models.bundle import Bundle, BundleSummary, NonReadyResource
from sysagent_kernel.models.chart import (
    BundleTarget,
    LabelSelector,
    LabelSelectorRequirement,
    ManagedChart,
    ManagedChartSpec,
    SelectorOperator,
)
from sysagent_kernel.models.cluster import (
    Cluster,
    ControlPlane,
    ControlPlaneStatus,
    RKEConfig,
)
from sysagent_kernel.models.condition import Condition, ConditionStatus
from sysagent_kernel.models.config import AgentConfig

__all__ = [
    "AgentConfig",
    "Bundle",
    "BundleSummary",
    "BundleTarget",
    "Cluster",
    "Condition",
    "ConditionStatus",
    "ControlPlane",
    "ControlPlaneStatus",
    "LabelSelector",
    "LabelSelectorRequirement",
    "ManagedChart",
    "ManagedChartSpec",
    "NonReadyResource",
    "RKEConfig",
    "SelectorOperator",
]
