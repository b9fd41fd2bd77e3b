"""Cluster and control-plane records the reconciler reads and writes."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from sysagent_kernel.models.condition import Condition


class RKEConfig(BaseModel):
    """Provisioning config present only on RKE-managed clusters."""

    machine_global_config: Dict[str, Any] = {}


class Cluster(BaseModel):
    """A provisioned cluster; input to the chart builder."""

    name: str
    namespace: str = "fleet-default"
    kubernetes_version: str
    rke_config: Optional[RKEConfig] = None


class ControlPlaneStatus(BaseModel):
    """Status block owning the readiness condition."""

    conditions: List[Condition] = []

    def get_condition(self, condition_type: str) -> Optional[Condition]:
        return next((c for c in self.conditions if c.type == condition_type), None)

    def set_condition(self, condition: Condition) -> None:
        """Overwrite the condition of the same type, or append it."""
        for i, existing in enumerate(self.conditions):
            if existing.type == condition.type:
                self.conditions[i] = condition
                return
        self.conditions.append(condition)


class ControlPlane(BaseModel):
    """The control-plane object the readiness condition is attached to."""

    name: str
    namespace: str = "fleet-default"
    kubernetes_version: str
    status: ControlPlaneStatus = ControlPlaneStatus()
