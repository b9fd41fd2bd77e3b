"""Agent configuration for the system-upgrade-controller builder and reconciler."""

from pydantic import BaseModel, Field


class AgentConfig(BaseModel):
    """Configuration shared by the chart builder and the status reconciler."""

    psp_threshold_version: str = "1.25.0"   # First version without PodSecurityPolicy
    name_limit: int = Field(ge=7, default=48)  # Release names cap at 53, minus "mcc-"
    bundle_prefix: str = "mcc-"             # Added by the deployment system on creation
    bundle_namespace: str = "fleet-default"
    default_namespace: str = "cattle-system"
    repo_name: str = "rancher-charts"
    chart_name: str = "system-upgrade-controller"
    chart_version: str = "102.0.0+up0.4.0"
    system_default_registry: str = ""
    unmanaged_label: str = "provisioning.cattle.io/unmanaged-system-agent"
    condition_type: str = "SystemUpgradeControllerReady"
