"""
Status Reconciler — derives the SystemUpgradeControllerReady condition.

Reads back the bundle the deployment system created for the managed chart
and decides whether the add-on is rolled out with values that suit the
control plane's Kubernetes version.

States (first match wins):
  NOT_FOUND → ROLLING_OUT_WITH_ERROR → ROLLING_OUT → CONFIG_NOT_OBSERVED
  → CONFIG_SHAPE_UNEXPECTED → CONFIG_INCOMPATIBLE → READY

Rollout counters are checked before the values: values read during an
active rollout may belong to resources about to be replaced.

Only lookup failures and unparseable versions raise. Every other state is a
stable outcome written back as the condition; the next resync re-evaluates.
"""

import logging
from enum import Enum
from typing import Optional, Union

import semver
from pydantic import BaseModel

from sysagent_kernel.fleet.store import BundleClient, NotFoundError, TransportError
from sysagent_kernel.models.bundle import Bundle
from sysagent_kernel.models.cluster import ControlPlane, ControlPlaneStatus
from sysagent_kernel.models.condition import Condition, ConditionStatus
from sysagent_kernel.models.config import AgentConfig
from sysagent_kernel.naming.names import bundle_name
from sysagent_kernel.values.paths import PSP_ENABLED_PATH, get_path
from sysagent_kernel.versioning.threshold import is_below_threshold, parse_version

logger = logging.getLogger(__name__)

REASON_ROLLOUT_ERROR = "Error Encountered Waiting for Deployment To Roll Out: {message}"
REASON_ROLLING_OUT = "Waiting for Deployment roll out"
REASON_WAITING_UPGRADE = "Waiting for Upgraded Deployment"
REASON_NOT_READY = "Not Ready"


class ReadinessState(str, Enum):
    NOT_FOUND = "not_found"
    ROLLING_OUT_WITH_ERROR = "rolling_out_with_error"
    ROLLING_OUT = "rolling_out"
    CONFIG_NOT_OBSERVED = "config_not_observed"
    CONFIG_SHAPE_UNEXPECTED = "config_shape_unexpected"
    CONFIG_INCOMPATIBLE = "config_incompatible"
    READY = "ready"


class Readiness(BaseModel):
    """Outcome of one derivation: the state that fired and its condition."""

    state: ReadinessState
    status: ConditionStatus
    reason: str = ""

    def to_condition(self, condition_type: str) -> Condition:
        return Condition(type=condition_type, status=self.status, reason=self.reason)


VersionLike = Union[str, semver.Version]


def _as_version(value: VersionLike) -> semver.Version:
    return value if isinstance(value, semver.Version) else parse_version(value)


def derive_readiness(
    bundle: Optional[Bundle],
    version: VersionLike,
    threshold: VersionLike,
) -> Readiness:
    """
    Pure state machine over one bundle snapshot. `None` means not found.

    Version strings are parsed only once the applied flag is known, so an
    unparseable version raises InvalidVersion from the incompatibility check
    alone.
    """
    if bundle is None or not bundle.exists:
        return Readiness(state=ReadinessState.NOT_FOUND, status=ConditionStatus.FALSE)

    summary = bundle.summary
    if not bundle.rolled_out:
        if summary.err_applied != 0 and summary.non_ready_resources:
            return Readiness(
                state=ReadinessState.ROLLING_OUT_WITH_ERROR,
                status=ConditionStatus.UNKNOWN,
                reason=REASON_ROLLOUT_ERROR.format(
                    message=summary.non_ready_resources[0].message
                ),
            )
        return Readiness(
            state=ReadinessState.ROLLING_OUT,
            status=ConditionStatus.UNKNOWN,
            reason=REASON_ROLLING_OUT,
        )

    if bundle.values is None:
        return Readiness(
            state=ReadinessState.CONFIG_NOT_OBSERVED,
            status=ConditionStatus.UNKNOWN,
            reason=REASON_WAITING_UPGRADE,
        )

    enabled = get_path(bundle.values, PSP_ENABLED_PATH, bool)
    if enabled is None:
        return Readiness(
            state=ReadinessState.CONFIG_SHAPE_UNEXPECTED,
            status=ConditionStatus.UNKNOWN,
            reason=REASON_WAITING_UPGRADE,
        )

    below = is_below_threshold(_as_version(version), _as_version(threshold))

    # Only "enabled on a version without PSP support" blocks. Disabled on an
    # older version is deliberately accepted.
    if enabled and not below:
        return Readiness(
            state=ReadinessState.CONFIG_INCOMPATIBLE,
            status=ConditionStatus.UNKNOWN,
            reason=REASON_NOT_READY,
        )

    return Readiness(state=ReadinessState.READY, status=ConditionStatus.TRUE)


class StatusReconciler:
    """Looks up the bundle for a control plane and applies the condition."""

    def __init__(self, bundles: BundleClient, config: Optional[AgentConfig] = None):
        self.bundles = bundles
        self.config = config or AgentConfig()

    def lookup(self, control_plane_name: str) -> Optional[Bundle]:
        """The bundle for a control plane, None if it has not been created."""
        name = bundle_name(
            control_plane_name,
            prefix=self.config.bundle_prefix,
            name_limit=self.config.name_limit,
        )
        try:
            return self.bundles.get(self.config.bundle_namespace, name)
        except NotFoundError:
            return None
        except TransportError:
            logger.warning(
                "bundle lookup %s/%s failed", self.config.bundle_namespace, name
            )
            raise

    def evaluate(self, control_plane: ControlPlane) -> Readiness:
        """
        Derive readiness without touching any status.
        Raises InvalidVersion or TransportError.
        """
        bundle = self.lookup(control_plane.name)
        readiness = derive_readiness(
            bundle,
            control_plane.kubernetes_version,
            self.config.psp_threshold_version,
        )
        logger.debug(
            "control plane %s/%s: %s",
            control_plane.namespace,
            control_plane.name,
            readiness.state.value,
        )
        return readiness

    def sync(
        self,
        control_plane: ControlPlane,
        status: Optional[ControlPlaneStatus] = None,
    ) -> ControlPlaneStatus:
        """
        Return a copy of `status` (default: the control plane's own) with the
        readiness condition overwritten. On error nothing is written.
        """
        readiness = self.evaluate(control_plane)
        return self.apply(status if status is not None else control_plane.status, readiness)

    def apply(self, status: ControlPlaneStatus, readiness: Readiness) -> ControlPlaneStatus:
        updated = status.model_copy(deep=True)
        updated.set_condition(readiness.to_condition(self.config.condition_type))
        return updated
