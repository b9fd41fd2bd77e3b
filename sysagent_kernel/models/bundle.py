"""Bundle — point-in-time snapshot of the deployment system's rollout status."""

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class NonReadyResource(BaseModel):
    name: str
    message: str = ""


class BundleSummary(BaseModel):
    """Rollout counters reported by the deployment system."""

    ready: int = Field(ge=0, default=0)
    desired_ready: int = Field(ge=0, default=0)
    err_applied: int = Field(ge=0, default=0)
    non_ready_resources: List[NonReadyResource] = []

    @model_validator(mode="after")
    def _ready_within_desired(self) -> "BundleSummary":
        if self.ready > self.desired_ready:
            raise ValueError(
                f"ready ({self.ready}) exceeds desired_ready ({self.desired_ready})"
            )
        return self


class Bundle(BaseModel):
    """
    Observed deployment. `values` mirrors the chart values the deployment
    system actually applied and stays None until it has recorded them.
    """

    name: str
    namespace: str
    exists: bool = True
    summary: BundleSummary = BundleSummary()
    values: Optional[dict] = None

    @property
    def rolled_out(self) -> bool:
        return self.summary.ready == self.summary.desired_ready
