"""Managed chart — the deployment request submitted for the add-on."""

from enum import Enum
from typing import List

from pydantic import BaseModel


class SelectorOperator(str, Enum):
    IN = "In"
    NOT_IN = "NotIn"
    EXISTS = "Exists"
    DOES_NOT_EXIST = "DoesNotExist"


class LabelSelectorRequirement(BaseModel):
    key: str
    operator: SelectorOperator
    values: List[str] = []


class LabelSelector(BaseModel):
    match_expressions: List[LabelSelectorRequirement] = []


class BundleTarget(BaseModel):
    """Apply to this specific cluster, filtered by the selector."""

    cluster_name: str
    cluster_selector: LabelSelector


class ManagedChartSpec(BaseModel):
    default_namespace: str
    repo_name: str
    chart: str
    version: str
    values: dict                            # DesiredConfig
    targets: List[BundleTarget]


class ManagedChart(BaseModel):
    """One deployment request, upserted by name."""

    name: str
    namespace: str
    spec: ManagedChartSpec
