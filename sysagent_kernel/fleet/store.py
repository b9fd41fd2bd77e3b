"""
Fleet Store — the deployment-system collaborators the kernel talks to.

Defines the narrow read/write contracts (bundle lookup, managed chart
upsert) and in-memory implementations used by the API and the tests.
Production would back these with the cluster's API server.
"""

import logging
from typing import Dict, List, Optional, Protocol, Tuple

from sysagent_kernel.models.bundle import Bundle
from sysagent_kernel.models.chart import ManagedChart

logger = logging.getLogger(__name__)


class NotFoundError(Exception):
    """The requested object does not exist. Not a failure for the reconciler."""

    def __init__(self, kind: str, namespace: str, name: str):
        self.kind = kind
        self.namespace = namespace
        self.name = name
        super().__init__(f"{kind} {namespace}/{name} not found")


class TransportError(Exception):
    """A read or write against the deployment system failed. Retry next resync."""
    pass


class BundleClient(Protocol):
    def get(self, namespace: str, name: str) -> Bundle:
        ...


class ManagedChartClient(Protocol):
    def upsert(self, chart: ManagedChart) -> ManagedChart:
        ...


class BundleStore:
    """In-memory bundle status, keyed by (namespace, name)."""

    def __init__(self):
        self._bundles: Dict[Tuple[str, str], Bundle] = {}
        self._failure: Optional[str] = None

    def put(self, bundle: Bundle) -> None:
        """Record an observed bundle snapshot, replacing any previous one."""
        self._bundles[(bundle.namespace, bundle.name)] = bundle

    def delete(self, namespace: str, name: str) -> bool:
        return self._bundles.pop((namespace, name), None) is not None

    def fail_with(self, message: Optional[str]) -> None:
        """Make every subsequent lookup raise TransportError (None to clear)."""
        self._failure = message

    def get(self, namespace: str, name: str) -> Bundle:
        if self._failure is not None:
            raise TransportError(self._failure)
        bundle = self._bundles.get((namespace, name))
        if bundle is None or not bundle.exists:
            raise NotFoundError("Bundle", namespace, name)
        return bundle

    def list(self, namespace: Optional[str] = None) -> List[Bundle]:
        return [
            b for (ns, _), b in self._bundles.items()
            if namespace is None or ns == namespace
        ]


class ManagedChartStore:
    """In-memory managed charts. Upserts are keyed by (namespace, name)."""

    def __init__(self):
        self._charts: Dict[Tuple[str, str], ManagedChart] = {}
        self._writes = 0

    @property
    def write_count(self) -> int:
        """Number of upserts that actually changed stored state."""
        return self._writes

    def upsert(self, chart: ManagedChart) -> ManagedChart:
        key = (chart.namespace, chart.name)
        existing = self._charts.get(key)
        if existing is not None and existing.model_dump_json() == chart.model_dump_json():
            logger.debug("managed chart %s/%s unchanged", chart.namespace, chart.name)
            return existing
        self._charts[key] = chart
        self._writes += 1
        logger.info("upserted managed chart %s/%s", chart.namespace, chart.name)
        return chart

    def get(self, namespace: str, name: str) -> ManagedChart:
        chart = self._charts.get((namespace, name))
        if chart is None:
            raise NotFoundError("ManagedChart", namespace, name)
        return chart

    def list(self) -> List[ManagedChart]:
        return list(self._charts.values())
