"""
System Agent Kernel API — FastAPI endpoints.

Exposes the builder and the status reconciler over in-memory collaborator
stores, for driving the kernel from tests or a thin controller shim:
- Cluster changes (build + upsert the managed chart)
- Bundle status snapshots
- Control-plane status sync
"""

from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from sysagent_kernel.fleet.store import (
    BundleStore,
    ManagedChartStore,
    NotFoundError,
    TransportError,
)
from sysagent_kernel.handler.system_agent import SystemAgentHandler
from sysagent_kernel.models.bundle import Bundle, BundleSummary
from sysagent_kernel.models.cluster import Cluster, ControlPlane, ControlPlaneStatus
from sysagent_kernel.models.config import AgentConfig
from sysagent_kernel.versioning.threshold import InvalidVersion


# --- Request/Response Models ---

class BundleReportRequest(BaseModel):
    summary: BundleSummary = BundleSummary()
    values: Optional[dict] = None


class ControlPlaneSyncRequest(BaseModel):
    control_plane: ControlPlane
    status: Optional[ControlPlaneStatus] = None


# --- Application Factory ---

def create_app(
    bundle_store: Optional[BundleStore] = None,
    chart_store: Optional[ManagedChartStore] = None,
    config: Optional[AgentConfig] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="System Agent Kernel API",
        description="Readiness reconciler for the managed system-upgrade-controller",
        version="0.1.0",
    )

    bundles = bundle_store or BundleStore()
    charts = chart_store or ManagedChartStore()
    cfg = config or AgentConfig()
    handler = SystemAgentHandler(bundles=bundles, charts=charts, config=cfg)

    app.state.bundle_store = bundles
    app.state.chart_store = charts
    app.state.handler = handler

    # === CLUSTERS ===

    @app.post("/clusters")
    def cluster_changed(cluster: Cluster):
        """Build the desired chart for a cluster and upsert it."""
        try:
            submitted = handler.on_cluster_change(cluster)
        except InvalidVersion as e:
            raise HTTPException(422, str(e))
        return {
            "cluster": cluster.name,
            "charts": [c.model_dump(mode="json") for c in submitted],
        }

    @app.get("/charts/{namespace}/{name}")
    def get_chart(namespace: str, name: str):
        try:
            return charts.get(namespace, name).model_dump(mode="json")
        except NotFoundError:
            raise HTTPException(404, "Managed chart not found")

    @app.get("/charts")
    def list_charts():
        return [c.model_dump(mode="json") for c in charts.list()]

    # === BUNDLES ===

    @app.put("/bundles/{namespace}/{name}")
    def report_bundle(namespace: str, name: str, req: BundleReportRequest):
        """Record the deployment system's view of a bundle."""
        bundle = Bundle(
            name=name,
            namespace=namespace,
            summary=req.summary,
            values=req.values,
        )
        bundles.put(bundle)
        return bundle.model_dump(mode="json")

    @app.delete("/bundles/{namespace}/{name}")
    def delete_bundle(namespace: str, name: str):
        if not bundles.delete(namespace, name):
            raise HTTPException(404, "Bundle not found")
        return {"status": "deleted", "bundle": f"{namespace}/{name}"}

    # === CONTROL PLANES ===

    @app.post("/controlplanes/sync")
    def sync_control_plane(req: ControlPlaneSyncRequest):
        """Derive the readiness condition and return the updated status."""
        try:
            readiness = handler.reconciler.evaluate(req.control_plane)
        except InvalidVersion as e:
            raise HTTPException(422, str(e))
        except TransportError as e:
            raise HTTPException(502, f"Bundle lookup failed: {e}")

        current = req.status if req.status is not None else req.control_plane.status
        updated = handler.reconciler.apply(current, readiness)
        return {
            "state": readiness.state.value,
            "status": updated.model_dump(mode="json"),
        }

    # === HEALTH ===

    @app.get("/health")
    def health():
        return {
            "status": "ok",
            "config": cfg.model_dump(),
            "bundles": len(bundles.list()),
            "charts": len(charts.list()),
        }

    return app
