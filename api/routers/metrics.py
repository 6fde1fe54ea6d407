"""
Prometheus scrape endpoint.
"""
import logging

from fastapi import APIRouter, Depends, Response

from api.dependencies import get_metrics, get_task_registry
from monitoring.metrics import CONTENT_TYPE, MetricsAggregator
from task_registry.registry import TaskRegistry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Metrics"])


@router.get("/metrics", response_class=Response)
def get_metrics_snapshot(
    registry: TaskRegistry = Depends(get_task_registry),
    metrics: MetricsAggregator = Depends(get_metrics),
):
    """
    Render metrics in the Prometheus text format.

    Reading the task count here is not counted as a list operation.
    """
    logger.debug("GET /metrics")
    body = metrics.get_snapshot(registry.count())
    return Response(content=body, headers={"Content-Type": CONTENT_TYPE})
