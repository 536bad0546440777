"""Metrics API endpoint for Prometheus scraping."""

from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, Response

from common.metrics.service import CONTENT_TYPE, MetricsService
from exporter.services.exporter_service import ExporterService

metrics_bp = Blueprint("metrics", __name__, url_prefix="/metrics")


@metrics_bp.route("", methods=["GET"])
@inject
def get_metrics(
    exporter_service: ExporterService = Provide["exporter_service"],
    metrics_service: MetricsService = Provide["metrics_service"],
) -> Any:
    """Refresh fuel prices and return metrics in Prometheus text format.

    A failed refresh still returns 200 with the last known values.
    """
    exporter_service.refresh()

    return Response(metrics_service.get_metrics_text(), content_type=CONTENT_TYPE)
