"""Prometheus metrics module."""

from common.metrics.service import CONTENT_TYPE, MetricsService

__all__ = [
    "CONTENT_TYPE",
    "MetricsService",
]
