"""Prometheus metrics service.

Renders the exposition text of a collector registry. Services own their
metrics directly and register them with the same registry; everything
registered there ends up in the output of get_metrics_text().
"""

import logging
from typing import TYPE_CHECKING

from prometheus_client import REGISTRY, CollectorRegistry, Gauge, generate_latest

from common.core.shutdown import LifetimeEvent

if TYPE_CHECKING:
    from common.core.shutdown import ShutdownCoordinatorProtocol

logger = logging.getLogger(__name__)

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"


class MetricsService:
    """Serializes registered metrics and tracks the shutdown state."""

    def __init__(
        self,
        shutdown_coordinator: "ShutdownCoordinatorProtocol",
        registry: CollectorRegistry = REGISTRY,
    ):
        """Initialize metrics service.

        Args:
            shutdown_coordinator: Coordinator for graceful shutdown.
            registry: Collector registry to render.
        """
        self.registry = registry

        self.application_shutting_down = Gauge(
            "application_shutting_down",
            "Whether application is shutting down (1=yes, 0=no)",
            registry=registry,
        )

        shutdown_coordinator.register_lifetime_notification(self._on_lifetime_event)

    def get_metrics_text(self) -> str:
        """Generate metrics in Prometheus text format."""
        return generate_latest(self.registry).decode("utf-8")

    def _on_lifetime_event(self, event: LifetimeEvent) -> None:
        if event == LifetimeEvent.PREPARE_SHUTDOWN:
            self.application_shutting_down.set(1)
