"""Base dependency injection container."""

from dependency_injector import containers, providers
from prometheus_client import REGISTRY
from pydantic import BaseModel

from common.core.shutdown import ShutdownCoordinator
from common.metrics.service import MetricsService


class CommonContainer(containers.DeclarativeContainer):
    """Base container with common infrastructure services.

    Apps should extend this class to add their own services:

        from common.core.container import CommonContainer

        class AppContainer(CommonContainer):
            my_service = providers.Singleton(MyService, settings=CommonContainer.config)
    """

    # Configuration - must be overridden by app
    config = providers.Dependency(instance_of=BaseModel)

    # Prometheus registry shared by every service that owns metrics
    collector_registry = providers.Object(REGISTRY)

    shutdown_coordinator = providers.Singleton(ShutdownCoordinator)

    metrics_service = providers.Singleton(
        MetricsService,
        shutdown_coordinator=shutdown_coordinator,
        registry=collector_registry,
    )
