"""Application dependency injection container."""

from dependency_injector import providers

from common.core.container import CommonContainer
from exporter.schemas.station_schema import Location
from exporter.services.exporter_service import ExporterService
from exporter.services.gauge_registry import StationGaugeRegistry
from exporter.services.price_fetcher import PriceFetcher


class AppContainer(CommonContainer):
    """Application service container.

    Inherits from CommonContainer:
    - config (must be provided)
    - collector_registry
    - shutdown_coordinator
    - metrics_service
    """

    location = providers.Singleton(
        Location,
        latitude=CommonContainer.config.provided.latitude,
        longitude=CommonContainer.config.provided.longitude,
    )

    price_fetcher = providers.Singleton(
        PriceFetcher,
        base_url=CommonContainer.config.provided.tankerkoenig_url,
        connect_timeout=CommonContainer.config.provided.fetch_connect_timeout,
        read_timeout=CommonContainer.config.provided.fetch_read_timeout,
        max_response_bytes=CommonContainer.config.provided.fetch_max_response_bytes,
        verify_tls=CommonContainer.config.provided.verify_tls,
    )

    # Process-wide series registry, never reset
    gauge_registry = providers.Singleton(
        StationGaugeRegistry,
        skip_unpriced=CommonContainer.config.provided.skip_unpriced_fuels,
        registry=CommonContainer.collector_registry,
    )

    exporter_service = providers.Singleton(
        ExporterService,
        fetcher=price_fetcher,
        gauge_registry=gauge_registry,
        shutdown_coordinator=CommonContainer.shutdown_coordinator,
        location=location,
        radius=CommonContainer.config.provided.radius,
        api_key=CommonContainer.config.provided.api_key,
        registry=CommonContainer.collector_registry,
    )
