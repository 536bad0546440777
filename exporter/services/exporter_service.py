"""Fetch-and-sync cycle triggered by every scrape."""

import logging
import time
from typing import TYPE_CHECKING

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram

from exporter.exceptions import FetchException
from exporter.schemas.station_schema import Location

if TYPE_CHECKING:
    from common.core.shutdown import ShutdownCoordinatorProtocol
    from exporter.services.gauge_registry import StationGaugeRegistry
    from exporter.services.price_fetcher import PriceFetcher

logger = logging.getLogger(__name__)


class ExporterService:
    """Refreshes the station gauges from the price provider.

    A failed fetch is logged and counted, and the gauges keep their last
    values. The last successful fetch time is exported so consumers can
    detect stale data.
    """

    def __init__(
        self,
        fetcher: "PriceFetcher",
        gauge_registry: "StationGaugeRegistry",
        shutdown_coordinator: "ShutdownCoordinatorProtocol",
        location: Location,
        radius: float,
        api_key: str,
        registry: CollectorRegistry = REGISTRY,
    ):
        """Initialize ExporterService.

        Args:
            fetcher: Client for the provider's list endpoint
            gauge_registry: Registry receiving the fetched prices
            shutdown_coordinator: Coordinator for graceful shutdown
            location: Center of the station search
            radius: Search radius in km
            api_key: Provider API key
            registry: Prometheus collector registry for the self-metrics
        """
        self.fetcher = fetcher
        self.gauge_registry = gauge_registry
        self.location = location
        self.radius = radius
        self.api_key = api_key
        self.shutdown_coordinator = shutdown_coordinator

        self.fetch_total = Counter(
            "fuel_price_fetch_total",
            "Fetches from the price provider by outcome",
            ["outcome"],
            registry=registry,
        )
        self.fetch_duration_seconds = Histogram(
            "fuel_price_fetch_duration_seconds",
            "Duration of fetches from the price provider",
            registry=registry,
        )
        self.last_successful_fetch = Gauge(
            "fuel_price_last_successful_fetch_timestamp_seconds",
            "Unix time of the last successful fetch from the price provider",
            registry=registry,
        )
        self.stations_reported = Gauge(
            "fuel_price_stations_reported",
            "Stations in the last successful response from the price provider",
            registry=registry,
        )

    def refresh(self) -> bool:
        """Run one fetch-and-sync cycle.

        Returns:
            True if the gauges were synchronized with fresh data
        """
        if self.shutdown_coordinator.is_shutting_down():
            logger.debug("Shutting down, serving last known prices")
            return False

        start_time = time.perf_counter()

        try:
            stations = self.fetcher.fetch(self.location, self.radius, self.api_key)
        except FetchException as e:
            self.fetch_total.labels(outcome=e.error_code.lower()).inc()
            logger.warning(
                f"Fetching prices failed, serving last known values: {e.message}",
                extra={"error_code": e.error_code},
            )
            return False
        finally:
            self.fetch_duration_seconds.observe(time.perf_counter() - start_time)

        summary = self.gauge_registry.sync(stations)

        self.fetch_total.labels(outcome="success").inc()
        self.last_successful_fetch.set_to_current_time()
        self.stations_reported.set(len(stations))

        if summary.registered:
            logger.info(
                f"Synchronized {len(stations)} stations: {summary.registered} new "
                f"series, {summary.updated} updated, {summary.skipped} skipped"
            )
        else:
            logger.debug(
                f"Synchronized {len(stations)} stations: {summary.updated} updated, "
                f"{summary.skipped} skipped"
            )

        return True
