"""Per-station gauge registry.

Keeps exactly one gauge series per (station, fuel type) for the lifetime of
the process. A series is created the first time its key is seen and updated
in place afterwards. Series are never removed: a station that drops out of
the provider's response keeps serving its last known price.
"""

import logging
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from prometheus_client import REGISTRY, CollectorRegistry, Gauge

from exporter.schemas.station_schema import StationRecord

logger = logging.getLogger(__name__)

GAS_STATION_PRICE_METRIC = "gas_station_price"
LABEL_NAMES = ("station_id", "brand", "name", "street", "number", "place", "type")


class FuelType(str, Enum):
    """Fuel types reported by the provider."""

    E5 = "E5"
    E10 = "E10"
    DIESEL = "Diesel"

    def price_of(self, station: StationRecord) -> float | None:
        """Return this fuel's price from a station record."""
        match self:
            case FuelType.E5:
                return station.e5
            case FuelType.E10:
                return station.e10
            case FuelType.DIESEL:
                return station.diesel


@dataclass(frozen=True)
class MetricKey:
    """Identity of one gauge series."""

    station_id: str
    fuel_type: FuelType


@dataclass
class GaugeEntry:
    """A registered gauge series with labels fixed at first observation."""

    labels: Mapping[str, str]
    gauge: Gauge
    value: float | None = field(default=None)

    def set(self, value: float) -> None:
        self.gauge.set(value)
        self.value = value


@dataclass
class SyncSummary:
    """Counts of what one sync pass did."""

    registered: int = 0
    updated: int = 0
    skipped: int = 0


class StationGaugeRegistry:
    """Synchronizes station records into labeled gauge series.

    All series share the ``gas_station_price`` family. Each sync pass runs
    under a single lock so two concurrent scrapes that both see a new
    station cannot create its series twice.

    With ``skip_unpriced`` a key whose price is missing or not positive
    counts as unseen: no series is created for it until it first carries a
    price, so a station first seen while closed does not export a 0.
    """

    def __init__(
        self,
        skip_unpriced: bool = True,
        registry: CollectorRegistry = REGISTRY,
    ):
        """Initialize the registry and register the gauge family.

        Args:
            skip_unpriced: Leave series untouched when a price is missing or
                not positive, instead of writing 0
            registry: Prometheus collector registry to register with
        """
        self.skip_unpriced = skip_unpriced
        self._entries: dict[MetricKey, GaugeEntry] = {}
        self._lock = threading.Lock()

        self.station_price = Gauge(
            GAS_STATION_PRICE_METRIC,
            "Current fuel price of a gas station",
            LABEL_NAMES,
            registry=registry,
        )

    def sync(self, stations: Iterable[StationRecord]) -> SyncSummary:
        """Apply one provider snapshot to the registered series.

        Args:
            stations: Station records of the latest fetch

        Returns:
            Counts of registered, updated and skipped series
        """
        summary = SyncSummary()

        with self._lock:
            for station in stations:
                for fuel_type in FuelType:
                    price = fuel_type.price_of(station)

                    if price is None or price <= 0:
                        if self.skip_unpriced:
                            summary.skipped += 1
                            continue
                        price = price or 0.0

                    key = MetricKey(station.id, fuel_type)
                    entry = self._entries.get(key)

                    if entry is None:
                        entry = self._register(key, station)
                        summary.registered += 1
                    else:
                        summary.updated += 1

                    entry.set(price)

        return summary

    def get(self, key: MetricKey) -> GaugeEntry | None:
        with self._lock:
            return self._entries.get(key)

    def keys(self) -> list[MetricKey]:
        with self._lock:
            return list(self._entries)

    def snapshot(self) -> dict[MetricKey, float | None]:
        """Current value of every registered series."""
        with self._lock:
            return {key: entry.value for key, entry in self._entries.items()}

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _register(self, key: MetricKey, station: StationRecord) -> GaugeEntry:
        """Create the labeled series for a new key. Caller holds the lock."""
        labels = MappingProxyType(
            {
                "station_id": station.id,
                "brand": station.brand,
                "name": station.name,
                "street": station.street,
                "number": station.house_number,
                "place": station.place,
                "type": key.fuel_type.value,
            }
        )

        entry = GaugeEntry(
            labels=labels,
            gauge=self.station_price.labels(**labels),
        )
        self._entries[key] = entry

        logger.debug(
            f"Registered gauge for station {station.id} ({station.brand} "
            f"{station.name}), fuel {key.fuel_type.value}"
        )
        return entry
