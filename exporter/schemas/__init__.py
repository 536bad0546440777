"""Pydantic schemas for provider payloads."""

from exporter.schemas.station_schema import Location, StationListResponse, StationRecord

__all__ = [
    "Location",
    "StationListResponse",
    "StationRecord",
]
