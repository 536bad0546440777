"""Tankerkoenig station list schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Location(BaseModel):
    """Center point of the station search."""

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)

    model_config = ConfigDict(frozen=True)


class StationRecord(BaseModel):
    """A single gas station as reported by the list endpoint.

    Prices are ``None`` when the station does not offer the fuel or is
    closed. The provider encodes that as either ``null`` or ``false``.
    """

    id: str = Field(..., min_length=1)
    name: str = ""
    brand: str = ""
    street: str = ""
    house_number: str = Field("", alias="houseNumber")
    post_code: int | None = Field(None, alias="postCode")
    place: str = ""
    lat: float | None = None
    lng: float | None = None
    dist: float | None = None
    diesel: float | None = None
    e5: float | None = None
    e10: float | None = None
    is_open: bool = Field(False, alias="isOpen")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("name", "brand", "street", "house_number", "place", mode="before")
    @classmethod
    def _normalize_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("post_code", mode="before")
    @classmethod
    def _normalize_post_code(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("diesel", "e5", "e10", mode="before")
    @classmethod
    def _normalize_price(cls, value: Any) -> Any:
        if isinstance(value, bool):
            if value:
                raise ValueError("price must be a number, null or false")
            return None
        return value


class StationListResponse(BaseModel):
    """Response envelope of the list endpoint."""

    ok: bool
    status: str | None = None
    message: str | None = None
    license: str | None = None
    data: str | None = None
    stations: list[StationRecord] = Field(default_factory=list)
