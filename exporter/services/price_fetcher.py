"""Client for the Tankerkoenig station list endpoint."""

import logging
from time import perf_counter

import requests
from pydantic import ValidationError

from exporter.exceptions import UpstreamDecodeException, UpstreamTransportException
from exporter.schemas.station_schema import Location, StationListResponse, StationRecord

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


class PriceFetcher:
    """Fetches current fuel prices for stations around a location.

    The fetcher holds transport options only. Location, radius and API key
    are passed per call, so one instance can serve concurrent requests.
    """

    def __init__(
        self,
        base_url: str,
        connect_timeout: float = 5.0,
        read_timeout: float = 10.0,
        max_response_bytes: int = 5 * 1024 * 1024,
        verify_tls: bool = True,
    ):
        """Initialize PriceFetcher.

        Args:
            base_url: URL of the provider's list endpoint
            connect_timeout: Seconds to wait for the connection to be established
            read_timeout: Seconds to wait between bytes of the response
            max_response_bytes: Largest response body that will be read
            verify_tls: Whether to verify the provider's TLS certificate
        """
        self.base_url = base_url
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.max_response_bytes = max_response_bytes
        self.verify_tls = verify_tls

    def fetch(
        self, location: Location, radius: float, api_key: str
    ) -> list[StationRecord]:
        """Fetch all stations within ``radius`` km of ``location``.

        Raises:
            UpstreamTransportException: Connection, status, size or provider failure
            UpstreamDecodeException: Body is not a valid station list
        """
        params: dict[str, str | float] = {
            "lat": location.latitude,
            "lng": location.longitude,
            "rad": radius,
            "type": "all",
            "apikey": api_key,
        }

        start_time = perf_counter()

        try:
            with requests.get(
                self.base_url,
                params=params,
                timeout=(self.connect_timeout, self.read_timeout),
                verify=self.verify_tls,
                stream=True,
            ) as response:
                response.raise_for_status()
                body = self._read_body(response)
        except requests.RequestException as e:
            raise UpstreamTransportException(
                f"Request to price provider failed: {_redact(str(e), api_key)}"
            ) from e

        logger.debug(
            f"Price provider responded with {len(body)} bytes "
            f"in {perf_counter() - start_time:.3f}s"
        )

        payload = self._decode(body)

        if not payload.ok:
            reason = payload.message or payload.status or "unknown reason"
            raise UpstreamTransportException(
                f"Price provider rejected request: {_redact(reason, api_key)}"
            )

        return payload.stations

    def _read_body(self, response: requests.Response) -> bytes:
        """Read the response body, refusing anything above the size bound."""
        chunks: list[bytes] = []
        size = 0

        for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
            size += len(chunk)
            if size > self.max_response_bytes:
                raise UpstreamTransportException(
                    f"Price provider response exceeds {self.max_response_bytes} bytes"
                )
            chunks.append(chunk)

        return b"".join(chunks)

    def _decode(self, body: bytes) -> StationListResponse:
        try:
            return StationListResponse.model_validate_json(body)
        except ValidationError as e:
            raise UpstreamDecodeException(
                f"Invalid station list from price provider: "
                f"{e.error_count()} error(s), first: {e.errors()[0]['msg']}"
            ) from e


def _redact(text: str, secret: str) -> str:
    """Remove a secret from text that may echo the request URL."""
    if not secret:
        return text
    return text.replace(secret, "***")
