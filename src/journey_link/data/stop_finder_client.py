import logging

import httpx
from pydantic import ValidationError

from journey_link.data.config import JourneyLinkConfig
from journey_link.errors import StopFinderError
from journey_link.models.stops import Stop, StopFinderResponse

logger = logging.getLogger(__name__)

# anyObjFilter_sf bit mask: 2 = stops, 0 = every location kind
STOPS_ONLY_FILTER = 2
ANY_OBJECT_FILTER = 0


class StopFinderClient:
    """Async HTTP client for the EFA stop finder (rapidJSON output).

    Usage:
        async with StopFinderClient(config) as client:
            stops = await client.find("Mergelteichstraße 80, Dortmund")
    """

    def __init__(self, config: JourneyLinkConfig):
        """Initialize the client.

        Args:
            config: Configuration with the stop finder URL and limits.
        """
        self._config = config
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "StopFinderClient":
        """Enter async context - create HTTP client."""
        self._client = httpx.AsyncClient(timeout=self._config.request_timeout_seconds)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context - close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _params(self, address: str) -> dict[str, str | int]:
        return {
            "outputFormat": "rapidJSON",
            "type_sf": "any",
            "name_sf": address,
            "anyObjFilter_sf": STOPS_ONLY_FILTER if self._config.stops_only else ANY_OBJECT_FILTER,
            "anyMaxSizeHitList": self._config.max_results,
            "coordOutputFormat": "WGS84[dd.ddddd]",
            "locationServerActive": 1,
        }

    async def find(self, address: str) -> list[Stop]:
        """Look up candidate stops for a free-text address.

        Performs exactly one request; there are no retries.

        Args:
            address: Free-text address, must not be blank.

        Returns:
            Candidate stops in the order the service ranked them. An empty
            list means the service found nothing.

        Raises:
            RuntimeError: If client not initialized.
            ValueError: If the address is blank.
            StopFinderError: If the request fails, the service answers with a
                non-success status, or the payload cannot be parsed.
        """
        if not self._client:
            raise RuntimeError("Client not initialized - use 'async with'")
        if not address.strip():
            raise ValueError("address must not be blank")

        logger.debug(f"Stop finder request for {address!r}")
        try:
            response = await self._client.get(
                self._config.stop_finder_url, params=self._params(address)
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as e:
            raise StopFinderError(f"Stop finder request failed: {e}") from e
        except ValueError as e:
            # response body is not JSON
            raise StopFinderError(f"Stop finder returned invalid JSON: {e}") from e

        try:
            data = StopFinderResponse.model_validate(payload)
        except ValidationError as e:
            raise StopFinderError(f"Stop finder returned a malformed payload: {e}") from e

        logger.debug(f"Stop finder returned {len(data.locations)} location(s) for {address!r}")
        return data.locations
