"""Stop search with service failures turned into a shown outcome."""

import logging

from journey_link.data.config import JourneyLinkConfig, get_config
from journey_link.data.stop_finder_client import StopFinderClient
from journey_link.errors import StopFinderError
from journey_link.models.search import SearchOutcome

logger = logging.getLogger(__name__)


async def run_search(client: StopFinderClient, address: str) -> SearchOutcome:
    """Search stops for an address with an open client.

    A failed request becomes a FAILED outcome; it is not retried.
    """
    try:
        stops = await client.find(address)
    except StopFinderError as e:
        logger.warning(f"Stop search for {address!r} failed: {e}")
        return SearchOutcome.failed(address)
    return SearchOutcome.from_stops(address, stops)


async def search_stops(address: str, config: JourneyLinkConfig | None = None) -> SearchOutcome:
    """One-off stop search using a fresh client.

    A blank address is answered with no results and never reaches the network.
    """
    if not address.strip():
        return SearchOutcome.from_stops(address, [])

    if config is None:
        config = get_config()

    async with StopFinderClient(config) as client:
        return await run_search(client, address)
