"""Startup resolution of the fixed destination."""

import asyncio
import logging

from journey_link.data.config import JourneyLinkConfig, get_config
from journey_link.data.stop_finder_client import StopFinderClient
from journey_link.errors import DestinationNotFoundError
from journey_link.matching.stop_selector import select_best_stop
from journey_link.models.session import SessionContext

logger = logging.getLogger(__name__)


async def resolve_destination(client: StopFinderClient, address: str) -> SessionContext:
    """Resolve the destination address to its best stop.

    Args:
        client: Open stop finder client.
        address: Destination address.

    Returns:
        SessionContext holding the destination stop.

    Raises:
        DestinationNotFoundError: If the stop finder has no candidates.
        StopFinderError: If the lookup fails.
    """
    stops = await client.find(address)
    if not stops:
        raise DestinationNotFoundError(address)

    destination = select_best_stop(stops, query=address)
    logger.info(
        f"Destination {address!r} resolved to {destination.display_name} [{destination.id}]"
    )
    return SessionContext(destination_address=address, destination=destination)


async def initialize_session(config: JourneyLinkConfig | None = None) -> SessionContext:
    """Create the session context for the configured destination."""
    if config is None:
        config = get_config()

    async with StopFinderClient(config) as client:
        return await resolve_destination(client, config.destination_address)


# Lazily resolved session for the tool server; written once, then only read
_session: SessionContext | None = None
_session_lock = asyncio.Lock()


async def get_session() -> SessionContext:
    """Get or create the server's session context.

    A failed resolution is not cached, so the next call tries again.
    """
    global _session
    async with _session_lock:
        if _session is None:
            _session = await initialize_session()
        return _session


def reset_session() -> None:
    """Forget the resolved session. Useful for testing."""
    global _session
    _session = None
    # Clear the lru_cache on get_config so it re-reads .env/environment
    # (hasattr check handles case where function is mocked in tests)
    if hasattr(get_config, "cache_clear"):
        get_config.cache_clear()
