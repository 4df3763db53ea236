"""MCP tools for stop search and the session destination."""

from journey_link.app import mcp
from journey_link.matching.stop_selector import select_best_stop
from journey_link.models.responses import DestinationResponse, FindStopsResponse
from journey_link.services.session import get_session
from journey_link.services.stop_search import search_stops


@mcp.tool()
async def find_stops(address: str) -> FindStopsResponse:
    """Find public transit stops for a free-text start address.

    Examples:
        find_stops("Dortmund Hbf")
        find_stops("Mergelteichstraße 80, Dortmund")

    Args:
        address: Street address, place or stop name.

    Returns:
        FindStopsResponse with:
        - status: results, no_results or failed
        - stops: candidates to choose the start stop from
        - best_stop: the candidate ranked first
        - message: text to show when there is nothing to choose from
    """
    outcome = await search_stops(address)
    best_stop = select_best_stop(outcome.stops, query=address) if outcome.stops else None

    return FindStopsResponse(
        query=outcome.query,
        status=outcome.status,
        stops=outcome.stops,
        count=len(outcome.stops),
        message=outcome.message,
        best_stop=best_stop,
    )


@mcp.tool()
async def resolve_destination() -> DestinationResponse:
    """Show the stop every journey link leads to.

    The destination address is fixed by configuration and resolved once.
    """
    session = await get_session()
    return DestinationResponse(
        address=session.destination_address,
        stop=session.destination,
        display_name=session.destination.display_name,
    )
