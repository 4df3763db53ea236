import argparse
import asyncio
import logging
from datetime import UTC, datetime

from pydantic import BaseModel

from journey_link.app import mcp
from journey_link.services.session import initialize_session
from journey_link.services.stop_search import search_stops

# Register tools on the shared mcp instance
from journey_link.tools import navigation_tools, stop_tools  # noqa: F401


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str


@mcp.tool()
def health() -> HealthResponse:
    """Check if the journey-link server is running and healthy.

    Returns the server status, version, and current timestamp.
    """
    from journey_link import __version__

    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=datetime.now(UTC).isoformat(),
    )


async def run_lookup(address: str) -> None:
    """Print the stop candidates for an address."""
    outcome = await search_stops(address)

    if not outcome.stops:
        print(outcome.message)
        return

    print(f"\n{len(outcome.stops)} stop(s) for {address!r}:")
    for stop in outcome.stops:
        print(f"  {stop.id:<20} {stop.display_name}")


async def run_destination() -> None:
    """Print the stop the configured destination resolves to."""
    session = await initialize_session()
    print(f"{session.destination_address} -> {session.destination.display_name}")
    print(f"  id: {session.destination_id}")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="journey-link",
        description="Journey Link MCP Server",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    subparsers = parser.add_subparsers(dest="command")

    # search command
    search_parser = subparsers.add_parser(
        "search",
        help="Look up stop candidates for an address",
    )
    search_parser.add_argument("address", help="Free-text start address")

    # destination command
    subparsers.add_parser(
        "destination",
        help="Resolve the configured destination address",
    )

    args = parser.parse_args()

    if args.command in ("search", "destination"):
        # Configure logging
        log_level = logging.DEBUG if args.verbose else logging.INFO
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

        if args.command == "search":
            asyncio.run(run_lookup(args.address))
        else:
            asyncio.run(run_destination())
    else:
        # Default: run MCP server
        mcp.run()


if __name__ == "__main__":
    main()
