"""MCP tool for building journey planner links."""

from journey_link.app import mcp
from journey_link.data.config import get_config
from journey_link.models.form import FormState
from journey_link.models.responses import JourneyLinkResponse
from journey_link.models.stops import Stop
from journey_link.services.navigation import plan_navigation
from journey_link.services.session import get_session


@mcp.tool()
async def build_journey_link(
    date: str,
    time: str,
    from_address: str,
    stop: Stop | None = None,
) -> JourneyLinkResponse:
    """Validate a trip request and build the journey planner deep link.

    Pass the stop exactly as returned by find_stops. All problems are
    reported at once, keyed by field (fromAddress, date, time); a missing
    stop is reported under fromAddress.

    Examples:
        build_journey_link("2024-05-01", "14:05", "Dortmund Hbf", stop)

    Args:
        date: Travel date, e.g. "2024-05-01".
        time: Departure time as H:MM or HH:MM (24-hour).
        from_address: Start address as typed.
        stop: Start stop chosen from find_stops results.

    Returns:
        JourneyLinkResponse with the errors, or the deep link when valid.
    """
    form = FormState(date=date, time=time, from_address=from_address, selected_stop=stop)
    session = await get_session()
    result = plan_navigation(form, session, base_url=get_config().deep_link_base_url)

    return JourneyLinkResponse(
        is_valid=result.validation.is_valid,
        errors=result.validation.errors,
        first_error=result.validation.first_error,
        deep_link=result.deep_link,
    )
