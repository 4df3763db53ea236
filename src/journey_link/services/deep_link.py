"""Deep links into the journey planner.

The query layout below is the planner's contract; changing it breaks
every link handed out so far, so bump DEEP_LINK_VERSION with it.
"""

from urllib.parse import quote

from journey_link.errors import PreconditionViolation
from journey_link.services.validation import is_valid_time, parse_form_date

DEEP_LINK_VERSION = 1
DEFAULT_DEEP_LINK_BASE_URL = "https://www.vrr.de/de/fahrplanauskunft/"
DEEP_LINK_TEMPLATE = "{base}?origin={origin}&destination={destination}&date={date}&time={time}"

# EFA global ids look like "de:05913:285"; keep the colons readable
ID_SAFE_CHARS = ":"


def format_date_for_deep_link(value: str) -> str:
    """Reformat a form date as consecutive day, month, year digits.

    Example: "2024-05-01" -> "01052024"
    """
    try:
        parsed = parse_form_date(value)
    except ValueError as e:
        raise PreconditionViolation(f"Deep link date {value!r} was not validated") from e
    return parsed.strftime("%d%m%Y")


def format_time_for_deep_link(value: str) -> str:
    """Reformat a form time as consecutive hour, minute digits.

    Example: "14:05" -> "1405", "9:30" -> "0930"
    """
    if not is_valid_time(value):
        raise PreconditionViolation(f"Deep link time {value!r} was not validated")
    hour, minute = value.split(":")
    return f"{int(hour):02d}{minute}"


def build_deep_link(
    origin_id: str,
    destination_id: str,
    date: str,
    time: str,
    base_url: str = DEFAULT_DEEP_LINK_BASE_URL,
) -> str:
    """Build the journey planner URL for a trip.

    Pure: the same arguments always give the same string. Callers must have
    validated the form first; anything that slipped through raises instead
    of producing a broken link.

    Args:
        origin_id: Stop id of the selected start stop.
        destination_id: Stop id of the session destination.
        date: Form date, e.g. "2024-05-01".
        time: Form time, e.g. "14:05".
        base_url: Planner URL the query is appended to.

    Returns:
        The deep link.

    Raises:
        PreconditionViolation: If an id is blank or date/time are malformed.
    """
    if not origin_id.strip():
        raise PreconditionViolation("Deep link origin id must not be blank")
    if not destination_id.strip():
        raise PreconditionViolation("Deep link destination id must not be blank")

    return DEEP_LINK_TEMPLATE.format(
        base=base_url,
        origin=quote(origin_id, safe=ID_SAFE_CHARS),
        destination=quote(destination_id, safe=ID_SAFE_CHARS),
        date=format_date_for_deep_link(date),
        time=format_time_for_deep_link(time),
    )
