from collections.abc import Sequence

from rapidfuzz import fuzz

from journey_link.errors import PreconditionViolation
from journey_link.matching.normalizers import normalize_text
from journey_link.models.stops import Stop

STOP_TYPE = "stop"


def name_similarity(query: str, name: str) -> float:
    """Score how well a stop name matches the query, 0-100.

    token_set_ratio ignores word order, so "Mergelteichstr., Dortmund"
    and "Dortmund, Mergelteichstraße" compare equal after normalization.
    """
    return fuzz.token_set_ratio(normalize_text(query), normalize_text(name))


def _rank_key(
    position: int, stop: Stop, query: str | None
) -> tuple[int, int, int, float, int]:
    """Sort key for a candidate; smaller sorts first.

    Order of precedence:
    1. Stops before other location kinds (streets, addresses, POIs)
    2. Hits the service flagged as best
    3. Higher service match quality
    4. Higher name similarity to the query (only when a query is given)
    5. Position in the service response
    """
    is_stop = stop.type is None or stop.type == STOP_TYPE
    similarity = name_similarity(query, stop.name) if query else 0.0
    return (
        0 if is_stop else 1,
        0 if stop.is_best else 1,
        -(stop.match_quality or 0),
        -similarity,
        position,
    )


def select_best_stop(candidates: Sequence[Stop], query: str | None = None) -> Stop:
    """Pick the single best stop among stop finder candidates.

    The result depends only on the candidates (their order and contents)
    and the query, so the same response always yields the same stop.

    Args:
        candidates: Non-empty sequence as returned by the stop finder.
        query: The address that was searched, used to break ties by name.

    Returns:
        The highest-ranked stop.

    Raises:
        PreconditionViolation: If candidates is empty.
    """
    if not candidates:
        raise PreconditionViolation("select_best_stop requires at least one candidate")

    _, best = min(
        enumerate(candidates),
        key=lambda item: _rank_key(item[0], item[1], query),
    )
    return best
