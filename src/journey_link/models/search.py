from enum import Enum

from pydantic import BaseModel, Field

from journey_link.models.stops import Stop

SEARCHING_MESSAGE = "Suche läuft..."
NO_RESULTS_MESSAGE = (
    "Keine Haltestellen für diese Adresse gefunden. Bitte versuchen Sie eine andere Adresse."
)
SEARCH_FAILED_MESSAGE = "Fehler bei der Suche"


class SearchStatus(str, Enum):
    """How a completed stop search ended."""

    RESULTS = "results"
    NO_RESULTS = "no_results"
    FAILED = "failed"


class SearchOutcome(BaseModel):
    """Result of one issued stop search, ready to be shown to the user."""

    query: str
    status: SearchStatus
    stops: list[Stop] = Field(default_factory=list)
    message: str = ""

    @classmethod
    def from_stops(cls, query: str, stops: list[Stop]) -> "SearchOutcome":
        if not stops:
            return cls(query=query, status=SearchStatus.NO_RESULTS, message=NO_RESULTS_MESSAGE)
        return cls(query=query, status=SearchStatus.RESULTS, stops=stops)

    @classmethod
    def failed(cls, query: str) -> "SearchOutcome":
        return cls(query=query, status=SearchStatus.FAILED, message=SEARCH_FAILED_MESSAGE)
