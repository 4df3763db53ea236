from pydantic import BaseModel, Field

from journey_link.models.search import SearchStatus
from journey_link.models.stops import Stop


class FindStopsResponse(BaseModel):
    query: str = Field(description="Address that was searched")
    status: SearchStatus
    stops: list[Stop] = Field(description="Candidate stops in service order")
    count: int = Field(description="Number of stops returned")
    message: str = Field(default="", description="Message to show when there are no stops")
    best_stop: Stop | None = Field(
        default=None, description="Best candidate (set whenever stops exist)"
    )


class DestinationResponse(BaseModel):
    address: str = Field(description="Configured destination address")
    stop: Stop = Field(description="Stop the destination resolved to")
    display_name: str = Field(description="Stop name with coordinates")


class JourneyLinkResponse(BaseModel):
    is_valid: bool
    errors: dict[str, str] = Field(
        default_factory=dict, description="Field (fromAddress, date, time) -> message"
    )
    first_error: str = Field(default="", description="First message to show, if any")
    deep_link: str | None = Field(default=None, description="Journey planner URL when valid")
