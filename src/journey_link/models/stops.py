from pydantic import BaseModel, ConfigDict, Field


class Stop(BaseModel):
    """A location record returned by the stop finder.

    Only id, name and coord are required; the rest is ranking metadata
    the service attaches to each hit.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str
    name: str
    coord: tuple[float, float] = Field(description="(latitude, longitude) in WGS84")
    type: str | None = Field(default=None, description="stop, street, address, poi, ...")
    match_quality: int | None = Field(default=None, alias="matchQuality")
    is_best: bool = Field(default=False, alias="isBest")
    disassembled_name: str | None = Field(default=None, alias="disassembledName")

    @property
    def display_name(self) -> str:
        """Name with coordinates, e.g. 'Dortmund, Hbf - (51.51, 7.45)'."""
        return f"{self.name} - ({self.coord[0]}, {self.coord[1]})"


class StopFinderResponse(BaseModel):
    """rapidJSON stop finder payload. A missing locations key means no matches."""

    model_config = ConfigDict(extra="ignore")

    locations: list[Stop] = Field(default_factory=list)
