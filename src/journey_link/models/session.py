from pydantic import BaseModel, ConfigDict

from journey_link.models.stops import Stop


class SessionContext(BaseModel):
    """Values resolved once at startup and read-only afterwards."""

    model_config = ConfigDict(frozen=True)

    destination_address: str
    destination: Stop

    @property
    def destination_id(self) -> str:
        return self.destination.id
