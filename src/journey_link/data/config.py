from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class JourneyLinkConfig(BaseSettings):
    """Configuration for the stop finder, the destination and deep links.

    Automatically loads from environment variables and .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    stop_finder_url: str = Field(
        default="https://openservice-test.vrr.de/static03/XML_STOPFINDER_REQUEST",
        alias="JOURNEY_LINK_STOP_FINDER_URL",
    )
    request_timeout_seconds: float = Field(default=30.0, alias="JOURNEY_LINK_TIMEOUT")
    max_results: int = Field(default=10, alias="JOURNEY_LINK_MAX_RESULTS")
    # anyObjFilter_sf=2 restricts the stop finder to stops
    stops_only: bool = True

    # fixed destination, resolved once at startup
    destination_address: str = Field(
        default="Mergelteichstraße 80, 44225 Dortmund",
        alias="JOURNEY_LINK_DESTINATION",
    )

    deep_link_base_url: str = Field(
        default="https://www.vrr.de/de/fahrplanauskunft/",
        alias="JOURNEY_LINK_DEEP_LINK_URL",
    )
    debounce_seconds: float = Field(default=0.5, alias="JOURNEY_LINK_DEBOUNCE_SECONDS")


@lru_cache
def get_config() -> JourneyLinkConfig:
    """Get journey-link configuration (cached singleton).

    Returns:
        JourneyLinkConfig with values from .env file or environment variables.
    """
    return JourneyLinkConfig()
