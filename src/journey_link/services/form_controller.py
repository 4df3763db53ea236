"""Navigation form controller.

Owns the form state and the candidate list, and talks to the view only
through the FormView protocol.
"""

import logging
from typing import Protocol

from journey_link.data.config import JourneyLinkConfig, get_config
from journey_link.data.stop_finder_client import StopFinderClient
from journey_link.errors import PreconditionViolation
from journey_link.models.form import FormState, NavigationResult
from journey_link.models.search import SearchOutcome, SearchStatus
from journey_link.models.session import SessionContext
from journey_link.models.stops import Stop
from journey_link.services.deep_link import DEFAULT_DEEP_LINK_BASE_URL
from journey_link.services.navigation import plan_navigation
from journey_link.services.search_debouncer import DEFAULT_QUIET_PERIOD, SearchDebouncer
from journey_link.services.stop_search import run_search

logger = logging.getLogger(__name__)


class FormView(Protocol):
    """Rendering side of the form."""

    def show_searching(self, query: str) -> None: ...

    def show_candidates(self, stops: list[Stop]) -> None: ...

    def show_search_message(self, outcome: SearchOutcome) -> None: ...

    def show_validation_errors(self, errors: dict[str, str]) -> None: ...

    def clear_validation_errors(self) -> None: ...

    def open_link(self, url: str) -> None: ...


class FormController:
    """Drives stop search, selection and navigation for one session.

    Usage:
        async with StopFinderClient(config) as client:
            controller = FormController(session, client, view)
            controller.input_address("Hbf Dortmund")
            await controller.settle()
            controller.select_stop(controller.candidates[0])
            controller.set_date("2024-05-01")
            controller.set_time("14:05")
            result = controller.navigate()
    """

    def __init__(
        self,
        session: SessionContext,
        stop_finder: StopFinderClient,
        view: FormView,
        quiet_period: float = DEFAULT_QUIET_PERIOD,
        deep_link_base_url: str = DEFAULT_DEEP_LINK_BASE_URL,
    ):
        if session is None:
            raise PreconditionViolation("FormController needs a resolved session")

        self._session = session
        self._stop_finder = stop_finder
        self._view = view
        self._deep_link_base_url = deep_link_base_url
        self._form = FormState()
        self._candidates: list[Stop] = []
        self._debouncer: SearchDebouncer[SearchOutcome] = SearchDebouncer(
            self._search, self._apply_outcome, quiet_period=quiet_period
        )

    @classmethod
    def from_config(
        cls,
        session: SessionContext,
        stop_finder: StopFinderClient,
        view: FormView,
        config: JourneyLinkConfig | None = None,
    ) -> "FormController":
        """Create a controller with the configured quiet period and planner URL."""
        if config is None:
            config = get_config()
        return cls(
            session,
            stop_finder,
            view,
            quiet_period=config.debounce_seconds,
            deep_link_base_url=config.deep_link_base_url,
        )

    @property
    def form(self) -> FormState:
        return self._form

    @property
    def candidates(self) -> list[Stop]:
        """Stops from the most recent completed search."""
        return list(self._candidates)

    def set_date(self, value: str) -> None:
        self._form = self._form.model_copy(update={"date": value})

    def set_time(self, value: str) -> None:
        self._form = self._form.model_copy(update={"time": value})

    def input_address(self, text: str) -> None:
        """Record a keystroke in the address field and schedule a search.

        The current selection is kept; it is replaced when the next search
        completes.
        """
        self._form = self._form.model_copy(update={"from_address": text})
        if not text.strip():
            self._debouncer.cancel()
            return
        self._debouncer.trigger(text)

    def select_stop(self, stop: Stop) -> None:
        """Select a stop from the current candidate list.

        Raises:
            PreconditionViolation: If the stop is not one of the candidates.
        """
        if stop not in self._candidates:
            raise PreconditionViolation(f"Stop {stop.id!r} is not in the candidate list")

        # setting the address text does not count as typing
        self._form = self._form.model_copy(
            update={"selected_stop": stop, "from_address": stop.name}
        )
        logger.debug(f"Selected stop {stop.name!r} [{stop.id}]")
        self._view.clear_validation_errors()

    def navigate(self) -> NavigationResult:
        """Validate the form and open the deep link if it passes."""
        result = plan_navigation(self._form, self._session, self._deep_link_base_url)
        if result.deep_link is None:
            self._view.show_validation_errors(result.validation.errors)
            return result

        self._view.clear_validation_errors()
        self._view.open_link(result.deep_link)
        return result

    async def settle(self) -> None:
        """Wait for the pending trigger and every issued search to finish."""
        await self._debouncer.drain()

    def close(self) -> None:
        self._debouncer.cancel()

    async def _search(self, address: str) -> SearchOutcome:
        self._view.show_searching(address)
        return await run_search(self._stop_finder, address)

    def _apply_outcome(self, address: str, outcome: SearchOutcome) -> None:
        # a new list replaces the old one, and with it any selection from it
        self._candidates = list(outcome.stops)
        self._form = self._form.model_copy(update={"selected_stop": None})

        if outcome.status is SearchStatus.RESULTS:
            self._view.show_candidates(self.candidates)
        else:
            self._view.show_search_message(outcome)
