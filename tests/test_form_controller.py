"""Tests for the navigation form controller."""

import asyncio

import pytest

from journey_link.data.config import JourneyLinkConfig
from journey_link.errors import PreconditionViolation, StopFinderError
from journey_link.models.search import (
    NO_RESULTS_MESSAGE,
    SEARCH_FAILED_MESSAGE,
    SearchOutcome,
    SearchStatus,
)
from journey_link.models.session import SessionContext
from journey_link.models.stops import Stop
from journey_link.services.form_controller import FormController
from journey_link.services.validation import STOP_NOT_SELECTED

QUIET = 0.02

DESTINATION = Stop(id="de:05913:462", name="Dortmund, Mergelteichstr.", coord=(51.47212, 7.49004))
HBF = Stop(id="de:05913:285", name="Dortmund, Hauptbahnhof", coord=(51.51771, 7.45917))
STADTHAUS = Stop(id="de:05913:300", name="Dortmund, Stadthaus", coord=(51.51155, 7.46486))


class FakeStopFinder:
    """Stop finder with canned answers; queries in `gated` wait for release()."""

    def __init__(
        self,
        results: dict[str, list[Stop]] | None = None,
        gated: tuple[str, ...] = (),
        error: Exception | None = None,
    ):
        self.results = results or {}
        self.error = error
        self.calls: list[str] = []
        self._gates = {query: asyncio.Event() for query in gated}

    async def find(self, address: str) -> list[Stop]:
        self.calls.append(address)
        gate = self._gates.get(address)
        if gate is not None:
            await gate.wait()
        if self.error is not None:
            raise self.error
        return self.results.get(address, [])

    def release(self, address: str) -> None:
        self._gates[address].set()


class RecordingView:
    """FormView that records what it was asked to render."""

    def __init__(self):
        self.searching: list[str] = []
        self.candidate_lists: list[list[Stop]] = []
        self.messages: list[SearchOutcome] = []
        self.validation_errors: list[dict[str, str]] = []
        self.cleared = 0
        self.opened: list[str] = []

    def show_searching(self, query: str) -> None:
        self.searching.append(query)

    def show_candidates(self, stops: list[Stop]) -> None:
        self.candidate_lists.append(stops)

    def show_search_message(self, outcome: SearchOutcome) -> None:
        self.messages.append(outcome)

    def show_validation_errors(self, errors: dict[str, str]) -> None:
        self.validation_errors.append(errors)

    def clear_validation_errors(self) -> None:
        self.cleared += 1

    def open_link(self, url: str) -> None:
        self.opened.append(url)


@pytest.fixture
def session() -> SessionContext:
    return SessionContext(
        destination_address="Mergelteichstraße 80, 44225 Dortmund", destination=DESTINATION
    )


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


def make_controller(session, finder, view) -> FormController:
    return FormController(
        session,
        finder,
        view,
        quiet_period=QUIET,
        deep_link_base_url="https://example.com/trip",
    )


@pytest.mark.asyncio
async def test_typing_burst_makes_one_request(session, view):
    """Keystrokes within the quiet period result in one search for the final text."""
    finder = FakeStopFinder({"Hbf": [HBF]})
    controller = make_controller(session, finder, view)

    controller.input_address("H")
    controller.input_address("Hb")
    controller.input_address("Hbf")
    await controller.settle()

    assert finder.calls == ["Hbf"]
    assert view.searching == ["Hbf"]
    assert view.candidate_lists == [[HBF]]
    assert controller.candidates == [HBF]
    assert controller.form.from_address == "Hbf"


@pytest.mark.asyncio
async def test_blank_address_does_not_search(session, view):
    finder = FakeStopFinder()
    controller = make_controller(session, finder, view)

    controller.input_address("Hbf")
    controller.input_address("   ")
    await controller.settle()

    assert finder.calls == []
    assert controller.form.from_address == "   "


@pytest.mark.asyncio
async def test_stale_response_does_not_replace_newer_list(session, view):
    """A late answer for an older query is discarded."""
    finder = FakeStopFinder({"X": [HBF], "Y": [STADTHAUS]}, gated=("X", "Y"))
    controller = make_controller(session, finder, view)

    controller.input_address("X")
    await asyncio.sleep(QUIET * 3)
    controller.input_address("Y")
    await asyncio.sleep(QUIET * 3)
    assert finder.calls == ["X", "Y"]

    finder.release("Y")
    await asyncio.sleep(0.01)
    assert controller.candidates == [STADTHAUS]

    finder.release("X")
    await controller.settle()

    assert controller.candidates == [STADTHAUS]
    assert view.candidate_lists == [[STADTHAUS]]


@pytest.mark.asyncio
async def test_no_results_message(session, view):
    finder = FakeStopFinder({})
    controller = make_controller(session, finder, view)

    controller.input_address("Atlantis")
    await controller.settle()

    assert controller.candidates == []
    assert len(view.messages) == 1
    assert view.messages[0].status is SearchStatus.NO_RESULTS
    assert view.messages[0].message == NO_RESULTS_MESSAGE


@pytest.mark.asyncio
async def test_service_failure_shows_generic_message(session, view):
    """A failed request is shown to the user and not retried."""
    finder = FakeStopFinder(error=StopFinderError("503"))
    controller = make_controller(session, finder, view)

    controller.input_address("Hbf")
    await controller.settle()

    assert finder.calls == ["Hbf"]
    assert view.messages[0].status is SearchStatus.FAILED
    assert view.messages[0].message == SEARCH_FAILED_MESSAGE
    assert controller.candidates == []


@pytest.mark.asyncio
async def test_select_stop_updates_form(session, view):
    finder = FakeStopFinder({"Hbf": [HBF, STADTHAUS]})
    controller = make_controller(session, finder, view)
    controller.input_address("Hbf")
    await controller.settle()

    controller.select_stop(STADTHAUS)

    assert controller.form.selected_stop == STADTHAUS
    assert controller.form.from_address == "Dortmund, Stadthaus"
    assert view.cleared == 1
    # selecting is not typing
    await controller.settle()
    assert finder.calls == ["Hbf"]


@pytest.mark.asyncio
async def test_select_stop_outside_candidates_raises(session, view):
    controller = make_controller(session, FakeStopFinder(), view)

    with pytest.raises(PreconditionViolation):
        controller.select_stop(HBF)


@pytest.mark.asyncio
async def test_new_results_clear_selection(session, view):
    """A selection belongs to the list it was made from."""
    finder = FakeStopFinder({"Hbf": [HBF], "Stadthaus": [STADTHAUS]})
    controller = make_controller(session, finder, view)
    controller.input_address("Hbf")
    await controller.settle()
    controller.select_stop(HBF)

    controller.input_address("Stadthaus")
    assert controller.form.selected_stop == HBF
    await controller.settle()

    assert controller.form.selected_stop is None


@pytest.mark.asyncio
async def test_navigate_opens_deep_link(session, view):
    finder = FakeStopFinder({"Hbf": [HBF]})
    controller = make_controller(session, finder, view)
    controller.input_address("Hbf")
    await controller.settle()
    controller.select_stop(HBF)
    controller.set_date("2024-05-01")
    controller.set_time("14:05")

    result = controller.navigate()

    expected = (
        "https://example.com/trip?origin=de:05913:285&destination=de:05913:462"
        "&date=01052024&time=1405"
    )
    assert result.validation.is_valid is True
    assert result.deep_link == expected
    assert view.opened == [expected]
    assert view.validation_errors == []


@pytest.mark.asyncio
async def test_navigate_without_selection_shows_errors(session, view):
    controller = make_controller(session, FakeStopFinder(), view)
    controller.set_date("2024-05-01")
    controller.set_time("14:05")

    result = controller.navigate()

    assert result.deep_link is None
    assert result.validation.first_error == STOP_NOT_SELECTED
    assert view.validation_errors == [{"fromAddress": STOP_NOT_SELECTED}]
    assert view.opened == []


def test_controller_requires_session(view):
    with pytest.raises(PreconditionViolation):
        FormController(None, FakeStopFinder(), view)


@pytest.mark.asyncio
async def test_close_drops_pending_search(session, view):
    finder = FakeStopFinder({"Hbf": [HBF]})
    controller = make_controller(session, finder, view)

    controller.input_address("Hbf")
    controller.close()
    await asyncio.sleep(QUIET * 3)

    assert finder.calls == []


@pytest.mark.asyncio
async def test_from_config_uses_configured_values(session, view):
    config = JourneyLinkConfig(
        debounce_seconds=0.05, deep_link_base_url="https://example.com/configured"
    )
    finder = FakeStopFinder({"Hbf": [HBF]})
    controller = FormController.from_config(session, finder, view, config)

    controller.input_address("Hbf")
    await controller.settle()
    controller.select_stop(HBF)
    controller.set_date("2024-05-01")
    controller.set_time("14:05")
    result = controller.navigate()

    assert result.deep_link is not None
    assert result.deep_link.startswith("https://example.com/configured?origin=de:05913:285")
