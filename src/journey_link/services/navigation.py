import logging

from journey_link.errors import PreconditionViolation
from journey_link.models.form import FormState, NavigationResult
from journey_link.models.session import SessionContext
from journey_link.services.deep_link import DEFAULT_DEEP_LINK_BASE_URL, build_deep_link
from journey_link.services.validation import validate_navigation

logger = logging.getLogger(__name__)


def plan_navigation(
    form: FormState,
    session: SessionContext,
    base_url: str = DEFAULT_DEEP_LINK_BASE_URL,
) -> NavigationResult:
    """Validate the form and build the deep link if it passes.

    No link is built for an invalid form.
    """
    validation = validate_navigation(form)
    if not validation.is_valid:
        return NavigationResult(validation=validation)

    if form.selected_stop is None:
        raise PreconditionViolation("Validated form has no selected stop")

    deep_link = build_deep_link(
        origin_id=form.selected_stop.id,
        destination_id=session.destination_id,
        date=form.date,
        time=form.time,
        base_url=base_url,
    )
    logger.debug(f"Deep link: {deep_link}")
    return NavigationResult(validation=validation, deep_link=deep_link)
