"""Exceptions raised by journey-link."""


class JourneyLinkError(Exception):
    """Base class for journey-link errors."""


class StopFinderError(JourneyLinkError):
    """The stop finder request failed or returned a malformed payload."""


class DestinationNotFoundError(JourneyLinkError):
    """The fixed destination address did not resolve to any stop."""

    def __init__(self, address: str):
        super().__init__(f"No stop found for destination address {address!r}")
        self.address = address


class PreconditionViolation(JourneyLinkError):
    """A component was called with input its caller must have ruled out.

    These are integration bugs, not user errors.
    """
