"""Stop search and journey-planner deep links."""

__version__ = "0.1.0"
