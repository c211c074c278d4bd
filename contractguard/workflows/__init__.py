"""Client-side review workflow."""

from .review_session import InvalidTransitionError, ReviewSession, Step

__all__ = ["InvalidTransitionError", "ReviewSession", "Step"]
