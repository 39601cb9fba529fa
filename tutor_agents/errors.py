"""
Exception types raised across the tutor agents.

Only InvalidInput is meant to reach callers of the router. EvaluationError
and TransportError are recovered inside the agents.
"""


class TutorAgentError(Exception):
    """Base class for errors raised by this package."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInput(TutorAgentError):
    """Message history is empty or malformed."""


class EvaluationError(TutorAgentError):
    """An arithmetic expression could not be parsed or evaluated."""


class TransportError(TutorAgentError):
    """The generative model call failed (network, quota, timeout, bad payload)."""


class SessionStoreError(TutorAgentError):
    """A chat session store operation failed."""
