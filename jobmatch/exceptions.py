"""Exceptions raised by the matching engine."""


class MatchingError(Exception):
    """Base exception for matching engine errors."""
    pass


class ResumeNotFound(MatchingError):
    """Raised when a resume does not exist.

    The engine's read paths are lenient and return empty results instead;
    this is for callers that need a hard failure.
    """
    pass


class PersistenceFailure(MatchingError):
    """Raised when a recompute batch could not be written.

    The whole batch has been rolled back and the call can be retried.
    """
    pass
