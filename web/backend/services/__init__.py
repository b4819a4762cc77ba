"""Business logic services."""

from .match_service import MatchService

__all__ = ['MatchService']
