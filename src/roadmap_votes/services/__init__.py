"""Business logic services for the Roadmap Votes application."""

from .vote_engine import VoteCountDrift, VoteEngine, VoteStatus

__all__ = [
    "VoteEngine",
    "VoteStatus",
    "VoteCountDrift",
]
