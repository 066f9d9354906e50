"""SQLAlchemy models for the Roadmap Votes application."""

from .api_key import ApiKey
from .feature import FEATURE_STATUSES, Feature
from .user import USER_ROLES, User
from .vote import VotedUser

__all__ = [
    "ApiKey",
    "Feature", "FEATURE_STATUSES",
    "User", "USER_ROLES",
    "VotedUser",
]
