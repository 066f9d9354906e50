# src/roadmap_votes/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .api_keys import router as api_keys_router
from .auth import router as auth_router
from .dashboard_features import router as dashboard_features_router
from .features import router as features_router
from .users import router as users_router
from .votes import router as votes_router

__all__ = [
    "api_keys_router",
    "auth_router",
    "dashboard_features_router",
    "features_router",
    "users_router",
    "votes_router",
]
