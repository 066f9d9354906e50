# src/roadmap_votes/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    api_keys_router,
    auth_router,
    dashboard_features_router,
    features_router,
    users_router,
    votes_router,
)

__all__ = [
    "api_keys_router",
    "auth_router",
    "dashboard_features_router",
    "features_router",
    "users_router",
    "votes_router",
]
