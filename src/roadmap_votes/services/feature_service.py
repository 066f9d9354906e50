"""CRUD-style helpers for the feature catalog."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import delete, desc, select
from sqlalchemy.orm import Session

from roadmap_votes.core.errors import NotFoundError
from roadmap_votes.models import Feature, VotedUser
from roadmap_votes.schemas.feature import FeatureCreate, FeatureUpdate

__all__ = [
    "list_features",
    "get_feature",
    "create_feature",
    "update_feature",
    "delete_feature",
]

logger = logging.getLogger(__name__)


def list_features(
    db: Session,
    status: str | None = None,
    *,
    by_votes: bool = True,
) -> Sequence[Feature]:
    """Return features, most voted first unless ``by_votes`` is False."""
    query = select(Feature)
    if status is not None:
        query = query.where(Feature.status == status)
    if by_votes:
        query = query.order_by(desc(Feature.vote_count), desc(Feature.created_at))
    else:
        query = query.order_by(desc(Feature.created_at))
    return db.execute(query).scalars().all()


def get_feature(db: Session, feature_id: str) -> Feature:
    """Return a single feature or raise ``NotFoundError``."""
    feature = db.get(Feature, feature_id)
    if feature is None:
        raise NotFoundError("Feature not found")
    return feature


def create_feature(db: Session, data: FeatureCreate) -> Feature:
    """Persist a new feature with an empty vote count."""
    feature = Feature(
        title=data.title,
        description=data.description,
        status=data.status,
        app_version=data.app_version,
        vote_count=0,
    )
    db.add(feature)
    db.commit()
    db.refresh(feature)
    logger.info("Created feature %s", feature.id)
    return feature


def update_feature(db: Session, feature_id: str, data: FeatureUpdate) -> Feature:
    """Apply partial updates to an existing feature.

    The vote counter is not part of the update schema; it is owned by the
    vote engine.
    """
    feature = get_feature(db, feature_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        if value is None and key != "app_version":
            continue
        setattr(feature, key, value)

    db.add(feature)
    db.commit()
    db.refresh(feature)
    return feature


def delete_feature(db: Session, feature_id: str) -> None:
    """Remove a feature together with its ledger entries."""
    feature = get_feature(db, feature_id)
    db.execute(delete(VotedUser).where(VotedUser.feature_id == feature_id))
    db.delete(feature)
    db.commit()
    logger.info("Deleted feature %s", feature_id)
