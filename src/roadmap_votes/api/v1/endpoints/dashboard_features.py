# src/roadmap_votes/api/v1/endpoints/dashboard_features.py
"""Feature management for the admin dashboard."""

from fastapi import APIRouter, status

from roadmap_votes.schemas.common import MessageResponse, SuccessEnvelope
from roadmap_votes.schemas.feature import (
    FeatureCreate,
    FeatureResponse,
    FeatureStatus,
    FeatureUpdate,
    VoteCountDriftResponse,
)
from roadmap_votes.services import feature_service
from roadmap_votes.services.vote_engine import VoteEngine

from ..dependencies import AdminDep, CurrentUserDep, SessionDep

router = APIRouter(prefix="/dashboard/features", tags=["dashboard"])


@router.get("", response_model=SuccessEnvelope[list[FeatureResponse]])
def list_features(
    _current_user: CurrentUserDep,
    db: SessionDep,
    status: FeatureStatus | None = None,
) -> SuccessEnvelope[list[FeatureResponse]]:
    """List features, newest first."""
    features = feature_service.list_features(db, status, by_votes=False)
    return SuccessEnvelope[list[FeatureResponse]](
        data=[FeatureResponse.model_validate(feature) for feature in features]
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessEnvelope[FeatureResponse],
)
def create_feature(
    feature_data: FeatureCreate,
    _admin: AdminDep,
    db: SessionDep,
) -> SuccessEnvelope[FeatureResponse]:
    """Create a new feature (admin only)."""
    feature = feature_service.create_feature(db, feature_data)
    return SuccessEnvelope[FeatureResponse](data=FeatureResponse.model_validate(feature))


@router.post("/reconcile", response_model=SuccessEnvelope[list[VoteCountDriftResponse]])
def reconcile_vote_counts(
    _admin: AdminDep,
    db: SessionDep,
) -> SuccessEnvelope[list[VoteCountDriftResponse]]:
    """Recompute cached vote counts from the ledger and report corrections."""
    drifts = VoteEngine(db).reconcile()
    return SuccessEnvelope[list[VoteCountDriftResponse]](
        data=[VoteCountDriftResponse.model_validate(drift) for drift in drifts]
    )


@router.put("/{feature_id}", response_model=SuccessEnvelope[FeatureResponse])
def update_feature(
    feature_id: str,
    feature_data: FeatureUpdate,
    _admin: AdminDep,
    db: SessionDep,
) -> SuccessEnvelope[FeatureResponse]:
    """Update a feature (admin only)."""
    feature = feature_service.update_feature(db, feature_id, feature_data)
    return SuccessEnvelope[FeatureResponse](data=FeatureResponse.model_validate(feature))


@router.delete("/{feature_id}", response_model=SuccessEnvelope[MessageResponse])
def delete_feature(
    feature_id: str,
    _admin: AdminDep,
    db: SessionDep,
) -> SuccessEnvelope[MessageResponse]:
    """Delete a feature and its votes (admin only)."""
    feature_service.delete_feature(db, feature_id)
    return SuccessEnvelope[MessageResponse](data=MessageResponse(message="Feature deleted"))
