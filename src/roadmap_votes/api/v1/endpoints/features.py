# src/roadmap_votes/api/v1/endpoints/features.py
"""Read-only feature endpoints of the public API."""

from fastapi import APIRouter, Depends

from roadmap_votes.schemas.common import SuccessEnvelope
from roadmap_votes.schemas.feature import FeatureResponse
from roadmap_votes.services import feature_service

from ..dependencies import SessionDep, require_api_key

router = APIRouter(
    prefix="/features",
    tags=["features"],
    dependencies=[Depends(require_api_key)],
)


@router.get("", response_model=SuccessEnvelope[list[FeatureResponse]])
def list_features(db: SessionDep) -> SuccessEnvelope[list[FeatureResponse]]:
    """List all features with their vote counts, most voted first."""
    features = feature_service.list_features(db)
    return SuccessEnvelope[list[FeatureResponse]](
        data=[FeatureResponse.model_validate(feature) for feature in features]
    )


@router.get("/{feature_id}", response_model=SuccessEnvelope[FeatureResponse])
def get_feature(feature_id: str, db: SessionDep) -> SuccessEnvelope[FeatureResponse]:
    """Get a single feature by ID."""
    feature = feature_service.get_feature(db, feature_id)
    return SuccessEnvelope[FeatureResponse](data=FeatureResponse.model_validate(feature))
