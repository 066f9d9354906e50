"""Feature-related Pydantic schemas."""

from typing import Literal

from pydantic import Field

from .common import CamelModel, UtcDatetime

FeatureStatus = Literal["planned", "in-progress", "completed", "rejected"]


class FeatureCreate(CamelModel):
    """Schema for creating a feature from the dashboard."""

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    status: FeatureStatus = "planned"
    app_version: str | None = None


class FeatureUpdate(CamelModel):
    """Partial update; omitted fields are left untouched."""

    title: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1)
    status: FeatureStatus | None = None
    app_version: str | None = None


class FeatureResponse(CamelModel):
    """Feature as returned by the public and dashboard APIs."""

    id: str
    title: str
    description: str
    status: FeatureStatus
    app_version: str | None
    vote_count: int
    created_at: UtcDatetime
    updated_at: UtcDatetime


class VoteCountDriftResponse(CamelModel):
    """One corrected feature reported by vote count reconciliation."""

    feature_id: str
    cached_count: int
    ledger_count: int
