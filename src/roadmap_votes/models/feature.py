"""SQLAlchemy model for roadmap features."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from roadmap_votes.db.session import Base
from roadmap_votes.db.time import utcnow

FEATURE_STATUSES = ("planned", "in-progress", "completed", "rejected")


class Feature(Base):
    """A roadmap item users vote on.

    ``vote_count`` is a denormalized cache of the number of ``VotedUser``
    rows referencing the feature. It only moves by +1/-1 inside the same
    transaction as the ledger change that justifies it.
    """

    __tablename__ = "feature"
    __table_args__ = (
        CheckConstraint(
            "status IN ('planned', 'in-progress', 'completed', 'rejected')",
            name="ck_feature_status",
        ),
        CheckConstraint("vote_count >= 0", name="ck_feature_vote_count_non_negative"),
        Index("ix_feature_vote_count_created_at", "vote_count", "created_at"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="planned")
    app_version: Mapped[str | None] = mapped_column(String(64), nullable=True)
    vote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
