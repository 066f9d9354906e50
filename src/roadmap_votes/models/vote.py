"""Vote ledger: one row per (user, feature) upvote."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from roadmap_votes.db.session import Base
from roadmap_votes.db.time import utcnow


class VotedUser(Base):
    """Durable record that an anonymous identity voted for a feature.

    Rows are created by a cast and destroyed by a withdrawal; they are never
    updated in place.
    """

    __tablename__ = "voted_user"
    __table_args__ = (
        # Store-level guard against double votes; the vote engine relies on it.
        UniqueConstraint("user_uuid", "feature_id", name="uq_voted_user_user_feature"),
        Index("ix_voted_user_feature_id", "feature_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    # Self-asserted, canonical lowercase UUID text; not tied to any account.
    user_uuid: Mapped[str] = mapped_column(String(36), nullable=False)
    feature_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("feature.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
