"""Vote casting and withdrawal with a consistent denormalized counter.

The engine keeps two facts in step: the ``voted_user`` ledger, whose
UNIQUE(user_uuid, feature_id) constraint is the only double-vote guard, and
``feature.vote_count``, a cached count of that ledger. Every mutation touches
both inside one SAVEPOINT-scoped unit so that no other transaction can observe
one change without the other.

There is no check-then-insert. ``cast`` bumps the counter with a conditional
UPDATE (zero rows means the feature does not exist) and then inserts the
ledger row; when the insert trips the unique constraint the whole unit,
counter bump included, is rolled back and the caller gets
``AlreadyVotedError``. ``withdraw`` locks the feature row and then runs a
conditional DELETE whose row count decides between success and
``VoteNotFoundError``. Both operations lock the feature row before touching
the ledger, so concurrent requests for the same pair queue on that row
instead of deadlocking. They are serialized by the store, not by in-process
locks, and the engine holds no state between calls.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from roadmap_votes.core.errors import (
    AlreadyVotedError,
    InternalError,
    NotFoundError,
    ValidationError,
    VoteNotFoundError,
)
from roadmap_votes.models import Feature, VotedUser

logger = logging.getLogger(__name__)

_UUID_RE = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


@dataclass(frozen=True)
class VoteStatus:
    """Whether an identity has voted for a feature, and when."""

    has_voted: bool
    voted_at: datetime | None


@dataclass(frozen=True)
class VoteCountDrift:
    """A feature whose cached counter disagreed with its ledger."""

    feature_id: str
    cached_count: int
    ledger_count: int


def normalize_user_uuid(value: str) -> str:
    """Return the canonical lowercase form of a hyphenated UUID.

    Raises:
        ValidationError: If ``value`` is not an 8-4-4-4-12 hex UUID.
    """
    if not isinstance(value, str) or not _UUID_RE.match(value):
        raise ValidationError("Invalid request body: userUuid must be a valid UUID")
    return value.lower()


class VoteEngine:
    """Stateless orchestration of vote mutations over a database session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def cast(self, feature_id: str, user_uuid: str) -> VotedUser:
        """Record a vote and increment the feature's counter atomically.

        Args:
            feature_id: Identifier of an existing feature.
            user_uuid: Client-asserted anonymous UUID.

        Returns:
            The persisted ledger entry.

        Raises:
            ValidationError: ``user_uuid`` is malformed.
            NotFoundError: The feature does not exist.
            AlreadyVotedError: A vote for this pair already exists.
            InternalError: The store failed; nothing was persisted.
        """
        user_uuid = normalize_user_uuid(user_uuid)
        try:
            with self.db.begin_nested():
                bumped = self.db.execute(
                    update(Feature)
                    .where(Feature.id == feature_id)
                    .values(vote_count=Feature.vote_count + 1)
                    .execution_options(synchronize_session=False)
                )
                if bumped.rowcount == 0:
                    raise NotFoundError("Feature not found")

                entry = VotedUser(user_uuid=user_uuid, feature_id=feature_id)
                self.db.add(entry)
                self.db.flush()
            self.db.commit()
        except IntegrityError as err:
            logger.info("Duplicate vote rejected for feature %s", feature_id)
            raise AlreadyVotedError() from err
        except SQLAlchemyError as err:
            logger.exception("Failed to cast vote on feature %s", feature_id)
            self.db.rollback()
            raise InternalError("Failed to create vote") from err

        logger.debug("Vote %s cast on feature %s", entry.id, feature_id)
        return entry

    def withdraw(self, feature_id: str, user_uuid: str) -> None:
        """Remove a vote and decrement the feature's counter atomically.

        A feature deleted after the vote was cast does not block withdrawal:
        the ledger row is still removed and the decrement becomes a no-op.

        Raises:
            ValidationError: ``user_uuid`` is malformed.
            VoteNotFoundError: No vote exists for this pair.
            InternalError: The store failed; nothing was changed.
        """
        user_uuid = normalize_user_uuid(user_uuid)
        try:
            with self.db.begin_nested():
                # Feature row first, the same lock order as cast.
                self._lock_feature(feature_id)
                removed = self.db.execute(
                    delete(VotedUser)
                    .where(
                        VotedUser.user_uuid == user_uuid,
                        VotedUser.feature_id == feature_id,
                    )
                    .execution_options(synchronize_session=False)
                )
                if removed.rowcount == 0:
                    raise VoteNotFoundError()

                lowered = self.db.execute(
                    update(Feature)
                    .where(Feature.id == feature_id, Feature.vote_count > 0)
                    .values(vote_count=Feature.vote_count - 1)
                    .execution_options(synchronize_session=False)
                )
                if lowered.rowcount == 0:
                    logger.warning(
                        "Withdrew vote on feature %s without a counter to decrement",
                        feature_id,
                    )
            self.db.commit()
        except SQLAlchemyError as err:
            logger.exception("Failed to withdraw vote on feature %s", feature_id)
            self.db.rollback()
            raise InternalError("Failed to withdraw vote") from err

        logger.debug("Vote withdrawn from feature %s", feature_id)

    def status(self, feature_id: str, user_uuid: str) -> VoteStatus:
        """Report whether ``user_uuid`` has voted for ``feature_id``.

        Read-only and forgiving: unknown features and malformed identifiers
        simply report no vote.
        """
        try:
            user_uuid = normalize_user_uuid(user_uuid)
        except ValidationError:
            return VoteStatus(has_voted=False, voted_at=None)

        try:
            voted_at = self.db.execute(
                select(VotedUser.created_at).where(
                    VotedUser.user_uuid == user_uuid,
                    VotedUser.feature_id == feature_id,
                )
            ).scalar_one_or_none()
        except SQLAlchemyError as err:
            logger.exception("Failed to check vote status on feature %s", feature_id)
            self.db.rollback()
            raise InternalError("Failed to check vote status") from err

        return VoteStatus(has_voted=voted_at is not None, voted_at=voted_at)

    def reconcile(self, feature_id: str | None = None) -> list[VoteCountDrift]:
        """Repair cached counters that drifted from the ledger.

        This is the only code path that writes an absolute ``vote_count``.
        A first unlocked pass finds candidates. Each candidate is then
        recounted while its feature row is locked, which blocks casts and
        withdrawals on it, and repaired in its own transaction.

        Args:
            feature_id: Limit the check to one feature; all features when None.

        Returns:
            One entry per corrected feature, as observed before the repair.
        """
        ledger_count = (
            select(func.count(VotedUser.id))
            .where(VotedUser.feature_id == Feature.id)
            .correlate(Feature)
            .scalar_subquery()
        )
        query = select(Feature.id).where(Feature.vote_count != ledger_count)
        if feature_id is not None:
            query = query.where(Feature.id == feature_id)

        drifts: list[VoteCountDrift] = []
        try:
            candidates = self.db.execute(query).scalars().all()
            self.db.commit()
            for candidate in candidates:
                drift = self._repair(candidate)
                if drift is not None:
                    drifts.append(drift)
        except SQLAlchemyError as err:
            logger.exception("Vote count reconciliation failed")
            self.db.rollback()
            raise InternalError("Failed to reconcile vote counts") from err

        return drifts

    def _lock_feature(self, feature_id: str) -> int | None:
        """Lock the feature row for this transaction and return its counter."""
        return self.db.execute(
            select(Feature.vote_count).where(Feature.id == feature_id).with_for_update()
        ).scalar_one_or_none()

    def _repair(self, feature_id: str) -> VoteCountDrift | None:
        cached = self._lock_feature(feature_id)
        if cached is None:
            self.db.commit()
            return None
        actual = self.db.execute(
            select(func.count(VotedUser.id)).where(VotedUser.feature_id == feature_id)
        ).scalar_one()
        if cached == actual:
            self.db.commit()
            return None

        self.db.execute(
            update(Feature)
            .where(Feature.id == feature_id)
            .values(vote_count=actual)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        logger.warning(
            "Vote count drift on feature %s: cached=%d ledger=%d",
            feature_id,
            cached,
            actual,
        )
        return VoteCountDrift(feature_id=feature_id, cached_count=cached, ledger_count=actual)
