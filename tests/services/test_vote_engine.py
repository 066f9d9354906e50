# tests/services/test_vote_engine.py
"""Tests for the vote engine working directly against a session."""

from __future__ import annotations

from datetime import UTC

import pytest
from sqlalchemy import event, func, select, update
from sqlalchemy.exc import OperationalError

from roadmap_votes.core.errors import (
    AlreadyVotedError,
    InternalError,
    NotFoundError,
    ValidationError,
    VoteNotFoundError,
)
from roadmap_votes.models import Feature, VotedUser
from roadmap_votes.services.vote_engine import (
    VoteCountDrift,
    VoteEngine,
    normalize_user_uuid,
)

VOTERS = [
    "11111111-1111-4111-8111-111111111111",
    "22222222-2222-4222-8222-222222222222",
    "33333333-3333-4333-8333-333333333333",
]


def _counts(db_session, feature) -> tuple[int, int]:
    """Return (cached counter, ledger rows) for ``feature``."""
    db_session.refresh(feature)
    ledger = db_session.execute(
        select(func.count(VotedUser.id)).where(VotedUser.feature_id == feature.id)
    ).scalar_one()
    return feature.vote_count, ledger


@pytest.mark.parametrize(
    "value",
    [
        "not-a-uuid",
        "",
        "11111111111141118111111111111111",
        "11111111-1111-4111-8111-11111111111",
        "g1111111-1111-4111-8111-111111111111",
    ],
)
def test_normalize_rejects_malformed(value: str) -> None:
    with pytest.raises(ValidationError):
        normalize_user_uuid(value)


def test_normalize_lowercases() -> None:
    assert normalize_user_uuid("ABCDEF01-2345-6789-ABCD-EF0123456789") == (
        "abcdef01-2345-6789-abcd-ef0123456789"
    )


def test_cast_records_entry(db_session, feature) -> None:
    entry = VoteEngine(db_session).cast(feature.id, VOTERS[0])

    assert entry.feature_id == feature.id
    assert entry.user_uuid == VOTERS[0]
    assert _counts(db_session, feature) == (1, 1)


def test_counter_tracks_ledger_over_mixed_operations(db_session, feature) -> None:
    engine = VoteEngine(db_session)
    for voter in VOTERS:
        engine.cast(feature.id, voter)
    with pytest.raises(AlreadyVotedError):
        engine.cast(feature.id, VOTERS[1])
    engine.withdraw(feature.id, VOTERS[0])
    with pytest.raises(VoteNotFoundError):
        engine.withdraw(feature.id, VOTERS[0])
    engine.cast(feature.id, VOTERS[0])
    engine.withdraw(feature.id, VOTERS[2])

    assert _counts(db_session, feature) == (2, 2)


def test_losing_insert_rolls_back_counter_bump(db_session, feature) -> None:
    """A pair already on the ledger makes the insert, not a lookup, fail."""
    db_session.add(VotedUser(user_uuid=VOTERS[0], feature_id=feature.id))
    db_session.execute(update(Feature).where(Feature.id == feature.id).values(vote_count=1))
    db_session.commit()

    with pytest.raises(AlreadyVotedError):
        VoteEngine(db_session).cast(feature.id, VOTERS[0])

    assert _counts(db_session, feature) == (1, 1)


def test_cast_missing_feature(db_session) -> None:
    with pytest.raises(NotFoundError) as excinfo:
        VoteEngine(db_session).cast("missing-feature", VOTERS[0])

    assert not isinstance(excinfo.value, VoteNotFoundError)
    assert db_session.execute(select(func.count(VotedUser.id))).scalar_one() == 0


def test_cast_validates_before_touching_store(db_session, feature) -> None:
    with pytest.raises(ValidationError):
        VoteEngine(db_session).cast(feature.id, "nope")

    assert _counts(db_session, feature) == (0, 0)


def test_withdraw_never_drives_counter_negative(db_session, feature) -> None:
    # Ledger row without a matching counter bump, as left by an earlier drift.
    db_session.add(VotedUser(user_uuid=VOTERS[0], feature_id=feature.id))
    db_session.commit()

    VoteEngine(db_session).withdraw(feature.id, VOTERS[0])

    assert _counts(db_session, feature) == (0, 0)


def test_store_error_becomes_internal_error(db_session, feature, monkeypatch) -> None:
    engine = VoteEngine(db_session)

    def _broken_execute(*args, **kwargs):
        raise OperationalError("UPDATE feature", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "execute", _broken_execute)
    with pytest.raises(InternalError) as excinfo:
        engine.withdraw(feature.id, VOTERS[0])
    monkeypatch.undo()

    assert excinfo.value.message == "Failed to withdraw vote"
    assert _counts(db_session, feature) == (0, 0)


def test_status_reports_vote_time(db_session, feature) -> None:
    engine = VoteEngine(db_session)
    entry = engine.cast(feature.id, VOTERS[0])
    cast_at = entry.created_at

    result = engine.status(feature.id, VOTERS[0].upper())

    assert result.has_voted is True
    assert result.voted_at.replace(tzinfo=UTC) == cast_at.replace(tzinfo=UTC)


def test_status_is_forgiving(db_session, feature) -> None:
    engine = VoteEngine(db_session)

    assert engine.status(feature.id, "garbage").has_voted is False
    assert engine.status("missing-feature", VOTERS[0]).voted_at is None


def test_reconcile_repairs_only_drifted_features(db_session, feature, other_feature) -> None:
    engine = VoteEngine(db_session)
    engine.cast(feature.id, VOTERS[0])
    engine.cast(other_feature.id, VOTERS[0])
    engine.cast(other_feature.id, VOTERS[1])
    db_session.execute(
        update(Feature).where(Feature.id == other_feature.id).values(vote_count=7)
    )
    db_session.commit()

    drifts = engine.reconcile()

    assert drifts == [VoteCountDrift(feature_id=other_feature.id, cached_count=7, ledger_count=2)]
    assert _counts(db_session, other_feature) == (2, 2)
    assert _counts(db_session, feature) == (1, 1)
    assert engine.reconcile() == []


def test_reconcile_single_feature(db_session, feature, other_feature) -> None:
    db_session.execute(update(Feature).values(vote_count=3))
    db_session.commit()

    drifts = VoteEngine(db_session).reconcile(feature.id)

    assert [drift.feature_id for drift in drifts] == [feature.id]
    assert _counts(db_session, feature) == (0, 0)
    assert _counts(db_session, other_feature) == (3, 0)


def test_withdraw_locks_feature_before_ledger(engine, db_session, feature) -> None:
    """Withdraw takes the feature row before the ledger row, the order cast uses."""
    vote_engine = VoteEngine(db_session)
    vote_engine.cast(feature.id, VOTERS[0])
    statements: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", _record)
    try:
        vote_engine.withdraw(feature.id, VOTERS[0])
    finally:
        event.remove(engine, "before_cursor_execute", _record)

    feature_read = next(i for i, sql in enumerate(statements) if "FROM feature" in sql)
    ledger_delete = next(
        i for i, sql in enumerate(statements) if sql.startswith("DELETE FROM voted_user")
    )
    assert feature_read < ledger_delete
    assert _counts(db_session, feature) == (0, 0)


def test_reconcile_reports_values_seen_under_lock(db_session, feature) -> None:
    engine = VoteEngine(db_session)
    engine.cast(feature.id, VOTERS[0])
    db_session.execute(update(Feature).where(Feature.id == feature.id).values(vote_count=0))
    db_session.commit()

    assert engine.reconcile(feature.id) == [
        VoteCountDrift(feature_id=feature.id, cached_count=0, ledger_count=1)
    ]
    assert engine.reconcile("missing-feature") == []
    assert _counts(db_session, feature) == (1, 1)
