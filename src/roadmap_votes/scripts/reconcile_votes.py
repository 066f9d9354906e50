# src/roadmap_votes/scripts/reconcile_votes.py
"""
Repair job for cached vote counters.

Recomputes every feature's vote count from the vote ledger and rewrites the
cached value wherever it drifted. Meant to be run periodically (cron) or
after restoring data from a backup.
"""

from __future__ import annotations

import argparse
import logging
import sys

from roadmap_votes.core.errors import InternalError
from roadmap_votes.core.settings import settings
from roadmap_votes.db.session import SessionLocal
from roadmap_votes.services.vote_engine import VoteEngine


def main() -> None:
    parser = argparse.ArgumentParser(description="Reconcile cached vote counts with the ledger")
    parser.add_argument("--feature", default=None, help="Only check this feature id")
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))

    db = SessionLocal()
    try:
        drifts = VoteEngine(db).reconcile(args.feature)
    except InternalError as exc:
        print(f"[reconcile] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()

    if not drifts:
        print("[reconcile] all vote counts match the ledger")
        return
    for drift in drifts:
        print(
            f"[reconcile] {drift.feature_id}: "
            f"cached={drift.cached_count} -> ledger={drift.ledger_count}"
        )
    print(f"[reconcile] corrected {len(drifts)} feature(s)")


if __name__ == "__main__":
    main()
