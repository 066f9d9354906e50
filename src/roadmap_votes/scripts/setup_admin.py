# src/roadmap_votes/scripts/setup_admin.py
"""Create the dashboard admin account, or restore admin rights to it.

Reads ADMIN_EMAIL, ADMIN_PASSWORD and ADMIN_NAME from the environment (see
``Settings``). Running it again is safe: an existing account is promoted to
admin and unbanned instead of duplicated.
"""

from __future__ import annotations

import argparse
import sys

from roadmap_votes.core.settings import settings
from roadmap_votes.db.session import SessionLocal, create_tables
from roadmap_votes.services import user_service


def main() -> None:
    parser = argparse.ArgumentParser(description="Create or promote the admin account")
    parser.add_argument("--email", default=settings.admin_email)
    parser.add_argument("--name", default=settings.admin_name)
    parser.add_argument("--password", default=settings.admin_password)
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before touching the account.",
    )
    args = parser.parse_args()

    if args.create_tables:
        create_tables()

    db = SessionLocal()
    try:
        user, created = user_service.ensure_admin(
            db,
            email=args.email,
            name=args.name,
            password=args.password,
        )
    except Exception as exc:
        print(f"[setup_admin] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()

    if created:
        print(f"[setup_admin] created admin {user.email} (id={user.id})")
        print("[setup_admin] change the password after first login")
    else:
        print(f"[setup_admin] {user.email} already existed; promoted to admin and unbanned")


if __name__ == "__main__":
    main()
