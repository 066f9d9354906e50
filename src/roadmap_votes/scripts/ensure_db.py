# src/roadmap_votes/scripts/ensure_db.py
"""Create the configured Postgres database when it does not exist yet."""
from __future__ import annotations

import argparse
import sys
from urllib.parse import urlsplit, urlunsplit

import psycopg
from psycopg import sql

from roadmap_votes.core.settings import settings


def to_psycopg_url(url: str) -> str:
    """Strip the SQLAlchemy driver suffix (``postgresql+psycopg``) from a URL."""
    url = url.strip().strip("'\"")
    if not url:
        raise ValueError("DATABASE_URL is empty")
    parts = urlsplit(url)
    scheme = parts.scheme.split("+", 1)[0]
    if scheme not in {"postgresql", "postgres"}:
        raise ValueError(f"Not a Postgres URL: {url!r}")
    return urlunsplit(("postgresql", parts.netloc, parts.path, parts.query, parts.fragment))


def split_maintenance_url(url: str) -> tuple[str, str]:
    """Return ``(maintenance_url, target_db)`` for a Postgres URL."""
    parts = urlsplit(to_psycopg_url(url))
    target_db = parts.path.lstrip("/") or "postgres"
    admin_url = urlunsplit(("postgresql", parts.netloc, "/postgres", parts.query, ""))
    return admin_url, target_db


def ensure_database_exists(url: str) -> bool:
    """Create the target database if missing; return True when it was created."""
    admin_url, target_db = split_maintenance_url(url)
    with psycopg.connect(admin_url, autocommit=True) as conn, conn.cursor() as cur:
        cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (target_db,))
        if cur.fetchone() is not None:
            return False
        cur.execute(sql.SQL("CREATE DATABASE {}").format(sql.Identifier(target_db)))
    return True


def main() -> None:
    parser = argparse.ArgumentParser(description="Ensure the configured database exists")
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to effective settings URL)",
    )
    args = parser.parse_args()

    raw_url = args.url or settings.effective_database_url
    try:
        created = ensure_database_exists(raw_url)
    except (ValueError, psycopg.Error) as exc:
        print(f"[ensure_db] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)

    _, target_db = split_maintenance_url(raw_url)
    state = "created database" if created else "database already exists:"
    print(f"[ensure_db] {state} {target_db}")


if __name__ == "__main__":
    main()
