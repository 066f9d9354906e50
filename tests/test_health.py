# tests/test_health.py
from typing import Any

from sqlalchemy.exc import OperationalError

from roadmap_votes import main


def test_root_responds(client: Any) -> None:
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["name"] == "Roadmap Votes"


def test_health_reports_database(client: Any) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "database": "ok"}


def test_health_degraded_when_database_unreachable(client: Any, monkeypatch) -> None:
    def _refuse():
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(main.engine, "connect", _refuse)
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "degraded", "database": "error"}


def test_unknown_route_uses_error_envelope(client: Any) -> None:
    r = client.get("/api/nowhere")
    assert r.status_code == 404
    assert r.json() == {
        "success": False,
        "error": {"code": "NOT_FOUND", "message": "Not Found"},
    }
