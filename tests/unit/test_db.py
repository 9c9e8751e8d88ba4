"""Tests for the SQLite job-config and sync-log layer."""

import sqlite3
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from src.core.db import (
    delete_config,
    get_config,
    init_db,
    insert_config,
    insert_sync_log,
    list_configs,
    list_sync_logs,
    update_config,
)
from src.jobs.schemas import ApifySearchConfig, NewJobFetchConfig


@pytest.fixture
def db(tmp_path: Path) -> sqlite3.Connection:
    conn = init_db(tmp_path / "test.db")
    yield conn  # type: ignore[misc]
    conn.close()


def _new(name: str = "LinkedIn India", active: bool = True) -> NewJobFetchConfig:
    return NewJobFetchConfig(
        name=name,
        platform="linkedin",
        actor_id="apify/linkedin-jobs-scraper",
        search_config=ApifySearchConfig(
            keywords=["python developer"],
            location="India",
            max_results=50,
        ),
        is_active=active,
    )


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


class TestInitDb:
    def test_tables_created(self, db: sqlite3.Connection) -> None:
        rows = db.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
        names = {r["name"] for r in rows}
        assert {"job_fetch_configs", "job_sync_logs"} <= names

    def test_idempotent(self, tmp_path: Path) -> None:
        path = tmp_path / "twice.db"
        init_db(path).close()
        conn = init_db(path)
        assert list_configs(conn) == []
        conn.close()

    def test_creates_parent_dir(self, tmp_path: Path) -> None:
        conn = init_db(tmp_path / "nested" / "dir" / "jobs.db")
        assert (tmp_path / "nested" / "dir" / "jobs.db").exists()
        conn.close()


# ---------------------------------------------------------------------------
# job_fetch_configs
# ---------------------------------------------------------------------------


class TestConfigs:
    def test_insert_and_get(self, db: sqlite3.Connection) -> None:
        stored = insert_config(db, _new(), created_by="user-1")
        fetched = get_config(db, stored.id)

        assert fetched is not None
        assert fetched.id == stored.id
        assert fetched.name == "LinkedIn India"
        assert fetched.is_active is True
        assert fetched.created_by == "user-1"
        assert fetched.sync_interval_hours == 24
        assert fetched.last_synced_at is None
        assert fetched.search_config.keywords == ["python developer"]
        assert fetched.search_config.max_results == 50
        assert fetched.search_config.job_type is None

    def test_search_config_stored_camel_case(self, db: sqlite3.Connection) -> None:
        stored = insert_config(db, _new())
        raw = db.execute(
            "SELECT search_config FROM job_fetch_configs WHERE id = ?", (stored.id,),
        ).fetchone()["search_config"]
        assert '"maxResults":50' in raw
        assert "jobType" not in raw

    def test_get_missing(self, db: sqlite3.Connection) -> None:
        assert get_config(db, "nope") is None

    def test_ids_unique(self, db: sqlite3.Connection) -> None:
        a = insert_config(db, _new("a"))
        b = insert_config(db, _new("b"))
        assert a.id != b.id

    def test_list_newest_first(self, db: sqlite3.Connection) -> None:
        insert_config(db, _new("first"))
        insert_config(db, _new("second"))
        insert_config(db, _new("third"))
        assert [c.name for c in list_configs(db)] == ["third", "second", "first"]

    def test_list_active_only(self, db: sqlite3.Connection) -> None:
        insert_config(db, _new("on"))
        insert_config(db, _new("off", active=False))
        assert [c.name for c in list_configs(db, active_only=True)] == ["on"]
        assert len(list_configs(db)) == 2

    def test_update(self, db: sqlite3.Connection) -> None:
        stored = insert_config(db, _new())
        updated = update_config(db, stored.id, {"is_active": False, "sync_interval_hours": 6})

        assert updated is not None
        assert updated.is_active is False
        assert updated.sync_interval_hours == 6
        assert updated.updated_at >= stored.updated_at
        assert updated.created_at == stored.created_at

        fetched = get_config(db, stored.id)
        assert fetched is not None
        assert fetched.is_active is False
        assert fetched.sync_interval_hours == 6

    def test_update_search_config(self, db: sqlite3.Connection) -> None:
        stored = insert_config(db, _new())
        new_search = ApifySearchConfig(keywords=["data engineer"], job_type="Contract")
        update_config(db, stored.id, {"search_config": new_search})

        fetched = get_config(db, stored.id)
        assert fetched is not None
        assert fetched.search_config.keywords == ["data engineer"]
        assert fetched.search_config.job_type == "Contract"
        assert fetched.search_config.max_results is None

    def test_update_unknown_column(self, db: sqlite3.Connection) -> None:
        stored = insert_config(db, _new())
        with pytest.raises(ValueError, match="Cannot update column"):
            update_config(db, stored.id, {"created_by": "someone"})

    def test_update_missing(self, db: sqlite3.Connection) -> None:
        assert update_config(db, "nope", {"name": "x"}) is None

    def test_delete(self, db: sqlite3.Connection) -> None:
        stored = insert_config(db, _new())
        assert delete_config(db, stored.id) is True
        assert get_config(db, stored.id) is None
        assert delete_config(db, stored.id) is False


# ---------------------------------------------------------------------------
# job_sync_logs
# ---------------------------------------------------------------------------


class TestSyncLogs:
    def test_insert_and_list(self, db: sqlite3.Connection) -> None:
        log = insert_sync_log(db, "cfg-1", "success", jobs_fetched=40, jobs_created=12)
        logs = list_sync_logs(db)
        assert len(logs) == 1
        assert logs[0].id == log.id
        assert logs[0].jobs_fetched == 40
        assert logs[0].jobs_created == 12
        assert logs[0].jobs_updated == 0
        assert logs[0].error_message is None

    def test_newest_first(self, db: sqlite3.Connection) -> None:
        base = datetime(2026, 3, 1, 9, 0, 0)
        insert_sync_log(db, "cfg-1", "success", created_at=base + timedelta(hours=2))
        insert_sync_log(db, "cfg-1", "failed", created_at=base)
        insert_sync_log(db, "cfg-1", "running", created_at=base + timedelta(hours=5))
        assert [log.status for log in list_sync_logs(db)] == ["running", "success", "failed"]

    def test_filter_by_config(self, db: sqlite3.Connection) -> None:
        insert_sync_log(db, "cfg-1", "success")
        insert_sync_log(db, "cfg-2", "failed", error_message="actor timed out")
        logs = list_sync_logs(db, config_id="cfg-2")
        assert len(logs) == 1
        assert logs[0].error_message == "actor timed out"

    def test_limit(self, db: sqlite3.Connection) -> None:
        base = datetime(2026, 3, 1, 9, 0, 0)
        for i in range(5):
            insert_sync_log(db, "cfg-1", "success", jobs_fetched=i,
                            created_at=base + timedelta(minutes=i))
        logs = list_sync_logs(db, limit=2)
        assert [log.jobs_fetched for log in logs] == [4, 3]

    def test_invalid_status(self, db: sqlite3.Connection) -> None:
        with pytest.raises(ValueError):
            insert_sync_log(db, "cfg-1", "exploded")
