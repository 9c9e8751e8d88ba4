"""SQLite database layer for job-fetch configurations and sync logs."""

import sqlite3
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any

from src.jobs.schemas import ApifySearchConfig, JobFetchConfig, JobSyncLog, NewJobFetchConfig

_CONFIGS_TABLE = """
CREATE TABLE IF NOT EXISTS job_fetch_configs (
    id                  TEXT    PRIMARY KEY,
    name                TEXT    NOT NULL,
    platform            TEXT    NOT NULL,
    actor_id            TEXT    NOT NULL,
    search_config       TEXT    NOT NULL DEFAULT '{}',
    is_active           INTEGER NOT NULL DEFAULT 1,
    sync_interval_hours INTEGER NOT NULL DEFAULT 24,
    last_synced_at      TEXT,
    created_by          TEXT,
    created_at          TEXT    NOT NULL,
    updated_at          TEXT    NOT NULL
);
"""

_SYNC_LOGS_TABLE = """
CREATE TABLE IF NOT EXISTS job_sync_logs (
    id              TEXT    PRIMARY KEY,
    config_id       TEXT    NOT NULL,
    status          TEXT    NOT NULL,
    jobs_fetched    INTEGER NOT NULL DEFAULT 0,
    jobs_created    INTEGER NOT NULL DEFAULT 0,
    jobs_updated    INTEGER NOT NULL DEFAULT 0,
    error_message   TEXT,
    created_at      TEXT    NOT NULL
);
"""

# Columns a caller may change through update_config.
UPDATABLE_COLUMNS = frozenset({
    "name",
    "platform",
    "actor_id",
    "search_config",
    "is_active",
    "sync_interval_hours",
    "last_synced_at",
})


def init_db(path: str | Path) -> sqlite3.Connection:
    """Create the database and tables, returning a connection."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute(_CONFIGS_TABLE)
    conn.execute(_SYNC_LOGS_TABLE)
    conn.commit()
    return conn


# ---------------------------------------------------------------------------
# job_fetch_configs
# ---------------------------------------------------------------------------


def insert_config(
    conn: sqlite3.Connection,
    new: NewJobFetchConfig,
    created_by: str | None = None,
) -> JobFetchConfig:
    """Insert a configuration and return the stored row."""
    now = datetime.now()
    config = JobFetchConfig(
        **new.model_dump(),
        id=uuid.uuid4().hex,
        created_by=created_by,
        created_at=now,
        updated_at=now,
    )
    conn.execute(
        """
        INSERT INTO job_fetch_configs
            (id, name, platform, actor_id, search_config, is_active,
             sync_interval_hours, last_synced_at, created_by, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            config.id,
            config.name,
            config.platform,
            config.actor_id,
            _dump_search_config(config.search_config),
            int(config.is_active),
            config.sync_interval_hours,
            _iso(config.last_synced_at),
            config.created_by,
            config.created_at.isoformat(),
            config.updated_at.isoformat(),
        ),
    )
    conn.commit()
    return config


def get_config(conn: sqlite3.Connection, config_id: str) -> JobFetchConfig | None:
    row = conn.execute(
        "SELECT * FROM job_fetch_configs WHERE id = ?", (config_id,),
    ).fetchone()
    return _row_to_config(row) if row is not None else None


def list_configs(conn: sqlite3.Connection, active_only: bool = False) -> list[JobFetchConfig]:
    """Return configurations, newest first."""
    sql = "SELECT * FROM job_fetch_configs"
    if active_only:
        sql += " WHERE is_active = 1"
    sql += " ORDER BY created_at DESC, rowid DESC"
    return [_row_to_config(row) for row in conn.execute(sql).fetchall()]


def update_config(
    conn: sqlite3.Connection,
    config_id: str,
    updates: dict[str, Any],
) -> JobFetchConfig | None:
    """Apply ``updates`` to a configuration. Returns None if it does not exist.

    Raises:
        ValueError: If ``updates`` names a column that cannot be changed.
    """
    unknown = set(updates) - UPDATABLE_COLUMNS
    if unknown:
        msg = f"Cannot update column(s): {', '.join(sorted(unknown))}"
        raise ValueError(msg)

    existing = get_config(conn, config_id)
    if existing is None:
        return None

    merged = existing.model_dump()
    merged.update(updates)
    merged["updated_at"] = datetime.now()
    config = JobFetchConfig.model_validate(merged)

    conn.execute(
        """
        UPDATE job_fetch_configs
        SET name = ?, platform = ?, actor_id = ?, search_config = ?, is_active = ?,
            sync_interval_hours = ?, last_synced_at = ?, updated_at = ?
        WHERE id = ?
        """,
        (
            config.name,
            config.platform,
            config.actor_id,
            _dump_search_config(config.search_config),
            int(config.is_active),
            config.sync_interval_hours,
            _iso(config.last_synced_at),
            config.updated_at.isoformat(),
            config_id,
        ),
    )
    conn.commit()
    return config


def delete_config(conn: sqlite3.Connection, config_id: str) -> bool:
    """Delete a configuration. Returns True if a row was removed."""
    cursor = conn.execute("DELETE FROM job_fetch_configs WHERE id = ?", (config_id,))
    conn.commit()
    return cursor.rowcount > 0


# ---------------------------------------------------------------------------
# job_sync_logs
# ---------------------------------------------------------------------------


def insert_sync_log(
    conn: sqlite3.Connection,
    config_id: str,
    status: str,
    jobs_fetched: int = 0,
    jobs_created: int = 0,
    jobs_updated: int = 0,
    error_message: str | None = None,
    created_at: datetime | None = None,
) -> JobSyncLog:
    """Append a sync log entry."""
    log = JobSyncLog(
        id=uuid.uuid4().hex,
        config_id=config_id,
        status=status,  # type: ignore[arg-type]
        jobs_fetched=jobs_fetched,
        jobs_created=jobs_created,
        jobs_updated=jobs_updated,
        error_message=error_message,
        created_at=created_at or datetime.now(),
    )
    conn.execute(
        """
        INSERT INTO job_sync_logs
            (id, config_id, status, jobs_fetched, jobs_created, jobs_updated,
             error_message, created_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            log.id,
            log.config_id,
            log.status,
            log.jobs_fetched,
            log.jobs_created,
            log.jobs_updated,
            log.error_message,
            log.created_at.isoformat(),
        ),
    )
    conn.commit()
    return log


def list_sync_logs(
    conn: sqlite3.Connection,
    config_id: str | None = None,
    limit: int | None = None,
) -> list[JobSyncLog]:
    """Return sync logs newest first, optionally for one config and capped at ``limit``."""
    sql = "SELECT * FROM job_sync_logs"
    params: list[Any] = []
    if config_id is not None:
        sql += " WHERE config_id = ?"
        params.append(config_id)
    sql += " ORDER BY created_at DESC, rowid DESC"
    if limit is not None:
        sql += " LIMIT ?"
        params.append(limit)
    return [_row_to_log(row) for row in conn.execute(sql, params).fetchall()]


def _row_to_config(row: sqlite3.Row) -> JobFetchConfig:
    data = dict(row)
    data["search_config"] = ApifySearchConfig.model_validate_json(data["search_config"])
    data["is_active"] = bool(data["is_active"])
    return JobFetchConfig.model_validate(data)


def _row_to_log(row: sqlite3.Row) -> JobSyncLog:
    return JobSyncLog.model_validate(dict(row))


def _dump_search_config(config: ApifySearchConfig) -> str:
    return config.model_dump_json(by_alias=True, exclude_none=True)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
