"""JobConfigService: job-fetch configuration CRUD, sync logs and sync triggers.

Store errors propagate to the caller, except in ``trigger_manual_sync`` and
``test_apify_connection``: those never raise and return a result record
instead.
"""

import logging
import sqlite3
from typing import Any

import httpx

from src.core import db
from src.core.config import ApifyConfig
from src.jobs.invoker import SyncInvoker
from src.jobs.schemas import (
    ConnectionResult,
    JobFetchConfig,
    JobSyncLog,
    NewJobFetchConfig,
    SyncErrorKind,
    SyncResult,
    SyncStats,
)

logger = logging.getLogger(__name__)

DEFAULT_LOG_LIMIT = 50


class JobConfigService:
    """Async facade over the job config tables and the remote sync function.

    Usage::

        service = JobConfigService(conn, HttpSyncInvoker(settings.sync), settings.apify)
        config = await service.create_config(NewJobFetchConfig(...))
        result = await service.trigger_manual_sync(config.id)
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        invoker: SyncInvoker,
        apify: ApifyConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._conn = conn
        self._invoker = invoker
        self._apify = apify or ApifyConfig()
        self._http_client = http_client

    # -- configs ------------------------------------------------------------

    async def get_configs(self) -> list[JobFetchConfig]:
        """All configurations, newest first."""
        return db.list_configs(self._conn)

    async def get_active_configs(self) -> list[JobFetchConfig]:
        return db.list_configs(self._conn, active_only=True)

    async def get_config_by_id(self, config_id: str) -> JobFetchConfig | None:
        return db.get_config(self._conn, config_id)

    async def create_config(
        self,
        new: NewJobFetchConfig,
        created_by: str | None = None,
    ) -> JobFetchConfig:
        config = db.insert_config(self._conn, new, created_by=created_by)
        logger.info("Created config '%s' (%s) for %s", config.name, config.id, config.platform)
        return config

    async def update_config(self, config_id: str, **updates: Any) -> JobFetchConfig:
        """Update fields of a configuration.

        Raises:
            LookupError: If no configuration has ``config_id``.
            ValueError: If an unknown or invalid field is given.
        """
        config = db.update_config(self._conn, config_id, updates)
        if config is None:
            msg = f"Configuration not found: {config_id}"
            raise LookupError(msg)
        logger.debug("Updated config %s: %s", config_id, sorted(updates))
        return config

    async def delete_config(self, config_id: str) -> None:
        if db.delete_config(self._conn, config_id):
            logger.info("Deleted config %s", config_id)

    async def toggle_config(self, config_id: str, is_active: bool) -> JobFetchConfig:
        return await self.update_config(config_id, is_active=is_active)

    # -- sync logs ----------------------------------------------------------

    async def get_sync_logs(
        self,
        config_id: str | None = None,
        limit: int = DEFAULT_LOG_LIMIT,
    ) -> list[JobSyncLog]:
        """Sync logs newest first, optionally for a single configuration."""
        return db.list_sync_logs(self._conn, config_id=config_id, limit=limit)

    async def get_sync_stats(self) -> SyncStats:
        """Aggregate counts over the whole sync log table (loaded into memory)."""
        logs = db.list_sync_logs(self._conn)
        return SyncStats(
            total_syncs=len(logs),
            successful_syncs=sum(1 for log in logs if log.status == "success"),
            failed_syncs=sum(1 for log in logs if log.status == "failed"),
            total_jobs_fetched=sum(log.jobs_fetched for log in logs),
            total_jobs_created=sum(log.jobs_created for log in logs),
            last_sync_date=logs[0].created_at if logs else None,
        )

    # -- remote calls -------------------------------------------------------

    async def trigger_manual_sync(self, config_id: str) -> SyncResult:
        """Start a remote sync for an active configuration."""
        try:
            config = db.get_config(self._conn, config_id)
        except Exception as e:
            logger.warning("Config lookup failed for %s", config_id, exc_info=True)
            return SyncResult(
                success=False,
                message=str(e) or "Failed to load configuration",
                error=SyncErrorKind.STORE_FAILURE,
            )
        if config is None:
            return SyncResult(
                success=False,
                message="Configuration not found",
                error=SyncErrorKind.NOT_FOUND,
            )
        if not config.is_active:
            return SyncResult(
                success=False,
                message="Configuration is not active",
                error=SyncErrorKind.INACTIVE,
            )

        try:
            await self._invoker.invoke(config_id)
        except Exception as e:
            logger.warning("Sync trigger failed for config %s", config_id, exc_info=True)
            return SyncResult(
                success=False,
                message=str(e) or "Failed to trigger sync",
                error=SyncErrorKind.REMOTE_FAILURE,
            )

        logger.info("Sync initiated for config '%s' (%s)", config.name, config_id)
        return SyncResult(success=True, message="Sync initiated successfully")

    async def test_apify_connection(self, api_token: str, actor_id: str) -> ConnectionResult:
        """Check that ``api_token`` can read actor ``actor_id``."""
        url = f"{self._apify.api_base_url}/acts/{actor_id}"
        headers = {"Authorization": f"Bearer {api_token}"}
        try:
            if self._http_client is not None:
                response = await self._http_client.get(url, headers=headers)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(url, headers=headers)
        except Exception as e:
            logger.warning("Apify connection check failed: %s", e)
            return ConnectionResult(success=False, message=str(e) or "Connection failed")

        if not response.is_success:
            logger.warning(
                "Apify connection check for %s returned %d", actor_id, response.status_code,
            )
            return ConnectionResult(success=False, message="Invalid API token or Actor ID")

        return ConnectionResult(success=True, message="Connection successful")
