"""Data models for job-fetch configurations and sync logs."""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ApifySearchConfig(BaseModel):
    """Search parameters handed to a scraping actor.

    No field constraints: validity is reported by ``validate_search_config``
    so that invalid configs can still be loaded and shown.
    """

    model_config = ConfigDict(populate_by_name=True)

    keywords: list[str] = Field(default_factory=list)
    location: str | None = None
    job_type: str | None = Field(default=None, alias="jobType")
    experience_level: str | None = Field(default=None, alias="experienceLevel")
    max_results: int | None = Field(default=None, alias="maxResults")


class NewJobFetchConfig(BaseModel):
    """Fields supplied by the user when creating a configuration."""

    name: str
    platform: str
    actor_id: str
    search_config: ApifySearchConfig = Field(default_factory=ApifySearchConfig)
    is_active: bool = True
    sync_interval_hours: int = Field(default=24, ge=1)


class JobFetchConfig(NewJobFetchConfig):
    """A stored job-fetch configuration."""

    id: str
    last_synced_at: datetime | None = None
    created_by: str | None = None
    created_at: datetime
    updated_at: datetime


SyncStatus = Literal["success", "failed", "running"]


class JobSyncLog(BaseModel):
    """One sync run, written by the external sync job. Append-only."""

    model_config = ConfigDict(frozen=True)

    id: str
    config_id: str
    status: SyncStatus
    jobs_fetched: int = 0
    jobs_created: int = 0
    jobs_updated: int = 0
    error_message: str | None = None
    created_at: datetime


class SyncErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INACTIVE = "inactive"
    REMOTE_FAILURE = "remote_failure"
    STORE_FAILURE = "store_failure"


class SyncResult(BaseModel):
    """Outcome of a manual sync trigger. ``error`` is None on success."""

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str
    error: SyncErrorKind | None = None


class ConnectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    message: str


class SyncStats(BaseModel):
    """Aggregate counts over every sync log."""

    total_syncs: int = 0
    successful_syncs: int = 0
    failed_syncs: int = 0
    total_jobs_fetched: int = 0
    total_jobs_created: int = 0
    last_sync_date: datetime | None = None


class ValidationResult(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
