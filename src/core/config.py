"""Configuration models and YAML loader for the resume scoring service."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from src.core.schemas import CandidateLevel


class DatabaseConfig(BaseModel):
    """Database configuration."""

    path: str = "data/jobs.db"


class SyncConfig(BaseModel):
    """Remote sync function endpoint."""

    functions_url: str = "http://localhost:54321/functions/v1"
    function_name: str = "apify-sync-jobs"
    api_key_env: str = "SUPABASE_ANON_KEY"

    @field_validator("functions_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def api_key(self) -> str | None:
        """Read the function API key from the configured environment variable."""
        return os.environ.get(self.api_key_env) or None


class ApifyConfig(BaseModel):
    """Apify API access for connectivity checks."""

    api_base_url: str = "https://api.apify.com/v2"
    token_env: str = "APIFY_API_TOKEN"

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def api_token(self) -> str | None:
        return os.environ.get(self.token_env) or None


class ScoringConfig(BaseModel):
    """Defaults applied when the caller does not pin a candidate level."""

    default_level: CandidateLevel = CandidateLevel.SENIOR

    @field_validator("default_level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> CandidateLevel:
        return CandidateLevel.parse(v)


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)
    apify: ApifyConfig = Field(default_factory=ApifyConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
