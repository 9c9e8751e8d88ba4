"""Core data models for normal-mode resume scoring.

All scoring records are frozen: every call produces fresh values and nothing
downstream mutates them.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CandidateLevel(str, Enum):
    """Experience level used to pick a weight table."""

    FRESHER = "fresher"
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"

    @classmethod
    def parse(cls, value: Any) -> "CandidateLevel":
        """Resolve a level from a string; anything unrecognised is senior."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower().strip())
        except ValueError:
            return cls.SENIOR


class QualityLabel(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    INVALID = "invalid"


class ConfidenceLevel(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class MatchBand(str, Enum):
    EXCELLENT = "Excellent Match"
    VERY_GOOD = "Very Good Match"
    GOOD = "Good Match"
    FAIR = "Fair Match"
    BELOW_AVERAGE = "Below Average"
    POOR = "Poor Match"
    VERY_POOR = "Very Poor"
    INADEQUATE = "Inadequate"
    MINIMAL = "Minimal Match"


class ContentMetrics(BaseModel):
    """Independent content signals detected in a resume."""

    model_config = ConfigDict(frozen=True)

    word_count: int = Field(default=0, ge=0)
    section_count: int = Field(default=0, ge=0)
    has_contact_info: bool = False
    has_skills: bool = False
    has_education: bool = False
    has_experience: bool = False
    has_projects: bool = False
    bullet_count: int = Field(default=0, ge=0)
    unique_skill_count: int = Field(default=0, ge=0)


class QualityAssessment(BaseModel):
    """Result of assessing raw resume input before scoring."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    quality: QualityLabel
    quality_score: int = Field(ge=0, le=100)
    issues: list[str] = Field(default_factory=list)
    content_metrics: ContentMetrics = Field(default_factory=ContentMetrics)


class WeightTable(BaseModel):
    """Percentage weight per scoring tier for one candidate level.

    The ten weights must add up to exactly 100.
    """

    model_config = ConfigDict(frozen=True)

    skills_keywords: int
    experience: int
    education: int
    projects: int
    certifications: int
    basic_structure: int
    content_structure: int
    competitive: int
    culture_fit: int
    qualitative: int

    @model_validator(mode="after")
    def weights_sum_to_100(self) -> "WeightTable":
        total = sum(self.model_dump().values())
        if total != 100:
            msg = f"tier weights must sum to 100, got {total}"
            raise ValueError(msg)
        return self


class TierScore(BaseModel):
    """Score for a single tier. Unknown tier fields are carried through."""

    model_config = ConfigDict(frozen=True, extra="allow")

    percentage: float
    weight: float
    weighted_contribution: float = 0.0


class ScoreAdjustment(BaseModel):
    """Base score after the quality multiplier and level bonus."""

    model_config = ConfigDict(frozen=True)

    base_score: float
    quality_multiplier: float
    candidate_level_bonus: int = 0
    final_score: int = Field(ge=0, le=100)
    explanation: str = ""
