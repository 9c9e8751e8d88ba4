"""Orchestrator: wires quality assessment, weights, adjustment and confidence.

Data flow:
  1. Input quality assessment (raw text + optional structured data)
  2. Candidate-level weight table → normalized tier scores
  3. Quality multiplier + fresher bonus → final score
  4. Confidence, match band and interview probability from the final score
"""

import logging
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from src.core.schemas import (
    CandidateLevel,
    ConfidenceLevel,
    MatchBand,
    QualityAssessment,
    ScoreAdjustment,
    TierScore,
    WeightTable,
)
from src.pipeline.adjuster import calculate_adjusted_score
from src.pipeline.confidence import (
    aligned_interview_probability,
    aligned_match_band,
    calculate_aligned_confidence,
)
from src.pipeline.quality import assess_input_quality
from src.pipeline.weights import apply_weights, weights_for
from src.resume.schema import ResumeData

logger = logging.getLogger(__name__)


class NormalModeInput(BaseModel):
    """Resume input for normal-mode scoring."""

    resume_text: str
    resume_data: ResumeData | None = None
    user_type: Literal["fresher", "experienced", "student"] | None = None


class NormalModeResult(BaseModel):
    """Everything the front end displays for one scored resume."""

    model_config = ConfigDict(frozen=True)

    candidate_level: CandidateLevel
    assessment: QualityAssessment
    weights: WeightTable
    tier_scores: dict[str, TierScore] = Field(default_factory=dict)
    adjustment: ScoreAdjustment
    confidence: ConfidenceLevel
    match_band: MatchBand
    interview_probability: str


def score_normal_mode(
    normal_input: NormalModeInput,
    base_score: float,
    level: CandidateLevel | str,
    tier_scores: Mapping[str, TierScore] | None = None,
    has_job_description: bool = False,
) -> NormalModeResult:
    """Run the full normal-mode adjustment for one resume.

    ``base_score`` and ``tier_scores`` come from an upstream scorer; ``level``
    from an upstream candidate-level classifier.
    """
    candidate_level = CandidateLevel.parse(level)

    assessment = assess_input_quality(normal_input.resume_text, normal_input.resume_data)
    weights = weights_for(candidate_level)
    normalized = apply_weights(tier_scores or {}, candidate_level)
    adjustment = calculate_adjusted_score(base_score, assessment, candidate_level)

    final_score = adjustment.final_score
    confidence = calculate_aligned_confidence(final_score, assessment, has_job_description)

    logger.info(
        "Normal mode: %s input, %s level, score %.1f -> %d (%s confidence)",
        assessment.quality.value, candidate_level.value, base_score, final_score,
        confidence.value,
    )

    return NormalModeResult(
        candidate_level=candidate_level,
        assessment=assessment,
        weights=weights,
        tier_scores=normalized,
        adjustment=adjustment,
        confidence=confidence,
        match_band=aligned_match_band(final_score),
        interview_probability=aligned_interview_probability(final_score),
    )


def export_result_json(result: NormalModeResult) -> str:
    """Export a scoring result as a JSON string."""
    return result.model_dump_json(indent=2)
