"""Quality-based adjustment of an externally computed base score.

Poor input lowers the score ceiling through a multiplier. Freshers with
strong projects and skills get a small flat bonus. Result clamped to 0-100.
"""

import logging
import math

from src.core.schemas import CandidateLevel, QualityAssessment, QualityLabel, ScoreAdjustment

logger = logging.getLogger(__name__)

# label -> (multiplier, explanation)
QUALITY_MULTIPLIERS: dict[QualityLabel, tuple[float, str]] = {
    QualityLabel.EXCELLENT: (1.0, "Full scoring applied - excellent input quality"),
    QualityLabel.GOOD: (0.95, "Minor quality adjustment applied"),
    QualityLabel.FAIR: (0.85, "Quality adjustment applied - some content missing"),
    QualityLabel.POOR: (0.70, "Significant quality adjustment - incomplete resume"),
    QualityLabel.INVALID: (0.40, "Major quality penalty - resume appears invalid or empty"),
}

FRESHER_BONUS = 5
FRESHER_BONUS_MIN_SKILLS = 5
_FRESHER_BONUS_NOTE = " | Fresher bonus applied for strong projects/skills"


def calculate_adjusted_score(
    base_score: float,
    quality: QualityAssessment,
    level: CandidateLevel | str,
) -> ScoreAdjustment:
    """Apply the quality multiplier and fresher bonus to ``base_score``."""
    multiplier, explanation = QUALITY_MULTIPLIERS[quality.quality]

    bonus = 0
    if _earns_fresher_bonus(quality, CandidateLevel.parse(level)):
        bonus = FRESHER_BONUS
        explanation += _FRESHER_BONUS_NOTE

    final_score = _clamp_score(base_score * multiplier + bonus)

    logger.debug(
        "Adjusted score %.1f -> %d (x%.2f, +%d)", base_score, final_score, multiplier, bonus,
    )

    return ScoreAdjustment(
        base_score=base_score,
        quality_multiplier=multiplier,
        candidate_level_bonus=bonus,
        final_score=final_score,
        explanation=explanation,
    )


def _earns_fresher_bonus(quality: QualityAssessment, level: CandidateLevel) -> bool:
    if level is not CandidateLevel.FRESHER or quality.quality is QualityLabel.INVALID:
        return False
    metrics = quality.content_metrics
    return metrics.has_projects and metrics.unique_skill_count >= FRESHER_BONUS_MIN_SKILLS


def _clamp_score(value: float) -> int:
    """Round half up and clamp to 0-100. NaN scores 0, infinities clamp."""
    if math.isnan(value):
        return 0
    value = max(0.0, min(100.0, value))
    # round() rounds half to even; halves go up here.
    return math.floor(value + 0.5)
