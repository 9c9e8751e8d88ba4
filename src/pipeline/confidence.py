"""Confidence, match band and interview probability aligned with the final score."""

from src.core.schemas import ConfidenceLevel, MatchBand, QualityAssessment, QualityLabel

HIGH_SCORE_THRESHOLD = 85

_QUALITY_POINTS: dict[QualityLabel, int] = {
    QualityLabel.EXCELLENT: 4,
    QualityLabel.GOOD: 3,
    QualityLabel.FAIR: 2,
    QualityLabel.POOR: 1,
    QualityLabel.INVALID: 0,
}

_SCORE_POINTS: tuple[tuple[float, int], ...] = ((75, 4), (65, 3), (55, 2), (45, 1))

# Max points: 4 quality + 4 score + 1 JD + 1 completeness
_CONFIDENCE_BANDS: tuple[tuple[int, ConfidenceLevel], ...] = (
    (7, ConfidenceLevel.HIGH),
    (4, ConfidenceLevel.MEDIUM),
)

# Lower bounds are inclusive.
_SCORE_LADDER: tuple[tuple[float, MatchBand, str], ...] = (
    (85, MatchBand.EXCELLENT, "70-85%"),
    (75, MatchBand.VERY_GOOD, "55-70%"),
    (65, MatchBand.GOOD, "40-55%"),
    (55, MatchBand.FAIR, "25-40%"),
    (45, MatchBand.BELOW_AVERAGE, "15-25%"),
    (35, MatchBand.POOR, "8-15%"),
    (25, MatchBand.VERY_POOR, "3-8%"),
    (15, MatchBand.INADEQUATE, "1-3%"),
)
_FLOOR_BAND = (MatchBand.MINIMAL, "0-1%")


def calculate_aligned_confidence(
    score: float,
    quality: QualityAssessment,
    has_job_description: bool,
) -> ConfidenceLevel:
    """Map a final score and input quality to High/Medium/Low confidence.

    Scores of 85 and above are always High.
    """
    if score >= HIGH_SCORE_THRESHOLD:
        return ConfidenceLevel.HIGH

    points = _QUALITY_POINTS[quality.quality]
    for threshold, score_points in _SCORE_POINTS:
        if score >= threshold:
            points += score_points
            break
    if has_job_description:
        points += 1
    if _content_complete(quality):
        points += 1

    for threshold, level in _CONFIDENCE_BANDS:
        if points >= threshold:
            return level
    return ConfidenceLevel.LOW


def aligned_match_band(score: float) -> MatchBand:
    return _band_for(score)[0]


def aligned_interview_probability(score: float) -> str:
    """Interview probability range, e.g. ``"40-55%"``."""
    return _band_for(score)[1]


def _content_complete(quality: QualityAssessment) -> bool:
    m = quality.content_metrics
    present = [
        m.has_contact_info,
        m.has_skills,
        m.has_education,
        m.has_experience or m.has_projects,
    ]
    return sum(present) >= 4


def _band_for(score: float) -> tuple[MatchBand, str]:
    for threshold, band, probability in _SCORE_LADDER:
        if score >= threshold:
            return band, probability
    return _FLOOR_BAND
