"""Input quality assessment, run before any scoring.

Every content signal is an independent detector over the same two inputs:
the raw resume text and (optionally) the structured ResumeData. Presence
signals resolve in two stages: the structured resolver answers when its
source is present and non-empty, otherwise the text resolver decides.

Quality score range: 0-100, the sum of four point buckets
(word count 0-20, section presence 0-30, content depth 0-30, section count 0-20).
"""

import logging
import re
from collections.abc import Callable

from src.core.schemas import ContentMetrics, QualityAssessment, QualityLabel
from src.resume.schema import ResumeData

logger = logging.getLogger(__name__)

_EXPERIENCE_HEADER = re.compile(
    r"\b(EXPERIENCE|WORK\s*EXPERIENCE|EMPLOYMENT|PROFESSIONAL\s*EXPERIENCE)\b", re.IGNORECASE,
)
_EDUCATION_HEADER = re.compile(r"\b(EDUCATION|ACADEMIC|QUALIFICATIONS)\b", re.IGNORECASE)
_SKILLS_HEADER = re.compile(
    r"\b(SKILLS|TECHNICAL\s*SKILLS|CORE\s*COMPETENCIES)\b", re.IGNORECASE,
)
_PROJECTS_HEADER = re.compile(
    r"\b(PROJECTS|PERSONAL\s*PROJECTS|ACADEMIC\s*PROJECTS)\b", re.IGNORECASE,
)

# Counted by category, not by occurrence.
SECTION_PATTERNS: tuple[re.Pattern[str], ...] = (
    _EXPERIENCE_HEADER,
    _EDUCATION_HEADER,
    _SKILLS_HEADER,
    _PROJECTS_HEADER,
    re.compile(r"\b(CERTIFICATIONS?|CERTIFICATES?|LICENSES?)\b", re.IGNORECASE),
    re.compile(r"\b(SUMMARY|OBJECTIVE|PROFILE|ABOUT\s*ME)\b", re.IGNORECASE),
    re.compile(r"\b(ACHIEVEMENTS?|AWARDS?|HONORS?)\b", re.IGNORECASE),
    re.compile(r"\b(PUBLICATIONS?|RESEARCH)\b", re.IGNORECASE),
    re.compile(r"\b(LANGUAGES?|INTERESTS?|HOBBIES?)\b", re.IGNORECASE),
)

_EMAIL = re.compile(r"[\w.-]+@[\w.-]+\.\w+")
_PHONE = re.compile(
    r"[+]?[(]?[0-9]{1,3}[)]?[-\s.]?[(]?[0-9]{1,4}[)]?[-\s.]?[0-9]{1,4}[-\s.]?[0-9]{1,9}"
)
# Experience-section fallback (no PROFESSIONAL EXPERIENCE variant here).
_EXPERIENCE_FALLBACK_HEADER = re.compile(
    r"\b(EXPERIENCE|WORK\s*EXPERIENCE|EMPLOYMENT)\b", re.IGNORECASE,
)
# Two-letter degrees must be dotted ("B.E."); bare "be" and "me" do not count.
_DEGREE = re.compile(
    r"\b(bachelors?|masters?|b\.s|m\.s|b\.e|m\.e|b\.?sc|m\.?sc|b\.?tech|m\.?tech|mba|ph\.?d)\b",
    re.IGNORECASE,
)
_CORE_TECH = re.compile(
    r"\b(javascript|python|java|react|node|sql|aws|docker|git)\b", re.IGNORECASE,
)
_ACTION_VERBS = re.compile(
    r"\b(worked|developed|managed|led|created|implemented|designed)\b", re.IGNORECASE,
)
_BULLET_LINE = re.compile(r"^\s*[•\-*]\s", re.MULTILINE)

TECH_VOCABULARY: tuple[str, ...] = (
    "javascript", "typescript", "python", "java", "c++", "c#", "go", "rust", "ruby", "php",
    "react", "angular", "vue", "node", "express", "django", "flask", "spring",
    "mysql", "postgresql", "mongodb", "redis", "elasticsearch",
    "aws", "azure", "gcp", "docker", "kubernetes", "terraform",
    "git", "jira", "agile", "scrum", "rest", "graphql", "api",
    "html", "css", "sass", "tailwind", "bootstrap",
    "machine learning", "tensorflow", "pytorch", "pandas", "numpy",
    "tableau", "power bi", "excel", "sql",
)

# (min inclusive, points), checked highest first.
_WORD_COUNT_POINTS: tuple[tuple[int, int], ...] = ((400, 20), (200, 15), (100, 10), (50, 5))
_DEPTH_POINTS: tuple[tuple[int, int], ...] = ((10, 15), (5, 10), (2, 5))
_SECTION_COUNT_POINTS: tuple[tuple[int, int], ...] = ((5, 20), (3, 15), (2, 10), (1, 5))
_QUALITY_BANDS: tuple[tuple[int, QualityLabel], ...] = (
    (80, QualityLabel.EXCELLENT),
    (60, QualityLabel.GOOD),
    (40, QualityLabel.FAIR),
    (20, QualityLabel.POOR),
)

CONTACT_POINTS = 5
SKILLS_POINTS = 8
EDUCATION_POINTS = 5
EXPERIENCE_POINTS = 7
PROJECTS_POINTS = 5

StructuredResolver = Callable[[ResumeData | None], bool | None]
TextResolver = Callable[[str], bool]


def assess_input_quality(
    resume_text: str,
    resume_data: ResumeData | None = None,
) -> QualityAssessment:
    """Assess resume input quality before scoring.

    Never raises: empty or garbage input lands in the ``invalid`` band.
    """
    metrics = ContentMetrics(
        word_count=count_words(resume_text),
        section_count=count_sections(resume_text),
        has_contact_info=has_contact_info(resume_text),
        has_skills=_resolve(resume_text, resume_data, _structured_skills, _text_skills),
        has_education=_resolve(
            resume_text, resume_data, _structured_education, _text_education,
        ),
        has_experience=_resolve(
            resume_text, resume_data, _structured_experience, _text_experience,
        ),
        has_projects=_resolve(resume_text, resume_data, _structured_projects, _text_projects),
        bullet_count=count_bullet_points(resume_text, resume_data),
        unique_skill_count=count_unique_skills(resume_text, resume_data),
    )

    issues = _collect_issues(metrics)
    quality_score = quality_score_for(metrics)
    quality = _label_for(quality_score)

    logger.debug(
        "Input quality: %s (%d), %d words, %d sections, %d issues",
        quality.value, quality_score, metrics.word_count, metrics.section_count, len(issues),
    )

    return QualityAssessment(
        is_valid=quality is not QualityLabel.INVALID,
        quality=quality,
        quality_score=quality_score,
        issues=issues,
        content_metrics=metrics,
    )


def quality_score_for(metrics: ContentMetrics) -> int:
    """Sum the four independent point buckets for a set of metrics."""
    return (
        word_count_points(metrics.word_count)
        + section_presence_points(metrics)
        + content_depth_points(metrics.bullet_count, metrics.unique_skill_count)
        + section_count_points(metrics.section_count)
    )


def word_count_points(word_count: int) -> int:
    return _ladder(word_count, _WORD_COUNT_POINTS)


def section_presence_points(metrics: ContentMetrics) -> int:
    points = 0
    if metrics.has_contact_info:
        points += CONTACT_POINTS
    if metrics.has_skills:
        points += SKILLS_POINTS
    if metrics.has_education:
        points += EDUCATION_POINTS
    if metrics.has_experience:
        points += EXPERIENCE_POINTS
    if metrics.has_projects:
        points += PROJECTS_POINTS
    return points


def content_depth_points(bullet_count: int, unique_skill_count: int) -> int:
    return _ladder(bullet_count, _DEPTH_POINTS) + _ladder(unique_skill_count, _DEPTH_POINTS)


def section_count_points(section_count: int) -> int:
    return _ladder(section_count, _SECTION_COUNT_POINTS)


# ---------------------------------------------------------------------------
# Detectors
# ---------------------------------------------------------------------------


def count_words(text: str) -> int:
    return len(text.split())


def count_sections(text: str) -> int:
    """Number of section categories present (not header occurrences)."""
    return sum(1 for pattern in SECTION_PATTERNS if pattern.search(text))


def has_contact_info(text: str) -> bool:
    return bool(_EMAIL.search(text) or _PHONE.search(text))


def count_bullet_points(text: str, resume_data: ResumeData | None = None) -> int:
    """Larger of structured bullet total and bullet-glyph lines in the text."""
    structured = 0
    if resume_data is not None:
        structured += sum(len(exp.bullets) for exp in resume_data.work_experience)
        structured += sum(len(proj.bullets) for proj in resume_data.projects)
    text_bullets = len(_BULLET_LINE.findall(text))
    return max(structured, text_bullets)


def count_unique_skills(text: str, resume_data: ResumeData | None = None) -> int:
    """Cardinality of structured skills plus vocabulary terms found in the text.

    Vocabulary terms match as substrings, so "java" is also found inside
    "javascript".
    """
    skills: set[str] = set()
    if resume_data is not None:
        for category in resume_data.skills:
            skills.update(skill.lower() for skill in category.skills)

    text_lower = text.lower()
    skills.update(term for term in TECH_VOCABULARY if term in text_lower)
    return len(skills)


# ---------------------------------------------------------------------------
# Two-stage presence resolution
# ---------------------------------------------------------------------------


def _resolve(
    text: str,
    resume_data: ResumeData | None,
    structured: StructuredResolver,
    fallback: TextResolver,
) -> bool:
    verdict = structured(resume_data)
    if verdict is not None:
        return verdict
    return fallback(text)


def _structured_skills(data: ResumeData | None) -> bool | None:
    if data is None or not data.skills:
        return None
    return any(category.skills for category in data.skills)


def _structured_education(data: ResumeData | None) -> bool | None:
    if data is None or not data.education:
        return None
    return True


def _structured_experience(data: ResumeData | None) -> bool | None:
    if data is None or not data.work_experience:
        return None
    return any(exp.bullets for exp in data.work_experience)


def _structured_projects(data: ResumeData | None) -> bool | None:
    if data is None or not data.projects:
        return None
    return any(proj.bullets for proj in data.projects)


def _text_skills(text: str) -> bool:
    return bool(_SKILLS_HEADER.search(text) or _CORE_TECH.search(text))


def _text_education(text: str) -> bool:
    return bool(_EDUCATION_HEADER.search(text) or _DEGREE.search(text))


def _text_experience(text: str) -> bool:
    return bool(_EXPERIENCE_FALLBACK_HEADER.search(text) and _ACTION_VERBS.search(text))


def _text_projects(text: str) -> bool:
    return bool(_PROJECTS_HEADER.search(text))


# ---------------------------------------------------------------------------
# Scoring helpers
# ---------------------------------------------------------------------------


def _collect_issues(metrics: ContentMetrics) -> list[str]:
    issues: list[str] = []
    if metrics.word_count < 50:
        issues.append("Resume text too short (< 50 words)")
    if metrics.word_count < 100:
        issues.append("Resume appears incomplete")
    if not metrics.has_contact_info:
        issues.append("Missing contact information")
    if not (metrics.has_skills or metrics.has_experience or metrics.has_projects):
        issues.append("No substantive content detected")
    if metrics.section_count < 2:
        issues.append("Missing standard resume sections")
    return issues


def _label_for(quality_score: int) -> QualityLabel:
    for threshold, label in _QUALITY_BANDS:
        if quality_score >= threshold:
            return label
    return QualityLabel.INVALID


def _ladder(value: int, steps: tuple[tuple[int, int], ...]) -> int:
    for threshold, points in steps:
        if value >= threshold:
            return points
    return 0
