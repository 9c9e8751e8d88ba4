"""Per-platform search config defaults, actor ids, validation and display."""

import re

from src.jobs.schemas import ApifySearchConfig, ValidationResult

MAX_RESULTS_LIMIT = 1000

_DEFAULT_SEARCH_CONFIGS: dict[str, dict[str, object]] = {
    "linkedin": {
        "keywords": ["software engineer", "developer"],
        "location": "India",
        "job_type": "Full-time",
        "experience_level": "Entry level",
        "max_results": 50,
    },
    "indeed": {
        "keywords": ["software developer"],
        "location": "Remote",
        "job_type": "Full-time",
        "max_results": 50,
    },
    "naukri": {
        "keywords": ["software engineer"],
        "location": "Bangalore",
        "experience_level": "0-3 years",
        "max_results": 50,
    },
    "instahyre": {
        "keywords": ["backend developer", "frontend developer"],
        "location": "India",
        "max_results": 50,
    },
}

_FALLBACK_SEARCH_CONFIG: dict[str, object] = {
    "keywords": ["software"],
    "location": "India",
    "max_results": 50,
}

_POPULAR_ACTOR_IDS: dict[str, str] = {
    "linkedin": "apify/linkedin-jobs-scraper",
    "indeed": "apify/indeed-scraper",
    "naukri": "curious_coder/naukri-scraper",
    "instahyre": "apify/instahyre-scraper",
    "glassdoor": "apify/glassdoor-scraper",
}

_CAMEL_BOUNDARY = re.compile(r"([A-Z])")


def generate_default_search_config(platform: str) -> ApifySearchConfig:
    """Default search config for a platform (case-insensitive), or a generic one."""
    defaults = _DEFAULT_SEARCH_CONFIGS.get(platform.lower().strip(), _FALLBACK_SEARCH_CONFIG)
    return ApifySearchConfig.model_validate(defaults)


def popular_actor_ids() -> dict[str, str]:
    """Known scraping actor id per platform."""
    return dict(_POPULAR_ACTOR_IDS)


def validate_search_config(config: ApifySearchConfig) -> ValidationResult:
    """Check that a config has keywords and a sane result cap."""
    errors: list[str] = []

    if not config.keywords:
        errors.append("At least one keyword is required")

    if config.max_results is not None and not 1 <= config.max_results <= MAX_RESULTS_LIMIT:
        errors.append(f"Max results must be between 1 and {MAX_RESULTS_LIMIT}")

    return ValidationResult(valid=not errors, errors=errors)


def format_search_config_for_display(config: ApifySearchConfig) -> str:
    """One-line summary, e.g. ``keywords: a, b | location: India | max results: 50``."""
    entries: list[str] = []
    for key, value in config.model_dump(by_alias=True, exclude_none=True).items():
        label = _CAMEL_BOUNDARY.sub(r" \1", key).lower()
        shown = ", ".join(value) if isinstance(value, list) else value
        entries.append(f"{label}: {shown}")
    return " | ".join(entries)
