"""Candidate-level weight normalization for tier scores.

Freshers are not penalised for missing experience: their experience weight is
zero and the share moves to skills, projects and education. Each table is a
hand-authored constant that sums to 100.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType

from src.core.schemas import CandidateLevel, TierScore, WeightTable

logger = logging.getLogger(__name__)

_WEIGHT_TABLES: Mapping[CandidateLevel, WeightTable] = MappingProxyType({
    CandidateLevel.FRESHER: WeightTable(
        skills_keywords=35,
        experience=0,
        education=18,
        projects=20,
        certifications=8,
        basic_structure=6,
        content_structure=6,
        competitive=3,
        culture_fit=2,
        qualitative=2,
    ),
    CandidateLevel.JUNIOR: WeightTable(
        skills_keywords=30,
        experience=12,
        education=12,
        projects=16,
        certifications=6,
        basic_structure=7,
        content_structure=8,
        competitive=4,
        culture_fit=3,
        qualitative=2,
    ),
    CandidateLevel.MID: WeightTable(
        skills_keywords=25,
        experience=25,
        education=6,
        projects=10,
        certifications=5,
        basic_structure=8,
        content_structure=10,
        competitive=5,
        culture_fit=3,
        qualitative=3,
    ),
    CandidateLevel.SENIOR: WeightTable(
        skills_keywords=22,
        experience=30,
        education=4,
        projects=8,
        certifications=4,
        basic_structure=8,
        content_structure=10,
        competitive=7,
        culture_fit=4,
        qualitative=3,
    ),
})

TIER_NAMES: tuple[str, ...] = tuple(WeightTable.model_fields)


def weights_for(level: CandidateLevel | str) -> WeightTable:
    """Return the weight table for a level. Unrecognised levels get the senior table."""
    return _WEIGHT_TABLES[CandidateLevel.parse(level)]


def apply_weights(
    tier_scores: Mapping[str, TierScore],
    level: CandidateLevel | str,
) -> dict[str, TierScore]:
    """Re-weight tier scores for a candidate level.

    Only keys present in ``tier_scores`` appear in the result. Tiers the table
    does not know keep their own weight. Inputs are left untouched.
    """
    table = weights_for(level).model_dump()
    normalized: dict[str, TierScore] = {}
    for name, tier in tier_scores.items():
        new_weight = table.get(name, tier.weight)
        normalized[name] = tier.model_copy(update={
            "weight": new_weight,
            "weighted_contribution": tier.percentage * new_weight / 100,
        })
    logger.debug(
        "Applied %s weights to %d tiers", CandidateLevel.parse(level).value, len(normalized),
    )
    return normalized
