"""Tests for candidate-level weight tables and tier re-weighting."""

import pytest
from pydantic import ValidationError

from src.core.schemas import CandidateLevel, TierScore, WeightTable
from src.pipeline.weights import TIER_NAMES, apply_weights, weights_for

EXPECTED_TABLES: dict[str, dict[str, int]] = {
    "fresher": {
        "skills_keywords": 35,
        "experience": 0,
        "education": 18,
        "projects": 20,
        "certifications": 8,
        "basic_structure": 6,
        "content_structure": 6,
        "competitive": 3,
        "culture_fit": 2,
        "qualitative": 2,
    },
    "junior": {
        "skills_keywords": 30,
        "experience": 12,
        "education": 12,
        "projects": 16,
        "certifications": 6,
        "basic_structure": 7,
        "content_structure": 8,
        "competitive": 4,
        "culture_fit": 3,
        "qualitative": 2,
    },
    "mid": {
        "skills_keywords": 25,
        "experience": 25,
        "education": 6,
        "projects": 10,
        "certifications": 5,
        "basic_structure": 8,
        "content_structure": 10,
        "competitive": 5,
        "culture_fit": 3,
        "qualitative": 3,
    },
    "senior": {
        "skills_keywords": 22,
        "experience": 30,
        "education": 4,
        "projects": 8,
        "certifications": 4,
        "basic_structure": 8,
        "content_structure": 10,
        "competitive": 7,
        "culture_fit": 4,
        "qualitative": 3,
    },
}


class TestWeightsFor:
    @pytest.mark.parametrize("level", ["fresher", "junior", "mid", "senior"])
    def test_exact_tables(self, level: str) -> None:
        assert weights_for(level).model_dump() == EXPECTED_TABLES[level]

    def test_fresher_has_no_experience_weight(self) -> None:
        assert weights_for("fresher").experience == 0

    def test_enum_and_string_agree(self) -> None:
        assert weights_for(CandidateLevel.MID) == weights_for("mid")

    @pytest.mark.parametrize("level", ["", "staff", "principal", "unknown"])
    def test_unknown_level_defaults_to_senior(self, level: str) -> None:
        assert weights_for(level) == weights_for("senior")

    def test_level_case_insensitive(self) -> None:
        assert weights_for("  Junior ") == weights_for("junior")

    @pytest.mark.parametrize("level", list(CandidateLevel))
    def test_tables_sum_to_100(self, level: CandidateLevel) -> None:
        assert sum(weights_for(level).model_dump().values()) == 100

    def test_ten_tiers(self) -> None:
        assert len(TIER_NAMES) == 10


class TestWeightTableInvariant:
    def test_rejects_tables_not_summing_to_100(self) -> None:
        table = dict(EXPECTED_TABLES["senior"], qualitative=4)
        with pytest.raises(ValidationError, match="sum to 100"):
            WeightTable(**table)

    def test_frozen(self) -> None:
        table = weights_for("senior")
        with pytest.raises(ValidationError):
            table.experience = 0  # type: ignore[misc]


class TestApplyWeights:
    def test_replaces_weight_and_contribution(self) -> None:
        scores = {
            "skills_keywords": TierScore(percentage=80, weight=25),
            "experience": TierScore(percentage=60, weight=25),
        }
        result = apply_weights(scores, "fresher")
        assert result["skills_keywords"].weight == 35
        assert result["skills_keywords"].weighted_contribution == 80 * 35 / 100
        assert result["experience"].weight == 0
        assert result["experience"].weighted_contribution == 0

    def test_never_adds_tiers(self) -> None:
        scores = {"projects": TierScore(percentage=50, weight=10)}
        result = apply_weights(scores, "mid")
        assert set(result) == {"projects"}

    def test_empty_input(self) -> None:
        assert apply_weights({}, "senior") == {}

    def test_unknown_tier_keeps_its_weight(self) -> None:
        scores = {"portfolio": TierScore(percentage=70, weight=12)}
        result = apply_weights(scores, "junior")
        assert result["portfolio"].weight == 12
        assert result["portfolio"].weighted_contribution == 70 * 12 / 100

    def test_contribution_formula_for_every_tier(self) -> None:
        scores = {
            name: TierScore(percentage=10 + i * 7.5, weight=1)
            for i, name in enumerate(TIER_NAMES)
        }
        table = weights_for("senior").model_dump()
        result = apply_weights(scores, "senior")
        for name, tier in result.items():
            assert tier.weight == table[name]
            assert tier.weighted_contribution == scores[name].percentage * table[name] / 100

    def test_extra_fields_carried_through(self) -> None:
        scores = {"education": TierScore(percentage=90, weight=5, score=9, max_score=10)}
        result = apply_weights(scores, "fresher")
        assert result["education"].model_extra == {"score": 9, "max_score": 10}

    def test_input_untouched(self) -> None:
        tier = TierScore(percentage=40, weight=3, weighted_contribution=1.2)
        scores = {"competitive": tier}
        apply_weights(scores, "senior")
        assert scores["competitive"] is tier
        assert tier.weight == 3
        assert tier.weighted_contribution == 1.2
