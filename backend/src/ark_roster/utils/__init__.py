"""Utility modules for ark_roster."""

from ark_roster.utils.niche_normalizer import (
    DERIVED_NICHE_RULES,
    IS_EXCLUDED_NICHES,
    NICHE_ALIASES,
    SCORING_EXCLUDED_NICHES,
    TEAMBUILD_EXCLUDED_NICHES,
    expand_derived_niches,
    normalize_niche,
)
from ark_roster.utils.peak_level import keep_peak_per, level_rank, peak_of, tier_rank

__all__ = [
    "DERIVED_NICHE_RULES",
    "IS_EXCLUDED_NICHES",
    "NICHE_ALIASES",
    "SCORING_EXCLUDED_NICHES",
    "TEAMBUILD_EXCLUDED_NICHES",
    "expand_derived_niches",
    "normalize_niche",
    "keep_peak_per",
    "level_rank",
    "peak_of",
    "tier_rank",
]
