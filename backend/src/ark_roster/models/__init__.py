"""Data models for the operator roster service."""

from ark_roster.models.operator import (
    OPERATOR_CLASSES,
    RATING_ORDER,
    TIER_VALUES,
    NicheEntry,
    NicheList,
    Operator,
    Rating,
)
from ark_roster.models.recommendations import (
    NextPickRecommendation,
    SquadPreset,
    SquadRecommendation,
    SquadRecommendationResult,
)
from ark_roster.models.synergy import Synergy
from ark_roster.models.team import (
    NicheRange,
    TeamMember,
    TeamPreferences,
    TeamResult,
    default_preferences,
)
from ark_roster.models.weight_pools import WeightPool, WeightPoolConfig

__all__ = [
    "OPERATOR_CLASSES",
    "RATING_ORDER",
    "TIER_VALUES",
    "NicheEntry",
    "NicheList",
    "Operator",
    "Rating",
    "NextPickRecommendation",
    "SquadPreset",
    "SquadRecommendation",
    "SquadRecommendationResult",
    "Synergy",
    "NicheRange",
    "TeamMember",
    "TeamPreferences",
    "TeamResult",
    "default_preferences",
    "WeightPool",
    "WeightPoolConfig",
]
