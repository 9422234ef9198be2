"""Recommendation services."""

from ark_roster.services.hope_costs import (
    HopeCostEdit,
    apply_edits_to_hope_costs,
    full_config_to_edits,
    is_edits_format,
)
from ark_roster.services.next_pick_recommender import NextPickRecommender
from ark_roster.services.niche_resolver import NicheResolver
from ark_roster.services.squad_recommendation import CLASS_PAIRINGS, SquadRecommendationService
from ark_roster.services.synergy_service import SynergyService
from ark_roster.services.team_builder import TEAM_SIZE, FillPass, TeamBuilder, score_candidate

__all__ = [
    "HopeCostEdit",
    "apply_edits_to_hope_costs",
    "full_config_to_edits",
    "is_edits_format",
    "NextPickRecommender",
    "NicheResolver",
    "CLASS_PAIRINGS",
    "SquadRecommendationService",
    "SynergyService",
    "TEAM_SIZE",
    "FillPass",
    "TeamBuilder",
    "score_candidate",
]
