"""Integrated Strategies squad recommendation from per-class roster strength."""
import logging
from typing import Iterable, Optional

from ark_roster.models.operator import OPERATOR_CLASSES
from ark_roster.models.recommendations import (
    SquadPreset,
    SquadRecommendation,
    SquadRecommendationResult,
)
from ark_roster.repositories.static_data_repository import DataSnapshot, parse_squad_presets
from ark_roster.services.hope_costs import apply_edits_to_hope_costs
from ark_roster.services.niche_resolver import NicheResolver

logger = logging.getLogger(__name__)

# Classes are judged in pairs; both classes of a pair get the same strength
CLASS_PAIRINGS = [
    ("Vanguard", "Guard"),
    ("Defender", "Supporter"),
    ("Sniper", "Medic"),
    ("Caster", "Specialist"),
]
PER_CLASS_LIMIT = 3
TRASH_PENALTY = 1000

# Classes need at least this strength to be named in the reason text
NARRATIVE_MIN_STRENGTH = 3
DEFAULT_REASON = "best fit for your roster"


class SquadRecommendationService:
    """Picks the squad preset that best fits a user's strongest classes."""

    def __init__(self, snapshot: DataSnapshot, resolver: Optional[NicheResolver] = None):
        self.snapshot = snapshot
        self.resolver = resolver or NicheResolver(snapshot)

    def team_score(self, member_ids: list[str]) -> float:
        """Best IS tier per weight-pool niche times the pool weight, minus trash."""
        pools = self.snapshot.weight_pools
        score = 0.0
        for niche in pools.scored_niches():
            best = max((self.resolver.tier_of(op_id, niche, is_mode=True) for op_id in member_ids), default=0)
            score += best * pools.raw_score_for(niche)
        score -= TRASH_PENALTY * sum(1 for op_id in member_ids if self.snapshot.is_trash(op_id))
        return score

    def _greedy_pair_team(self, first: list[str], second: list[str], classes: dict[str, str]) -> tuple[list[str], float]:
        """Grow a team one operator at a time, taking the best marginal total.

        The leading class (first) fills its quota on its own, then both pools
        compete for the remaining slots. Ties keep the earlier candidate.
        Each class contributes at most PER_CLASS_LIMIT.
        """
        team: list[str] = []
        per_class: dict[str, int] = {}
        team_score = 0.0
        for candidates in (first, first + second):
            while True:
                best_id = None
                best_score = float("-inf")
                for op_id in candidates:
                    if op_id in team or per_class.get(classes[op_id], 0) >= PER_CLASS_LIMIT:
                        continue
                    score = self.team_score(team + [op_id])
                    if score > best_score:
                        best_id, best_score = op_id, score
                if best_id is None:
                    break
                team.append(best_id)
                per_class[classes[best_id]] = per_class.get(classes[best_id], 0) + 1
                team_score = best_score
        return team, team_score

    def compute_class_strengths(self, owned_ids: Iterable[str]) -> dict[str, float]:
        """Strength per class, shared by both classes of each pairing."""
        by_class: dict[str, list[str]] = {cls: [] for cls in OPERATOR_CLASSES}
        classes: dict[str, str] = {}
        for op_id in dict.fromkeys(owned_ids):
            operator = self.snapshot.get_operator(op_id)
            if operator is None or operator.operator_class not in by_class:
                continue
            by_class[operator.operator_class].append(op_id)
            classes[op_id] = operator.operator_class

        strengths: dict[str, float] = {cls: 0.0 for cls in OPERATOR_CLASSES}
        for class_a, class_b in CLASS_PAIRINGS:
            pool_a, pool_b = by_class[class_a], by_class[class_b]
            team, score = self._greedy_pair_team(pool_a, pool_b, classes)
            alt_team, alt_score = self._greedy_pair_team(pool_b, pool_a, classes)
            if alt_score > score:
                team, score = alt_team, alt_score
            strength = score / len(team) if team else 0.0
            strengths[class_a] = strength
            strengths[class_b] = strength
        return strengths

    @staticmethod
    def score_preset(preset: SquadPreset, class_strengths: dict[str, float]) -> tuple[float, str]:
        score = 0.0
        auto_promoted: list[str] = []
        low_hope: list[str] = []
        for cls in OPERATOR_CLASSES:
            strength = class_strengths.get(cls, 0)
            if strength <= 0:
                continue
            cost = preset.six_star_hope_cost(cls)
            auto = preset.is_auto_promoted(cls)
            benefit = (6 - cost) * 0.5 + (1.5 if auto else 0)
            score += strength * benefit
            if strength >= NARRATIVE_MIN_STRENGTH:
                if auto:
                    auto_promoted.append(cls)
                if cost < 6:
                    low_hope.append(cls)

        parts = []
        if auto_promoted:
            parts.append(f"autopromotes {', '.join(auto_promoted)}")
        if low_hope:
            parts.append(f"lower hope for {', '.join(low_hope)}")
        return score, "; ".join(parts) if parts else DEFAULT_REASON

    def recommend_squad(
        self,
        is_id: str,
        preset_config: dict[str, dict[str, SquadPreset]],
        class_strengths: dict[str, float],
    ) -> Optional[SquadRecommendation]:
        """Best preset id for the IS, or None when the IS has no presets."""
        presets = preset_config.get(is_id)
        if not presets:
            return None
        best: Optional[SquadRecommendation] = None
        for preset_id, preset in presets.items():
            score, reason = self.score_preset(preset, class_strengths)
            if best is None or score > best.score:
                best = SquadRecommendation(preset_id=preset_id, reason=reason, score=score)
        return best

    def recommend(
        self,
        is_id: str,
        owned_ids: Iterable[str],
        hope_cost_edits: Iterable = (),
    ) -> SquadRecommendationResult:
        """Class strengths plus the best preset with user hope edits applied."""
        edits = list(hope_cost_edits)
        if edits:
            presets = parse_squad_presets(apply_edits_to_hope_costs(self.snapshot.raw_hope_costs, edits))
        else:
            presets = self.snapshot.squad_presets
        strengths = self.compute_class_strengths(owned_ids)
        recommended = self.recommend_squad(is_id, presets, strengths)
        if recommended is None:
            logger.info(f"No squad presets configured for {is_id}")
        return SquadRecommendationResult(class_strengths=strengths, recommended=recommended)
