"""Next-operator suggestion for an Integrated Strategies run."""
import logging
from typing import Iterable, Optional

from ark_roster.models.recommendations import NextPickRecommendation
from ark_roster.models.team import TeamPreferences
from ark_roster.repositories.static_data_repository import DataSnapshot
from ark_roster.services.niche_resolver import NicheResolver
from ark_roster.services.synergy_service import SynergyService
from ark_roster.utils.niche_normalizer import (
    IS_EXCLUDED_NICHES,
    LOW_RARITY_NICHE,
    TEAMBUILD_EXCLUDED_NICHES,
)

logger = logging.getLogger(__name__)

RARITY_WEIGHT = 10
# (missing, under max, at or over max)
REQUIRED_NICHE_BONUS = (100, 50, 10)
PREFERRED_NICHE_BONUS = (75, 30, 5)
VARIETY_BONUS = 15
SATURATION_THRESHOLD = 3
SATURATION_PENALTY = 20
MULTI_NICHE_BONUS = 25


def _class_text(classes: list[str]) -> str:
    if len(classes) == 1:
        return classes[0]
    return " or ".join(classes)


class NextPickRecommender:
    """Scores raised operators against the current team and returns the best one."""

    def __init__(
        self,
        snapshot: DataSnapshot,
        resolver: Optional[NicheResolver] = None,
        synergy_service: Optional[SynergyService] = None,
    ):
        self.snapshot = snapshot
        self.resolver = resolver or NicheResolver(snapshot)
        self.synergy_service = synergy_service or SynergyService(snapshot)

    def _pool(
        self,
        raised_ids: Iterable[str],
        current_team_ids: list[str],
        required_classes: list[str],
        temporary_pick: Optional[str],
    ) -> list[str]:
        candidates = list(dict.fromkeys(raised_ids))
        if temporary_pick and temporary_pick not in candidates:
            candidates.append(temporary_pick)
        pool = []
        for op_id in candidates:
            operator = self.snapshot.get_operator(op_id)
            if operator is None:
                logger.debug(f"Skipping unknown operator id: {op_id}")
                continue
            if operator.operator_class in required_classes and op_id not in current_team_ids:
                pool.append(op_id)
        return pool

    def _team_counts(self, current_team_ids: list[str]) -> dict[str, int]:
        counts: dict[str, int] = {}
        for op_id in current_team_ids:
            for niche in self.resolver.niches_for_operator(op_id):
                if niche not in TEAMBUILD_EXCLUDED_NICHES:
                    counts[niche] = counts.get(niche, 0) + 1
        return counts

    def score_operator(
        self,
        operator_id: str,
        counts: dict[str, int],
        preferences: TeamPreferences,
        current_team_ids: list[str],
    ) -> tuple[float, list[str]]:
        """Score one candidate. Returns the score and one line per component."""
        operator = self.snapshot.get_operator(operator_id)
        niches = self.resolver.niches_for_operator(operator_id)
        breakdown = [f"Rarity {operator.rarity} base (+{operator.rarity * RARITY_WEIGHT})"]
        score = float(operator.rarity * RARITY_WEIGHT)

        useful = 0
        for niche in niches:
            if niche in IS_EXCLUDED_NICHES:
                continue
            count = counts.get(niche, 0)
            required = preferences.required_niches.get(niche)
            preferred = preferences.preferred_niches.get(niche)
            if required or preferred:
                useful += 1
                niche_range = required or preferred
                kind = "required" if required else "preferred"
                missing, under, over = REQUIRED_NICHE_BONUS if required else PREFERRED_NICHE_BONUS
                if count < niche_range.min:
                    score += missing
                    breakdown.append(f"Fills missing {kind} niche: {niche} (+{missing})")
                elif count < niche_range.max:
                    score += under
                    breakdown.append(f"Strengthens {kind} niche: {niche} (+{under})")
                else:
                    score += over
                    breakdown.append(f"Supports {kind} niche: {niche} (+{over})")
            else:
                score += VARIETY_BONUS
                breakdown.append(f"Provides niche variety: {niche} (+{VARIETY_BONUS})")

        if LOW_RARITY_NICHE not in niches:
            saturated = [
                n for n in niches
                if n not in IS_EXCLUDED_NICHES and counts.get(n, 0) >= SATURATION_THRESHOLD
            ]
            if saturated:
                penalty = SATURATION_PENALTY * len(saturated)
                score -= penalty
                breakdown.append(f"Over-specializes in: {', '.join(saturated)} (-{penalty})")

        if useful > 1:
            bonus = (useful - 1) * MULTI_NICHE_BONUS
            score += bonus
            breakdown.append(f"Covers {useful} team niches (+{bonus})")

        synergy = self.synergy_service.synergy_for_operator(
            current_team_ids + [operator_id], operator_id, is_mode=True
        ) * self.snapshot.weight_pools.synergy_scale_factor
        if synergy > 0:
            score += synergy
            breakdown.append(f"Synergy bonus (+{synergy:g})")
        return score, breakdown

    def recommend_next(
        self,
        raised_ids: Iterable[str],
        current_team_ids: Iterable[str],
        required_classes: Iterable[str],
        temporary_pick: Optional[str] = None,
        preferences: Optional[TeamPreferences] = None,
    ) -> NextPickRecommendation:
        """Best raised operator of the requested classes to add next."""
        current_team_ids = list(current_team_ids)
        required_classes = list(required_classes)
        preferences = preferences or self.snapshot.default_preferences
        class_text = _class_text(required_classes) if required_classes else "matching"

        pool = self._pool(raised_ids, current_team_ids, required_classes, temporary_pick)
        if not pool:
            team_condition = " and aren't already in your team" if current_team_ids else ""
            return NextPickRecommendation(
                operator_id=None,
                reasoning=f"No {class_text} operators available that you own{team_condition}.",
            )

        counts = self._team_counts(current_team_ids)
        best_id = None
        best_score = float("-inf")
        best_breakdown: list[str] = []
        for op_id in pool:
            score, breakdown = self.score_operator(op_id, counts, preferences, current_team_ids)
            logger.debug(f"Next pick candidate {op_id}: {score}")
            if score > best_score:
                best_id, best_score, best_breakdown = op_id, score, breakdown

        operator = self.snapshot.get_operator(best_id)
        lines = [f"Recommended {class_text} operator: {operator.name}"]
        if temporary_pick:
            temp = self.snapshot.get_operator(temporary_pick)
            lines.append(f"Considering temporary recruitment: {temp.name if temp else temporary_pick}")
        lines.extend(f"- {line}" for line in best_breakdown)
        lines.append(f"Final score: {best_score:g}")
        return NextPickRecommendation(
            operator_id=best_id,
            reasoning="\n".join(lines),
            score=best_score,
            breakdown=best_breakdown,
        )
