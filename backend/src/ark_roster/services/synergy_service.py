"""Synergy scoring for whole teams and for a single operator joining one."""
from typing import Iterable

from ark_roster.models.synergy import Synergy
from ark_roster.repositories.static_data_repository import DataSnapshot


class SynergyService:
    """Scores operator synergies.

    A synergy's core is satisfied when every core group has at least one
    member on the team. Optional bonuses only count once the core is
    satisfied and at least optional_count_minimum optional operators are on
    the team.
    """

    def __init__(self, snapshot: DataSnapshot):
        self.snapshot = snapshot

    def _synergies(self, is_mode: bool) -> list[Synergy]:
        return [s for s in self.snapshot.synergies.values() if s.applies_to(is_mode)]

    @staticmethod
    def _core_satisfied(synergy: Synergy, team: set[str]) -> bool:
        return all(any(op_id in team for op_id in ids) for ids in synergy.core.values())

    @staticmethod
    def _optional_count(synergy: Synergy, team: set[str]) -> int:
        return sum(1 for ids in synergy.optional.values() for op_id in ids if op_id in team)

    def _optional_score(self, synergy: Synergy, team: set[str]) -> float:
        if self._optional_count(synergy, team) < synergy.optional_count_minimum:
            return 0
        if synergy.optional_count_separately:
            return self._optional_count(synergy, team) * synergy.optional_point_bonus
        satisfied_groups = sum(
            1 for ids in synergy.optional.values() if any(op_id in team for op_id in ids)
        )
        return satisfied_groups * synergy.optional_point_bonus

    def score_synergy(self, synergy: Synergy, team_ids: Iterable[str]) -> float:
        """Bonus one synergy gives a team."""
        team = set(team_ids)
        core_satisfied = self._core_satisfied(synergy, team)
        score = 0.0
        if synergy.core_count_separately:
            score += sum(
                synergy.core_point_bonus
                for ids in synergy.core.values()
                for op_id in ids
                if op_id in team
            )
        elif core_satisfied:
            score += synergy.core_point_bonus
        if core_satisfied:
            score += self._optional_score(synergy, team)
        return score

    def calculate_team_synergy(self, team_ids: Iterable[str], is_mode: bool = False) -> dict:
        """Calculate aggregate synergy for a team."""
        team = list(team_ids)
        total = 0.0
        active = []
        for synergy in self._synergies(is_mode):
            score = self.score_synergy(synergy, team)
            if score:
                total += score
                active.append({"name": synergy.name, "score": score})
        active.sort(key=lambda x: -x["score"])
        return {"total_score": total, "synergies": active}

    def synergy_for_operator(self, team_ids: Iterable[str], operator_id: str, is_mode: bool = True) -> float:
        """Bonus an operator earns by joining a team.

        team_ids should already include the operator.
        """
        team = set(team_ids)
        team.add(operator_id)
        total = 0.0
        for synergy in self._synergies(is_mode):
            in_core = any(operator_id in ids for ids in synergy.core.values())
            in_optional = not in_core and any(operator_id in ids for ids in synergy.optional.values())
            if not in_core and not in_optional:
                continue

            core_satisfied = self._core_satisfied(synergy, team)
            if in_core:
                if synergy.core_count_separately or core_satisfied:
                    total += synergy.core_point_bonus
                continue

            if not core_satisfied:
                continue
            if self._optional_count(synergy, team) < synergy.optional_count_minimum:
                continue
            if synergy.optional_count_separately:
                total += synergy.optional_point_bonus
                continue
            # Only the first operator of an optional group earns the group bonus
            for ids in synergy.optional.values():
                if operator_id in ids:
                    if not any(op_id != operator_id and op_id in team for op_id in ids):
                        total += synergy.optional_point_bonus
                    break
        return total
