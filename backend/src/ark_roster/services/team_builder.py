"""Greedy 12-slot team builder for normal (non-IS) play."""
import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ark_roster.models.team import NicheRange, TeamMember, TeamPreferences, TeamResult
from ark_roster.repositories.static_data_repository import DataSnapshot
from ark_roster.services.niche_resolver import NicheResolver
from ark_roster.services.synergy_service import SynergyService
from ark_roster.utils.niche_normalizer import (
    SCORING_EXCLUDED_NICHES,
    TEAMBUILD_EXCLUDED_NICHES,
    normalize_niche,
)

logger = logging.getLogger(__name__)

TEAM_SIZE = 12

# Marginal value of one more operator in a niche, and the penalty per unit over max
REQUIRED_NICHE_VALUE = 100
REQUIRED_OVERSHOOT_PENALTY = 50
PREFERRED_NICHE_VALUE = 50
PREFERRED_OVERSHOOT_PENALTY = 25

WANT_TO_USE_BONUS = 50
TRASH_PENALTY = 1000


def niche_value(new_count: int, niche_range: NicheRange, full_value: float, overshoot_penalty: float) -> float:
    """Value of bringing a niche to new_count.

    Full value while still below min, linear decay from full at min down to
    0 at max, then a penalty per unit over max.
    """
    if new_count < niche_range.min:
        return full_value
    if new_count <= niche_range.max:
        if niche_range.max == niche_range.min:
            return full_value
        progress = (new_count - niche_range.min) / (niche_range.max - niche_range.min)
        return full_value * (1 - progress)
    return -overshoot_penalty * (new_count - niche_range.max)


def rarity_bonus(rarity: int, rarity_ranking: list[int]) -> int:
    if rarity not in rarity_ranking:
        return 0
    return max(0, 60 - 10 * rarity_ranking.index(rarity))


def coverage_count(coverage: dict[str, int], niche: str) -> int:
    if niche in coverage:
        return coverage[niche]
    return coverage.get(normalize_niche(niche), 0)


def score_candidate(
    niches: Iterable[str],
    coverage: dict[str, int],
    preferences: TeamPreferences,
    rarity: int,
    want_to_use: bool = False,
    is_trash: bool = False,
) -> float:
    """Score one candidate against the team built so far."""
    score = 0.0
    scored: set[str] = set()
    for niche in niches:
        if niche in SCORING_EXCLUDED_NICHES:
            continue
        normalized = normalize_niche(niche)
        if normalized in scored:
            continue
        scored.add(normalized)

        new_count = coverage_count(coverage, normalized) + 1
        required = preferences.required_niches.get(niche) or preferences.required_niches.get(normalized)
        preferred = preferences.preferred_niches.get(niche) or preferences.preferred_niches.get(normalized)
        if required:
            score += niche_value(new_count, required, REQUIRED_NICHE_VALUE, REQUIRED_OVERSHOOT_PENALTY)
        elif preferred:
            score += niche_value(new_count, preferred, PREFERRED_NICHE_VALUE, PREFERRED_OVERSHOOT_PENALTY)

    score += rarity_bonus(rarity, preferences.rarity_ranking)
    if want_to_use:
        score += WANT_TO_USE_BONUS
    if is_trash:
        score -= TRASH_PENALTY
    return score


@dataclass
class BuildState:
    """Mutable state of one team build."""

    preferences: TeamPreferences
    pool: list[str]  # Candidate ids in pool order
    candidate_niches: dict[str, list[str]]
    want_to_use: set[str] = field(default_factory=set)
    team: list[TeamMember] = field(default_factory=list)
    used: set[str] = field(default_factory=set)
    coverage: dict[str, int] = field(default_factory=dict)

    @property
    def is_full(self) -> bool:
        return len(self.team) >= TEAM_SIZE

    def count(self, niche: str) -> int:
        # Quotas on an AOE code are filled by any operator of its DPS niche
        return coverage_count(self.coverage, normalize_niche(niche))

    def available(self) -> list[str]:
        return [op_id for op_id in self.pool if op_id not in self.used]

    def add(self, member: TeamMember) -> None:
        self.team.append(member)
        self.used.add(member.operator_id)
        for niche in member.niches:
            self.coverage[niche] = self.coverage.get(niche, 0) + 1


@dataclass
class FillPass:
    """One greedy pass: top up every niche of a quota map to its min or max."""

    name: str
    source: str  # "required" or "preferred"
    bound: str  # "min" or "max"

    def quotas(self, preferences: TeamPreferences) -> dict[str, NicheRange]:
        quotas = preferences.required_niches if self.source == "required" else preferences.preferred_niches
        return {n: r for n, r in quotas.items() if n not in TEAMBUILD_EXCLUDED_NICHES}

    def target(self, niche_range: NicheRange) -> int:
        return niche_range.min if self.bound == "min" else niche_range.max

    def is_under_quota(self, state: BuildState, niche: str, niche_range: NicheRange) -> bool:
        return state.count(niche) < self.target(niche_range)

    def run(self, builder: "TeamBuilder", state: BuildState) -> None:
        for niche, niche_range in self.quotas(state.preferences).items():
            while not state.is_full and self.is_under_quota(state, niche, niche_range):
                member = builder.pick_for_niche(state, niche)
                if member is None:
                    break
                state.add(member)


FILL_PASSES = [
    FillPass("required-min", "required", "min"),
    FillPass("required-max", "required", "max"),
    FillPass("preferred-min", "preferred", "min"),
    FillPass("preferred-max", "preferred", "max"),
]


class TeamBuilder:
    """Builds a 12-operator team from an owned roster.

    Passes run in order: required niches to min, required niches to max,
    preferred niches to min, preferred niches to max, then filler. Trash
    operators are only picked when no other candidate is left for the slot.
    """

    def __init__(
        self,
        snapshot: DataSnapshot,
        resolver: Optional[NicheResolver] = None,
        synergy_service: Optional[SynergyService] = None,
    ):
        self.snapshot = snapshot
        self.resolver = resolver or NicheResolver(snapshot)
        self.synergy_service = synergy_service or SynergyService(snapshot)
        self.passes = list(FILL_PASSES)

    def _candidate_pool(self, owned_ids: Iterable[str]) -> list[str]:
        pool: list[str] = []
        seen: set[str] = set()
        for op_id in owned_ids:
            if op_id in seen:
                continue
            seen.add(op_id)
            if self.snapshot.get_operator(op_id) is None:
                logger.debug(f"Skipping unknown operator id: {op_id}")
                continue
            pool.append(op_id)
        return pool

    def new_state(
        self,
        owned_ids: Iterable[str],
        want_to_use_ids: Iterable[str],
        preferences: TeamPreferences,
    ) -> BuildState:
        pool = self._candidate_pool(owned_ids)
        return BuildState(
            preferences=preferences,
            pool=pool,
            candidate_niches={op_id: self.resolver.team_niches(op_id) for op_id in pool},
            want_to_use=set(want_to_use_ids),
        )

    def _score(self, state: BuildState, op_id: str) -> float:
        return score_candidate(
            state.candidate_niches[op_id],
            state.coverage,
            state.preferences,
            self.snapshot.get_operator(op_id).rarity,
            want_to_use=op_id in state.want_to_use,
            is_trash=self.snapshot.is_trash(op_id),
        )

    def _best_of(self, state: BuildState, candidates: list[str]) -> Optional[str]:
        """Highest score wins. Non-trash first, ties keep pool order."""
        for group in (
            [c for c in candidates if not self.snapshot.is_trash(c)],
            [c for c in candidates if self.snapshot.is_trash(c)],
        ):
            best_id = None
            best_score = float("-inf")
            for op_id in group:
                score = self._score(state, op_id)
                if score > best_score:
                    best_id, best_score = op_id, score
            if best_id is not None:
                return best_id
        return None

    def _member(self, state: BuildState, op_id: str, primary_niche: Optional[str]) -> TeamMember:
        return TeamMember(
            operator_id=op_id,
            niches=list(state.candidate_niches[op_id]),
            primary_niche=primary_niche,
            is_trash=self.snapshot.is_trash(op_id),
        )

    def pick_for_niche(self, state: BuildState, niche: str) -> Optional[TeamMember]:
        normalized = normalize_niche(niche)
        candidates = [
            op_id
            for op_id in state.available()
            if niche in state.candidate_niches[op_id] or normalized in state.candidate_niches[op_id]
        ]
        best = self._best_of(state, candidates)
        return self._member(state, best, niche) if best else None

    def pick_filler(self, state: BuildState) -> Optional[TeamMember]:
        best = self._best_of(state, state.available())
        return self._member(state, best, None) if best else None

    def all_quotas_at_max(self, state: BuildState) -> bool:
        quotas = list(FILL_PASSES[1].quotas(state.preferences).items())
        quotas += list(FILL_PASSES[3].quotas(state.preferences).items())
        return all(state.count(niche) >= niche_range.max for niche, niche_range in quotas)

    def fill_remaining(self, state: BuildState) -> int:
        """Pad with the best remaining operators. Returns the slots left empty on purpose."""
        if self.all_quotas_at_max(state):
            return max(0, TEAM_SIZE - len(state.team))
        while not state.is_full:
            member = self.pick_filler(state)
            if member is None:
                break
            state.add(member)
        return 0

    def place_locked(self, state: BuildState, locked_ids: Iterable[str]) -> None:
        for op_id in locked_ids:
            if state.is_full:
                break
            if op_id in state.used or op_id not in state.candidate_niches:
                continue
            state.add(self._member(state, op_id, None))

    def build_team(
        self,
        owned_ids: Iterable[str],
        want_to_use_ids: Iterable[str] = (),
        preferences: Optional[TeamPreferences] = None,
        locked_ids: Iterable[str] = (),
    ) -> TeamResult:
        """Build a team from owned operators.

        Args:
            owned_ids: Operators the user owns, in roster order
            want_to_use_ids: Operators that get a flat score boost
            preferences: Niche quotas; the snapshot's defaults when omitted
            locked_ids: Owned operators always placed first, in the given order
        """
        preferences = preferences or self.snapshot.default_preferences
        state = self.new_state(owned_ids, want_to_use_ids, preferences)
        locked_ids = list(locked_ids)

        if not state.pool:
            return TeamResult(
                missing_niches=[n for n in preferences.required_niches if n not in TEAMBUILD_EXCLUDED_NICHES],
                missing_details=[
                    f"{n} (0/{r.min}-{r.max})"
                    for n, r in preferences.required_niches.items()
                    if n not in TEAMBUILD_EXCLUDED_NICHES
                ],
            )

        self.place_locked(state, locked_ids)
        for fill_pass in self.passes:
            if state.is_full:
                break
            fill_pass.run(self, state)
        empty_slots = self.fill_remaining(state)

        missing_niches, missing_details = self.missing(state)
        synergy = self.synergy_service.calculate_team_synergy(
            [m.operator_id for m in state.team], is_mode=False
        )
        logger.debug(f"Built team of {len(state.team)} from pool of {len(state.pool)}")
        return TeamResult(
            team=state.team,
            coverage=dict(state.coverage),
            missing_niches=missing_niches,
            missing_details=missing_details,
            score=self.team_score(state),
            empty_slots=empty_slots,
            synergy_bonus=synergy["total_score"],
        )

    def missing(self, state: BuildState) -> tuple[list[str], list[str]]:
        codes: list[str] = []
        details: list[str] = []
        for niche, niche_range in state.preferences.required_niches.items():
            if niche in TEAMBUILD_EXCLUDED_NICHES:
                continue
            count = state.count(niche)
            if count < niche_range.min:
                codes.append(niche)
                details.append(f"{niche} ({count}/{niche_range.min}-{niche_range.max})")
        return codes, details

    def team_score(self, state: BuildState) -> float:
        """Aggregate quality of a finished team."""
        score = 0.0
        for niche, niche_range in state.preferences.required_niches.items():
            if niche in TEAMBUILD_EXCLUDED_NICHES:
                continue
            count = state.count(niche)
            if count >= niche_range.min:
                score += 100
                if count <= niche_range.max:
                    score += 20
            else:
                score += (count / niche_range.min) * 100

        for niche, niche_range in state.preferences.preferred_niches.items():
            if niche in TEAMBUILD_EXCLUDED_NICHES:
                continue
            count = state.count(niche)
            if count <= 0:
                continue
            if niche_range.min <= count <= niche_range.max:
                score += 50
            elif count < niche_range.min:
                score += (count / niche_range.min) * 50
            else:
                score += 30

        score += len(state.team) * 10
        return score
