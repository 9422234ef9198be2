"""Helpers for "peak" evaluations: module > E2 > base, then best rating.

Used to show each operator (or each niche) once, at its best level.
"""
import math
from typing import Callable, Hashable, Iterable, Optional, TypeVar

from ark_roster.models.operator import RATING_ORDER

T = TypeVar("T")

RATING_RANK: dict[str, int] = {rating: i for i, rating in enumerate(RATING_ORDER)}


def level_rank(level: Optional[str]) -> int:
    """Higher is better: base 0, E2 1, module 2."""
    if not level or not level.strip():
        return 0
    if level == "E2":
        return 1
    return 2


def tier_rank(tier: Optional[str]) -> float:
    """Lower is better; unknown tiers rank after every known one."""
    if tier is None:
        return math.inf
    return RATING_RANK.get(tier, math.inf)


def _field(evaluation, *names: str) -> Optional[str]:
    for name in names:
        if isinstance(evaluation, dict):
            if name in evaluation:
                return evaluation[name]
        elif hasattr(evaluation, name):
            return getattr(evaluation, name)
    return None


def peak_key(evaluation) -> tuple[int, float]:
    """Sort key where larger is better."""
    tier = _field(evaluation, "tier", "rating")
    level = _field(evaluation, "level")
    return level_rank(level), -tier_rank(tier)


def peak_of(evaluations: Iterable[T]) -> Optional[T]:
    """Reduce evaluations of one operator in one scope to the peak one.

    Highest level rank wins, then the better tier. Exact ties keep the first
    evaluation seen.
    """
    best: Optional[T] = None
    best_key: Optional[tuple[int, float]] = None
    for evaluation in evaluations:
        key = peak_key(evaluation)
        if best_key is None or key > best_key:
            best = evaluation
            best_key = key
    return best


def keep_peak_per(entries: Iterable[T], key: Callable[[T], Hashable]) -> list[T]:
    """Keep the peak entry per group, groups in first-seen order."""
    groups: dict[Hashable, list[T]] = {}
    for entry in entries:
        groups.setdefault(key(entry), []).append(entry)
    return [peak_of(group) for group in groups.values()]
