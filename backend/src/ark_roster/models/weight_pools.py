"""Niche weight pool configuration for Integrated Strategies scoring."""

from dataclasses import dataclass, field


@dataclass
class WeightPool:
    """A bucket of niches sharing one raw score."""

    raw_score: float
    niches: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict | None, default_score: float) -> "WeightPool":
        if not isinstance(data, dict):
            return cls(raw_score=default_score)
        raw_score = data.get("rawScore", default_score)
        try:
            raw_score = float(raw_score)
        except (TypeError, ValueError):
            raw_score = default_score
        return cls(raw_score=raw_score, niches=list(data.get("niches") or []))


@dataclass
class WeightPoolConfig:
    """Important / optional / good pools plus synergy tuning constants."""

    important: WeightPool = field(default_factory=lambda: WeightPool(5))
    optional: WeightPool = field(default_factory=lambda: WeightPool(2))
    good: WeightPool = field(default_factory=lambda: WeightPool(0.5))
    synergy_core_bonus: float = 15
    synergy_scale_factor: float = 1

    @classmethod
    def from_dict(cls, data: dict | None) -> "WeightPoolConfig":
        data = data or {}
        return cls(
            important=WeightPool.from_dict(data.get("important"), 5),
            optional=WeightPool.from_dict(data.get("optional"), 2),
            good=WeightPool.from_dict(data.get("good"), 0.5),
            synergy_core_bonus=data.get("synergyCoreBonus", 15),
            synergy_scale_factor=data.get("synergyScaleFactor", 1),
        )

    def raw_score_for(self, niche: str) -> float:
        """Raw score for a niche; niches outside every pool use the good pool."""
        if niche in self.important.niches:
            return self.important.raw_score
        if niche in self.optional.niches:
            return self.optional.raw_score
        return self.good.raw_score

    def scored_niches(self) -> list[str]:
        """All niches named by any pool, first occurrence wins."""
        seen: dict[str, None] = {}
        for pool in (self.important, self.optional, self.good):
            for niche in pool.niches:
                seen.setdefault(niche, None)
        return list(seen)

    def to_dict(self) -> dict:
        return {
            "important": {"rawScore": self.important.raw_score, "niches": list(self.important.niches)},
            "optional": {"rawScore": self.optional.raw_score, "niches": list(self.optional.niches)},
            "good": {"rawScore": self.good.raw_score, "niches": list(self.good.niches)},
            "synergyCoreBonus": self.synergy_core_bonus,
            "synergyScaleFactor": self.synergy_scale_factor,
        }
