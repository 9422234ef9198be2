"""Recommendation models for Integrated Strategies."""

from dataclasses import asdict, dataclass, field
from typing import Optional


@dataclass
class SquadPreset:
    """Hope costs and auto-promotion for one squad of an IS title."""

    recruit_costs: dict[str, dict[str, int]] = field(default_factory=dict)  # rarity -> class -> hope
    promotion_costs: dict[str, dict[str, int]] = field(default_factory=dict)  # rarity -> class -> hope
    auto_promote_classes: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict | None) -> "SquadPreset":
        """Parse {"4": {...}, "5": {...}, "6": {...}, "promotionCost": {...}, "autoPromoteClasses": [...]}."""
        if not isinstance(data, dict):
            return cls()

        def parse_costs(raw) -> dict[str, dict[str, int]]:
            costs: dict[str, dict[str, int]] = {}
            if not isinstance(raw, dict):
                return costs
            for rarity, by_class in raw.items():
                if not isinstance(by_class, dict):
                    continue
                costs[str(rarity)] = {
                    cls_name: value
                    for cls_name, value in by_class.items()
                    if isinstance(value, (int, float))
                }
            return costs

        recruit = parse_costs({r: data[r] for r in ("1", "2", "3", "4", "5", "6") if r in data})
        auto = data.get("autoPromoteClasses") or []
        return cls(
            recruit_costs=recruit,
            promotion_costs=parse_costs(data.get("promotionCost")),
            auto_promote_classes=[c for c in auto if isinstance(c, str)],
        )

    def six_star_hope_cost(self, operator_class: str) -> float:
        """Recruit hope for a 6-star of this class (6 when unconfigured)."""
        return self.recruit_costs.get("6", {}).get(operator_class, 6)

    def is_auto_promoted(self, operator_class: str) -> bool:
        return operator_class in self.auto_promote_classes

    def to_dict(self) -> dict:
        data: dict = {rarity: dict(by_class) for rarity, by_class in self.recruit_costs.items()}
        data["promotionCost"] = {r: dict(c) for r, c in self.promotion_costs.items()}
        data["autoPromoteClasses"] = list(self.auto_promote_classes)
        return data


@dataclass
class SquadRecommendation:
    """Best-fit squad preset for a user's roster."""

    preset_id: str
    reason: str
    score: float = 0.0


@dataclass
class SquadRecommendationResult:
    """Per-class strengths plus the recommended preset (if any)."""

    class_strengths: dict[str, float] = field(default_factory=dict)
    recommended: Optional[SquadRecommendation] = None

    def to_dict(self) -> dict:
        return {
            "class_strengths": dict(self.class_strengths),
            "recommended": asdict(self.recommended) if self.recommended else None,
        }


@dataclass
class NextPickRecommendation:
    """Single next-operator suggestion for an IS run."""

    operator_id: Optional[str]
    reasoning: str
    score: float = 0.0
    breakdown: list[str] = field(default_factory=list)  # One line per scoring component

    def to_dict(self) -> dict:
        return asdict(self)
