"""Team building preferences and results."""

from dataclasses import asdict, dataclass, field
from typing import Optional

DEFAULT_RARITY_RANKING = [6, 4, 5, 3, 2, 1]

# Hope cost per rarity (6-star costs 6 hope, 5-star 3, the rest are free)
DEFAULT_HOPE_COSTS = {6: 6, 5: 3, 4: 0, 3: 0, 2: 0, 1: 0}


@dataclass
class NicheRange:
    """Inclusive [min, max] quota for a niche."""

    min: int
    max: int

    @classmethod
    def from_value(cls, niche: str, value) -> "NicheRange":
        """Parse {"min": x, "max": y}; raises ValueError on malformed input."""
        if not isinstance(value, dict):
            raise ValueError(f"Range for niche '{niche}' must be an object with min/max")
        try:
            low = int(value["min"])
            high = int(value["max"])
        except (KeyError, TypeError, ValueError):
            raise ValueError(f"Range for niche '{niche}' needs numeric min and max")
        if low < 0 or high < low:
            raise ValueError(f"Invalid range for niche '{niche}': {low}-{high}")
        return cls(min=low, max=high)


@dataclass
class TeamPreferences:
    """Niche quotas and ranking knobs for the team builder."""

    required_niches: dict[str, NicheRange] = field(default_factory=dict)
    preferred_niches: dict[str, NicheRange] = field(default_factory=dict)
    rarity_ranking: list[int] = field(default_factory=lambda: list(DEFAULT_RARITY_RANKING))
    allow_duplicates: bool = False
    hope_costs: dict[int, int] = field(default_factory=lambda: dict(DEFAULT_HOPE_COSTS))

    @classmethod
    def from_dict(cls, data: dict) -> "TeamPreferences":
        """Parse the camelCase JSON shape used by the site."""
        if not isinstance(data, dict):
            raise ValueError("Preferences must be an object")

        def parse_ranges(key: str) -> dict[str, NicheRange]:
            raw = data.get(key) or {}
            if not isinstance(raw, dict):
                raise ValueError(f"{key} must be an object")
            return {niche: NicheRange.from_value(niche, value) for niche, value in raw.items()}

        rarity_ranking = data.get("rarityRanking") or list(DEFAULT_RARITY_RANKING)
        try:
            rarity_ranking = [int(r) for r in rarity_ranking]
        except (TypeError, ValueError):
            raise ValueError("rarityRanking must be a list of integers")

        raw_hope_costs = data.get("hopeCosts") or {}
        if not isinstance(raw_hope_costs, dict):
            raise ValueError("hopeCosts must be an object")
        hope_costs = dict(DEFAULT_HOPE_COSTS)
        for rarity, cost in raw_hope_costs.items():
            try:
                hope_costs[int(rarity)] = int(cost)
            except (TypeError, ValueError):
                raise ValueError("hopeCosts must map rarities to integers")

        return cls(
            required_niches=parse_ranges("requiredNiches"),
            preferred_niches=parse_ranges("preferredNiches"),
            rarity_ranking=rarity_ranking,
            allow_duplicates=bool(data.get("allowDuplicates", False)),
            hope_costs=hope_costs,
        )

    def to_dict(self) -> dict:
        return {
            "requiredNiches": {n: asdict(r) for n, r in self.required_niches.items()},
            "preferredNiches": {n: asdict(r) for n, r in self.preferred_niches.items()},
            "rarityRanking": list(self.rarity_ranking),
            "allowDuplicates": self.allow_duplicates,
            "hopeCosts": {str(r): c for r, c in self.hope_costs.items()},
        }

    def hope_cost(self, rarity: int) -> int:
        return self.hope_costs.get(rarity, DEFAULT_HOPE_COSTS.get(rarity, 0))


def default_preferences() -> TeamPreferences:
    """Built-in defaults used when no universal preferences file exists."""
    return TeamPreferences(
        required_niches={
            "dp-generation": NicheRange(1, 2),
            "late-laneholder": NicheRange(2, 2),
            "healing-operators": NicheRange(2, 2),
            "arts-dps": NicheRange(3, 4),
            "physical-dps": NicheRange(3, 4),
        },
        preferred_niches={
            "elemental-damage": NicheRange(1, 1),
            "early-laneholder": NicheRange(1, 1),
            "boss-killing": NicheRange(1, 1),
            "tanking-blocking-operators": NicheRange(1, 2),
            "stalling": NicheRange(0, 1),
            "anti-air-operators": NicheRange(0, 1),
        },
    )


@dataclass
class TeamMember:
    """An operator placed on the team."""

    operator_id: str
    niches: list[str] = field(default_factory=list)
    primary_niche: Optional[str] = None  # Niche this operator was picked to fill
    is_trash: bool = False


@dataclass
class TeamResult:
    """Output of a team build. Team order is significant."""

    team: list[TeamMember] = field(default_factory=list)
    coverage: dict[str, int] = field(default_factory=dict)
    missing_niches: list[str] = field(default_factory=list)
    missing_details: list[str] = field(default_factory=list)  # "code (count/min-max)"
    score: float = 0.0
    empty_slots: int = 0
    synergy_bonus: float = 0.0

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON response."""
        return {
            "team": [asdict(member) for member in self.team],
            "coverage": dict(self.coverage),
            "missing_niches": list(self.missing_niches),
            "missing_details": list(self.missing_details),
            "score": self.score,
            "empty_slots": self.empty_slots,
            "synergy_bonus": self.synergy_bonus,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TeamResult":
        return cls(
            team=[TeamMember(**member) for member in data.get("team", [])],
            coverage=dict(data.get("coverage", {})),
            missing_niches=list(data.get("missing_niches", [])),
            missing_details=list(data.get("missing_details", [])),
            score=data.get("score", 0.0),
            empty_slots=data.get("empty_slots", 0),
            synergy_bonus=data.get("synergy_bonus", 0.0),
        )

    @property
    def operator_ids(self) -> list[str]:
        return [member.operator_id for member in self.team]
