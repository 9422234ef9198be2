"""Operator and niche list models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Rating(str, Enum):
    """Tier rating of an operator inside a niche (SS best, F worst)."""

    SS = "SS"
    S = "S"
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


RATING_ORDER = [r.value for r in Rating]

# Numeric tier used by scoring (higher = better)
TIER_VALUES: dict[str, int] = {
    "SS": 100,
    "S": 90,
    "A": 80,
    "B": 70,
    "C": 60,
    "D": 50,
    "F": 40,
}

OPERATOR_CLASSES = [
    "Vanguard",
    "Guard",
    "Defender",
    "Sniper",
    "Caster",
    "Medic",
    "Supporter",
    "Specialist",
]


@dataclass
class Operator:
    """Static operator record."""

    id: str
    name: str
    rarity: int  # 1-6
    operator_class: str  # One of OPERATOR_CLASSES
    global_release: bool = True
    profile_image: str = ""
    names: dict[str, str] = field(default_factory=dict)  # cn/tw/jp/kr -> localized name

    @classmethod
    def from_dict(cls, operator_id: str, data: dict, rarity: Optional[int] = None) -> "Operator":
        """Build from an operators-{n}star.json record."""
        names = {}
        for lang in ("cn", "tw", "jp", "kr"):
            value = data.get(f"{lang}Name")
            if isinstance(value, str) and value.strip():
                names[lang] = value
        return cls(
            id=data.get("id") or operator_id,
            name=data.get("name") or operator_id,
            rarity=int(data.get("rarity") or rarity or 0),
            operator_class=data.get("class", ""),
            global_release=data.get("global", True),
            profile_image=data.get("profileImage", ""),
            names=names,
        )

    def display_name(self, lang: str = "en") -> str:
        """Localized name with the site's fallback chain."""
        if lang == "tw":
            return self.names.get("tw") or self.names.get("cn") or self.name
        if lang in ("cn", "jp", "kr"):
            return self.names.get(lang) or self.name
        return self.name

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "rarity": self.rarity,
            "class": self.operator_class,
            "global": self.global_release,
            "profileImage": self.profile_image,
            **{f"{lang}Name": name for lang, name in self.names.items()},
        }


@dataclass
class NicheEntry:
    """One tier evaluation of an operator inside a niche.

    level is "" when the operator always qualifies, "E2" when it needs
    Elite 2, otherwise the code of the required module.
    """

    operator_id: str
    rating: str
    note: str = ""
    level: str = ""

    @classmethod
    def from_raw(cls, operator_id: str, rating: str, raw) -> "NicheEntry":
        """Normalize a stored entry (bare note string or [note, level] pair)."""
        if isinstance(raw, (list, tuple)):
            note = raw[0] if len(raw) >= 1 and raw[0] else ""
            level = raw[1] if len(raw) >= 2 and raw[1] else ""
            return cls(operator_id=operator_id, rating=rating, note=str(note), level=str(level))
        if raw is None:
            return cls(operator_id=operator_id, rating=rating)
        return cls(operator_id=operator_id, rating=rating, note=str(raw))

    def to_dict(self) -> dict:
        return {
            "operatorId": self.operator_id,
            "rating": self.rating,
            "note": self.note,
            "level": self.level,
        }


@dataclass
class NicheList:
    """A niche (role tag) with its rated operator entries."""

    code: str  # Filename stem, e.g. "healing-operators"
    display_name: str
    description: str = ""
    entries: list[NicheEntry] = field(default_factory=list)
    related_niches: list[str] = field(default_factory=list)
    last_updated: str = ""

    @classmethod
    def from_dict(cls, code: str, data: dict) -> "NicheList":
        """Parse a niche-lists/*.json document.

        Tiered documents map rating -> {operator_id: entry}. Flat documents
        map operator_id -> note directly and carry no rating.
        """
        entries: list[NicheEntry] = []
        operators = data.get("operators") or {}
        for key, value in operators.items():
            if key in TIER_VALUES and isinstance(value, dict):
                for operator_id, raw in value.items():
                    entries.append(NicheEntry.from_raw(operator_id, key, raw))
            else:
                entries.append(NicheEntry.from_raw(key, "", value))
        return cls(
            code=code,
            display_name=data.get("niche") or code,
            description=data.get("description", ""),
            entries=entries,
            related_niches=list(data.get("relatedNiches") or []),
            last_updated=data.get("lastUpdated", ""),
        )

    def operator_ids(self) -> set[str]:
        return {entry.operator_id for entry in self.entries}

    def entries_for(self, operator_id: str) -> list[NicheEntry]:
        return [entry for entry in self.entries if entry.operator_id == operator_id]

    def summary(self) -> dict:
        return {
            "code": self.code,
            "niche": self.display_name,
            "description": self.description,
            "lastUpdated": self.last_updated,
        }
