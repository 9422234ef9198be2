"""Synergy definitions."""

from dataclasses import dataclass, field


def _entry_operator_id(entry) -> str:
    # Entries are either a bare id or an [id, level] pair
    if isinstance(entry, str):
        return entry
    if isinstance(entry, (list, tuple)) and entry:
        return str(entry[0])
    return ""


def _parse_groups(raw) -> dict[str, list[str]]:
    groups: dict[str, list[str]] = {}
    if not isinstance(raw, dict):
        return groups
    for group, entries in raw.items():
        ids = [_entry_operator_id(e) for e in (entries or [])]
        groups[group] = [i for i in ids if i]
    return groups


@dataclass
class Synergy:
    """A group of operators that score extra when fielded together."""

    name: str
    description: str = ""
    core: dict[str, list[str]] = field(default_factory=dict)  # group -> operator ids
    optional: dict[str, list[str]] = field(default_factory=dict)
    core_point_bonus: float = 0
    optional_point_bonus: float = 0
    is_only: bool = False  # Only valid in Integrated Strategies
    core_count_separately: bool = False
    optional_count_separately: bool = False
    optional_count_minimum: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "Synergy":
        return cls(
            name=data.get("name", ""),
            description=data.get("description", ""),
            core=_parse_groups(data.get("core")),
            optional=_parse_groups(data.get("optional")),
            core_point_bonus=data.get("corePointBonus", 0) or 0,
            optional_point_bonus=data.get("optionalPointBonus", 0) or 0,
            is_only=bool(data.get("isOnly", False)),
            core_count_separately=bool(data.get("coreCountSeparately", False)),
            optional_count_separately=bool(data.get("optionalCountSeparately", False)),
            optional_count_minimum=int(data.get("optionalCountMinimum", 0) or 0),
        )

    def applies_to(self, is_mode: bool) -> bool:
        """IS-only synergies apply to IS, the rest to normal team building."""
        return self.is_only == is_mode
