"""Per-user hope cost overrides, stored as deltas from the server defaults."""
import copy
import logging
from dataclasses import dataclass

from ark_roster.models.operator import OPERATOR_CLASSES

logger = logging.getLogger(__name__)

EDITABLE_RARITIES = ("4", "5", "6")
DEFAULT_RECRUIT_HOPE = {"4": 0, "5": 3, "6": 6}
DEFAULT_PROMOTION_HOPE = 3


def _parse_flag(value, default: bool) -> bool:
    """Booleans as stored by the site; string forms come from form posts."""
    if value is None:
        return default
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no", ""):
            return False
        raise ValueError(f"Expected a boolean, got {value!r}")
    return bool(value)


def _parse_hope(value) -> float:
    if value is None or value == "":
        return 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            raise ValueError(f"hopeedit must be a number, got {value!r}")
        return int(number) if number.is_integer() else number
    raise ValueError(f"hopeedit must be a number, got {value!r}")


@dataclass
class HopeCostEdit:
    """One user override.

    When autopromote is set the edit only marks the class as auto-promoted
    and hope_edit is ignored. Otherwise hope_edit is a delta applied to the
    recruit cost (is_recruit) or the promotion cost.
    """

    is_id: str
    squad_id: str
    rarity: str
    operator_class: str
    is_recruit: bool = True
    hope_edit: int = 0
    autopromote: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "HopeCostEdit":
        """Parse a stored edit; raises ValueError on non-numeric or non-boolean fields."""
        return cls(
            is_id=data.get("IS", ""),
            squad_id=data.get("Squad", ""),
            rarity=str(data.get("rarity", "")),
            operator_class=data.get("class", ""),
            is_recruit=_parse_flag(data.get("isrecruit"), True),
            hope_edit=_parse_hope(data.get("hopeedit")),
            autopromote=_parse_flag(data.get("autopromote"), False),
        )

    def to_dict(self) -> dict:
        return {
            "IS": self.is_id,
            "Squad": self.squad_id,
            "rarity": self.rarity,
            "class": self.operator_class,
            "isrecruit": self.is_recruit,
            "hopeedit": self.hope_edit,
            "autopromote": self.autopromote,
        }


def _squad_entry(defaults: dict | None, is_id: str, squad_id: str) -> dict:
    squads = (defaults or {}).get(is_id)
    entry = squads.get(squad_id) if isinstance(squads, dict) else None
    return entry if isinstance(entry, dict) else {}


def default_recruit_hope(defaults: dict | None, is_id: str, squad_id: str, rarity: str, operator_class: str) -> float:
    by_class = _squad_entry(defaults, is_id, squad_id).get(rarity)
    if isinstance(by_class, dict) and isinstance(by_class.get(operator_class), (int, float)):
        return by_class[operator_class]
    return DEFAULT_RECRUIT_HOPE.get(rarity, 0)


def default_promotion_hope(defaults: dict | None, is_id: str, squad_id: str, rarity: str, operator_class: str) -> float:
    promotion = _squad_entry(defaults, is_id, squad_id).get("promotionCost") or {}
    by_class = promotion.get(rarity)
    if isinstance(by_class, dict) and isinstance(by_class.get(operator_class), (int, float)):
        return by_class[operator_class]
    return DEFAULT_PROMOTION_HOPE


def _ensure_squad_entry(config: dict, is_id: str, squad_id: str) -> dict:
    squads = config.setdefault(is_id, {})
    entry = squads.get(squad_id)
    if not isinstance(entry, dict):
        entry = squads[squad_id] = {}
    for rarity in EDITABLE_RARITIES:
        if not isinstance(entry.get(rarity), dict):
            entry[rarity] = {}
    if not isinstance(entry.get("promotionCost"), dict):
        entry["promotionCost"] = {}
    for rarity in EDITABLE_RARITIES:
        if not isinstance(entry["promotionCost"].get(rarity), dict):
            entry["promotionCost"][rarity] = {}
    if not isinstance(entry.get("autoPromoteClasses"), list):
        entry["autoPromoteClasses"] = []
    return entry


def apply_edits_to_hope_costs(defaults: dict | None, edits: list) -> dict:
    """Merge edits into a deep copy of the default IS -> squad -> preset config.

    Edits that cannot be applied are skipped.
    """
    result = copy.deepcopy(defaults) if defaults else {}
    for edit in edits:
        if isinstance(edit, dict):
            try:
                edit = HopeCostEdit.from_dict(edit)
            except ValueError as e:
                logger.debug(f"Skipping malformed hope cost edit: {e}")
                continue
        if not edit.is_id or not edit.squad_id:
            continue
        if isinstance(edit.hope_edit, bool) or not isinstance(edit.hope_edit, (int, float)):
            logger.debug(f"Skipping hope cost edit with non-numeric delta: {edit.hope_edit!r}")
            continue
        entry = _ensure_squad_entry(result, edit.is_id, edit.squad_id)
        if edit.autopromote:
            if edit.operator_class not in entry["autoPromoteClasses"]:
                entry["autoPromoteClasses"].append(edit.operator_class)
            continue
        if edit.is_recruit:
            base = default_recruit_hope(defaults, edit.is_id, edit.squad_id, edit.rarity, edit.operator_class)
            entry.setdefault(edit.rarity, {})[edit.operator_class] = base + edit.hope_edit
        else:
            base = default_promotion_hope(defaults, edit.is_id, edit.squad_id, edit.rarity, edit.operator_class)
            entry["promotionCost"].setdefault(edit.rarity, {})[edit.operator_class] = base + edit.hope_edit
    return result


def full_config_to_edits(defaults: dict | None, full_config: dict | None) -> list[HopeCostEdit]:
    """Diff a full merged config against the defaults."""
    edits: list[HopeCostEdit] = []
    if not isinstance(full_config, dict):
        return edits

    for is_id, squads in full_config.items():
        if not isinstance(squads, dict):
            continue
        for squad_id, entry in squads.items():
            if not isinstance(entry, dict):
                continue
            promotion = entry.get("promotionCost") if isinstance(entry.get("promotionCost"), dict) else {}
            for rarity in EDITABLE_RARITIES:
                recruit_by_class = entry.get(rarity) if isinstance(entry.get(rarity), dict) else {}
                promotion_by_class = promotion.get(rarity) if isinstance(promotion.get(rarity), dict) else {}
                for operator_class in OPERATOR_CLASSES:
                    value = recruit_by_class.get(operator_class)
                    if isinstance(value, (int, float)):
                        base = default_recruit_hope(defaults, is_id, squad_id, rarity, operator_class)
                        if value != base:
                            edits.append(HopeCostEdit(is_id, squad_id, rarity, operator_class, True, value - base))
                    value = promotion_by_class.get(operator_class)
                    if isinstance(value, (int, float)):
                        base = default_promotion_hope(defaults, is_id, squad_id, rarity, operator_class)
                        if value != base:
                            edits.append(HopeCostEdit(is_id, squad_id, rarity, operator_class, False, value - base))

            for operator_class in entry.get("autoPromoteClasses") or []:
                if isinstance(operator_class, str):
                    edits.append(HopeCostEdit(is_id, squad_id, "4", operator_class, False, 0, autopromote=True))
    return edits


def is_edits_format(value) -> bool:
    """Stored overrides are {"edits": [...]}; older rows hold a full config."""
    return isinstance(value, dict) and isinstance(value.get("edits"), list)
