"""Static game data: operators, niche lists, weight pools, squad presets."""
import json
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ark_roster.models.operator import NicheList, Operator
from ark_roster.models.recommendations import SquadPreset
from ark_roster.models.synergy import Synergy
from ark_roster.models.team import TeamPreferences, default_preferences
from ark_roster.models.weight_pools import WeightPoolConfig

logger = logging.getLogger(__name__)

RARITIES = (1, 2, 3, 4, 5, 6)
TRASH_LIST_FILE = "trash-operators.json"


@dataclass(frozen=True)
class DataSnapshot:
    """Immutable view of the static data handed to every engine call."""

    operators: dict[str, Operator] = field(default_factory=dict)
    niche_lists: dict[str, NicheList] = field(default_factory=dict)  # code -> list
    trash_operators: frozenset[str] = frozenset()
    trash_notes: dict[str, str] = field(default_factory=dict)
    weight_pools: WeightPoolConfig = field(default_factory=WeightPoolConfig)
    squad_presets: dict[str, dict[str, SquadPreset]] = field(default_factory=dict)  # IS -> squad -> preset
    raw_hope_costs: dict = field(default_factory=dict)  # As stored, for applying user edits
    synergies: dict[str, Synergy] = field(default_factory=dict)
    default_preferences: TeamPreferences = field(default_factory=default_preferences)

    def get_operator(self, operator_id: str) -> Optional[Operator]:
        return self.operators.get(operator_id)

    def operators_by_rarity(self, rarity: int) -> list[Operator]:
        return [op for op in self.operators.values() if op.rarity == rarity]

    def niche_codes(self) -> list[str]:
        return sorted(self.niche_lists)

    def get_niche_list(self, niche: str) -> Optional[NicheList]:
        """Lookup by code, falling back to case-insensitive code or display name."""
        if niche in self.niche_lists:
            return self.niche_lists[niche]
        wanted = niche.strip().lower()
        slug = wanted.replace(" ", "-")
        for niche_list in self.niche_lists.values():
            if niche_list.code.lower() in (wanted, slug) or niche_list.display_name.lower() == wanted:
                return niche_list
        return None

    def is_trash(self, operator_id: str) -> bool:
        return operator_id in self.trash_operators


def _read_json(path: Path):
    """Read a JSON file, returning None (and logging) when unreadable."""
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to load {path.name}: {e}")
        return None


def parse_squad_presets(raw: dict | None) -> dict[str, dict[str, SquadPreset]]:
    """Parse an IS -> squad -> preset document."""
    presets: dict[str, dict[str, SquadPreset]] = {}
    if not isinstance(raw, dict):
        return presets
    for is_id, squads in raw.items():
        if not isinstance(squads, dict):
            continue
        presets[is_id] = {
            squad_id: SquadPreset.from_dict(entry)
            for squad_id, entry in squads.items()
            if isinstance(entry, dict)
        }
    return presets


class StaticDataRepository:
    """Loads static data from a data directory into a DataSnapshot.

    Layout:
        operators-{1..6}star.json, niche-lists/*.json, niche-lists/trash-operators.json,
        is-niche-weight-pools.json, is-hope-costs.json, synergies/*.json,
        universal-team-preferences.json
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir)
        if not self.data_dir.is_dir():
            raise FileNotFoundError(f"Data directory not found: {self.data_dir}")
        self._lock = threading.Lock()
        self._snapshot = self._load()

    @property
    def snapshot(self) -> DataSnapshot:
        return self._snapshot

    def reload(self) -> DataSnapshot:
        """Re-read every file and swap in a fresh snapshot."""
        snapshot = self._load()
        with self._lock:
            self._snapshot = snapshot
        return snapshot

    def _load(self) -> DataSnapshot:
        operators = self._load_operators()
        niche_lists, trash_notes = self._load_niche_lists()
        hope_costs_path = self.data_dir / "is-hope-costs.json"
        raw_hope_costs = _read_json(hope_costs_path) if hope_costs_path.exists() else None
        snapshot = DataSnapshot(
            operators=operators,
            niche_lists=niche_lists,
            trash_operators=frozenset(trash_notes),
            trash_notes=trash_notes,
            weight_pools=self._load_weight_pools(),
            squad_presets=parse_squad_presets(raw_hope_costs),
            raw_hope_costs=raw_hope_costs if isinstance(raw_hope_costs, dict) else {},
            synergies=self._load_synergies(),
            default_preferences=self._load_default_preferences(),
        )
        logger.info(
            f"Loaded {len(operators)} operators, {len(niche_lists)} niche lists "
            f"from {self.data_dir}"
        )
        return snapshot

    def _load_operators(self) -> dict[str, Operator]:
        operators: dict[str, Operator] = {}
        for rarity in RARITIES:
            path = self.data_dir / f"operators-{rarity}star.json"
            if not path.exists():
                continue
            data = _read_json(path)
            if data is None:
                continue
            # Dictionary format keyed by id, or a list of records with "id"
            records = data.items() if isinstance(data, dict) else (
                (op.get("id"), op) for op in data if isinstance(op, dict)
            )
            for operator_id, record in records:
                if not operator_id or not isinstance(record, dict):
                    continue
                operators[operator_id] = Operator.from_dict(operator_id, record, rarity)
        return operators

    def _load_niche_lists(self) -> tuple[dict[str, NicheList], dict[str, str]]:
        niche_dir = self.data_dir / "niche-lists"
        niche_lists: dict[str, NicheList] = {}
        trash_notes: dict[str, str] = {}
        if not niche_dir.is_dir():
            logger.warning(f"Niche list directory does not exist: {niche_dir}")
            return niche_lists, trash_notes

        for path in sorted(niche_dir.glob("*.json")):
            data = _read_json(path)
            if not isinstance(data, dict):
                continue
            if path.name == TRASH_LIST_FILE:
                trash_notes = self._parse_trash_list(data)
                continue
            if "operators" not in data:
                continue
            niche_lists[path.stem] = NicheList.from_dict(path.stem, data)
        return niche_lists, trash_notes

    @staticmethod
    def _parse_trash_list(data: dict) -> dict[str, str]:
        operators = data.get("operators")
        if isinstance(operators, dict):
            return {op_id: note or "" for op_id, note in operators.items()}
        # Legacy array format
        notes: dict[str, str] = {}
        for op in operators or []:
            if isinstance(op, str):
                notes[op] = ""
            elif isinstance(op, dict) and op.get("operatorId"):
                notes[op["operatorId"]] = op.get("note", "")
        return notes

    def _load_weight_pools(self) -> WeightPoolConfig:
        path = self.data_dir / "is-niche-weight-pools.json"
        if not path.exists():
            return WeightPoolConfig()
        return WeightPoolConfig.from_dict(_read_json(path))

    def _load_synergies(self) -> dict[str, Synergy]:
        synergy_dir = self.data_dir / "synergies"
        synergies: dict[str, Synergy] = {}
        if not synergy_dir.is_dir():
            return synergies
        for path in sorted(synergy_dir.glob("*.json")):
            data = _read_json(path)
            if isinstance(data, dict) and data.get("name") and "core" in data and "optional" in data:
                synergies[path.stem] = Synergy.from_dict(data)
        return synergies

    def _load_default_preferences(self) -> TeamPreferences:
        path = self.data_dir / "universal-team-preferences.json"
        if not path.exists():
            return default_preferences()
        data = _read_json(path)
        try:
            return TeamPreferences.from_dict(data)
        except ValueError as e:
            logger.warning(f"Invalid universal-team-preferences.json, using defaults: {e}")
            return default_preferences()
