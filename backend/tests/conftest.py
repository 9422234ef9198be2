"""Shared fixtures: in-memory snapshots and on-disk data directories."""
import json

import pytest

from ark_roster.models.operator import NicheList, Operator
from ark_roster.models.synergy import Synergy
from ark_roster.models.weight_pools import WeightPoolConfig
from ark_roster.repositories.static_data_repository import DataSnapshot, parse_squad_presets


def make_snapshot(
    operators: dict,
    niche_lists: dict,
    trash: dict | None = None,
    weight_pools: dict | None = None,
    hope_costs: dict | None = None,
    synergies: dict | None = None,
    preferences=None,
) -> DataSnapshot:
    """Build a snapshot without touching disk.

    operators maps id -> (rarity, class); niche_lists maps code -> the
    "operators" document of a niche list file.
    """
    extra = {}
    if preferences is not None:
        extra["default_preferences"] = preferences
    return DataSnapshot(
        operators={
            op_id: Operator(id=op_id, name=op_id.title(), rarity=rarity, operator_class=cls)
            for op_id, (rarity, cls) in operators.items()
        },
        niche_lists={
            code: NicheList.from_dict(code, {"niche": code, "operators": doc})
            for code, doc in niche_lists.items()
        },
        trash_operators=frozenset(trash or {}),
        trash_notes=dict(trash or {}),
        weight_pools=WeightPoolConfig.from_dict(weight_pools),
        squad_presets=parse_squad_presets(hope_costs),
        raw_hope_costs=hope_costs or {},
        synergies={name: Synergy.from_dict(data) for name, data in (synergies or {}).items()},
        **extra,
    )


@pytest.fixture
def snapshot_factory():
    return make_snapshot


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")


def write_data_dir(root):
    """Write a small but complete static data directory under root."""
    data_dir = root / "data"
    (data_dir / "niche-lists").mkdir(parents=True)
    (data_dir / "synergies").mkdir()

    _write(data_dir / "operators-6star.json", {
        "exusiai": {"id": "exusiai", "name": "Exusiai", "rarity": 6, "class": "Sniper", "cnName": "能天使"},
        "silverash": {"id": "silverash", "name": "SilverAsh", "rarity": 6, "class": "Guard"},
        "shining": {"id": "shining", "name": "Shining", "rarity": 6, "class": "Medic"},
        "saria": {"id": "saria", "name": "Saria", "rarity": 6, "class": "Defender"},
    })
    _write(data_dir / "operators-5star.json", {
        "ptilopsis": {"id": "ptilopsis", "name": "Ptilopsis", "rarity": 5, "class": "Medic"},
        "texas": {"id": "texas", "name": "Texas", "rarity": 5, "class": "Vanguard"},
    })
    _write(data_dir / "operators-3star.json", [
        {"id": "kroos", "name": "Kroos", "rarity": 3, "class": "Sniper"},
        {"id": "hibiscus", "name": "Hibiscus", "rarity": 3, "class": "Medic"},
    ])
    _write(data_dir / "operators-1star.json", {
        "castle-3": {"id": "castle-3", "name": "Castle-3", "rarity": 1, "class": "Guard"},
    })

    niche_dir = data_dir / "niche-lists"
    _write(niche_dir / "healing-operators.json", {
        "niche": "Healing Operators",
        "description": "Direct healing",
        "lastUpdated": "2026-09-02",
        "operators": {
            "S": {"shining": "Defense buff", "ptilopsis": ["SP battery", "E2"]},
            "B": {"hibiscus": ""},
        },
    })
    _write(niche_dir / "physical-dps.json", {
        "niche": "Physical DPS",
        "operators": {
            "SS": {"exusiai": "", "silverash": ["Truesilver Slash", "E2"]},
            "A": {"silverash": "", "kroos": ""},
            "C": {"castle-3": ""},
        },
    })
    _write(niche_dir / "late-laneholder.json", {
        "niche": "Late Laneholder",
        "operators": {"S": {"saria": ""}},
    })
    _write(niche_dir / "dp-generation.json", {
        "niche": "DP Generation",
        "operators": {"A": {"texas": "", "missing-op": ""}},
    })
    _write(niche_dir / "trash-operators.json", {
        "niche": "Trash Operators",
        "operators": {"castle-3": "Outclassed"},
    })
    (niche_dir / "broken.json").write_text("{not json", encoding="utf-8")

    _write(data_dir / "is-niche-weight-pools.json", {
        "important": {"rawScore": 5, "niches": ["healing-operators", "physical-dps"]},
        "optional": {"rawScore": 2, "niches": ["late-laneholder"]},
        "synergyScaleFactor": 1,
    })
    _write(data_dir / "is-hope-costs.json", {
        "is4": {
            "squad-a": {"6": {"Sniper": 4}, "autoPromoteClasses": ["Medic"]},
            "squad-b": {"6": {}},
        },
    })
    _write(data_dir / "synergies" / "penguins.json", {
        "name": "Penguin Logistics",
        "core": {"penguins": ["exusiai", "texas"]},
        "optional": {},
        "corePointBonus": 5,
        "coreCountSeparately": True,
    })
    _write(data_dir / "universal-team-preferences.json", {
        "requiredNiches": {
            "healing-operators": {"min": 1, "max": 2},
            "physical-dps": {"min": 1, "max": 2},
        },
        "preferredNiches": {"late-laneholder": {"min": 1, "max": 1}},
    })
    return data_dir


@pytest.fixture
def data_dir(tmp_path):
    return write_data_dir(tmp_path)


@pytest.fixture
def anyio_backend():
    return "asyncio"
