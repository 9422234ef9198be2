"""Tests for data model parsing."""
import pytest

from ark_roster.models.operator import NicheEntry, NicheList, Operator
from ark_roster.models.recommendations import SquadPreset
from ark_roster.models.synergy import Synergy
from ark_roster.models.team import NicheRange, TeamPreferences
from ark_roster.models.weight_pools import WeightPoolConfig


def test_niche_entry_from_raw_forms():
    assert NicheEntry.from_raw("a", "S", "note") == NicheEntry("a", "S", "note", "")
    assert NicheEntry.from_raw("a", "S", ["note", "E2"]) == NicheEntry("a", "S", "note", "E2")
    assert NicheEntry.from_raw("a", "S", ["", None]) == NicheEntry("a", "S", "", "")
    assert NicheEntry.from_raw("a", "S", None) == NicheEntry("a", "S")


def test_flat_niche_list_has_no_rating():
    niche_list = NicheList.from_dict("low-rarity", {"niche": "Low Rarity", "operators": {"kroos": "Cheap"}})
    assert niche_list.entries == [NicheEntry("kroos", "", "Cheap")]
    assert niche_list.display_name == "Low Rarity"


def test_operator_localized_names():
    operator = Operator.from_dict("exusiai", {"name": "Exusiai", "class": "Sniper", "cnName": "能天使"}, rarity=6)
    assert operator.rarity == 6
    assert operator.display_name("jp") == "Exusiai"
    assert operator.display_name("tw") == "能天使"
    assert operator.to_dict()["cnName"] == "能天使"


def test_preferences_from_dict():
    preferences = TeamPreferences.from_dict({
        "requiredNiches": {"healing-operators": {"min": 1, "max": 2}},
        "rarityRanking": ["6", "5"],
    })
    assert preferences.required_niches == {"healing-operators": NicheRange(1, 2)}
    assert preferences.rarity_ranking == [6, 5]
    assert TeamPreferences.from_dict(preferences.to_dict()) == preferences


@pytest.mark.parametrize("bad", [
    {"requiredNiches": {"x": {"min": 3, "max": 1}}},
    {"requiredNiches": {"x": 2}},
    {"preferredNiches": {"x": {"min": "a", "max": 1}}},
    {"rarityRanking": ["six"]},
    {"requiredNiches": {}, "hopeCosts": [6, 3]},
    {"hopeCosts": {"6": "lots"}},
])
def test_invalid_preferences_raise(bad):
    with pytest.raises(ValueError):
        TeamPreferences.from_dict(bad)


def test_weight_pool_defaults():
    config = WeightPoolConfig.from_dict({"important": {"rawScore": "bad", "niches": ["a"]}})
    assert config.important.raw_score == 5
    assert config.raw_score_for("a") == 5
    assert config.raw_score_for("zzz") == 0.5


def test_synergy_entries_accept_level_pairs():
    synergy = Synergy.from_dict({"name": "S", "core": {"g": ["a", ["b", "E2"]]}, "optional": {}})
    assert synergy.core == {"g": ["a", "b"]}
    assert synergy.applies_to(False)
    assert not synergy.applies_to(True)


def test_squad_preset_parsing():
    preset = SquadPreset.from_dict({"6": {"Guard": 3, "Medic": "x"}, "autoPromoteClasses": ["Guard", 4]})
    assert preset.recruit_costs == {"6": {"Guard": 3}}
    assert preset.auto_promote_classes == ["Guard"]
    assert SquadPreset.from_dict(None) == SquadPreset()
