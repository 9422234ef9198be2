"""Tests for hope cost edits."""
import pytest

from ark_roster.services.hope_costs import (
    HopeCostEdit,
    apply_edits_to_hope_costs,
    default_promotion_hope,
    default_recruit_hope,
    full_config_to_edits,
    is_edits_format,
)


@pytest.fixture
def defaults():
    return {"is4": {"sq": {"6": {"Guard": 4}, "promotionCost": {"6": {"Guard": 2}}}}}


def test_default_lookups(defaults):
    assert default_recruit_hope(defaults, "is4", "sq", "6", "Guard") == 4
    assert default_recruit_hope(defaults, "is4", "sq", "6", "Medic") == 6
    assert default_recruit_hope(defaults, "is4", "sq", "5", "Medic") == 3
    assert default_recruit_hope(None, "is4", "sq", "4", "Medic") == 0
    assert default_promotion_hope(defaults, "is4", "sq", "6", "Guard") == 2
    assert default_promotion_hope(defaults, "is4", "other", "6", "Guard") == 3


def test_apply_recruit_edit_leaves_defaults_untouched(defaults):
    result = apply_edits_to_hope_costs(defaults, [HopeCostEdit("is4", "sq", "6", "Guard", True, -1)])
    assert result["is4"]["sq"]["6"]["Guard"] == 3
    assert defaults["is4"]["sq"]["6"]["Guard"] == 4


def test_apply_promotion_edit_from_dict(defaults):
    edit = {"IS": "is4", "Squad": "sq", "rarity": "6", "class": "Guard", "isrecruit": False, "hopeedit": 1}
    result = apply_edits_to_hope_costs(defaults, [edit])
    assert result["is4"]["sq"]["promotionCost"]["6"]["Guard"] == 3


def test_autopromote_is_added_once(defaults):
    edit = HopeCostEdit("is4", "sq", "4", "Medic", False, 0, autopromote=True)
    result = apply_edits_to_hope_costs(defaults, [edit, edit])
    assert result["is4"]["sq"]["autoPromoteClasses"] == ["Medic"]


def test_edit_for_new_squad_creates_entry():
    result = apply_edits_to_hope_costs({}, [HopeCostEdit("is5", "new", "6", "Vanguard", True, -2)])
    entry = result["is5"]["new"]
    assert entry["6"] == {"Vanguard": 4}
    assert entry["autoPromoteClasses"] == []
    assert set(entry["promotionCost"]) == {"4", "5", "6"}


def test_edits_without_target_are_skipped(defaults):
    result = apply_edits_to_hope_costs(defaults, [HopeCostEdit("", "sq", "6", "Guard", True, -1)])
    assert result == defaults


def test_full_config_round_trips_to_edits(defaults):
    edits = [
        HopeCostEdit("is4", "sq", "6", "Guard", True, -1),
        HopeCostEdit("is4", "sq", "4", "Medic", False, 0, autopromote=True),
    ]
    full = apply_edits_to_hope_costs(defaults, edits)
    assert full_config_to_edits(defaults, full) == edits


def test_full_config_matching_defaults_has_no_edits(defaults):
    assert full_config_to_edits(defaults, defaults) == []
    assert full_config_to_edits(defaults, None) == []


def test_edit_dict_round_trip():
    edit = HopeCostEdit("is4", "sq", "5", "Caster", False, 2)
    assert edit.to_dict()["IS"] == "is4"
    assert HopeCostEdit.from_dict(edit.to_dict()) == edit


def test_is_edits_format(defaults):
    assert is_edits_format({"edits": []})
    assert not is_edits_format(defaults)
    assert not is_edits_format(None)


def test_edit_from_dict_parses_string_fields():
    """Form posts send numbers and flags as strings."""
    edit = HopeCostEdit.from_dict({
        "IS": "is4", "Squad": "sq", "rarity": 6, "class": "Guard", "isrecruit": "false", "hopeedit": "-2",
    })
    assert edit == HopeCostEdit("is4", "sq", "6", "Guard", False, -2)


@pytest.mark.parametrize("bad", [{"hopeedit": "lots"}, {"hopeedit": [1]}, {"isrecruit": "maybe"}])
def test_edit_from_dict_rejects_malformed_fields(bad):
    with pytest.raises(ValueError):
        HopeCostEdit.from_dict({"IS": "is4", "Squad": "sq", "rarity": "6", "class": "Guard", **bad})


def test_malformed_edits_are_skipped(defaults):
    edits = [
        {"IS": "is4", "Squad": "sq", "rarity": "6", "class": "Guard", "hopeedit": "lots"},
        HopeCostEdit("is4", "sq", "6", "Guard", True, "x"),
        HopeCostEdit("is4", "sq", "6", "Medic", True, -1),
    ]
    result = apply_edits_to_hope_costs(defaults, edits)
    assert result["is4"]["sq"]["6"] == {"Guard": 4, "Medic": 5}
