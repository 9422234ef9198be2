"""Tests for IS squad recommendation."""
import pytest

from ark_roster.models.recommendations import SquadPreset
from ark_roster.services.hope_costs import HopeCostEdit
from ark_roster.services.squad_recommendation import DEFAULT_REASON, SquadRecommendationService

WEIGHT_POOLS = {
    "important": {"rawScore": 5, "niches": ["healing-operators"]},
    "optional": {"rawScore": 2, "niches": ["physical-dps"]},
}

HOPE_COSTS = {
    "is4": {
        "alpha": {"6": {}},
        "beta": {"6": {"Vanguard": 4}, "autoPromoteClasses": ["Guard"]},
    },
}


@pytest.fixture
def service(snapshot_factory):
    snapshot = snapshot_factory(
        operators={
            "v1": (6, "Vanguard"),
            "g1": (6, "Guard"),
            "g2": (5, "Guard"),
            "g3": (5, "Guard"),
            "g4": (5, "Guard"),
        },
        niche_lists={
            "healing-operators": {"A": {"v1": ""}},
            "physical-dps": {"S": {"g1": "", "g3": "", "g4": ""}, "B": {"g2": ""}},
        },
        weight_pools=WEIGHT_POOLS,
        hope_costs=HOPE_COSTS,
    )
    return SquadRecommendationService(snapshot)


def test_team_score_uses_best_tier_per_niche(service):
    assert service.team_score([]) == 0
    assert service.team_score(["v1"]) == 400
    assert service.team_score(["v1", "g1", "g2"]) == 580


def test_paired_classes_share_strength(service):
    strengths = service.compute_class_strengths(["v1", "g1", "g2"])
    assert strengths["Vanguard"] == pytest.approx(580 / 3)
    assert strengths["Guard"] == pytest.approx(580 / 3)
    assert strengths["Medic"] == 0.0
    assert set(strengths) == {
        "Vanguard", "Guard", "Defender", "Supporter", "Sniper", "Medic", "Caster", "Specialist",
    }


def test_class_limit_caps_pair_team(service):
    """At most three operators of one class join the pairing team."""
    strengths = service.compute_class_strengths(["g1", "g3", "g4", "g2"])
    assert strengths["Guard"] == pytest.approx(60)


def test_unknown_owned_ids_are_ignored(service):
    strengths = service.compute_class_strengths(["ghost"])
    assert all(value == 0.0 for value in strengths.values())


def test_recommend_squad_prefers_matching_preset(service):
    presets = {"is4": {"alpha": SquadPreset.from_dict({"6": {}}), "beta": SquadPreset.from_dict(HOPE_COSTS["is4"]["beta"])}}
    recommendation = service.recommend_squad("is4", presets, {"Vanguard": 10, "Guard": 10})
    assert recommendation.preset_id == "beta"
    assert recommendation.score == 25
    assert recommendation.reason == "autopromotes Guard; lower hope for Vanguard"


def test_recommend_squad_tie_keeps_first_preset(service):
    recommendation = service.recommend_squad("is4", service.snapshot.squad_presets, {})
    assert recommendation.preset_id == "alpha"
    assert recommendation.reason == DEFAULT_REASON


def test_recommend_squad_unknown_is(service):
    assert service.recommend_squad("is9", service.snapshot.squad_presets, {"Guard": 10}) is None


def test_weak_classes_are_left_out_of_reason():
    preset = SquadPreset.from_dict({"6": {"Vanguard": 4}})
    score, reason = SquadRecommendationService.score_preset(preset, {"Vanguard": 2})
    assert score == 2
    assert reason == DEFAULT_REASON


def test_recommend_applies_hope_cost_edits(service):
    result = service.recommend("is4", ["v1"])
    assert result.recommended.preset_id == "beta"
    assert result.recommended.score == 1000

    edit = HopeCostEdit("is4", "alpha", "6", "Vanguard", is_recruit=True, hope_edit=-6)
    result = service.recommend("is4", ["v1"], [edit])
    assert result.recommended.preset_id == "alpha"
    assert result.recommended.score == 1200
    assert result.recommended.reason == "lower hope for Vanguard"


def test_recommend_without_presets(service):
    result = service.recommend("is9", ["v1"])
    assert result.recommended is None
    assert result.to_dict()["recommended"] is None
    assert result.class_strengths["Vanguard"] == 400


def test_bad_stored_edits_do_not_break_recommendation(service):
    edits = [
        {"IS": "is4", "Squad": "alpha", "rarity": "6", "class": "Vanguard", "hopeedit": "lots"},
        HopeCostEdit("is4", "alpha", "6", "Vanguard", True, "-2"),
    ]
    result = service.recommend("is4", ["v1"], edits)
    assert result.recommended.preset_id == "beta"


def test_leading_class_order_changes_pair_team(snapshot_factory):
    """Each class fills its quota first in its own run; the better run wins."""
    snapshot = snapshot_factory(
        operators={
            "a1": (6, "Vanguard"),
            "a2": (6, "Vanguard"),
            "a3": (6, "Vanguard"),
            "a4": (6, "Vanguard"),
            "g1": (6, "Guard"),
            "g2": (6, "Guard"),
            "g3": (6, "Guard"),
        },
        niche_lists={
            "n1": {"SS": {"a1": "", "g1": "", "g2": "", "g3": ""}},
            "n2": {"S": {"a2": ""}},
            "n3": {"S": {"a3": ""}},
            "n4": {"A": {"a4": ""}},
        },
        weight_pools={"important": {"rawScore": 5, "niches": ["n1", "n2", "n3", "n4"]}},
    )
    service = SquadRecommendationService(snapshot)
    classes = {op_id: op.operator_class for op_id, op in snapshot.operators.items()}
    vanguards, guards = ["a1", "a2", "a3", "a4"], ["g1", "g2", "g3"]

    team, score = service._greedy_pair_team(vanguards, guards, classes)
    assert team == ["a1", "a2", "a3", "g1", "g2", "g3"]
    assert score == 1400

    team, score = service._greedy_pair_team(guards, vanguards, classes)
    assert team == ["g1", "g2", "g3", "a2", "a3", "a4"]
    assert score == 1800

    strengths = service.compute_class_strengths(vanguards + guards)
    assert strengths["Vanguard"] == pytest.approx(300)
    assert strengths["Guard"] == pytest.approx(300)
