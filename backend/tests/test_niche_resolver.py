"""Tests for the niche resolver."""
import pytest

from ark_roster.services.niche_resolver import NicheResolver
from ark_roster.utils.niche_normalizer import expand_derived_niches


@pytest.fixture
def resolver(snapshot_factory):
    snapshot = snapshot_factory(
        operators={
            "angelina": (6, "Supporter"),
            "eyja": (6, "Caster"),
            "duo": (5, "Guard"),
            "thorns": (6, "Guard"),
        },
        niche_lists={
            "fragile": {"A": {"angelina": ["Fragile on skill 3", "E2"]}},
            "dual-dps": {"B": {"duo": ""}},
            "aoe-arts-dps": {"SS": {"eyja": ""}},
            "arts-dps": {"S": {"eyja": ["Skill 3", "E2"]}},
            "late-laneholder": {"S": {"thorns": ["Sustain", "RA-THORN"]}, "B": {"thorns": ""}},
            "unconventional-niches": {"thorns": "Odd use"},
            "boss-killing": {"S": {"ghost": ""}},
        },
        trash={"duo": ""},
    )
    return NicheResolver(snapshot)


def test_fragile_implies_shred_niches(resolver):
    assert resolver.niches_for_operator("angelina") == ["def-shred", "fragile", "res-shred"]


def test_dual_dps_implies_both_dps_niches(resolver):
    assert resolver.niches_for_operator("duo") == ["arts-dps", "dual-dps", "physical-dps"]


def test_niches_for_operator_is_idempotent(resolver):
    for op_id in ("angelina", "eyja", "duo", "thorns"):
        niches = resolver.niches_for_operator(op_id)
        assert resolver.niches_for_operator(op_id) == niches
        assert expand_derived_niches(niches) == niches


def test_unknown_operator_has_no_niches(resolver):
    assert resolver.niches_for_operator("nobody") == []


def test_team_niches_drop_excluded_and_add_normalized(resolver):
    assert resolver.team_niches("thorns") == ["late-laneholder"]
    assert resolver.team_niches("eyja") == ["aoe-arts-dps", "arts-dps"]


def test_tier_ignores_mode_only_modules_outside_is(resolver):
    assert resolver.tier_of("thorns", "late-laneholder") == 70
    assert resolver.tier_of("thorns", "late-laneholder", is_mode=True) == 90


def test_tier_of_derived_niche_uses_source(resolver):
    assert resolver.tier_of("angelina", "def-shred") == 80
    assert resolver.tier_of("angelina", "res-shred", is_mode=True) == 80


def test_tier_of_unrated_is_zero(resolver):
    assert resolver.tier_of("eyja", "late-laneholder") == 0
    assert resolver.tier_of("nobody", "arts-dps") == 0
    assert resolver.tier_of("eyja", "no-such-niche") == 0


def test_operators_in_niche_keeps_peak_per_operator(resolver):
    entries = resolver.operators_in_niche("late-laneholder")
    assert len(entries) == 1
    assert entries[0].level == "RA-THORN"
    assert len(resolver.operators_in_niche("late-laneholder", peak_only=False)) == 2


def test_operators_in_niche_unknown_list(resolver):
    assert resolver.operators_in_niche("no-such-niche") is None
    assert resolver.operators_in_niche("LATE-LANEHOLDER") is not None


def test_rankings_for_operator_one_peak_per_niche(resolver):
    rankings = resolver.rankings_for_operator("eyja")
    assert [(r["niche"], r["tier"], r["level"]) for r in rankings] == [
        ("aoe-arts-dps", "SS", ""),
        ("arts-dps", "S", "E2"),
    ]


def test_rankings_include_trash_entry(resolver):
    rankings = resolver.rankings_for_operator("duo")
    assert rankings[-1]["niche"] == "trash-operators"
    assert rankings[-1]["notes"] == "No optimal use"


def test_validate_reports_unknown_ids(resolver):
    assert resolver.validate_niche_lists() == {"boss-killing": ["ghost"]}
