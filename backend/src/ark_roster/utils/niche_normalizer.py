"""Centralized niche normalization utility.

All niche folding and derived-membership rules live here so the resolver and
the recommendation engines agree. Canonical niche codes are lowercase,
hyphenated filename stems: healing-operators, arts-dps, physical-dps, ...
"""

from typing import Iterable, Optional

# Membership in the key niche implies membership in every niche of the value.
# Applied once, the rules do not chain.
DERIVED_NICHE_RULES: dict[str, frozenset[str]] = {
    "fragile": frozenset({"def-shred", "res-shred"}),
    "dual-dps": frozenset({"arts-dps", "physical-dps"}),
}

# AOE damage niches count toward their single-damage-type niche
NICHE_ALIASES: dict[str, str] = {
    "aoe-arts-dps": "arts-dps",
    "aoe-physical-dps": "physical-dps",
    # Legacy underscore codes
    "arts_aoe": "arts-dps",
    "phys_aoe": "physical-dps",
    "arts_dps": "arts-dps",
    "phys_dps": "physical-dps",
}

# Never counted toward team coverage
TEAMBUILD_EXCLUDED_NICHES = frozenset({"unconventional-niches"})

# Never contribute to the normal-mode candidate score. dual-dps is fully
# represented by its two derived niches.
SCORING_EXCLUDED_NICHES = frozenset({
    "free",
    "soloists",
    "enmity-healing",
    "enmity_healers",
    "unconventional-niches",
    "unconventional_niches",
    "dual-dps",
})

# Never contribute to the IS next-pick score
IS_EXCLUDED_NICHES = frozenset({
    "free",
    "unconventional-niches",
    "fragile",
    "enmity-healing",
    "sleep",
    "global-range",
})

LOW_RARITY_NICHE = "low-rarity"
TRASH_NICHE = "trash-operators"

# Evaluations gated on these module prefixes only exist inside IS / SSS modes
MODE_ONLY_MODULE_PREFIXES = ("RA-", "ISW-", "SO-")


def normalize_niche(niche: Optional[str]) -> Optional[str]:
    """Fold a niche code into its canonical scoring niche.

    Examples:
        >>> normalize_niche("aoe-arts-dps")
        'arts-dps'
        >>> normalize_niche("phys_aoe")
        'physical-dps'
        >>> normalize_niche("healing-operators")
        'healing-operators'
    """
    if niche is None:
        return None
    code = niche.strip()
    return NICHE_ALIASES.get(code, NICHE_ALIASES.get(code.lower(), code))


def expand_derived_niches(niches: Iterable[str]) -> list[str]:
    """Apply the derived-membership rules once and return a sorted list."""
    expanded = set(niches)
    for source, implied in DERIVED_NICHE_RULES.items():
        if source in expanded:
            expanded |= implied
    return sorted(expanded)


def derived_sources(niche: str) -> list[str]:
    """Source niches whose membership implies the given niche."""
    return sorted(source for source, implied in DERIVED_NICHE_RULES.items() if niche in implied)


def with_normalized(niches: Iterable[str]) -> list[str]:
    """Niches plus their normalized forms, input order, no duplicates."""
    result: list[str] = []
    for niche in niches:
        if niche not in result:
            result.append(niche)
    for niche in list(result):
        normalized = normalize_niche(niche)
        if normalized not in result:
            result.append(normalized)
    return result


def is_mode_only_level(level: str) -> bool:
    return bool(level) and level.startswith(MODE_ONLY_MODULE_PREFIXES)
