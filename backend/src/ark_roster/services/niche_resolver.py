"""Niche membership and tier lookup over a data snapshot."""
from typing import Optional

from ark_roster.models.operator import TIER_VALUES, NicheEntry
from ark_roster.repositories.static_data_repository import DataSnapshot
from ark_roster.utils.niche_normalizer import (
    TEAMBUILD_EXCLUDED_NICHES,
    TRASH_NICHE,
    derived_sources,
    expand_derived_niches,
    is_mode_only_level,
    with_normalized,
)
from ark_roster.utils.peak_level import keep_peak_per, peak_of


class NicheResolver:
    """Answers "which niches does this operator fill, and how well"."""

    def __init__(self, snapshot: DataSnapshot):
        self.snapshot = snapshot
        self._direct: dict[str, set[str]] = {}
        for code, niche_list in snapshot.niche_lists.items():
            for entry in niche_list.entries:
                self._direct.setdefault(entry.operator_id, set()).add(code)

    def niches_for_operator(self, operator_id: str) -> list[str]:
        """Sorted niche codes including derived niches. Unknown ids give []."""
        direct = self._direct.get(operator_id)
        if not direct:
            return []
        return expand_derived_niches(direct)

    def team_niches(self, operator_id: str) -> list[str]:
        """Niches counted toward team coverage (AOE niches also count as DPS)."""
        niches = [n for n in self.niches_for_operator(operator_id) if n not in TEAMBUILD_EXCLUDED_NICHES]
        return with_normalized(niches)

    def tier_of(self, operator_id: str, niche: str, is_mode: bool = False) -> int:
        """Best numeric tier of an operator in a niche, 0 if unrated.

        Outside IS, evaluations gated on IS/SSS-only modules are ignored.
        Derived niches use the tier of the niche that implies them.
        """
        best = self._best_tier(operator_id, niche, is_mode)
        if best == 0 and niche not in self._direct.get(operator_id, ()):
            for source in derived_sources(niche):
                best = max(best, self._best_tier(operator_id, source, is_mode))
        return best

    def _best_tier(self, operator_id: str, niche: str, is_mode: bool) -> int:
        niche_list = self.snapshot.niche_lists.get(niche)
        if niche_list is None:
            return 0
        best = 0
        for entry in niche_list.entries_for(operator_id):
            if not is_mode and is_mode_only_level(entry.level):
                continue
            best = max(best, TIER_VALUES.get(entry.rating, 0))
        return best

    def operators_in_niche(self, niche: str, peak_only: bool = True) -> Optional[list[NicheEntry]]:
        """Entries of a niche list, one peak entry per operator by default."""
        niche_list = self.snapshot.get_niche_list(niche)
        if niche_list is None:
            return None
        if not peak_only:
            return list(niche_list.entries)
        return keep_peak_per(niche_list.entries, key=lambda e: e.operator_id)

    def rankings_for_operator(self, operator_id: str, peak_only: bool = True) -> list[dict]:
        """Every niche an operator is listed in, one peak entry per niche by default."""
        peaks: list[tuple[str, NicheEntry]] = []
        for code in self.snapshot.niche_codes():
            entries = self.snapshot.niche_lists[code].entries_for(operator_id)
            if not entries:
                continue
            if peak_only:
                peaks.append((code, peak_of(entries)))
            else:
                peaks.extend((code, entry) for entry in entries)

        result = [
            {
                "niche": code,
                "niche_name": self.snapshot.niche_lists[code].display_name,
                "tier": entry.rating,
                "level": entry.level,
                "notes": entry.note,
            }
            for code, entry in peaks
        ]
        if self.snapshot.is_trash(operator_id):
            result.append({
                "niche": TRASH_NICHE,
                "niche_name": "Trash Operators",
                "tier": "",
                "level": "",
                "notes": self.snapshot.trash_notes.get(operator_id) or "No optimal use",
            })
        return result

    def validate_niche_lists(self) -> dict[str, list[str]]:
        """Operator ids referenced by niche lists but missing from operator data."""
        errors: dict[str, list[str]] = {}
        for code in self.snapshot.niche_codes():
            unknown = sorted(
                op_id
                for op_id in self.snapshot.niche_lists[code].operator_ids()
                if op_id not in self.snapshot.operators
            )
            if unknown:
                errors[code] = unknown
        unknown_trash = sorted(op_id for op_id in self.snapshot.trash_operators if op_id not in self.snapshot.operators)
        if unknown_trash:
            errors[TRASH_NICHE] = unknown_trash
        return errors
