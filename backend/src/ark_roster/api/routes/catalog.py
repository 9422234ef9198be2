"""REST endpoints for static operator and niche list data."""

from fastapi import APIRouter, HTTPException, Request

from ark_roster.repositories.static_data_repository import RARITIES, DataSnapshot
from ark_roster.services.niche_resolver import NicheResolver

router = APIRouter(prefix="/api", tags=["catalog"])


def _snapshot(request: Request) -> DataSnapshot:
    return request.app.state.static_data.snapshot


def _entry_with_name(snapshot: DataSnapshot, entry) -> dict:
    data = entry.to_dict()
    operator = snapshot.get_operator(entry.operator_id)
    data["name"] = operator.name if operator else entry.operator_id
    return data


@router.get("/niche-lists")
def list_niche_lists(request: Request):
    """All niche lists (without their entries)."""
    snapshot = _snapshot(request)
    return {"niche_lists": [snapshot.niche_lists[code].summary() for code in snapshot.niche_codes()]}


@router.get("/niche-lists/{code}")
def get_niche_list(code: str, request: Request, peak_only: bool = True):
    """One niche list; by default each operator appears once at its peak level."""
    snapshot = _snapshot(request)
    niche_list = snapshot.get_niche_list(code)
    if niche_list is None:
        raise HTTPException(status_code=404, detail=f"Niche list not found: {code}")
    entries = NicheResolver(snapshot).operators_in_niche(niche_list.code, peak_only=peak_only)
    return {
        **niche_list.summary(),
        "relatedNiches": list(niche_list.related_niches),
        "entries": [_entry_with_name(snapshot, entry) for entry in entries],
    }


@router.get("/operators/rarity/{rarity}")
def get_operators_by_rarity(rarity: int, request: Request):
    if rarity not in RARITIES:
        raise HTTPException(status_code=400, detail="Rarity must be between 1 and 6")
    operators = _snapshot(request).operators_by_rarity(rarity)
    return {"operators": [op.to_dict() for op in operators]}


@router.get("/operators/{operator_id}")
def get_operator(operator_id: str, request: Request, peak_only: bool = True):
    """Operator record with its niches and per-niche rankings."""
    snapshot = _snapshot(request)
    operator = snapshot.get_operator(operator_id)
    if operator is None:
        raise HTTPException(status_code=404, detail=f"Operator not found: {operator_id}")
    resolver = NicheResolver(snapshot)
    return {
        **operator.to_dict(),
        "niches": resolver.niches_for_operator(operator_id),
        "rankings": resolver.rankings_for_operator(operator_id, peak_only=peak_only),
    }


@router.get("/admin/validate")
def validate_niche_lists(request: Request):
    """Niche list entries that reference unknown operators."""
    errors = NicheResolver(_snapshot(request)).validate_niche_lists()
    return {"valid": not errors, "unknown_operators": errors}


@router.post("/admin/reload")
def reload_static_data(request: Request):
    """Re-read the data directory."""
    snapshot = request.app.state.static_data.reload()
    return {
        "operators": len(snapshot.operators),
        "niche_lists": len(snapshot.niche_lists),
        "synergies": len(snapshot.synergies),
    }
