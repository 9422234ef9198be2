"""REST endpoints for per-user operator ownership and settings."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from ark_roster.models.team import TeamPreferences
from ark_roster.repositories.roster_repository import RosterRepository
from ark_roster.services.hope_costs import HopeCostEdit, full_config_to_edits, is_edits_format

router = APIRouter(prefix="/api/roster", tags=["roster"])


class AddOperatorRequest(BaseModel):
    """Request body for marking an operator as owned."""

    operator_id: str
    raised: bool = False


def _roster(request: Request) -> RosterRepository:
    return request.app.state.roster_repository


def _roster_response(repo: RosterRepository, user_id: str) -> dict:
    return {
        "user_id": user_id,
        "owned": repo.get_owned(user_id),
        "raised": repo.get_raised(user_id),
    }


@router.get("/{user_id}")
def get_roster(user_id: str, request: Request):
    return _roster_response(_roster(request), user_id)


@router.post("/{user_id}/operators", status_code=201)
def add_operator(user_id: str, body: AddOperatorRequest, request: Request):
    """Mark an operator as owned (and optionally raised)."""
    snapshot = request.app.state.static_data.snapshot
    if snapshot.get_operator(body.operator_id) is None:
        raise HTTPException(status_code=404, detail=f"Operator not found: {body.operator_id}")
    repo = _roster(request)
    repo.add_operator(user_id, body.operator_id, raised=body.raised)
    return _roster_response(repo, user_id)


@router.delete("/{user_id}/operators/{operator_id}")
def remove_operator(user_id: str, operator_id: str, request: Request):
    repo = _roster(request)
    if not repo.remove_operator(user_id, operator_id):
        raise HTTPException(status_code=404, detail=f"Operator not owned: {operator_id}")
    return _roster_response(repo, user_id)


@router.get("/{user_id}/preferences")
def get_preferences(user_id: str, request: Request):
    """Stored team preferences, or the defaults when none are saved."""
    preferences = _roster(request).get_preferences(user_id)
    if preferences is None:
        preferences = request.app.state.static_data.snapshot.default_preferences
    return preferences.to_dict()


@router.put("/{user_id}/preferences")
def save_preferences(user_id: str, body: dict, request: Request):
    try:
        preferences = TeamPreferences.from_dict(body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    _roster(request).save_preferences(user_id, preferences)
    return preferences.to_dict()


@router.get("/{user_id}/hope-costs")
def get_hope_cost_edits(user_id: str, request: Request):
    return {"edits": _roster(request).get_hope_cost_edits(user_id)}


@router.put("/{user_id}/hope-costs")
def save_hope_cost_edits(user_id: str, body: dict, request: Request):
    """Accepts {"edits": [...]} or a full IS hope cost config to diff against defaults."""
    if is_edits_format(body):
        try:
            edits = [HopeCostEdit.from_dict(e) for e in body["edits"] if isinstance(e, dict)]
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
    else:
        defaults = request.app.state.static_data.snapshot.raw_hope_costs
        edits = full_config_to_edits(defaults, body)
    payload = [edit.to_dict() for edit in edits]
    _roster(request).save_hope_cost_edits(user_id, payload)
    return {"edits": payload}
