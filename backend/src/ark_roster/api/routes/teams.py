"""REST endpoints for team building and Integrated Strategies recommendations."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from ark_roster.models.operator import OPERATOR_CLASSES
from ark_roster.models.team import TeamPreferences
from ark_roster.services.next_pick_recommender import NextPickRecommender
from ark_roster.services.squad_recommendation import SquadRecommendationService
from ark_roster.services.team_builder import TeamBuilder

router = APIRouter(prefix="/api", tags=["teams"])


class BuildTeamRequest(BaseModel):
    """Request body for building a team.

    Either pass operator ids directly or a user_id whose stored roster and
    preferences are used.
    """

    user_id: Optional[str] = None
    owned_ids: list[str] = []
    want_to_use_ids: list[str] = []
    locked_ids: list[str] = []
    preferences: Optional[dict] = None


class NextPickRequest(BaseModel):
    """Request body for an IS next-pick recommendation."""

    user_id: Optional[str] = None
    raised_ids: list[str] = []
    current_team_ids: list[str] = []
    required_classes: list[str]
    temporary_pick: Optional[str] = None


class SquadRequest(BaseModel):
    """Request body for an IS squad recommendation."""

    is_id: str
    user_id: Optional[str] = None
    owned_ids: list[str] = []
    hope_cost_edits: Optional[list[dict]] = None


def _parse_preferences(raw: Optional[dict]) -> Optional[TeamPreferences]:
    if raw is None:
        return None
    try:
        return TeamPreferences.from_dict(raw)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/team/build")
def build_team(body: BuildTeamRequest, request: Request):
    """Build a 12-operator team."""
    snapshot = request.app.state.static_data.snapshot
    preferences = _parse_preferences(body.preferences)
    owned_ids, want_to_use_ids = body.owned_ids, body.want_to_use_ids

    if body.user_id:
        repo = request.app.state.roster_repository
        owned_ids = repo.get_owned(body.user_id)
        want_to_use_ids = repo.get_raised(body.user_id)
        if preferences is None:
            preferences = repo.get_preferences(body.user_id)

    result = TeamBuilder(snapshot).build_team(
        owned_ids,
        want_to_use_ids,
        preferences,
        locked_ids=body.locked_ids,
    )
    return result.to_dict()


@router.post("/is/recommend")
def recommend_next_pick(body: NextPickRequest, request: Request):
    """Recommend the next operator to recruit."""
    if not body.required_classes:
        raise HTTPException(status_code=400, detail="At least one class is required")
    unknown = [c for c in body.required_classes if c not in OPERATOR_CLASSES]
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown classes: {', '.join(unknown)}")

    snapshot = request.app.state.static_data.snapshot
    raised_ids = body.raised_ids
    preferences = None
    if body.user_id:
        repo = request.app.state.roster_repository
        raised_ids = repo.get_raised(body.user_id)
        preferences = repo.get_preferences(body.user_id)

    recommendation = NextPickRecommender(snapshot).recommend_next(
        raised_ids,
        body.current_team_ids,
        body.required_classes,
        temporary_pick=body.temporary_pick,
        preferences=preferences,
    )
    return recommendation.to_dict()


@router.post("/is/squad")
def recommend_squad(body: SquadRequest, request: Request):
    """Recommend a squad preset for an IS title."""
    snapshot = request.app.state.static_data.snapshot
    owned_ids = body.owned_ids
    edits = body.hope_cost_edits or []
    if body.user_id:
        repo = request.app.state.roster_repository
        owned_ids = repo.get_owned(body.user_id)
        if body.hope_cost_edits is None:
            edits = repo.get_hope_cost_edits(body.user_id)

    result = SquadRecommendationService(snapshot).recommend(body.is_id, owned_ids, edits)
    return {"is_id": body.is_id, **result.to_dict()}
