# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: Team creation and lookup."""

from fastapi import APIRouter, Depends, Query

from reviewer_service.core.dependencies import get_team_service
from reviewer_service.schemas import ErrorResponse, TeamAddRequest, TeamOut, TeamResponse
from reviewer_service.services.team_service import TeamService

router = APIRouter(prefix="/team", tags=["Teams"])


@router.post(
    "/add",
    status_code=201,
    response_model=TeamResponse,
    responses={400: {"model": ErrorResponse}},
)
def add_team(
    body: TeamAddRequest,
    service: TeamService = Depends(get_team_service),
):
    """Create a team and create or update its members."""
    team = service.add_team(body.team_name, body.members)
    return TeamResponse(team=TeamOut(**team.model_dump()))


@router.get(
    "/get",
    response_model=TeamResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_team(
    team_name: str = Query(..., min_length=1, description="Team name to query"),
    service: TeamService = Depends(get_team_service),
):
    team = service.get_team(team_name)
    return TeamResponse(team=TeamOut(**team.model_dump()))
