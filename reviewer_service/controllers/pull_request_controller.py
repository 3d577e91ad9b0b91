# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Pull request creation, merge, and reviewer reassignment.
Thin HTTP layer — delegates ALL logic to PullRequestService. Domain errors
are rendered by the ServiceError handler registered in main.py.
"""

from fastapi import APIRouter, Depends

from reviewer_service.core.dependencies import get_pull_request_service
from reviewer_service.schemas import (
    ErrorResponse,
    PullRequestCreateRequest,
    PullRequestMergeRequest,
    PullRequestOut,
    PullRequestReassignRequest,
    PullRequestResponse,
    ReassignResponse,
)
from reviewer_service.services.pull_request_service import PullRequestService

router = APIRouter(prefix="/pullRequest", tags=["Pull Requests"])


@router.post(
    "/create",
    status_code=201,
    response_model=PullRequestResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def create_pull_request(
    body: PullRequestCreateRequest,
    service: PullRequestService = Depends(get_pull_request_service),
):
    """Create a pull request and assign up to two reviewers from the author's team."""
    pr = service.create_pull_request(
        pull_request_id=body.pull_request_id,
        pull_request_name=body.pull_request_name,
        author_id=body.author_id,
    )
    return PullRequestResponse(pr=PullRequestOut.from_domain(pr))


@router.post(
    "/merge",
    response_model=PullRequestResponse,
    responses={404: {"model": ErrorResponse}},
)
def merge_pull_request(
    body: PullRequestMergeRequest,
    service: PullRequestService = Depends(get_pull_request_service),
):
    """Mark a pull request MERGED. Repeating the call is harmless."""
    pr = service.merge_pull_request(body.pull_request_id)
    return PullRequestResponse(pr=PullRequestOut.from_domain(pr))


@router.post(
    "/reassign",
    response_model=ReassignResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def reassign_reviewer(
    body: PullRequestReassignRequest,
    service: PullRequestService = Depends(get_pull_request_service),
):
    """Replace one reviewer with an eligible member of that reviewer's team."""
    pr, replaced_by = service.reassign_reviewer(body.pull_request_id, body.old_user_id)
    return ReassignResponse(pr=PullRequestOut.from_domain(pr), replaced_by=replaced_by)
