# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: User activity and review-load endpoints."""

from fastapi import APIRouter, Depends, Query

from reviewer_service.core.dependencies import get_user_service
from reviewer_service.schemas import (
    ErrorResponse,
    PullRequestShort,
    SetIsActiveRequest,
    UserOut,
    UserResponse,
    UserReviewsResponse,
)
from reviewer_service.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "/setIsActive",
    response_model=UserResponse,
    responses={404: {"model": ErrorResponse}},
)
def set_is_active(
    body: SetIsActiveRequest,
    service: UserService = Depends(get_user_service),
):
    """Activate or deactivate a user for future reviewer selection."""
    user = service.set_is_active(body.user_id, body.is_active)
    return UserResponse(user=UserOut(**user.model_dump()))


@router.get("/getReview", response_model=UserReviewsResponse)
def get_review(
    user_id: str = Query(..., min_length=1, description="Reviewer user id"),
    service: UserService = Depends(get_user_service),
):
    """List pull requests where the user is currently a reviewer."""
    prs = service.get_review_pull_requests(user_id)
    return UserReviewsResponse(
        user_id=user_id,
        pull_requests=[
            PullRequestShort(
                pull_request_id=pr.pull_request_id,
                pull_request_name=pr.pull_request_name,
                author_id=pr.author_id,
                status=pr.status,
            )
            for pr in prs
        ],
    )
