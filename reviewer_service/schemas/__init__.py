# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas — API contract definitions.
These are Pydantic models used ONLY at the controller (HTTP) boundary.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from reviewer_service.models.domain import (
    PullRequest,
    PullRequestStatus,
    ReviewerAssignmentCount,
    TeamMember,
)


# ── Team Schemas ──

class TeamAddRequest(BaseModel):
    team_name: str = Field(..., min_length=1, max_length=255)
    members: List[TeamMember] = Field(default_factory=list)


class TeamOut(BaseModel):
    team_name: str
    members: List[TeamMember]


class TeamResponse(BaseModel):
    team: TeamOut


# ── User Schemas ──

class SetIsActiveRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    is_active: bool


class UserOut(BaseModel):
    user_id: str
    username: str
    team_name: Optional[str] = None
    is_active: bool


class UserResponse(BaseModel):
    user: UserOut


class PullRequestShort(BaseModel):
    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: PullRequestStatus


class UserReviewsResponse(BaseModel):
    user_id: str
    pull_requests: List[PullRequestShort]


# ── Pull Request Schemas ──

class PullRequestCreateRequest(BaseModel):
    pull_request_id: str = Field(..., min_length=1, max_length=255)
    pull_request_name: str = Field(..., min_length=1, max_length=500)
    author_id: str = Field(..., min_length=1)


class PullRequestMergeRequest(BaseModel):
    pull_request_id: str = Field(..., min_length=1)


class PullRequestReassignRequest(BaseModel):
    pull_request_id: str = Field(..., min_length=1)
    old_user_id: str = Field(..., min_length=1)


class PullRequestOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: PullRequestStatus
    assigned_reviewers: List[str]
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    merged_at: Optional[datetime] = Field(None, alias="mergedAt")

    @classmethod
    def from_domain(cls, pr: PullRequest) -> "PullRequestOut":
        return cls(**pr.model_dump())


class PullRequestResponse(BaseModel):
    pr: PullRequestOut


class ReassignResponse(BaseModel):
    pr: PullRequestOut
    replaced_by: str


# ── Stats Schemas ──

class StatsResponse(BaseModel):
    total_teams: int
    total_pull_requests: int
    open_pull_requests: int
    merged_pull_requests: int
    total_users: int
    active_users: int
    assignments: List[ReviewerAssignmentCount]


class ErrorBody(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorBody
