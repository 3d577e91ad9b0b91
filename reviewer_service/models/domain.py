# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class PullRequestStatus(str, Enum):
    OPEN = "OPEN"
    MERGED = "MERGED"

    def can_transition_to(self, target: "PullRequestStatus") -> bool:
        return target in ALLOWED_TRANSITIONS[self]


# MERGED is terminal; reopening is not supported.
ALLOWED_TRANSITIONS: dict[PullRequestStatus, set[PullRequestStatus]] = {
    PullRequestStatus.OPEN: {PullRequestStatus.MERGED},
    PullRequestStatus.MERGED: set(),
}


class User(BaseModel):
    """A directory entry: who the user is, which team, and whether active."""
    user_id: str = Field(..., min_length=1)
    username: str
    team_name: Optional[str] = None
    is_active: bool = True


class TeamMember(BaseModel):
    """A roster entry as returned by the Directory."""
    user_id: str = Field(..., min_length=1)
    username: str
    is_active: bool = True


class Team(BaseModel):
    """A team and its members in roster order."""
    team_name: str = Field(..., min_length=1)
    members: list[TeamMember] = Field(default_factory=list)


class PullRequest(BaseModel):
    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: PullRequestStatus = PullRequestStatus.OPEN
    assigned_reviewers: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    merged_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.status == PullRequestStatus.OPEN


class ReviewerAssignmentCount(BaseModel):
    user_id: str
    assignments: int
