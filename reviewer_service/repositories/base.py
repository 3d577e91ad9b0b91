# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository contracts consumed by the service layer.

Two backends implement them: PostgreSQL (directory_repository.py,
pull_request_repository.py) and in-memory (memory.py). Services depend only
on these interfaces, so backends are swappable from configuration.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from reviewer_service.models.domain import (
    PullRequest,
    ReviewerAssignmentCount,
    Team,
    User,
)


class Directory(ABC):
    """Users, teams, and team membership."""

    @abstractmethod
    def get_user(self, user_id: str) -> User:
        """Return the user or raise UserNotFound."""

    @abstractmethod
    def get_team(self, team_name: str) -> Team:
        """Return the team with its roster in registration order, or raise TeamNotFound."""

    @abstractmethod
    def add_team(self, team: Team) -> Team:
        """
        Create the team and upsert its members in one transaction.
        Raises TeamExists if the name is taken; nothing is written in that case.
        """

    @abstractmethod
    def set_is_active(self, user_id: str, is_active: bool) -> User:
        """Toggle the active flag. Raises UserNotFound."""

    @abstractmethod
    def count_teams(self) -> int: ...

    @abstractmethod
    def count_users(self) -> tuple[int, int]:
        """Return (total, active)."""

    def verify_connection(self) -> None:
        """Raise if the backing storage is unreachable. No-op by default."""


class PullRequestStore(ABC):
    """Pull request records and their atomic updates."""

    @abstractmethod
    def create(self, pull_request: PullRequest) -> None:
        """Insert if absent. Raises PullRequestExists and leaves the existing row alone."""

    @abstractmethod
    def get(self, pull_request_id: str) -> PullRequest:
        """Raises PullRequestNotFound."""

    @abstractmethod
    def merge(self, pull_request_id: str, merged_at: datetime) -> PullRequest:
        """
        Mark MERGED. Idempotent: an already merged PR keeps its merged_at.
        Raises PullRequestNotFound.
        """

    @abstractmethod
    def reassign_reviewer(
        self, pull_request_id: str, old_reviewer_id: str, new_reviewer_id: str
    ) -> PullRequest:
        """
        Swap one reviewer in place as a single atomic conditional update.

        Re-validates under the store's own atomicity and raises
        PullRequestNotFound, AlreadyMerged, ReviewerNotAssigned, or NoCandidate
        (new reviewer already on the PR) without writing anything.
        """

    @abstractmethod
    def list_by_reviewer(self, user_id: str) -> list[PullRequest]: ...

    @abstractmethod
    def count_by_status(self) -> tuple[int, int, int]:
        """Return (total, open, merged)."""

    @abstractmethod
    def assignment_counts(self) -> list[ReviewerAssignmentCount]: ...

    def verify_connection(self) -> None:
        """Raise if the backing storage is unreachable. No-op by default."""
