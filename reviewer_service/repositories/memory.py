# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: In-memory Directory and PullRequestStore.

Used for tests and local runs (STORAGE_BACKEND=memory). Every
read-modify-write happens under one shared lock, which gives the same
all-or-nothing guarantees as the PostgreSQL backend's single-statement
updates. Records are copied on the way in and out so callers never hold
references into the store.
"""

import threading
from datetime import datetime

from reviewer_service.core.errors import (
    AlreadyMerged,
    NoCandidate,
    PullRequestExists,
    PullRequestNotFound,
    ReviewerNotAssigned,
    TeamExists,
    TeamNotFound,
    UserNotFound,
)
from reviewer_service.models.domain import (
    PullRequest,
    PullRequestStatus,
    ReviewerAssignmentCount,
    Team,
    TeamMember,
    User,
)
from reviewer_service.repositories.base import Directory, PullRequestStore
from reviewer_service.services.assignment import replace_reviewer


class MemoryDatabase:
    """Shared state for the in-memory repositories."""

    def __init__(self) -> None:
        self.lock = threading.RLock()
        # Dict order doubles as registration order for team rosters.
        self.users: dict[str, User] = {}
        self.teams: dict[str, None] = {}
        self.pull_requests: dict[str, PullRequest] = {}

    def clear(self) -> None:
        with self.lock:
            self.users.clear()
            self.teams.clear()
            self.pull_requests.clear()


class InMemoryDirectory(Directory):
    def __init__(self, db: MemoryDatabase) -> None:
        self._db = db

    # ── Read ──

    def get_user(self, user_id: str) -> User:
        with self._db.lock:
            user = self._db.users.get(user_id)
            if user is None:
                raise UserNotFound(f"user {user_id} not found")
            return user.model_copy()

    def get_team(self, team_name: str) -> Team:
        with self._db.lock:
            if team_name not in self._db.teams:
                raise TeamNotFound(f"team {team_name} not found")
            members = [
                TeamMember(user_id=u.user_id, username=u.username, is_active=u.is_active)
                for u in self._db.users.values()
                if u.team_name == team_name
            ]
        return Team(team_name=team_name, members=members)

    def count_teams(self) -> int:
        with self._db.lock:
            return len(self._db.teams)

    def count_users(self) -> tuple[int, int]:
        with self._db.lock:
            users = list(self._db.users.values())
        return len(users), sum(1 for u in users if u.is_active)

    # ── Write ──

    def add_team(self, team: Team) -> Team:
        with self._db.lock:
            if team.team_name in self._db.teams:
                raise TeamExists()
            self._db.teams[team.team_name] = None
            for member in team.members:
                existing = self._db.users.get(member.user_id)
                user = User(
                    user_id=member.user_id,
                    username=member.username,
                    team_name=team.team_name,
                    is_active=member.is_active,
                )
                if existing is None:
                    self._db.users[member.user_id] = user
                else:
                    # Upsert keeps the user's original registration slot.
                    existing.username = user.username
                    existing.team_name = user.team_name
                    existing.is_active = user.is_active
            # Roster read under the same lock as the writes.
            return self.get_team(team.team_name)

    def set_is_active(self, user_id: str, is_active: bool) -> User:
        with self._db.lock:
            user = self._db.users.get(user_id)
            if user is None:
                raise UserNotFound(f"user {user_id} not found")
            user.is_active = is_active
            return user.model_copy()


class InMemoryPullRequestStore(PullRequestStore):
    def __init__(self, db: MemoryDatabase) -> None:
        self._db = db

    # ── Read ──

    def get(self, pull_request_id: str) -> PullRequest:
        with self._db.lock:
            return self._get_locked(pull_request_id).model_copy(deep=True)

    def list_by_reviewer(self, user_id: str) -> list[PullRequest]:
        with self._db.lock:
            return [
                pr.model_copy(deep=True)
                for pr in self._db.pull_requests.values()
                if user_id in pr.assigned_reviewers
            ]

    def count_by_status(self) -> tuple[int, int, int]:
        with self._db.lock:
            statuses = [pr.status for pr in self._db.pull_requests.values()]
        opened = sum(1 for s in statuses if s == PullRequestStatus.OPEN)
        merged = sum(1 for s in statuses if s == PullRequestStatus.MERGED)
        return len(statuses), opened, merged

    def assignment_counts(self) -> list[ReviewerAssignmentCount]:
        counts: dict[str, int] = {}
        with self._db.lock:
            for pr in self._db.pull_requests.values():
                for user_id in pr.assigned_reviewers:
                    counts[user_id] = counts.get(user_id, 0) + 1
        return [
            ReviewerAssignmentCount(user_id=user_id, assignments=n)
            for user_id, n in counts.items()
        ]

    # ── Write ──

    def create(self, pull_request: PullRequest) -> None:
        with self._db.lock:
            if pull_request.pull_request_id in self._db.pull_requests:
                raise PullRequestExists()
            self._db.pull_requests[pull_request.pull_request_id] = pull_request.model_copy(deep=True)

    def merge(self, pull_request_id: str, merged_at: datetime) -> PullRequest:
        with self._db.lock:
            pr = self._get_locked(pull_request_id)
            if pr.status.can_transition_to(PullRequestStatus.MERGED):
                pr.status = PullRequestStatus.MERGED
            if pr.merged_at is None:
                pr.merged_at = merged_at
            return pr.model_copy(deep=True)

    def reassign_reviewer(
        self, pull_request_id: str, old_reviewer_id: str, new_reviewer_id: str
    ) -> PullRequest:
        with self._db.lock:
            pr = self._get_locked(pull_request_id)
            if not pr.is_open:
                raise AlreadyMerged()
            if old_reviewer_id not in pr.assigned_reviewers:
                raise ReviewerNotAssigned()
            if new_reviewer_id in pr.assigned_reviewers:
                raise NoCandidate(f"{new_reviewer_id} is already assigned")
            pr.assigned_reviewers = replace_reviewer(
                pr.assigned_reviewers, old_reviewer_id, new_reviewer_id
            )
            return pr.model_copy(deep=True)

    # ── Internal ──

    def _get_locked(self, pull_request_id: str) -> PullRequest:
        pr = self._db.pull_requests.get(pull_request_id)
        if pr is None:
            raise PullRequestNotFound(f"pull request {pull_request_id} not found")
        return pr
