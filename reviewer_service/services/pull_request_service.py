# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Pull request lifecycle: creation with reviewer assignment,
merge, and reviewer reassignment.
"""

from datetime import datetime, timezone

from reviewer_service.core.errors import (
    AlreadyMerged,
    AuthorNotFound,
    NoCandidate,
    ReviewerNotAssigned,
    ServiceError,
    UserNotFound,
)
from reviewer_service.core.logging import get_logger
from reviewer_service.metrics.prometheus import (
    PULL_REQUESTS_CREATED,
    PULL_REQUESTS_MERGED,
    REASSIGNMENTS,
    REVIEWERS_PER_PULL_REQUEST,
)
from reviewer_service.models.domain import PullRequest, PullRequestStatus
from reviewer_service.repositories.base import Directory, PullRequestStore
from reviewer_service.services.assignment import (
    select_initial_reviewers,
    select_replacement,
)

logger = get_logger(__name__)


class PullRequestService:
    """Business logic for pull requests. Holds no state between calls."""

    def __init__(self, directory: Directory, store: PullRequestStore) -> None:
        self._directory = directory
        self._store = store

    # ── Create ──

    def create_pull_request(
        self, pull_request_id: str, pull_request_name: str, author_id: str
    ) -> PullRequest:
        """
        Create an OPEN pull request and assign reviewers from the author's team.
        Raises AuthorNotFound, TeamNotFound, or PullRequestExists.
        """
        try:
            author = self._directory.get_user(author_id)
        except UserNotFound:
            raise AuthorNotFound()
        # Raises TeamNotFound with its own tag; not folded into the user lookup.
        team = self._directory.get_team(author.team_name)

        reviewers = select_initial_reviewers(author.user_id, team.members)
        pull_request = PullRequest(
            pull_request_id=pull_request_id,
            pull_request_name=pull_request_name,
            author_id=author.user_id,
            status=PullRequestStatus.OPEN,
            assigned_reviewers=reviewers,
            created_at=datetime.now(timezone.utc),
            merged_at=None,
        )
        self._store.create(pull_request)

        PULL_REQUESTS_CREATED.inc()
        REVIEWERS_PER_PULL_REQUEST.observe(len(reviewers))
        logger.info("Pull request created id=%s author=%s team=%s reviewers=%s",
                    pull_request_id, author.user_id, team.team_name, reviewers,
                    extra={"pull_request_id": pull_request_id, "team_name": team.team_name})
        return pull_request

    # ── Read ──

    def get_pull_request(self, pull_request_id: str) -> PullRequest:
        return self._store.get(pull_request_id)

    # ── Merge ──

    def merge_pull_request(self, pull_request_id: str) -> PullRequest:
        """Move OPEN to MERGED. Merging again returns the record unchanged."""
        now = datetime.now(timezone.utc)
        pull_request = self._store.merge(pull_request_id, now)
        if pull_request.merged_at == now:
            PULL_REQUESTS_MERGED.inc()
            logger.info("Pull request merged id=%s merged_at=%s",
                        pull_request_id, pull_request.merged_at.isoformat(),
                        extra={"pull_request_id": pull_request_id})
        else:
            logger.debug("Pull request already merged id=%s merged_at=%s",
                         pull_request_id, pull_request.merged_at.isoformat(),
                         extra={"pull_request_id": pull_request_id})
        return pull_request

    # ── Reassign ──

    def reassign_reviewer(
        self, pull_request_id: str, old_reviewer_id: str
    ) -> tuple[PullRequest, str]:
        """
        Replace ``old_reviewer_id`` with the first eligible member of their team.

        Checks, in order: PR exists, PR is OPEN, old reviewer is assigned, old
        reviewer and their team resolve. Fails with NoCandidate when nobody in
        that team is eligible. Nothing is written on any failure.
        """
        try:
            pull_request = self._store.get(pull_request_id)
            if not pull_request.is_open:
                raise AlreadyMerged()
            if old_reviewer_id not in pull_request.assigned_reviewers:
                raise ReviewerNotAssigned()

            old_reviewer = self._directory.get_user(old_reviewer_id)
            team = self._directory.get_team(old_reviewer.team_name)

            new_reviewer_id = select_replacement(pull_request, old_reviewer.user_id, team.members)
            if new_reviewer_id is None:
                raise NoCandidate()

            updated = self._store.reassign_reviewer(
                pull_request_id, old_reviewer_id, new_reviewer_id
            )
        except ServiceError as exc:
            REASSIGNMENTS.labels(result=exc.code.lower()).inc()
            logger.info("Reassign rejected pr=%s old=%s code=%s",
                        pull_request_id, old_reviewer_id, exc.code,
                        extra={"pull_request_id": pull_request_id, "user_id": old_reviewer_id})
            raise

        REASSIGNMENTS.labels(result="success").inc()
        logger.info("Reviewer reassigned pr=%s old=%s new=%s",
                    pull_request_id, old_reviewer_id, new_reviewer_id,
                    extra={"pull_request_id": pull_request_id, "user_id": new_reviewer_id})
        return updated, new_reviewer_id
