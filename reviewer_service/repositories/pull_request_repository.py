# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for pull requests and their reviewer lists (PostgreSQL)."""
from datetime import datetime
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Engine

from reviewer_service.core.errors import (
    AlreadyMerged,
    NoCandidate,
    PullRequestExists,
    PullRequestNotFound,
    ReviewerNotAssigned,
)
from reviewer_service.core.logging import get_logger
from reviewer_service.models.domain import (
    PullRequest,
    PullRequestStatus,
    ReviewerAssignmentCount,
)
from reviewer_service.repositories.base import PullRequestStore

logger = get_logger(__name__)

PR_COLS = (
    "pull_request_id, pull_request_name, author_id, status, "
    "assigned_reviewers, created_at, merged_at"
)


def _row_to_pr(row: Any) -> PullRequest:
    return PullRequest(
        pull_request_id=row["pull_request_id"],
        pull_request_name=row["pull_request_name"],
        author_id=row["author_id"],
        status=PullRequestStatus(row["status"]),
        assigned_reviewers=list(row["assigned_reviewers"] or []),
        created_at=row["created_at"],
        merged_at=row["merged_at"],
    )


class PullRequestRepository(PullRequestStore):
    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Write ──────────────────────────────────────────────────────────

    def create(self, pull_request: PullRequest) -> None:
        with self._engine.begin() as conn:
            result = conn.execute(
                text(f"""
                    INSERT INTO pull_requests ({PR_COLS})
                    VALUES (:id, :name, :author_id, :status, :reviewers, :created_at, :merged_at)
                    ON CONFLICT (pull_request_id) DO NOTHING
                """),
                {
                    "id": pull_request.pull_request_id,
                    "name": pull_request.pull_request_name,
                    "author_id": pull_request.author_id,
                    "status": pull_request.status.value,
                    "reviewers": list(pull_request.assigned_reviewers),
                    "created_at": pull_request.created_at,
                    "merged_at": pull_request.merged_at,
                },
            )
            if result.rowcount == 0:
                raise PullRequestExists()

    def merge(self, pull_request_id: str, merged_at: datetime) -> PullRequest:
        with self._engine.begin() as conn:
            row = conn.execute(
                text(f"""
                    UPDATE pull_requests
                    SET status    = 'MERGED',
                        merged_at = COALESCE(merged_at, :merged_at)
                    WHERE pull_request_id = :id
                    RETURNING {PR_COLS}
                """),
                {"id": pull_request_id, "merged_at": merged_at},
            ).mappings().first()
        if not row:
            raise PullRequestNotFound(f"pull request {pull_request_id} not found")
        return _row_to_pr(row)

    def reassign_reviewer(
        self, pull_request_id: str, old_reviewer_id: str, new_reviewer_id: str
    ) -> PullRequest:
        params = {"id": pull_request_id, "old": old_reviewer_id, "new": new_reviewer_id}
        with self._engine.begin() as conn:
            # One conditional statement: the row lock taken by UPDATE serializes
            # racing reassignments, and the loser re-reads the committed state.
            row = conn.execute(
                text(f"""
                    UPDATE pull_requests
                    SET assigned_reviewers = array_replace(
                            assigned_reviewers, CAST(:old AS TEXT), CAST(:new AS TEXT))
                    WHERE pull_request_id = :id
                      AND status = 'OPEN'
                      AND CAST(:old AS TEXT) = ANY (assigned_reviewers)
                      AND NOT (CAST(:new AS TEXT) = ANY (assigned_reviewers))
                    RETURNING {PR_COLS}
                """),
                params,
            ).mappings().first()
            if row:
                return _row_to_pr(row)

            current = conn.execute(
                text("SELECT status, assigned_reviewers FROM pull_requests WHERE pull_request_id = :id"),
                {"id": pull_request_id},
            ).mappings().first()

        if not current:
            raise PullRequestNotFound(f"pull request {pull_request_id} not found")
        if current["status"] != PullRequestStatus.OPEN.value:
            raise AlreadyMerged()
        reviewers = list(current["assigned_reviewers"] or [])
        if old_reviewer_id not in reviewers:
            raise ReviewerNotAssigned()
        logger.warning("Reassign lost race pr=%s candidate=%s already assigned",
                       pull_request_id, new_reviewer_id)
        raise NoCandidate(f"{new_reviewer_id} is already assigned")

    # ── Read ───────────────────────────────────────────────────────────

    def get(self, pull_request_id: str) -> PullRequest:
        with self._engine.connect() as conn:
            row = conn.execute(
                text(f"SELECT {PR_COLS} FROM pull_requests WHERE pull_request_id = :id"),
                {"id": pull_request_id},
            ).mappings().first()
        if not row:
            raise PullRequestNotFound(f"pull request {pull_request_id} not found")
        return _row_to_pr(row)

    def list_by_reviewer(self, user_id: str) -> list[PullRequest]:
        with self._engine.connect() as conn:
            rows = conn.execute(
                text(f"""
                    SELECT {PR_COLS} FROM pull_requests
                    WHERE CAST(:uid AS TEXT) = ANY (assigned_reviewers)
                    ORDER BY created_at
                """),
                {"uid": user_id},
            ).mappings().all()
        return [_row_to_pr(r) for r in rows]

    def count_by_status(self) -> tuple[int, int, int]:
        with self._engine.connect() as conn:
            row = conn.execute(text("""
                SELECT
                    COUNT(*)                                AS total,
                    COUNT(*) FILTER (WHERE status = 'OPEN')   AS open_count,
                    COUNT(*) FILTER (WHERE status = 'MERGED') AS merged_count
                FROM pull_requests
            """)).fetchone()
        return row[0] or 0, row[1] or 0, row[2] or 0

    def assignment_counts(self) -> list[ReviewerAssignmentCount]:
        with self._engine.connect() as conn:
            rows = conn.execute(text("""
                SELECT reviewer AS user_id, COUNT(*) AS assignments
                FROM pull_requests, unnest(assigned_reviewers) AS reviewer
                GROUP BY reviewer
                ORDER BY reviewer
            """)).fetchall()
        return [ReviewerAssignmentCount(user_id=r[0], assignments=r[1]) for r in rows]

    def verify_connection(self) -> None:
        with self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))
