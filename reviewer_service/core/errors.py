# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain error taxonomy.

Every expected outcome of the assignment engine is a ServiceError subclass
carrying the wire error code and HTTP status used by the controllers. Anything
that is not a ServiceError (driver errors, bugs) propagates untouched and is
rendered as an internal error by the global handler in main.py.
"""

from typing import Any


class ServiceError(Exception):
    """Base class for expected, caller-recoverable outcomes."""

    code: str = "INTERNAL"
    status_code: int = 500
    default_message: str = "internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": {"code": self.code, "message": self.message}}


# ── Not found ──

class NotFound(ServiceError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "resource not found"


class PullRequestNotFound(NotFound):
    default_message = "pull request not found"


class UserNotFound(NotFound):
    default_message = "user not found"


class AuthorNotFound(UserNotFound):
    default_message = "author or team not found"


class TeamNotFound(NotFound):
    default_message = "team not found"


# ── Conflicts ──

class AlreadyExists(ServiceError):
    status_code = 400


class PullRequestExists(AlreadyExists):
    code = "PR_EXISTS"
    default_message = "pull_request_id already exists"


class TeamExists(AlreadyExists):
    code = "TEAM_EXISTS"
    default_message = "team_name already exists"


class AlreadyMerged(ServiceError):
    code = "PR_MERGED"
    status_code = 409
    default_message = "pull request is already merged"


class ReviewerNotAssigned(ServiceError):
    code = "NOT_ASSIGNED"
    status_code = 409
    default_message = "user is not assigned as reviewer"


class NoCandidate(ServiceError):
    code = "NO_CANDIDATE"
    status_code = 409
    default_message = "no candidate for reassignment"


# ── Aggregation ──

class StatsUnavailable(ServiceError):
    """Raised once every statistics branch has finished and at least one failed."""

    default_message = "statistics unavailable"

    def __init__(self, errors: dict[str, BaseException]) -> None:
        self.errors = errors
        super().__init__(f"{self.default_message}: {', '.join(sorted(errors))}")
