# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: User activity toggles and review-load lookups.
"""

from reviewer_service.core.logging import get_logger
from reviewer_service.models.domain import PullRequest, User
from reviewer_service.repositories.base import Directory, PullRequestStore

logger = get_logger(__name__)


class UserService:
    def __init__(self, directory: Directory, store: PullRequestStore) -> None:
        self._directory = directory
        self._store = store

    def set_is_active(self, user_id: str, is_active: bool) -> User:
        """
        Toggle a user's active flag. Raises UserNotFound.
        Existing reviewer lists keep the user; only future selection changes.
        """
        user = self._directory.set_is_active(user_id, is_active)
        logger.info("User activity changed user=%s is_active=%s", user_id, is_active,
                    extra={"user_id": user_id})
        return user

    def get_review_pull_requests(self, user_id: str) -> list[PullRequest]:
        """Pull requests where ``user_id`` is currently a reviewer."""
        return self._store.list_by_reviewer(user_id)

    def count_users(self) -> tuple[int, int]:
        return self._directory.count_users()
