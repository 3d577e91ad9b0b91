# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Aggregate statistics.

Four independent read-only queries run concurrently. Each branch returns its
own partial result; the join point builds the report, or raises one
StatsUnavailable carrying every branch error once all branches are done.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable

from reviewer_service.core.config import settings
from reviewer_service.core.errors import StatsUnavailable
from reviewer_service.core.logging import get_logger
from reviewer_service.metrics.prometheus import STATS_BRANCH_FAILURES
from reviewer_service.repositories.base import Directory, PullRequestStore

logger = get_logger(__name__)


class StatsService:
    def __init__(self, directory: Directory, store: PullRequestStore) -> None:
        self._directory = directory
        self._store = store

    def _users(self) -> dict[str, Any]:
        total, active = self._directory.count_users()
        return {"total_users": total, "active_users": active}

    def _teams(self) -> dict[str, Any]:
        return {"total_teams": self._directory.count_teams()}

    def _pull_requests(self) -> dict[str, Any]:
        total, opened, merged = self._store.count_by_status()
        return {
            "total_pull_requests": total,
            "open_pull_requests": opened,
            "merged_pull_requests": merged,
        }

    def _assignments(self) -> dict[str, Any]:
        return {
            "assignments": [c.model_dump() for c in self._store.assignment_counts()],
        }

    def get_stats(self) -> dict[str, Any]:
        branches: dict[str, Callable[[], dict[str, Any]]] = {
            "users": self._users,
            "teams": self._teams,
            "pull_requests": self._pull_requests,
            "assignments": self._assignments,
        }
        with ThreadPoolExecutor(
            max_workers=max(1, min(settings.STATS_MAX_WORKERS, len(branches))),
            thread_name_prefix="stats",
        ) as pool:
            futures = {name: pool.submit(fn) for name, fn in branches.items()}

        report: dict[str, Any] = {}
        errors: dict[str, BaseException] = {}
        for name, future in futures.items():
            exc = future.exception()
            if exc is not None:
                STATS_BRANCH_FAILURES.labels(branch=name).inc()
                logger.error("Stats branch failed branch=%s: %s", name, exc)
                errors[name] = exc
                continue
            report.update(future.result())

        if errors:
            raise StatsUnavailable(errors)
        return report
