# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire repositories and services.
The storage backend is chosen once from STORAGE_BACKEND.
"""

from reviewer_service.core.config import settings
from reviewer_service.repositories.base import Directory, PullRequestStore
from reviewer_service.repositories.memory import (
    InMemoryDirectory,
    InMemoryPullRequestStore,
    MemoryDatabase,
)
from reviewer_service.services.pull_request_service import PullRequestService
from reviewer_service.services.stats_service import StatsService
from reviewer_service.services.team_service import TeamService
from reviewer_service.services.user_service import UserService

_engine = None
_memory_db: MemoryDatabase | None = None

# ── Singleton repository instances ──
if settings.STORAGE_BACKEND == "postgres":
    from reviewer_service.core.database import build_engine
    from reviewer_service.repositories.directory_repository import DirectoryRepository
    from reviewer_service.repositories.pull_request_repository import PullRequestRepository

    _engine = build_engine()
    _directory: Directory = DirectoryRepository(_engine)
    _store: PullRequestStore = PullRequestRepository(_engine)
elif settings.STORAGE_BACKEND == "memory":
    _memory_db = MemoryDatabase()
    _directory = InMemoryDirectory(_memory_db)
    _store = InMemoryPullRequestStore(_memory_db)
else:
    raise RuntimeError(f"Unknown STORAGE_BACKEND '{settings.STORAGE_BACKEND}'")

# ── Service instances (with injected dependencies) ──
_pull_request_service = PullRequestService(directory=_directory, store=_store)
_team_service = TeamService(directory=_directory)
_user_service = UserService(directory=_directory, store=_store)
_stats_service = StatsService(directory=_directory, store=_store)


# ── FastAPI dependency functions ──
def get_pull_request_service() -> PullRequestService:
    return _pull_request_service


def get_team_service() -> TeamService:
    return _team_service


def get_user_service() -> UserService:
    return _user_service


def get_stats_service() -> StatsService:
    return _stats_service


def get_directory() -> Directory:
    return _directory


def get_store() -> PullRequestStore:
    return _store


def get_memory_db() -> MemoryDatabase | None:
    return _memory_db


def shutdown() -> None:
    """Release pooled connections, if any."""
    if _engine is not None:
        _engine.dispose()
