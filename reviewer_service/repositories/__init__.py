# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package: re-exports the contracts and both backends."""
from reviewer_service.repositories.base import Directory, PullRequestStore
from reviewer_service.repositories.directory_repository import DirectoryRepository
from reviewer_service.repositories.memory import (
    InMemoryDirectory,
    InMemoryPullRequestStore,
    MemoryDatabase,
)
from reviewer_service.repositories.pull_request_repository import PullRequestRepository

__all__ = [
    "Directory",
    "PullRequestStore",
    "DirectoryRepository",
    "PullRequestRepository",
    "InMemoryDirectory",
    "InMemoryPullRequestStore",
    "MemoryDatabase",
]
