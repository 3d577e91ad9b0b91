# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""SQLAlchemy engine factory for the PostgreSQL backend."""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from reviewer_service.core.config import settings


def build_engine(url: str | None = None) -> Engine:
    return create_engine(
        url or settings.DATABASE_URL,
        pool_pre_ping=True,
        pool_size=settings.POOL_SIZE,
        max_overflow=settings.MAX_OVERFLOW,
        pool_recycle=settings.POOL_RECYCLE,
    )
