# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Data-access layer for users, teams, and team membership (PostgreSQL)."""
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Engine

from reviewer_service.core.errors import TeamExists, TeamNotFound, UserNotFound
from reviewer_service.models.domain import Team, TeamMember, User
from reviewer_service.repositories.base import Directory

USER_COLS = "user_id, username, team_name, is_active"

UPSERT_USER_SQL = """
    INSERT INTO users (user_id, username, team_name, is_active)
    VALUES (:user_id, :username, :team_name, :is_active)
    ON CONFLICT (user_id) DO UPDATE SET
        username  = EXCLUDED.username,
        team_name = EXCLUDED.team_name,
        is_active = EXCLUDED.is_active
"""


def _row_to_user(row: Any) -> User:
    return User(
        user_id=row["user_id"],
        username=row["username"],
        team_name=row["team_name"],
        is_active=bool(row["is_active"]),
    )


def _fetch_roster(conn: Any, team_name: str) -> Team:
    rows = conn.execute(
        text("""
            SELECT user_id, username, is_active
            FROM users
            WHERE team_name = :name
            ORDER BY seq
        """),
        {"name": team_name},
    ).mappings().all()
    return Team(
        team_name=team_name,
        members=[
            TeamMember(user_id=r["user_id"], username=r["username"],
                       is_active=bool(r["is_active"]))
            for r in rows
        ],
    )


class DirectoryRepository(Directory):
    def __init__(self, engine: Engine):
        self._engine = engine

    # ── Read ───────────────────────────────────────────────────────────

    def get_user(self, user_id: str) -> User:
        with self._engine.connect() as conn:
            row = conn.execute(
                text(f"SELECT {USER_COLS} FROM users WHERE user_id = :id"),
                {"id": user_id},
            ).mappings().first()
        if not row:
            raise UserNotFound(f"user {user_id} not found")
        return _row_to_user(row)

    def get_team(self, team_name: str) -> Team:
        with self._engine.connect() as conn:
            exists = conn.execute(
                text("SELECT 1 FROM teams WHERE team_name = :name"), {"name": team_name}
            ).fetchone()
            if not exists:
                raise TeamNotFound(f"team {team_name} not found")
            return _fetch_roster(conn, team_name)

    def count_teams(self) -> int:
        with self._engine.connect() as conn:
            return conn.execute(text("SELECT COUNT(*) FROM teams")).scalar() or 0

    def count_users(self) -> tuple[int, int]:
        with self._engine.connect() as conn:
            row = conn.execute(text("""
                SELECT
                    COUNT(*)                          AS total,
                    COUNT(*) FILTER (WHERE is_active) AS active
                FROM users
            """)).fetchone()
        return row[0] or 0, row[1] or 0

    # ── Write ──────────────────────────────────────────────────────────

    def add_team(self, team: Team) -> Team:
        with self._engine.begin() as conn:
            result = conn.execute(
                text("INSERT INTO teams (team_name) VALUES (:name) ON CONFLICT (team_name) DO NOTHING"),
                {"name": team.team_name},
            )
            if result.rowcount == 0:
                raise TeamExists()
            for member in team.members:
                conn.execute(
                    text(UPSERT_USER_SQL),
                    {"user_id": member.user_id, "username": member.username,
                     "team_name": team.team_name, "is_active": member.is_active},
                )
            # Read back inside the transaction so the roster matches these writes.
            return _fetch_roster(conn, team.team_name)

    def set_is_active(self, user_id: str, is_active: bool) -> User:
        with self._engine.begin() as conn:
            row = conn.execute(
                text(f"""
                    UPDATE users SET is_active = :is_active
                    WHERE user_id = :id
                    RETURNING {USER_COLS}
                """),
                {"id": user_id, "is_active": is_active},
            ).mappings().first()
        if not row:
            raise UserNotFound(f"user {user_id} not found")
        return _row_to_user(row)

    def verify_connection(self) -> None:
        with self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))
