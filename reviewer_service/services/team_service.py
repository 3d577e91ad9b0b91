# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Team creation and roster lookups.
"""

from reviewer_service.core.logging import get_logger
from reviewer_service.metrics.prometheus import TEAMS_CREATED
from reviewer_service.models.domain import Team, TeamMember
from reviewer_service.repositories.base import Directory

logger = get_logger(__name__)


class TeamService:
    def __init__(self, directory: Directory) -> None:
        self._directory = directory

    def add_team(self, team_name: str, members: list[TeamMember]) -> Team:
        """
        Create a team and upsert its members. Existing users move into the
        new team. Raises TeamExists if the name is already taken.
        """
        team = self._directory.add_team(Team(team_name=team_name, members=members))
        TEAMS_CREATED.inc()
        logger.info("Team created team=%s members=%d", team_name, len(members),
                    extra={"team_name": team_name})
        return team

    def get_team(self, team_name: str) -> Team:
        return self._directory.get_team(team_name)

    def count_teams(self) -> int:
        return self._directory.count_teams()
