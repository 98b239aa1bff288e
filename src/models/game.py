"""Game model for completed regular-season and postseason games."""

from dataclasses import dataclass
from typing import Optional

from .box_score import GameTeamStats
from .team import Team


def is_conference_matchup(home: Optional[Team], away: Optional[Team]) -> bool:
    """True only when both teams have a known, identical conference id."""
    if home is None or away is None:
        return False
    if not home.conference_id or not away.conference_id:
        return False
    return home.conference_id == away.conference_id


@dataclass(frozen=True)
class Game:
    """Represents a single completed game between two teams."""

    id: str
    date: str
    venue: str
    home_team: GameTeamStats
    away_team: GameTeamStats
    is_complete: bool
    is_conference_game: bool

    @property
    def team_ids(self) -> tuple:
        return (self.home_team.team_id, self.away_team.team_id)

    def involves(self, team_id: str) -> bool:
        return team_id in self.team_ids

    def line_for(self, team_id: str) -> Optional[GameTeamStats]:
        """Return the given team's line, or ``None`` if it did not play."""
        if self.home_team.team_id == team_id:
            return self.home_team
        if self.away_team.team_id == team_id:
            return self.away_team
        return None

    def opponent_of(self, team_id: str) -> Optional[GameTeamStats]:
        if self.home_team.team_id == team_id:
            return self.away_team
        if self.away_team.team_id == team_id:
            return self.home_team
        return None

    def to_dict(self) -> dict:
        """Convert game to dictionary."""
        return {
            "id": self.id,
            "date": self.date,
            "venue": self.venue,
            "homeTeam": self.home_team.to_dict(),
            "awayTeam": self.away_team.to_dict(),
            "isComplete": self.is_complete,
            "isConferenceGame": self.is_conference_game,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Game":
        """Create game from dictionary."""
        return cls(
            id=str(data["id"]),
            date=data.get("date", ""),
            venue=data.get("venue", ""),
            home_team=GameTeamStats.from_dict(data["homeTeam"]),
            away_team=GameTeamStats.from_dict(data["awayTeam"]),
            is_complete=bool(data.get("isComplete", False)),
            is_conference_game=bool(data.get("isConferenceGame", False)),
        )
