"""Read-only access to a materialized season partition."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd

from ..models.box_score import FourFactors
from ..models.game import Game
from ..models.season import Season, league_path
from ..models.standings import FACTOR_FIELDS, TeamStandings
from ..models.team import Team
from .ingestion.materializer import GAMES_FILE, STANDINGS_FILE, TEAMS_FILE, partition_dir
from .normalize import fold_text

logger = logging.getLogger(__name__)

_SEASON_DIR_RE = re.compile(r"^\d{4}-\d{2}$")

STANDINGS_COLUMNS = [
    "teamId",
    "teamName",
    "teamAbbreviation",
    "conference",
    "gamesPlayed",
    "wins",
    "losses",
    "confWins",
    "confLosses",
    "ppg",
    "oppPpg",
] + [TeamStandings.camel_key(name) for name in FACTOR_FIELDS]


def _read_json(path: Path) -> list:
    with open(path, "r") as f:
        payload = json.load(f)
    if not isinstance(payload, list):
        raise ValueError(f"{path} must contain a JSON list")
    return payload


def available_seasons(data_dir: str, gender: str) -> List[Season]:
    """Seasons with a complete partition for ``gender``, most recent first."""
    league_path(gender)
    root = Path(data_dir)
    if not root.is_dir():
        return []
    seasons = []
    for child in root.iterdir():
        if not child.is_dir() or not _SEASON_DIR_RE.match(child.name):
            continue
        partition = child / gender
        if all((partition / name).is_file() for name in (TEAMS_FILE, GAMES_FILE, STANDINGS_FILE)):
            try:
                seasons.append(Season.parse(child.name))
            except ValueError:
                logger.debug("Ignoring malformed season directory %s", child)
    return sorted(seasons, reverse=True)


@dataclass(frozen=True)
class SeasonDataRepository:
    """
    Immutable in-memory view of one (season, gender) partition.

    Built once by :meth:`load`; every query is a pure function of the loaded
    tuples, so a repository can be shared freely between readers.
    """

    season: Season
    gender: str
    teams: Tuple[Team, ...]
    games: Tuple[Game, ...]
    standings: Tuple[TeamStandings, ...]

    @classmethod
    def load(cls, data_dir: str, gender: str, season: Season) -> "SeasonDataRepository":
        """
        Load a partition from disk.

        Args:
            data_dir: Root the materializer wrote to
            gender: ``mens`` or ``womens``
            season: Season to load

        Returns:
            SeasonDataRepository

        Raises:
            FileNotFoundError: If the partition has not been materialized
        """
        league_path(gender)
        base = partition_dir(data_dir, season, gender)
        teams = tuple(Team.from_dict(row) for row in _read_json(base / TEAMS_FILE))
        games = tuple(Game.from_dict(row) for row in _read_json(base / GAMES_FILE))
        standings = tuple(TeamStandings.from_dict(row) for row in _read_json(base / STANDINGS_FILE))
        logger.debug("Loaded %d teams, %d games from %s", len(teams), len(games), base)
        return cls(season=season, gender=gender, teams=teams, games=games, standings=standings)

    @property
    def _teams_by_id(self) -> Dict[str, Team]:
        return {team.id: team for team in self.teams}

    def team_by_id(self, team_id: str) -> Optional[Team]:
        return self._teams_by_id.get(str(team_id))

    def team_standings(self, team_id: str) -> Optional[TeamStandings]:
        team_id = str(team_id)
        for row in self.standings:
            if row.team_id == team_id:
                return row
        return None

    def team_games(self, team_id: str) -> List[Game]:
        """Games involving the team, in stored (most recent first) order."""
        team_id = str(team_id)
        return [game for game in self.games if game.involves(team_id)]

    def game_by_id(self, game_id: str) -> Optional[Game]:
        game_id = str(game_id)
        for game in self.games:
            if game.id == game_id:
                return game
        return None

    def recent_games(self, limit: int = 10) -> List[Game]:
        return [game for game in self.games if game.is_complete][: max(limit, 0)]

    def search_teams(self, query: str) -> List[Team]:
        needle = fold_text(query)
        if not needle:
            return []
        return [
            team
            for team in self.teams
            if any(needle in fold_text(value) for value in (team.name, team.display_name, team.abbreviation))
        ]

    def conferences(self) -> List[Dict[str, str]]:
        """Unique ``{"id", "name"}`` conferences, sorted by name."""
        seen: Dict[str, str] = {}
        for team in self.teams:
            if team.conference_id and team.conference_id not in seen:
                seen[team.conference_id] = team.conference
        return [{"id": cid, "name": name} for cid, name in sorted(seen.items(), key=lambda kv: (kv[1], kv[0]))]

    def team_conference(self, team_id: str) -> Optional[str]:
        team = self.team_by_id(team_id)
        if team is None or not team.has_conference:
            return None
        return team.conference

    def conference_standings(self, conference_id: str) -> List[TeamStandings]:
        """Standings rows for one conference, in overall standings order."""
        conference_id = str(conference_id)
        members = {team.id for team in self.teams if team.conference_id == conference_id}
        return [row for row in self.standings if row.team_id in members]

    def league_averages(self) -> Tuple[FourFactors, FourFactors]:
        """Mean own and allowed factors over teams that have played."""
        played = [row for row in self.standings if row.games_played > 0]
        if not played:
            return FourFactors(), FourFactors()
        n = len(played)

        def mean(attr: str) -> float:
            return sum(getattr(row, attr) for row in played) / n

        return (
            FourFactors(efg=mean("efg"), tov=mean("tov"), orb=mean("orb"), ftr=mean("ftr")),
            FourFactors(efg=mean("opp_efg"), tov=mean("opp_tov"), orb=mean("opp_orb"), ftr=mean("opp_ftr")),
        )

    def standings_frame(self, conference_id: Optional[str] = None) -> pd.DataFrame:
        """Standings as a DataFrame with a ``conference`` column; one row per team."""
        rows = self.conference_standings(conference_id) if conference_id else list(self.standings)
        teams = self._teams_by_id
        records = []
        for row in rows:
            record = row.to_dict()
            team = teams.get(row.team_id)
            record["conference"] = team.conference if team else ""
            records.append(record)
        return pd.DataFrame.from_records(records, columns=STANDINGS_COLUMNS)
