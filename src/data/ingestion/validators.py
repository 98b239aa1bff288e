"""Consistency validators for a materialized season partition."""

from __future__ import annotations

from typing import Dict, List, Sequence

from ...models.game import Game
from ...models.standings import TeamStandings
from ...models.team import Team


def validate_teams(teams: Sequence[Team]) -> List[str]:
    errors: List[str] = []
    seen = set()
    for idx, team in enumerate(teams):
        if not team.id:
            errors.append(f"teams[{idx}] missing id")
            continue
        if team.id in seen:
            errors.append(f"teams[{idx}] duplicate team id {team.id}")
        seen.add(team.id)
    return errors


def validate_games(games: Sequence[Game], team_ids: set) -> List[str]:
    errors: List[str] = []
    seen = set()
    for idx, game in enumerate(games):
        if game.id in seen:
            errors.append(f"games[{idx}] duplicate game id {game.id}")
        seen.add(game.id)
        if game.home_team.team_id == game.away_team.team_id:
            errors.append(f"games[{idx}] home and away are the same team {game.home_team.team_id}")
        for side, line in (("homeTeam", game.home_team), ("awayTeam", game.away_team)):
            if line.team_id not in team_ids:
                errors.append(f"games[{idx}].{side} team {line.team_id} not found in teams")
    return errors


def validate_standings(standings: Sequence[TeamStandings], team_ids: set) -> List[str]:
    errors: List[str] = []
    seen = set()
    for idx, row in enumerate(standings):
        if row.team_id in seen:
            errors.append(f"standings[{idx}] duplicate team id {row.team_id}")
        seen.add(row.team_id)
        if row.team_id not in team_ids:
            errors.append(f"standings[{idx}] team {row.team_id} not found in teams")
        if row.wins + row.losses != row.games_played:
            errors.append(
                f"standings[{idx}] wins+losses ({row.wins}+{row.losses}) != gamesPlayed ({row.games_played})"
            )
        if row.conf_wins + row.conf_losses > row.games_played:
            errors.append(f"standings[{idx}] conference games exceed gamesPlayed")
    return errors


def validate_season_payload(
    teams: Sequence[Team],
    games: Sequence[Game],
    standings: Sequence[TeamStandings],
) -> Dict[str, List[str]]:
    """Return validation errors keyed by collection; empty lists mean valid."""
    team_ids = {team.id for team in teams}
    return {
        "teams": validate_teams(teams),
        "games": validate_games(games, team_ids),
        "standings": validate_standings(standings, team_ids),
    }
