"""Immutable records shared by ingestion and the read side."""

from .box_score import BoxScoreStats, FourFactors, GameTeamStats
from .game import Game
from .season import GENDERS, Season
from .standings import TeamStandings
from .team import Team

__all__ = [
    "BoxScoreStats",
    "FourFactors",
    "GENDERS",
    "Game",
    "GameTeamStats",
    "Season",
    "Team",
    "TeamStandings",
]
