"""Fold per-game lines into season standings rows."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from ...models.box_score import FourFactors
from ...models.game import Game
from ...models.standings import TeamStandings
from ...models.team import Team
from .four_factors import FACTOR_NAMES

logger = logging.getLogger(__name__)


@dataclass
class _Accumulator:
    games: int = 0
    wins: int = 0
    losses: int = 0
    conf_wins: int = 0
    conf_losses: int = 0
    points: int = 0
    opp_points: int = 0
    own: Dict[str, float] = field(default_factory=lambda: dict.fromkeys(FACTOR_NAMES, 0.0))
    opp: Dict[str, float] = field(default_factory=lambda: dict.fromkeys(FACTOR_NAMES, 0.0))

    def add(self, own: FourFactors, opp: FourFactors) -> None:
        for name in FACTOR_NAMES:
            self.own[name] += getattr(own, name)
            self.opp[name] += getattr(opp, name)


class StandingsAggregator:
    """
    Build one ``TeamStandings`` row per roster team from completed games.

    Wins are a raw score comparison, so a tied score counts as a loss.
    Conference results only count games flagged ``is_conference_game``.
    Rows are sorted by wins, then conference wins (both descending); Python's
    stable sort keeps roster order for remaining ties.
    """

    def aggregate(self, teams: Sequence[Team], games: Iterable[Game]) -> List[TeamStandings]:
        accumulators: Dict[str, _Accumulator] = {team.id: _Accumulator() for team in teams}

        for game in games:
            if not game.is_complete:
                continue
            for line, opponent in ((game.home_team, game.away_team), (game.away_team, game.home_team)):
                acc = accumulators.get(line.team_id)
                if acc is None:
                    continue
                won = line.score > opponent.score
                acc.games += 1
                if won:
                    acc.wins += 1
                else:
                    acc.losses += 1
                if game.is_conference_game:
                    if won:
                        acc.conf_wins += 1
                    else:
                        acc.conf_losses += 1
                acc.points += line.score
                acc.opp_points += opponent.score
                acc.add(line.factors, opponent.factors)

        rows = [self._finalize(team, accumulators[team.id]) for team in teams]
        rows.sort(key=lambda row: (-row.wins, -row.conf_wins))
        logger.info("Aggregated standings for %d teams", len(rows))
        return rows

    @staticmethod
    def _finalize(team: Team, acc: _Accumulator) -> TeamStandings:
        n = acc.games

        def mean(total: float) -> float:
            return total / n if n else 0.0

        return TeamStandings(
            team_id=team.id,
            team_name=team.display_name,
            team_abbreviation=team.abbreviation,
            team_logo=team.logo,
            team_color=team.color,
            games_played=n,
            wins=acc.wins,
            losses=acc.losses,
            conf_wins=acc.conf_wins,
            conf_losses=acc.conf_losses,
            efg=mean(acc.own["efg"]),
            tov=mean(acc.own["tov"]),
            orb=mean(acc.own["orb"]),
            ftr=mean(acc.own["ftr"]),
            opp_efg=mean(acc.opp["efg"]),
            opp_tov=mean(acc.opp["tov"]),
            opp_orb=mean(acc.opp["orb"]),
            opp_ftr=mean(acc.opp["ftr"]),
            ppg=mean(acc.points),
            opp_ppg=mean(acc.opp_points),
        )
