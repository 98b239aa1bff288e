"""Normalize upstream game summaries into ``Game`` records.

Stat labels in the upstream box score vary across seasons and endpoints, so
each statistic is resolved through an ordered list of candidate keys. Every
raw stat entry is indexed under both its lower-cased ``label`` and ``name``;
the first candidate that parses wins and unresolved stats default to zero.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ...models.box_score import BoxScoreStats, GameTeamStats
from ...models.game import Game, is_conference_matchup
from ...models.team import DEFAULT_TEAM_COLOR, LOGO_URL_TEMPLATE, Team, normalize_color
from ..errors import UnparseableGameError
from ..features.four_factors import calculate_four_factors

logger = logging.getLogger(__name__)

# League-average share of rebounds that are offensive. Only used to split a
# total-rebounds figure when the box score omits the offensive/defensive
# breakdown; it is a modeling assumption, not a per-game measurement.
LEAGUE_OFFENSIVE_REBOUND_SHARE = 0.28

# Candidate keys per statistic, in priority order: short label, machine
# name, then free-text label.
MADE_ATTEMPTED_KEYS: Dict[str, Tuple[str, ...]] = {
    "fg": ("fg", "fieldgoalsmade-fieldgoalsattempted", "field goals"),
    "fg3": ("3pt", "threepointfieldgoalsmade-threepointfieldgoalsattempted", "3-pointers"),
    "ft": ("ft", "freethrowsmade-freethrowsattempted", "free throws"),
}

SINGLE_VALUE_KEYS: Dict[str, Tuple[str, ...]] = {
    "oreb": ("offensive rebounds", "offensiverebounds"),
    "dreb": ("defensive rebounds", "defensiverebounds"),
    "rebounds": ("rebounds", "totalrebounds"),
    "turnovers": ("turnovers", "totalturnovers", "to"),
}

_MADE_ATTEMPTED_RE = re.compile(r"^\s*(\d+)\s*-\s*(\d+)")
_INTEGER_RE = re.compile(r"^\s*(\d+)")


def parse_made_attempted(value: Optional[str]) -> Optional[Tuple[int, int]]:
    """Parse ``"28-53"`` into ``(28, 53)``; ``None`` when not an M-A pair."""
    if value is None:
        return None
    match = _MADE_ATTEMPTED_RE.match(str(value))
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def parse_count(value) -> Optional[int]:
    if value is None:
        return None
    match = _INTEGER_RE.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def split_rebounds(total: int, share: float = LEAGUE_OFFENSIVE_REBOUND_SHARE) -> Tuple[int, int]:
    """Estimate ``(oreb, dreb)`` from a total, rounding half up."""
    oreb = int(math.floor(total * share + 0.5))
    return oreb, total - oreb


class StatLookup:
    """Case-insensitive index over one team's raw statistics list."""

    def __init__(self, statistics: Sequence[Mapping]):
        self._values: Dict[str, str] = {}
        for stat in statistics:
            if not isinstance(stat, Mapping):
                continue
            value = stat.get("displayValue")
            if value is None:
                value = stat.get("value")
            value = "0" if value in (None, "") else str(value)
            for key in (stat.get("label"), stat.get("name")):
                key = str(key or "").strip().lower()
                if key:
                    self._values[key] = value

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key.lower())

    def made_attempted(self, keys: Sequence[str]) -> Tuple[int, int]:
        for key in keys:
            parsed = parse_made_attempted(self.get(key))
            if parsed is not None:
                return parsed
        return 0, 0

    def count(self, keys: Sequence[str]) -> int:
        for key in keys:
            parsed = parse_count(self.get(key))
            if parsed is not None:
                return parsed
        return 0


def parse_box_score_stats(
    statistics: Sequence[Mapping],
    offensive_rebound_share: float = LEAGUE_OFFENSIVE_REBOUND_SHARE,
) -> BoxScoreStats:
    lookup = StatLookup(statistics)
    fgm, fga = lookup.made_attempted(MADE_ATTEMPTED_KEYS["fg"])
    fg3m, fg3a = lookup.made_attempted(MADE_ATTEMPTED_KEYS["fg3"])
    ftm, fta = lookup.made_attempted(MADE_ATTEMPTED_KEYS["ft"])
    oreb = lookup.count(SINGLE_VALUE_KEYS["oreb"])
    dreb = lookup.count(SINGLE_VALUE_KEYS["dreb"])
    total_rebounds = lookup.count(SINGLE_VALUE_KEYS["rebounds"])
    if total_rebounds > 0 and oreb == 0 and dreb == 0:
        oreb, dreb = split_rebounds(total_rebounds, offensive_rebound_share)
    return BoxScoreStats(
        fgm=fgm,
        fga=fga,
        fg3m=fg3m,
        fg3a=fg3a,
        ftm=ftm,
        fta=fta,
        oreb=oreb,
        dreb=dreb,
        turnovers=lookup.count(SINGLE_VALUE_KEYS["turnovers"]),
    )


@dataclass
class ParsedGame:
    game: Game
    warnings: List[str] = field(default_factory=list)
    external_teams: List[Team] = field(default_factory=list)


@dataclass
class _TeamSide:
    info: Dict
    stats: BoxScoreStats
    score: int
    tag: str = ""
    is_home: bool = False


class BoxScoreParser:
    """Turn one game summary payload into a ``Game`` with both team lines."""

    def __init__(
        self,
        team_lookup: Optional[Mapping[str, Team]] = None,
        offensive_rebound_share: float = LEAGUE_OFFENSIVE_REBOUND_SHARE,
    ):
        self.team_lookup = dict(team_lookup or {})
        self.offensive_rebound_share = offensive_rebound_share

    def parse(self, payload: Mapping, game_id: str) -> ParsedGame:
        """
        Parse a summary payload.

        Args:
            payload: Raw ``/summary`` response
            game_id: Upstream event id

        Returns:
            ParsedGame holding the frozen game and any parse warnings

        Raises:
            UnparseableGameError: If the box score or competition context is missing
        """
        game_id = str(game_id)
        boxscore = payload.get("boxscore") or {}
        team_boxes = [t for t in boxscore.get("teams") or [] if isinstance(t, Mapping)]
        if len(team_boxes) < 2:
            raise UnparseableGameError(game_id, "box score has fewer than two teams")

        header = payload.get("header") or {}
        competitions = header.get("competitions") or []
        competition = competitions[0] if competitions and isinstance(competitions[0], Mapping) else None
        if not competition:
            raise UnparseableGameError(game_id, "missing competition context")
        competitors = [c for c in competition.get("competitors") or [] if isinstance(c, Mapping)]

        warnings: List[str] = []
        sides = [self._parse_side(game_id, box, competitors, warnings) for box in team_boxes[:2]]
        first_id, second_id = (str(side.info.get("id")) for side in sides)
        if first_id == second_id:
            raise UnparseableGameError(game_id, f"both box score teams have id {first_id}")
        home, away = self._assign_home_away(game_id, sides)

        # Both box scores must exist before either side's ORB% can be computed.
        home_line = self._team_line(home, opponent=away)
        away_line = self._team_line(away, opponent=home)

        home_team = self.team_lookup.get(home_line.team_id)
        away_team = self.team_lookup.get(away_line.team_id)
        external = [
            Team.from_upstream(side.info)
            for side, known in ((home, home_team), (away, away_team))
            if known is None
        ]

        venue = (competition.get("venue") or {}).get("fullName") or (
            ((payload.get("gameInfo") or {}).get("venue") or {}).get("fullName") or ""
        )
        status_type = (competition.get("status") or {}).get("type") or {}
        game = Game(
            id=game_id,
            date=competition.get("date") or header.get("gameDate") or "",
            venue=venue,
            home_team=home_line,
            away_team=away_line,
            is_complete=bool(status_type.get("completed", False)),
            is_conference_game=is_conference_matchup(home_team, away_team),
        )
        for line in (home_line, away_line):
            for anomaly in line.stats.anomalies():
                warnings.append(f"game {game_id} team {line.team_id}: {anomaly}")
        for warning in warnings:
            logger.warning("Parse warning: %s", warning)
        return ParsedGame(game=game, warnings=warnings, external_teams=external)

    def _parse_side(
        self,
        game_id: str,
        team_box: Mapping,
        competitors: List[Mapping],
        warnings: List[str],
    ) -> _TeamSide:
        info = team_box.get("team") or {}
        team_id = str(info.get("id") or "")
        if not team_id:
            raise UnparseableGameError(game_id, "box score team without id")
        statistics = team_box.get("statistics") or []
        if not statistics:
            raise UnparseableGameError(game_id, f"team {team_id} has no box score statistics")

        competitor = self._find_competitor(competitors, team_id)
        if competitor is None:
            warnings.append(f"game {game_id}: no competitor matches team {team_id}; score defaulted to 0")
            score = 0
        else:
            score = self._parse_score(competitor.get("score"))

        tag = team_box.get("homeAway") or (competitor or {}).get("homeAway") or ""
        return _TeamSide(
            info=dict(info),
            stats=parse_box_score_stats(statistics, self.offensive_rebound_share),
            score=score,
            tag=str(tag).strip().lower(),
        )

    @staticmethod
    def _assign_home_away(game_id: str, sides: List[_TeamSide]) -> Tuple[_TeamSide, _TeamSide]:
        """Resolve (home, away); exactly one side must carry the ``home`` tag."""
        first, second = sides
        tags = (first.tag, second.tag)
        if tags.count("home") != 1:
            raise UnparseableGameError(game_id, f"home/away tags {tags} do not identify exactly one home team")
        home, away = (first, second) if first.tag == "home" else (second, first)
        home.is_home = True
        away.is_home = False
        return home, away

    def _team_line(self, side: _TeamSide, opponent: _TeamSide) -> GameTeamStats:
        team_id = str(side.info.get("id"))
        known = self.team_lookup.get(team_id)
        info = side.info
        if known is not None:
            name = known.display_name
            abbreviation = known.abbreviation
            logo = known.logo
            color = known.color
        else:
            name = info.get("displayName") or info.get("name") or ""
            abbreviation = info.get("abbreviation") or ""
            logo = info.get("logo") or LOGO_URL_TEMPLATE.format(team_id=team_id)
            color = normalize_color(info.get("color"), DEFAULT_TEAM_COLOR)
        return GameTeamStats(
            team_id=team_id,
            team_name=name,
            team_abbreviation=abbreviation,
            team_logo=logo,
            team_color=color,
            score=side.score,
            is_home=side.is_home,
            stats=side.stats,
            factors=calculate_four_factors(side.stats, opponent.stats.dreb),
        )

    @staticmethod
    def _find_competitor(competitors: List[Mapping], team_id: str) -> Optional[Mapping]:
        for competitor in competitors:
            if str(competitor.get("id") or "") == team_id:
                return competitor
            if str((competitor.get("team") or {}).get("id") or "") == team_id:
                return competitor
        return None

    @staticmethod
    def _parse_score(value) -> int:
        if isinstance(value, Mapping):
            value = value.get("value", value.get("displayValue"))
        if isinstance(value, float):
            return int(value)
        return parse_count(value) or 0
