"""Dean Oliver's Four Factors computed from box score counts.

Every ratio is expressed as a percentage. A zero denominator yields ``0.0``
rather than an error or NaN, so one degenerate box score never poisons the
season averages built on top of it. Values are never clamped: garbage
upstream counts stay visible as out-of-range percentages.
"""

from __future__ import annotations

from typing import Dict, Iterable, Tuple

from ...models.box_score import BoxScoreStats, FourFactors

# Share of a free throw attempt that ends a possession.
FREE_THROW_POSSESSION_WEIGHT = 0.44

FACTOR_NAMES = ("efg", "tov", "orb", "ftr")

# True when a higher value is better for the team that owns the factor.
FACTOR_DIRECTIONS: Dict[str, bool] = {
    "efg": True,
    "tov": False,
    "orb": True,
    "ftr": True,
}


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return numerator / denominator * 100.0


def calculate_efg(stats: BoxScoreStats) -> float:
    """eFG% = (FGM + 0.5 * 3PM) / FGA."""
    return _ratio(stats.fgm + 0.5 * stats.fg3m, stats.fga)


def calculate_tov(stats: BoxScoreStats) -> float:
    """TOV% = TOV / (FGA + 0.44 * FTA + TOV)."""
    return _ratio(stats.turnovers, stats.fga + FREE_THROW_POSSESSION_WEIGHT * stats.fta + stats.turnovers)


def calculate_orb(own_oreb: int, opponent_dreb: int) -> float:
    """ORB% = ORB / (ORB + opponent DRB)."""
    return _ratio(own_oreb, own_oreb + opponent_dreb)


def calculate_ftr(stats: BoxScoreStats) -> float:
    """FTR = FTM / FGA."""
    return _ratio(stats.ftm, stats.fga)


def calculate_possessions(stats: BoxScoreStats) -> float:
    """Possessions ~= FGA - ORB + TOV + 0.44 * FTA."""
    return stats.fga - stats.oreb + stats.turnovers + FREE_THROW_POSSESSION_WEIGHT * stats.fta


def calculate_four_factors(stats: BoxScoreStats, opponent_dreb: int) -> FourFactors:
    """
    Compute all four factors for one team.

    Args:
        stats: The team's box score
        opponent_dreb: The opponent's defensive rebounds, needed for ORB%

    Returns:
        FourFactors for the team
    """
    return FourFactors(
        efg=calculate_efg(stats),
        tov=calculate_tov(stats),
        orb=calculate_orb(stats.oreb, opponent_dreb),
        ftr=calculate_ftr(stats),
    )


def calculate_differential(own_value: float, opponent_value: float, higher_is_better: bool) -> float:
    """Signed advantage of ``own_value`` over ``opponent_value``; positive favours own."""
    diff = own_value - opponent_value
    return diff if higher_is_better else -diff


def calculate_season_averages(
    games: Iterable[Tuple[FourFactors, FourFactors]],
) -> Tuple[FourFactors, FourFactors]:
    """Mean own and opponent factors over ``(own, opponent)`` pairs; zeros when empty."""
    own_sum = dict.fromkeys(FACTOR_NAMES, 0.0)
    opp_sum = dict.fromkeys(FACTOR_NAMES, 0.0)
    count = 0
    for own, opp in games:
        count += 1
        for name in FACTOR_NAMES:
            own_sum[name] += getattr(own, name)
            opp_sum[name] += getattr(opp, name)
    if count == 0:
        return FourFactors(), FourFactors()
    return (
        FourFactors(**{name: own_sum[name] / count for name in FACTOR_NAMES}),
        FourFactors(**{name: opp_sum[name] / count for name in FACTOR_NAMES}),
    )
