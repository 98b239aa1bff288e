"""Tests for season standings aggregation."""

import json

import pytest

from src.data.features.standings import StandingsAggregator
from src.models.box_score import FourFactors
from src.models.game import is_conference_matchup


def _record(game_factory, team_id, opponent_id, wins, losses, conf_wins, start=0):
    games = []
    for idx in range(wins + losses):
        won = idx < wins
        games.append(
            game_factory(
                f"{team_id}-{start + idx}",
                team_id,
                opponent_id,
                80 if won else 60,
                70,
                conference=idx < conf_wins or (not won and idx >= wins),
            )
        )
    return games


def test_wins_losses_and_conference_record(team_factory, game_factory):
    teams = [team_factory("1"), team_factory("2")]
    games = [
        game_factory("g1", "1", "2", 80, 70, conference=True),
        game_factory("g2", "2", "1", 75, 70, conference=False),
        game_factory("g3", "1", "2", 66, 60, conference=True),
    ]
    rows = {row.team_id: row for row in StandingsAggregator().aggregate(teams, games)}
    assert (rows["1"].wins, rows["1"].losses) == (2, 1)
    assert (rows["1"].conf_wins, rows["1"].conf_losses) == (2, 0)
    assert (rows["2"].wins, rows["2"].losses) == (1, 2)
    assert (rows["2"].conf_wins, rows["2"].conf_losses) == (0, 2)
    assert rows["1"].ppg == pytest.approx((80 + 70 + 66) / 3)
    assert rows["1"].opp_ppg == pytest.approx((70 + 75 + 60) / 3)
    for row in rows.values():
        assert row.wins + row.losses == row.games_played


def test_tied_score_counts_as_loss_for_both(team_factory, game_factory):
    teams = [team_factory("1"), team_factory("2")]
    rows = StandingsAggregator().aggregate(teams, [game_factory("g1", "1", "2", 70, 70)])
    assert all(row.losses == 1 and row.wins == 0 for row in rows)


def test_means_are_bounded_by_per_game_values(team_factory, game_factory):
    teams = [team_factory("1"), team_factory("2")]
    samples = [
        FourFactors(efg=44.0, tov=12.0, orb=25.0, ftr=18.0),
        FourFactors(efg=61.5, tov=21.0, orb=38.0, ftr=40.0),
        FourFactors(efg=52.0, tov=15.5, orb=31.0, ftr=22.0),
    ]
    games = [
        game_factory(f"g{idx}", "1", "2", 70 + idx, 65, home_factors=factors, away_factors=samples[-1 - idx])
        for idx, factors in enumerate(samples)
    ]
    row = next(r for r in StandingsAggregator().aggregate(teams, games) if r.team_id == "1")
    for name in ("efg", "tov", "orb", "ftr"):
        values = [getattr(f, name) for f in samples]
        assert min(values) <= getattr(row, name) <= max(values)
        assert min(values) <= getattr(row, f"opp_{name}") <= max(values)
    assert row.efg == pytest.approx(sum(f.efg for f in samples) / 3)


def test_teams_without_games_keep_zero_rows(team_factory, game_factory):
    teams = [team_factory("1"), team_factory("2"), team_factory("3")]
    rows = {row.team_id: row for row in StandingsAggregator().aggregate(teams, [game_factory("g1", "1", "2", 80, 70)])}
    idle = rows["3"]
    assert idle.games_played == 0
    assert (idle.wins, idle.losses, idle.efg, idle.ppg) == (0, 0, 0.0, 0.0)


def test_incomplete_games_and_non_roster_teams_ignored(team_factory, game_factory):
    teams = [team_factory("1")]
    games = [
        game_factory("g1", "1", "999", 80, 70),
        game_factory("g2", "1", "999", 50, 70, complete=False),
    ]
    rows = StandingsAggregator().aggregate(teams, games)
    assert [row.team_id for row in rows] == ["1"]
    assert (rows[0].wins, rows[0].losses, rows[0].games_played) == (1, 0, 1)


def test_equal_records_ranked_by_conference_wins(team_factory, game_factory):
    teams = [team_factory("Y"), team_factory("X"), team_factory("Z")]
    games = _record(game_factory, "Y", "Z", wins=10, losses=2, conf_wins=3)
    games += _record(game_factory, "X", "Z", wins=10, losses=2, conf_wins=6)
    rows = StandingsAggregator().aggregate(teams, games)
    order = [row.team_id for row in rows]
    x_row = next(r for r in rows if r.team_id == "X")
    y_row = next(r for r in rows if r.team_id == "Y")
    assert (x_row.wins, x_row.losses) == (10, 2)
    assert (y_row.wins, y_row.losses) == (10, 2)
    assert x_row.conf_wins > y_row.conf_wins
    assert order.index("X") < order.index("Y")


def test_full_ties_keep_roster_order(team_factory):
    teams = [team_factory("b"), team_factory("a"), team_factory("c")]
    rows = StandingsAggregator().aggregate(teams, [])
    assert [row.team_id for row in rows] == ["b", "a", "c"]


def test_aggregation_is_deterministic(team_factory, game_factory):
    teams = [team_factory("1"), team_factory("2"), team_factory("3")]
    games = [
        game_factory("g1", "1", "2", 80, 70, conference=True, home_factors=FourFactors(efg=50.123)),
        game_factory("g2", "3", "1", 71, 69),
        game_factory("g3", "2", "3", 64, 66, conference=True),
    ]
    first = [row.to_dict() for row in StandingsAggregator().aggregate(teams, games)]
    second = [row.to_dict() for row in StandingsAggregator().aggregate(teams, list(games))]
    assert json.dumps(first, sort_keys=True) == json.dumps(second, sort_keys=True)


def test_conference_matchup_truth_table(team_factory):
    acc_a = team_factory("1", "2")
    acc_b = team_factory("2", "2")
    sec = team_factory("3", "8", "SEC")
    independent = team_factory("4", None)
    assert is_conference_matchup(acc_a, acc_b) is True
    assert is_conference_matchup(acc_a, sec) is False
    assert is_conference_matchup(acc_a, independent) is False
    assert is_conference_matchup(independent, team_factory("5", None)) is False
    assert is_conference_matchup(acc_a, None) is False
