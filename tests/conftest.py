"""Shared upstream payload and model factories."""

from typing import Dict, List, Optional

import pytest

from src.data.errors import UpstreamUnavailableError
from src.data.scrapers.espn_client import ClientConfig
from src.models.box_score import BoxScoreStats, FourFactors, GameTeamStats
from src.models.game import Game
from src.models.team import Team


def make_statistics(
    fg: Optional[str] = "28-53",
    fg3: Optional[str] = "8-20",
    ft: Optional[str] = "12-16",
    oreb: Optional[int] = 10,
    dreb: Optional[int] = 25,
    rebounds: Optional[int] = None,
    turnovers: Optional[int] = 12,
) -> List[Dict]:
    stats = []
    if fg is not None:
        stats.append({"name": "fieldGoalsMade-fieldGoalsAttempted", "label": "FG", "displayValue": fg})
    if fg3 is not None:
        stats.append(
            {
                "name": "threePointFieldGoalsMade-threePointFieldGoalsAttempted",
                "label": "3PT",
                "displayValue": fg3,
            }
        )
    if ft is not None:
        stats.append({"name": "freeThrowsMade-freeThrowsAttempted", "label": "FT", "displayValue": ft})
    if rebounds is not None:
        stats.append({"name": "totalRebounds", "label": "Rebounds", "displayValue": str(rebounds)})
    if oreb is not None:
        stats.append({"name": "offensiveRebounds", "label": "Offensive Rebounds", "displayValue": str(oreb)})
    if dreb is not None:
        stats.append({"name": "defensiveRebounds", "label": "Defensive Rebounds", "displayValue": str(dreb)})
    if turnovers is not None:
        stats.append({"name": "totalTurnovers", "label": "Turnovers", "displayValue": str(turnovers)})
    return stats


def make_summary(
    game_id: str = "401",
    home_id: str = "150",
    away_id: str = "153",
    home_score=75,
    away_score=70,
    home_stats: Optional[List[Dict]] = None,
    away_stats: Optional[List[Dict]] = None,
    date: str = "2026-01-10T00:00Z",
    completed: bool = True,
    venue: str = "Cameron Indoor Stadium",
) -> Dict:
    """A ``/summary`` payload; the away team is listed first on purpose."""
    return {
        "boxscore": {
            "teams": [
                {
                    "team": {
                        "id": away_id,
                        "displayName": f"Team {away_id}",
                        "abbreviation": f"T{away_id}",
                        "logo": f"https://logos.example/{away_id}.png",
                        "color": "7bafd4",
                    },
                    "homeAway": "away",
                    "statistics": make_statistics() if away_stats is None else away_stats,
                },
                {
                    "team": {
                        "id": home_id,
                        "displayName": f"Team {home_id}",
                        "abbreviation": f"T{home_id}",
                        "logo": f"https://logos.example/{home_id}.png",
                        "color": "001a57",
                    },
                    "homeAway": "home",
                    "statistics": make_statistics() if home_stats is None else home_stats,
                },
            ]
        },
        "header": {
            "id": game_id,
            "competitions": [
                {
                    "date": date,
                    "venue": {"fullName": venue},
                    "status": {"type": {"completed": completed}},
                    "competitors": [
                        {"id": home_id, "homeAway": "home", "score": str(home_score)},
                        {"id": away_id, "homeAway": "away", "score": str(away_score)},
                    ],
                }
            ],
        },
    }


def make_team(team_id: str, conference_id: Optional[str] = "2", conference: str = "ACC") -> Team:
    return Team(
        id=team_id,
        name=f"Team {team_id}",
        abbreviation=f"T{team_id}",
        display_name=f"Team {team_id}",
        short_display_name=f"T{team_id}",
        logo=f"https://logos.example/{team_id}.png",
        color="#001a57",
        conference=conference if conference_id else "",
        conference_id=conference_id,
    )


def make_line(team_id: str, score: int, is_home: bool, factors: Optional[FourFactors] = None) -> GameTeamStats:
    return GameTeamStats(
        team_id=team_id,
        team_name=f"Team {team_id}",
        team_abbreviation=f"T{team_id}",
        team_logo=f"https://logos.example/{team_id}.png",
        team_color="#001a57",
        score=score,
        is_home=is_home,
        stats=BoxScoreStats(),
        factors=factors or FourFactors(),
    )


def make_game(
    game_id: str,
    home_id: str,
    away_id: str,
    home_score: int,
    away_score: int,
    conference: bool = False,
    complete: bool = True,
    date: str = "2026-01-10T00:00Z",
    home_factors: Optional[FourFactors] = None,
    away_factors: Optional[FourFactors] = None,
) -> Game:
    return Game(
        id=game_id,
        date=date,
        venue="Arena",
        home_team=make_line(home_id, home_score, True, home_factors),
        away_team=make_line(away_id, away_score, False, away_factors),
        is_complete=complete,
        is_conference_game=conference,
    )


def make_groups_payload(conferences: Dict[str, str]) -> Dict:
    return {
        "groups": [
            {
                "name": "NCAA Division I",
                "children": [
                    {"groupId": cid, "name": name, "abbreviation": name.lower()}
                    for cid, name in conferences.items()
                ],
            }
        ]
    }


def make_teams_payload(team_ids: List[str]) -> Dict:
    return {
        "sports": [
            {
                "leagues": [
                    {
                        "teams": [
                            {
                                "team": {
                                    "id": tid,
                                    "name": f"Team {tid}",
                                    "displayName": f"Team {tid}",
                                    "shortDisplayName": f"T{tid}",
                                    "abbreviation": f"T{tid}",
                                    "color": "001a57",
                                    "logos": [{"href": f"https://logos.example/{tid}.png"}],
                                }
                            }
                            for tid in team_ids
                        ]
                    }
                ]
            }
        ]
    }


def make_schedule_payload(events: Dict[str, bool]) -> Dict:
    return {
        "events": [
            {"id": eid, "competitions": [{"status": {"type": {"completed": completed}}}]}
            for eid, completed in events.items()
        ]
    }


class StubClient:
    """In-memory stand-in for ``ESPNClient`` keyed by upstream ids."""

    def __init__(
        self,
        conferences: Optional[Dict[str, str]] = None,
        members: Optional[Dict[str, List[str]]] = None,
        schedules: Optional[Dict[str, Dict[str, bool]]] = None,
        summaries: Optional[Dict[str, Dict]] = None,
        fail_conferences: bool = False,
        failing_conferences=(),
        failing_teams=(),
        failing_games=(),
    ):
        self.config = ClientConfig(base_url="http://stub.invalid")
        self.conferences = conferences or {}
        self.members = members or {}
        self.schedules = schedules or {}
        self.summaries = summaries or {}
        self.fail_conferences = fail_conferences
        self.failing_conferences = set(failing_conferences)
        self.failing_teams = set(failing_teams)
        self.failing_games = set(failing_games)
        self.request_count = 0
        self.calls: List[tuple] = []

    def _record(self, *call):
        self.calls.append(call)
        self.request_count += 1

    def get_conferences(self, gender, season):
        self._record("groups", gender, season.api_year)
        if self.fail_conferences:
            raise UpstreamUnavailableError("stub/groups", "HTTP 503", 3)
        return make_groups_payload(self.conferences)

    def get_conference_teams(self, gender, season, conference_id):
        self._record("teams", gender, conference_id)
        if conference_id in self.failing_conferences:
            raise UpstreamUnavailableError(f"stub/teams/{conference_id}", "HTTP 503", 3)
        return make_teams_payload(self.members.get(conference_id, []))

    def get_team_schedule(self, gender, season, team_id):
        self._record("schedule", gender, team_id)
        if team_id in self.failing_teams:
            raise UpstreamUnavailableError(f"stub/schedule/{team_id}", "timeout", 3)
        return make_schedule_payload(self.schedules.get(team_id, {}))

    def get_game_summary(self, gender, game_id):
        self._record("summary", gender, game_id)
        if game_id in self.failing_games:
            raise UpstreamUnavailableError(f"stub/summary/{game_id}", "HTTP 502", 3)
        return self.summaries.get(game_id, {})


@pytest.fixture
def summary_factory():
    return make_summary


@pytest.fixture
def statistics_factory():
    return make_statistics


@pytest.fixture
def team_factory():
    return make_team


@pytest.fixture
def game_factory():
    return make_game


@pytest.fixture
def stub_client_factory():
    return StubClient
