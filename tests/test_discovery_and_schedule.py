"""Tests for conference/team discovery and the schedule crawler."""

import pytest

from src.data.errors import DiscoveryError
from src.data.scrapers.discovery import EntityDiscovery
from src.data.scrapers.schedule import ScheduleCrawler
from src.models.season import Season

SEASON = Season(2025)


def test_discovery_dedupes_teams_first_occurrence_wins(stub_client_factory):
    client = stub_client_factory(
        conferences={"2": "ACC", "8": "SEC"},
        members={"2": ["150", "153"], "8": ["333", "150"]},
    )
    result = EntityDiscovery(client).discover("mens", SEASON)
    assert [team.id for team in result.teams] == ["150", "153", "333"]
    duke = result.team_lookup["150"]
    assert (duke.conference, duke.conference_id) == ("ACC", "2")
    assert [c.id for c in result.conferences] == ["2", "8"]


def test_discovery_skips_failed_conference(stub_client_factory):
    client = stub_client_factory(
        conferences={"2": "ACC", "8": "SEC"},
        members={"2": ["150"], "8": ["333"]},
        failing_conferences={"8"},
    )
    result = EntityDiscovery(client).discover("mens", SEASON)
    assert [team.id for team in result.teams] == ["150"]
    assert result.failed_conference_ids == ["8"]


def test_discovery_conference_list_failure_is_fatal(stub_client_factory):
    client = stub_client_factory(fail_conferences=True)
    with pytest.raises(DiscoveryError):
        EntityDiscovery(client).discover("mens", SEASON)


def test_discovery_empty_roster_is_fatal(stub_client_factory):
    client = stub_client_factory(conferences={"2": "ACC"}, members={"2": []})
    with pytest.raises(DiscoveryError):
        EntityDiscovery(client).discover("womens", SEASON)


def test_parse_conferences_reads_leaf_groups_and_id_fallbacks():
    payload = {
        "groups": [
            {
                "name": "NCAA Division I",
                "uid": "s:40~l:41~g:50",
                "children": [
                    {"groupId": "2", "name": "ACC"},
                    {"id": "8", "name": "SEC"},
                    {"uid": "s:40~l:41~g:4", "name": "Big East"},
                    {"name": "Mystery"},
                    {"groupId": "2", "name": "ACC duplicate"},
                ],
            }
        ]
    }
    conferences = EntityDiscovery.parse_conferences(payload)
    assert [(c.id, c.name) for c in conferences] == [("2", "ACC"), ("8", "SEC"), ("4", "Big East")]


def test_parse_schedule_keeps_completed_only():
    payload = {
        "events": [
            {"id": "1", "competitions": [{"status": {"type": {"completed": True}}}]},
            {"id": "2", "competitions": [{"status": {"type": {"completed": False}}}]},
            {"id": "3"},
            {"competitions": [{"status": {"type": {"completed": True}}}]},
        ]
    }
    assert ScheduleCrawler.parse_schedule(payload) == ["1"]


def test_parse_schedule_skips_malformed_competitions():
    payload = {
        "events": [
            {"id": "1", "competitions": ["oops"]},
            {"id": "2", "competitions": [{"status": "final"}]},
            {"id": "3", "competitions": [{"status": {"type": "STATUS_FINAL"}}]},
            {"id": "4", "competitions": {"status": {}}},
            {"id": "5", "competitions": [{"status": {"type": {"completed": True}}}]},
        ]
    }
    assert ScheduleCrawler.parse_schedule(payload) == ["5"]


def test_crawl_dedupes_globally_and_records_failures(stub_client_factory, team_factory):
    client = stub_client_factory(
        schedules={
            "150": {"g1": True, "g2": True, "g9": False},
            "153": {"g2": True, "g3": True},
        },
        failing_teams={"333"},
    )
    teams = [team_factory("150"), team_factory("333"), team_factory("153")]
    result = ScheduleCrawler(client).crawl("mens", SEASON, teams)
    assert result.game_ids == ["g1", "g2", "g3"]
    assert result.failed_team_ids == ["333"]
