"""Completed-game discovery from team schedules."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from ...models.season import Season
from ...models.team import Team
from ..errors import UpstreamUnavailableError
from .espn_client import ESPNClient

logger = logging.getLogger(__name__)


@dataclass
class CrawlResult:
    game_ids: List[str] = field(default_factory=list)
    failed_team_ids: List[str] = field(default_factory=list)


class ScheduleCrawler:
    """Collect completed game ids across a roster, deduplicated globally."""

    def __init__(self, client: ESPNClient):
        self.client = client

    def completed_game_ids(self, gender: str, season: Season, team_id: str) -> List[str]:
        """Return completed game ids for one team; raises when the schedule is unavailable."""
        payload = self.client.get_team_schedule(gender, season, team_id)
        return self.parse_schedule(payload)

    def crawl(self, gender: str, season: Season, teams: Iterable[Team]) -> CrawlResult:
        result = CrawlResult()
        seen = set()
        for team in teams:
            logger.info("Fetching schedule for %s", team.display_name or team.id)
            try:
                game_ids = self.completed_game_ids(gender, season, team.id)
            except UpstreamUnavailableError as exc:
                logger.warning("Skipping schedule for team %s: %s", team.id, exc)
                result.failed_team_ids.append(team.id)
                continue
            for game_id in game_ids:
                if game_id not in seen:
                    seen.add(game_id)
                    result.game_ids.append(game_id)
        logger.info("Found %d unique completed games", len(result.game_ids))
        return result

    @staticmethod
    def parse_schedule(payload: Dict) -> List[str]:
        game_ids: List[str] = []
        for event in payload.get("events") or []:
            if not isinstance(event, dict) or not event.get("id"):
                continue
            competitions = event.get("competitions")
            competition = competitions[0] if isinstance(competitions, list) and competitions else None
            if not isinstance(competition, dict):
                continue
            status = competition.get("status")
            status_type = status.get("type") if isinstance(status, dict) else None
            if isinstance(status_type, dict) and status_type.get("completed"):
                game_ids.append(str(event["id"]))
        return game_ids
