"""End-to-end ingestion for one season across one or both genders."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

from ...models.game import Game
from ...models.season import GENDERS, Season, league_path
from ...models.team import Team
from ..errors import PayloadValidationError, UnparseableGameError, UpstreamUnavailableError
from ..features.standings import StandingsAggregator
from ..scrapers.box_score import LEAGUE_OFFENSIVE_REBOUND_SHARE, BoxScoreParser
from ..scrapers.discovery import EntityDiscovery
from ..scrapers.espn_client import ClientConfig, ESPNClient
from ..scrapers.schedule import ScheduleCrawler
from .materializer import DatasetMaterializer
from .validators import validate_season_payload

logger = logging.getLogger(__name__)


@dataclass
class SeasonIngestionConfig:
    season: Season
    genders: Sequence[str] = GENDERS
    output_dir: str = "data"
    client: ClientConfig = field(default_factory=ClientConfig)
    offensive_rebound_share: float = LEAGUE_OFFENSIVE_REBOUND_SHARE
    strict_validation: bool = True

    def __post_init__(self):
        for gender in self.genders:
            league_path(gender)


def sort_games(games: Sequence[Game]) -> List[Game]:
    """Most recent first; game id breaks date ties so output is stable."""
    by_id = sorted(games, key=lambda g: g.id)
    return sorted(by_id, key=lambda g: g.date, reverse=True)


class SeasonIngestionPipeline:
    """Discover, crawl, parse, aggregate, validate and write one season."""

    def __init__(self, config: SeasonIngestionConfig, client: Optional[ESPNClient] = None):
        self.config = config
        self.client = client or ESPNClient(config.client)
        self.discovery = EntityDiscovery(self.client)
        self.crawler = ScheduleCrawler(self.client)
        self.aggregator = StandingsAggregator()
        self.materializer = DatasetMaterializer(config.output_dir)

    def run_all(self) -> List[Dict]:
        """Run every configured gender in sequence; a DiscoveryError stops the run."""
        return [self.run(gender) for gender in self.config.genders]

    def run(self, gender: str) -> Dict:
        """
        Ingest one (gender, season) partition.

        Args:
            gender: ``mens`` or ``womens``

        Returns:
            The run manifest, also written as ``manifest.json``

        Raises:
            DiscoveryError: If no roster could be resolved; nothing is written
            PayloadValidationError: If strict validation fails; nothing is written
        """
        season = self.config.season
        started = datetime.now(timezone.utc)
        logger.info("Ingesting %s %s", gender, season)

        discovered = self.discovery.discover(gender, season)
        roster = discovered.teams
        lookup = discovered.team_lookup

        crawl = self.crawler.crawl(gender, season, roster)

        parser = BoxScoreParser(lookup, self.config.offensive_rebound_share)
        games: List[Game] = []
        external: Dict[str, Team] = {}
        dropped: Dict[str, str] = {}
        warnings: List[str] = []
        total = len(crawl.game_ids)
        for idx, game_id in enumerate(crawl.game_ids, start=1):
            try:
                payload = self.client.get_game_summary(gender, game_id)
                parsed = parser.parse(payload, game_id)
            except (UpstreamUnavailableError, UnparseableGameError) as exc:
                logger.warning("Dropping game %s: %s", game_id, exc)
                dropped[game_id] = str(exc)
                continue
            games.append(parsed.game)
            warnings.extend(parsed.warnings)
            for team in parsed.external_teams:
                external.setdefault(team.id, team)
            if idx % 50 == 0:
                logger.info("Processed %d/%d games", idx, total)

        games = sort_games(games)
        standings = self.aggregator.aggregate(roster, games)
        teams = list(roster) + [external[team_id] for team_id in sorted(external)]

        validation_errors = validate_season_payload(teams, games, standings)
        self._assert_valid(gender, validation_errors)

        manifest = {
            "season": season.label,
            "gender": gender,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "started_at": started.isoformat(),
            "api_base": self.client.config.base_url,
            "counts": {
                "conferences": len(discovered.conferences),
                "teams": len(teams),
                "roster_teams": len(roster),
                "external_teams": len(external),
                "game_ids": total,
                "games": len(games),
                "standings": len(standings),
                "requests": self.client.request_count,
            },
            "failed_conference_ids": list(discovered.failed_conference_ids),
            "failed_team_ids": list(crawl.failed_team_ids),
            "dropped_game_ids": sorted(dropped),
            "dropped_games": dropped,
            "warnings": warnings,
            "validation_errors": validation_errors,
        }
        path = self.materializer.write(season, gender, teams, games, standings, manifest)
        manifest["output_dir"] = str(path)
        logger.info(
            "Finished %s %s: %d teams, %d games (%d dropped)",
            gender,
            season,
            len(teams),
            len(games),
            len(dropped),
        )
        return manifest

    def _assert_valid(self, gender: str, errors: Dict[str, List[str]]) -> None:
        flat = [msg for messages in errors.values() for msg in messages]
        if not flat:
            return
        if self.config.strict_validation:
            raise PayloadValidationError(f"{gender} {self.config.season}", flat)
        logger.warning("%d validation errors for %s %s (continuing)", len(flat), gender, self.config.season)
