"""Scraper exports."""

from .box_score import BoxScoreParser, ParsedGame, parse_box_score_stats
from .discovery import Conference, DiscoveryResult, EntityDiscovery
from .espn_client import ClientConfig, ESPNClient
from .schedule import CrawlResult, ScheduleCrawler

__all__ = [
    "BoxScoreParser",
    "ClientConfig",
    "Conference",
    "CrawlResult",
    "DiscoveryResult",
    "ESPNClient",
    "EntityDiscovery",
    "ParsedGame",
    "ScheduleCrawler",
    "parse_box_score_stats",
]
