"""Conference and team discovery for one (gender, season)."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ...models.season import Season
from ...models.team import Team
from ..errors import DiscoveryError, UpstreamUnavailableError
from .espn_client import ESPNClient

logger = logging.getLogger(__name__)

_GROUP_UID_RE = re.compile(r"g:(\d+)")


@dataclass(frozen=True)
class Conference:
    id: str
    name: str
    abbreviation: str = ""


@dataclass
class DiscoveryResult:
    """Conferences and the deduplicated team roster they resolve to."""

    conferences: List[Conference] = field(default_factory=list)
    teams: List[Team] = field(default_factory=list)
    failed_conference_ids: List[str] = field(default_factory=list)

    @property
    def team_lookup(self) -> Dict[str, Team]:
        return {team.id: team for team in self.teams}


class EntityDiscovery:
    """Resolve every conference and its member teams from the upstream API."""

    def __init__(self, client: ESPNClient):
        self.client = client

    def discover(self, gender: str, season: Season) -> DiscoveryResult:
        """
        Discover conferences, then member teams for each conference.

        A failure on a single conference's team list is logged and skipped.
        A failure on the conference list itself, or an empty roster, is fatal.

        Args:
            gender: ``mens`` or ``womens``
            season: Season to discover

        Returns:
            DiscoveryResult with teams deduplicated by id

        Raises:
            DiscoveryError: If no usable roster could be resolved
        """
        try:
            payload = self.client.get_conferences(gender, season)
        except UpstreamUnavailableError as exc:
            raise DiscoveryError(f"Could not fetch {gender} {season} conference list: {exc}") from exc

        conferences = self.parse_conferences(payload)
        if not conferences:
            raise DiscoveryError(f"No conferences found for {gender} {season}")
        logger.info("Found %d %s conferences for %s", len(conferences), gender, season)

        result = DiscoveryResult(conferences=conferences)
        seen_ids = set()
        for conference in conferences:
            try:
                teams_payload = self.client.get_conference_teams(gender, season, conference.id)
            except UpstreamUnavailableError as exc:
                logger.warning("Skipping conference %s (%s): %s", conference.id, conference.name, exc)
                result.failed_conference_ids.append(conference.id)
                continue

            added = 0
            for team in self.parse_teams(teams_payload, conference):
                if team.id in seen_ids:
                    continue
                seen_ids.add(team.id)
                result.teams.append(team)
                added += 1
            logger.debug("Conference %s (%s): %d teams", conference.id, conference.name, added)

        if not result.teams:
            raise DiscoveryError(f"No teams discovered for {gender} {season}")
        logger.info("Discovered %d %s teams for %s", len(result.teams), gender, season)
        return result

    @classmethod
    def parse_conferences(cls, payload: Dict) -> List[Conference]:
        """Flatten the nested group listing into leaf conferences, deduplicated by id."""
        conferences: List[Conference] = []
        seen = set()
        for group in cls._leaf_groups(payload.get("groups") or []):
            conference_id = cls._group_id(group)
            if not conference_id:
                logger.debug("Skipping group without id: %s", group.get("name"))
                continue
            if conference_id in seen:
                continue
            seen.add(conference_id)
            conferences.append(
                Conference(
                    id=conference_id,
                    name=str(group.get("name") or group.get("shortName") or conference_id),
                    abbreviation=str(group.get("abbreviation") or ""),
                )
            )
        return conferences

    @staticmethod
    def parse_teams(payload: Dict, conference: Conference) -> List[Team]:
        teams: List[Team] = []
        for sport in payload.get("sports") or []:
            for league in sport.get("leagues") or []:
                for entry in league.get("teams") or []:
                    team = entry.get("team") if isinstance(entry, dict) else None
                    if not isinstance(team, dict) or not team.get("id"):
                        continue
                    teams.append(Team.from_upstream(team, conference=conference.name, conference_id=conference.id))
        return teams

    @classmethod
    def _leaf_groups(cls, groups: Iterable) -> Iterable[Dict]:
        for group in groups:
            if not isinstance(group, dict):
                continue
            children = group.get("children")
            if children:
                yield from cls._leaf_groups(children)
            else:
                yield group

    @staticmethod
    def _group_id(group: Dict) -> Optional[str]:
        for key in ("groupId", "id"):
            value = group.get(key)
            if value not in (None, ""):
                return str(value)
        match = _GROUP_UID_RE.search(str(group.get("uid") or ""))
        return match.group(1) if match else None
