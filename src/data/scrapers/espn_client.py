"""Rate-limited client for the unofficial ESPN site API."""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import requests

from ...models.season import Season, league_path
from ..errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://site.api.espn.com/apis/site/v2/sports/basketball"

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

RETRYABLE_EXCEPTIONS = (
    requests.exceptions.Timeout,
    requests.exceptions.ConnectionError,
    requests.exceptions.ChunkedEncodingError,
    requests.exceptions.ContentDecodingError,
)


@dataclass
class ClientConfig:
    """Request pacing and retry policy for upstream calls."""

    base_url: str = ""
    request_delay_seconds: float = 0.05
    max_attempts: int = 3
    backoff_base_seconds: float = 0.5
    timeout_seconds: float = 20.0
    user_agent: str = "Mozilla/5.0 (compatible; four-factors-ingest/1.0)"

    def __post_init__(self):
        if not self.base_url:
            self.base_url = os.getenv("ESPN_API_BASE", DEFAULT_API_BASE)
        self.base_url = self.base_url.rstrip("/")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.request_delay_seconds < 0:
            raise ValueError(f"request_delay_seconds must be >= 0, got {self.request_delay_seconds}")


class ESPNClient:
    """
    Sequential JSON client with a fixed inter-request delay and bounded retries.

    Every request sleeps ``request_delay_seconds`` after it completes. Transport
    errors (timeouts, resets, truncated bodies), 429 and 5xx responses are retried with exponential
    backoff (``backoff_base_seconds`` doubling per attempt) up to
    ``max_attempts``; anything else fails immediately. Exhaustion raises
    :class:`UpstreamUnavailableError` and the caller decides whether that is
    fatal.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config or ClientConfig()
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.config.user_agent})
        self._sleep = sleep
        self.request_count = 0

    def get_json(self, url: str, params: Optional[Dict] = None) -> Dict:
        attempts = self.config.max_attempts
        reason = "no attempt made"
        for attempt in range(1, attempts + 1):
            try:
                resp = self.session.get(url, params=params, timeout=self.config.timeout_seconds)
            except RETRYABLE_EXCEPTIONS as exc:
                reason = f"{type(exc).__name__}: {exc}"
                logger.warning("Request to %s failed (attempt %d/%d): %s", url, attempt, attempts, reason)
            except requests.exceptions.RequestException as exc:
                self._pause()
                raise UpstreamUnavailableError(url, f"{type(exc).__name__}: {exc}", attempt) from exc
            else:
                self.request_count += 1
                if resp.status_code in RETRYABLE_STATUS_CODES:
                    reason = f"HTTP {resp.status_code}"
                    logger.warning("HTTP %d on %s (attempt %d/%d)", resp.status_code, url, attempt, attempts)
                elif resp.status_code >= 400:
                    self._pause()
                    raise UpstreamUnavailableError(url, f"HTTP {resp.status_code}", attempt)
                else:
                    self._pause()
                    try:
                        payload = resp.json()
                    except ValueError as exc:
                        raise UpstreamUnavailableError(url, f"invalid JSON: {exc}", attempt) from exc
                    if not isinstance(payload, dict):
                        raise UpstreamUnavailableError(url, "unexpected JSON payload type", attempt)
                    return payload

            if attempt < attempts:
                self._sleep(self.backoff_delay(attempt))
            else:
                self._pause()
        raise UpstreamUnavailableError(url, reason, attempts)

    def backoff_delay(self, attempt: int) -> float:
        """Delay before retrying after the given (1-based) failed attempt."""
        return self.config.backoff_base_seconds * (2 ** (attempt - 1))

    def _pause(self) -> None:
        if self.config.request_delay_seconds > 0:
            self._sleep(self.config.request_delay_seconds)

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def league_url(self, gender: str) -> str:
        return f"{self.config.base_url}/{league_path(gender)}"

    def get_conferences(self, gender: str, season: Season) -> Dict:
        return self.get_json(f"{self.league_url(gender)}/groups", params={"season": season.api_year})

    def get_conference_teams(self, gender: str, season: Season, conference_id: str) -> Dict:
        return self.get_json(
            f"{self.league_url(gender)}/teams",
            params={"groups": conference_id, "season": season.api_year, "limit": 500},
        )

    def get_team_schedule(self, gender: str, season: Season, team_id: str) -> Dict:
        return self.get_json(
            f"{self.league_url(gender)}/teams/{team_id}/schedule",
            params={"season": season.api_year},
        )

    def get_game_summary(self, gender: str, game_id: str) -> Dict:
        return self.get_json(f"{self.league_url(gender)}/summary", params={"event": game_id})
