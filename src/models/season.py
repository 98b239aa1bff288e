"""Season and gender keys that partition every ingestion run."""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import pytz

GENDERS = ("mens", "womens")

LEAGUE_PATHS = {
    "mens": "mens-college-basketball",
    "womens": "womens-college-basketball",
}

# College seasons tip off in November; October rolls the default forward.
SEASON_ROLLOVER_MONTH = 10
SEASON_TIMEZONE = "America/New_York"

_SEASON_RE = re.compile(r"^(\d{4})-(\d{2})$")


def league_path(gender: str) -> str:
    """Map a gender key to the upstream league path segment."""
    try:
        return LEAGUE_PATHS[gender]
    except KeyError:
        raise ValueError(f"Invalid gender: {gender!r} (expected one of {', '.join(GENDERS)})") from None


@dataclass(frozen=True, order=True)
class Season:
    """A season label such as ``2025-26``."""

    start_year: int

    @property
    def end_year(self) -> int:
        return self.start_year + 1

    @property
    def label(self) -> str:
        return f"{self.start_year}-{self.end_year % 100:02d}"

    @property
    def api_year(self) -> int:
        """Upstream season year, which is the calendar year the season ends."""
        return self.end_year

    def previous(self) -> "Season":
        return Season(self.start_year - 1)

    def __str__(self) -> str:
        return self.label

    @classmethod
    def parse(cls, value: str) -> "Season":
        """
        Parse a ``YYYY-YY`` label.

        Args:
            value: Season label, e.g. ``2025-26``

        Returns:
            Season instance

        Raises:
            ValueError: If the label is malformed or the years are not consecutive
        """
        match = _SEASON_RE.match(str(value or "").strip())
        if not match:
            raise ValueError(f"Invalid season format: {value!r} (expected YYYY-YY, e.g. 2025-26)")
        start = int(match.group(1))
        end_suffix = int(match.group(2))
        if (start + 1) % 100 != end_suffix:
            raise ValueError(f"Invalid season: {value!r} (years must be consecutive, e.g. {start}-{(start + 1) % 100:02d})")
        return cls(start)

    @classmethod
    def current(cls, now: Optional[datetime] = None) -> "Season":
        """Return the season in progress (or about to start) at ``now``."""
        tz = pytz.timezone(SEASON_TIMEZONE)
        if now is None:
            local = datetime.now(tz)
        elif now.tzinfo is None:
            local = tz.localize(now)
        else:
            local = now.astimezone(tz)
        if local.month >= SEASON_ROLLOVER_MONTH:
            return cls(local.year)
        return cls(local.year - 1)
