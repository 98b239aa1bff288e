"""Team model for discovered conference members."""

from dataclasses import dataclass
from typing import Optional

DEFAULT_TEAM_COLOR = "#666666"
DEFAULT_ALTERNATE_COLOR = "#333333"
LOGO_URL_TEMPLATE = "https://a.espncdn.com/i/teamlogos/ncaa/500/{team_id}.png"


def normalize_color(value: Optional[str], default: str = DEFAULT_TEAM_COLOR) -> str:
    """Return a ``#``-prefixed hex colour, or ``default`` when blank."""
    if not value:
        return default
    value = str(value).strip()
    if not value:
        return default
    return value if value.startswith("#") else f"#{value}"


@dataclass(frozen=True)
class Team:
    """A team as listed by the upstream source for one season.

    ``conference_id`` is ``None`` for opponents that were seen in a box score
    but do not belong to any discovered conference.
    """

    id: str
    name: str
    abbreviation: str
    display_name: str
    short_display_name: str
    logo: str
    color: str = DEFAULT_TEAM_COLOR
    alternate_color: str = DEFAULT_ALTERNATE_COLOR
    conference: str = ""
    conference_id: Optional[str] = None

    @property
    def has_conference(self) -> bool:
        return bool(self.conference_id)

    def to_dict(self) -> dict:
        """Convert team to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "abbreviation": self.abbreviation,
            "displayName": self.display_name,
            "shortDisplayName": self.short_display_name,
            "logo": self.logo,
            "color": self.color,
            "alternateColor": self.alternate_color,
            "conference": self.conference,
            "conferenceId": self.conference_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Team":
        """Create team from dictionary."""
        conference_id = data.get("conferenceId")
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            abbreviation=data.get("abbreviation", ""),
            display_name=data.get("displayName", ""),
            short_display_name=data.get("shortDisplayName", ""),
            logo=data.get("logo", ""),
            color=data.get("color", DEFAULT_TEAM_COLOR),
            alternate_color=data.get("alternateColor", DEFAULT_ALTERNATE_COLOR),
            conference=data.get("conference", ""),
            conference_id=str(conference_id) if conference_id not in (None, "") else None,
        )

    @classmethod
    def from_upstream(
        cls,
        team: dict,
        conference: str = "",
        conference_id: Optional[str] = None,
    ) -> "Team":
        """
        Build a team from an upstream ``team`` object.

        Args:
            team: Raw team block (``teams[].team`` or ``boxscore.teams[].team``)
            conference: Conference display name, empty when unknown
            conference_id: Conference identity, ``None`` when unknown

        Returns:
            Team instance
        """
        team_id = str(team.get("id", ""))
        logos = team.get("logos") or []
        logo = ""
        if logos and isinstance(logos[0], dict):
            logo = logos[0].get("href") or ""
        logo = logo or team.get("logo") or LOGO_URL_TEMPLATE.format(team_id=team_id)
        display_name = team.get("displayName") or team.get("name") or ""
        return cls(
            id=team_id,
            name=team.get("name") or display_name,
            abbreviation=team.get("abbreviation") or "",
            display_name=display_name,
            short_display_name=team.get("shortDisplayName") or display_name,
            logo=logo,
            color=normalize_color(team.get("color"), DEFAULT_TEAM_COLOR),
            alternate_color=normalize_color(team.get("alternateColor"), DEFAULT_ALTERNATE_COLOR),
            conference=conference,
            conference_id=conference_id,
        )
