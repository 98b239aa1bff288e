"""Season standings row with averaged Four Factors."""

from dataclasses import dataclass

FACTOR_FIELDS = ("efg", "tov", "orb", "ftr", "opp_efg", "opp_tov", "opp_orb", "opp_ftr")

_CAMEL = {
    "team_id": "teamId",
    "team_name": "teamName",
    "team_abbreviation": "teamAbbreviation",
    "team_logo": "teamLogo",
    "team_color": "teamColor",
    "games_played": "gamesPlayed",
    "wins": "wins",
    "losses": "losses",
    "conf_wins": "confWins",
    "conf_losses": "confLosses",
    "efg": "efg",
    "tov": "tov",
    "orb": "orb",
    "ftr": "ftr",
    "opp_efg": "oppEfg",
    "opp_tov": "oppTov",
    "opp_orb": "oppOrb",
    "opp_ftr": "oppFtr",
    "ppg": "ppg",
    "opp_ppg": "oppPpg",
}


@dataclass(frozen=True)
class TeamStandings:
    """One team's season record and per-game averages."""

    team_id: str
    team_name: str
    team_abbreviation: str
    team_logo: str
    team_color: str
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    conf_wins: int = 0
    conf_losses: int = 0
    # Own four factors (season averages)
    efg: float = 0.0
    tov: float = 0.0
    orb: float = 0.0
    ftr: float = 0.0
    # Opponent four factors (what the team allows)
    opp_efg: float = 0.0
    opp_tov: float = 0.0
    opp_orb: float = 0.0
    opp_ftr: float = 0.0
    ppg: float = 0.0
    opp_ppg: float = 0.0

    @property
    def record(self) -> str:
        return f"{self.wins}-{self.losses}"

    @property
    def conference_record(self) -> str:
        return f"{self.conf_wins}-{self.conf_losses}"

    @staticmethod
    def camel_key(attr: str) -> str:
        return _CAMEL[attr]

    def to_dict(self) -> dict:
        return {camel: getattr(self, attr) for attr, camel in _CAMEL.items()}

    @classmethod
    def from_dict(cls, data: dict) -> "TeamStandings":
        kwargs = {}
        for attr, camel in _CAMEL.items():
            if camel not in data:
                continue
            kwargs[attr] = data[camel]
        kwargs["team_id"] = str(data["teamId"])
        return cls(**kwargs)
