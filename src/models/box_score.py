"""Per-game box score, Four Factors and team game line models."""

from dataclasses import asdict, dataclass, fields
from typing import Dict, List


@dataclass(frozen=True)
class BoxScoreStats:
    """Raw counting stats for one team in one game."""

    fgm: int = 0
    fga: int = 0
    fg3m: int = 0
    fg3a: int = 0
    ftm: int = 0
    fta: int = 0
    oreb: int = 0
    dreb: int = 0
    turnovers: int = 0

    @property
    def total_rebounds(self) -> int:
        return self.oreb + self.dreb

    def anomalies(self) -> List[str]:
        """
        List made/attempted pairs where makes exceed attempts.

        Malformed upstream data can produce these; they are reported rather
        than corrected so the anomaly stays visible downstream.
        """
        issues = []
        for made, attempted in (("fgm", "fga"), ("fg3m", "fg3a"), ("ftm", "fta")):
            made_value = getattr(self, made)
            attempted_value = getattr(self, attempted)
            if made_value > attempted_value:
                issues.append(f"{made}={made_value} exceeds {attempted}={attempted_value}")
        return issues

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "BoxScoreStats":
        return cls(**{f.name: int(data.get(f.name, 0) or 0) for f in fields(cls)})


@dataclass(frozen=True)
class FourFactors:
    """Dean Oliver's Four Factors, each expressed as a percentage."""

    efg: float = 0.0  # effective field goal %
    tov: float = 0.0  # turnovers per possession %
    orb: float = 0.0  # offensive rebound %
    ftr: float = 0.0  # free throws made per field goal attempt %

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "FourFactors":
        return cls(**{f.name: float(data.get(f.name, 0.0) or 0.0) for f in fields(cls)})


@dataclass(frozen=True)
class GameTeamStats:
    """One team's line in a game: identity, context, box score and factors."""

    team_id: str
    team_name: str
    team_abbreviation: str
    team_logo: str
    team_color: str
    score: int
    is_home: bool
    stats: BoxScoreStats
    factors: FourFactors

    def to_dict(self) -> dict:
        """Flatten to the camelCase record consumed by the presentation layer."""
        out = {
            "teamId": self.team_id,
            "teamName": self.team_name,
            "teamAbbreviation": self.team_abbreviation,
            "teamLogo": self.team_logo,
            "teamColor": self.team_color,
            "score": self.score,
            "isHome": self.is_home,
        }
        out.update(self.stats.to_dict())
        out.update(self.factors.to_dict())
        return out

    @classmethod
    def from_dict(cls, data: dict) -> "GameTeamStats":
        return cls(
            team_id=str(data["teamId"]),
            team_name=data.get("teamName", ""),
            team_abbreviation=data.get("teamAbbreviation", ""),
            team_logo=data.get("teamLogo", ""),
            team_color=data.get("teamColor", ""),
            score=int(data.get("score", 0) or 0),
            is_home=bool(data.get("isHome", False)),
            stats=BoxScoreStats.from_dict(data),
            factors=FourFactors.from_dict(data),
        )
