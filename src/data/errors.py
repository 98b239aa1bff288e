"""Exceptions raised by the ingestion pipeline."""


class FourFactorsError(Exception):
    """Base class for ingestion errors."""


class UpstreamUnavailableError(FourFactorsError):
    """Raised when an upstream request failed after exhausting retries."""

    def __init__(self, url: str, reason: str, attempts: int = 1):
        super().__init__(f"{url} unavailable after {attempts} attempt(s): {reason}")
        self.url = url
        self.reason = reason
        self.attempts = attempts


class DiscoveryError(FourFactorsError):
    """Raised when no usable team roster could be resolved for a run."""


class UnparseableGameError(FourFactorsError, ValueError):
    """Raised when a game summary lacks the box score or competition context."""

    def __init__(self, game_id: str, reason: str):
        super().__init__(f"game {game_id}: {reason}")
        self.game_id = game_id
        self.reason = reason


class PayloadValidationError(FourFactorsError, ValueError):
    """Raised when a season payload fails consistency checks under strict validation."""

    def __init__(self, partition: str, errors):
        super().__init__(f"{partition} validation failed: {list(errors)[:5]}")
        self.partition = partition
        self.errors = list(errors)
