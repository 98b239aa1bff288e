"""Four Factors calculations and standings aggregation."""

from .four_factors import calculate_four_factors, calculate_possessions
from .standings import StandingsAggregator

__all__ = ["StandingsAggregator", "calculate_four_factors", "calculate_possessions"]
