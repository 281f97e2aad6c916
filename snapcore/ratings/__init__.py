"""Hidden rating layer: effective ratings, scheme fit and unit composites."""

from snapcore.ratings.composite import (
    CompositeMatchup,
    TeamCompositeRatings,
    UnitRating,
    calculate_team_composite_ratings,
    calculate_weak_link_penalty,
    get_matchup_advantage,
)
from snapcore.ratings.effective import calculate_average_effective_rating, calculate_effective_rating
from snapcore.ratings.weights import DEFAULT_WEIGHT_TABLES, PositionWeightTables, load_weight_tables

__all__ = [
    "CompositeMatchup",
    "DEFAULT_WEIGHT_TABLES",
    "PositionWeightTables",
    "TeamCompositeRatings",
    "UnitRating",
    "calculate_average_effective_rating",
    "calculate_effective_rating",
    "calculate_team_composite_ratings",
    "calculate_weak_link_penalty",
    "get_matchup_advantage",
    "load_weight_tables",
]
