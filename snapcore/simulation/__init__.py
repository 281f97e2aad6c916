"""Play simulation: outcome tables, matchup systems and resolvers."""

from snapcore.simulation.play_caller import (
    select_defensive_play,
    select_offensive_play,
    should_attempt_field_goal,
    should_punt,
)
from snapcore.simulation.resolvers import (
    EnhancedGameState,
    EnhancedPlayResolver,
    GamePlanModifiers,
    HomeFieldContext,
    PlayResolver,
    SpecialTeamsResolver,
    StandardPlayResolver,
)

__all__ = [
    "EnhancedGameState",
    "EnhancedPlayResolver",
    "GamePlanModifiers",
    "HomeFieldContext",
    "PlayResolver",
    "SpecialTeamsResolver",
    "StandardPlayResolver",
    "select_defensive_play",
    "select_offensive_play",
    "should_attempt_field_goal",
    "should_punt",
]
