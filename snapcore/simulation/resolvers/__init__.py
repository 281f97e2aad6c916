"""Play resolvers: standard, enhanced and special teams."""

from snapcore.simulation.resolvers.base import PlayResolver, PlayStateChange, advance_game_state
from snapcore.simulation.resolvers.enhanced import EnhancedGameState, EnhancedPlayResolver
from snapcore.simulation.resolvers.special_teams import SpecialTeamsResolver
from snapcore.simulation.resolvers.standard import GamePlanModifiers, HomeFieldContext, StandardPlayResolver

__all__ = [
    "EnhancedGameState",
    "EnhancedPlayResolver",
    "GamePlanModifiers",
    "HomeFieldContext",
    "PlayResolver",
    "PlayStateChange",
    "SpecialTeamsResolver",
    "StandardPlayResolver",
    "advance_game_state",
]
