"""Data models for players, teams, conditions and plays."""

from snapcore.core.models.coach import Coach
from snapcore.core.models.conditions import WeatherCondition
from snapcore.core.models.play import (
    OVERTIME,
    DefensivePlayCall,
    EnhancedPlayResult,
    InjuryResult,
    KeyMatchup,
    OffensivePlayCall,
    PenaltyDetails,
    PersonnelMatchup,
    PlayCallContext,
    PlayResult,
    SchemeEffect,
    Substitution,
)
from snapcore.core.models.player import (
    ConsistencyProfile,
    InjuryStatus,
    Player,
    RoleFit,
    SkillRating,
)
from snapcore.core.models.team_state import (
    CoachingStaff,
    DefensiveLineup,
    OffensiveLineup,
    SpecialTeamsUnit,
    TeamGameState,
)
from snapcore.core.models.tendencies import (
    DefensiveSituationalTendencies,
    DefensiveTendencies,
    OffensiveSituationalTendencies,
    OffensiveTendencies,
    ScoreSituationTendency,
)

__all__ = [
    "OVERTIME",
    "Coach",
    "CoachingStaff",
    "ConsistencyProfile",
    "DefensiveLineup",
    "DefensivePlayCall",
    "DefensiveSituationalTendencies",
    "DefensiveTendencies",
    "EnhancedPlayResult",
    "InjuryResult",
    "InjuryStatus",
    "KeyMatchup",
    "OffensiveLineup",
    "OffensivePlayCall",
    "OffensiveSituationalTendencies",
    "OffensiveTendencies",
    "PenaltyDetails",
    "PersonnelMatchup",
    "PlayCallContext",
    "PlayResult",
    "Player",
    "RoleFit",
    "SchemeEffect",
    "ScoreSituationTendency",
    "SkillRating",
    "SpecialTeamsUnit",
    "Substitution",
    "TeamGameState",
    "WeatherCondition",
]
