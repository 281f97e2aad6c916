"""Game enumerations."""

from snapcore.core.enums.game import (
    Aggressiveness,
    CoachRole,
    ConsistencyTier,
    GameStakes,
    HiddenTrait,
    Precipitation,
    RoleType,
    StreakState,
)
from snapcore.core.enums.injuries import InjurySeverity, InjuryType, PermanentInjuryEffect
from snapcore.core.enums.plays import (
    CoverageType,
    OffensiveFormation,
    PlayIntensity,
    PlayOutcome,
    PlayType,
    SecondaryEffect,
)
from snapcore.core.enums.positions import OFFENSIVE_LINE_ORDER, Position, PositionGroup, Side
from snapcore.core.enums.schemes import (
    DefensivePersonnel,
    DefensiveScheme,
    OffensivePersonnel,
    OffensiveScheme,
    SchemeFitLevel,
    SkillImportance,
)

__all__ = [
    "Aggressiveness",
    "CoachRole",
    "ConsistencyTier",
    "CoverageType",
    "DefensivePersonnel",
    "DefensiveScheme",
    "GameStakes",
    "HiddenTrait",
    "InjurySeverity",
    "InjuryType",
    "OFFENSIVE_LINE_ORDER",
    "OffensiveFormation",
    "OffensivePersonnel",
    "OffensiveScheme",
    "PermanentInjuryEffect",
    "PlayIntensity",
    "PlayOutcome",
    "PlayType",
    "Position",
    "PositionGroup",
    "Precipitation",
    "RoleType",
    "SchemeFitLevel",
    "SecondaryEffect",
    "Side",
    "StreakState",
    "SkillImportance",
]
