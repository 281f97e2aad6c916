"""Scheme, personnel and scheme-fit enumerations."""

from enum import Enum


class OffensiveScheme(Enum):
    WEST_COAST = "west_coast"
    AIR_RAID = "air_raid"
    SPREAD_OPTION = "spread_option"
    POWER_RUN = "power_run"
    ZONE_RUN = "zone_run"
    PLAY_ACTION = "play_action"


class DefensiveScheme(Enum):
    FOUR_THREE_UNDER = "four_three_under"
    THREE_FOUR = "three_four"
    COVER_THREE = "cover_three"
    COVER_TWO = "cover_two"
    MAN_PRESS = "man_press"
    BLITZ_HEAVY = "blitz_heavy"


class SkillImportance(Enum):
    """How much a scheme leans on a skill."""

    CRITICAL = "critical"
    IMPORTANT = "important"
    BENEFICIAL = "beneficial"

    @property
    def weight(self) -> int:
        return {
            SkillImportance.CRITICAL: 3,
            SkillImportance.IMPORTANT: 2,
            SkillImportance.BENEFICIAL: 1,
        }[self]


class SchemeFitLevel(Enum):
    """How well a player suits the team's scheme."""

    PERFECT = "perfect"
    GOOD = "good"
    NEUTRAL = "neutral"
    POOR = "poor"
    TERRIBLE = "terrible"

    @property
    def modifier(self) -> float:
        """Fractional rating modifier for this fit level."""
        return {
            SchemeFitLevel.PERFECT: 0.10,
            SchemeFitLevel.GOOD: 0.05,
            SchemeFitLevel.NEUTRAL: 0.0,
            SchemeFitLevel.POOR: -0.05,
            SchemeFitLevel.TERRIBLE: -0.10,
        }[self]


class OffensivePersonnel(Enum):
    """Offensive personnel groupings (RBs then TEs)."""

    P10 = "10"
    P11 = "11"
    P12 = "12"
    P13 = "13"
    P20 = "20"
    P21 = "21"
    P22 = "22"
    P23 = "23"

    @property
    def running_backs(self) -> int:
        return int(self.value[0])

    @property
    def tight_ends(self) -> int:
        return int(self.value[1])

    @property
    def wide_receivers(self) -> int:
        return 5 - self.running_backs - self.tight_ends


class DefensivePersonnel(Enum):
    """Defensive personnel packages."""

    BASE = "base"
    NICKEL = "nickel"
    DIME = "dime"
    QUARTER = "quarter"
    GOAL_LINE = "goal_line"
    BIG_NICKEL = "big_nickel"
