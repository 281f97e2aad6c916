"""
Scheme definitions.

Each scheme lists the positions it leans on, the skills it needs from
them, and how its coordinator tends to call plays. Used by scheme fit.
"""

from dataclasses import dataclass, field
from typing import Union

from snapcore.core.enums import DefensiveScheme, OffensiveScheme, Position, SkillImportance

Scheme = Union[OffensiveScheme, DefensiveScheme]


@dataclass(frozen=True)
class SkillRequirement:
    skill: str
    importance: SkillImportance
    minimum: int  # 1-100


@dataclass(frozen=True)
class PositionRequirements:
    """What a scheme needs from one position."""

    position: Position
    skills: tuple[SkillRequirement, ...]
    weight: float  # Importance of the position to the scheme, 0-1


@dataclass(frozen=True)
class PlayCallDistribution:
    """Offensive call mix, in percent."""

    run: int
    short_pass: int
    medium_pass: int
    deep_pass: int
    play_action: int  # Share of passes
    screen: int  # Share of passes

    def is_valid(self) -> bool:
        total = self.run + self.short_pass + self.medium_pass + self.deep_pass
        if abs(total - 100) > 1:
            return False
        return (
            min(self.run, self.short_pass, self.medium_pass, self.deep_pass) >= 0
            and 0 <= self.play_action <= 100
            and 0 <= self.screen <= 100
        )


@dataclass(frozen=True)
class DefensivePlayCallDistribution:
    """Defensive call mix, in percent."""

    base: int
    blitz: int
    zone: int
    man: int
    press: int
    two_deep: int
    single_high: int

    def is_valid(self) -> bool:
        if abs(self.zone + self.man - 100) > 1:
            return False
        if abs(self.two_deep + self.single_high - 100) > 1:
            return False
        return all(0 <= v <= 100 for v in (self.base, self.blitz, self.press))


@dataclass(frozen=True)
class OffensiveSchemeDefinition:
    scheme: OffensiveScheme
    name: str
    description: str
    requirements: tuple[PositionRequirements, ...]
    tendencies: PlayCallDistribution
    counter_schemes: tuple[DefensiveScheme, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DefensiveSchemeDefinition:
    scheme: DefensiveScheme
    name: str
    description: str
    requirements: tuple[PositionRequirements, ...]
    tendencies: DefensivePlayCallDistribution
    counter_schemes: tuple[OffensiveScheme, ...] = field(default_factory=tuple)


_CRIT = SkillImportance.CRITICAL
_IMP = SkillImportance.IMPORTANT
_BEN = SkillImportance.BENEFICIAL


def _pos(position: Position, weight: float, *skills: tuple) -> PositionRequirements:
    return PositionRequirements(
        position=position,
        skills=tuple(SkillRequirement(name, importance, minimum) for name, importance, minimum in skills),
        weight=weight,
    )


# =============================================================================
# Offensive Schemes
# =============================================================================

OFFENSIVE_SCHEMES: dict[OffensiveScheme, OffensiveSchemeDefinition] = {
    OffensiveScheme.WEST_COAST: OffensiveSchemeDefinition(
        scheme=OffensiveScheme.WEST_COAST,
        name="West Coast Offense",
        description="Short, quick passes with emphasis on yards after catch",
        requirements=(
            _pos(Position.QB, 0.3,
                 ("accuracy", _CRIT, 75), ("decision_making", _CRIT, 70), ("presnap", _IMP, 65)),
            _pos(Position.WR, 0.25,
                 ("route_running", _CRIT, 75), ("yac", _CRIT, 70), ("catching", _IMP, 70)),
            _pos(Position.RB, 0.15,
                 ("catching", _IMP, 65), ("pass_protection", _BEN, 55)),
            _pos(Position.TE, 0.15,
                 ("route_running", _IMP, 65), ("catching", _IMP, 65)),
        ),
        tendencies=PlayCallDistribution(40, 35, 15, 10, 25, 15),
        counter_schemes=(DefensiveScheme.MAN_PRESS, DefensiveScheme.BLITZ_HEAVY),
    ),
    OffensiveScheme.AIR_RAID: OffensiveSchemeDefinition(
        scheme=OffensiveScheme.AIR_RAID,
        name="Air Raid Offense",
        description="Spread formations with high-volume passing attack",
        requirements=(
            _pos(Position.QB, 0.35,
                 ("arm_strength", _CRIT, 75), ("accuracy", _CRIT, 70), ("decision_making", _IMP, 65)),
            _pos(Position.WR, 0.35,
                 ("separation", _CRIT, 75), ("catching", _CRIT, 70), ("route_running", _IMP, 65)),
            _pos(Position.LT, 0.15,
                 ("pass_block", _CRIT, 75), ("footwork", _IMP, 65)),
        ),
        tendencies=PlayCallDistribution(30, 25, 25, 20, 15, 20),
        counter_schemes=(DefensiveScheme.COVER_TWO, DefensiveScheme.BLITZ_HEAVY),
    ),
    OffensiveScheme.SPREAD_OPTION: OffensiveSchemeDefinition(
        scheme=OffensiveScheme.SPREAD_OPTION,
        name="Spread Option Offense",
        description="Read-option plays with QB run threat and spread formations",
        requirements=(
            _pos(Position.QB, 0.35,
                 ("mobility", _CRIT, 80), ("decision_making", _CRIT, 70), ("accuracy", _IMP, 65)),
            _pos(Position.RB, 0.25,
                 ("vision", _CRIT, 75), ("cut_ability", _IMP, 70), ("breakaway", _IMP, 65)),
            _pos(Position.WR, 0.15,
                 ("blocking", _IMP, 60), ("separation", _BEN, 60)),
        ),
        tendencies=PlayCallDistribution(50, 20, 15, 15, 35, 10),
        counter_schemes=(DefensiveScheme.THREE_FOUR, DefensiveScheme.FOUR_THREE_UNDER),
    ),
    OffensiveScheme.POWER_RUN: OffensiveSchemeDefinition(
        scheme=OffensiveScheme.POWER_RUN,
        name="Power Run Offense",
        description="Physical, gap-scheme running attack with pulling linemen",
        requirements=(
            _pos(Position.RB, 0.25,
                 ("power", _CRIT, 80), ("vision", _IMP, 70), ("fumble_protection", _IMP, 65)),
            _pos(Position.LG, 0.2,
                 ("run_block", _CRIT, 80), ("power", _CRIT, 75), ("pull_ability", _IMP, 70)),
            _pos(Position.RG, 0.2,
                 ("run_block", _CRIT, 80), ("power", _CRIT, 75), ("pull_ability", _IMP, 70)),
            _pos(Position.TE, 0.2,
                 ("blocking", _CRIT, 75), ("sealing", _IMP, 70)),
        ),
        tendencies=PlayCallDistribution(60, 15, 15, 10, 40, 5),
        counter_schemes=(DefensiveScheme.FOUR_THREE_UNDER, DefensiveScheme.BLITZ_HEAVY),
    ),
    OffensiveScheme.ZONE_RUN: OffensiveSchemeDefinition(
        scheme=OffensiveScheme.ZONE_RUN,
        name="Zone Run Offense",
        description="Zone blocking scheme with one-cut running style",
        requirements=(
            _pos(Position.RB, 0.3,
                 ("vision", _CRIT, 80), ("cut_ability", _CRIT, 80), ("breakaway", _IMP, 70)),
            _pos(Position.C, 0.2,
                 ("run_block", _CRIT, 75), ("awareness", _CRIT, 75), ("footwork", _IMP, 70)),
            _pos(Position.LT, 0.15,
                 ("footwork", _CRIT, 75), ("run_block", _IMP, 70)),
            _pos(Position.RT, 0.15,
                 ("footwork", _CRIT, 75), ("run_block", _IMP, 70)),
        ),
        tendencies=PlayCallDistribution(55, 15, 15, 15, 35, 10),
        counter_schemes=(DefensiveScheme.THREE_FOUR, DefensiveScheme.COVER_THREE),
    ),
    OffensiveScheme.PLAY_ACTION: OffensiveSchemeDefinition(
        scheme=OffensiveScheme.PLAY_ACTION,
        name="Play Action Heavy Offense",
        description="Heavy play-fake emphasis with vertical passing attack",
        requirements=(
            _pos(Position.QB, 0.3,
                 ("play_action", _CRIT, 80), ("arm_strength", _CRIT, 75), ("accuracy", _IMP, 70)),
            _pos(Position.WR, 0.25,
                 ("tracking", _CRIT, 75), ("contested", _IMP, 70), ("separation", _IMP, 65)),
            _pos(Position.RB, 0.2,
                 ("vision", _IMP, 70), ("power", _IMP, 65)),
            _pos(Position.TE, 0.15,
                 ("blocking", _IMP, 70), ("catching", _BEN, 60)),
        ),
        tendencies=PlayCallDistribution(45, 15, 20, 20, 50, 8),
        counter_schemes=(DefensiveScheme.COVER_TWO, DefensiveScheme.MAN_PRESS),
    ),
}


# =============================================================================
# Defensive Schemes
# =============================================================================

DEFENSIVE_SCHEMES: dict[DefensiveScheme, DefensiveSchemeDefinition] = {
    DefensiveScheme.FOUR_THREE_UNDER: DefensiveSchemeDefinition(
        scheme=DefensiveScheme.FOUR_THREE_UNDER,
        name="4-3 Under Defense",
        description="Traditional 4-3 with strong side emphasis and athletic linebackers",
        requirements=(
            _pos(Position.DE, 0.25,
                 ("pass_rush", _CRIT, 75), ("pursuit", _IMP, 70), ("run_defense", _IMP, 65)),
            _pos(Position.DT, 0.2,
                 ("run_defense", _CRIT, 75), ("power", _IMP, 70)),
            _pos(Position.ILB, 0.25,
                 ("tackling", _CRIT, 75), ("coverage", _IMP, 70), ("awareness", _IMP, 70)),
            _pos(Position.OLB, 0.15,
                 ("blitzing", _IMP, 70), ("shed_blocks", _IMP, 65)),
        ),
        tendencies=DefensivePlayCallDistribution(55, 25, 50, 50, 30, 40, 60),
        counter_schemes=(OffensiveScheme.SPREAD_OPTION, OffensiveScheme.AIR_RAID),
    ),
    DefensiveScheme.THREE_FOUR: DefensiveSchemeDefinition(
        scheme=DefensiveScheme.THREE_FOUR,
        name="3-4 Defense",
        description="Versatile front with multiple edge rushers and coverage options",
        requirements=(
            _pos(Position.DT, 0.2,
                 ("run_defense", _CRIT, 80), ("power", _CRIT, 80), ("stamina", _IMP, 70)),
            _pos(Position.DE, 0.15,
                 ("run_defense", _CRIT, 75), ("pass_rush", _IMP, 65)),
            _pos(Position.OLB, 0.3,
                 ("blitzing", _CRIT, 80), ("coverage", _IMP, 65), ("pursuit", _IMP, 70)),
            _pos(Position.ILB, 0.2,
                 ("tackling", _CRIT, 75), ("zone_coverage", _IMP, 70)),
        ),
        tendencies=DefensivePlayCallDistribution(45, 35, 55, 45, 35, 45, 55),
        counter_schemes=(OffensiveScheme.POWER_RUN, OffensiveScheme.WEST_COAST),
    ),
    DefensiveScheme.COVER_THREE: DefensiveSchemeDefinition(
        scheme=DefensiveScheme.COVER_THREE,
        name="Cover 3 Defense",
        description="Three-deep zone with single high safety and contain principles",
        requirements=(
            _pos(Position.FS, 0.25,
                 ("zone_coverage", _CRIT, 80), ("awareness", _CRIT, 75), ("closing", _IMP, 70)),
            _pos(Position.CB, 0.25,
                 ("zone_coverage", _CRIT, 75), ("tackling", _IMP, 65), ("awareness", _IMP, 70)),
            _pos(Position.SS, 0.2,
                 ("tackling", _CRIT, 75), ("zone_coverage", _IMP, 65)),
            _pos(Position.ILB, 0.15,
                 ("zone_coverage", _IMP, 70), ("awareness", _IMP, 70)),
        ),
        tendencies=DefensivePlayCallDistribution(50, 20, 75, 25, 20, 15, 85),
        counter_schemes=(OffensiveScheme.WEST_COAST, OffensiveScheme.AIR_RAID),
    ),
    DefensiveScheme.COVER_TWO: DefensiveSchemeDefinition(
        scheme=DefensiveScheme.COVER_TWO,
        name="Cover 2 Defense",
        description="Two-deep shell with corners in the flats and safeties splitting deep",
        requirements=(
            _pos(Position.SS, 0.25,
                 ("zone_coverage", _CRIT, 75), ("closing", _CRIT, 75), ("ball_skills", _IMP, 70)),
            _pos(Position.FS, 0.25,
                 ("zone_coverage", _CRIT, 75), ("closing", _CRIT, 75), ("ball_skills", _IMP, 70)),
            _pos(Position.CB, 0.2,
                 ("tackling", _CRIT, 75), ("zone_coverage", _IMP, 70), ("closing", _IMP, 65)),
            _pos(Position.ILB, 0.15,
                 ("zone_coverage", _IMP, 70), ("tackling", _IMP, 70)),
        ),
        tendencies=DefensivePlayCallDistribution(55, 20, 80, 20, 25, 85, 15),
        counter_schemes=(OffensiveScheme.PLAY_ACTION, OffensiveScheme.ZONE_RUN),
    ),
    DefensiveScheme.MAN_PRESS: DefensiveSchemeDefinition(
        scheme=DefensiveScheme.MAN_PRESS,
        name="Man Press Defense",
        description="Aggressive man coverage with press at the line of scrimmage",
        requirements=(
            _pos(Position.CB, 0.35,
                 ("man_coverage", _CRIT, 85), ("press", _CRIT, 80), ("closing", _IMP, 75)),
            _pos(Position.SS, 0.2,
                 ("man_coverage", _IMP, 70), ("tackling", _IMP, 75)),
            _pos(Position.FS, 0.2,
                 ("closing", _CRIT, 80), ("awareness", _IMP, 75)),
            _pos(Position.DE, 0.15,
                 ("pass_rush", _CRIT, 80), ("finesse", _IMP, 70)),
        ),
        tendencies=DefensivePlayCallDistribution(50, 25, 20, 80, 75, 30, 70),
        counter_schemes=(OffensiveScheme.SPREAD_OPTION, OffensiveScheme.PLAY_ACTION),
    ),
    DefensiveScheme.BLITZ_HEAVY: DefensiveSchemeDefinition(
        scheme=DefensiveScheme.BLITZ_HEAVY,
        name="Blitz Heavy Defense",
        description="Aggressive blitzing with a 40%+ blitz rate and high risk/reward plays",
        requirements=(
            _pos(Position.OLB, 0.25,
                 ("blitzing", _CRIT, 85), ("pursuit", _IMP, 75), ("tackling", _IMP, 70)),
            _pos(Position.ILB, 0.2,
                 ("blitzing", _CRIT, 75), ("tackling", _IMP, 75), ("awareness", _IMP, 70)),
            _pos(Position.SS, 0.2,
                 ("tackling", _CRIT, 80), ("closing", _IMP, 75)),
            _pos(Position.CB, 0.2,
                 ("man_coverage", _CRIT, 75), ("closing", _IMP, 70)),
        ),
        tendencies=DefensivePlayCallDistribution(35, 45, 35, 65, 50, 25, 75),
        counter_schemes=(OffensiveScheme.WEST_COAST, OffensiveScheme.AIR_RAID),
    ),
}


def is_offensive_scheme(scheme: Scheme) -> bool:
    return isinstance(scheme, OffensiveScheme)


def get_scheme_definition(scheme: Scheme) -> Union[OffensiveSchemeDefinition, DefensiveSchemeDefinition]:
    if is_offensive_scheme(scheme):
        return OFFENSIVE_SCHEMES[scheme]
    return DEFENSIVE_SCHEMES[scheme]


def get_position_requirements(scheme: Scheme, position: Position):
    """Requirements a scheme places on a position, or None if it doesn't care."""
    for requirement in get_scheme_definition(scheme).requirements:
        if requirement.position == position:
            return requirement
    return None
