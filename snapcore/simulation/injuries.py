"""
Injury processing.

Decides whether a player is hurt on a play, and if so what the injury
is, how bad it is, how long they're out and whether it leaves a mark.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from snapcore.core.enums import (
    HiddenTrait,
    InjurySeverity,
    InjuryType,
    PermanentInjuryEffect,
    PlayOutcome,
    PlayType,
    PositionGroup,
    Precipitation,
)
from snapcore.core.models.conditions import WeatherCondition
from snapcore.core.models.play import InjuryResult
from snapcore.core.models.player import Player
from snapcore.core.rng import Rng

logger = logging.getLogger(__name__)

BASE_INJURY_PROBABILITY = {
    PlayOutcome.TOUCHDOWN: 0.005,
    PlayOutcome.BIG_GAIN: 0.015,
    PlayOutcome.GOOD_GAIN: 0.01,
    PlayOutcome.MODERATE_GAIN: 0.008,
    PlayOutcome.SHORT_GAIN: 0.006,
    PlayOutcome.NO_GAIN: 0.012,
    PlayOutcome.LOSS: 0.015,
    PlayOutcome.BIG_LOSS: 0.025,
    PlayOutcome.SACK: 0.035,
    PlayOutcome.INCOMPLETE: 0.003,
    PlayOutcome.INTERCEPTION: 0.008,
    PlayOutcome.FUMBLE: 0.02,
    PlayOutcome.FUMBLE_LOST: 0.025,
}
DEFAULT_INJURY_PROBABILITY = 0.005

I = InjuryType

_SPECIALIST_INJURIES = {I.HAMSTRING: 0.3, I.KNEE_MINOR: 0.25, I.ANKLE: 0.2, I.FOOT: 0.15, I.BACK: 0.1}

# Relative weights; order matters for the cumulative roll
POSITION_INJURY_TYPES = {
    PositionGroup.QB: {
        I.SHOULDER: 0.25, I.KNEE_MINOR: 0.15, I.KNEE_MCL: 0.08, I.KNEE_ACL: 0.05,
        I.ANKLE: 0.15, I.HAND: 0.12, I.CONCUSSION: 0.1, I.RIBS: 0.1,
    },
    PositionGroup.RB: {
        I.KNEE_MINOR: 0.18, I.KNEE_ACL: 0.08, I.KNEE_MCL: 0.08, I.ANKLE: 0.18, I.HAMSTRING: 0.15,
        I.SHOULDER: 0.1, I.CONCUSSION: 0.08, I.FOOT: 0.08, I.RIBS: 0.07,
    },
    PositionGroup.WR: {
        I.HAMSTRING: 0.22, I.KNEE_MINOR: 0.15, I.KNEE_ACL: 0.08, I.ANKLE: 0.18,
        I.SHOULDER: 0.12, I.CONCUSSION: 0.1, I.FOOT: 0.08, I.HAND: 0.07,
    },
    PositionGroup.TE: {
        I.KNEE_MINOR: 0.18, I.KNEE_ACL: 0.07, I.KNEE_MCL: 0.07, I.ANKLE: 0.15, I.SHOULDER: 0.15,
        I.CONCUSSION: 0.1, I.HAMSTRING: 0.12, I.RIBS: 0.08, I.BACK: 0.08,
    },
    PositionGroup.OL: {
        I.KNEE_MINOR: 0.2, I.KNEE_ACL: 0.1, I.KNEE_MCL: 0.1, I.ANKLE: 0.18, I.BACK: 0.12,
        I.SHOULDER: 0.1, I.CONCUSSION: 0.08, I.FOOT: 0.07, I.HAND: 0.05,
    },
    PositionGroup.DL: {
        I.KNEE_MINOR: 0.2, I.KNEE_ACL: 0.1, I.KNEE_MCL: 0.1, I.ANKLE: 0.15, I.SHOULDER: 0.12,
        I.BACK: 0.1, I.CONCUSSION: 0.08, I.HAMSTRING: 0.08, I.HAND: 0.07,
    },
    PositionGroup.LB: {
        I.KNEE_MINOR: 0.18, I.KNEE_ACL: 0.1, I.HAMSTRING: 0.15, I.ANKLE: 0.15, I.SHOULDER: 0.12,
        I.CONCUSSION: 0.12, I.BACK: 0.08, I.FOOT: 0.05, I.RIBS: 0.05,
    },
    PositionGroup.DB: {
        I.HAMSTRING: 0.22, I.KNEE_MINOR: 0.15, I.KNEE_ACL: 0.1, I.ANKLE: 0.15,
        I.SHOULDER: 0.1, I.CONCUSSION: 0.12, I.FOOT: 0.08, I.HAND: 0.08,
    },
    PositionGroup.K: _SPECIALIST_INJURIES,
    PositionGroup.P: _SPECIALIST_INJURIES,
}

S = InjurySeverity

_COMMON_DURATION = {
    S.MINOR: (1, 2), S.MODERATE: (2, 4), S.SIGNIFICANT: (4, 6), S.SEVERE: (6, 10), S.SEASON_ENDING: (10, 17),
}
_LONG_DURATION = {
    S.MINOR: (1, 2), S.MODERATE: (2, 4), S.SIGNIFICANT: (4, 8), S.SEVERE: (8, 12), S.SEASON_ENDING: (12, 17),
}

# (min, max) weeks out, inclusive
INJURY_DURATION = {
    I.CONCUSSION: {
        S.MINOR: (1, 1), S.MODERATE: (1, 2), S.SIGNIFICANT: (2, 4), S.SEVERE: (4, 8), S.SEASON_ENDING: (8, 17),
    },
    I.ANKLE: _COMMON_DURATION,
    I.KNEE_MINOR: {
        S.MINOR: (1, 2), S.MODERATE: (2, 3), S.SIGNIFICANT: (3, 5), S.SEVERE: (5, 8), S.SEASON_ENDING: (8, 17),
    },
    I.KNEE_ACL: {
        S.MINOR: (6, 8), S.MODERATE: (8, 12), S.SIGNIFICANT: (10, 17), S.SEVERE: (17, 17), S.SEASON_ENDING: (17, 17),
    },
    I.KNEE_MCL: {
        S.MINOR: (2, 4), S.MODERATE: (4, 6), S.SIGNIFICANT: (6, 10), S.SEVERE: (10, 14), S.SEASON_ENDING: (14, 17),
    },
    I.HAMSTRING: _COMMON_DURATION,
    I.SHOULDER: {
        S.MINOR: (1, 2), S.MODERATE: (2, 4), S.SIGNIFICANT: (4, 8), S.SEVERE: (8, 14), S.SEASON_ENDING: (14, 17),
    },
    I.BACK: _LONG_DURATION,
    I.HAND: _COMMON_DURATION,
    I.FOOT: _LONG_DURATION,
    I.RIBS: _COMMON_DURATION,
}

# Severity roll upper bounds, mildest first
SEVERITY_THRESHOLDS = (
    (0.4, S.MINOR),
    (0.65, S.MODERATE),
    (0.82, S.SIGNIFICANT),
    (0.95, S.SEVERE),
)

del I, S


@dataclass
class InjuryCheckParams:
    player: Player
    play_type: PlayType
    outcome: PlayOutcome
    had_big_hit: bool
    current_fatigue: float
    weather: WeatherCondition


def calculate_injury_probability(params: InjuryCheckParams) -> float:
    """Chance the player is hurt on this play."""
    player = params.player
    weather = params.weather
    probability = BASE_INJURY_PROBABILITY.get(params.outcome, DEFAULT_INJURY_PROBABILITY)

    if params.had_big_hit:
        probability *= 2

    if params.current_fatigue > 80:
        probability *= 1.5
    elif params.current_fatigue > 60:
        probability *= 1.25

    if not weather.is_dome and weather.temperature < 40:
        probability *= 1.2
    if not weather.is_dome and weather.precipitation != Precipitation.NONE:
        probability *= 1.15

    if player.has_trait(HiddenTrait.INJURY_PRONE):
        probability *= 1.8
    if player.has_trait(HiddenTrait.IRON_MAN):
        probability *= 0.4

    if player.age >= 32:
        probability *= 1.3
    elif player.age >= 30:
        probability *= 1.15
    elif player.age <= 23:
        probability *= 0.9

    # Playing hurt
    if player.injury_status.is_injured:
        probability *= 1.5

    return probability


def select_injury_type(player: Player, rng: Rng) -> InjuryType:
    distribution = POSITION_INJURY_TYPES.get(player.position.group, POSITION_INJURY_TYPES[PositionGroup.LB])
    roll = rng.next() * sum(distribution.values())
    for injury_type, weight in distribution.items():
        roll -= weight
        if roll <= 0:
            return injury_type
    return InjuryType.KNEE_MINOR


def determine_injury_severity(
    injury_type: InjuryType,
    had_big_hit: bool,
    fatigue: float,
    player: Player,
    rng: Rng,
) -> InjurySeverity:
    roll = rng.next()
    if had_big_hit:
        roll += 0.15
    if fatigue > 70:
        roll += 0.1
    elif fatigue > 50:
        roll += 0.05
    if player.has_trait(HiddenTrait.INJURY_PRONE):
        roll += 0.15
    if player.has_trait(HiddenTrait.IRON_MAN):
        roll -= 0.15
    # ACLs are rarely mild
    if injury_type == InjuryType.KNEE_ACL:
        roll += 0.3

    for upper, severity in SEVERITY_THRESHOLDS:
        if roll < upper:
            return severity
    return InjurySeverity.SEASON_ENDING


def calculate_weeks_out(injury_type: InjuryType, severity: InjurySeverity, rng: Rng) -> int:
    low, high = INJURY_DURATION[injury_type][severity]
    return low + int(rng.next() * (high - low + 1))


def determine_permanent_effects(
    injury_type: InjuryType,
    severity: InjurySeverity,
    rng: Rng,
) -> list[PermanentInjuryEffect]:
    """Lasting effects. Only severe and season-ending injuries leave any."""
    if not severity.can_leave_permanent_effects:
        return []

    effects = []
    season_ending = severity == InjurySeverity.SEASON_ENDING

    if injury_type == InjuryType.KNEE_ACL:
        if rng.next() < 0.4:
            effects.append(PermanentInjuryEffect.SPEED_REDUCTION)
        if rng.next() < 0.3:
            effects.append(PermanentInjuryEffect.AGILITY_REDUCTION)
        effects.append(PermanentInjuryEffect.REINJURY_RISK)
    elif injury_type == InjuryType.KNEE_MCL and season_ending:
        if rng.next() < 0.25:
            effects.append(PermanentInjuryEffect.AGILITY_REDUCTION)
        effects.append(PermanentInjuryEffect.REINJURY_RISK)
    elif injury_type == InjuryType.HAMSTRING and season_ending:
        if rng.next() < 0.3:
            effects.append(PermanentInjuryEffect.SPEED_REDUCTION)
        effects.append(PermanentInjuryEffect.REINJURY_RISK)
    elif injury_type == InjuryType.ANKLE and season_ending:
        if rng.next() < 0.2:
            effects.append(PermanentInjuryEffect.SPEED_REDUCTION)
    elif injury_type == InjuryType.CONCUSSION and season_ending:
        effects.append(PermanentInjuryEffect.REINJURY_RISK)

    return effects


def check_for_injury(params: InjuryCheckParams, rng: Rng) -> InjuryResult:
    """Roll for an injury on one player."""
    if rng.next() > calculate_injury_probability(params):
        return InjuryResult.none()

    player = params.player
    injury_type = select_injury_type(player, rng)
    severity = determine_injury_severity(injury_type, params.had_big_hit, params.current_fatigue, player, rng)
    weeks_out = calculate_weeks_out(injury_type, severity, rng)
    effects = determine_permanent_effects(injury_type, severity, rng)

    logger.info(
        f"Injury: {player.display_name} ({player.position.value}) "
        f"{injury_type.display}, {severity.display}, {weeks_out} week(s)"
    )
    return InjuryResult(
        occurred=True,
        type=injury_type,
        severity=severity,
        weeks_out=weeks_out,
        permanent_effects=effects,
    )


def create_no_injury_result() -> InjuryResult:
    return InjuryResult.none()


def injury_description(result: InjuryResult) -> Optional[str]:
    """'Torn ACL (IR Candidate)' style label, None when nothing happened."""
    if not result.occurred or result.type is None or result.severity is None:
        return None
    return f"{result.type.display} ({result.severity.display})"
