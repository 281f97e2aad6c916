"""
Pass rush phases.

Models pocket collapse over time: quick throws are out before the rush
develops, long-developing plays expose the edges and any weak link.
Pressure on the QB is graded in five tiers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from snapcore.core.enums import PlayType
from snapcore.core.mathutil import clamp, round_half_up
from snapcore.core.rng import Rng
from snapcore.ratings.composite import UnitRating


class PassRushPhase(Enum):
    QUICK = "quick"
    STANDARD = "standard"
    EXTENDED = "extended"


class PressureType(Enum):
    CLEAN = "clean"
    PRESSURE = "pressure"
    HURRY = "hurry"
    HIT = "hit"
    SACK = "sack"


# Conceptual seconds after the snap
PHASE_TIMING = {
    PassRushPhase.QUICK: (0.0, 2.0),
    PassRushPhase.STANDARD: (2.0, 3.5),
    PassRushPhase.EXTENDED: (3.5, 6.0),
}

PHASE_WEIGHTS = {
    # Interior pressure gets home first
    PassRushPhase.QUICK: {
        "DT": 1.5, "C": 1.4, "LG": 1.3, "RG": 1.3,
        "DE": 0.8, "LT": 0.7, "RT": 0.7, "OLB": 0.6,
    },
    PassRushPhase.STANDARD: {
        "LT": 1.4, "RT": 1.2, "DE": 1.3, "DT": 1.1,
        "C": 1.0, "LG": 1.0, "RG": 1.0, "OLB": 1.1,
    },
    # Edges dominate; delayed blitzers arrive
    PassRushPhase.EXTENDED: {
        "LT": 1.5, "RT": 1.3, "DE": 1.5, "OLB": 1.3,
        "DT": 0.9, "C": 0.8, "LG": 0.8, "RG": 0.8, "ILB": 0.7,
    },
}

# Pressure tier -> (floor of advantage, completion modifier, sack modifier,
# minimum QB mobility to escape)
PRESSURE_TIERS = (
    (15, PressureType.CLEAN, 5, -0.5, None),
    (5, PressureType.PRESSURE, 0, 0.0, None),
    (-5, PressureType.HURRY, -5, 0.3, 70),
    (-15, PressureType.HIT, -12, 0.6, 80),
)
SACK_TIER = (PressureType.SACK, -20, 1.5, 90)
ELITE_ESCAPE_CHANCE = 0.4


@dataclass
class PhaseResult:
    phase: PassRushPhase
    pressure_reached: bool
    pressure_type: PressureType
    pressure_source: Optional[str]
    completion_modifier: float  # -20 to +5
    sack_modifier: float
    can_scramble: bool
    scramble_direction: Optional[str]  # left, right, middle


@dataclass
class PhaseMatchup:
    advantage: float  # positive = line winning
    weak_link_position: Optional[str] = None
    weak_link_deficit: float = 0.0


@dataclass
class ScrambleOutcome:
    yards: int
    first_down: bool
    out_of_bounds: bool


def determine_pass_rush_phase(play_type: PlayType) -> PassRushPhase:
    """How long the QB will hold the ball on this play."""
    if play_type == PlayType.PASS_SCREEN:
        return PassRushPhase.QUICK
    if play_type.is_play_action or play_type == PlayType.PASS_DEEP:
        return PassRushPhase.EXTENDED
    if play_type == PlayType.PASS_SHORT:
        return PassRushPhase.QUICK
    return PassRushPhase.STANDARD


def calculate_phase_matchup(
    blockers: Sequence[tuple[str, float]],
    rushers: Sequence[tuple[str, float]],
    phase: PassRushPhase,
) -> PhaseMatchup:
    """Player-level line vs rush matchup for one phase.

    Args:
        blockers: (position key, pass block rating) for each lineman
        rushers: (position key, pass rush rating) for each rusher
        phase: Phase whose weights apply

    A weak link is flagged when the weakest weighted blocker trails the
    best rusher by more than 15.
    """
    weights = PHASE_WEIGHTS[phase]

    weighted_sum = 0.0
    total_weight = 0.0
    weakest_position = ""
    weakest_rating = 100.0
    weakest_weighted = 100.0
    for position, rating in blockers:
        weight = weights.get(position, 1.0)
        weighted_sum += rating * weight
        total_weight += weight
        if rating * weight < weakest_weighted:
            weakest_position, weakest_rating, weakest_weighted = position, rating, rating * weight
    line_average = weighted_sum / total_weight if total_weight > 0 else 50

    weighted_sum = 0.0
    total_weight = 0.0
    strongest_rating = 0.0
    for position, rating in rushers:
        weight = weights.get(position, 1.0)
        weighted_sum += rating * weight
        total_weight += weight
        strongest_rating = max(strongest_rating, rating)
    rush_average = weighted_sum / total_weight if total_weight > 0 else 50

    deficit = weakest_rating - strongest_rating
    if deficit < -15:
        return PhaseMatchup(line_average - rush_average, weakest_position, abs(deficit))
    return PhaseMatchup(line_average - rush_average)


def determine_scramble_direction(pressure_position: str, rng: Rng) -> str:
    """QB escapes away from the side the pressure comes from."""
    if pressure_position in ("LT", "LG"):
        return "right"
    if pressure_position in ("RT", "RG"):
        return "left"
    return "left" if rng.next() < 0.5 else "right"


def resolve_pass_rush_phase(
    pass_protection: UnitRating,
    pass_rush: UnitRating,
    phase: PassRushPhase,
    qb_mobility: float,
    is_blitz: bool,
    rng: Rng,
) -> PhaseResult:
    """Grade the pressure the QB faces in the given phase."""
    advantage = pass_protection.effective - pass_rush.effective

    if phase == PassRushPhase.QUICK:
        advantage += 10
    elif phase == PassRushPhase.EXTENDED:
        advantage -= 10

    # More rushers, fewer in coverage
    if is_blitz:
        advantage -= 8

    # Weak links get exposed the longer the QB holds the ball
    if pass_protection.weak_link_penalty > 10 and phase != PassRushPhase.QUICK:
        exposure = 0.8 if phase == PassRushPhase.EXTENDED else 0.5
        advantage -= pass_protection.weak_link_penalty * exposure

    advantage += (rng.next() - 0.5) * 15

    for floor, pressure_type, completion_modifier, sack_modifier, escape_mobility in PRESSURE_TIERS:
        if advantage >= floor:
            can_scramble = escape_mobility is not None and qb_mobility >= escape_mobility
            break
    else:
        pressure_type, completion_modifier, sack_modifier, escape_mobility = SACK_TIER
        can_scramble = qb_mobility >= escape_mobility and rng.next() < ELITE_ESCAPE_CHANCE

    direction = None
    if can_scramble:
        direction = determine_scramble_direction(pass_protection.weak_link_position, rng)

    return PhaseResult(
        phase=phase,
        pressure_reached=pressure_type != PressureType.CLEAN,
        pressure_type=pressure_type,
        pressure_source=pass_rush.weak_link_position or None,
        completion_modifier=completion_modifier,
        sack_modifier=sack_modifier,
        can_scramble=can_scramble,
        scramble_direction=direction,
    )


def get_overall_pass_rush_result(
    pass_protection: UnitRating,
    pass_rush: UnitRating,
    play_type: PlayType,
    qb_mobility: float,
    is_blitz: bool,
    rng: Rng,
) -> PhaseResult:
    phase = determine_pass_rush_phase(play_type)
    return resolve_pass_rush_phase(pass_protection, pass_rush, phase, qb_mobility, is_blitz, rng)


def calculate_scramble_outcome(
    qb_mobility: float,
    qb_speed: float,
    defense_containment: float,
    phase: PassRushPhase,
    rng: Rng,
) -> ScrambleOutcome:
    """Yards on a designed escape from the pocket."""
    base_mobility = (qb_mobility - 50) / 10
    base_speed = (qb_speed - 50) / 15

    # Less room to run once the coverage has recovered
    phase_modifier = {
        PassRushPhase.QUICK: 1.2,
        PassRushPhase.STANDARD: 1.0,
        PassRushPhase.EXTENDED: 0.8,
    }[phase]

    expected = max(-3, (4 + base_mobility + base_speed) * phase_modifier + (rng.next() - 0.3) * 8)
    containment_factor = 1 - (defense_containment - 50) / 200
    yards = round_half_up(expected * containment_factor)

    # Smart QBs slide or get out of bounds
    out_of_bounds = qb_mobility >= 75 and rng.next() < 0.4

    return ScrambleOutcome(yards=yards, first_down=yards >= 10, out_of_bounds=out_of_bounds)


def calculate_protection_time(pass_protection: UnitRating, pass_rush: UnitRating, is_blitz: bool) -> float:
    """Seconds the pocket holds, 1.5 to 5.0."""
    time = 3.0 + (pass_protection.effective - pass_rush.effective) / 30
    if is_blitz:
        time -= 0.5
    if pass_protection.weak_link_penalty > 10:
        time -= pass_protection.weak_link_penalty / 30
    return clamp(time, 1.5, 5.0)
