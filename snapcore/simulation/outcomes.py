"""
Outcome tables.

Strat-O-Matic style sampling, completely hidden from the user. A table
is a probability distribution over discrete outcomes built from the
rating advantage and the situation; rolling it picks an outcome and then
a yardage from an outcome-shaped, truncated Gaussian.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from snapcore.core.enums import PlayOutcome, PlayType, SecondaryEffect
from snapcore.core.mathutil import clamp, round_half_up
from snapcore.core.rng import Rng

logger = logging.getLogger(__name__)

O = PlayOutcome


@dataclass(frozen=True)
class YardRange:
    min: int
    max: int


@dataclass
class OutcomeTableEntry:
    outcome: PlayOutcome
    probability: float  # all entries in a table sum to 1
    yards_range: YardRange = YardRange(0, 0)
    secondary_effects: list[SecondaryEffect] = field(default_factory=list)


@dataclass(frozen=True)
class DownAndDistance:
    down: int
    yards_to_go: int
    yards_to_endzone: int


@dataclass
class RolledOutcome:
    outcome: PlayOutcome
    yards: int
    secondary_effects: list[SecondaryEffect]


# =============================================================================
# Base Tables (neutral matchup)
# =============================================================================

BASE_RUN_OUTCOMES = {
    O.TOUCHDOWN: 0.02,
    O.BIG_GAIN: 0.08,
    O.GOOD_GAIN: 0.15,
    O.MODERATE_GAIN: 0.2,
    O.SHORT_GAIN: 0.25,
    O.NO_GAIN: 0.15,
    O.LOSS: 0.08,
    O.BIG_LOSS: 0.02,
    O.FUMBLE: 0.02,
    O.FUMBLE_LOST: 0.01,
    O.PENALTY_OFFENSE: 0.01,
    O.PENALTY_DEFENSE: 0.01,
}

BASE_PASS_OUTCOMES = {
    O.TOUCHDOWN: 0.03,
    O.BIG_GAIN: 0.1,
    O.GOOD_GAIN: 0.12,
    O.MODERATE_GAIN: 0.15,
    O.SHORT_GAIN: 0.08,
    O.INCOMPLETE: 0.3,
    O.SACK: 0.06,
    O.INTERCEPTION: 0.025,
    O.FUMBLE: 0.01,
    O.FUMBLE_LOST: 0.005,
    O.PENALTY_OFFENSE: 0.02,
    O.PENALTY_DEFENSE: 0.02,
}

BASE_DEEP_PASS_OUTCOMES = {
    O.TOUCHDOWN: 0.08,
    O.BIG_GAIN: 0.12,
    O.GOOD_GAIN: 0.05,
    O.MODERATE_GAIN: 0.03,
    O.SHORT_GAIN: 0.02,
    O.INCOMPLETE: 0.45,
    O.SACK: 0.08,
    O.INTERCEPTION: 0.04,
    O.FUMBLE: 0.01,
    O.FUMBLE_LOST: 0.005,
    O.PENALTY_OFFENSE: 0.02,
    O.PENALTY_DEFENSE: 0.025,
}

BASE_SCREEN_OUTCOMES = {
    O.TOUCHDOWN: 0.03,
    O.BIG_GAIN: 0.12,
    O.GOOD_GAIN: 0.18,
    O.MODERATE_GAIN: 0.15,
    O.SHORT_GAIN: 0.15,
    O.NO_GAIN: 0.08,
    O.LOSS: 0.1,
    O.BIG_LOSS: 0.08,
    O.INCOMPLETE: 0.05,
    O.SACK: 0.02,
    O.FUMBLE: 0.015,
    O.FUMBLE_LOST: 0.005,
    O.PENALTY_OFFENSE: 0.01,
    O.PENALTY_DEFENSE: 0.01,
}


def _ranges(**values: tuple[int, int]) -> dict[PlayOutcome, YardRange]:
    table = {outcome: YardRange(0, 0) for outcome in PlayOutcome}
    for name, (low, high) in values.items():
        table[PlayOutcome(name)] = YardRange(low, high)
    return table


# Touchdown yardage is filled in by the resolver
RUN_YARD_RANGES = _ranges(
    big_gain=(15, 40), good_gain=(8, 14), moderate_gain=(5, 7), short_gain=(2, 4),
    no_gain=(0, 1), loss=(-3, -1), big_loss=(-8, -4), sack=(-10, -3),
    fumble=(-2, 5), fumble_lost=(-2, 5), penalty_offense=(-10, -5), penalty_defense=(5, 15),
)

SHORT_PASS_YARD_RANGES = _ranges(
    big_gain=(15, 30), good_gain=(10, 14), moderate_gain=(6, 9), short_gain=(2, 5),
    no_gain=(0, 1), loss=(-2, -1), big_loss=(-5, -3), sack=(-12, -4),
    fumble=(-2, 10), fumble_lost=(-2, 10), penalty_offense=(-10, -5), penalty_defense=(5, 15),
)

DEEP_PASS_YARD_RANGES = _ranges(
    big_gain=(30, 60), good_gain=(20, 29), moderate_gain=(15, 19), short_gain=(10, 14),
    sack=(-15, -5), fumble=(0, 30), fumble_lost=(0, 30),
    penalty_offense=(-10, -5), penalty_defense=(15, 40),
)

POSITIVE_OUTCOMES = (O.TOUCHDOWN, O.BIG_GAIN, O.GOOD_GAIN, O.MODERATE_GAIN)
PASS_NEGATIVE_OUTCOMES = (O.SACK, O.INTERCEPTION, O.FUMBLE, O.FUMBLE_LOST, O.INCOMPLETE)
RUN_NEGATIVE_OUTCOMES = (O.LOSS, O.BIG_LOSS, O.FUMBLE, O.FUMBLE_LOST, O.NO_GAIN)

# Chance any contact outcome carries an injury check anyway
CONTACT_INJURY_CHECK_CHANCE = 0.05


def get_yard_ranges(play_type: PlayType) -> dict[PlayOutcome, YardRange]:
    if play_type.is_ground_play:
        return RUN_YARD_RANGES
    if play_type.is_deep:
        return DEEP_PASS_YARD_RANGES
    return SHORT_PASS_YARD_RANGES


def get_base_outcomes(play_type: PlayType) -> dict[PlayOutcome, float]:
    if play_type.is_ground_play:
        return BASE_RUN_OUTCOMES
    if play_type.is_deep:
        return BASE_DEEP_PASS_OUTCOMES
    if play_type == PlayType.PASS_SCREEN:
        return BASE_SCREEN_OUTCOMES
    return BASE_PASS_OUTCOMES


# =============================================================================
# Modifiers
# =============================================================================

def _scale(probabilities: dict[PlayOutcome, float], outcome: PlayOutcome, factor: float) -> None:
    if probabilities.get(outcome):
        probabilities[outcome] *= factor


def apply_advantage_modifier(
    outcomes: dict[PlayOutcome, float],
    advantage: float,
    is_pass_play: bool,
) -> dict[PlayOutcome, float]:
    """Shift mass toward positive (offense) or negative (defense) outcomes.

    Advantage of +/-40 saturates at a 50% boost or cut.
    """
    modified = dict(outcomes)
    modifier = clamp(advantage / 40, -1, 1)

    for outcome in POSITIVE_OUTCOMES:
        if outcome in modified:
            modified[outcome] *= 1 + modifier * 0.5

    negatives = PASS_NEGATIVE_OUTCOMES if is_pass_play else RUN_NEGATIVE_OUTCOMES
    for outcome in negatives:
        if outcome in modified:
            modified[outcome] *= 1 - modifier * 0.5

    return modified


def apply_situational_modifier(
    outcomes: dict[PlayOutcome, float],
    situation: DownAndDistance,
) -> dict[PlayOutcome, float]:
    modified = dict(outcomes)

    if situation.down == 3 and situation.yards_to_go > 7:
        _scale(modified, O.INCOMPLETE, 1.1)
        _scale(modified, O.SACK, 1.15)

    # Red zone: shorter field, fewer long gains
    if situation.yards_to_endzone <= 20:
        _scale(modified, O.TOUCHDOWN, 1.3)
        _scale(modified, O.BIG_GAIN, 0.7)

    if situation.yards_to_endzone <= 5:
        _scale(modified, O.TOUCHDOWN, 1.8)
        _scale(modified, O.SHORT_GAIN, 1.3)
        _scale(modified, O.NO_GAIN, 1.2)

    if situation.down == 4:
        _scale(modified, O.FUMBLE, 1.1)
        _scale(modified, O.INTERCEPTION, 1.1)

    return modified


def apply_field_position_modifier(
    outcomes: dict[PlayOutcome, float],
    field_position: int,
) -> dict[PlayOutcome, float]:
    """Backed-up offenses play tight and get buried more often."""
    modified = dict(outcomes)

    if field_position < 10:
        _scale(modified, O.BIG_LOSS, 1.3)
        _scale(modified, O.FUMBLE, 1.1)
        _scale(modified, O.BIG_GAIN, 0.8)
        _scale(modified, O.TOUCHDOWN, 0.7)

    if field_position < 20:
        _scale(modified, O.LOSS, 1.1)

    return modified


def normalize_probabilities(outcomes: dict[PlayOutcome, float]) -> list[OutcomeTableEntry]:
    total = sum(outcomes.values())
    if total <= 0:
        logger.warning("Outcome probabilities sum to zero, falling back to incomplete")
        return [OutcomeTableEntry(O.INCOMPLETE, 1.0)]
    return [OutcomeTableEntry(outcome, p / total) for outcome, p in outcomes.items()]


def _secondary_effects(outcome: PlayOutcome, rng: Rng) -> list[SecondaryEffect]:
    effects = []
    if outcome in (O.BIG_GAIN, O.TOUCHDOWN):
        effects.append(SecondaryEffect.HIGHLIGHT_PLAY)
    if outcome in (O.SACK, O.BIG_LOSS):
        effects.append(SecondaryEffect.BIG_HIT)
        effects.append(SecondaryEffect.INJURY_CHECK)
    if outcome in (O.FUMBLE, O.FUMBLE_LOST, O.BIG_GAIN):
        effects.append(SecondaryEffect.FATIGUE_HIGH)
    if (
        rng.next() < CONTACT_INJURY_CHECK_CHANCE
        and SecondaryEffect.INJURY_CHECK not in effects
        and outcome != O.INCOMPLETE
    ):
        effects.append(SecondaryEffect.INJURY_CHECK)
    return effects


def add_yard_ranges_and_effects(
    entries: list[OutcomeTableEntry],
    play_type: PlayType,
    yards_to_endzone: int,
    rng: Rng,
) -> list[OutcomeTableEntry]:
    """Attach yard ranges, capped at the goal line, and secondary effect tags."""
    ranges = get_yard_ranges(play_type)
    for entry in entries:
        yard_range = ranges[entry.outcome]
        if yard_range.max > yards_to_endzone and yard_range.max > 0:
            yard_range = YardRange(min(yard_range.min, yards_to_endzone), yards_to_endzone)
        entry.yards_range = yard_range
        entry.secondary_effects = _secondary_effects(entry.outcome, rng)
    return entries


def generate_outcome_table(
    offensive_rating: float,
    defensive_rating: float,
    play_type: PlayType,
    situation: DownAndDistance,
    field_position: int,
    rng: Rng,
    base_outcomes: Optional[dict[PlayOutcome, float]] = None,
) -> list[OutcomeTableEntry]:
    """Build the outcome table for one play.

    Args:
        offensive_rating: Offensive effective rating
        defensive_rating: Defensive effective rating
        play_type: Play being run
        situation: Down, distance and yards to the end zone
        field_position: Yards from own end zone (0-100)
        rng: Random source (secondary effect tags)
        base_outcomes: Starting probabilities; defaults to the play type's base
            table. Used to feed in scheme-adjusted weights.

    Returns:
        Entries sorted by probability, highest first, summing to 1.0
    """
    advantage = offensive_rating - defensive_rating
    outcomes = base_outcomes if base_outcomes is not None else get_base_outcomes(play_type)

    outcomes = apply_advantage_modifier(outcomes, advantage, play_type.is_pass)
    outcomes = apply_situational_modifier(outcomes, situation)
    outcomes = apply_field_position_modifier(outcomes, field_position)

    entries = normalize_probabilities(outcomes)
    entries = add_yard_ranges_and_effects(entries, play_type, situation.yards_to_endzone, rng)
    entries.sort(key=lambda e: e.probability, reverse=True)
    return entries


def table_probabilities(table: list[OutcomeTableEntry]) -> dict[PlayOutcome, float]:
    return {entry.outcome: entry.probability for entry in table}


# =============================================================================
# Sampling
# =============================================================================

def truncated_gaussian(mean: float, std_dev: float, low: int, high: int, rng: Rng, skew: float = 0) -> int:
    """Rounded Box-Muller draw clamped to [low, high].

    Positive skew stretches draws above the mean, negative below.
    """
    u1 = 1.0 - rng.next()  # (0, 1] keeps log finite
    u2 = rng.next()
    z = math.sqrt(-2 * math.log(u1)) * math.cos(2 * math.pi * u2)

    if skew != 0:
        z = z + skew * abs(z) * (1 if z > 0 else -1)

    return int(clamp(round_half_up(mean + z * std_dev), low, high))


def calculate_yards_gaussian(low: int, high: int, outcome: PlayOutcome, advantage: float, rng: Rng) -> int:
    """Outcome-shaped yardage inside [low, high]."""
    if low == high:
        return low

    spread = high - low
    mean = (low + high) / 2
    std_dev = spread / 4
    skew = 0.0

    if outcome == O.BIG_GAIN:
        # Clusters low with the occasional explosive play
        mean = low + spread * 0.35
        std_dev = spread / 3
        skew = 0.3
    elif outcome in (O.MODERATE_GAIN, O.SHORT_GAIN):
        std_dev = spread / 5
    elif outcome in (O.LOSS, O.BIG_LOSS):
        # Mostly small losses
        mean = high - spread * 0.3
        std_dev = spread / 3
        skew = -0.2
    elif outcome == O.SACK:
        mean = low + spread * 0.4

    mean += (advantage / 40) * spread * 0.2
    return truncated_gaussian(mean, std_dev, low, high, rng, skew)


def roll_outcome(table: list[OutcomeTableEntry], advantage: float, rng: Rng) -> RolledOutcome:
    """Pick an outcome by cumulative probability, then its yardage."""
    roll = rng.next()

    selected = None
    accumulated = 0.0
    for entry in table:
        accumulated += entry.probability
        if roll <= accumulated:
            selected = entry
            break
    # Float drift can leave the roll above the running total
    if selected is None:
        selected = table[-1]

    yards = calculate_yards_gaussian(
        selected.yards_range.min, selected.yards_range.max, selected.outcome, advantage, rng
    )
    return RolledOutcome(selected.outcome, yards, list(selected.secondary_effects))


# =============================================================================
# Kicking and Predicates
# =============================================================================

def generate_field_goal_table(kicker_rating: float, distance: int, weather_modifier: float) -> list[OutcomeTableEntry]:
    """Two-entry made/missed table by distance, kicker and weather (-10 to +5)."""
    if distance <= 30:
        probability = 0.95
    elif distance <= 40:
        probability = 0.85
    elif distance <= 50:
        probability = 0.7
    elif distance <= 55:
        probability = 0.55
    else:
        probability = 0.35

    probability += (kicker_rating - 70) / 100
    probability += weather_modifier / 100
    probability = clamp(probability, 0.1, 0.99)

    return [
        OutcomeTableEntry(O.FIELD_GOAL_MADE, probability),
        OutcomeTableEntry(O.FIELD_GOAL_MISSED, 1 - probability),
    ]


def is_turnover(outcome: PlayOutcome) -> bool:
    return outcome.is_turnover


def is_positive_outcome(outcome: PlayOutcome) -> bool:
    return outcome.is_positive


def is_negative_outcome(outcome: PlayOutcome) -> bool:
    """Bad for the offense. Fumbles count even when recovered."""
    return outcome.is_negative or outcome in (O.FUMBLE, O.PENALTY_OFFENSE)
