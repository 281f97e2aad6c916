"""
Play calling.

Selects plays from coordinator tendencies and the game situation. The
user never sees this; it just happens based on their OC and DC.
"""

from __future__ import annotations

from snapcore.core.enums import Aggressiveness, CoverageType, OffensiveFormation, PlayType
from snapcore.core.mathutil import clamp
from snapcore.core.models import (
    DefensivePlayCall,
    DefensiveTendencies,
    OffensivePlayCall,
    OffensiveTendencies,
    PlayCallContext,
)
from snapcore.core.rng import Rng
from snapcore.simulation.stat_distribution import weighted_random_choice

# Broken plays that turn into scrambles
SCRAMBLE_CALL_CHANCE = 0.02

# Yards added to line of scrimmage distance for the end zone and snap
FIELD_GOAL_DISTANCE_OFFSET = 17

RUN_PLAY_WEIGHTS = (
    (PlayType.RUN_INSIDE, 0.4),
    (PlayType.RUN_OUTSIDE, 0.25),
    (PlayType.RUN_DRAW, 0.2),
    (PlayType.RUN_SWEEP, 0.15),
)


# =============================================================================
# Offense
# =============================================================================

def calculate_run_probability(tendencies: OffensiveTendencies, context: PlayCallContext) -> float:
    """Chance of calling a run, clamped to [0.05, 0.9]."""
    probability = tendencies.run_rate / 100
    situational = tendencies.situational

    if context.score_differential >= 14:
        probability += situational.ahead_by_14_plus.run_modifier / 100
    elif context.score_differential <= -14:
        probability += situational.behind_by_14_plus.run_modifier / 100

    if context.weather.is_bad:
        probability += situational.bad_weather.run_modifier / 100

    if context.down == 1:
        probability += 0.05
    elif context.down == 2 and context.distance <= 3:
        probability += 0.2
    elif context.down == 3:
        if context.distance <= 2:
            if situational.third_and_short == "run":
                probability += 0.3
            elif situational.third_and_short == "pass":
                probability -= 0.15
        elif context.distance > 7:
            probability -= 0.25
    elif context.down == 4:
        probability += 0.35 if context.distance <= 1 else -0.3

    if context.is_red_zone:
        if situational.red_zone == "run":
            probability += 0.15
        elif situational.red_zone == "pass":
            probability -= 0.1

    if context.field_position >= 97:
        probability += 0.25

    if context.is_two_minute_warning and context.score_differential < 14:
        probability -= 0.3

    end_of_half = context.quarter in (2, 4) or context.is_overtime
    if end_of_half and context.time_remaining < 120 and context.score_differential < 0:
        probability -= 0.35

    return clamp(probability, 0.05, 0.9)


def select_run_play_type(context: PlayCallContext, rng: Rng) -> PlayType:
    if context.distance <= 1 and context.down >= 3:
        return PlayType.QB_SNEAK if rng.next() < 0.4 else PlayType.RUN_INSIDE

    # No sweeps from inside the 5, a safety is too likely
    if context.field_position < 5:
        return PlayType.RUN_INSIDE if rng.next() < 0.7 else PlayType.RUN_DRAW

    run_types = [play_type for play_type, _ in RUN_PLAY_WEIGHTS]
    weights = [weight for _, weight in RUN_PLAY_WEIGHTS]
    return weighted_random_choice(run_types, weights, rng) or PlayType.RUN_INSIDE


def select_pass_play_type(tendencies: OffensiveTendencies, context: PlayCallContext, rng: Rng) -> PlayType:
    use_play_action = rng.next() < tendencies.play_action_rate / 100
    deep_chance = tendencies.deep_shot_rate / 100

    if context.distance > 15:
        deep_chance *= 1.5
    elif context.distance <= 3:
        deep_chance *= 0.5

    if context.is_two_minute_warning:
        deep_chance *= 0.7
    if context.weather.is_bad:
        deep_chance *= 0.5
    if context.is_red_zone:
        deep_chance *= 0.3

    roll = rng.next()
    if roll < deep_chance:
        return PlayType.PLAY_ACTION_DEEP if use_play_action else PlayType.PASS_DEEP
    if roll < deep_chance + 0.35:
        return PlayType.PASS_MEDIUM
    if roll < deep_chance + 0.55:
        return PlayType.PLAY_ACTION_SHORT if use_play_action else PlayType.PASS_SHORT
    return PlayType.PASS_SCREEN


def select_formation(play_type: PlayType, context: PlayCallContext, rng: Rng) -> OffensiveFormation:
    is_run = play_type.is_designed_run

    if is_run and (context.field_position >= 98 or (context.distance <= 1 and context.down >= 3)):
        return OffensiveFormation.GOAL_LINE if rng.next() < 0.6 else OffensiveFormation.JUMBO

    roll = rng.next()
    if is_run:
        if roll < 0.35:
            return OffensiveFormation.SINGLEBACK
        if roll < 0.6:
            return OffensiveFormation.I_FORMATION
        if roll < 0.8:
            return OffensiveFormation.PISTOL
        return OffensiveFormation.SHOTGUN

    if play_type.is_deep:
        return OffensiveFormation.SHOTGUN if roll < 0.6 else OffensiveFormation.PISTOL

    if play_type == PlayType.PASS_SCREEN:
        return OffensiveFormation.SHOTGUN if roll < 0.5 else OffensiveFormation.SINGLEBACK

    if roll < 0.45:
        return OffensiveFormation.SHOTGUN
    if roll < 0.65:
        return OffensiveFormation.SINGLEBACK
    if roll < 0.8:
        return OffensiveFormation.PISTOL
    return OffensiveFormation.EMPTY


def select_target_position(play_type: PlayType, rng: Rng) -> str:
    """Depth-chart slot the play is designed for (WR1, RB, TE, ...)."""
    if play_type.is_ground_play:
        return "QB" if play_type.is_qb_keep else "RB"

    roll = rng.next()
    if play_type == PlayType.PASS_SCREEN:
        if roll < 0.5:
            return "RB"
        if roll < 0.8:
            return "WR1"
        return "TE"

    if play_type.is_deep:
        if roll < 0.6:
            return "WR1"
        if roll < 0.85:
            return "WR2"
        return "TE"

    if roll < 0.35:
        return "WR1"
    if roll < 0.55:
        return "WR2"
    if roll < 0.7:
        return "TE"
    if roll < 0.85:
        return "RB"
    return "WR3"


def select_offensive_play(
    tendencies: OffensiveTendencies,
    context: PlayCallContext,
    rng: Rng,
) -> OffensivePlayCall:
    """Call an offensive play from the coordinator's tendencies."""
    if rng.next() < SCRAMBLE_CALL_CHANCE:
        return OffensivePlayCall(
            play_type=PlayType.QB_SCRAMBLE,
            target_position="QB",
            formation=select_formation(PlayType.QB_SCRAMBLE, context, rng),
        )

    if rng.next() < calculate_run_probability(tendencies, context):
        play_type = select_run_play_type(context, rng)
    else:
        play_type = select_pass_play_type(tendencies, context, rng)

    formation = select_formation(play_type, context, rng)
    return OffensivePlayCall(
        play_type=play_type,
        target_position=select_target_position(play_type, rng),
        formation=formation,
    )


# =============================================================================
# Defense
# =============================================================================

def select_defensive_play(
    tendencies: DefensiveTendencies,
    context: PlayCallContext,
    offensive_formation: OffensiveFormation,
    rng: Rng,
) -> DefensivePlayCall:
    """Call coverage, blitz and press from the coordinator's tendencies.

    Rates are clamped before rolling: blitz 5-60%, man 10-90%,
    press 10-90%.
    """
    blitz_rate = tendencies.blitz_rate / 100
    man_rate = tendencies.man_coverage_rate / 100
    press_rate = tendencies.press_rate / 100
    situational = tendencies.situational

    if context.is_red_zone:
        if situational.red_zone == "aggressive":
            blitz_rate += 0.15
            press_rate += 0.1
        else:
            blitz_rate -= 0.1

    if context.is_two_minute_warning:
        if situational.two_minute_drill == "prevent":
            blitz_rate -= 0.2
            man_rate -= 0.3
        elif situational.two_minute_drill == "blitz":
            blitz_rate += 0.2

    if context.down == 3 and context.distance > 7:
        if situational.third_and_long == "blitz":
            blitz_rate += 0.2
        elif situational.third_and_long == "coverage":
            blitz_rate -= 0.15
            man_rate -= 0.1

    if offensive_formation == OffensiveFormation.EMPTY:
        blitz_rate += 0.1
        man_rate += 0.1
    elif offensive_formation in (OffensiveFormation.I_FORMATION, OffensiveFormation.GOAL_LINE):
        blitz_rate -= 0.1

    if context.score_differential >= 14:
        blitz_rate -= 0.15
    elif context.score_differential <= -14:
        blitz_rate += 0.1

    blitz_rate = clamp(blitz_rate, 0.05, 0.6)
    man_rate = clamp(man_rate, 0.1, 0.9)
    press_rate = clamp(press_rate, 0.1, 0.9)

    blitz = rng.next() < blitz_rate
    coverage = CoverageType.MAN if rng.next() < man_rate else CoverageType.ZONE

    if coverage == CoverageType.ZONE:
        press_rate *= 0.3

    # Blitzes usually go with man behind them
    if blitz and rng.next() < 0.7:
        return DefensivePlayCall(coverage=CoverageType.MAN, blitz=True, press_rate=min(0.8, press_rate + 0.2))

    return DefensivePlayCall(coverage=coverage, blitz=blitz, press_rate=press_rate)


# =============================================================================
# Fourth Down
# =============================================================================

def field_goal_distance(field_position: int) -> int:
    return 100 - field_position + FIELD_GOAL_DISTANCE_OFFSET


def should_attempt_field_goal(context: PlayCallContext, kicker_range: int) -> bool:
    kick_distance = field_goal_distance(context.field_position)
    if kick_distance > kicker_range:
        return False

    if context.down != 4:
        end_of_half = context.quarter in (2, 4)
        if not end_of_half or context.time_remaining > 5:
            return False

    if kick_distance <= 35:
        return True
    if kick_distance <= 45:
        # Go for it on 4th and short when close
        return context.distance > 2 or context.field_position < 60
    return context.score_differential <= 0


def should_punt(context: PlayCallContext, aggressiveness: Aggressiveness) -> bool:
    if context.down != 4:
        return False

    aggressive = aggressiveness == Aggressiveness.AGGRESSIVE
    if context.field_position >= 60 and aggressive:
        return False
    if context.field_position < 35:
        return True
    if context.distance <= 2:
        return aggressiveness == Aggressiveness.CONSERVATIVE
    if context.distance <= 5:
        return not aggressive
    return not aggressive or context.field_position < 50
