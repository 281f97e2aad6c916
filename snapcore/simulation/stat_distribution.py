"""
Stat distribution.

Decides who gets the target, the carry and the tackle. Weighted random
choice keeps the ball spread across the depth chart instead of funneling
every touch to the top player at each position. Weights use scouted
(perceived) skills: coaches call plays on what they believe, not on the
hidden truth.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Sequence, TypeVar

from snapcore.core.enums import PlayOutcome, PlayType, Position
from snapcore.core.models import Player, TeamGameState
from snapcore.core.rng import Rng

T = TypeVar("T")


# =============================================================================
# Weighted Random Selection
# =============================================================================

def weighted_random_choice(items: Sequence[T], weights: Sequence[float], rng: Rng) -> Optional[T]:
    """Pick one item in proportion to its weight.

    Non-positive weights are dropped. Returns None when nothing is left
    or the two sequences differ in length.
    """
    if not items or not weights or len(items) != len(weights):
        return None

    valid = [(item, weight) for item, weight in zip(items, weights) if weight > 0]
    if not valid:
        return None

    total = sum(weight for _, weight in valid)
    roll = rng.next() * total
    cumulative = 0.0
    for item, weight in valid:
        cumulative += weight
        if roll <= cumulative:
            return item
    return valid[-1][0]


def _fatigue_multiplier(team_state: TeamGameState, player: Player) -> float:
    """Tired players get open and pursue less: 0.5-1.0."""
    return max(0.5, 1 - team_state.get_fatigue(player.id) / 150)


# =============================================================================
# Target Distribution
# =============================================================================

BASE_TARGET_WEIGHTS = {
    "WR1": 1.0,
    "WR2": 0.75,
    "WR3": 0.5,
    "SLOT": 0.55,
    "TE": 0.5,
    "TE2": 0.2,
    "RB": 0.4,
    "RB2": 0.15,
}

PLAY_TYPE_TARGET_MODIFIERS = {
    PlayType.PASS_SHORT: {"WR1": 0.9, "WR2": 1.0, "WR3": 1.1, "SLOT": 1.2, "TE": 1.1, "RB": 1.3},
    PlayType.PASS_MEDIUM: {"WR1": 1.1, "WR2": 1.0, "WR3": 0.9, "SLOT": 0.95, "TE": 1.0, "RB": 0.8},
    PlayType.PASS_DEEP: {"WR1": 1.4, "WR2": 1.1, "WR3": 0.6, "SLOT": 0.5, "TE": 0.7, "RB": 0.3},
    PlayType.PASS_SCREEN: {"WR1": 0.7, "WR2": 0.5, "WR3": 0.4, "SLOT": 0.5, "TE": 0.6, "RB": 2.0},
    PlayType.PLAY_ACTION_SHORT: {"WR1": 1.0, "WR2": 0.95, "WR3": 0.85, "TE": 1.2, "RB": 0.6},
    PlayType.PLAY_ACTION_DEEP: {"WR1": 1.3, "WR2": 1.1, "WR3": 0.6, "TE": 1.0, "RB": 0.4},
}

DEFAULT_TARGET_WEIGHT = 0.3


@dataclass
class TargetSituationContext:
    down: int
    distance: int
    is_red_zone: bool = False
    is_two_minute_drill: bool = False
    score_differential: int = 0


def get_situational_target_modifier(slot: str, context: TargetSituationContext) -> float:
    modifier = 1.0

    # Red zone favors big bodies
    if context.is_red_zone:
        if slot in ("TE", "TE2"):
            modifier *= 1.3
        if slot == "WR1":
            modifier *= 1.15
        if slot == "WR3":
            modifier *= 0.8

    if context.is_two_minute_drill:
        if slot in ("WR1", "WR2"):
            modifier *= 1.2
        if slot == "RB":
            modifier *= 0.7

    if context.down == 3 and context.distance <= 3:
        if slot == "RB":
            modifier *= 1.4
        if slot == "TE":
            modifier *= 1.2

    if context.down == 3 and context.distance >= 8:
        if slot == "WR1":
            modifier *= 1.3
        if slot == "RB":
            modifier *= 0.6

    if context.score_differential <= -14:
        if slot == "WR1":
            modifier *= 1.2
        if slot == "RB":
            modifier *= 0.7

    if context.score_differential >= 14:
        if slot == "WR1":
            modifier *= 0.85
        if slot in ("WR2", "WR3"):
            modifier *= 1.1
        if slot == "RB":
            modifier *= 1.2

    return modifier


def assign_receiver_slots(receivers: Sequence[Player]) -> list[tuple[Player, str]]:
    """Label eligible receivers by depth: WR1, WR2, SLOT, WR3..., TE, TE2, RB, RB2.

    Linemen and quarterbacks are skipped.
    """
    counts = {Position.WR: 0, Position.TE: 0, Position.RB: 0}
    slots = []
    for player in receivers:
        if player.position not in counts:
            continue
        counts[player.position] += 1
        depth = counts[player.position]

        if player.position == Position.WR:
            if depth <= 2:
                slot = f"WR{depth}"
            elif depth == 3:
                slot = "SLOT"
            else:
                slot = "WR3"
        elif player.position == Position.TE:
            slot = "TE" if depth == 1 else "TE2"
        else:
            slot = "RB" if depth == 1 else "RB2"
        slots.append((player, slot))
    return slots


def calculate_target_weight(
    player: Player,
    slot: str,
    play_type: PlayType,
    situation: TargetSituationContext,
    team_state: TeamGameState,
) -> float:
    weight = BASE_TARGET_WEIGHTS.get(slot, DEFAULT_TARGET_WEIGHT)
    weight *= PLAY_TYPE_TARGET_MODIFIERS.get(play_type, {}).get(slot, 1.0)
    weight *= get_situational_target_modifier(slot, situation)
    weight *= _fatigue_multiplier(team_state, player)

    # Route running carries most of getting open
    skill_score = player.perceived_skill("route_running") * 0.8 + player.perceived_skill("catching") * 0.2
    weight *= 0.7 + (skill_score / 100) * 0.6
    return weight


def select_pass_target(
    receivers: Sequence[Player],
    play_type: PlayType,
    situation: TargetSituationContext,
    team_state: TeamGameState,
    rng: Rng,
) -> Optional[Player]:
    """Weighted choice of who the ball goes to."""
    candidates = assign_receiver_slots(receivers)
    if not candidates:
        return None

    weights = [
        calculate_target_weight(player, slot, play_type, situation, team_state)
        for player, slot in candidates
    ]
    return weighted_random_choice([player for player, _ in candidates], weights, rng)


# =============================================================================
# RB Rotation
# =============================================================================

RB_DEPTH_WEIGHTS = {1: 1.0, 2: 0.35, 3: 0.15}
DEFAULT_RB_DEPTH_WEIGHT = 0.1
MIN_SELECTION_WEIGHT = 0.05


@dataclass
class RBRotationContext:
    current_game_carries: int  # RB1's carries so far
    current_game_snaps: int
    down: int
    distance: int
    is_red_zone: bool = False
    is_goal_line: bool = False  # Inside the 5
    is_two_minute_drill: bool = False


def calculate_rb_weight(rb: Player, depth: int, team_state: TeamGameState, context: RBRotationContext) -> float:
    weight = RB_DEPTH_WEIGHTS.get(depth, DEFAULT_RB_DEPTH_WEIGHT)

    fatigue = team_state.get_fatigue(rb.id)
    if fatigue > 70:
        weight *= 0.3
    elif fatigue > 50:
        weight *= 0.6
    elif fatigue > 30:
        weight *= 0.85

    # Workload penalties on the starter stack
    if depth == 1 and context.current_game_carries >= 15:
        weight *= 0.7
    if depth == 1 and context.current_game_carries >= 20:
        weight *= 0.6

    if context.distance <= 2 and context.down >= 3 and depth == 1:
        weight *= 1.4
    if context.is_goal_line and depth == 1:
        weight *= 1.5

    # Passing downs bring in the change-of-pace back
    if context.down == 3 and context.distance >= 5 and depth == 2:
        weight *= 1.4
    if context.is_two_minute_drill and depth == 2:
        weight *= 1.3

    skill_score = (rb.perceived_skill("vision") + rb.perceived_skill("power")) / 2
    weight *= 0.8 + (skill_score / 100) * 0.4

    return max(MIN_SELECTION_WEIGHT, weight)


def select_running_back(
    running_backs: Sequence[Player],
    team_state: TeamGameState,
    context: RBRotationContext,
    rng: Rng,
) -> Optional[Player]:
    """Pick the ball carrier. A lone back always gets it."""
    if not running_backs:
        return None
    if len(running_backs) == 1:
        return running_backs[0]

    weights = [
        calculate_rb_weight(rb, index + 1, team_state, context)
        for index, rb in enumerate(running_backs)
    ]
    return weighted_random_choice(running_backs, weights, rng)


# =============================================================================
# Tackle Attribution
# =============================================================================

# (run, pass) tackle rates per play
POSITION_TACKLE_WEIGHTS = {
    Position.DE: (0.8, 0.3),
    Position.DT: (0.7, 0.2),
    Position.ILB: (1.0, 0.7),
    Position.OLB: (0.85, 0.5),
    Position.SS: (0.6, 0.8),
    Position.FS: (0.5, 0.7),
    Position.CB: (0.4, 0.9),
}

DEFAULT_TACKLE_WEIGHT = 0.3
ASSIST_TACKLE_CHANCE = 0.25

_DL = (Position.DE, Position.DT)
_LB = (Position.ILB, Position.OLB)
_DB = (Position.CB, Position.FS, Position.SS)


@dataclass
class TackleContext:
    play_type: PlayType
    yards_gained: int
    outcome: PlayOutcome


def get_tackle_weight_by_yards(position: Position, yards_gained: int, is_pass_play: bool) -> float:
    """Short gains go to the front, long gains to the secondary."""
    rates = POSITION_TACKLE_WEIGHTS.get(position)
    if rates is None:
        return DEFAULT_TACKLE_WEIGHT

    base = rates[1] if is_pass_play else rates[0]

    if yards_gained <= 2:
        if position in (Position.DE, Position.DT, Position.ILB):
            return base * 1.5
        if position in (Position.CB, Position.FS):
            return base * 0.4
    elif yards_gained <= 7:
        if position in (Position.ILB, Position.OLB, Position.SS):
            return base * 1.3
        if position in _DL:
            return base * 0.7
    else:
        if position in _DB:
            return base * 1.4
        if position in _DL:
            return base * 0.3
        if position in _LB:
            return base * 0.8

    return base


def calculate_tackle_weight(defender: Player, context: TackleContext, team_state: TeamGameState) -> float:
    weight = get_tackle_weight_by_yards(defender.position, context.yards_gained, context.play_type.is_pass)

    if context.outcome == PlayOutcome.SACK:
        if defender.position in _DL:
            weight *= 2.5
        elif defender.position in _LB:
            weight *= 1.5
        else:
            weight *= 0.3

    if context.outcome == PlayOutcome.INTERCEPTION:
        if defender.position in _DB:
            weight *= 2.0
        elif defender.position in _LB:
            weight *= 1.2
        else:
            weight *= 0.2

    weight *= 0.7 + (defender.perceived_skill("tackling") / 100) * 0.6
    weight *= _fatigue_multiplier(team_state, defender)
    return max(MIN_SELECTION_WEIGHT, weight)


def select_primary_tackler(
    defenders: Sequence[Player],
    context: TackleContext,
    team_state: TeamGameState,
    rng: Rng,
) -> Optional[Player]:
    if not defenders:
        return None
    weights = [calculate_tackle_weight(d, context, team_state) for d in defenders]
    return weighted_random_choice(defenders, weights, rng)


def should_have_assist_tackle(rng: Rng) -> bool:
    return rng.next() < ASSIST_TACKLE_CHANCE


def select_assist_tackler(
    defenders: Sequence[Player],
    primary_tackler: Player,
    context: TackleContext,
    team_state: TeamGameState,
    rng: Rng,
) -> Optional[Player]:
    """Same weighting as the primary tackle, minus the primary tackler."""
    eligible = [d for d in defenders if d.id != primary_tackler.id]
    return select_primary_tackler(eligible, context, team_state, rng)


# =============================================================================
# Completion Adjustments
# =============================================================================

PressureLevel = Literal["clean", "hurried", "pressured", "hit"]
CoverageQuality = Literal["wide_open", "open", "contested", "tight", "double_covered"]

# Subtracted from base completion chance
PRESSURE_COMPLETION_MODIFIERS = {
    "clean": 0.0,
    "hurried": 0.08,
    "pressured": 0.18,
    "hit": 0.3,
}

DISTANCE_COMPLETION_MODIFIERS = {
    "screen": 0.1,
    "short": 0.03,
    "medium": 0.0,
    "deep": -0.18,
    "bomb": -0.3,
}

COVERAGE_COMPLETION_MODIFIERS = {
    "wide_open": 0.12,
    "open": 0.05,
    "contested": -0.08,
    "tight": -0.15,
    "double_covered": -0.25,
}

# (advantage floor, [(roll ceiling, level), ...]); last level catches the rest
_PRESSURE_LADDER = (
    (10, ((70, "clean"), (90, "hurried")), "pressured"),
    (-5, ((50, "clean"), (75, "hurried"), (95, "pressured")), "hit"),
    (-15, ((30, "clean"), (55, "hurried"), (85, "pressured")), "hit"),
)
_DOMINATED_PRESSURE = ((15, "clean"), (40, "hurried"), (75, "pressured"))


def calculate_pressure_level(ol_rating: float, dl_rating: float, is_blitz: bool, rng: Rng) -> PressureLevel:
    """Roll the pocket for a simple OL vs DL rating comparison."""
    advantage = ol_rating - dl_rating - (10 if is_blitz else 0)
    roll = rng.next() * 100

    for floor, ceilings, fallback in _PRESSURE_LADDER:
        if advantage >= floor:
            break
    else:
        ceilings, fallback = _DOMINATED_PRESSURE, "hit"

    for ceiling, level in ceilings:
        if roll < ceiling:
            return level
    return fallback


def calculate_coverage_quality(
    receiver_rating: float,
    defender_rating: float,
    is_man_coverage: bool,
    rng: Rng,
) -> CoverageQuality:
    """Separation at the catch point, with +/-15 of variance."""
    advantage = receiver_rating - defender_rating + (-5 if is_man_coverage else 5)
    advantage += rng.next() * 30 - 15

    if advantage >= 20:
        return "wide_open"
    if advantage >= 8:
        return "open"
    if advantage >= -5:
        return "contested"
    if advantage >= -15:
        return "tight"
    return "double_covered"
