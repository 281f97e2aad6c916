"""
Non-linear fatigue curves.

Usage-based effectiveness by position archetype: backs fade sharply
after about twenty touches, defensive linemen want a 60-70% snap share,
linemen and quarterbacks can go the whole game.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from snapcore.core.enums import HiddenTrait, Position, PositionGroup
from snapcore.core.models.player import Player


class FatigueCurveType(Enum):
    QUARTERBACK = "quarterback"
    RUNNING_BACK = "running_back"
    RECEIVER = "receiver"
    OFFENSIVE_LINE = "offensive_line"
    DEFENSIVE_LINE = "defensive_line"
    LINEBACKER = "linebacker"
    DEFENSIVE_BACK = "defensive_back"
    SPECIALIST = "specialist"


@dataclass(frozen=True)
class FatigueCurveParams:
    degradation_threshold: int  # usage where decline begins
    sharp_decline_threshold: int
    degradation_multiplier: float  # effectiveness at the sharp threshold
    sharp_decline_multiplier: float
    minimum_effectiveness: float
    optimal_snap_share: int  # percent
    needs_rotation: bool


FATIGUE_CURVES = {
    FatigueCurveType.QUARTERBACK: FatigueCurveParams(50, 70, 0.98, 0.93, 0.85, 100, False),
    FatigueCurveType.RUNNING_BACK: FatigueCurveParams(15, 22, 0.95, 0.82, 0.65, 60, True),
    FatigueCurveType.RECEIVER: FatigueCurveParams(35, 50, 0.97, 0.90, 0.80, 85, False),
    FatigueCurveType.OFFENSIVE_LINE: FatigueCurveParams(55, 70, 0.98, 0.95, 0.88, 100, False),
    FatigueCurveType.DEFENSIVE_LINE: FatigueCurveParams(25, 35, 0.92, 0.78, 0.60, 65, True),
    FatigueCurveType.LINEBACKER: FatigueCurveParams(40, 55, 0.95, 0.85, 0.75, 80, False),
    FatigueCurveType.DEFENSIVE_BACK: FatigueCurveParams(45, 60, 0.96, 0.88, 0.78, 90, False),
    # Kickers don't tire from plays
    FatigueCurveType.SPECIALIST: FatigueCurveParams(100, 150, 1.0, 0.98, 0.95, 100, False),
}

_GROUP_CURVES = {
    PositionGroup.QB: FatigueCurveType.QUARTERBACK,
    PositionGroup.RB: FatigueCurveType.RUNNING_BACK,
    PositionGroup.WR: FatigueCurveType.RECEIVER,
    PositionGroup.TE: FatigueCurveType.RECEIVER,
    PositionGroup.OL: FatigueCurveType.OFFENSIVE_LINE,
    PositionGroup.DL: FatigueCurveType.DEFENSIVE_LINE,
    PositionGroup.LB: FatigueCurveType.LINEBACKER,
    PositionGroup.DB: FatigueCurveType.DEFENSIVE_BACK,
    PositionGroup.K: FatigueCurveType.SPECIALIST,
    PositionGroup.P: FatigueCurveType.SPECIALIST,
}

BASE_REST_PLAYS = {
    FatigueCurveType.QUARTERBACK: 0,
    FatigueCurveType.RUNNING_BACK: 3,
    FatigueCurveType.RECEIVER: 2,
    FatigueCurveType.OFFENSIVE_LINE: 0,
    FatigueCurveType.DEFENSIVE_LINE: 4,
    FatigueCurveType.LINEBACKER: 3,
    FatigueCurveType.DEFENSIVE_BACK: 2,
    FatigueCurveType.SPECIALIST: 0,
}

# (max touches, effectiveness, description)
RB_TOUCH_LADDER = (
    (12, 1.0, "Fresh - full burst available"),
    (15, 0.98, "Slightly winded but strong"),
    (18, 0.95, "Starting to feel the load"),
    (22, 0.88, "Heavy workload - losing burst"),
    (25, 0.78, "Gassed - needs rest"),
    (30, 0.68, "Running on fumes"),
)
RB_TOUCH_FLOOR = (0.55, "Completely exhausted - injury risk")

# (max snap share, effectiveness, description)
DL_SNAP_SHARE_LADDER = (
    (0.5, 1.02, "Fresh - high motor plays"),
    (0.65, 1.0, "Optimal rotation - peak performance"),
    (0.75, 0.95, "Slightly overused"),
    (0.85, 0.88, "High snap count - losing pass rush"),
)
DL_SNAP_SHARE_FLOOR = (0.78, "No rotation - significantly diminished")


@dataclass
class SubstitutionAdvice:
    should_sub: bool
    urgency: Literal["low", "medium", "high"]
    reason: str


@dataclass
class UsageEffectiveness:
    effectiveness: float
    description: str


def get_position_fatigue_curve(position: Position) -> FatigueCurveType:
    return _GROUP_CURVES.get(position.group, FatigueCurveType.LINEBACKER)


def _usage(position: Position, snap_count: int, touches: int) -> int:
    # Backs wear down by touches, everyone else by snaps
    return touches if position == Position.RB else snap_count


def _age_modifier(age: int) -> float:
    if age <= 25:
        return 1.02
    if age <= 28:
        return 1.0
    if age <= 30:
        return 0.98
    if age <= 32:
        return 0.95
    if age <= 34:
        return 0.90
    return 0.85


def calculate_fatigue_effectiveness(position: Position, snap_count: int, touches: int, player: Player) -> float:
    """Effectiveness multiplier for the player's usage so far, floored per curve."""
    curve = FATIGUE_CURVES[get_position_fatigue_curve(position)]
    usage = _usage(position, snap_count, touches)

    if usage <= curve.degradation_threshold:
        effectiveness = 1.0
    elif usage <= curve.sharp_decline_threshold:
        progress = (usage - curve.degradation_threshold) / (
            curve.sharp_decline_threshold - curve.degradation_threshold
        )
        effectiveness = 1.0 - progress * (1.0 - curve.degradation_multiplier)
    else:
        # Decline continues past the sharp multiplier; the floor stops it
        progress = (usage - curve.sharp_decline_threshold) / (curve.sharp_decline_threshold * 0.5)
        effectiveness = curve.degradation_multiplier - progress * (
            curve.degradation_multiplier - curve.sharp_decline_multiplier
        )

    if player.has_trait(HiddenTrait.IRON_MAN):
        effectiveness = min(1.0, effectiveness * 1.08)
    if player.has_trait(HiddenTrait.MOTOR):
        effectiveness = min(1.0, effectiveness * 1.05)
    if player.has_trait(HiddenTrait.LAZY):
        effectiveness *= 0.95

    effectiveness *= _age_modifier(player.age)
    return max(curve.minimum_effectiveness, min(1.0, effectiveness))


def should_substitute_for_fatigue(
    position: Position,
    snap_count: int,
    touches: int,
    current_fatigue: float,
) -> SubstitutionAdvice:
    curve = FATIGUE_CURVES[get_position_fatigue_curve(position)]

    if not curve.needs_rotation:
        if current_fatigue > 85:
            return SubstitutionAdvice(True, "high", f"{position.value} extremely fatigued")
        return SubstitutionAdvice(False, "low", "No substitution needed")

    usage = _usage(position, snap_count, touches)
    if usage > curve.sharp_decline_threshold:
        return SubstitutionAdvice(True, "high", f"{position.value} past optimal usage ({usage} plays)")
    if usage > curve.degradation_threshold:
        return SubstitutionAdvice(True, "medium", f"{position.value} approaching fatigue threshold")
    if current_fatigue > 75:
        return SubstitutionAdvice(True, "medium", f"{position.value} fatigue level high ({current_fatigue:g})")
    return SubstitutionAdvice(False, "low", "Player still fresh")


def calculate_rb_touch_effectiveness(touches: int) -> UsageEffectiveness:
    for max_touches, effectiveness, description in RB_TOUCH_LADDER:
        if touches <= max_touches:
            return UsageEffectiveness(effectiveness, description)
    return UsageEffectiveness(*RB_TOUCH_FLOOR)


def calculate_dl_snap_share_effectiveness(snaps_played: int, total_team_defensive_snaps: int) -> UsageEffectiveness:
    share = snaps_played / total_team_defensive_snaps if total_team_defensive_snaps > 0 else 0
    for max_share, effectiveness, description in DL_SNAP_SHARE_LADDER:
        if share <= max_share:
            return UsageEffectiveness(effectiveness, description)
    return UsageEffectiveness(*DL_SNAP_SHARE_FLOOR)


def get_optimal_rest_plays(position: Position, current_fatigue: float) -> int:
    rest = BASE_REST_PLAYS[get_position_fatigue_curve(position)]
    if current_fatigue > 80:
        rest += 3
    elif current_fatigue > 60:
        rest += 1
    return rest


def get_fatigue_injury_risk_multiplier(position: Position, snap_count: int, current_fatigue: float) -> float:
    """Injury probability multiplier from workload and fatigue, 1.0 to 1.9."""
    curve = FATIGUE_CURVES[get_position_fatigue_curve(position)]
    multiplier = 1.0

    if snap_count > curve.sharp_decline_threshold:
        multiplier += 0.5
    elif snap_count > curve.degradation_threshold:
        multiplier += 0.2

    if current_fatigue > 80:
        multiplier += 0.4
    elif current_fatigue > 60:
        multiplier += 0.15

    return multiplier
