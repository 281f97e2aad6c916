"""
Situational modifiers.

Classifies the game moment (third and long, goal line, two-minute drill,
comeback...) and turns it into performance modifiers that depend on a
player's hidden traits and the skill in play.
"""

from dataclasses import dataclass, field
from enum import Enum

from snapcore.core.enums import GameStakes, HiddenTrait
from snapcore.core.mathutil import clamp
from snapcore.core.models.play import OVERTIME, PlayCallContext
from snapcore.core.models.player import Player


class GameSituation(Enum):
    NORMAL = "normal"
    THIRD_DOWN_LONG = "third_down_long"
    THIRD_DOWN_SHORT = "third_down_short"
    FOURTH_DOWN = "fourth_down"
    RED_ZONE = "red_zone"
    GOAL_LINE = "goal_line"
    TWO_MINUTE_DRILL = "two_minute_drill"
    FOURTH_QUARTER_COMEBACK = "fourth_quarter_comeback"
    BLOWOUT_WINNING = "blowout_winning"
    BLOWOUT_LOSING = "blowout_losing"
    OVERTIME_POSSESSION = "overtime_possession"


@dataclass
class SituationContext:
    down: int
    distance: int
    field_position: int
    quarter: int  # 5 = overtime
    time_remaining: int  # seconds
    score_differential: int  # positive = winning
    stakes: GameStakes = GameStakes.REGULAR

    @classmethod
    def from_play_context(cls, context: PlayCallContext, stakes: GameStakes = GameStakes.REGULAR) -> "SituationContext":
        return cls(
            down=context.down,
            distance=context.distance,
            field_position=context.field_position,
            quarter=context.quarter,
            time_remaining=context.time_remaining,
            score_differential=context.score_differential,
            stakes=stakes,
        )


@dataclass
class SituationalModifier:
    situation: GameSituation
    base_modifier: float  # applies to everyone
    trait_modifiers: dict[HiddenTrait, float] = field(default_factory=dict)
    skill_modifiers: dict[str, float] = field(default_factory=dict)
    description: str = ""


@dataclass
class PlayCallingAdjustment:
    run_adjustment: float
    pass_adjustment: float
    aggressiveness: float


T = HiddenTrait

SITUATIONAL_MODIFIERS = {
    GameSituation.THIRD_DOWN_LONG: SituationalModifier(
        GameSituation.THIRD_DOWN_LONG, 0,
        {T.CLUTCH: 8, T.CHOKES: -10, T.COOL_UNDER_PRESSURE: 5, T.HOT_HEAD: -3},
        {"accuracy": 3, "route_running": 5, "decision_making": 5},
        "Third and long - pressure situation for passing game",
    ),
    GameSituation.THIRD_DOWN_SHORT: SituationalModifier(
        GameSituation.THIRD_DOWN_SHORT, 0,
        {T.CLUTCH: 5, T.CHOKES: -5, T.MOTOR: 5, T.LAZY: -5},
        {"power": 5, "run_block": 5, "vision": 3},
        "Third and short - physical short yardage situation",
    ),
    GameSituation.FOURTH_DOWN: SituationalModifier(
        GameSituation.FOURTH_DOWN, -2,
        {T.CLUTCH: 10, T.CHOKES: -12, T.COOL_UNDER_PRESSURE: 8, T.HOT_HEAD: -5, T.LEADER: 3},
        {"decision_making": 8, "awareness": 5},
        "Fourth down - must convert or give up possession",
    ),
    GameSituation.RED_ZONE: SituationalModifier(
        GameSituation.RED_ZONE, 2,
        {T.CLUTCH: 6, T.CHOKES: -6, T.DISAPPEARS: -8},
        {"accuracy": 4, "contested": 6, "man_coverage": 4},
        "Red zone - condensed field, need to score",
    ),
    GameSituation.GOAL_LINE: SituationalModifier(
        GameSituation.GOAL_LINE, 3,
        {T.CLUTCH: 8, T.CHOKES: -8, T.MOTOR: 6, T.LAZY: -6, T.BRICK_WALL: 8},
        {"power": 10, "run_block": 8, "run_defense": 8, "strength": 5},
        "Goal line - maximum intensity short yardage",
    ),
    GameSituation.TWO_MINUTE_DRILL: SituationalModifier(
        GameSituation.TWO_MINUTE_DRILL, 0,
        {T.CLUTCH: 10, T.CHOKES: -12, T.COOL_UNDER_PRESSURE: 10, T.HOT_HEAD: -8, T.LEADER: 5},
        {"decision_making": 10, "accuracy": 5, "route_running": 5, "mobility": 5},
        "Two minute drill - race against the clock",
    ),
    GameSituation.FOURTH_QUARTER_COMEBACK: SituationalModifier(
        GameSituation.FOURTH_QUARTER_COMEBACK, 0,
        {
            T.CLUTCH: 12, T.CHOKES: -15, T.COOL_UNDER_PRESSURE: 10, T.LEADER: 8,
            T.TEAM_FIRST: 5, T.DIVA: -5, T.DISAPPEARS: -12,
        },
        {"decision_making": 8, "awareness": 5, "accuracy": 3},
        "Fourth quarter comeback - ultimate clutch situation",
    ),
    GameSituation.BLOWOUT_WINNING: SituationalModifier(
        GameSituation.BLOWOUT_WINNING, -3,
        {T.MOTOR: -5, T.LAZY: -8, T.TEAM_FIRST: -2},
        {},
        "Blowout win - running out the clock",
    ),
    GameSituation.BLOWOUT_LOSING: SituationalModifier(
        GameSituation.BLOWOUT_LOSING, -5,
        {T.MOTOR: 8, T.LAZY: -10, T.TEAM_FIRST: 5, T.DIVA: -8, T.LOCKER_ROOM_CANCER: -10},
        {},
        "Blowout loss - fighting through adversity",
    ),
    GameSituation.OVERTIME_POSSESSION: SituationalModifier(
        GameSituation.OVERTIME_POSSESSION, 2,
        {T.CLUTCH: 15, T.CHOKES: -18, T.COOL_UNDER_PRESSURE: 12, T.LEADER: 8},
        {"decision_making": 10, "accuracy": 5, "kick_accuracy": 10},
        "Overtime - next score could win it",
    ),
    GameSituation.NORMAL: SituationalModifier(GameSituation.NORMAL, 0, description="Normal game situation"),
}

del T

STAKES_MULTIPLIERS = {
    GameStakes.PRESEASON: 0.3,
    GameStakes.REGULAR: 1.0,
    GameStakes.RIVALRY: 1.2,
    GameStakes.PLAYOFF: 1.5,
    GameStakes.CHAMPIONSHIP: 2.0,
}

CLUTCH_SITUATIONS = (
    GameSituation.FOURTH_QUARTER_COMEBACK,
    GameSituation.OVERTIME_POSSESSION,
    GameSituation.FOURTH_DOWN,
    GameSituation.TWO_MINUTE_DRILL,
)

PLAY_CALLING_ADJUSTMENTS = {
    GameSituation.THIRD_DOWN_LONG: PlayCallingAdjustment(-20, 20, 0),
    GameSituation.THIRD_DOWN_SHORT: PlayCallingAdjustment(25, -10, 10),
    GameSituation.GOAL_LINE: PlayCallingAdjustment(30, -15, 20),
    GameSituation.TWO_MINUTE_DRILL: PlayCallingAdjustment(-30, 30, 15),
    GameSituation.FOURTH_QUARTER_COMEBACK: PlayCallingAdjustment(-15, 15, 10),
    GameSituation.BLOWOUT_WINNING: PlayCallingAdjustment(20, -20, -20),
    GameSituation.BLOWOUT_LOSING: PlayCallingAdjustment(-10, 10, 5),
}


def determine_situation(context: SituationContext) -> GameSituation:
    """Classify the moment. Earlier checks take priority."""
    diff = context.score_differential

    if context.quarter >= OVERTIME:
        return GameSituation.OVERTIME_POSSESSION
    if context.quarter == 4 and -16 <= diff < 0 and context.time_remaining <= 300:
        return GameSituation.FOURTH_QUARTER_COMEBACK
    if context.quarter in (2, 4) and context.time_remaining <= 120 and diff <= 7:
        return GameSituation.TWO_MINUTE_DRILL
    if diff >= 21:
        return GameSituation.BLOWOUT_WINNING
    if diff <= -21:
        return GameSituation.BLOWOUT_LOSING
    if context.field_position >= 97:
        return GameSituation.GOAL_LINE
    if context.field_position >= 80:
        return GameSituation.RED_ZONE
    if context.down == 4:
        return GameSituation.FOURTH_DOWN
    if context.down == 3:
        if context.distance >= 8:
            return GameSituation.THIRD_DOWN_LONG
        if context.distance <= 2:
            return GameSituation.THIRD_DOWN_SHORT
    return GameSituation.NORMAL


def get_situational_modifier(situation: GameSituation) -> SituationalModifier:
    return SITUATIONAL_MODIFIERS[situation]


def calculate_player_situational_modifier(player: Player, context: SituationContext, relevant_skill: str) -> float:
    """Rating points for one player in this moment, -25 to +25."""
    modifier = SITUATIONAL_MODIFIERS[determine_situation(context)]

    total = modifier.base_modifier
    for trait, value in modifier.trait_modifiers.items():
        if player.has_trait(trait):
            total += value
    total += modifier.skill_modifiers.get(relevant_skill, 0)

    total *= STAKES_MULTIPLIERS[context.stakes]
    return clamp(total, -25, 25)


def get_team_situational_modifier(context: SituationContext) -> float:
    modifier = SITUATIONAL_MODIFIERS[determine_situation(context)]
    return modifier.base_modifier * STAKES_MULTIPLIERS[context.stakes]


def is_clutch_situation(context: SituationContext) -> bool:
    return determine_situation(context) in CLUTCH_SITUATIONS


def is_pressure_situation(context: SituationContext) -> bool:
    return determine_situation(context) not in (
        GameSituation.NORMAL,
        GameSituation.BLOWOUT_WINNING,
        GameSituation.BLOWOUT_LOSING,
    )


def get_situational_play_calling_adjustment(context: SituationContext) -> PlayCallingAdjustment:
    return PLAY_CALLING_ADJUSTMENTS.get(determine_situation(context), PlayCallingAdjustment(0, 0, 0))
