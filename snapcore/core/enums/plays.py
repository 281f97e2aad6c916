"""Play type definitions and outcomes."""

from enum import Enum


class PlayType(Enum):
    """Types of plays that can be called."""

    RUN_INSIDE = "run_inside"
    RUN_OUTSIDE = "run_outside"
    RUN_DRAW = "run_draw"
    RUN_SWEEP = "run_sweep"
    PASS_SHORT = "pass_short"
    PASS_MEDIUM = "pass_medium"
    PASS_DEEP = "pass_deep"
    PASS_SCREEN = "pass_screen"
    PLAY_ACTION_SHORT = "play_action_short"
    PLAY_ACTION_DEEP = "play_action_deep"
    QB_SCRAMBLE = "qb_scramble"
    QB_SNEAK = "qb_sneak"
    FIELD_GOAL = "field_goal"
    PUNT = "punt"
    KICKOFF = "kickoff"

    @property
    def is_run(self) -> bool:
        """Handoff runs (run_* plays)."""
        return self.value.startswith("run")

    @property
    def is_designed_run(self) -> bool:
        """Handoff runs plus the QB sneak."""
        return self.is_run or self == PlayType.QB_SNEAK

    @property
    def is_ground_play(self) -> bool:
        """Any play where the ball is carried rather than thrown."""
        return self.is_designed_run or self == PlayType.QB_SCRAMBLE

    @property
    def is_pass(self) -> bool:
        """Dropback, screen and play-action passes."""
        return "pass" in self.value or "action" in self.value

    @property
    def is_play_action(self) -> bool:
        return self in (PlayType.PLAY_ACTION_SHORT, PlayType.PLAY_ACTION_DEEP)

    @property
    def is_deep(self) -> bool:
        return self in (PlayType.PASS_DEEP, PlayType.PLAY_ACTION_DEEP)

    @property
    def is_qb_keep(self) -> bool:
        return self in (PlayType.QB_SNEAK, PlayType.QB_SCRAMBLE)

    @property
    def is_special_teams(self) -> bool:
        return self in (PlayType.FIELD_GOAL, PlayType.PUNT, PlayType.KICKOFF)


class PlayOutcome(Enum):
    """Possible outcomes of a play."""

    TOUCHDOWN = "touchdown"
    BIG_GAIN = "big_gain"
    GOOD_GAIN = "good_gain"
    MODERATE_GAIN = "moderate_gain"
    SHORT_GAIN = "short_gain"
    NO_GAIN = "no_gain"
    LOSS = "loss"
    BIG_LOSS = "big_loss"
    SACK = "sack"
    INCOMPLETE = "incomplete"
    INTERCEPTION = "interception"
    FUMBLE = "fumble"
    FUMBLE_LOST = "fumble_lost"
    PENALTY_OFFENSE = "penalty_offense"
    PENALTY_DEFENSE = "penalty_defense"
    FIELD_GOAL_MADE = "field_goal_made"
    FIELD_GOAL_MISSED = "field_goal_missed"
    PUNT_RESULT = "punt_result"
    KICKOFF_RESULT = "kickoff_result"

    @property
    def is_turnover(self) -> bool:
        return self in (PlayOutcome.INTERCEPTION, PlayOutcome.FUMBLE_LOST)

    @property
    def is_positive(self) -> bool:
        return self in (
            PlayOutcome.TOUCHDOWN,
            PlayOutcome.BIG_GAIN,
            PlayOutcome.GOOD_GAIN,
            PlayOutcome.MODERATE_GAIN,
            PlayOutcome.SHORT_GAIN,
        )

    @property
    def is_negative(self) -> bool:
        return self in (
            PlayOutcome.LOSS,
            PlayOutcome.BIG_LOSS,
            PlayOutcome.SACK,
            PlayOutcome.INTERCEPTION,
            PlayOutcome.FUMBLE_LOST,
        )

    @property
    def is_penalty(self) -> bool:
        return self in (PlayOutcome.PENALTY_OFFENSE, PlayOutcome.PENALTY_DEFENSE)


class SecondaryEffect(Enum):
    """Side effects attached to an outcome table entry."""

    INJURY_CHECK = "injury_check"
    FATIGUE_HIGH = "fatigue_high"
    BIG_HIT = "big_hit"
    HIGHLIGHT_PLAY = "highlight_play"


class OffensiveFormation(Enum):
    """Offensive formations chosen by the play caller."""

    SINGLEBACK = "singleback"
    I_FORMATION = "i_formation"
    SHOTGUN = "shotgun"
    PISTOL = "pistol"
    EMPTY = "empty"
    GOAL_LINE = "goal_line"
    JUMBO = "jumbo"


class CoverageType(Enum):
    """Base coverage shell of a defensive call."""

    MAN = "man"
    ZONE = "zone"


class PlayIntensity(Enum):
    """Physical intensity of a play, drives fatigue accumulation."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
