"""
Special teams resolution: field goals, punts and kickoffs.

These plays skip the matchup model. Each one is a short chain of
probability checks on top of the kicker's effective rating and the
field position.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from snapcore.core.enums import GameStakes, PlayOutcome, PlayType, Precipitation
from snapcore.core.models import (
    DefensivePlayCall,
    OffensivePlayCall,
    PlayCallContext,
    PlayResult,
    Player,
    TeamGameState,
)
from snapcore.ratings.effective import calculate_effective_rating
from snapcore.simulation.play_caller import FIELD_GOAL_DISTANCE_OFFSET
from snapcore.simulation.resolvers.base import FIRST_DOWN_DISTANCE, PlayResolver

logger = logging.getLogger(__name__)

# Where the receiving team starts after a score or touchback
TOUCHBACK_FIELD_POSITION = 25

# Field goals
FIELD_GOAL_BLOCK_CHANCE = 0.02
FIELD_GOAL_BLOCK_TD_CHANCE = 0.1
FIELD_GOAL_BASE_PROBABILITY = 0.95
MISSED_FIELD_GOAL_SPOT_OFFSET = 7  # Defense takes over at the spot of the kick
MISSED_FIELD_GOAL_MAX_POSITION = 80

# Punts
PUNT_BLOCK_CHANCE = 0.01
PUNT_BLOCK_TD_CHANCE = 0.15
PUNT_BASE_DISTANCE = 42
PUNT_DISTANCE_SPREAD = 12
PUNT_MAX_RETURN = 15

# Kickoffs
ONSIDE_TIME_THRESHOLD = 300
ONSIDE_MAX_DEFICIT = 16
ONSIDE_RECOVERY_CHANCE = 0.1
KICKOFF_TOUCHBACK_CHANCE = 0.55


def field_goal_probability(distance: int, kicker_effective: float, context: PlayCallContext) -> float:
    """Chance a field goal of ``distance`` yards is good."""
    probability = FIELD_GOAL_BASE_PROBABILITY
    if distance > 30:
        probability -= (distance - 30) * 0.015
    if distance > 45:
        probability -= (distance - 45) * 0.02
    probability += (kicker_effective - 70) / 200
    probability = max(0.1, min(0.99, probability))

    # Weather is applied after the clamp
    weather = context.weather
    if weather.wind > 15:
        probability -= 0.1
    if weather.precipitation != Precipitation.NONE:
        probability -= 0.05
    return probability


def should_onside_kick(context: PlayCallContext) -> bool:
    """Trailing by one to sixteen with under five minutes left in the fourth."""
    return (
        context.quarter == 4
        and context.time_remaining < ONSIDE_TIME_THRESHOLD
        and -ONSIDE_MAX_DEFICIT <= context.score_differential < 0
    )


def _player_id(player: Optional[Player]):
    return player.id if player else None


class SpecialTeamsResolver(PlayResolver):
    """
    Resolver for kicking plays.

    The offensive team is the kicking team and the defensive team the
    receiving team. Results always start a fresh series; ``turnover``
    marks a change of possession.
    """

    def resolve_play(
        self,
        offensive_team: TeamGameState,
        defensive_team: TeamGameState,
        offensive_call: OffensivePlayCall,
        defensive_call: DefensivePlayCall,
        context: PlayCallContext,
    ) -> PlayResult:
        play_type = offensive_call.play_type
        if play_type == PlayType.FIELD_GOAL:
            return self.resolve_field_goal(offensive_team, defensive_team, context)
        if play_type == PlayType.PUNT:
            return self.resolve_punt(offensive_team, defensive_team, context)
        if play_type == PlayType.KICKOFF:
            return self.resolve_kickoff(offensive_team, defensive_team, context)
        raise ValueError(f"{play_type.value} is not a special teams play")

    # =========================================================================
    # Field goal
    # =========================================================================

    def resolve_field_goal(
        self,
        kicking_team: TeamGameState,
        receiving_team: TeamGameState,
        context: PlayCallContext,
    ) -> PlayResult:
        rng = self.rng
        kicker = kicking_team.special_teams.k
        returner = receiving_team.special_teams.returner
        distance = 100 - context.field_position + FIELD_GOAL_DISTANCE_OFFSET
        missed_spot = min(
            MISSED_FIELD_GOAL_MAX_POSITION, 100 - context.field_position + MISSED_FIELD_GOAL_SPOT_OFFSET
        )

        if rng.next() < FIELD_GOAL_BLOCK_CHANCE:
            if rng.next() < FIELD_GOAL_BLOCK_TD_CHANCE:
                logger.debug(f"{distance}-yard field goal blocked and returned for a touchdown")
                return self._result(
                    PlayType.FIELD_GOAL,
                    PlayOutcome.FIELD_GOAL_MISSED,
                    0,
                    kicker,
                    returner,
                    TOUCHBACK_FIELD_POSITION,
                    turnover=True,
                    touchdown=True,
                )
            logger.debug(f"{distance}-yard field goal blocked, defense recovers")
            return self._result(
                PlayType.FIELD_GOAL, PlayOutcome.FIELD_GOAL_MISSED, 0, kicker, None, missed_spot, turnover=True
            )

        kicker_effective = self._kicker_effective(kicker, kicking_team, context)
        made = rng.next() < field_goal_probability(distance, kicker_effective, context)
        logger.debug(f"{distance}-yard field goal is {'good' if made else 'no good'}")

        return self._result(
            PlayType.FIELD_GOAL,
            PlayOutcome.FIELD_GOAL_MADE if made else PlayOutcome.FIELD_GOAL_MISSED,
            0,
            kicker,
            None,
            TOUCHBACK_FIELD_POSITION if made else missed_spot,
            turnover=not made,
        )

    def _kicker_effective(self, kicker: Optional[Player], team: TeamGameState, context: PlayCallContext) -> float:
        if kicker is None:
            logger.warning(f"{team.name} has no kicker; using a neutral rating")
            return 50
        return calculate_effective_rating(
            kicker,
            "kick_accuracy",
            position_coach=None,
            team_scheme=team.offensive_scheme,
            assigned_role=kicker.role_fit.current_role,
            weather=context.weather,
            game_stakes=GameStakes.REGULAR,
            weekly_variance=team.get_weekly_variance(kicker.id),
        )

    # =========================================================================
    # Punt
    # =========================================================================

    def resolve_punt(
        self,
        kicking_team: TeamGameState,
        receiving_team: TeamGameState,
        context: PlayCallContext,
    ) -> PlayResult:
        rng = self.rng
        punter = kicking_team.special_teams.p
        returner = receiving_team.special_teams.returner

        if rng.next() < PUNT_BLOCK_CHANCE:
            if rng.next() < PUNT_BLOCK_TD_CHANCE:
                logger.debug("Punt blocked and returned for a touchdown")
                return self._result(
                    PlayType.PUNT,
                    PlayOutcome.PUNT_RESULT,
                    0,
                    punter,
                    returner,
                    TOUCHBACK_FIELD_POSITION,
                    turnover=True,
                    touchdown=True,
                )
            logger.debug("Punt blocked, defense recovers")
            return self._result(
                PlayType.PUNT,
                PlayOutcome.PUNT_RESULT,
                0,
                punter,
                returner,
                max(1, min(99, 100 - context.field_position)),
                turnover=True,
            )

        base_distance = PUNT_BASE_DISTANCE + math.floor(rng.next() * PUNT_DISTANCE_SPREAD)
        punt_distance = min(base_distance, 100 - context.field_position - 10)
        return_yards = math.floor(rng.next() * PUNT_MAX_RETURN)
        new_position = 100 - (context.field_position + punt_distance - return_yards)
        logger.debug(f"Punt for {punt_distance} yards, returned for {return_yards} yards")

        return self._result(
            PlayType.PUNT,
            PlayOutcome.PUNT_RESULT,
            punt_distance - return_yards,
            punter,
            returner,
            max(1, min(99, new_position)),
            turnover=True,
        )

    # =========================================================================
    # Kickoff
    # =========================================================================

    def resolve_kickoff(
        self,
        kicking_team: TeamGameState,
        receiving_team: TeamGameState,
        context: PlayCallContext,
    ) -> PlayResult:
        rng = self.rng
        kicker = kicking_team.special_teams.k
        returner = receiving_team.special_teams.returner

        if should_onside_kick(context):
            recovered = rng.next() < ONSIDE_RECOVERY_CHANCE
            spot = 45 + math.floor(rng.next() * 10)
            if recovered:
                logger.info(f"{kicking_team.name} recovers the onside kick at the {spot}")
                return self._result(
                    PlayType.KICKOFF, PlayOutcome.KICKOFF_RESULT, 0, kicker, returner, spot, turnover=False
                )
            logger.debug(f"Onside kick fails, {receiving_team.name} takes over at the {100 - spot}")
            return self._result(
                PlayType.KICKOFF, PlayOutcome.KICKOFF_RESULT, 0, kicker, returner, 100 - spot, turnover=True
            )

        if rng.next() < KICKOFF_TOUCHBACK_CHANCE:
            logger.debug("Touchback")
            return self._result(
                PlayType.KICKOFF,
                PlayOutcome.KICKOFF_RESULT,
                0,
                kicker,
                returner,
                TOUCHBACK_FIELD_POSITION,
                turnover=True,
            )

        return_yards = 15 + math.floor(rng.next() * 11)
        logger.debug(f"Kickoff returned {return_yards} yards")
        return self._result(
            PlayType.KICKOFF,
            PlayOutcome.KICKOFF_RESULT,
            return_yards,
            kicker,
            returner,
            7 + return_yards,
            turnover=True,
        )

    @staticmethod
    def _result(
        play_type: PlayType,
        outcome: PlayOutcome,
        yards: int,
        offensive_player: Optional[Player],
        defensive_player: Optional[Player],
        field_position: int,
        turnover: bool,
        touchdown: bool = False,
    ) -> PlayResult:
        return PlayResult(
            play_type=play_type,
            outcome=outcome,
            yards_gained=yards,
            primary_offensive_player=_player_id(offensive_player),
            primary_defensive_player=_player_id(defensive_player),
            new_down=1,
            new_distance=FIRST_DOWN_DISTANCE,
            new_field_position=field_position,
            turnover=turnover,
            touchdown=touchdown,
        )
