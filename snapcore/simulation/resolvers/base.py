"""Base interface and shared steps for play resolution."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence
from uuid import UUID

from snapcore.config import EngineConfig, get_config
from snapcore.core.enums import GameStakes, PlayOutcome, PlayType, Position, PositionGroup, SecondaryEffect
from snapcore.core.models import (
    DefensivePlayCall,
    InjuryResult,
    OffensivePlayCall,
    PenaltyDetails,
    PlayCallContext,
    PlayResult,
    Player,
    TeamGameState,
    WeatherCondition,
)
from snapcore.core.rng import RandomSource, Rng
from snapcore.exceptions import RosterValidationError
from snapcore.simulation.fatigue import (
    FatigueParams,
    calculate_between_play_recovery,
    calculate_fatigue_increase,
    determine_play_intensity,
)
from snapcore.simulation.injuries import InjuryCheckParams, check_for_injury
from snapcore.simulation.matchups import PlayerWithEffective
from snapcore.simulation.outcomes import RolledOutcome
from snapcore.simulation.penalties import build_penalty_details, enforce_penalty, select_penalty
from snapcore.simulation.stat_distribution import (
    RBRotationContext,
    TackleContext,
    TargetSituationContext,
    select_pass_target,
    select_primary_tackler,
    select_running_back,
)

logger = logging.getLogger(__name__)

FIRST_DOWN_DISTANCE = 10

# Goal line for RB rotation purposes
GOAL_LINE_FIELD_POSITION = 95


class PlayResolver(ABC):
    """
    Protocol for play resolution strategies.

    Every resolver draws randomness from one injected ``Rng``, so a seeded
    resolver replays the same result for the same teams, call and context.
    Resolvers built from a config with ``validate_rosters`` raise
    ``RosterValidationError`` before touching a short-handed roster.
    """

    def __init__(self, config: Optional[EngineConfig] = None, rng: Optional[Rng] = None):
        self.config = config or get_config()
        self.config.raise_if_invalid()
        self.rng = rng or RandomSource(self.config.seed)

    @abstractmethod
    def resolve_play(
        self,
        offensive_team: TeamGameState,
        defensive_team: TeamGameState,
        offensive_call: OffensivePlayCall,
        defensive_call: DefensivePlayCall,
        context: PlayCallContext,
    ) -> PlayResult:
        """
        Simulate a single play and return the result.

        Args:
            offensive_team: Team on offense. Fatigue and snap arenas are updated.
            defensive_team: Team on defense. Fatigue and snap arenas are updated.
            offensive_call: The play called by the offense
            defensive_call: The defensive call
            context: Down, distance, field position and game situation

        Returns:
            PlayResult with outcome, yards, attributions and the new state
        """
        ...

    def check_rosters(self, *teams: TeamGameState) -> None:
        if not self.config.validate_rosters:
            return
        for team in teams:
            problems = team.validate()
            if problems:
                raise RosterValidationError(team.name or str(team.team_id), problems)


# =============================================================================
# Shared Steps
# =============================================================================

def determine_stakes(context: PlayCallContext) -> GameStakes:
    """One-score fourth quarters play like the postseason."""
    if context.quarter == 4 and abs(context.score_differential) <= 7:
        return GameStakes.PLAYOFF
    return GameStakes.REGULAR


def get_relevant_skill(player: Player, play_type: PlayType, is_offense: bool) -> str:
    """The skill that decides a player's battle on this play."""
    group = player.position.group
    is_run = play_type.is_run

    if is_offense:
        if group == PositionGroup.QB:
            return "accuracy" if play_type.is_pass else "mobility"
        if group == PositionGroup.RB:
            return "vision" if is_run else "catching"
        if group == PositionGroup.WR:
            return "tracking" if play_type.is_deep else "route_running"
        if group == PositionGroup.TE:
            return "blocking" if is_run else "catching"
        if group == PositionGroup.OL:
            return "run_block" if is_run else "pass_block"
    else:
        if group == PositionGroup.DL:
            return "run_defense" if is_run else "pass_rush"
        if group == PositionGroup.LB:
            return "tackling"
        if group == PositionGroup.DB:
            return "man_coverage"

    return next(iter(player.skills), "awareness")


def average_effective(players: Sequence[PlayerWithEffective]) -> float:
    return sum(p.effective for p in players) / (len(players) or 1)


def process_injuries(
    players: Sequence[Player],
    team: TeamGameState,
    play_type: PlayType,
    outcome: PlayOutcome,
    had_big_hit: bool,
    weather: WeatherCondition,
    rng: Rng,
    risk_multipliers: Optional[dict[UUID, float]] = None,
) -> tuple[Optional[Player], InjuryResult]:
    """Roll each player in turn; the first injury ends the checks.

    Workload risk multipliers scale the fatigue each roll sees, so they
    act through the fatigue tiers of the probability and severity rolls.
    """
    for player in players:
        risk = (risk_multipliers or {}).get(player.id, 1.0)
        result = check_for_injury(
            InjuryCheckParams(
                player=player,
                play_type=play_type,
                outcome=outcome,
                had_big_hit=had_big_hit,
                current_fatigue=team.get_fatigue(player.id) * risk,
                weather=weather,
            ),
            rng,
        )
        if result.occurred:
            return player, result
    return None, InjuryResult.none()


def update_play_fatigue(
    players: Sequence[Player],
    team: TeamGameState,
    play_type: PlayType,
    outcome: PlayOutcome,
    weather: WeatherCondition,
    rng: Rng,
    fatigue_multiplier: float = 1.0,
) -> None:
    """Charge each player for the snap, then apply between-play recovery."""
    intensity = determine_play_intensity(play_type, outcome)
    for player in players:
        current = team.get_fatigue(player.id)
        increase = calculate_fatigue_increase(
            FatigueParams(
                player=player,
                current_fatigue=current,
                snap_count=team.get_snap_count(player.id),
                weather=weather,
                play_intensity=intensity,
            )
        )
        fatigue = calculate_between_play_recovery(current + increase * fatigue_multiplier, rng)
        team.set_fatigue(player.id, fatigue)
        team.increment_snap_count(player.id)


# =============================================================================
# State Transition
# =============================================================================

@dataclass
class PlayStateChange:
    """Down, distance and field position after a scrimmage play."""

    yards_gained: int
    new_down: int
    new_distance: int
    new_field_position: int
    turnover: bool
    touchdown: bool
    first_down: bool
    safety: bool


def advance_game_state(context: PlayCallContext, outcome: PlayOutcome, yards: int) -> PlayStateChange:
    """
    Move the chains for a rolled outcome.

    Only a touchdown outcome scores; other gains stop at the 1. A
    turnover flips the field, as does failing on fourth down. Field
    position always lands between the 1 and the 99.
    """
    turnover = outcome.is_turnover
    touchdown = outcome == PlayOutcome.TOUCHDOWN

    # Tackled in or driven behind own end zone
    safety = not turnover and not touchdown and yards < 0 and context.field_position + yards <= 0

    if not touchdown and yards > 0 and context.field_position + yards >= 100:
        yards = 99 - context.field_position

    new_field_position = context.field_position + yards
    if turnover:
        new_field_position = 100 - new_field_position
    new_field_position = max(1, min(99, new_field_position))

    new_down = context.down + 1
    new_distance = context.distance - yards
    first_down = False

    if yards >= context.distance and not turnover:
        new_down, new_distance, first_down = 1, FIRST_DOWN_DISTANCE, True
    elif turnover or touchdown:
        new_down, new_distance = 1, FIRST_DOWN_DISTANCE
    elif new_down > 4:
        logger.debug("Turnover on downs")
        new_down, new_distance = 1, FIRST_DOWN_DISTANCE
        new_field_position = 100 - context.field_position

    return PlayStateChange(
        yards_gained=yards,
        new_down=new_down,
        new_distance=new_distance,
        new_field_position=new_field_position,
        turnover=turnover,
        touchdown=touchdown,
        first_down=first_down,
        safety=safety,
    )


def apply_penalty(
    change: PlayStateChange,
    roll: RolledOutcome,
    context: PlayCallContext,
    offensive_players: Sequence[Player],
    defensive_players: Sequence[Player],
    rng: Rng,
) -> Optional[PenaltyDetails]:
    """Overwrite the state change with penalty yardage. None when no flag was thrown."""
    if not roll.outcome.is_penalty:
        return None

    team = "offense" if roll.outcome == PlayOutcome.PENALTY_OFFENSE else "defense"
    penalty = select_penalty(team, rng)
    details = build_penalty_details(
        penalty, team, offensive_players if team == "offense" else defensive_players, rng
    )

    enforcement = enforce_penalty(penalty, team, context.field_position)
    change.yards_gained = enforcement.yards
    change.new_field_position = enforcement.new_field_position
    if enforcement.first_down:
        change.new_down, change.new_distance, change.first_down = 1, FIRST_DOWN_DISTANCE, True

    logger.debug(f"Penalty on {team}: {penalty.type}, {penalty.yards} yards")
    return details


# =============================================================================
# Attribution
# =============================================================================

@dataclass
class PrimaryPlayers:
    offensive: Optional[UUID]
    defensive: Optional[UUID]
    receiver: Optional[UUID] = None


def get_primary_players(
    offensive_players: Sequence[PlayerWithEffective],
    defensive_players: Sequence[PlayerWithEffective],
    play_type: PlayType,
    context: PlayCallContext,
    offensive_team: TeamGameState,
    defensive_team: TeamGameState,
    yards_gained: int,
    outcome: PlayOutcome,
    rng: Rng,
    rb1_carries: Optional[int] = None,
) -> PrimaryPlayers:
    """Who gets credit: ball carrier or passer, receiver, and tackler."""
    offense = [p.player for p in offensive_players]
    defenders = [p.player for p in defensive_players]
    qb = next((p for p in offense if p.position == Position.QB), None)
    fallback = offense[0].id if offense else None
    tackle_context = TackleContext(play_type=play_type, yards_gained=yards_gained, outcome=outcome)

    if play_type.is_ground_play:
        if play_type.is_qb_keep:
            carrier = qb
        else:
            backs = [p for p in offense if p.position == Position.RB]
            starter_load = offensive_team.get_snap_count(backs[0].id) if backs else 0
            carrier = select_running_back(
                backs,
                offensive_team,
                RBRotationContext(
                    current_game_carries=starter_load if rb1_carries is None else rb1_carries,
                    current_game_snaps=starter_load,
                    down=context.down,
                    distance=context.distance,
                    is_red_zone=context.is_red_zone,
                    is_goal_line=context.field_position >= GOAL_LINE_FIELD_POSITION,
                    is_two_minute_drill=context.is_two_minute_warning,
                ),
                rng,
            )
        tackler = select_primary_tackler(defenders, tackle_context, defensive_team, rng)
        return PrimaryPlayers(
            offensive=carrier.id if carrier else fallback,
            defensive=tackler.id if tackler else None,
        )

    receivers = [p for p in offense if p.position in (Position.WR, Position.TE, Position.RB)]
    target = select_pass_target(
        receivers,
        play_type,
        TargetSituationContext(
            down=context.down,
            distance=context.distance,
            is_red_zone=context.is_red_zone,
            is_two_minute_drill=context.is_two_minute_warning,
            score_differential=context.score_differential,
        ),
        offensive_team,
        rng,
    )
    tackler = select_primary_tackler(defenders, tackle_context, defensive_team, rng)

    if target is None and receivers:
        target = receivers[0]
    return PrimaryPlayers(
        offensive=qb.id if qb else fallback,
        defensive=tackler.id if tackler else None,
        receiver=target.id if target else None,
    )


def has_effect(roll: RolledOutcome, effect: SecondaryEffect) -> bool:
    return effect in roll.secondary_effects
