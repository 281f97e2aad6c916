"""
Enhanced play resolver.

Layers the structural matchup systems on top of the standard model:
personnel packages, scheme matchups, unit composites with weak links,
presnap reads, play-action credibility, phased pass rush, situational
pressure and non-linear fatigue curves.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID

from snapcore.config import EngineConfig
from snapcore.core.enums import GameStakes, PlayOutcome, PlayType, SecondaryEffect
from snapcore.core.mathutil import round_half_up
from snapcore.core.models import (
    DefensivePlayCall,
    EnhancedPlayResult,
    OffensivePlayCall,
    PersonnelMatchup,
    PlayCallContext,
    Player,
    SchemeEffect,
    TeamGameState,
)
from snapcore.core.rng import Rng
from snapcore.ratings.composite import calculate_team_composite_ratings, get_matchup_advantage, player_effective_rating
from snapcore.simulation.fatigue_curves import calculate_fatigue_effectiveness, get_fatigue_injury_risk_multiplier
from snapcore.simulation.injuries import injury_description
from snapcore.simulation.matchups import PlayerWithEffective
from snapcore.simulation.outcomes import (
    DownAndDistance,
    RolledOutcome,
    generate_outcome_table,
    get_base_outcomes,
    roll_outcome,
)
from snapcore.simulation.pass_rush import PhaseResult, PressureType, get_overall_pass_rush_result
from snapcore.simulation.personnel import (
    calculate_personnel_mismatch,
    select_defensive_personnel,
    select_offensive_personnel,
)
from snapcore.simulation.play_action import (
    RunGameTracker,
    calculate_play_action_effectiveness,
    get_play_action_modifier,
)
from snapcore.simulation.presnap import PresnapReadResult, execute_presnap_read
from snapcore.simulation.resolvers.base import (
    PlayResolver,
    advance_game_state,
    apply_penalty,
    average_effective,
    determine_stakes,
    get_primary_players,
    get_relevant_skill,
    has_effect,
    process_injuries,
    update_play_fatigue,
)
from snapcore.simulation.scheme_matchups import apply_scheme_effects, get_play_type_effects, get_scheme_matchup_effects
from snapcore.simulation.situational import (
    SituationContext,
    calculate_player_situational_modifier,
    determine_situation,
    get_situational_modifier,
)

logger = logging.getLogger(__name__)

# Pass protection weak-link penalty above which a sack or hit counts as exploiting it
WEAK_LINK_EXPLOIT_PENALTY = 10

# Escaped sacks never lose more than this
MAX_SCRAMBLE_LOSS = -5


@dataclass
class EnhancedGameState:
    """Per-game memory the enhanced resolver carries between plays."""

    offense_run_tracker: RunGameTracker = field(default_factory=RunGameTracker)
    defense_run_tracker: RunGameTracker = field(default_factory=RunGameTracker)
    total_offensive_snaps: int = 0
    total_defensive_snaps: int = 0
    touch_counts: dict[UUID, int] = field(default_factory=dict)  # RB carries

    def get_touches(self, player_id: UUID) -> int:
        return self.touch_counts.get(player_id, 0)

    def add_touch(self, player_id: UUID) -> None:
        self.touch_counts[player_id] = self.get_touches(player_id) + 1


def convert_sack_to_scramble(roll: RolledOutcome, qb_mobility: float, rng: Rng) -> None:
    """QB slips the sack: short gain or a small loss, never worse than -5."""
    yards = max(MAX_SCRAMBLE_LOSS, math.floor((qb_mobility - 50) / 10 + rng.next() * 8 - 2))
    roll.outcome = PlayOutcome.SHORT_GAIN if yards >= 0 else PlayOutcome.LOSS
    roll.yards = yards


class EnhancedPlayResolver(PlayResolver):
    """
    Play resolver with the full layered matchup model.

    Keeps an ``EnhancedGameState`` per game; pass one in to share it with
    the caller or let the resolver create its own.
    """

    def __init__(self, config: Optional[EngineConfig] = None, rng: Optional[Rng] = None):
        super().__init__(config, rng)
        self.game_state = EnhancedGameState()

    def resolve_play(
        self,
        offensive_team: TeamGameState,
        defensive_team: TeamGameState,
        offensive_call: OffensivePlayCall,
        defensive_call: DefensivePlayCall,
        context: PlayCallContext,
        game_state: Optional[EnhancedGameState] = None,
    ) -> EnhancedPlayResult:
        self.check_rosters(offensive_team, defensive_team)
        if game_state is None:
            game_state = self.game_state

        rng = self.rng
        play_type = offensive_call.play_type
        stakes = determine_stakes(context)
        situation_context = SituationContext.from_play_context(context, stakes)
        qb = offensive_team.offense.qb
        qb_mobility = qb.skill_or("mobility") if qb else 50

        # Personnel
        offense_personnel = select_offensive_personnel(
            play_type, context.down, context.distance, context.field_position, rng
        )
        defense_personnel = select_defensive_personnel(
            offense_personnel, context.down, context.distance, context.field_position
        )
        mismatch = calculate_personnel_mismatch(offense_personnel, defense_personnel, play_type.is_designed_run)

        # Schemes
        scheme_matchup = get_scheme_matchup_effects(offensive_team.offensive_scheme, defensive_team.defensive_scheme)

        # Units
        composites = calculate_team_composite_ratings(offensive_team, defensive_team, context.weather, stakes)
        protection = composites.offense.pass_protection

        # Presnap read, which may change the play
        presnap: Optional[PresnapReadResult] = None
        if play_type.is_pass and qb is not None:
            presnap = execute_presnap_read(
                qb, play_type, defensive_call, context.field_position, protection.weak_link_position, rng
            )
            if presnap.audibled and presnap.new_play_type is not None:
                play_type = presnap.new_play_type

        play_type_effects = get_play_type_effects(scheme_matchup, play_type)
        is_pass = play_type.is_pass
        is_run = play_type.is_designed_run

        play_action_bonus = 0.0
        if play_type.is_play_action:
            effectiveness = calculate_play_action_effectiveness(game_state.offense_run_tracker.get_stats())
            play_action_bonus = get_play_action_modifier(effectiveness, play_type.is_deep)

        pass_rush: Optional[PhaseResult] = None
        if is_pass:
            pass_rush = get_overall_pass_rush_result(
                protection, composites.defense.pass_rush, play_type, qb_mobility, defensive_call.blitz, rng
            )

        # Player ratings
        offensive_players = offensive_team.players_for_play_type(True, play_type)
        defensive_players = defensive_team.players_for_play_type(False, play_type)
        offensive_effectives = self._effectives(
            offensive_players, offensive_team, play_type, context, stakes, True, situation_context, game_state
        )
        defensive_effectives = self._effectives(
            defensive_players, defensive_team, play_type, context, stakes, False, situation_context, game_state
        )

        # Aggregate advantage
        advantage = get_matchup_advantage(composites.offense, composites.defense, is_pass)
        advantage += mismatch.modifier
        advantage += scheme_matchup.overall_advantage
        advantage += play_action_bonus
        if presnap is not None:
            advantage += presnap.effectiveness_modifier
        if pass_rush is not None:
            advantage += pass_rush.completion_modifier

        situational = get_situational_modifier(determine_situation(situation_context))
        advantage += situational.base_modifier

        # Outcome
        base_outcomes = apply_scheme_effects(get_base_outcomes(play_type), play_type_effects, is_pass)
        table = generate_outcome_table(
            average_effective(offensive_effectives) + advantage / 2,
            average_effective(defensive_effectives) - advantage / 2,
            play_type,
            DownAndDistance(context.down, context.distance, context.yards_to_endzone),
            context.field_position,
            rng,
            base_outcomes=base_outcomes,
        )
        roll = roll_outcome(table, advantage, rng)

        if pass_rush is not None and pass_rush.can_scramble and roll.outcome == PlayOutcome.SACK:
            convert_sack_to_scramble(roll, qb_mobility, rng)
            logger.debug(f"QB escaped the sack: {roll.yards} yards")

        logger.debug(f"{play_type.value}: {roll.outcome.value} for {roll.yards} (advantage {advantage:+.1f})")

        # Injuries, with workload-driven risk
        injured_player: Optional[Player] = None
        injury = None
        if has_effect(roll, SecondaryEffect.INJURY_CHECK):
            had_big_hit = has_effect(roll, SecondaryEffect.BIG_HIT)
            for team, players in ((offensive_team, offensive_players), (defensive_team, defensive_players)):
                risks = {
                    p.id: get_fatigue_injury_risk_multiplier(
                        p.position, team.get_snap_count(p.id), team.get_fatigue(p.id)
                    )
                    for p in players
                }
                injured_player, injury = process_injuries(
                    players, team, play_type, roll.outcome, had_big_hit, context.weather, rng, risks
                )
                if injured_player is not None:
                    logger.info(f"{injured_player.display_name} injured: {injury_description(injury)}")
                    break

        # Fatigue, snaps and usage
        update_play_fatigue(offensive_players, offensive_team, play_type, roll.outcome, context.weather, rng)
        update_play_fatigue(defensive_players, defensive_team, play_type, roll.outcome, context.weather, rng)

        starter_rb = offensive_team.offense.rb[0] if offensive_team.offense.rb else None
        if is_run:
            if starter_rb is not None:
                game_state.add_touch(starter_rb.id)
            game_state.offense_run_tracker.record_run(roll.yards, context.distance)
        game_state.total_offensive_snaps += 1
        game_state.total_defensive_snaps += 1

        # State transition
        change = advance_game_state(context, roll.outcome, roll.yards)
        penalty = apply_penalty(change, roll, context, offensive_players, defensive_players, rng)

        primary = get_primary_players(
            offensive_effectives,
            defensive_effectives,
            play_type,
            context,
            offensive_team,
            defensive_team,
            change.yards_gained,
            roll.outcome,
            rng,
            rb1_carries=game_state.get_touches(starter_rb.id) if starter_rb else 0,
        )

        weak_link_exploited = (
            pass_rush is not None
            and pass_rush.pressure_type in (PressureType.SACK, PressureType.HIT)
            and protection.weak_link_penalty > WEAK_LINK_EXPLOIT_PENALTY
        )

        result = EnhancedPlayResult(
            play_type=play_type,
            outcome=roll.outcome,
            yards_gained=change.yards_gained,
            primary_offensive_player=primary.offensive,
            primary_defensive_player=primary.defensive,
            target_player=primary.receiver,
            new_down=change.new_down,
            new_distance=change.new_distance,
            new_field_position=change.new_field_position,
            turnover=change.turnover,
            touchdown=change.touchdown,
            first_down=change.first_down,
            safety=change.safety,
            injury_occurred=injured_player is not None,
            injured_player_id=injured_player.id if injured_player else None,
            injury=injury,
            penalty_occurred=penalty is not None,
            penalty_details=penalty,
            personnel_matchup=PersonnelMatchup(offense_personnel, defense_personnel, mismatch.modifier),
            scheme_effect=SchemeEffect(scheme_matchup.overall_advantage, play_type_effects.yards),
            pass_rush_result=pass_rush,
            presnap_read=presnap,
            play_action_bonus=play_action_bonus,
            situational_modifier=situational.base_modifier,
            weak_link_exploited=weak_link_exploited,
        )
        logger.debug(
            f"Next: down {result.new_down} & {result.new_distance} at {result.new_field_position}"
        )
        return result

    def new_game(self) -> EnhancedGameState:
        """Forget run-game and usage history."""
        self.game_state = EnhancedGameState()
        return self.game_state

    def _effectives(
        self,
        players: list[Player],
        team: TeamGameState,
        play_type: PlayType,
        context: PlayCallContext,
        stakes: GameStakes,
        is_offense: bool,
        situation: SituationContext,
        game_state: EnhancedGameState,
    ) -> list[PlayerWithEffective]:
        """Effective ratings with situational pressure and fatigue-curve wear applied."""
        effectives = []
        for player in players:
            skill = get_relevant_skill(player, play_type, is_offense)
            effective = player_effective_rating(player, skill, team, context.weather, stakes, is_offense)
            effective += calculate_player_situational_modifier(player, situation, skill)
            effective *= calculate_fatigue_effectiveness(
                player.position, team.get_snap_count(player.id), game_state.get_touches(player.id), player
            )
            effectives.append(PlayerWithEffective(player, max(1, min(100, round_half_up(effective)))))
        return effectives
