"""Standard play resolver: per-player matchups feeding the outcome tables."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from snapcore.core.enums import PlayType, SecondaryEffect
from snapcore.core.models import (
    DefensivePlayCall,
    KeyMatchup,
    OffensivePlayCall,
    PlayCallContext,
    PlayResult,
    Player,
    Substitution,
    TeamGameState,
)
from snapcore.ratings.composite import player_effective_rating
from snapcore.simulation.fatigue import select_fatigue_substitute
from snapcore.simulation.injuries import injury_description
from snapcore.simulation.matchups import PlayerWithEffective, resolve_play_matchup
from snapcore.simulation.outcomes import DownAndDistance, generate_outcome_table, roll_outcome
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

logger = logging.getLogger(__name__)

# Rating points per point of aggregate matchup margin
MATCHUP_MARGIN_WEIGHT = 0.3

# Rating points per point of home-field advantage
HOME_FIELD_RATING_PER_POINT = 2


@dataclass
class HomeFieldContext:
    is_offense_home: bool
    home_field_advantage: float  # points, typically 2.5-3.5


@dataclass
class GamePlanModifiers:
    """Bonuses earned from the week's practice focus."""

    pass_offense_bonus: float = 0.0
    rush_offense_bonus: float = 0.0
    pass_defense_bonus: float = 0.0
    rush_defense_bonus: float = 0.0
    fatigue_reduction: float = 1.0  # multiplier, 0.85 = 15% less fatigue


class StandardPlayResolver(PlayResolver):
    """
    Play resolver built on individual matchups.

    Each player's effective rating for the play's key skill feeds an
    index-paired matchup aggregate. The aggregate shifts the offense's
    average rating before the outcome table is built and rolled.
    """

    def home_field(self, is_offense_home: bool) -> HomeFieldContext:
        """Home-field context using the configured advantage."""
        return HomeFieldContext(is_offense_home, self.config.home_field_advantage)

    def resolve_play(
        self,
        offensive_team: TeamGameState,
        defensive_team: TeamGameState,
        offensive_call: OffensivePlayCall,
        defensive_call: DefensivePlayCall,
        context: PlayCallContext,
        home_field: Optional[HomeFieldContext] = None,
        game_plan: Optional[GamePlanModifiers] = None,
    ) -> PlayResult:
        self.check_rosters(offensive_team, defensive_team)

        play_type = offensive_call.play_type
        stakes = determine_stakes(context)
        rng = self.rng

        offensive_players = offensive_team.players_for_play_type(True, play_type)
        defensive_players = defensive_team.players_for_play_type(False, play_type)

        substitutions = self._make_fatigue_substitutions(offensive_team, offensive_players, "offense")
        substitutions += self._make_fatigue_substitutions(defensive_team, defensive_players, "defense")

        offensive_effectives = [
            PlayerWithEffective(
                p,
                player_effective_rating(
                    p, get_relevant_skill(p, play_type, True), offensive_team, context.weather, stakes, True
                ),
            )
            for p in offensive_players
        ]
        defensive_effectives = [
            PlayerWithEffective(
                p,
                player_effective_rating(
                    p, get_relevant_skill(p, play_type, False), defensive_team, context.weather, stakes, False
                ),
            )
            for p in defensive_players
        ]

        matchup = resolve_play_matchup(offensive_effectives, defensive_effectives, rng)
        signed_margin = matchup.signed_margin

        offense_rating = average_effective(offensive_effectives) + signed_margin * MATCHUP_MARGIN_WEIGHT
        defense_rating = average_effective(defensive_effectives)

        if home_field is not None:
            boost = home_field.home_field_advantage * HOME_FIELD_RATING_PER_POINT
            if home_field.is_offense_home:
                offense_rating += boost
            else:
                defense_rating += boost

        if game_plan is not None:
            # Scrambles count as pass plays for game-plan purposes
            is_pass = play_type.is_pass or play_type == PlayType.QB_SCRAMBLE
            offense_rating += game_plan.pass_offense_bonus if is_pass else game_plan.rush_offense_bonus
            defense_rating += game_plan.pass_defense_bonus if is_pass else game_plan.rush_defense_bonus

        situation = DownAndDistance(context.down, context.distance, context.yards_to_endzone)
        table = generate_outcome_table(
            offense_rating, defense_rating, play_type, situation, context.field_position, rng
        )
        roll = roll_outcome(table, signed_margin, rng)
        logger.debug(
            f"{play_type.value}: {roll.outcome.value} for {roll.yards} "
            f"(off {offense_rating:.1f} vs def {defense_rating:.1f})"
        )

        # Side effects
        injured_player: Optional[Player] = None
        injury = None
        if has_effect(roll, SecondaryEffect.INJURY_CHECK):
            had_big_hit = has_effect(roll, SecondaryEffect.BIG_HIT)
            injured_player, injury = process_injuries(
                offensive_players, offensive_team, play_type, roll.outcome, had_big_hit, context.weather, rng
            )
            if injured_player is None:
                injured_player, injury = process_injuries(
                    defensive_players, defensive_team, play_type, roll.outcome, had_big_hit, context.weather, rng
                )
            if injured_player is not None:
                logger.info(f"{injured_player.display_name} injured: {injury_description(injury)}")

        fatigue_multiplier = game_plan.fatigue_reduction if game_plan else 1.0
        update_play_fatigue(
            offensive_players, offensive_team, play_type, roll.outcome, context.weather, rng, fatigue_multiplier
        )
        update_play_fatigue(
            defensive_players, defensive_team, play_type, roll.outcome, context.weather, rng, fatigue_multiplier
        )

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
        )

        key_matchup = None
        if matchup.key_matchup.offense != "Unknown":
            key_matchup = KeyMatchup(
                offense_player=matchup.key_matchup.offense,
                defense_player=matchup.key_matchup.defense,
                winner=(
                    matchup.key_matchup.offense
                    if matchup.overall_winner == "offense"
                    else matchup.key_matchup.defense
                ),
            )

        result = PlayResult(
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
            substitutions=substitutions,
            key_matchup=key_matchup,
        )
        logger.debug(
            f"Next: down {result.new_down} & {result.new_distance} at {result.new_field_position}"
        )
        return result

    def _make_fatigue_substitutions(
        self,
        team: TeamGameState,
        players: list[Player],
        side: str,
    ) -> list[Substitution]:
        """Swap tired players for fresher backups, in place in ``players``."""
        active_ids = {
            p.id for p in (team.active_offense() if side == "offense" else team.active_defense())
        }
        substitutions = []
        for index, player in enumerate(players):
            substitute = select_fatigue_substitute(team.all_players, active_ids, player)
            if substitute is None:
                continue
            if not team.swap_active_player(player.id, substitute.id, side):
                continue
            active_ids.add(substitute.id)
            players[index] = substitute
            substitutions.append(Substitution(player.id, substitute.id, player.position.value))
            logger.info(
                f"{team.name}: {substitute.display_name} in for {player.display_name} "
                f"(fatigue {player.fatigue:.0f})"
            )
        return substitutions
