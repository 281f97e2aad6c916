"""Tests for the shared play resolution steps."""

import pytest

from snapcore.config import EngineConfig
from snapcore.core.enums import GameStakes, PlayOutcome, PlayType, Position
from snapcore.core.models import InjuryResult, PlayCallContext, PlayResult
from snapcore.core.rng import SequenceRng, seeded
from snapcore.exceptions import ConfigurationError
from snapcore.simulation.matchups import PlayerWithEffective
from snapcore.simulation.outcomes import RolledOutcome
from snapcore.simulation.resolvers import base
from snapcore.simulation.resolvers.base import (
    PlayResolver,
    advance_game_state,
    apply_penalty,
    determine_stakes,
    get_primary_players,
    get_relevant_skill,
    process_injuries,
    update_play_fatigue,
)


class NoopResolver(PlayResolver):
    """Resolver that only exercises the base class plumbing."""

    def resolve_play(self, offensive_team, defensive_team, offensive_call, defensive_call, context) -> PlayResult:
        self.check_rosters(offensive_team, defensive_team)
        return None


# =============================================================================
# Resolver Plumbing
# =============================================================================


class TestPlayResolver:
    """Tests for the PlayResolver base class."""

    def test_uses_global_config(self):
        resolver = NoopResolver()
        assert resolver.config.seed == 1234

    def test_seeded_rng(self):
        first = NoopResolver(EngineConfig(seed=9))
        second = NoopResolver(EngineConfig(seed=9))
        assert [first.rng.next() for _ in range(3)] == [second.rng.next() for _ in range(3)]

    def test_injected_rng_wins(self):
        rng = SequenceRng([0.25])
        assert NoopResolver(rng=rng).rng is rng

    def test_invalid_config_rejected(self):
        with pytest.raises(ConfigurationError):
            NoopResolver(EngineConfig(log_level="LOUD"))


# =============================================================================
# State Transition
# =============================================================================


class TestAdvanceGameState:
    """Tests for advance_game_state."""

    def test_gain_stops_at_the_one(self):
        context = PlayCallContext.create(down=1, distance=10, field_position=95)
        change = advance_game_state(context, PlayOutcome.GOOD_GAIN, 5)
        assert change.yards_gained == 4
        assert change.new_field_position == 99
        assert not change.touchdown
        assert (change.new_down, change.new_distance) == (2, 6)

    def test_no_room_at_the_one(self):
        context = PlayCallContext.create(down=1, distance=1, field_position=99)
        change = advance_game_state(context, PlayOutcome.SHORT_GAIN, 5)
        assert change.yards_gained == 0
        assert change.new_field_position == 99

    def test_touchdown(self):
        context = PlayCallContext.create(down=2, distance=7, field_position=80)
        change = advance_game_state(context, PlayOutcome.TOUCHDOWN, 20)
        assert change.touchdown
        assert change.yards_gained == 20
        assert change.new_field_position == 99

    def test_interception_flips_field(self):
        context = PlayCallContext.create(down=2, distance=7, field_position=40)
        change = advance_game_state(context, PlayOutcome.INTERCEPTION, 0)
        assert change.turnover
        assert change.new_field_position == 60
        assert (change.new_down, change.new_distance) == (1, 10)

    def test_turnover_never_first_down(self):
        context = PlayCallContext.create(down=1, distance=10, field_position=40)
        change = advance_game_state(context, PlayOutcome.FUMBLE_LOST, 12)
        assert not change.first_down
        assert change.new_field_position == 48

    def test_turnover_on_downs(self):
        context = PlayCallContext.create(down=4, distance=5, field_position=60)
        change = advance_game_state(context, PlayOutcome.SHORT_GAIN, 2)
        assert not change.turnover
        assert not change.first_down
        assert change.new_down == 1
        assert change.new_field_position == 40

    def test_safety(self):
        context = PlayCallContext.create(down=2, distance=10, field_position=3)
        change = advance_game_state(context, PlayOutcome.SACK, -5)
        assert change.safety
        assert change.new_field_position == 1

    def test_first_down(self):
        context = PlayCallContext.create(down=3, distance=4, field_position=50)
        change = advance_game_state(context, PlayOutcome.MODERATE_GAIN, 6)
        assert change.first_down
        assert (change.new_down, change.new_distance, change.new_field_position) == (1, 10, 56)


class TestApplyPenalty:
    """Tests for apply_penalty."""

    def test_no_flag(self, midfield_context, home_team):
        roll = RolledOutcome(PlayOutcome.SHORT_GAIN, 3, [])
        change = advance_game_state(midfield_context, roll.outcome, roll.yards)
        assert apply_penalty(change, roll, midfield_context, [], [], seeded(1)) is None
        assert change.yards_gained == 3

    def test_defensive_interference(self, home_team, away_team):
        context = PlayCallContext.create(down=2, distance=10, field_position=40)
        roll = RolledOutcome(PlayOutcome.PENALTY_DEFENSE, 0, [])
        change = advance_game_state(context, roll.outcome, roll.yards)
        defenders = away_team.active_defense()
        details = apply_penalty(change, roll, context, home_team.active_offense(), defenders, SequenceRng([0.0]))
        assert details.type == "Pass Interference"
        assert details.team == "defense"
        assert details.player_id == defenders[0].id
        assert change.new_field_position == 55
        assert change.first_down
        assert (change.new_down, change.new_distance) == (1, 10)

    def test_offensive_holding(self, home_team, away_team):
        context = PlayCallContext.create(down=1, distance=10, field_position=40)
        roll = RolledOutcome(PlayOutcome.PENALTY_OFFENSE, 0, [])
        change = advance_game_state(context, roll.outcome, roll.yards)
        details = apply_penalty(
            change, roll, context, home_team.active_offense(), away_team.active_defense(), SequenceRng([0.0])
        )
        assert details.type == "Holding"
        assert change.yards_gained == -10
        assert change.new_field_position == 30
        assert not change.first_down


# =============================================================================
# Helpers
# =============================================================================


class TestHelpers:
    """Tests for stakes and skill lookup."""

    def test_one_score_fourth_quarter(self):
        assert determine_stakes(PlayCallContext.create(quarter=4, score_differential=-7)) == GameStakes.PLAYOFF
        assert determine_stakes(PlayCallContext.create(quarter=4, score_differential=8)) == GameStakes.REGULAR
        assert determine_stakes(PlayCallContext.create(quarter=3)) == GameStakes.REGULAR

    @pytest.mark.parametrize(
        "position,play_type,is_offense,skill",
        [
            (Position.QB, PlayType.PASS_SHORT, True, "accuracy"),
            (Position.QB, PlayType.QB_SCRAMBLE, True, "mobility"),
            (Position.RB, PlayType.RUN_INSIDE, True, "vision"),
            (Position.RB, PlayType.PASS_SCREEN, True, "catching"),
            (Position.WR, PlayType.PLAY_ACTION_DEEP, True, "tracking"),
            (Position.WR, PlayType.PASS_MEDIUM, True, "route_running"),
            (Position.TE, PlayType.RUN_SWEEP, True, "blocking"),
            (Position.LG, PlayType.PASS_DEEP, True, "pass_block"),
            (Position.C, PlayType.RUN_DRAW, True, "run_block"),
            (Position.DT, PlayType.RUN_INSIDE, False, "run_defense"),
            (Position.DE, PlayType.PASS_SHORT, False, "pass_rush"),
            (Position.ILB, PlayType.PASS_SHORT, False, "tackling"),
            (Position.SS, PlayType.RUN_INSIDE, False, "man_coverage"),
        ],
    )
    def test_relevant_skill(self, player_factory, position, play_type, is_offense, skill):
        assert get_relevant_skill(player_factory(position), play_type, is_offense) == skill

    def test_relevant_skill_fallback(self, player_factory):
        kicker = player_factory(Position.K)
        assert get_relevant_skill(kicker, PlayType.FIELD_GOAL, True) == "accuracy"
        kicker.skills.clear()
        assert get_relevant_skill(kicker, PlayType.FIELD_GOAL, True) == "awareness"


class TestSideEffects:
    """Tests for injury and fatigue processing."""

    def test_no_injury(self, home_team):
        players = home_team.players_for_play_type(True, PlayType.RUN_INSIDE)
        injured, result = process_injuries(
            players, home_team, PlayType.RUN_INSIDE, PlayOutcome.SHORT_GAIN, False,
            PlayCallContext().weather, SequenceRng([0.99]),
        )
        assert injured is None
        assert not result.occurred

    def test_first_injury_ends_checks(self, home_team):
        players = home_team.players_for_play_type(True, PlayType.RUN_INSIDE)
        injured, result = process_injuries(
            players, home_team, PlayType.RUN_INSIDE, PlayOutcome.SHORT_GAIN, True,
            PlayCallContext().weather, SequenceRng([0.0, 0.0, 0.1, 0.0]),
        )
        assert injured is players[0]
        assert result.occurred

    def test_workload_risk_scales_fatigue(self, home_team, monkeypatch):
        """Test a risk multiplier raises the fatigue the injury roll sees."""
        seen = {}

        def record(params, rng):
            seen[params.player.id] = params.current_fatigue
            return InjuryResult.none()

        monkeypatch.setattr(base, "check_for_injury", record)
        rb, wr = home_team.offense.rb[0], home_team.offense.wr[0]
        home_team.set_fatigue(rb.id, 50)
        home_team.set_fatigue(wr.id, 50)
        process_injuries(
            [rb, wr], home_team, PlayType.RUN_INSIDE, PlayOutcome.SHORT_GAIN, False,
            PlayCallContext().weather, SequenceRng([0.99]), {rb.id: 1.5},
        )
        assert seen[rb.id] == pytest.approx(75)
        assert seen[wr.id] == pytest.approx(50)

    def test_fatigue_and_snaps(self, home_team):
        rb = home_team.offense.rb[0]
        update_play_fatigue([rb], home_team, PlayType.RUN_INSIDE, PlayOutcome.SHORT_GAIN,
                            PlayCallContext().weather, SequenceRng([0.0]))
        assert home_team.get_fatigue(rb.id) == pytest.approx(2.6 - 0.5)
        assert rb.fatigue == pytest.approx(2.1)
        assert home_team.get_snap_count(rb.id) == 1

    def test_game_plan_fatigue_reduction(self, home_team):
        rb = home_team.offense.rb[0]
        update_play_fatigue([rb], home_team, PlayType.RUN_INSIDE, PlayOutcome.SHORT_GAIN,
                            PlayCallContext().weather, SequenceRng([0.0]), fatigue_multiplier=0.5)
        assert home_team.get_fatigue(rb.id) == pytest.approx(0.8)


class TestPrimaryPlayers:
    """Tests for get_primary_players."""

    def _effectives(self, players):
        return [PlayerWithEffective(p, 70) for p in players]

    def test_run_credits_back_and_tackler(self, home_team, away_team, midfield_context):
        offense = home_team.players_for_play_type(True, PlayType.RUN_INSIDE)
        defense = away_team.active_defense()
        primary = get_primary_players(
            self._effectives(offense), self._effectives(defense), PlayType.RUN_INSIDE, midfield_context,
            home_team, away_team, 4, PlayOutcome.SHORT_GAIN, seeded(3),
        )
        assert primary.offensive == home_team.offense.rb[0].id
        assert primary.defensive in {p.id for p in defense}
        assert primary.receiver is None

    def test_sneak_credits_quarterback(self, home_team, away_team, midfield_context):
        offense = home_team.players_for_play_type(True, PlayType.QB_SNEAK)
        primary = get_primary_players(
            self._effectives(offense), self._effectives(away_team.active_defense()), PlayType.QB_SNEAK,
            midfield_context, home_team, away_team, 1, PlayOutcome.SHORT_GAIN, seeded(3),
        )
        assert primary.offensive == home_team.offense.qb.id

    def test_pass_credits_passer_and_target(self, home_team, away_team, midfield_context):
        offense = home_team.players_for_play_type(True, PlayType.PASS_SHORT)
        primary = get_primary_players(
            self._effectives(offense), self._effectives(away_team.active_defense()), PlayType.PASS_SHORT,
            midfield_context, home_team, away_team, 6, PlayOutcome.MODERATE_GAIN, seeded(3),
        )
        receivers = {p.id for p in home_team.offense.wr + home_team.offense.te}
        assert primary.offensive == home_team.offense.qb.id
        assert primary.receiver in receivers
