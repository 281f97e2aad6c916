"""Tests for the enhanced play resolver."""

import pytest

from snapcore.config import EngineConfig
from snapcore.core.enums import DefensivePersonnel, DefensiveScheme, OffensivePersonnel, PlayOutcome, PlayType, Position
from snapcore.core.models import (
    DefensivePlayCall,
    EnhancedPlayResult,
    InjuryResult,
    OffensivePlayCall,
    PlayCallContext,
)
from snapcore.core.rng import SequenceRng, seeded
from snapcore.simulation.outcomes import RolledOutcome
from snapcore.simulation.resolvers import base, enhanced
from snapcore.simulation.resolvers.enhanced import (
    EnhancedGameState,
    EnhancedPlayResolver,
    convert_sack_to_scramble,
)

SCRIMMAGE_PLAYS = [play_type for play_type in PlayType if not play_type.is_special_teams]


def run(resolver, offense, defense, play_type, context, **kwargs):
    return resolver.resolve_play(offense, defense, OffensivePlayCall(play_type), DefensivePlayCall(), context, **kwargs)


@pytest.fixture
def resolver():
    return EnhancedPlayResolver(rng=seeded(19))


# =============================================================================
# Helpers
# =============================================================================


class TestSackConversion:
    """Tests for convert_sack_to_scramble."""

    def test_mobile_qb_gains(self):
        roll = RolledOutcome(PlayOutcome.SACK, -7, [])
        convert_sack_to_scramble(roll, 90, SequenceRng([0.5]))
        assert roll.outcome == PlayOutcome.SHORT_GAIN
        assert roll.yards == 6

    def test_loss_capped(self):
        roll = RolledOutcome(PlayOutcome.SACK, -9, [])
        convert_sack_to_scramble(roll, 10, SequenceRng([0.0]))
        assert roll.outcome == PlayOutcome.LOSS
        assert roll.yards == -5


class TestEnhancedGameState:
    """Tests for EnhancedGameState."""

    def test_touches(self, rb_player):
        state = EnhancedGameState()
        assert state.get_touches(rb_player.id) == 0
        state.add_touch(rb_player.id)
        state.add_touch(rb_player.id)
        assert state.get_touches(rb_player.id) == 2


# =============================================================================
# Resolution
# =============================================================================


class TestResolvePlay:
    """Tests for EnhancedPlayResolver.resolve_play."""

    @pytest.mark.parametrize("play_type", SCRIMMAGE_PLAYS)
    def test_result_is_consistent(self, resolver, home_team, away_team, midfield_context, play_type):
        result = run(resolver, home_team, away_team, play_type, midfield_context)
        assert isinstance(result, EnhancedPlayResult)
        assert 1 <= result.new_field_position <= 99
        assert result.personnel_matchup is not None
        assert result.scheme_effect is not None
        if result.play_type.is_pass:
            assert result.pass_rush_result is not None
        if play_type.is_pass:
            assert result.presnap_read is not None
        else:
            assert result.presnap_read is None
            assert result.pass_rush_result is None

    def test_same_seed_same_play(self, team_factory, midfield_context):
        def run_drive():
            offense, defense = team_factory("Home"), team_factory("Away")
            resolver = EnhancedPlayResolver(EngineConfig(seed=31))
            results = [
                run(resolver, offense, defense, play_type, midfield_context)
                for play_type in (PlayType.RUN_INSIDE, PlayType.PLAY_ACTION_SHORT, PlayType.PASS_DEEP)
            ]
            return [(r.play_type, r.outcome, r.yards_gained, r.new_field_position) for r in results]

        assert run_drive() == run_drive()

    def test_runs_feed_game_state(self, resolver, home_team, away_team, midfield_context):
        run(resolver, home_team, away_team, PlayType.RUN_INSIDE, midfield_context)
        run(resolver, home_team, away_team, PlayType.RUN_DRAW, midfield_context)
        state = resolver.game_state
        assert state.get_touches(home_team.offense.rb[0].id) == 2
        assert len(state.offense_run_tracker) == 2
        assert state.total_offensive_snaps == 2

    def test_passes_do_not_count_as_runs(self, resolver, home_team, away_team, midfield_context):
        run(resolver, home_team, away_team, PlayType.PASS_SCREEN, midfield_context)
        assert len(resolver.game_state.offense_run_tracker) == 0
        assert resolver.game_state.total_offensive_snaps == 1

    def test_external_game_state(self, resolver, home_team, away_team, midfield_context):
        shared = EnhancedGameState()
        run(resolver, home_team, away_team, PlayType.RUN_INSIDE, midfield_context, game_state=shared)
        assert shared.total_offensive_snaps == 1
        assert resolver.game_state.total_offensive_snaps == 0

    def test_new_game_resets(self, resolver, home_team, away_team, midfield_context):
        run(resolver, home_team, away_team, PlayType.RUN_INSIDE, midfield_context)
        state = resolver.new_game()
        assert state is resolver.game_state
        assert state.total_offensive_snaps == 0


class TestLayers:
    """Tests for the individual layers reported on the result."""

    def test_goal_line_personnel(self, resolver, home_team, away_team):
        context = PlayCallContext.create(down=1, distance=2, field_position=98)
        result = run(resolver, home_team, away_team, PlayType.RUN_INSIDE, context)
        assert result.personnel_matchup.offense == OffensivePersonnel.P23
        assert result.personnel_matchup.defense == DefensivePersonnel.GOAL_LINE
        assert result.personnel_matchup.mismatch_modifier == pytest.approx(-15.5)
        assert result.situational_modifier == 3

    def test_scheme_matchup(self, resolver, home_team, away_team, midfield_context):
        away_team.defensive_scheme = DefensiveScheme.BLITZ_HEAVY
        result = run(resolver, home_team, away_team, PlayType.RUN_OUTSIDE, midfield_context)
        assert result.scheme_effect.overall_advantage == 5
        assert result.scheme_effect.play_type_modifier == 5

    def test_neutral_scheme_pair(self, resolver, home_team, away_team, midfield_context):
        result = run(resolver, home_team, away_team, PlayType.RUN_OUTSIDE, midfield_context)
        assert result.scheme_effect.overall_advantage == 0

    def test_play_action_needs_a_run_game(self, resolver, home_team, away_team, midfield_context):
        result = run(resolver, home_team, away_team, PlayType.PLAY_ACTION_DEEP, midfield_context)
        assert result.play_action_bonus == 0

    def test_play_action_rewards_run_game(self, resolver, home_team, away_team, midfield_context):
        for _ in range(3):
            resolver.game_state.offense_run_tracker.record_run(6, 10)
        deep = run(resolver, home_team, away_team, PlayType.PLAY_ACTION_DEEP, midfield_context)
        short = run(resolver, home_team, away_team, PlayType.PLAY_ACTION_SHORT, midfield_context)
        assert deep.play_action_bonus == 35
        assert short.play_action_bonus == pytest.approx(10.5)

    def test_red_zone_situational(self, resolver, home_team, away_team, red_zone_context):
        result = run(resolver, home_team, away_team, PlayType.PASS_SHORT, red_zone_context)
        assert result.situational_modifier == 2

    def test_audible_changes_play(self, team_factory, away_team, player_factory, midfield_context):
        offense = team_factory("Home")
        offense.offense.qb = player_factory(Position.QB, 95, last_name="Veteran", age=33)
        resolver = EnhancedPlayResolver(rng=SequenceRng([0.0]))
        result = run(resolver, offense, away_team, PlayType.PASS_SHORT, midfield_context)
        assert result.presnap_read.audibled
        assert result.play_type == PlayType.RUN_INSIDE
        assert result.pass_rush_result is None
        assert not result.weak_link_exploited


class TestInjuryWorkload:
    """Tests for workload-driven injury risk."""

    def test_overworked_back_rolls_in_higher_fatigue_tier(self, resolver, home_team, away_team, midfield_context,
                                                          monkeypatch):
        """Test a worn-down RB at fatigue 50 is checked above the 60 tier."""
        seen = {}

        def record(params, rng):
            seen[params.player.id] = params.current_fatigue
            return InjuryResult.none()

        monkeypatch.setattr(base, "check_for_injury", record)
        monkeypatch.setattr(enhanced, "has_effect", lambda roll, effect: True)
        rb = home_team.offense.rb[0]
        home_team.set_fatigue(rb.id, 50)
        home_team.snap_counts[rb.id] = 30

        run(resolver, home_team, away_team, PlayType.RUN_INSIDE, midfield_context)

        # Past the sharp-decline threshold: 1.0 + 0.5
        assert seen[rb.id] == pytest.approx(75)
        assert seen[rb.id] > 60

    def test_fresh_players_roll_at_their_fatigue(self, resolver, home_team, away_team, midfield_context, monkeypatch):
        seen = {}

        def record(params, rng):
            seen[params.player.id] = params.current_fatigue
            return InjuryResult.none()

        monkeypatch.setattr(base, "check_for_injury", record)
        monkeypatch.setattr(enhanced, "has_effect", lambda roll, effect: True)
        rb = home_team.offense.rb[0]
        home_team.set_fatigue(rb.id, 40)

        run(resolver, home_team, away_team, PlayType.RUN_INSIDE, midfield_context)

        assert seen[rb.id] == pytest.approx(40)
        assert away_team.defense.dl[0].id in seen
