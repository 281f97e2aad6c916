"""Tests for play-action effectiveness and the run game tracker."""

import pytest

from snapcore.core.rng import SequenceRng
from snapcore.simulation.play_action import (
    LEAGUE_AVERAGE_SUCCESS_RATE,
    RunGameStats,
    RunGameTracker,
    adjust_sack_probability,
    calculate_play_action_effectiveness,
    get_play_action_modifier,
    should_use_play_action,
)


def stats_for(*yards):
    tracker = RunGameTracker()
    for gained in yards:
        tracker.record_run(gained, 10)
    return tracker.get_stats()


# =============================================================================
# Tracker
# =============================================================================


class TestRunGameTracker:
    """Tests for RunGameTracker."""

    def test_success_uses_distance_or_four(self):
        tracker = RunGameTracker()
        tracker.record_run(5, 10)
        tracker.record_run(2, 1)
        tracker.record_run(3, 10)
        stats = tracker.get_stats()
        assert stats.attempts == 3
        assert stats.successful_runs == 2
        assert stats.ypc == pytest.approx(10 / 3)

    def test_empty_tracker(self):
        tracker = RunGameTracker()
        assert tracker.get_stats() == RunGameStats()
        assert tracker.get_success_rate() == LEAGUE_AVERAGE_SUCCESS_RATE

    def test_rolling_window(self):
        tracker = RunGameTracker(window=3)
        for gained in (20, 1, 1, 1):
            tracker.record_run(gained, 10)
        assert len(tracker) == 3
        assert tracker.get_stats().big_runs == 0
        assert tracker.get_success_rate() == 0

    def test_reset(self):
        tracker = RunGameTracker()
        tracker.record_run(8, 10)
        tracker.reset()
        assert len(tracker) == 0


# =============================================================================
# Effectiveness
# =============================================================================


class TestEffectiveness:
    """Tests for calculate_play_action_effectiveness."""

    def test_needs_attempts(self):
        effectiveness = calculate_play_action_effectiveness(stats_for(8, 8))
        assert effectiveness.overall_multiplier == 1.0
        assert effectiveness.route_bonus == 0

    def test_elite_run_game(self):
        effectiveness = calculate_play_action_effectiveness(stats_for(6, 6, 6))
        assert effectiveness.route_bonus == 15
        assert effectiveness.extra_pocket_time == 0.5
        assert effectiveness.overall_multiplier == 1.4

    def test_big_runs_boost_and_clamp(self):
        effectiveness = calculate_play_action_effectiveness(stats_for(20, 20, 5, 5))
        assert effectiveness.route_bonus == 20
        assert effectiveness.deep_completion_bonus == 25
        assert effectiveness.overall_multiplier == 1.5

    def test_mediocre_run_game(self):
        effectiveness = calculate_play_action_effectiveness(stats_for(3, 4, 4, 3))
        assert effectiveness.route_bonus == 2
        assert effectiveness.overall_multiplier == 1.0

    def test_poor_run_game(self):
        effectiveness = calculate_play_action_effectiveness(stats_for(1, 1, 1))
        assert effectiveness.route_bonus == -3
        assert effectiveness.extra_pocket_time == -0.1
        assert effectiveness.overall_multiplier == 0.85


class TestModifiers:
    """Tests for modifiers derived from effectiveness."""

    def test_deep_vs_short(self):
        effectiveness = calculate_play_action_effectiveness(stats_for(6, 6, 6))
        assert get_play_action_modifier(effectiveness, True) == 35
        assert get_play_action_modifier(effectiveness, False) == pytest.approx(10.5)

    def test_sack_rate(self):
        elite = calculate_play_action_effectiveness(stats_for(6, 6, 6))
        poor = calculate_play_action_effectiveness(stats_for(1, 1, 1))
        assert adjust_sack_probability(0.1, elite) == pytest.approx(0.085)
        assert adjust_sack_probability(0.1, poor) == pytest.approx(0.105)


class TestShouldUsePlayAction:
    """Tests for should_use_play_action."""

    def test_obvious_passing_down(self):
        recommendation = should_use_play_action(stats_for(3, 3, 3), True, 3, 12)
        assert not recommendation.recommended

    def test_elite_against_aggressive_defense(self):
        assert should_use_play_action(stats_for(6, 6, 6), True, 3, 5).recommended

    def test_early_down(self):
        assert should_use_play_action(stats_for(4, 4, 4), False, 1, 10).recommended

    def test_moderate_coin_flip(self):
        stats = stats_for(3, 4, 4, 3)
        assert should_use_play_action(stats, False, 3, 5, SequenceRng([0.3])).recommended
        assert not should_use_play_action(stats, False, 3, 5, SequenceRng([0.5])).recommended
        assert not should_use_play_action(stats, False, 3, 5).recommended

    def test_poor_run_game(self):
        recommendation = should_use_play_action(stats_for(1, 1, 1), False, 3, 5)
        assert recommendation.reason == "Run game not effective enough for PA"
