"""Tests for outcome tables and sampling."""

from collections import Counter

import pytest

from snapcore.core.enums import PlayOutcome, PlayType, SecondaryEffect
from snapcore.core.rng import SequenceRng, seeded
from snapcore.simulation.outcomes import (
    BASE_RUN_OUTCOMES,
    DownAndDistance,
    OutcomeTableEntry,
    YardRange,
    apply_advantage_modifier,
    apply_field_position_modifier,
    apply_situational_modifier,
    calculate_yards_gaussian,
    generate_field_goal_table,
    generate_outcome_table,
    get_base_outcomes,
    is_negative_outcome,
    normalize_probabilities,
    roll_outcome,
    table_probabilities,
    truncated_gaussian,
)

MIDFIELD = DownAndDistance(down=1, yards_to_go=10, yards_to_endzone=50)


def _table(offense, defense, play_type=PlayType.RUN_INSIDE, situation=MIDFIELD, field_position=50, seed=1):
    return generate_outcome_table(offense, defense, play_type, situation, field_position, seeded(seed))


class TestBaseTables:
    """Tests for the base outcome tables."""

    @pytest.mark.parametrize("play_type", [PlayType.RUN_INSIDE, PlayType.PASS_SCREEN])
    def test_base_tables_sum_to_one(self, play_type):
        assert sum(get_base_outcomes(play_type).values()) == pytest.approx(1.0)

    def test_scramble_uses_run_table(self):
        assert get_base_outcomes(PlayType.QB_SCRAMBLE) is BASE_RUN_OUTCOMES

    def test_play_action_deep_uses_deep_table(self):
        assert get_base_outcomes(PlayType.PLAY_ACTION_DEEP)[PlayOutcome.INCOMPLETE] == 0.45


class TestModifiers:
    """Tests for the probability modifiers."""

    def test_advantage_boosts_positives(self):
        modified = apply_advantage_modifier(BASE_RUN_OUTCOMES, 20, is_pass_play=False)
        assert modified[PlayOutcome.BIG_GAIN] == pytest.approx(0.08 * 1.25)
        assert modified[PlayOutcome.LOSS] == pytest.approx(0.08 * 0.75)
        # Short gains are neither positive nor negative for the shift
        assert modified[PlayOutcome.SHORT_GAIN] == 0.25

    def test_advantage_saturates(self):
        at_40 = apply_advantage_modifier(BASE_RUN_OUTCOMES, 40, False)
        at_90 = apply_advantage_modifier(BASE_RUN_OUTCOMES, 90, False)
        assert at_40 == at_90

    def test_input_not_mutated(self):
        apply_advantage_modifier(BASE_RUN_OUTCOMES, 30, False)
        assert BASE_RUN_OUTCOMES[PlayOutcome.BIG_GAIN] == 0.08

    def test_goal_line_touchdowns(self):
        goal_line = DownAndDistance(down=1, yards_to_go=3, yards_to_endzone=3)
        modified = apply_situational_modifier(BASE_RUN_OUTCOMES, goal_line)
        # Red zone and goal line boosts stack
        assert modified[PlayOutcome.TOUCHDOWN] == pytest.approx(0.02 * 1.3 * 1.8)
        assert modified[PlayOutcome.BIG_GAIN] == pytest.approx(0.08 * 0.7)

    def test_third_and_long_passes(self):
        situation = DownAndDistance(down=3, yards_to_go=12, yards_to_endzone=60)
        modified = apply_situational_modifier(get_base_outcomes(PlayType.PASS_SHORT), situation)
        assert modified[PlayOutcome.SACK] == pytest.approx(0.06 * 1.15)

    def test_backed_up(self):
        modified = apply_field_position_modifier(BASE_RUN_OUTCOMES, 5)
        assert modified[PlayOutcome.BIG_LOSS] == pytest.approx(0.02 * 1.3)
        assert modified[PlayOutcome.LOSS] == pytest.approx(0.08 * 1.1)

    def test_normalize_zero_total(self):
        entries = normalize_probabilities({PlayOutcome.TOUCHDOWN: 0.0})
        assert [(e.outcome, e.probability) for e in entries] == [(PlayOutcome.INCOMPLETE, 1.0)]


class TestGenerateOutcomeTable:
    """Tests for generate_outcome_table."""

    @pytest.mark.parametrize("play_type", [
        PlayType.RUN_INSIDE, PlayType.PASS_SHORT, PlayType.PASS_DEEP, PlayType.PASS_SCREEN, PlayType.QB_SCRAMBLE,
    ])
    @pytest.mark.parametrize("offense,defense", [(50, 50), (90, 40), (30, 95)])
    def test_sums_to_one(self, play_type, offense, defense):
        table = _table(offense, defense, play_type)
        assert sum(e.probability for e in table) == pytest.approx(1.0)

    def test_sorted_highest_first(self):
        probabilities = [e.probability for e in _table(70, 70)]
        assert probabilities == sorted(probabilities, reverse=True)

    @pytest.mark.parametrize("play_type", [PlayType.RUN_INSIDE, PlayType.PASS_SHORT, PlayType.PASS_DEEP])
    @pytest.mark.parametrize("yards_to_endzone", [3, 12, 25])
    def test_yards_capped_at_goal_line(self, play_type, yards_to_endzone):
        """Test no entry can carry the ball past the end zone."""
        situation = DownAndDistance(1, min(10, yards_to_endzone), yards_to_endzone)
        table = _table(70, 70, play_type, situation, 100 - yards_to_endzone)
        for entry in table:
            assert entry.yards_range.max <= yards_to_endzone
            assert entry.yards_range.min <= entry.yards_range.max

    def test_neutral_matchup_matches_base(self):
        """Test equal ratings at midfield reproduce the base table."""
        probabilities = table_probabilities(_table(70, 70))
        for outcome, p in BASE_RUN_OUTCOMES.items():
            assert probabilities[outcome] == pytest.approx(p)

    def test_better_rusher_shifts_mass_to_big_plays(self):
        """Test an 80 vs 50 run matchup moves mass into big and good gains."""
        strong = table_probabilities(_table(80, 50))
        neutral = table_probabilities(_table(50, 50))
        assert strong[PlayOutcome.BIG_GAIN] > neutral[PlayOutcome.BIG_GAIN]
        assert strong[PlayOutcome.GOOD_GAIN] > neutral[PlayOutcome.GOOD_GAIN]
        assert strong[PlayOutcome.FUMBLE_LOST] < neutral[PlayOutcome.FUMBLE_LOST]

    def test_sacks_carry_injury_check(self):
        table = _table(70, 70, PlayType.PASS_SHORT)
        sack = next(e for e in table if e.outcome == PlayOutcome.SACK)
        assert SecondaryEffect.BIG_HIT in sack.secondary_effects
        assert SecondaryEffect.INJURY_CHECK in sack.secondary_effects

    def test_base_outcomes_override(self):
        base = {PlayOutcome.SHORT_GAIN: 3.0, PlayOutcome.NO_GAIN: 1.0}
        table = generate_outcome_table(70, 70, PlayType.RUN_INSIDE, MIDFIELD, 50, seeded(1), base_outcomes=base)
        assert table_probabilities(table) == pytest.approx({PlayOutcome.SHORT_GAIN: 0.75, PlayOutcome.NO_GAIN: 0.25})


class TestRollOutcome:
    """Tests for roll_outcome."""

    def test_frequencies_match_table(self):
        """Test 10,000 rolls at zero advantage reproduce the table within tolerance."""
        table = _table(70, 70)
        expected = table_probabilities(table)
        rng = seeded(2024)

        counts = Counter(roll_outcome(table, 0, rng).outcome for _ in range(10_000))

        for outcome, p in expected.items():
            assert counts[outcome] / 10_000 == pytest.approx(p, abs=0.015)

    def test_yards_inside_range(self):
        table = _table(70, 70)
        ranges = {e.outcome: e.yards_range for e in table}
        rng = seeded(9)
        for _ in range(2000):
            rolled = roll_outcome(table, 0, rng)
            yard_range = ranges[rolled.outcome]
            assert yard_range.min <= rolled.yards <= yard_range.max

    def test_drift_falls_back_to_last_entry(self):
        table = [
            OutcomeTableEntry(PlayOutcome.SHORT_GAIN, 0.5, YardRange(2, 4)),
            OutcomeTableEntry(PlayOutcome.NO_GAIN, 0.4999, YardRange(0, 0)),
        ]
        rolled = roll_outcome(table, 0, SequenceRng([0.99995, 0.5]))
        assert rolled.outcome == PlayOutcome.NO_GAIN
        assert rolled.yards == 0

    def test_effects_copied(self):
        entry = OutcomeTableEntry(PlayOutcome.SACK, 1.0, YardRange(-5, -5), [SecondaryEffect.BIG_HIT])
        rolled = roll_outcome([entry], 0, SequenceRng([0.5]))
        rolled.secondary_effects.append(SecondaryEffect.INJURY_CHECK)
        assert entry.secondary_effects == [SecondaryEffect.BIG_HIT]


class TestYardSampling:
    """Tests for yard sampling."""

    def test_truncated_gaussian_clamped(self):
        rng = seeded(3)
        for _ in range(1000):
            assert 2 <= truncated_gaussian(3, 10, 2, 4, rng) <= 4

    def test_fixed_range(self):
        assert calculate_yards_gaussian(7, 7, PlayOutcome.BIG_GAIN, 0, seeded(1)) == 7

    def test_big_gains_cluster_low(self):
        rng = seeded(4)
        draws = [calculate_yards_gaussian(15, 40, PlayOutcome.BIG_GAIN, 0, rng) for _ in range(3000)]
        assert sum(draws) / len(draws) < 27.5


class TestFieldGoalTable:
    """Tests for generate_field_goal_table."""

    def test_chip_shot(self):
        made, missed = generate_field_goal_table(70, 25, 0)
        assert made.outcome == PlayOutcome.FIELD_GOAL_MADE
        assert made.probability == pytest.approx(0.95)
        assert missed.probability == pytest.approx(0.05)

    def test_clamped(self):
        assert generate_field_goal_table(100, 20, 5)[0].probability == 0.99
        assert generate_field_goal_table(1, 60, -10)[0].probability == 0.1

    def test_distance_ladder(self):
        probabilities = [generate_field_goal_table(70, d, 0)[0].probability for d in (30, 40, 50, 55, 60)]
        assert probabilities == sorted(probabilities, reverse=True)


class TestPredicates:
    def test_recovered_fumble_is_negative(self):
        assert is_negative_outcome(PlayOutcome.FUMBLE)
        assert is_negative_outcome(PlayOutcome.PENALTY_OFFENSE)
        assert not is_negative_outcome(PlayOutcome.SHORT_GAIN)
