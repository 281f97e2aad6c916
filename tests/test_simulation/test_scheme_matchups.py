"""Tests for offense vs defense scheme matchup effects."""

import pytest

from snapcore.core.enums import DefensiveScheme, OffensiveScheme, PlayOutcome, PlayType
from snapcore.simulation.scheme_matchups import (
    NO_EFFECT,
    SCHEME_MATCHUPS,
    PlayTypeEffects,
    apply_scheme_effects,
    get_pass_success_modifier,
    get_play_type_effects,
    get_run_success_modifier,
    get_scheme_matchup_effects,
)


@pytest.fixture
def base_probabilities():
    """Pass play distribution with a zeroed touchdown entry."""
    return {
        PlayOutcome.BIG_GAIN: 0.1,
        PlayOutcome.GOOD_GAIN: 0.15,
        PlayOutcome.SHORT_GAIN: 0.3,
        PlayOutcome.INCOMPLETE: 0.3,
        PlayOutcome.SACK: 0.1,
        PlayOutcome.INTERCEPTION: 0.05,
        PlayOutcome.TOUCHDOWN: 0.0,
    }


class TestMatchupLookup:
    """Tests for get_scheme_matchup_effects."""

    def test_listed_pair(self):
        matchup = get_scheme_matchup_effects(OffensiveScheme.POWER_RUN, DefensiveScheme.BLITZ_HEAVY)
        assert matchup.overall_advantage == 10

    def test_unlisted_pair_is_neutral(self):
        matchup = get_scheme_matchup_effects(OffensiveScheme.WEST_COAST, DefensiveScheme.FOUR_THREE_UNDER)
        assert matchup.overall_advantage == 0
        assert matchup.description == "Neutral matchup"
        assert matchup.deep_pass == NO_EFFECT

    def test_advantages_in_range(self):
        for matchup in SCHEME_MATCHUPS.values():
            assert -20 <= matchup.overall_advantage <= 20


class TestPlayTypeEffects:
    """Tests for get_play_type_effects."""

    def test_play_action_deep_merges(self):
        matchup = get_scheme_matchup_effects(OffensiveScheme.WEST_COAST, DefensiveScheme.COVER_TWO)
        effects = get_play_type_effects(matchup, PlayType.PLAY_ACTION_DEEP)
        assert effects.completion == pytest.approx(-12.5)
        assert effects.yards == pytest.approx(-17.5)
        assert effects.interception == pytest.approx(5)

    def test_categories(self):
        matchup = get_scheme_matchup_effects(OffensiveScheme.WEST_COAST, DefensiveScheme.COVER_TWO)
        assert get_play_type_effects(matchup, PlayType.PASS_MEDIUM) == matchup.short_pass
        assert get_play_type_effects(matchup, PlayType.PASS_SCREEN) == matchup.screen
        assert get_play_type_effects(matchup, PlayType.QB_SNEAK) == matchup.run_inside
        assert get_play_type_effects(matchup, PlayType.QB_SCRAMBLE) == matchup.run_outside
        assert get_play_type_effects(matchup, PlayType.FIELD_GOAL) == NO_EFFECT


class TestApplySchemeEffects:
    """Tests for apply_scheme_effects."""

    def test_completion_and_sack(self, base_probabilities):
        modified = apply_scheme_effects(base_probabilities, PlayTypeEffects(completion=10, sack=20), True)
        assert modified[PlayOutcome.SHORT_GAIN] == pytest.approx(0.33)
        assert modified[PlayOutcome.INCOMPLETE] == pytest.approx(0.27)
        assert modified[PlayOutcome.SACK] == pytest.approx(0.12)
        assert modified[PlayOutcome.INTERCEPTION] == pytest.approx(0.05)

    def test_input_untouched(self, base_probabilities):
        apply_scheme_effects(base_probabilities, PlayTypeEffects(completion=50), True)
        assert base_probabilities[PlayOutcome.SHORT_GAIN] == 0.3

    def test_pass_effects_ignored_on_runs(self, base_probabilities):
        modified = apply_scheme_effects(base_probabilities, PlayTypeEffects(completion=10, sack=20), False)
        assert modified == base_probabilities

    def test_yards_shift(self, base_probabilities):
        modified = apply_scheme_effects(base_probabilities, PlayTypeEffects(yards=30), False)
        assert modified[PlayOutcome.BIG_GAIN] == pytest.approx(0.13)
        assert modified[PlayOutcome.GOOD_GAIN] == pytest.approx(0.18)
        assert modified[PlayOutcome.SHORT_GAIN] == pytest.approx(0.255)

    def test_zero_and_missing_stay_put(self, base_probabilities):
        modified = apply_scheme_effects(base_probabilities, PlayTypeEffects(big_play=50, fumble=20), False)
        assert modified[PlayOutcome.TOUCHDOWN] == 0.0
        assert PlayOutcome.FUMBLE not in modified
        assert modified[PlayOutcome.BIG_GAIN] == pytest.approx(0.15)

    def test_not_renormalized(self, base_probabilities):
        modified = apply_scheme_effects(base_probabilities, PlayTypeEffects(big_play=100), True)
        assert sum(modified.values()) > sum(base_probabilities.values())


class TestSuccessModifiers:
    """Tests for run and pass success modifiers."""

    def test_run(self):
        assert get_run_success_modifier(OffensiveScheme.POWER_RUN, DefensiveScheme.BLITZ_HEAVY, True) == 15
        assert get_run_success_modifier(OffensiveScheme.POWER_RUN, DefensiveScheme.BLITZ_HEAVY, False) == 10

    def test_pass(self):
        assert get_pass_success_modifier(OffensiveScheme.WEST_COAST, DefensiveScheme.COVER_TWO, False, False) == 7.5
        deep_play_action = get_pass_success_modifier(
            OffensiveScheme.WEST_COAST, DefensiveScheme.COVER_TWO, True, True
        )
        assert deep_play_action == pytest.approx(-15)

    def test_neutral_pair(self):
        assert get_pass_success_modifier(OffensiveScheme.AIR_RAID, DefensiveScheme.THREE_FOUR, True, False) == 0
