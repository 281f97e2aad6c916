"""Tests for matchup resolution."""

import pytest

from snapcore.core.enums import Position
from snapcore.core.rng import SequenceRng, seeded
from snapcore.simulation.matchups import (
    MatchupResult,
    PlayerWithEffective,
    calculate_group_effective_rating,
    calculate_weighted_margin,
    describe_matchup,
    matchup_weights,
    resolve_matchup,
    resolve_play_matchup,
    resolve_simple_matchup,
)


class TestResolveMatchup:
    """Tests for single battles."""

    def test_jitter_centered(self):
        """Test a 0.5 draw means no jitter."""
        result = resolve_matchup(80, 70, SequenceRng([0.5]))
        assert result.winner == "offense"
        assert result.margin_of_victory == 10
        assert result.signed_margin == 10

    def test_close_battle_is_draw(self):
        result = resolve_matchup(71, 70, SequenceRng([0.5]))
        assert result.winner == "neutral"
        assert result.signed_margin == 0

    def test_defense_wins(self):
        result = resolve_matchup(60, 75, SequenceRng([0.5]))
        assert result.winner == "defense"
        assert result.signed_margin == -15

    def test_jitter_can_flip_close_battles(self):
        # A draw of 0 pulls five points toward the defense
        assert resolve_matchup(73, 70, SequenceRng([0.0])).winner == "neutral"
        assert resolve_matchup(70, 72, SequenceRng([0.0])).winner == "defense"

    def test_simple_matchup_band(self):
        assert resolve_simple_matchup(72, 70, SequenceRng([0.5])).winner == "neutral"
        assert resolve_simple_matchup(75, 70, SequenceRng([0.5])).winner == "offense"


class TestAggregation:
    """Tests for weights and the weighted margin."""

    @pytest.mark.parametrize("count", [1, 2, 3, 7, 11])
    def test_weights(self, count):
        weights = matchup_weights(count)
        assert len(weights) == count
        assert weights[0] == 0.4
        if count >= 3:
            assert sum(weights) == pytest.approx(1.0)

    def test_weighted_margin(self):
        matchups = [
            MatchupResult("offense", 10, 80, 70),
            MatchupResult("defense", 20, 60, 80),
        ]
        margin, winner = calculate_weighted_margin(matchups, [0.4, 0.3])
        # (4 - 6) / 0.7
        assert winner == "defense"
        assert margin == pytest.approx(2 / 0.7)

    def test_empty_margin(self):
        assert calculate_weighted_margin([], []) == (0.0, "offense")

    def test_describe(self):
        assert describe_matchup(25, "offense") == "completely dominated"
        assert describe_matchup(12, "defense") == "was beaten by"
        assert describe_matchup(1, "neutral") == "fought to a draw"


class TestResolvePlayMatchup:
    """Tests for resolve_play_matchup."""

    def test_empty_side(self):
        result = resolve_play_matchup([], [], seeded(1))
        assert result.key_matchup.offense == "Unknown"
        assert result.aggregate_margin == 0

    def test_pairs_by_index_and_picks_key(self, player_factory):
        """Test the most lopsided pairing becomes the key matchup."""
        offense = [
            PlayerWithEffective(player_factory(Position.QB, last_name="Passer"), 70),
            PlayerWithEffective(player_factory(Position.WR, last_name="Burner"), 95),
        ]
        defense = [
            PlayerWithEffective(player_factory(Position.DE, last_name="Rusher"), 70),
            PlayerWithEffective(player_factory(Position.CB, last_name="Slow"), 60),
        ]
        result = resolve_play_matchup(offense, defense, SequenceRng([0.5]))

        assert result.overall_winner == "offense"
        assert result.key_matchup.offense == "T. Burner"
        assert result.key_matchup.defense == "T. Slow"
        assert result.key_matchup.winner == "offense"
        assert result.signed_margin > 0

    def test_extra_players_unpaired(self, player_factory):
        offense = [PlayerWithEffective(player_factory(Position.WR), 80) for _ in range(3)]
        defense = [PlayerWithEffective(player_factory(Position.CB), 60)]
        result = resolve_play_matchup(offense, defense, SequenceRng([0.5]))
        assert result.aggregate_margin == pytest.approx(20)

    def test_group_effective(self, player_factory):
        assert calculate_group_effective_rating([]) == 50
        group = [PlayerWithEffective(player_factory(Position.WR), r) for r in (60, 80)]
        assert calculate_group_effective_rating(group) == 70
