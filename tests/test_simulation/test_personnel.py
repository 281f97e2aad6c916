"""Tests for personnel packages and mismatches."""

import pytest

from snapcore.core.enums import DefensivePersonnel, OffensivePersonnel, PlayType
from snapcore.core.rng import SequenceRng
from snapcore.simulation.personnel import (
    OFFENSIVE_PERSONNEL,
    calculate_personnel_mismatch,
    personnel_tendency_adjustment,
    select_defensive_personnel,
    select_offensive_personnel,
)

O = OffensivePersonnel
D = DefensivePersonnel


# =============================================================================
# Package Data
# =============================================================================


class TestPackageData:
    """Tests for the offensive package descriptors."""

    def test_every_package_described(self):
        for package in OffensivePersonnel:
            info = OFFENSIVE_PERSONNEL[package]
            assert info.package == package
            assert info.strengths
            assert info.weaknesses

    def test_jumbo_package(self):
        info = OFFENSIVE_PERSONNEL[O.P23]
        assert info.run_tendency == 90
        assert "goal line push" in info.strengths
        assert info.weaknesses == ("no passing threat", "one dimensional")


# =============================================================================
# Mismatches
# =============================================================================


class TestPersonnelMismatch:
    """Tests for calculate_personnel_mismatch."""

    @pytest.mark.parametrize(
        "offense,defense,is_run,kind,advantage,modifier",
        [
            (O.P13, D.DIME, True, "run", "offense", 18),
            (O.P23, D.QUARTER, False, "run", "offense", 28),
            (O.P10, D.GOAL_LINE, False, "pass", "offense", 22.5),
            (O.P20, D.BASE, True, "pass", "offense", 8),
            (O.P22, D.GOAL_LINE, True, "run", "defense", -15.5),
            (O.P10, D.DIME, False, "pass", "defense", -12.5),
            (O.P12, D.NICKEL, True, "pass", "offense", 10),
        ],
    )
    def test_rules(self, offense, defense, is_run, kind, advantage, modifier):
        mismatch = calculate_personnel_mismatch(offense, defense, is_run)
        assert mismatch.type == kind
        assert mismatch.advantage == advantage
        assert mismatch.modifier == pytest.approx(modifier)

    def test_heavy_vs_goal_line_pass_falls_through(self):
        mismatch = calculate_personnel_mismatch(O.P22, D.GOAL_LINE, False)
        # -(-15) / 4 = 3.75
        assert mismatch.advantage == "offense"
        assert mismatch.modifier == 4
        assert mismatch.description == "Defense personnel weak against pass"

    def test_defense_strength_against_play(self):
        strong = calculate_personnel_mismatch(O.P11, D.DIME, False)
        weak = calculate_personnel_mismatch(O.P11, D.DIME, True)
        assert (strong.advantage, strong.modifier) == ("defense", -4)
        assert (weak.advantage, weak.modifier) == ("offense", 3)

    def test_even(self):
        mismatch = calculate_personnel_mismatch(O.P11, D.BASE, True)
        assert mismatch.type == "none"
        assert mismatch.modifier == 0


# =============================================================================
# Selection
# =============================================================================


class TestDefensivePersonnelSelection:
    """Tests for select_defensive_personnel."""

    @pytest.mark.parametrize(
        "offense,down,distance,field_position,expected",
        [
            (O.P23, 1, 2, 98, D.GOAL_LINE),
            (O.P11, 1, 2, 98, D.BASE),
            (O.P22, 3, 1, 50, D.GOAL_LINE),
            (O.P11, 3, 12, 40, D.DIME),
            (O.P22, 1, 10, 40, D.BASE),
            (O.P10, 1, 10, 40, D.NICKEL),
            (O.P12, 1, 10, 40, D.BIG_NICKEL),
            (O.P21, 1, 10, 40, D.NICKEL),
        ],
    )
    def test_answers(self, offense, down, distance, field_position, expected):
        assert select_defensive_personnel(offense, down, distance, field_position) == expected


class TestOffensivePersonnelSelection:
    """Tests for select_offensive_personnel."""

    def test_goal_line(self):
        assert select_offensive_personnel(PlayType.RUN_INSIDE, 1, 2, 98, SequenceRng([0.5])) == O.P23
        assert select_offensive_personnel(PlayType.PASS_SHORT, 1, 2, 98, SequenceRng([0.5])) == O.P13

    def test_short_yardage(self):
        assert select_offensive_personnel(PlayType.QB_SNEAK, 3, 1, 50, SequenceRng([0.5])) == O.P22
        assert select_offensive_personnel(PlayType.PASS_SHORT, 4, 1, 50, SequenceRng([0.5])) == O.P12

    def test_deep_shots(self):
        assert select_offensive_personnel(PlayType.PASS_DEEP, 1, 10, 50, SequenceRng([0.5])) == O.P11
        assert select_offensive_personnel(PlayType.PASS_DEEP, 1, 10, 50, SequenceRng([0.7])) == O.P10

    def test_screen(self):
        assert select_offensive_personnel(PlayType.PASS_SCREEN, 1, 10, 50, SequenceRng([0.7])) == O.P20

    @pytest.mark.parametrize("roll,expected", [(0.3, O.P11), (0.5, O.P12), (0.9, O.P21)])
    def test_runs(self, roll, expected):
        assert select_offensive_personnel(PlayType.RUN_OUTSIDE, 1, 10, 50, SequenceRng([roll])) == expected

    @pytest.mark.parametrize("roll,expected", [(0.3, O.P11), (0.6, O.P12), (0.9, O.P10)])
    def test_passes(self, roll, expected):
        assert select_offensive_personnel(PlayType.PASS_MEDIUM, 1, 10, 50, SequenceRng([roll])) == expected


class TestTendencyAdjustment:
    """Tests for personnel_tendency_adjustment."""

    def test_heavy_signals_run(self):
        run, pass_ = personnel_tendency_adjustment(O.P13)
        assert run == pytest.approx(5)
        assert pass_ == pytest.approx(-5)

    def test_empty_signals_pass(self):
        run, pass_ = personnel_tendency_adjustment(O.P10)
        assert run == pytest.approx(-7)
        assert pass_ == pytest.approx(7)
