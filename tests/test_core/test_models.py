"""Tests for player, team and play models."""

from snapcore.core.enums import (
    HiddenTrait,
    InjurySeverity,
    PlayOutcome,
    PlayType,
    Position,
    Precipitation,
)
from snapcore.core.models import (
    InjuryStatus,
    PlayCallContext,
    Player,
    PlayResult,
    RoleFit,
    SkillRating,
    WeatherCondition,
)


# =============================================================================
# Player
# =============================================================================


class TestSkillRating:
    """Tests for SkillRating."""

    def test_clamped(self):
        assert SkillRating(true_value=150).true_value == 100
        assert SkillRating(true_value=-3).true_value == 1

    def test_default_perceived_range(self):
        """Test the scouted range defaults to five points either side."""
        rating = SkillRating(true_value=70)
        assert (rating.perceived_min, rating.perceived_max) == (65, 75)
        assert rating.perceived_midpoint == 70

    def test_perceived_range_clipped_at_edges(self):
        rating = SkillRating(true_value=98)
        assert rating.perceived_max == 100

    def test_explicit_perceived_range_kept(self):
        rating = SkillRating(true_value=70, perceived_min=55, perceived_max=85)
        assert (rating.perceived_min, rating.perceived_max) == (55, 85)


class TestPlayer:
    """Tests for the Player model."""

    def test_display_name(self, qb_player):
        assert qb_player.display_name == "T. Brady"
        assert qb_player.full_name == "Tom Brady"

    def test_display_name_without_first_name(self):
        assert Player(last_name="Pele").display_name == "Pele"
        assert Player().display_name == "Unknown"

    def test_skill_lookup(self, qb_player):
        assert qb_player.skill_value("accuracy") == 70
        assert qb_player.skill_value("juggling") is None
        assert qb_player.skill_or("juggling", 42) == 42

    def test_perceived_skill_uses_midpoint(self):
        player = Player(skills={"speed": SkillRating(80, perceived_min=60, perceived_max=70)})
        assert player.perceived_skill("speed") == 65
        assert player.perceived_skill("power") == 50

    def test_average_skill(self):
        player = Player(skills={"speed": SkillRating(80), "power": SkillRating(60)})
        assert player.average_skill() == 70
        assert Player().average_skill() == 50

    def test_has_trait(self):
        player = Player(hidden_traits={HiddenTrait.CLUTCH})
        assert player.has_trait(HiddenTrait.CLUTCH)
        assert not player.has_trait(HiddenTrait.CHOKES)

    def test_clutch_multiplier_range(self):
        assert Player(it_factor=0).clutch_multiplier == 0.85
        assert Player(it_factor=100).clutch_multiplier == 1.15

    def test_injury_status(self):
        assert not InjuryStatus().is_injured
        status = InjuryStatus(severity=InjurySeverity.MODERATE, weeks_remaining=2)
        assert status.is_injured
        assert status.performance_multiplier == 0.9

    def test_role_fit_multiplier(self):
        assert RoleFit(role_effectiveness=0).multiplier == 0.9
        assert RoleFit(role_effectiveness=100).multiplier == 1.1


# =============================================================================
# Team
# =============================================================================


class TestTeamGameState:
    """Tests for TeamGameState lineups and arenas."""

    def test_all_players_filled(self, home_team):
        """Test the roster includes starters and specialists."""
        # 12 offense (two RBs), 11 defense, K, P; the returner is WR3
        assert len(home_team.all_players) == 25

    def test_valid_team(self, home_team):
        assert home_team.validate() == []
        assert home_team.is_valid

    def test_validate_reports_missing_players(self, home_team):
        home_team.offense.qb = None
        home_team.special_teams.k = None
        home_team.offense.ol = home_team.offense.ol[:4]
        problems = home_team.validate()
        assert "no quarterback" in problems
        assert "no kicker" in problems
        assert "needs 5 offensive linemen" in problems

    def test_players_for_run(self, home_team):
        players = home_team.players_for_play_type(True, PlayType.RUN_INSIDE)
        assert players[0].position == Position.QB
        assert players[1].position == Position.RB
        assert len(players) == 7

    def test_players_for_pass(self, home_team):
        players = home_team.players_for_play_type(True, PlayType.PASS_SHORT)
        # QB, 3 WR, 1 TE, 5 OL
        assert len(players) == 10
        assert [p.position for p in players[1:4]] == [Position.WR] * 3

    def test_players_for_kicks(self, home_team):
        assert home_team.players_for_play_type(True, PlayType.FIELD_GOAL) == [home_team.special_teams.k]
        assert home_team.players_for_play_type(True, PlayType.PUNT) == [home_team.special_teams.p]

    def test_defense_is_whole_unit(self, home_team):
        assert len(home_team.players_for_play_type(False, PlayType.RUN_INSIDE)) == 11

    def test_set_fatigue_clamped_and_mirrored(self, home_team):
        qb = home_team.offense.qb
        home_team.set_fatigue(qb.id, 140)
        assert home_team.get_fatigue(qb.id) == 100
        assert qb.fatigue == 100

    def test_swap_active_player(self, team_factory):
        team = team_factory("Home", 70, with_backups=True)
        starter = team.offense.rb[0]
        backup = next(p for p in team.all_players.values() if p.last_name == "HomeBackupRB")
        assert team.swap_active_player(starter.id, backup.id, "offense")
        assert team.offense.rb[0] is backup

    def test_swap_unknown_player_fails(self, home_team):
        qb = home_team.offense.qb
        assert not home_team.swap_active_player(qb.id, Player().id, "offense")

    def test_snap_counts_and_reset(self, home_team):
        qb = home_team.offense.qb
        home_team.increment_snap_count(qb.id)
        home_team.increment_snap_count(qb.id)
        home_team.set_fatigue(qb.id, 30)
        assert home_team.get_snap_count(qb.id) == 2

        home_team.reset_game_state()
        assert home_team.get_snap_count(qb.id) == 0
        assert home_team.get_fatigue(qb.id) == 0

    def test_timeouts(self, home_team):
        for _ in range(3):
            assert home_team.use_timeout()
        assert not home_team.use_timeout()
        home_team.reset_timeouts()
        assert home_team.timeouts_remaining == 3


# =============================================================================
# Play
# =============================================================================


class TestPlayCallContext:
    """Tests for PlayCallContext.create."""

    def test_red_zone_flag(self):
        assert PlayCallContext.create(field_position=80).is_red_zone
        assert not PlayCallContext.create(field_position=79).is_red_zone

    def test_two_minute_flag(self):
        assert PlayCallContext.create(quarter=4, time_remaining=120).is_two_minute_warning
        assert PlayCallContext.create(quarter=2, time_remaining=90).is_two_minute_warning
        assert not PlayCallContext.create(quarter=3, time_remaining=90).is_two_minute_warning
        assert not PlayCallContext.create(quarter=4, time_remaining=121).is_two_minute_warning

    def test_yards_to_endzone(self):
        assert PlayCallContext.create(field_position=65).yards_to_endzone == 35

    def test_overtime(self):
        assert PlayCallContext.create(quarter=5).is_overtime


class TestWeatherCondition:
    """Tests for WeatherCondition."""

    def test_dome_is_never_wet(self):
        dome = WeatherCondition.dome()
        assert dome.is_dome
        assert not dome.is_wet

    def test_rain(self):
        rain = WeatherCondition(precipitation=Precipitation.RAIN)
        assert rain.is_wet
        assert rain.is_bad

    def test_wind_is_bad(self):
        assert WeatherCondition(wind=20).is_bad
        assert not WeatherCondition.default().is_bad


class TestPlayResult:
    """Tests for PlayResult."""

    def _result(self, **kwargs):
        defaults = dict(
            play_type=PlayType.RUN_INSIDE,
            outcome=PlayOutcome.SHORT_GAIN,
            yards_gained=3,
            primary_offensive_player=None,
            primary_defensive_player=None,
            new_down=2,
            new_distance=7,
            new_field_position=28,
        )
        defaults.update(kwargs)
        return PlayResult(**defaults)

    def test_plain_play_not_scoring(self):
        assert not self._result().is_scoring_play

    def test_scoring_plays(self):
        assert self._result(touchdown=True).is_scoring_play
        assert self._result(safety=True).is_scoring_play
        assert self._result(play_type=PlayType.FIELD_GOAL, outcome=PlayOutcome.FIELD_GOAL_MADE).is_scoring_play
