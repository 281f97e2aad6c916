"""Shared pytest fixtures for snapcore tests."""

import pytest

from snapcore.config import EngineConfig, set_config
from snapcore.core.enums import (
    CoachRole,
    DefensiveScheme,
    OffensiveScheme,
    Position,
)
from snapcore.core.models import (
    Coach,
    CoachingStaff,
    DefensiveLineup,
    OffensiveLineup,
    PlayCallContext,
    Player,
    SkillRating,
    SpecialTeamsUnit,
    TeamGameState,
    WeatherCondition,
)
from snapcore.core.rng import seeded

ALL_SKILLS = (
    "accuracy", "arm_strength", "mobility", "decision_making", "awareness",
    "vision", "power", "catching", "route_running", "tracking", "speed",
    "blocking", "run_block", "pass_block",
    "run_defense", "pass_rush", "blitzing", "tackling",
    "man_coverage", "zone_coverage", "coverage",
    "kick_accuracy", "kick_power",
    "closing", "footwork", "pursuit", "pass_protection", "run_blocking",
    "pull_ability", "cut_ability", "ball_skills", "shed_blocks", "strength",
    "stamina", "fumble_protection",
)


def build_player(position: Position, rating: int = 70, first_name: str = "Test", last_name: str = "", **kwargs) -> Player:
    """Player with every skill set to ``rating``."""
    skills = {name: SkillRating(true_value=rating) for name in ALL_SKILLS}
    return Player(
        first_name=first_name,
        last_name=last_name or position.value,
        position=position,
        skills=skills,
        **kwargs,
    )


def build_team(name: str = "Home", rating: int = 70, with_backups: bool = False) -> TeamGameState:
    """Full 11-on-11 team with specialists, every skill at ``rating``."""
    offense = OffensiveLineup(
        qb=build_player(Position.QB, rating, last_name=f"{name}QB"),
        rb=[build_player(Position.RB, rating, last_name=f"{name}RB1"),
            build_player(Position.RB, rating, last_name=f"{name}RB2")],
        wr=[build_player(Position.WR, rating, last_name=f"{name}WR{i}") for i in range(1, 4)],
        te=[build_player(Position.TE, rating, last_name=f"{name}TE")],
        ol=[build_player(p, rating, last_name=f"{name}{p.value}")
            for p in (Position.LT, Position.LG, Position.C, Position.RG, Position.RT)],
    )
    defense = DefensiveLineup(
        dl=[build_player(Position.DE, rating, last_name=f"{name}DE1"),
            build_player(Position.DT, rating, last_name=f"{name}DT1"),
            build_player(Position.DT, rating, last_name=f"{name}DT2"),
            build_player(Position.DE, rating, last_name=f"{name}DE2")],
        lb=[build_player(Position.OLB, rating, last_name=f"{name}OLB1"),
            build_player(Position.ILB, rating, last_name=f"{name}ILB"),
            build_player(Position.OLB, rating, last_name=f"{name}OLB2")],
        db=[build_player(Position.CB, rating, last_name=f"{name}CB1"),
            build_player(Position.CB, rating, last_name=f"{name}CB2"),
            build_player(Position.FS, rating, last_name=f"{name}FS"),
            build_player(Position.SS, rating, last_name=f"{name}SS")],
    )
    special_teams = SpecialTeamsUnit(
        k=build_player(Position.K, rating, last_name=f"{name}K"),
        p=build_player(Position.P, rating, last_name=f"{name}P"),
        returner=offense.wr[2],
    )
    team = TeamGameState(
        name=name,
        offense=offense,
        defense=defense,
        special_teams=special_teams,
        coaches=CoachingStaff(head_coach=Coach(name=f"{name} HC")),
        offensive_scheme=OffensiveScheme.WEST_COAST,
        defensive_scheme=DefensiveScheme.FOUR_THREE_UNDER,
    )
    if with_backups:
        for position in (Position.RB, Position.DE, Position.WR):
            backup = build_player(position, rating - 5, last_name=f"{name}Backup{position.value}")
            team.all_players[backup.id] = backup
    return team


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture(autouse=True)
def engine_config():
    """Pin a known configuration for every test, restore env-driven config after."""
    config = EngineConfig(seed=1234, log_level="WARNING", validate_rosters=False, home_field_advantage=2.5)
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture
def rng():
    """Seeded random source."""
    return seeded(42)


# =============================================================================
# Player Fixtures
# =============================================================================


@pytest.fixture
def player_factory():
    """Callable building a player with uniform skills."""
    return build_player


@pytest.fixture
def qb_player() -> Player:
    """A 70-rated quarterback."""
    return build_player(Position.QB, 70, first_name="Tom", last_name="Brady")


@pytest.fixture
def rb_player() -> Player:
    """A 70-rated running back."""
    return build_player(Position.RB, 70, first_name="Barry", last_name="Sanders")


@pytest.fixture
def position_coach() -> Coach:
    """A sharp position coach."""
    return Coach(name="Coach", role=CoachRole.QB_COACH, game_day_iq=85)


# =============================================================================
# Team Fixtures
# =============================================================================


@pytest.fixture
def team_factory():
    """Callable building a full team."""
    return build_team


@pytest.fixture
def home_team() -> TeamGameState:
    return build_team("Home", 70)


@pytest.fixture
def away_team() -> TeamGameState:
    return build_team("Away", 70)


# =============================================================================
# Situation Fixtures
# =============================================================================


@pytest.fixture
def midfield_context() -> PlayCallContext:
    """1st and 10 at midfield, first quarter, mild weather."""
    return PlayCallContext.create(down=1, distance=10, field_position=50)


@pytest.fixture
def red_zone_context() -> PlayCallContext:
    """2nd and 6 at the opponent's 15."""
    return PlayCallContext.create(down=2, distance=6, field_position=85)


@pytest.fixture
def dome_weather() -> WeatherCondition:
    return WeatherCondition.dome()
