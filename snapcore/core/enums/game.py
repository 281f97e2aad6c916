"""Game context enumerations: conditions, stakes, traits and roles."""

from enum import Enum


class Precipitation(Enum):
    """Precipitation during a game."""

    NONE = "none"
    RAIN = "rain"
    SNOW = "snow"


class GameStakes(Enum):
    """How much a game (or a moment in it) matters."""

    PRESEASON = "preseason"
    REGULAR = "regular"
    RIVALRY = "rivalry"
    PLAYOFF = "playoff"
    CHAMPIONSHIP = "championship"


class HiddenTrait(Enum):
    """Hidden personality and durability traits.

    Never shown to the user directly; they only surface through results.
    """

    # Pressure
    CLUTCH = "clutch"
    CHOKES = "chokes"
    COOL_UNDER_PRESSURE = "cool_under_pressure"
    HOT_HEAD = "hot_head"
    DISAPPEARS = "disappears"

    # Effort
    MOTOR = "motor"
    LAZY = "lazy"

    # Character
    LEADER = "leader"
    TEAM_FIRST = "team_first"
    DIVA = "diva"
    LOCKER_ROOM_CANCER = "locker_room_cancer"

    # Physical
    IRON_MAN = "iron_man"
    INJURY_PRONE = "injury_prone"
    BRICK_WALL = "brick_wall"


class RoleType(Enum):
    """Role a player is used in by the coaching staff."""

    FEATURED = "featured"
    STARTER = "starter"
    ROTATION = "rotation"
    SITUATIONAL = "situational"
    DEPTH = "depth"


class CoachRole(Enum):
    """Coaching staff positions."""

    HEAD_COACH = "head_coach"
    OFFENSIVE_COORDINATOR = "offensive_coordinator"
    DEFENSIVE_COORDINATOR = "defensive_coordinator"
    QB_COACH = "qb_coach"
    RB_COACH = "rb_coach"
    WR_COACH = "wr_coach"
    TE_COACH = "te_coach"
    OL_COACH = "ol_coach"
    DL_COACH = "dl_coach"
    LB_COACH = "lb_coach"
    DB_COACH = "db_coach"
    ST_COACH = "st_coach"


class Aggressiveness(Enum):
    """Fourth-down philosophy of a head coach."""

    CONSERVATIVE = "conservative"
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"


class ConsistencyTier(Enum):
    """Week-to-week performance consistency, steadiest first."""

    METRONOME = "metronome"
    STEADY = "steady"
    AVERAGE = "average"
    STREAKY = "streaky"
    VOLATILE = "volatile"
    CHAOTIC = "chaotic"


class StreakState(Enum):
    HOT = "hot"
    COLD = "cold"
    NEUTRAL = "neutral"
