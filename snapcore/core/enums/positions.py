"""Position definitions for football players."""

from enum import Enum, auto


class Side(Enum):
    """Which unit a position lines up with."""

    OFFENSE = auto()
    DEFENSE = auto()
    SPECIAL_TEAMS = auto()


class PositionGroup(Enum):
    """Position groups used for injury and coaching lookups."""

    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    OL = "OL"
    DL = "DL"
    LB = "LB"
    DB = "DB"
    K = "K"
    P = "P"


class Position(Enum):
    """Individual player positions."""

    # Offense - Skill positions
    QB = "QB"  # Quarterback
    RB = "RB"  # Running Back
    WR = "WR"  # Wide Receiver
    TE = "TE"  # Tight End

    # Offense - Line
    LT = "LT"  # Left Tackle
    LG = "LG"  # Left Guard
    C = "C"  # Center
    RG = "RG"  # Right Guard
    RT = "RT"  # Right Tackle

    # Defense - Line
    DE = "DE"  # Defensive End
    DT = "DT"  # Defensive Tackle

    # Defense - Linebackers
    OLB = "OLB"  # Outside Linebacker
    ILB = "ILB"  # Inside Linebacker

    # Defense - Secondary
    CB = "CB"  # Cornerback
    FS = "FS"  # Free Safety
    SS = "SS"  # Strong Safety

    # Special Teams
    K = "K"  # Kicker
    P = "P"  # Punter

    @property
    def group(self) -> PositionGroup:
        """Get the position group for this position."""
        return _POSITION_GROUPS[self]

    @property
    def side(self) -> Side:
        """Get the unit this position plays on."""
        if self in (Position.K, Position.P):
            return Side.SPECIAL_TEAMS
        if self.group in (PositionGroup.DL, PositionGroup.LB, PositionGroup.DB):
            return Side.DEFENSE
        return Side.OFFENSE

    @property
    def is_offensive_line(self) -> bool:
        return self.group == PositionGroup.OL

    @property
    def is_defensive_line(self) -> bool:
        return self.group == PositionGroup.DL

    @property
    def is_linebacker(self) -> bool:
        return self.group == PositionGroup.LB

    @property
    def is_defensive_back(self) -> bool:
        return self.group == PositionGroup.DB


_POSITION_GROUPS = {
    Position.QB: PositionGroup.QB,
    Position.RB: PositionGroup.RB,
    Position.WR: PositionGroup.WR,
    Position.TE: PositionGroup.TE,
    Position.LT: PositionGroup.OL,
    Position.LG: PositionGroup.OL,
    Position.C: PositionGroup.OL,
    Position.RG: PositionGroup.OL,
    Position.RT: PositionGroup.OL,
    Position.DE: PositionGroup.DL,
    Position.DT: PositionGroup.DL,
    Position.OLB: PositionGroup.LB,
    Position.ILB: PositionGroup.LB,
    Position.CB: PositionGroup.DB,
    Position.FS: PositionGroup.DB,
    Position.SS: PositionGroup.DB,
    Position.K: PositionGroup.K,
    Position.P: PositionGroup.P,
}

# Offensive line in left-to-right order
OFFENSIVE_LINE_ORDER = (Position.LT, Position.LG, Position.C, Position.RG, Position.RT)
