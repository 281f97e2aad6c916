"""Per-game team state: lineups, coaches, schemes and in-game arenas."""

from dataclasses import dataclass, field
from typing import Literal, Optional
from uuid import UUID, uuid4

from snapcore.core.enums import (
    CoachRole,
    DefensiveScheme,
    OffensiveScheme,
    PlayType,
    Position,
)
from snapcore.core.models.coach import Coach
from snapcore.core.models.player import Player
from snapcore.core.models.tendencies import DefensiveTendencies, OffensiveTendencies

# Which position coach works with which position
POSITION_COACH_ROLES = {
    Position.QB: CoachRole.QB_COACH,
    Position.RB: CoachRole.RB_COACH,
    Position.WR: CoachRole.WR_COACH,
    Position.TE: CoachRole.TE_COACH,
    Position.LT: CoachRole.OL_COACH,
    Position.LG: CoachRole.OL_COACH,
    Position.C: CoachRole.OL_COACH,
    Position.RG: CoachRole.OL_COACH,
    Position.RT: CoachRole.OL_COACH,
    Position.DE: CoachRole.DL_COACH,
    Position.DT: CoachRole.DL_COACH,
    Position.OLB: CoachRole.LB_COACH,
    Position.ILB: CoachRole.LB_COACH,
    Position.CB: CoachRole.DB_COACH,
    Position.FS: CoachRole.DB_COACH,
    Position.SS: CoachRole.DB_COACH,
    Position.K: CoachRole.ST_COACH,
    Position.P: CoachRole.ST_COACH,
}

DEFAULT_TIMEOUTS = 3


@dataclass
class OffensiveLineup:
    """Active offensive players. ``ol`` is ordered LT, LG, C, RG, RT."""

    qb: Optional[Player] = None
    rb: list[Player] = field(default_factory=list)
    wr: list[Player] = field(default_factory=list)
    te: list[Player] = field(default_factory=list)
    ol: list[Player] = field(default_factory=list)

    def all_players(self) -> list[Player]:
        players = [self.qb] if self.qb else []
        return players + self.rb + self.wr + self.te + self.ol


@dataclass
class DefensiveLineup:
    """Active defensive players by level."""

    dl: list[Player] = field(default_factory=list)
    lb: list[Player] = field(default_factory=list)
    db: list[Player] = field(default_factory=list)

    def all_players(self) -> list[Player]:
        return self.dl + self.lb + self.db

    def __len__(self) -> int:
        return len(self.dl) + len(self.lb) + len(self.db)


@dataclass
class SpecialTeamsUnit:
    k: Optional[Player] = None
    p: Optional[Player] = None
    returner: Optional[Player] = None


@dataclass
class CoachingStaff:
    head_coach: Optional[Coach] = None
    offensive_coordinator: Optional[Coach] = None
    defensive_coordinator: Optional[Coach] = None
    position_coaches: dict[CoachRole, Coach] = field(default_factory=dict)


@dataclass
class TeamGameState:
    """
    Everything the engine needs to know about one team for one game.

    Owned by the game session. Resolution reads lineups and schemes and
    writes only the fatigue and snap-count arenas, both keyed by player id.
    """

    team_id: UUID = field(default_factory=uuid4)
    name: str = ""

    offense: OffensiveLineup = field(default_factory=OffensiveLineup)
    defense: DefensiveLineup = field(default_factory=DefensiveLineup)
    special_teams: SpecialTeamsUnit = field(default_factory=SpecialTeamsUnit)

    # Whole game-day roster, for substitutions
    all_players: dict[UUID, Player] = field(default_factory=dict)

    coaches: CoachingStaff = field(default_factory=CoachingStaff)

    offensive_scheme: OffensiveScheme = OffensiveScheme.WEST_COAST
    defensive_scheme: DefensiveScheme = DefensiveScheme.FOUR_THREE_UNDER
    offensive_tendencies: OffensiveTendencies = field(default_factory=OffensiveTendencies)
    defensive_tendencies: DefensiveTendencies = field(default_factory=DefensiveTendencies)

    timeouts_remaining: int = DEFAULT_TIMEOUTS

    # In-game arenas
    fatigue_levels: dict[UUID, float] = field(default_factory=dict)
    snap_counts: dict[UUID, int] = field(default_factory=dict)
    weekly_variances: dict[UUID, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for player in self.active_offense() + self.active_defense():
            self.all_players.setdefault(player.id, player)
        for player in (self.special_teams.k, self.special_teams.p, self.special_teams.returner):
            if player:
                self.all_players.setdefault(player.id, player)

    # =========================================================================
    # Lineups
    # =========================================================================

    def active_offense(self) -> list[Player]:
        return self.offense.all_players()

    def active_defense(self) -> list[Player]:
        return self.defense.all_players()

    def players_for_play_type(self, is_offense: bool, play_type: PlayType) -> list[Player]:
        """Players on the field for a play, in matchup order."""
        if not is_offense:
            return self.active_defense()

        if play_type.is_designed_run:
            players = [self.offense.qb] + self.offense.rb[:1] + self.offense.ol
        elif play_type.is_pass:
            players = [self.offense.qb] + self.offense.wr + self.offense.te[:1] + self.offense.ol
        elif play_type == PlayType.FIELD_GOAL:
            players = [self.special_teams.k]
        elif play_type == PlayType.PUNT:
            players = [self.special_teams.p]
        else:
            players = self.active_offense()
        return [p for p in players if p is not None]

    def swap_active_player(
        self, out_id: UUID, in_id: UUID, side: Literal["offense", "defense"]
    ) -> bool:
        """Replace an active player in whichever lineup slot holds them."""
        substitute = self.all_players.get(in_id)
        if substitute is None:
            return False

        if side == "offense":
            if self.offense.qb and self.offense.qb.id == out_id:
                self.offense.qb = substitute
                return True
            groups = [self.offense.rb, self.offense.wr, self.offense.te, self.offense.ol]
        else:
            groups = [self.defense.dl, self.defense.lb, self.defense.db]

        for group in groups:
            for index, player in enumerate(group):
                if player.id == out_id:
                    group[index] = substitute
                    return True
        return False

    def validate(self) -> list[str]:
        """Check minimum personnel, return list of problems."""
        problems = []
        if self.offense.qb is None:
            problems.append("no quarterback")
        if len(self.offense.rb) < 1:
            problems.append("needs at least 1 RB")
        if len(self.offense.wr) < 2:
            problems.append("needs at least 2 WR")
        if len(self.offense.te) < 1:
            problems.append("needs at least 1 TE")
        if len(self.offense.ol) < 5:
            problems.append("needs 5 offensive linemen")
        if len(self.defense) < 11:
            problems.append("needs 11 defenders")
        if self.special_teams.k is None:
            problems.append("no kicker")
        if self.special_teams.p is None:
            problems.append("no punter")
        return problems

    @property
    def is_valid(self) -> bool:
        return not self.validate()

    # =========================================================================
    # Coaches
    # =========================================================================

    def get_position_coach(self, position: Position) -> Optional[Coach]:
        role = POSITION_COACH_ROLES.get(position)
        if role is None:
            return None
        return self.coaches.position_coaches.get(role)

    # =========================================================================
    # Arenas
    # =========================================================================

    def get_fatigue(self, player_id: UUID) -> float:
        return self.fatigue_levels.get(player_id, 0.0)

    def set_fatigue(self, player_id: UUID, fatigue: float) -> None:
        """Store fatigue clamped to 0-100 and mirror it onto the player."""
        value = max(0.0, min(100.0, fatigue))
        self.fatigue_levels[player_id] = value
        player = self.all_players.get(player_id)
        if player is not None:
            player.fatigue = value

    def get_snap_count(self, player_id: UUID) -> int:
        return self.snap_counts.get(player_id, 0)

    def increment_snap_count(self, player_id: UUID) -> None:
        self.snap_counts[player_id] = self.snap_counts.get(player_id, 0) + 1

    def get_weekly_variance(self, player_id: UUID) -> float:
        return self.weekly_variances.get(player_id, 0.0)

    def reset_game_state(self) -> None:
        """Clear in-game arenas and timeouts for a new game."""
        self.fatigue_levels.clear()
        self.snap_counts.clear()
        self.reset_timeouts()

    # =========================================================================
    # Timeouts
    # =========================================================================

    def use_timeout(self) -> bool:
        """Use a timeout. Returns False if none remain."""
        if self.timeouts_remaining <= 0:
            return False
        self.timeouts_remaining -= 1
        return True

    def reset_timeouts(self) -> None:
        """Reset timeouts at the half."""
        self.timeouts_remaining = DEFAULT_TIMEOUTS
