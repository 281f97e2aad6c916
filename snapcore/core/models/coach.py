"""Coach model."""

from dataclasses import dataclass, field
from typing import Optional, Union
from uuid import UUID, uuid4

from snapcore.core.enums import Aggressiveness, CoachRole, DefensiveScheme, OffensiveScheme


@dataclass
class Coach:
    """
    A member of the coaching staff.

    Only the attributes that influence play resolution live here:
    game-day decision quality and per-player chemistry.
    """

    id: UUID = field(default_factory=uuid4)
    name: str = ""
    role: CoachRole = CoachRole.HEAD_COACH
    scheme: Optional[Union[OffensiveScheme, DefensiveScheme]] = None
    game_day_iq: int = 50  # 1-100
    aggressiveness: Aggressiveness = Aggressiveness.BALANCED

    # Chemistry with individual players, -10..+10
    player_chemistry: dict[UUID, int] = field(default_factory=dict)

    def chemistry_with(self, player_id: UUID) -> int:
        return max(-10, min(10, self.player_chemistry.get(player_id, 0)))
