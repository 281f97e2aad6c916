"""
Presnap reads and audibles.

Smart quarterbacks spot blitzes, slide protection and check out of bad
plays before the snap. The read can replace the called play type.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from snapcore.core.enums import CoverageType, PlayType
from snapcore.core.mathutil import clamp, round_half_up
from snapcore.core.models.play import DefensivePlayCall
from snapcore.core.models.player import Player
from snapcore.core.rng import Rng

logger = logging.getLogger(__name__)

# Football IQ needed for each kind of audible
AUDIBLE_IQ = 75
BOX_AUDIBLE_IQ = 80
BLITZ_AUDIBLE_IQ = 85

PROTECTION_AWARENESS = 70


@dataclass
class QBMentalAttributes:
    decision_making: float
    awareness: float
    football_iq: int
    experience: int  # years, 0-15


@dataclass
class AudibleDecision:
    should_audible: bool
    new_play: Optional[PlayType]
    reason: str


@dataclass
class PresnapReadResult:
    identified_blitz: bool
    changed_protection: bool
    audibled: bool
    new_play_type: Optional[PlayType]
    effectiveness_modifier: float
    description: str


@dataclass
class HotRouteBonus:
    completion_bonus: float  # 0-20
    yards_bonus: float  # 0-10


def get_qb_mental_attributes(qb: Player) -> QBMentalAttributes:
    """Football IQ blends decision making, awareness and years in the league."""
    decision_making = qb.skill_or("decision_making")
    awareness = qb.skill_or("awareness")
    experience = min(15, max(0, qb.age - 22))
    football_iq = round_half_up(decision_making * 0.4 + awareness * 0.3 + (50 + experience * 3) * 0.3)
    return QBMentalAttributes(decision_making, awareness, football_iq, experience)


def check_blitz_identification(
    attributes: QBMentalAttributes,
    is_blitzing: bool,
    blitz_rate: float,
    rng: Rng,
) -> bool:
    if not is_blitzing:
        return False

    chance = attributes.decision_making / 100
    chance += (attributes.awareness - 50) / 200
    chance += attributes.experience * 0.02
    # Aggressive defenses are predictable
    if blitz_rate > 0.4:
        chance += 0.15
    # Even elite QBs get fooled
    chance = min(0.95, chance)

    return rng.next() < chance


def should_change_protection(
    attributes: QBMentalAttributes,
    identified_blitz: bool,
    weak_link_position: Optional[str],
    rng: Rng,
) -> bool:
    if not identified_blitz and not weak_link_position:
        return False
    if attributes.awareness < PROTECTION_AWARENESS:
        return False
    if identified_blitz:
        return rng.next() < 0.8
    # Slide toward the weak link
    return rng.next() < 0.5


def determine_audible(
    attributes: QBMentalAttributes,
    original_play: PlayType,
    defensive_call: DefensivePlayCall,
    box_count: int,
    rng: Rng,
) -> AudibleDecision:
    """Check out of the called play when the look is wrong for it."""
    if attributes.football_iq < AUDIBLE_IQ:
        return AudibleDecision(False, None, "QB football IQ too low to audible")

    iq = attributes.football_iq
    is_run = original_play.is_designed_run
    is_pass = original_play.is_pass

    if box_count <= 6 and is_pass and iq >= BOX_AUDIBLE_IQ and rng.next() < 0.6:
        return AudibleDecision(True, PlayType.RUN_INSIDE, "Light box detected - QB audibled to run")

    if box_count >= 8 and is_run and iq >= BOX_AUDIBLE_IQ and rng.next() < 0.6:
        return AudibleDecision(True, PlayType.PASS_SHORT, "Stacked box detected - QB audibled to quick pass")

    if defensive_call.blitz and iq >= BLITZ_AUDIBLE_IQ and original_play.is_deep and rng.next() < 0.7:
        hot_route = PlayType.PASS_SHORT if rng.next() < 0.5 else PlayType.PASS_SCREEN
        return AudibleDecision(True, hot_route, "Blitz detected - QB audibled to hot route/screen")

    if (
        defensive_call.coverage == CoverageType.MAN
        and iq >= BLITZ_AUDIBLE_IQ
        and original_play == PlayType.PASS_MEDIUM
        and rng.next() < 0.3
    ):
        return AudibleDecision(True, PlayType.PASS_DEEP, "Man coverage - QB called deep shot")

    return AudibleDecision(False, None, "No audible needed")


def estimate_box_count(defensive_call: DefensivePlayCall, field_position: int) -> int:
    """Defenders in the box, 5-9."""
    box_count = 6
    if defensive_call.coverage == CoverageType.MAN:
        box_count -= 1
    if defensive_call.blitz:
        box_count += 2
    if defensive_call.press_rate > 0.7:
        box_count += 1

    if field_position >= 90:
        box_count += 1
    elif field_position <= 20:
        box_count -= 1

    return int(clamp(box_count, 5, 9))


def execute_presnap_read(
    qb: Player,
    original_play: PlayType,
    defensive_call: DefensivePlayCall,
    field_position: int,
    weak_link_position: Optional[str],
    rng: Rng,
) -> PresnapReadResult:
    """Run the QB's full presnap process for one play."""
    attributes = get_qb_mental_attributes(qb)
    box_count = estimate_box_count(defensive_call, field_position)

    # Blitz rate isn't visible presnap; press rate stands in for how aggressive the look is
    identified_blitz = check_blitz_identification(attributes, defensive_call.blitz, defensive_call.press_rate, rng)
    changed_protection = should_change_protection(attributes, identified_blitz, weak_link_position, rng)
    audible = determine_audible(attributes, original_play, defensive_call, box_count, rng)

    modifier = 0.0
    notes = []

    if identified_blitz:
        modifier += 8
        notes.append("QB identified blitz presnap")
        if audible.should_audible and audible.new_play == PlayType.PASS_SCREEN:
            modifier += 5
    elif defensive_call.blitz:
        modifier -= 5
        notes.append("QB missed blitz read")

    if changed_protection:
        modifier += 5
        notes.append("QB adjusted protection")

    if audible.should_audible:
        modifier += 6
        notes.append(audible.reason)
        logger.info(f"Audible: {original_play.value} -> {audible.new_play.value} ({audible.reason})")

    return PresnapReadResult(
        identified_blitz=identified_blitz,
        changed_protection=changed_protection,
        audibled=audible.should_audible,
        new_play_type=audible.new_play,
        effectiveness_modifier=modifier,
        description=". ".join(notes) if notes else "Standard presnap execution",
    )


def get_hot_route_bonus(identified_blitz: bool, qb_decision_making: float) -> HotRouteBonus:
    """Hot routes against an identified blitz are high-percentage throws."""
    if not identified_blitz:
        return HotRouteBonus(0, 0)
    completion = 10 + (qb_decision_making - 50) / 5
    yards = 3 + (qb_decision_making - 50) / 10
    return HotRouteBonus(clamp(completion, 0, 20), clamp(yards, 0, 10))


def get_protection_change_bonus(changed_protection: bool, was_blitz: bool, qb_awareness: float) -> float:
    if not changed_protection:
        return 0
    if was_blitz:
        return 10 + (qb_awareness - 50) / 10
    # Sliding when nothing was coming
    return -2
