"""Gameplay injury enumerations."""

from enum import Enum


class InjuryType(Enum):
    """Injuries that can occur on a play."""

    CONCUSSION = "concussion"
    ANKLE = "ankle"
    KNEE_MINOR = "knee_minor"
    KNEE_ACL = "knee_acl"
    KNEE_MCL = "knee_mcl"
    HAMSTRING = "hamstring"
    SHOULDER = "shoulder"
    BACK = "back"
    HAND = "hand"
    FOOT = "foot"
    RIBS = "ribs"

    @property
    def display(self) -> str:
        return {
            InjuryType.CONCUSSION: "Concussion",
            InjuryType.ANKLE: "Ankle",
            InjuryType.KNEE_MINOR: "Knee",
            InjuryType.KNEE_ACL: "Torn ACL",
            InjuryType.KNEE_MCL: "Torn MCL",
            InjuryType.HAMSTRING: "Hamstring",
            InjuryType.SHOULDER: "Shoulder",
            InjuryType.BACK: "Back",
            InjuryType.HAND: "Hand",
            InjuryType.FOOT: "Foot",
            InjuryType.RIBS: "Ribs",
        }[self]


class InjurySeverity(Enum):
    """Severity tiers, mildest first."""

    MINOR = "minor"
    MODERATE = "moderate"
    SIGNIFICANT = "significant"
    SEVERE = "severe"
    SEASON_ENDING = "season_ending"

    @property
    def display(self) -> str:
        return {
            InjurySeverity.MINOR: "Day-to-Day",
            InjurySeverity.MODERATE: "Out",
            InjurySeverity.SIGNIFICANT: "Out (Extended)",
            InjurySeverity.SEVERE: "IR Candidate",
            InjurySeverity.SEASON_ENDING: "Season-Ending",
        }[self]

    @property
    def can_leave_permanent_effects(self) -> bool:
        return self in (InjurySeverity.SEVERE, InjurySeverity.SEASON_ENDING)


class PermanentInjuryEffect(Enum):
    """Lasting consequences of a serious injury."""

    SPEED_REDUCTION = "speed_reduction"
    AGILITY_REDUCTION = "agility_reduction"
    REINJURY_RISK = "reinjury_risk"
