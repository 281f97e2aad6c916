"""Position weight tables for unit composite ratings.

All positional importance weights live in one versioned, validated model
so tuning can swap a table in without touching the aggregation code.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from snapcore.exceptions import ConfigurationError

OL_KEYS = ("LT", "LG", "C", "RG", "RT")


class UnitWeakLinkMultipliers(BaseModel):
    """Share of the raw weak-link penalty each unit actually pays."""

    pass_protection: float = Field(1.0, ge=0, le=2)
    run_blocking: float = Field(1.0, ge=0, le=2)
    # Receivers can be avoided, so a weak one hurts less
    receiving: float = Field(0.3, ge=0, le=2)
    rushing: float = Field(0.5, ge=0, le=2)
    pass_rush: float = Field(0.4, ge=0, le=2)
    run_stopping: float = Field(0.6, ge=0, le=2)
    # QBs target the weak corner
    pass_coverage: float = Field(0.7, ge=0, le=2)


class PositionWeightTables(BaseModel):
    """Versioned positional importance weights for every unit."""

    version: str = "1.0"

    # LT protects the blind side; guards matter least
    pass_protection: dict[str, float] = Field(
        default_factory=lambda: {"LT": 1.4, "RT": 1.2, "C": 1.1, "LG": 1.0, "RG": 1.0}
    )
    # Interior anchors gap runs
    run_blocking: dict[str, float] = Field(
        default_factory=lambda: {"C": 1.3, "LG": 1.2, "RG": 1.2, "LT": 1.0, "RT": 1.0}
    )
    run_left: dict[str, float] = Field(
        default_factory=lambda: {"LT": 1.4, "LG": 1.3, "C": 1.2, "RG": 0.8, "RT": 0.6}
    )
    run_right: dict[str, float] = Field(
        default_factory=lambda: {"LT": 0.6, "LG": 0.8, "C": 1.2, "RG": 1.3, "RT": 1.4}
    )

    pass_rush: dict[str, float] = Field(
        default_factory=lambda: {"DE": 1.4, "DT": 1.1, "OLB": 1.2, "ILB": 0.6}
    )
    run_stopping: dict[str, float] = Field(
        default_factory=lambda: {"DT": 1.4, "DE": 1.1, "ILB": 1.3, "OLB": 1.0, "SS": 0.8}
    )
    pass_coverage: dict[str, float] = Field(
        default_factory=lambda: {"CB": 1.5, "FS": 1.2, "SS": 1.0, "ILB": 0.7, "OLB": 0.8}
    )

    # Fallbacks for positions missing from a table
    default_weight: float = Field(1.0, gt=0)
    linebacker_coverage_default: float = Field(0.7, gt=0)

    # Top receivers by rating, primary first
    receiving_depth: list[float] = Field(default_factory=lambda: [0.5, 0.3, 0.2])
    rb_receiving_discount: float = Field(0.85, gt=0, le=1)
    rushing_rb_share: float = Field(0.6, ge=0, le=1)

    pass_rush_unit_size: int = Field(4, ge=1)
    run_stopping_unit_size: int = Field(7, ge=1)
    pass_coverage_unit_size: int = Field(5, ge=1)

    weak_link: UnitWeakLinkMultipliers = Field(default_factory=UnitWeakLinkMultipliers)

    @model_validator(mode="after")
    def _check_tables(self) -> "PositionWeightTables":
        for name in ("pass_protection", "run_blocking", "run_left", "run_right"):
            table = getattr(self, name)
            missing = [k for k in OL_KEYS if k not in table]
            if missing:
                raise ValueError(f"{name} is missing weights for {', '.join(missing)}")
        for name in ("pass_protection", "run_blocking", "run_left", "run_right",
                     "pass_rush", "run_stopping", "pass_coverage"):
            if any(w <= 0 for w in getattr(self, name).values()):
                raise ValueError(f"{name} weights must be positive")
        if not self.receiving_depth or any(w <= 0 for w in self.receiving_depth):
            raise ValueError("receiving_depth needs at least one positive weight")
        return self

    def run_blocking_for(self, direction: Optional[str]) -> dict[str, float]:
        """Run-blocking weights for a play direction (left, right, or middle)."""
        if direction == "left":
            return self.run_left
        if direction == "right":
            return self.run_right
        return self.run_blocking


def load_weight_tables(data: dict[str, Any]) -> PositionWeightTables:
    """Build weight tables from plain data, raising ConfigurationError if invalid."""
    try:
        return PositionWeightTables.model_validate(data)
    except ValidationError as e:
        errors = []
        for err in e.errors():
            location = ".".join(str(part) for part in err["loc"])
            errors.append(f"{location}: {err['msg']}" if location else err["msg"])
        raise ConfigurationError(errors) from e


DEFAULT_WEIGHT_TABLES = PositionWeightTables()
