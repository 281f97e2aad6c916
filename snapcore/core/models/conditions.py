"""Per-game conditions: weather."""

from dataclasses import dataclass

from snapcore.core.enums import Precipitation


@dataclass(frozen=True)
class WeatherCondition:
    """Weather at kickoff. Immutable for the whole game."""

    temperature: int = 70  # Fahrenheit
    precipitation: Precipitation = Precipitation.NONE
    wind: int = 5  # mph
    is_dome: bool = False

    @classmethod
    def default(cls) -> "WeatherCondition":
        """Mild outdoor conditions."""
        return cls(temperature=70, precipitation=Precipitation.NONE, wind=5, is_dome=False)

    @classmethod
    def dome(cls) -> "WeatherCondition":
        """Climate-controlled stadium."""
        return cls(temperature=72, precipitation=Precipitation.NONE, wind=0, is_dome=True)

    @property
    def is_wet(self) -> bool:
        return not self.is_dome and self.precipitation != Precipitation.NONE

    @property
    def is_bad(self) -> bool:
        """Conditions that push play callers toward the run."""
        return self.precipitation != Precipitation.NONE or self.wind > 15
