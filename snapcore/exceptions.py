"""Exceptions raised by snapcore.

Play resolution itself never raises: degenerate inputs fall back to
neutral values. These errors only surface when an engine is configured
with data it cannot use.
"""


class SnapcoreError(Exception):
    """Base class for snapcore errors."""


class ConfigurationError(SnapcoreError):
    """Raised when engine configuration or a tuning table is invalid."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


class RosterValidationError(SnapcoreError):
    """Raised when a team state is missing players a play requires."""

    def __init__(self, team_name: str, problems: list[str]):
        self.team_name = team_name
        self.problems = problems
        super().__init__(f"{team_name}: {', '.join(problems)}")
