"""Domain models for body profiles."""

from dataclasses import dataclass, field
from enum import Enum


class BiologicalSex(Enum):
    """Biological sex used by the Mifflin-St Jeor equation."""

    MALE = "male"
    FEMALE = "female"


class InvalidProfileError(ValueError):
    """Raised when a profile holds a physically impossible measurement."""

    def __init__(self, field_name: str, value: float) -> None:
        self.field_name = field_name
        self.value = value
        super().__init__(f"Profile {field_name} must be positive, got {value!r}")


@dataclass(frozen=True)
class ProfileReading:
    """Optional body attributes from the health-data provider or manual entry."""

    weight_kg: float | None = None
    height_cm: float | None = None
    age_years: float | None = None
    sex: BiologicalSex | None = None


@dataclass(frozen=True)
class Profile:
    """Resolved body profile used by every energy calculation."""

    weight_kg: float
    height_cm: float
    age_years: float
    sex: BiologicalSex
    measured_fields: frozenset[str] = field(default_factory=frozenset)

    def is_measured(self, field_name: str) -> bool:
        """Return True when the field came from measured health data."""
        return field_name in self.measured_fields
