"""Domain models for meal logging."""

from dataclasses import dataclass, fields
from datetime import date, datetime
from enum import Enum
from uuid import UUID

WATER_CUPS_PER_LITRE = 4.2

_NON_NEGATIVE_FIELDS = (
    "calories",
    "protein_g",
    "carbs_g",
    "fat_g",
    "fiber_g",
    "sugar_g",
    "sodium_mg",
    "water_ml",
)


class MealSource(Enum):
    """How a meal entry was created."""

    MANUAL_QUICK_ADD = "manual_quick_add"
    AI_DESCRIPTION = "ai_description"
    AI_IMAGE = "ai_image"


@dataclass(frozen=True)
class MealEntry:
    """A single logged meal with its nutrition values."""

    id: UUID
    logged_at: datetime
    calories: float
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0
    sugar_g: float = 0.0
    sodium_mg: float = 0.0
    water_ml: float = 0.0
    source: MealSource = MealSource.MANUAL_QUICK_ADD
    name: str | None = None

    def __post_init__(self) -> None:
        for name in _NON_NEGATIVE_FIELDS:
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value!r}")


@dataclass(frozen=True)
class IntakeTotals:
    """Summed nutrition for one calendar day."""

    day: date
    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0
    sugar_g: float = 0.0
    sodium_mg: float = 0.0
    water_ml: float = 0.0
    entry_count: int = 0

    @property
    def water_cups(self) -> float:
        """Water in display cups at 4.2 cups per litre."""
        return self.water_ml / 1000 * WATER_CUPS_PER_LITRE

    @property
    def has_entries(self) -> bool:
        """Return True when at least one meal was logged on the day."""
        return self.entry_count > 0

    def as_dict(self) -> dict[str, object]:
        """Return a JSON-friendly representation."""
        payload: dict[str, object] = {
            item.name: getattr(self, item.name) for item in fields(self)
        }
        payload["day"] = self.day.isoformat()
        payload["water_cups"] = self.water_cups
        return payload


@dataclass(frozen=True)
class MacroBreakdown:
    """Integer percentage share of each macro by grams."""

    protein_pct: int
    carbs_pct: int
    fat_pct: int

    def label(self) -> str:
        """Return a compact display label."""
        return f"P: {self.protein_pct}% | C: {self.carbs_pct}% | F: {self.fat_pct}%"
