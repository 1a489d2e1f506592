"""Pydantic models for HTTP request payloads."""

from datetime import date, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

from energy_balance.domain.activity import ActiveEnergySample
from energy_balance.domain.goals import GoalDirection, GoalParameters
from energy_balance.domain.meals import MealEntry, MealSource
from energy_balance.domain.profile import BiologicalSex, ProfileReading
from energy_balance.services.user_settings import is_known_timezone


def _validate_timezone(value: str) -> str:
    if not is_known_timezone(value):
        raise ValueError(f"Unknown timezone: {value}")
    return value


class ProfilePayload(BaseModel):
    """Body attributes; any missing field falls back to a default."""

    weight_kg: float | None = None
    height_cm: float | None = None
    age_years: float | None = None
    sex: BiologicalSex | None = None

    def to_domain(self) -> ProfileReading:
        """Convert to a domain reading."""
        return ProfileReading(
            weight_kg=self.weight_kg,
            height_cm=self.height_cm,
            age_years=self.age_years,
            sex=self.sex,
        )


class GoalParametersPayload(BaseModel):
    """User-adjustable goal parameters."""

    direction: GoalDirection = GoalDirection.LOSE
    weekly_rate_kg: float = Field(default=0.5, ge=0.25, le=1.0)
    explicit_calorie_goal: float | None = Field(default=None, gt=0)
    explicit_deficit_goal: float | None = Field(default=None, ge=0)
    target_weight_kg: float | None = Field(default=None, gt=0)

    def to_domain(self) -> GoalParameters:
        """Convert to domain goal parameters."""
        return GoalParameters(
            direction=self.direction,
            weekly_rate_kg=self.weekly_rate_kg,
            explicit_calorie_goal=self.explicit_calorie_goal,
            explicit_deficit_goal=self.explicit_deficit_goal,
            target_weight_kg=self.target_weight_kg,
        )

    @classmethod
    def from_domain(cls, params: GoalParameters) -> "GoalParametersPayload":
        """Build a payload from domain goal parameters."""
        return cls(
            direction=params.direction,
            weekly_rate_kg=params.weekly_rate_kg,
            explicit_calorie_goal=params.explicit_calorie_goal,
            explicit_deficit_goal=params.explicit_deficit_goal,
            target_weight_kg=params.target_weight_kg,
        )


class MealEntryPayload(BaseModel):
    """A logged meal as sent by the client."""

    id: UUID = Field(default_factory=uuid4)
    logged_at: datetime
    calories: float = Field(ge=0)
    protein_g: float = Field(default=0.0, ge=0)
    carbs_g: float = Field(default=0.0, ge=0)
    fat_g: float = Field(default=0.0, ge=0)
    fiber_g: float = Field(default=0.0, ge=0)
    sugar_g: float = Field(default=0.0, ge=0)
    sodium_mg: float = Field(default=0.0, ge=0)
    water_ml: float = Field(default=0.0, ge=0)
    source: MealSource = MealSource.MANUAL_QUICK_ADD
    name: str | None = None

    def to_domain(self) -> MealEntry:
        """Convert to a domain meal entry."""
        return MealEntry(**self.model_dump())


class ActiveEnergyPayload(BaseModel):
    """Measured active calories for a day."""

    day: date
    active_kcal: float = Field(ge=0)

    def to_domain(self) -> ActiveEnergySample:
        """Convert to a domain sample."""
        return ActiveEnergySample(day=self.day, active_kcal=self.active_kcal)


class SnapshotRequest(BaseModel):
    """Inputs for a stateless snapshot computation."""

    today: date
    timezone: str = "UTC"
    profile: ProfilePayload = Field(default_factory=ProfilePayload)
    goals: GoalParametersPayload = Field(default_factory=GoalParametersPayload)
    entries: list[MealEntryPayload] = []
    samples: list[ActiveEnergyPayload] = []
    workout_days: int | None = Field(default=None, ge=0)

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        return _validate_timezone(value)


class QuickAddRequest(BaseModel):
    """Manually entered meal."""

    calories: float = Field(ge=0)
    protein_g: float = Field(default=0.0, ge=0)
    carbs_g: float = Field(default=0.0, ge=0)
    fat_g: float = Field(default=0.0, ge=0)
    name: str | None = None
    logged_at: datetime | None = None


class AnalyzeRequest(BaseModel):
    """Free-text meal description to analyze and log."""

    description: str = Field(min_length=1)
    logged_at: datetime | None = None


class TimezoneRequest(BaseModel):
    """IANA timezone name used for local calendar days."""

    timezone: str

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        return _validate_timezone(value)


class ProfileUpdateRequest(BaseModel):
    """Hand-entered body attributes; omitted fields keep other sources."""

    weight_kg: float | None = Field(default=None, gt=0)
    height_cm: float | None = Field(default=None, gt=0)
    age_years: float | None = Field(default=None, gt=0)
    sex: BiologicalSex | None = None

    def to_domain(self) -> ProfileReading:
        """Convert to a domain reading."""
        return ProfileReading(
            weight_kg=self.weight_kg,
            height_cm=self.height_cm,
            age_years=self.age_years,
            sex=self.sex,
        )
