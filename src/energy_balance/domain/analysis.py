"""Models for structured meal analysis results."""

from pydantic import BaseModel, Field


class NutritionEstimate(BaseModel):
    """Nutrition values estimated for a single described or pictured meal."""

    name: str
    confidence: float = Field(ge=0.0, le=1.0)
    calories: float = Field(ge=0.0)
    protein_g: float = Field(ge=0.0)
    carbs_g: float = Field(ge=0.0)
    fat_g: float = Field(ge=0.0)
    fiber_g: float = Field(default=0.0, ge=0.0)
    sugar_g: float = Field(default=0.0, ge=0.0)
    sodium_mg: float = Field(default=0.0, ge=0.0)
    water_ml: float = Field(default=0.0, ge=0.0)
    notes: str | None = None


class MealAnalysis(BaseModel):
    """Structured output for meal analysis."""

    items: list[NutritionEstimate]
