"""Meal analysis service using LLMs."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from energy_balance.domain.analysis import MealAnalysis, NutritionEstimate

_NUMBER = {"type": "number", "minimum": 0}

ANALYSIS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "items": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "confidence": {"type": "number", "minimum": 0.0, "maximum": 1.0},
                    "calories": _NUMBER,
                    "protein_g": _NUMBER,
                    "carbs_g": _NUMBER,
                    "fat_g": _NUMBER,
                    "fiber_g": _NUMBER,
                    "sugar_g": _NUMBER,
                    "sodium_mg": _NUMBER,
                    "water_ml": _NUMBER,
                    "notes": {"anyOf": [{"type": "string"}, {"type": "null"}]},
                },
                "required": [
                    "name",
                    "confidence",
                    "calories",
                    "protein_g",
                    "carbs_g",
                    "fat_g",
                    "fiber_g",
                    "sugar_g",
                    "sodium_mg",
                    "water_ml",
                    "notes",
                ],
                "additionalProperties": False,
            },
        }
    },
    "required": ["items"],
    "additionalProperties": False,
}

TEXT_PROMPT = (
    "Estimate the nutrition of the meal described below as a single item. "
    "Return calories, protein, carbs, fat, fiber and sugar in grams, sodium "
    "in milligrams, water in millilitres and a confidence (0-1).\n\n"
    "Meal: {description}"
)

IMAGE_PROMPT = (
    "Estimate the nutrition of the meal in the image as a single item. "
    "Return calories, protein, carbs, fat, fiber and sugar in grams, sodium "
    "in milligrams, water in millilitres and a confidence (0-1)."
)

_logger = logging.getLogger(__name__)


class MealAnalyzerClient(Protocol):
    """Interface for LLM meal analysis."""

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        """Return structured analysis data."""


@dataclass
class MealAnalysisService:
    """Service that prepares analysis prompts and validates results."""

    client: MealAnalyzerClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def analyze_text(self, description: str) -> NutritionEstimate | None:
        """Estimate nutrition for a free-text meal description."""
        raw = await self.client.extract(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            prompt=TEXT_PROMPT.format(description=description.strip()),
            schema=ANALYSIS_SCHEMA,
        )
        return _first_estimate(raw)

    async def analyze_image(self, image_bytes: bytes) -> NutritionEstimate | None:
        """Estimate nutrition for a meal photo."""
        raw = await self.client.extract(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            prompt=IMAGE_PROMPT,
            schema=ANALYSIS_SCHEMA,
            image_data_url=_to_data_url(image_bytes),
        )
        return _first_estimate(raw)


def _first_estimate(raw: dict[str, object]) -> NutritionEstimate | None:
    try:
        analysis = MealAnalysis.model_validate(raw)
    except ValidationError:
        _logger.warning("Meal analysis returned an invalid payload")
        return None
    if not analysis.items:
        _logger.warning("Meal analysis returned no result")
        return None
    return analysis.items[0]


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
