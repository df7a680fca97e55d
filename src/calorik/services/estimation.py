"""Nutrition estimation from photos and free text using LLMs."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from calorik.domain.errors import EstimationError
from calorik.domain.foods import FoodEstimate, ImageEstimate

_logger = logging.getLogger(__name__)

_FOOD_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "calories": {"type": "number", "minimum": 0},
        "protein": {"type": "number", "minimum": 0},
        "carbs": {"type": "number", "minimum": 0},
        "fat": {"type": "number", "minimum": 0},
    },
    "required": ["name", "calories", "protein", "carbs", "fat"],
    "additionalProperties": False,
}

IMAGE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {"items": {"type": "array", "items": _FOOD_SCHEMA}},
    "required": ["items"],
    "additionalProperties": False,
}

TEXT_SCHEMA: dict[str, object] = _FOOD_SCHEMA

# formats accepted as image input by the Responses API
_IMAGE_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"\xff\xd8\xff", "image/jpeg"),
)


class EstimatorClient(Protocol):
    """Interface for LLM structured extraction."""

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
        """Return structured data matching the schema."""


@dataclass
class EstimationService:
    """Service that shapes estimation prompts and validates results."""

    client: EstimatorClient
    model: str
    reasoning_effort: str | None
    store: bool
    language: str = "English"

    async def from_image(self, image_bytes: bytes) -> list[FoodEstimate]:
        """Estimate every distinct food item visible in a photo."""
        prompt = (
            "Analyze the image and identify all distinct food items present. "
            "For each item, provide an estimated nutritional breakdown: "
            "calories (kcal), protein, carbs and fat (grams). "
            "If no food is identifiable, return an empty items list. "
            f"Provide the names in {self.language}."
        )
        raw = await self._extract(
            prompt=prompt,
            schema=IMAGE_SCHEMA,
            image_data_url=_image_data_url(image_bytes),
        )
        try:
            return ImageEstimate.model_validate(raw).items
        except ValueError as exc:
            _logger.warning("Image estimate failed validation: %s", exc)
            raise EstimationError("Estimator returned malformed data") from exc

    async def from_text(self, description: str) -> FoodEstimate | None:
        """Estimate a whole meal described in free text; None when unknown."""
        query = description.strip()
        if not query:
            return None
        prompt = (
            f'Analyze the following food description: "{query}". '
            "Provide an estimated nutritional breakdown for the entire meal "
            "described: calories (kcal), protein, carbs and fat (grams). "
            f"Name the meal with a short {self.language} summary. "
            "If you cannot determine the nutritional information, "
            "all values should be 0."
        )
        raw = await self._extract(prompt=prompt, schema=TEXT_SCHEMA)
        try:
            estimate = FoodEstimate.model_validate(raw)
        except ValueError as exc:
            _logger.warning("Text estimate failed validation: %s", exc)
            raise EstimationError("Estimator returned malformed data") from exc
        if estimate.calories <= 0 or not estimate.name.strip():
            return None
        return estimate

    async def _extract(
        self,
        *,
        prompt: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        try:
            return await self.client.extract(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                prompt=prompt,
                schema=schema,
                image_data_url=image_data_url,
            )
        except Exception as exc:
            _logger.exception("Nutrition estimator call failed")
            raise EstimationError("Nutrition estimator is unavailable") from exc


def _image_data_url(image_bytes: bytes) -> str:
    encoded = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{_image_mime_type(image_bytes)};base64,{encoded}"


def _image_mime_type(image_bytes: bytes) -> str:
    """Guess the MIME type of a photo from its magic bytes; JPEG if unknown."""
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    for signature, mime_type in _IMAGE_SIGNATURES:
        if image_bytes.startswith(signature):
            return mime_type
    return "image/jpeg"
