"""Food photo recognition using a vision LLM."""

import base64
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from calorie_tracker.domain.food import FoodItem, MealType
from calorie_tracker.domain.nutrition import MacroProfile
from calorie_tracker.domain.recognition import RecognitionExtract, RecognitionResult
from calorie_tracker.services.cache import Cache

_logger = logging.getLogger(__name__)

RECOGNITION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "items": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "label": {"type": "string"},
                    "confidence": {"type": "number", "minimum": 0.0, "maximum": 1.0},
                },
                "required": ["label", "confidence"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["items"],
    "additionalProperties": False,
}

RECOGNITION_PROMPT = (
    "Identify the dishes or foods in the image. "
    "Return each as a lowercase snake_case label (for example apple_pie or "
    "hamburger) with a confidence between 0 and 1."
)

# Estimated nutrition per serving for common recognition labels.
ESTIMATED_NUTRITION: dict[str, MacroProfile] = {
    "apple_pie": MacroProfile(calories=237, protein_g=2.4, fat_g=11, carbs_g=34),
    "baby_back_ribs": MacroProfile(calories=315, protein_g=25, fat_g=22, carbs_g=5),
    "baklava": MacroProfile(calories=330, protein_g=5, fat_g=23, carbs_g=29),
    "beef_carpaccio": MacroProfile(calories=158, protein_g=22, fat_g=7, carbs_g=2),
    "beef_tartare": MacroProfile(calories=201, protein_g=20, fat_g=12, carbs_g=3),
    "pizza": MacroProfile(calories=266, protein_g=11, fat_g=10, carbs_g=33),
    "hamburger": MacroProfile(calories=295, protein_g=17, fat_g=15, carbs_g=24),
    "sushi": MacroProfile(calories=156, protein_g=7, fat_g=5.5, carbs_g=20),
    "pasta": MacroProfile(calories=131, protein_g=5, fat_g=1.1, carbs_g=25),
    "salad": MacroProfile(calories=20, protein_g=1.5, fat_g=0.2, carbs_g=4),
    "chicken": MacroProfile(calories=239, protein_g=27, fat_g=14, carbs_g=0),
    "steak": MacroProfile(calories=250, protein_g=26, fat_g=15, carbs_g=0),
    "fish": MacroProfile(calories=206, protein_g=22, fat_g=12, carbs_g=0),
}
DEFAULT_NUTRITION = MacroProfile(calories=100, protein_g=5, fat_g=3, carbs_g=15)

HIGH_CONFIDENCE = 0.8
MEDIUM_CONFIDENCE = 0.6
LOW_CONFIDENCE = 0.4

BREAKFAST_BEFORE_HOUR = 10
LUNCH_BEFORE_HOUR = 15
DINNER_BEFORE_HOUR = 20


class RecognitionClient(Protocol):
    """Interface for LLM vision recognition."""

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured recognition data."""


@dataclass(frozen=True)
class RecognitionStats:
    """Summary of a set of recognition results."""

    total_results: int
    average_confidence: float
    high_confidence_count: int


@dataclass
class RecognitionService:
    """Service that recognizes food photos and turns labels into food items."""

    client: RecognitionClient
    cache: Cache
    model: str
    reasoning_effort: str | None
    store: bool
    min_confidence: float = 0.01
    nutrition_ttl_seconds: int = 86400

    async def recognize(
        self, image_bytes: bytes, top_k: int = 5
    ) -> list[RecognitionResult]:
        """Return up to ``top_k`` labels ranked by confidence."""
        if not image_bytes:
            raise ValueError("Image is empty")
        if top_k <= 0:
            raise ValueError("top_k must be positive")
        raw = await self.client.extract(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            image_data_url=_to_data_url(image_bytes),
            schema=RECOGNITION_SCHEMA,
            prompt=RECOGNITION_PROMPT,
        )
        extract = RecognitionExtract.model_validate(raw)
        results = [
            RecognitionResult(
                label=item.label, confidence=item.confidence, index=index
            )
            for index, item in enumerate(extract.items)
            if item.confidence > self.min_confidence
        ]
        results.sort(key=lambda result: result.confidence, reverse=True)
        _logger.info(
            "Recognition completed: candidates=%s kept=%s",
            len(extract.items),
            len(results[:top_k]),
        )
        for result in results[:top_k]:
            self.estimated_nutrition(result.label)
        return results[:top_k]

    def estimated_nutrition(self, label: str) -> MacroProfile:
        """Look up estimated nutrition, by exact then partial label match."""
        key = label.strip().lower()
        cache_key = f"recognition:nutrition:{key}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, MacroProfile):
            return cached
        nutrition = _lookup_nutrition(key)
        self.cache.set(cache_key, nutrition, ttl_seconds=self.nutrition_ttl_seconds)
        return nutrition

    def to_food_item(  # noqa: PLR0913
        self,
        result: RecognitionResult,
        meal_type: MealType | None = None,
        date: datetime | None = None,
        quantity: float | None = None,
        unit: str | None = None,
        custom_name: str | None = None,
    ) -> FoodItem:
        moment = date or datetime.now(tz=UTC)
        nutrition = self.estimated_nutrition(result.label)
        return FoodItem(
            name=custom_name or result.display_name,
            calories=nutrition.calories,
            protein_g=nutrition.protein_g,
            carbs_g=nutrition.carbs_g,
            fat_g=nutrition.fat_g,
            meal_type=meal_type or meal_type_for_hour(moment.hour),
            date=moment,
            quantity=quantity,
            unit=unit,
        )


def meal_type_for_hour(hour: int) -> MealType:
    if hour < BREAKFAST_BEFORE_HOUR:
        return MealType.BREAKFAST
    if hour < LUNCH_BEFORE_HOUR:
        return MealType.LUNCH
    if hour < DINNER_BEFORE_HOUR:
        return MealType.DINNER
    return MealType.SNACK


def confidence_description(confidence: float) -> str:
    if confidence >= HIGH_CONFIDENCE:
        return "High confidence"
    if confidence >= MEDIUM_CONFIDENCE:
        return "Medium confidence"
    if confidence >= LOW_CONFIDENCE:
        return "Low confidence"
    return "Very low confidence"


def recognition_stats(results: list[RecognitionResult]) -> RecognitionStats:
    if not results:
        return RecognitionStats(
            total_results=0, average_confidence=0.0, high_confidence_count=0
        )
    return RecognitionStats(
        total_results=len(results),
        average_confidence=sum(r.confidence for r in results) / len(results),
        high_confidence_count=sum(
            1 for r in results if r.confidence >= HIGH_CONFIDENCE
        ),
    )


def _lookup_nutrition(label: str) -> MacroProfile:
    if not label:
        return DEFAULT_NUTRITION
    if label in ESTIMATED_NUTRITION:
        return ESTIMATED_NUTRITION[label]
    for known, nutrition in ESTIMATED_NUTRITION.items():
        if known in label or label in known:
            return nutrition
    return DEFAULT_NUTRITION


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
