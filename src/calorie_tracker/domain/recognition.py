"""Models for food photo recognition results."""

from pydantic import BaseModel, Field


class RecognitionItem(BaseModel):
    """Single food label returned by the vision model."""

    label: str
    confidence: float = Field(ge=0.0, le=1.0)


class RecognitionExtract(BaseModel):
    """Structured output of the vision model."""

    items: list[RecognitionItem]


class RecognitionResult(BaseModel):
    """Ranked recognition result."""

    label: str
    confidence: float = Field(ge=0.0, le=1.0)
    index: int = Field(ge=0)

    @property
    def display_name(self) -> str:
        """Human readable label, e.g. ``apple_pie`` -> ``Apple Pie``."""
        words = self.label.replace("_", " ").split()
        return " ".join(word.capitalize() for word in words)

    @property
    def confidence_percentage(self) -> str:
        return f"{self.confidence * 100:.1f}%"
