"""User profile domain models."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class Gender(StrEnum):
    """Biological sex used by the energy equations."""

    MALE = "male"
    FEMALE = "female"

    @classmethod
    def parse(cls, value: "Gender | str") -> "Gender":
        """Return the gender for a raw value, raising for anything else."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError('Gender must be "male" or "female"') from None


class ActivityLevel(StrEnum):
    """Habitual activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"

    @classmethod
    def parse(cls, value: "ActivityLevel | str") -> "ActivityLevel":
        """Return the activity level, falling back to sedentary when unknown."""
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.SEDENTARY

    @classmethod
    def is_known(cls, value: object) -> bool:
        return str(value).strip().lower() in {level.value for level in cls}


@dataclass(frozen=True)
class UserProfile:
    """Biometric snapshot of the person using the app."""

    name: str
    age: int
    gender: Gender
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel
    id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
