"""Application preferences service."""

import logging
from dataclasses import dataclass, fields, replace
from datetime import UTC, datetime
from typing import Protocol

from pydantic import TypeAdapter

from calorie_tracker.domain.preferences import AppPreferences

_logger = logging.getLogger(__name__)

_PREFERENCES_ADAPTER = TypeAdapter(AppPreferences)

_PREFERENCE_FIELDS = frozenset(f.name for f in fields(AppPreferences))


class PreferencesRepository(Protocol):
    """Persistence interface for app preferences."""

    def get_preferences(self) -> AppPreferences | None:
        """Return stored preferences, if any."""

    def save_preferences(self, preferences: AppPreferences) -> None:
        """Store the preferences."""

    def clear(self) -> None:
        """Delete stored preferences."""


@dataclass
class PreferencesService:
    """Service for reading and updating app preferences."""

    repository: PreferencesRepository

    def get(self) -> AppPreferences:
        return self.repository.get_preferences() or AppPreferences()

    def update(self, **changes: object) -> AppPreferences:
        """Apply field changes; unknown field names raise ValueError."""
        unknown = set(changes) - _PREFERENCE_FIELDS
        if unknown:
            raise ValueError(f"Unknown preferences: {', '.join(sorted(unknown))}")
        updated = replace(self.get(), **changes)
        self.repository.save_preferences(updated)
        return updated

    def reset(self) -> AppPreferences:
        self.repository.clear()
        _logger.info("Preferences reset")
        return AppPreferences()

    def complete_onboarding(self) -> AppPreferences:
        return self.update(is_first_launch=False, show_onboarding=False)

    def record_launch(self) -> AppPreferences:
        """Count a launch, stamping the install date on the first one."""
        current = self.get()
        now = datetime.now(tz=UTC)
        return self.update(
            launch_count=current.launch_count + 1,
            install_date=current.install_date or now,
            last_launch_date=now,
        )

    def should_show_feature(self, feature: str) -> bool:
        return feature not in self.get().seen_features

    def mark_feature_seen(self, feature: str) -> AppPreferences:
        current = self.get()
        if feature in current.seen_features:
            return current
        return self.update(seen_features=(*current.seen_features, feature))

    def export_data(self) -> dict[str, object]:
        return _PREFERENCES_ADAPTER.dump_python(self.get(), mode="json")

    def import_data(self, payload: dict[str, object]) -> AppPreferences:
        preferences = _PREFERENCES_ADAPTER.validate_python(payload)
        self.repository.save_preferences(preferences)
        return preferences
