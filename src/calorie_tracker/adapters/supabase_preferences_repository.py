"""Supabase repository for app preferences."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from calorie_tracker.domain.preferences import AppPreferences
from calorie_tracker.services.preferences import PreferencesRepository

_PREFERENCES_KEY = "app"


@dataclass
class SupabasePreferencesRepository(PreferencesRepository):
    """Stores preferences as a single keyed row."""

    client: Client

    def get_preferences(self) -> AppPreferences | None:
        response = (
            self.client.table("app_preferences")
            .select(
                "key, is_first_launch, show_onboarding, launch_count, "
                "install_date, last_launch_date, seen_features"
            )
            .eq("key", _PREFERENCES_KEY)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return AppPreferences(
            is_first_launch=bool(row.get("is_first_launch", True)),
            show_onboarding=bool(row.get("show_onboarding", True)),
            launch_count=int(row.get("launch_count") or 0),
            install_date=_parse_datetime(row.get("install_date")),
            last_launch_date=_parse_datetime(row.get("last_launch_date")),
            seen_features=tuple(row.get("seen_features") or ()),
        )

    def save_preferences(self, preferences: AppPreferences) -> None:
        payload = {
            "key": _PREFERENCES_KEY,
            "is_first_launch": preferences.is_first_launch,
            "show_onboarding": preferences.show_onboarding,
            "launch_count": preferences.launch_count,
            "install_date": _iso(preferences.install_date),
            "last_launch_date": _iso(preferences.last_launch_date),
            "seen_features": list(preferences.seen_features),
        }
        self.client.table("app_preferences").upsert(payload).execute()

    def clear(self) -> None:
        self.client.table("app_preferences").delete().eq(
            "key", _PREFERENCES_KEY
        ).execute()


def _parse_datetime(value: object) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(str(value))


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
