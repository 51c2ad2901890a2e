"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from calorie_tracker.adapters.openai_recognition_client import (
    OpenAIRecognitionClient,
)
from calorie_tracker.adapters.supabase_food_log_repository import (
    SupabaseFoodLogRepository,
)
from calorie_tracker.adapters.supabase_preferences_repository import (
    SupabasePreferencesRepository,
)
from calorie_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from calorie_tracker.config import Settings
from calorie_tracker.services.cache import InMemoryCache
from calorie_tracker.services.food_database import FoodDatabaseService
from calorie_tracker.services.food_log import FoodLogService
from calorie_tracker.services.preferences import PreferencesService
from calorie_tracker.services.profiles import ProfileService
from calorie_tracker.services.recognition import RecognitionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    food_log_service: FoodLogService
    food_database_service: FoodDatabaseService
    preferences_service: PreferencesService
    recognition_service: RecognitionService | None
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    food_log_service = FoodLogService(SupabaseFoodLogRepository(supabase_client))
    preferences_service = PreferencesService(
        SupabasePreferencesRepository(supabase_client)
    )

    recognition_client: OpenAIRecognitionClient | None = None
    recognition_service: RecognitionService | None = None
    if resolved_settings.openai_api_key:
        recognition_client = OpenAIRecognitionClient.create(
            resolved_settings.openai_api_key
        )
        recognition_service = RecognitionService(
            client=recognition_client,
            cache=InMemoryCache(max_entries=resolved_settings.recognition_cache_size),
            model=resolved_settings.openai_model,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
            store=resolved_settings.openai_store,
            min_confidence=resolved_settings.recognition_min_confidence,
        )

    async def close_resources() -> None:
        if recognition_client is not None:
            await recognition_client.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        food_log_service=food_log_service,
        food_database_service=FoodDatabaseService(),
        preferences_service=preferences_service,
        recognition_service=recognition_service,
        close_resources=close_resources,
    )
