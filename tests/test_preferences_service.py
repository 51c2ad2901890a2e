"""Tests for the preferences service."""

import pytest

from calorie_tracker.domain.preferences import AppPreferences
from calorie_tracker.services.preferences import PreferencesService
from tests.conftest import InMemoryPreferencesRepository


def _service() -> PreferencesService:
    return PreferencesService(InMemoryPreferencesRepository())


def test_defaults_before_anything_is_stored() -> None:
    preferences = _service().get()

    assert preferences == AppPreferences()
    assert preferences.is_first_launch
    assert preferences.launch_count == 0


def test_record_launch_counts_and_keeps_install_date() -> None:
    service = _service()

    first = service.record_launch()
    second = service.record_launch()

    assert second.launch_count == 2
    assert first.install_date is not None
    assert second.install_date == first.install_date
    assert second.last_launch_date is not None
    assert second.last_launch_date >= first.last_launch_date


def test_complete_onboarding() -> None:
    service = _service()

    preferences = service.complete_onboarding()

    assert not preferences.is_first_launch
    assert not preferences.show_onboarding
    assert service.get() == preferences


def test_update_rejects_unknown_fields() -> None:
    with pytest.raises(ValueError, match="theme"):
        _service().update(theme="dark")


def test_feature_discovery() -> None:
    service = _service()

    assert service.should_show_feature("photo_recognition")
    service.mark_feature_seen("photo_recognition")
    service.mark_feature_seen("photo_recognition")

    assert not service.should_show_feature("photo_recognition")
    assert service.get().seen_features == ("photo_recognition",)


def test_reset_restores_defaults() -> None:
    service = _service()
    service.complete_onboarding()

    assert service.reset() == AppPreferences()
    assert service.get() == AppPreferences()


def test_export_import_roundtrip() -> None:
    service = _service()
    service.record_launch()
    service.mark_feature_seen("stats")
    exported = service.export_data()

    restored = _service()
    imported = restored.import_data(exported)

    assert imported == service.get()
    assert restored.get().seen_features == ("stats",)
