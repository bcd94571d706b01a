"""
Tests for remembered preferences and the new-service draft.
"""
import pytest

from service_tracker_api.app.core import events
from service_tracker_api.app.core.exceptions import InvalidInputError
from service_tracker_api.app.core.store import (
    DRAFT_KEY,
    GRADIENT_COLORS_KEY,
    LAST_PAGE_KEY,
    OVERLAY_OPACITY_KEY,
    STATUS_FILTER_KEY,
)
from service_tracker_api.app.schemas.preferences import GradientColors, PreferencesUpdate
from service_tracker_api.app.services.preferences_service import PreferencesService


@pytest.fixture
def preferences(store, dispatcher):
    return PreferencesService(store, dispatcher)


class TestState:
    def test_defaults(self, preferences):
        state = preferences.load_state()
        assert state.last_page == "dashboard"
        assert state.status_filter == "all"
        assert state.theme.overlay_opacity == 0.3
        assert state.theme.gradient_colors.color1 == "#2f3d4b"

    def test_stored_values_are_loaded(self, preferences, store):
        store.set(LAST_PAGE_KEY, "notes")
        store.set(STATUS_FILTER_KEY, "workshop")
        store.save_json(GRADIENT_COLORS_KEY, {"color1": "#111111", "color2": "#222222"})
        store.set(OVERLAY_OPACITY_KEY, "0.6")
        state = preferences.load_state()
        assert state.last_page == "notes"
        assert state.status_filter == "workshop"
        assert state.theme.gradient_colors.color2 == "#222222"
        assert state.theme.overlay_opacity == 0.6

    def test_bad_stored_values_fall_back(self, preferences, store):
        store.set(STATUS_FILTER_KEY, "lost")
        store.set(OVERLAY_OPACITY_KEY, "dark")
        state = preferences.load_state()
        assert state.status_filter == "all"
        assert state.theme.overlay_opacity == 0.3

    def test_toggle_status_filter(self, preferences, store):
        state = preferences.load_state()
        preferences.toggle_status_filter(state, "completed")
        assert state.status_filter == "completed"
        assert store.get(STATUS_FILTER_KEY) == "completed"
        preferences.toggle_status_filter(state, "completed")
        assert state.status_filter == "all"

    def test_invalid_status_filter(self, preferences):
        with pytest.raises(InvalidInputError):
            preferences.set_status_filter("lost")

    def test_update_theme(self, preferences, store):
        state = preferences.load_state()
        preferences.update(
            state,
            PreferencesUpdate(
                backgroundImageUrl="https://example.com/bg.jpg",
                gradientColors=GradientColors(color1="#000000", color2="#ffffff"),
                overlayOpacity=0.5,
            ),
        )
        reloaded = preferences.load_state()
        assert reloaded.theme.background_image_url == "https://example.com/bg.jpg"
        assert reloaded.theme.gradient_colors.color2 == "#ffffff"
        assert reloaded.theme.overlay_opacity == 0.5

        preferences.update(state, PreferencesUpdate(backgroundImageUrl=""))
        assert preferences.load_state().theme.background_image_url == ""


class TestSignals:
    def test_navigation_is_remembered(self, preferences, store, dispatcher):
        dispatcher.emit(events.NAVIGATE, "reports")
        assert store.get(LAST_PAGE_KEY) == "reports"
        dispatcher.emit(events.ADD_NEW_SERVICE)
        assert store.get(LAST_PAGE_KEY) == "newService"


class TestDraft:
    def test_draft_round_trip_is_cleaned(self, preferences, store):
        preferences.save_draft({"rawCustomerPhoneInput": "// [1] +90 534 682 22 82", "address": "// [2] Moda //"})
        draft = preferences.load_draft()
        assert draft["customerPhone"] == "05346822282"
        assert draft["address"] == "Moda"
        assert draft["deposit"] == 0

    def test_no_draft(self, preferences, store):
        assert preferences.load_draft() is None
        store.set(DRAFT_KEY, "[1, 2]")
        assert preferences.load_draft() is None

    def test_clear_draft(self, preferences, store):
        preferences.save_draft({"address": "Moda"})
        preferences.clear_draft()
        assert store.get(DRAFT_KEY) is None
