"""
Service layer for preferences and the new-service draft.

``AppState`` groups the values remembered between sessions: the last
page, the status filter of the service list and the theme.  It is
loaded once with ``PreferencesService.load_state`` and handed to
whoever needs it; every change is written back key by key.

The service also keeps the in-progress "new service" form so that an
interrupted entry can be resumed.  The draft is cleared when the
service is saved or the form is cancelled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..core import events
from ..core.events import EventDispatcher
from ..core.exceptions import InvalidInputError
from ..core.store import (
    BACKGROUND_IMAGE_KEY,
    DRAFT_KEY,
    GRADIENT_COLORS_KEY,
    LAST_PAGE_KEY,
    OVERLAY_COLOR_KEY,
    OVERLAY_OPACITY_KEY,
    STATUS_FILTER_KEY,
    KeyValueStore,
)
from ..schemas.preferences import GradientColors, PreferencesRead, PreferencesUpdate, ThemeSettings
from ..utils.phone import strip_annotation_markers
from .service_record_service import phone_from_input


logger = logging.getLogger(__name__)

DEFAULT_PAGE = "dashboard"
NEW_SERVICE_PAGE = "newService"
STATUS_FILTERS = ("all", "ongoing", "workshop", "completed")


@dataclass
class AppState:
    last_page: str = DEFAULT_PAGE
    status_filter: str = "all"
    theme: ThemeSettings = field(default_factory=ThemeSettings)

    def to_schema(self) -> PreferencesRead:
        return PreferencesRead(last_page=self.last_page, status_filter=self.status_filter, theme=self.theme)


class PreferencesService:
    """Load and persist ``AppState`` and the new-service draft."""

    def __init__(self, store: KeyValueStore, dispatcher: Optional[EventDispatcher] = None) -> None:
        self.store = store
        if dispatcher is not None:
            dispatcher.subscribe(events.NAVIGATE, self.set_last_page)
            dispatcher.subscribe(events.ADD_NEW_SERVICE, lambda _payload: self.set_last_page(NEW_SERVICE_PAGE))

    def load_state(self) -> AppState:
        status_filter = self.store.get(STATUS_FILTER_KEY) or "all"
        if status_filter not in STATUS_FILTERS:
            logger.warning("Ignoring stored status filter %r", status_filter)
            status_filter = "all"
        return AppState(
            last_page=self.store.get(LAST_PAGE_KEY) or DEFAULT_PAGE,
            status_filter=status_filter,
            theme=self.load_theme(),
        )

    def load_theme(self) -> ThemeSettings:
        theme = ThemeSettings()
        image_url = self.store.get(BACKGROUND_IMAGE_KEY)
        if image_url:
            theme.background_image_url = image_url
        gradient = self.store.load_json(GRADIENT_COLORS_KEY)
        if isinstance(gradient, dict):
            try:
                theme.gradient_colors = GradientColors.model_validate(gradient)
            except ValueError:
                logger.warning("Ignoring stored gradient colors %r", gradient)
        overlay_color = self.store.get(OVERLAY_COLOR_KEY)
        if overlay_color:
            theme.overlay_color = overlay_color
        opacity = self.store.get(OVERLAY_OPACITY_KEY)
        if opacity:
            try:
                theme.overlay_opacity = min(max(float(opacity), 0.0), 1.0)
            except ValueError:
                logger.warning("Ignoring stored overlay opacity %r", opacity)
        return theme

    def set_last_page(self, page: Any) -> None:
        if page:
            self.store.set(LAST_PAGE_KEY, str(page))

    def set_status_filter(self, status_filter: str) -> None:
        if status_filter not in STATUS_FILTERS:
            raise InvalidInputError(f"Geçersiz durum filtresi: {status_filter}")
        self.store.set(STATUS_FILTER_KEY, status_filter)

    def toggle_status_filter(self, state: AppState, status: str) -> AppState:
        """Select ``status``; selecting the active status again shows all."""
        state.status_filter = "all" if state.status_filter == status else status
        self.set_status_filter(state.status_filter)
        return state

    def update(self, state: AppState, data: PreferencesUpdate) -> AppState:
        changes = data.model_dump(exclude_unset=True)
        if changes.get("last_page"):
            state.last_page = changes["last_page"]
            self.set_last_page(state.last_page)
        if changes.get("status_filter"):
            state.status_filter = changes["status_filter"]
            self.set_status_filter(state.status_filter)
        if "background_image_url" in changes:
            url = changes["background_image_url"] or ""
            state.theme.background_image_url = url
            if url:
                self.store.set(BACKGROUND_IMAGE_KEY, url)
            else:
                self.store.remove(BACKGROUND_IMAGE_KEY)
        if data.gradient_colors is not None:
            state.theme.gradient_colors = data.gradient_colors
            self.store.save_json(GRADIENT_COLORS_KEY, data.gradient_colors.model_dump())
        if changes.get("overlay_color"):
            state.theme.overlay_color = changes["overlay_color"]
            self.store.set(OVERLAY_COLOR_KEY, state.theme.overlay_color)
        if changes.get("overlay_opacity") is not None:
            state.theme.overlay_opacity = changes["overlay_opacity"]
            self.store.set(OVERLAY_OPACITY_KEY, str(state.theme.overlay_opacity))
        return state

    def save_draft(self, form_data: Dict[str, Any]) -> bool:
        return self.store.save_json(DRAFT_KEY, form_data)

    def load_draft(self) -> Optional[Dict[str, Any]]:
        """Return the saved draft with its phone and address cleaned, if any."""
        draft = self.store.load_json(DRAFT_KEY)
        if not isinstance(draft, dict):
            return None
        raw_phone = str(
            draft.get("rawCustomerPhoneInput") or draft.get("displayPhoneNumber") or draft.get("customerPhone") or ""
        )
        cleaned = dict(draft)
        cleaned["rawCustomerPhoneInput"] = raw_phone
        cleaned["customerPhone"] = phone_from_input(raw_phone)
        cleaned["address"] = strip_annotation_markers(str(draft.get("address") or ""))
        cleaned["phoneNumberNote"] = draft.get("phoneNumberNote") or ""
        cleaned["deposit"] = draft.get("deposit") or 0
        return cleaned

    def clear_draft(self) -> None:
        self.store.remove(DRAFT_KEY)
