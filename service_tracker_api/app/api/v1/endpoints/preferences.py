"""
Preference endpoints for API v1.

Preferences are the last opened page, the status filter of the
service list and the theme.  The ``/draft`` routes keep the
unfinished "new service" form.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status

from ...deps import get_app_state, get_preferences_service
from ....schemas.preferences import PreferencesRead, PreferencesUpdate, StatusFilter
from ....services.preferences_service import AppState, PreferencesService


router = APIRouter()


@router.get("/", response_model=PreferencesRead)
async def get_preferences(state: AppState = Depends(get_app_state)) -> PreferencesRead:
    return state.to_schema()


@router.put("/", response_model=PreferencesRead)
async def update_preferences(
    data: PreferencesUpdate,
    state: AppState = Depends(get_app_state),
    service: PreferencesService = Depends(get_preferences_service),
) -> PreferencesRead:
    return service.update(state, data).to_schema()


@router.post("/status-filter/{status_value}/toggle", response_model=PreferencesRead)
async def toggle_status_filter(
    status_value: StatusFilter,
    state: AppState = Depends(get_app_state),
    service: PreferencesService = Depends(get_preferences_service),
) -> PreferencesRead:
    """Select a status card; selecting the active one again shows all."""
    return service.toggle_status_filter(state, status_value).to_schema()


@router.get("/draft", response_model=Optional[Dict[str, Any]])
async def get_draft(service: PreferencesService = Depends(get_preferences_service)) -> Optional[Dict[str, Any]]:
    return service.load_draft()


@router.put("/draft", status_code=status.HTTP_204_NO_CONTENT)
async def save_draft(form_data: Dict[str, Any], service: PreferencesService = Depends(get_preferences_service)) -> None:
    service.save_draft(form_data)
    return None


@router.delete("/draft", status_code=status.HTTP_204_NO_CONTENT)
async def clear_draft(service: PreferencesService = Depends(get_preferences_service)) -> None:
    service.clear_draft()
    return None
