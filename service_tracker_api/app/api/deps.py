"""
FastAPI dependencies.

The store, the signal dispatcher and the loaded ``AppState`` are
created once by ``create_app`` and kept on ``app.state``; routes
obtain them (and the services built on them) through these helpers.
"""

from fastapi import Depends, Request

from ..core.events import EventDispatcher
from ..core.store import KeyValueStore
from ..services.backup_service import BackupService
from ..services.missing_parts_service import MissingPartsService
from ..services.note_service import NoteService
from ..services.preferences_service import AppState, PreferencesService
from ..services.report_service import ReportService
from ..services.service_record_service import ServiceRecordService


def get_store(request: Request) -> KeyValueStore:
    return request.app.state.store


def get_dispatcher(request: Request) -> EventDispatcher:
    return request.app.state.dispatcher


def get_app_state(request: Request) -> AppState:
    return request.app.state.app_state


def get_preferences_service(request: Request) -> PreferencesService:
    return request.app.state.preferences


def get_service_records(
    store: KeyValueStore = Depends(get_store),
    dispatcher: EventDispatcher = Depends(get_dispatcher),
) -> ServiceRecordService:
    return ServiceRecordService(store, dispatcher)


def get_note_service(store: KeyValueStore = Depends(get_store)) -> NoteService:
    return NoteService(store)


def get_missing_parts_service(store: KeyValueStore = Depends(get_store)) -> MissingPartsService:
    return MissingPartsService(store)


def get_backup_service(
    store: KeyValueStore = Depends(get_store),
    dispatcher: EventDispatcher = Depends(get_dispatcher),
) -> BackupService:
    return BackupService(store, dispatcher)


def get_report_service() -> ReportService:
    return ReportService()
