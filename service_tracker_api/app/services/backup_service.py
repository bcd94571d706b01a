"""
Service layer for manual backup and restore.

Export writes every service record (reduced to the fields below), the
notes and the missing-parts list into one JSON document::

    {"services": [{id, customerPhone, address, color, cost, expenses,
                   status, createdAt, updatedAt}, ...],
     "notes": [...], "missingParts": [...], "exportDate": "..."}

Import accepts that document either directly or nested under a
``data`` key.  Each array present in the document replaces the stored
one wholesale; absent arrays are left alone.  The whole document is
validated before anything is written and all arrays are written in a
single transaction, so a bad file never leaves a partial restore.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Union

from pydantic import ValidationError

from ..core import events
from ..core.events import EventDispatcher
from ..core.exceptions import BackupImportError
from ..core.store import MISSING_PARTS_KEY, NOTES_KEY, SERVICES_KEY, KeyValueStore, StoreError
from ..schemas.backup import BackupDocument, BackupPayload, ExportedService, ImportResult
from ..utils.formatting import to_utc_iso
from .missing_parts_service import MissingPartsService
from .note_service import NoteService
from .service_record_service import ServiceRecordService


logger = logging.getLogger(__name__)

MSG_INVALID_FORMAT = "Dosya formatı geçersiz"
MSG_IMPORT_FAILED = "Dosya yüklenirken bir hata oluştu"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BackupService:
    def __init__(
        self,
        store: KeyValueStore,
        dispatcher: EventDispatcher | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.store = store
        self.dispatcher = dispatcher
        self.clock = clock

    def export_data(self) -> BackupPayload:
        records = ServiceRecordService(self.store).list_services()
        services = [
            ExportedService(
                id=record.id,
                customer_phone=record.customer_phone,
                address=record.address,
                color=record.color.value,
                cost=record.cost,
                expenses=record.expenses,
                status=record.status.value,
                created_at=record.created_at,
                updated_at=record.updated_at,
            )
            for record in records
        ]
        payload = BackupPayload(
            services=services,
            notes=NoteService(self.store).list_notes(),
            missing_parts=MissingPartsService(self.store).list_parts(),
            export_date=to_utc_iso(self.clock()),
        )
        logger.info("Exported %d services and %d notes", len(payload.services), len(payload.notes))
        return payload

    @staticmethod
    def parse_document(source: Union[str, bytes, Mapping[str, Any]]) -> BackupDocument:
        """Decode and validate an export document.

        Raises:
            BackupImportError: If the text is not JSON or the document
                does not have the expected shape.
        """
        if isinstance(source, (str, bytes)):
            try:
                data = json.loads(source)
            except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                raise BackupImportError(MSG_INVALID_FORMAT) from exc
        else:
            data = source
        if not isinstance(data, Mapping):
            raise BackupImportError(MSG_INVALID_FORMAT)
        if isinstance(data.get("data"), Mapping):
            data = data["data"]
        try:
            document = BackupDocument.model_validate(dict(data))
        except ValidationError as exc:
            logger.warning("Rejected backup document: %s", exc)
            raise BackupImportError(MSG_INVALID_FORMAT) from exc
        if document.services is None and document.notes is None and document.missing_parts is None:
            raise BackupImportError(MSG_INVALID_FORMAT)
        return document

    def import_data(self, source: Union[str, bytes, Mapping[str, Any]]) -> ImportResult:
        """Replace stored collections with those found in ``source``."""
        document = self.parse_document(source)
        values: Dict[str, Any] = {}
        if document.services is not None:
            values[SERVICES_KEY] = document.services
        if document.notes is not None:
            values[NOTES_KEY] = [note.model_dump() for note in document.notes]
        if document.missing_parts is not None:
            values[MISSING_PARTS_KEY] = document.missing_parts
        try:
            self.store.replace_many(values)
        except StoreError as exc:
            raise BackupImportError(MSG_IMPORT_FAILED) from exc

        service_count = len(document.services or [])
        note_count = len(document.notes or [])
        logger.info("Imported %d services and %d notes", service_count, note_count)
        if self.dispatcher is not None:
            self.dispatcher.emit(events.DATA_RELOADED, {"services": service_count, "notes": note_count})
        return ImportResult(
            services=service_count,
            notes=note_count,
            missing_parts=len(document.missing_parts or []),
            message=(
                f"Veriler başarıyla yüklendi!\n{service_count} servis kaydı ve {note_count} not geri yüklendi."
            ),
        )
