"""
Service layer for service records.

Records are stored as one JSON array in the key-value store.  Reading
always goes through the record migrator and the order index, so
callers receive canonical records in the user's order.  Every
mutation rewrites the array and rebuilds the order index.

When a write fails the stored data is left as it was and a
``ServiceRecordError`` with a message suitable for the user is raised.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..core import events
from ..core.events import EventDispatcher
from ..core.exceptions import ConflictError, InvalidInputError, NotFoundError, ServiceRecordError
from ..core.store import DRAFT_KEY, SERVICES_KEY, KeyValueStore
from ..schemas.service import ServiceCreate, ServiceRecord, ServiceShare, ServiceUpdate
from ..utils.formatting import to_utc_iso
from ..utils.phone import (
    build_share_text,
    build_whatsapp_url,
    extract_phone,
    normalize_for_storage,
    strip_annotation_markers,
)
from .migration import generate_id, migrate_records
from .order_service import OrderService, reorder_visible
from .report_service import ReportService, matches_search


logger = logging.getLogger(__name__)


STATUS_ALL = "all"

MSG_LOAD_FAILED = "Servisler yüklenirken hata oluştu."
MSG_CREATE_FAILED = "Servis kaydı oluşturulurken hata oluştu. Lütfen tekrar deneyin."
MSG_UPDATE_FAILED = "Servis kaydı güncellenirken hata oluştu. Lütfen tekrar deneyin."
MSG_DELETE_FAILED = "Servis kaydı silinirken hata oluştu. Lütfen tekrar deneyin."
MSG_REORDER_FAILED = "Servis sıralaması kaydedilirken hata oluştu."
MSG_NOT_FOUND = "Servis kaydı bulunamadı."
MSG_DUPLICATE_ID = "Bu kimliğe sahip bir servis kaydı zaten var."
MSG_INVALID_MOVE = "Geçersiz sıralama konumu."


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def phone_from_input(raw_input: str) -> str:
    """Canonical ``customerPhone`` for phone text as the user typed it."""
    return normalize_for_storage(extract_phone(strip_annotation_markers(raw_input)))


class ServiceRecordService:
    """Create, read, update, delete and reorder service records."""

    def __init__(
        self,
        store: KeyValueStore,
        dispatcher: Optional[EventDispatcher] = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.store = store
        self.orders = OrderService(store)
        self.dispatcher = dispatcher
        self.clock = clock

    def _load(self) -> List[ServiceRecord]:
        raws = self.store.load_json(SERVICES_KEY, default=[])
        if not isinstance(raws, list):
            logger.error("%s: stored services are not a list", MSG_LOAD_FAILED)
            return []
        return self.orders.apply_order(migrate_records(raws, self.clock()))

    def _save(self, records: List[ServiceRecord], message: str) -> None:
        if not self.store.save_json(SERVICES_KEY, [record.to_storage() for record in records]):
            raise ServiceRecordError(message)
        self.orders.save_order(records)

    def _navigate(self, page: str) -> None:
        if self.dispatcher is not None:
            self.dispatcher.emit(events.NAVIGATE, page)

    def list_services(self, status: Optional[str] = None, search: Optional[str] = None) -> List[ServiceRecord]:
        """Return records in display order, optionally filtered.

        ``status`` of ``None`` or ``"all"`` disables the status filter.
        ``search`` matches phone digits, the address (case-insensitive)
        or any textual form of the creation date.
        """
        records = self._load()
        if status and status != STATUS_ALL:
            records = [record for record in records if record.status == status]
        if search:
            records = [record for record in records if matches_search(record, search)]
        return records

    def get_service(self, service_id: str) -> ServiceRecord:
        for record in self._load():
            if record.id == service_id:
                return record
        raise NotFoundError(MSG_NOT_FOUND)

    def share_service(self, service_id: str) -> ServiceShare:
        """Address and phone of a job as share text and a WhatsApp link."""
        record = self.get_service(service_id)
        text = build_share_text(record.address, record.customer_phone)
        return ServiceShare(text=text, whatsapp_url=build_whatsapp_url(text))

    def create_service(self, data: ServiceCreate, service_id: Optional[str] = None) -> ServiceRecord:
        """Add a new record at the top of the list."""
        records = self._load()
        existing_ids = {record.id for record in records}
        if service_id is not None and service_id in existing_ids:
            raise ConflictError(MSG_DUPLICATE_ID)
        new_id = service_id or generate_id()
        while new_id in existing_ids:
            new_id = generate_id()

        now_iso = to_utc_iso(self.clock())
        record = ServiceRecord(
            id=new_id,
            customer_phone=phone_from_input(data.raw_customer_phone_input),
            raw_customer_phone_input=data.raw_customer_phone_input,
            address=data.address,
            color=data.color,
            cost=data.cost,
            expenses=data.expenses,
            deposit=data.deposit,
            status=data.status,
            created_at=now_iso,
            updated_at=now_iso,
            phone_number_note=data.phone_number_note,
        )
        self._save([record] + records, MSG_CREATE_FAILED)
        self.store.remove(DRAFT_KEY)
        logger.info("Created service %s", record.id)
        self._navigate("dashboard")
        return record

    def update_service(self, service_id: str, data: ServiceUpdate) -> ServiceRecord:
        """Apply the provided fields and bump ``updatedAt``."""
        records = self._load()
        for position, current in enumerate(records):
            if current.id == service_id:
                break
        else:
            raise NotFoundError(MSG_NOT_FOUND)

        changes = data.model_dump(exclude_unset=True)
        if "raw_customer_phone_input" in changes:
            raw_phone = changes["raw_customer_phone_input"] or ""
            changes["raw_customer_phone_input"] = raw_phone
            changes["customer_phone"] = phone_from_input(raw_phone)
        for field in ("address", "phone_number_note"):
            if field in changes and changes[field] is None:
                changes[field] = ""
        for field in ("cost", "expenses", "color", "status"):
            if field in changes and changes[field] is None:
                del changes[field]
        changes["updated_at"] = to_utc_iso(self.clock())

        updated = current.model_copy(update=changes)
        records[position] = updated
        self._save(records, MSG_UPDATE_FAILED)
        logger.info("Updated service %s", service_id)
        self._navigate("dashboard")
        return updated

    def delete_service(self, service_id: str) -> None:
        records = self._load()
        remaining = [record for record in records if record.id != service_id]
        if len(remaining) == len(records):
            raise NotFoundError(MSG_NOT_FOUND)
        self._save(remaining, MSG_DELETE_FAILED)
        logger.info("Deleted service %s", service_id)

    def _apply_reorder(self, records: List[ServiceRecord], visible: List[ServiceRecord], from_index: int, to_index: int) -> List[ServiceRecord]:
        try:
            reordered = reorder_visible(records, visible, from_index, to_index)
        except IndexError as exc:
            raise InvalidInputError(MSG_INVALID_MOVE) from exc
        self._save(reordered, MSG_REORDER_FAILED)
        logger.info("Moved service from %d to %d among %d visible records", from_index, to_index, len(visible))
        return reordered

    def reorder_services(
        self,
        from_index: int,
        to_index: int,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[ServiceRecord]:
        """Drag-and-drop within the (filtered) service list."""
        records = self._load()
        visible = records
        if status and status != STATUS_ALL:
            visible = [record for record in visible if record.status == status]
        if search:
            visible = [record for record in visible if matches_search(record, search)]
        return self._apply_reorder(records, visible, from_index, to_index)

    def reorder_report(
        self,
        from_index: int,
        to_index: int,
        month: int,
        year: int,
        search: Optional[str] = None,
        date_filter: Optional[str] = None,
        sort_key: Optional[str] = None,
        direction: str = "asc",
        report: Optional[ReportService] = None,
    ) -> List[ServiceRecord]:
        """Drag-and-drop within the filtered and sorted monthly report."""
        records = self._load()
        report = report or ReportService()
        visible = report.visible_records(records, month, year, search, date_filter, sort_key, direction)
        return self._apply_reorder(records, visible, from_index, to_index)
