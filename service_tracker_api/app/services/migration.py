"""
Reconciliation of stored service records into the canonical shape.

Older versions of the application saved records under different field
names (``phoneNumber``, ``description``, ``feeCollected``, ``date``),
and hand-edited backups may hold strings where numbers belong.  Every
record read from the store passes through ``migrate_record`` once, so
the rest of the code only ever sees canonical ``ServiceRecord``
objects.  The canonical field wins whenever both spellings are
present, and migrating an already canonical record changes nothing.
"""

from __future__ import annotations

import logging
import random
import string
import time
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional

from ..schemas.service import ServiceColor, ServiceRecord, ServiceStatus
from ..utils.formatting import to_utc_iso
from ..utils.phone import extract_phone, normalize_for_storage, strip_annotation_markers


logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_id() -> str:
    """Return an identifier like ``id_1700000000000_k3j9x0abc``."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"id_{int(time.time() * 1000)}_{suffix}"


def _first_present(raw: Mapping[str, Any], *keys: str) -> Any:
    """First value among ``keys`` that is present and not empty or zero."""
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_amount(value: Any, field: str, record_id: str) -> float:
    if value is None or value == "":
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        logger.warning("Record %s has unreadable %s %r; using 0", record_id, field, value)
        return 0.0
    if amount != amount or amount < 0:
        logger.warning("Record %s has invalid %s %r; using 0", record_id, field, value)
        return 0.0
    return amount


def _as_choice(value: Any, enum_cls, default, field: str, record_id: str):
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        if value not in (None, ""):
            logger.warning("Record %s has unknown %s %r; using %s", record_id, field, value, default.value)
        return default


def migrate_record(raw: Mapping[str, Any], now: Optional[datetime] = None) -> ServiceRecord:
    """Build a canonical ``ServiceRecord`` from a stored mapping.

    Parameters
    ----------
    raw : Mapping
        A decoded record of any historical shape.
    now : datetime, optional
        Timestamp used for missing ``createdAt``/``updatedAt``.  Defaults
        to the current time.
    """
    now_iso = to_utc_iso(now or datetime.now(timezone.utc))
    record_id = _as_text(raw.get("id")) or generate_id()

    phone_source = _as_text(_first_present(raw, "customerPhone", "phoneNumber"))
    raw_phone = _as_text(_first_present(raw, "rawCustomerPhoneInput", "customerPhone", "phoneNumber"))
    if phone_source:
        customer_phone = normalize_for_storage(strip_annotation_markers(phone_source))
    else:
        customer_phone = normalize_for_storage(extract_phone(strip_annotation_markers(raw_phone)))

    cost = _as_amount(_first_present(raw, "cost", "feeCollected"), "cost", record_id)
    deposit_value = raw.get("deposit")
    deposit = _as_amount(deposit_value, "deposit", record_id) if deposit_value not in (None, "") else 0.0

    return ServiceRecord(
        id=record_id,
        customer_phone=customer_phone,
        raw_customer_phone_input=raw_phone,
        address=_as_text(_first_present(raw, "address", "description")),
        color=_as_choice(raw.get("color"), ServiceColor, ServiceColor.WHITE, "color", record_id),
        cost=cost,
        expenses=_as_amount(raw.get("expenses"), "expenses", record_id),
        deposit=deposit,
        status=_as_choice(raw.get("status"), ServiceStatus, ServiceStatus.ONGOING, "status", record_id),
        created_at=_as_text(_first_present(raw, "createdAt", "date")) or now_iso,
        updated_at=_as_text(raw.get("updatedAt")) or now_iso,
        phone_number_note=_as_text(raw.get("phoneNumberNote")),
    )


def migrate_records(raws: Iterable[Any], now: Optional[datetime] = None) -> List[ServiceRecord]:
    """Migrate a stored list; entries that are not mappings are skipped."""
    records: List[ServiceRecord] = []
    for index, raw in enumerate(raws or []):
        if not isinstance(raw, Mapping):
            logger.warning("Skipping stored service at position %d: not an object", index)
            continue
        records.append(migrate_record(raw, now))
    return records
