"""
Tests for migrating stored service records into the canonical shape.
"""
from datetime import datetime

from service_tracker_api.app.schemas.service import ServiceColor, ServiceStatus
from service_tracker_api.app.services.migration import generate_id, migrate_record, migrate_records
from service_tracker_api.app.utils.formatting import to_utc_iso


NOW = datetime(2024, 6, 1, 9, 0, 0)


def test_legacy_fields_are_mapped():
    record = migrate_record(
        {"id": "a", "feeCollected": 100, "phoneNumber": "5551234567", "date": "2024-01-01", "description": "Kadıköy"},
        NOW,
    )
    assert record.cost == 100
    assert record.customer_phone == "05551234567"
    assert record.raw_customer_phone_input == "5551234567"
    assert record.created_at == "2024-01-01"
    assert record.address == "Kadıköy"
    assert record.updated_at == to_utc_iso(NOW)


def test_canonical_fields_win_over_legacy():
    record = migrate_record(
        {"id": "a", "cost": 50, "feeCollected": 100, "address": "Yeni", "description": "Eski", "createdAt": "2024-02-02"},
        NOW,
    )
    assert record.cost == 50
    assert record.address == "Yeni"
    assert record.created_at == "2024-02-02"


def test_defaults_for_missing_fields():
    record = migrate_record({"id": "a"}, NOW)
    assert record.color == ServiceColor.WHITE
    assert record.status == ServiceStatus.ONGOING
    assert record.cost == 0
    assert record.expenses == 0
    assert record.deposit == 0
    assert record.created_at == to_utc_iso(NOW)


def test_invalid_values_fall_back():
    record = migrate_record({"id": "a", "cost": "abc", "expenses": -5, "color": "teal", "status": "lost"}, NOW)
    assert record.cost == 0
    assert record.expenses == 0
    assert record.color == ServiceColor.WHITE
    assert record.status == ServiceStatus.ONGOING


def test_numeric_strings_are_parsed():
    record = migrate_record({"id": "a", "cost": "250.5", "expenses": "20"}, NOW)
    assert record.cost == 250.5
    assert record.expenses == 20


def test_phone_is_extracted_from_raw_input():
    record = migrate_record({"id": "a", "rawCustomerPhoneInput": "Ahmet +90 534 682 22 82 ustaya sor"}, NOW)
    assert record.customer_phone == "05346822282"
    assert record.raw_customer_phone_input == "Ahmet +90 534 682 22 82 ustaya sor"


def test_migration_is_idempotent():
    first = migrate_record({"id": "a", "feeCollected": 100, "phoneNumber": "5551234567", "date": "2024-01-01"}, NOW)
    second = migrate_record(first.to_storage(), NOW)
    assert second == first


def test_missing_id_is_generated():
    record = migrate_record({"cost": 10}, NOW)
    assert record.id.startswith("id_")


def test_migrate_records_skips_non_objects():
    records = migrate_records([{"id": "a"}, "junk", None, {"id": "b"}], NOW)
    assert [record.id for record in records] == ["a", "b"]


def test_generate_id_shape():
    parts = generate_id().split("_")
    assert parts[0] == "id"
    assert parts[1].isdigit()
    assert len(parts[2]) == 9


def test_missing_timestamps_are_utc():
    record = migrate_record({"id": "a"})
    assert record.created_at.endswith("Z")
    assert record.updated_at.endswith("Z")
