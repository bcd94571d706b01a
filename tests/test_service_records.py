"""
Tests for the service record service.
"""
from datetime import datetime, timezone

import pytest

from service_tracker_api.app.core import events
from service_tracker_api.app.core.exceptions import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    ServiceRecordError,
)
from service_tracker_api.app.core.store import DRAFT_KEY, ORDER_KEY, SERVICES_KEY
from service_tracker_api.app.schemas.service import ServiceCreate, ServiceStatus, ServiceUpdate
from service_tracker_api.app.services.service_record_service import ServiceRecordService


def ids(records):
    return [record.id for record in records]


@pytest.fixture
def clock():
    return lambda: datetime(2024, 3, 10, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def service(store, dispatcher, clock):
    return ServiceRecordService(store, dispatcher, clock=clock)


def create(service, record_id, **fields):
    values = {"rawCustomerPhoneInput": "0534 682 22 82", "address": "Moda"}
    values.update(fields)
    return service.create_service(ServiceCreate(**values), service_id=record_id)


class TestCrud:
    def test_create_derives_phone_and_timestamps(self, service, store):
        record = create(service, "a", rawCustomerPhoneInput="Ahmet +90 534 682 22 82 ustaya sor", cost=500)
        assert record.customer_phone == "05346822282"
        assert record.raw_customer_phone_input == "Ahmet +90 534 682 22 82 ustaya sor"
        assert record.created_at == record.updated_at == "2024-03-10T09:30:00.000Z"
        stored = store.load_json(SERVICES_KEY)
        assert stored[0]["customerPhone"] == "05346822282"
        assert "order" not in stored[0]

    def test_new_records_go_first(self, service, store):
        create(service, "a")
        create(service, "b")
        assert ids(service.list_services()) == ["b", "a"]
        assert store.load_json(ORDER_KEY) == [{"id": "b", "order": 0}, {"id": "a", "order": 1}]

    def test_create_clears_draft_and_navigates(self, service, store, dispatcher):
        pages = []
        dispatcher.subscribe(events.NAVIGATE, pages.append)
        store.save_json(DRAFT_KEY, {"address": "x"})
        create(service, "a")
        assert store.get(DRAFT_KEY) is None
        assert pages == ["dashboard"]

    def test_duplicate_id(self, service):
        create(service, "a")
        with pytest.raises(ConflictError):
            create(service, "a")

    def test_update_only_changes_given_fields(self, service, clock):
        create(service, "a", cost=100)
        later = ServiceRecordService(service.store, clock=lambda: datetime(2024, 3, 11, 8, 0, tzinfo=timezone.utc))
        updated = later.update_service("a", ServiceUpdate(status=ServiceStatus.COMPLETED))
        assert updated.status == ServiceStatus.COMPLETED
        assert updated.cost == 100
        assert updated.created_at == "2024-03-10T09:30:00.000Z"
        assert updated.updated_at == "2024-03-11T08:00:00.000Z"

    def test_update_rederives_phone(self, service):
        create(service, "a")
        updated = service.update_service("a", ServiceUpdate(rawCustomerPhoneInput="905551234567"))
        assert updated.customer_phone == "05551234567"

    def test_get_update_delete_missing(self, service):
        with pytest.raises(NotFoundError):
            service.get_service("nope")
        with pytest.raises(NotFoundError):
            service.update_service("nope", ServiceUpdate(address="x"))
        with pytest.raises(NotFoundError):
            service.delete_service("nope")

    def test_delete(self, service):
        create(service, "a")
        create(service, "b")
        service.delete_service("a")
        assert ids(service.list_services()) == ["b"]

    def test_failed_write_raises(self, service, store, monkeypatch):
        monkeypatch.setattr(store, "save_json", lambda key, value: False)
        with pytest.raises(ServiceRecordError):
            create(service, "a")


class TestListing:
    def test_legacy_records_are_migrated_on_read(self, service, store):
        store.save_json(SERVICES_KEY, [{"id": "old", "feeCollected": 75, "phoneNumber": "5551234567", "date": "2023-05-01"}])
        record = service.get_service("old")
        assert record.cost == 75
        assert record.customer_phone == "05551234567"

    def test_status_and_search_filters(self, service):
        create(service, "a", status="completed", address="Kadıköy")
        create(service, "b", status="ongoing", address="Beşiktaş")
        assert ids(service.list_services(status="completed")) == ["a"]
        assert ids(service.list_services(status="all")) == ["b", "a"]
        assert ids(service.list_services(search="BEŞİKTAŞ")) == ["b"]

    def test_new_record_is_found_by_utc_hour(self, service):
        create(service, "a")
        assert service.get_service("a").created_at.endswith("Z")
        assert ids(service.list_services(search="2024-03-10T09:30")) == ["a"]

    def test_share_text(self, service):
        create(service, "a", rawCustomerPhoneInput="+90 534 682 22 82", address="Moda Cad. 5")
        shared = service.share_service("a")
        assert shared.text == "Moda Cad. 5\nTelefon: 05346822282"
        assert shared.whatsapp_url == "https://wa.me/?text=Moda%20Cad.%205%0ATelefon%3A%2005346822282"
        with pytest.raises(NotFoundError):
            service.share_service("nope")


class TestReorder:
    def test_reorder_full_list(self, service):
        for record_id in "abc":
            create(service, record_id)
        assert ids(service.list_services()) == ["c", "b", "a"]
        service.reorder_services(0, 2)
        assert ids(service.list_services()) == ["b", "a", "c"]

    def test_reorder_filtered_list_puts_visible_first(self, service):
        create(service, "a", status="completed")
        create(service, "b", status="ongoing")
        create(service, "c", status="completed")
        # full order: c, b, a; visible completed: c, a
        service.reorder_services(0, 1, status="completed")
        assert ids(service.list_services()) == ["a", "c", "b"]

    def test_reorder_out_of_range(self, service):
        create(service, "a")
        with pytest.raises(InvalidInputError):
            service.reorder_services(0, 5)

    def test_reorder_report(self, service):
        create(service, "a", status="completed", cost=100)
        create(service, "b", status="completed", cost=300)
        create(service, "c", status="ongoing")
        service.reorder_report(0, 1, 3, 2024, sort_key="revenue", direction="asc")
        assert ids(service.list_services()) == ["b", "a", "c"]
