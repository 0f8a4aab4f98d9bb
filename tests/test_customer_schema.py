"""Tests for customer record and service visit models."""

import pytest
from pydantic import ValidationError

from suraksha.schemas.customer_schema import (
    CustomerRecord,
    PaymentStatus,
    ServiceType,
    ServiceVisit,
    service_label,
)
from tests.conftest import make_record, make_visit


class TestCustomLabelInvariant:
    def test_other_requires_label(self):
        with pytest.raises(ValidationError):
            make_record(service_type=ServiceType.OTHER)

    def test_label_rejected_for_standard_type(self):
        with pytest.raises(ValidationError):
            make_record(service_type=ServiceType.SUMP, custom_service_type="Extra")

    def test_history_entry_follows_same_rule(self):
        with pytest.raises(ValidationError):
            make_visit(service_type=ServiceType.OTHER)

    def test_effective_label(self):
        assert service_label(ServiceType.OTHER, "Pipe flush") == "Pipe flush"
        assert service_label(ServiceType.TANK) == "Tank"


class TestPrice:
    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            make_record(price=-1)


class TestServiceVisit:
    def test_payment_defaults_to_paid(self):
        assert make_visit().payment_status == PaymentStatus.PAID

    def test_visit_is_frozen(self):
        visit = make_visit()
        with pytest.raises(ValidationError):
            visit.price = 10

    def test_archive_current_copies_visit_fields(self):
        record = make_record(notes="n", reminder_sent=True, reminder_sent_at="t")
        entry = record.archive_current()
        assert entry == ServiceVisit(
            date="2024-01-01", service_type=ServiceType.SUMP, price=1000,
            payment_status=PaymentStatus.PAID, reminder_sent=True,
            reminder_sent_at="t", notes="n",
        )


class TestCustomerRecord:
    def test_visits_current_first(self):
        record = make_record(history=[make_visit(date="2023-05-05", price=5)])
        assert record.visits() == [("2024-01-01", 1000), ("2023-05-05", 5)]

    def test_accepts_camel_case_document(self):
        record = CustomerRecord.model_validate({
            "id": "7", "name": "Sunita", "phone": "+916543210987", "address": "Whitefield",
            "serviceDate": "2024-02-12", "serviceType": "Other",
            "customServiceType": "Borewell", "price": 3000,
            "history": [{"date": "2023-02-12", "serviceType": "Tank", "price": 900,
                         "paymentStatus": "Pending"}],
        })
        assert record.custom_service_type == "Borewell"
        assert record.history[0].payment_status == PaymentStatus.PENDING

    def test_storage_dump_omits_unset_optionals(self):
        dumped = make_record().to_storage()
        assert "notes" not in dumped
        assert dumped["serviceType"] == "Sump"
        assert dumped["history"] == []
