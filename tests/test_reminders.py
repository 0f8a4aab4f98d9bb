"""Tests for upcoming-service detection and WhatsApp reminders."""

from datetime import date
from urllib.parse import unquote

import pytest

from suraksha.schemas.customer_schema import ServiceType
from suraksha.tools.reminders import (
    InvalidPhoneError,
    default_reminder_message,
    send_reminder,
    upcoming_services,
    whatsapp_links,
)
from tests.conftest import make_record

TODAY = date(2025, 1, 10)


class TestUpcomingServices:
    def test_window_is_inclusive(self):
        customers = [
            make_record(id="today", next_service_date="2025-01-10"),
            make_record(id="edge", phone="+912", next_service_date="2025-01-13"),
            make_record(id="late", phone="+913", next_service_date="2025-01-14"),
            make_record(id="past", phone="+914", next_service_date="2025-01-09"),
            make_record(id="none", phone="+915"),
            make_record(id="bad", phone="+916", next_service_date="soon"),
        ]
        due = upcoming_services(customers, today=TODAY, window_days=3)
        assert [c.id for c in due] == ["today", "edge"]


class TestReminderMessage:
    @pytest.mark.parametrize(
        "service_type,custom,label",
        [
            (ServiceType.SUMP, None, "sump cleaning"),
            (ServiceType.TANK, None, "water tank cleaning"),
            (ServiceType.BOTH, None, "water tank and sump cleaning"),
            (ServiceType.OTHER, "Pipe flush", "water tank and sump cleaning"),
        ],
    )
    def test_friendly_label(self, service_type, custom, label):
        customer = make_record(service_type=service_type, custom_service_type=custom,
                               next_service_date="2025-01-12")
        message = default_reminder_message(customer, business_name="Suraksha Service")
        assert f"Your next {label} is due on 12 Jan 2025" in message
        assert "Suraksha Service" in message


class TestWhatsappLinks:
    def test_links_use_digits_and_encoded_text(self):
        links = whatsapp_links("+91 98765 43210", "Hi there & thanks")
        assert links.primary.startswith("https://wa.me/919876543210?text=")
        assert links.fallback.startswith("whatsapp://send?phone=919876543210&text=")
        assert unquote(links.primary.split("text=")[1]) == "Hi there & thanks"
        assert "&" not in links.primary.split("text=")[1]


class TestSendReminder:
    def test_marks_reminder_sent(self, store):
        store.ingest([make_record(phone="+919876543210", next_service_date="2025-01-12")])
        links = send_reminder(store, "1", sent_at="2025-01-10T08:00:00+00:00")
        assert links is not None
        customer = store.get("1")
        assert customer.reminder_sent is True
        assert customer.reminder_sent_at == "2025-01-10T08:00:00+00:00"

    def test_custom_message_used(self, store):
        store.ingest([make_record(phone="+919876543210")])
        links = send_reminder(store, "1", message="Custom note")
        assert links.primary.endswith("Custom%20note")

    def test_invalid_phone_raises_and_records_nothing(self, store):
        store.ingest([make_record(phone="+9112345")])
        with pytest.raises(InvalidPhoneError):
            send_reminder(store, "1")
        assert store.get("1").reminder_sent is None

    def test_unknown_customer_returns_none(self, store):
        store.ingest([make_record()])
        assert send_reminder(store, "missing") is None
