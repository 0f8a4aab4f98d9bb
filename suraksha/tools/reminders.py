"""
Next-service reminders sent over WhatsApp deep links.

Delivery is manual: the operator opens the generated link. Sending a
reminder here means building the link and recording that it was sent.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional
from urllib.parse import quote

from suraksha.config import settings
from suraksha.schemas.customer_schema import CustomerRecord, ServiceType
from suraksha.store.record_store import RecordStore
from suraksha.utils import is_valid_phone, parse_iso_date, phone_digits

logger = logging.getLogger(__name__)

FRIENDLY_SERVICE_LABELS: dict[ServiceType, str] = {
    ServiceType.SUMP: "sump cleaning",
    ServiceType.TANK: "water tank cleaning",
    ServiceType.BOTH: "water tank and sump cleaning",
    ServiceType.OTHER: "water tank and sump cleaning",
}


class InvalidPhoneError(ValueError):
    """The customer's phone number can't be used for a WhatsApp link."""


@dataclass(frozen=True)
class ReminderLinks:
    primary: str
    fallback: str


def upcoming_services(
    customers: Iterable[CustomerRecord],
    today: Optional[date] = None,
    window_days: Optional[int] = None,
) -> list[CustomerRecord]:
    """Customers whose next service falls between today and today + window."""
    today = today or date.today()
    window = settings.schedule.reminder_window_days if window_days is None else window_days
    horizon = today + timedelta(days=window)
    due = []
    for customer in customers:
        next_date = parse_iso_date(customer.next_service_date)
        if next_date is not None and today <= next_date <= horizon:
            due.append(customer)
    return due


def format_display_date(value: Optional[str]) -> str:
    parsed = parse_iso_date(value)
    return parsed.strftime("%d %b %Y") if parsed else (value or "")


def default_reminder_message(
    customer: CustomerRecord, business_name: Optional[str] = None
) -> str:
    business = business_name or settings.business.name
    label = FRIENDLY_SERVICE_LABELS[customer.service_type]
    next_date = format_display_date(customer.next_service_date)
    return (
        f"Hi Dear Sir/Madam, this is a gentle reminder from {business}. "
        f"Your next {label} is due on {next_date}. "
        "Please confirm if we should book your slot, or let us know a better time. "
        "Thank you for trusting us with your water tank/sump cleaning needs!"
    )


def whatsapp_links(phone: str, message: str) -> ReminderLinks:
    digits = phone_digits(phone)
    text = quote(message, safe="")
    return ReminderLinks(
        primary=f"https://wa.me/{digits}?text={text}",
        fallback=f"whatsapp://send?phone={digits}&text={text}",
    )


def send_reminder(
    store: RecordStore,
    customer_id: str,
    message: Optional[str] = None,
    sent_at: Optional[str] = None,
) -> Optional[ReminderLinks]:
    """Build the reminder links and mark the reminder as sent.

    Returns None when the customer doesn't exist. Raises InvalidPhoneError
    (and records nothing) when the phone number is unusable.
    """
    customer = store.get(customer_id)
    if customer is None:
        logger.debug("send_reminder: no customer with id %s", customer_id)
        return None
    if not is_valid_phone(customer.phone):
        raise InvalidPhoneError(f"Invalid phone number for {customer.name}: {customer.phone!r}")

    links = whatsapp_links(customer.phone, message or default_reminder_message(customer))
    store.mark_reminder_sent(
        customer_id, sent_at or datetime.now(timezone.utc).isoformat()
    )
    logger.info("Reminder prepared for %s (%s)", customer.name, customer.id)
    return links
