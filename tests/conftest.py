"""Shared test fixtures and helpers."""

from typing import Optional

import pytest

from suraksha.schemas.customer_schema import CustomerRecord, ServiceType, ServiceVisit
from suraksha.store.persistence import CustomerRepository, MemoryStorage
from suraksha.store.record_store import RecordStore


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def repository(storage):
    return CustomerRepository(storage)


@pytest.fixture
def store(repository):
    return RecordStore(repository)


def make_record(
    id: str = "1",
    phone: str = "+911111111111",
    service_date: str = "2024-01-01",
    service_type: ServiceType = ServiceType.SUMP,
    price: int = 1000,
    name: str = "Rajesh Kumar",
    address: str = "123 MG Road, Bangalore",
    custom_service_type: Optional[str] = None,
    notes: Optional[str] = None,
    next_service_date: Optional[str] = None,
    reminder_sent: Optional[bool] = None,
    reminder_sent_at: Optional[str] = None,
    history: Optional[list[ServiceVisit]] = None,
) -> CustomerRecord:
    """Helper to create a CustomerRecord with sensible defaults."""
    return CustomerRecord(
        id=id,
        name=name,
        phone=phone,
        address=address,
        service_date=service_date,
        service_type=service_type,
        custom_service_type=custom_service_type,
        price=price,
        notes=notes,
        next_service_date=next_service_date,
        reminder_sent=reminder_sent,
        reminder_sent_at=reminder_sent_at,
        history=history or [],
    )


def make_visit(
    date: str = "2023-06-01",
    price: int = 500,
    service_type: ServiceType = ServiceType.TANK,
    **kwargs,
) -> ServiceVisit:
    """Helper to create a history entry."""
    return ServiceVisit(date=date, price=price, service_type=service_type, **kwargs)
