"""
Record store: the authoritative customer collection and its merge rules.

Every mutation builds a new collection (the previous tuple is never
modified), persists it through the repository, and only then returns.
Unknown ids are no-ops, never errors. Persistence errors propagate.

Identity resolution for ``log_visit``:
    1. A record with the same id wins.
    2. Otherwise the first record (in collection order) with the same phone.
    3. If the id match and a phone match are different records, a conflict
       is logged and the id match is used.

Usage:
    store = open_store(CustomerRepository(LocalStorage()))
    store.log_visit(new_service_record(name="...", phone="...", ...))
    print(store.stats().total_income)
"""

import logging
import uuid
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional, Union

from suraksha.analytics.statistics import IncomeStats, compute_income_stats
from suraksha.schemas.customer_schema import (
    EDITABLE_FIELDS,
    CustomerRecord,
    ServiceType,
)
from suraksha.store.persistence import CustomerRepository
from suraksha.store.seed import SEED_CUSTOMERS
from suraksha.utils import normalize_phone

logger = logging.getLogger(__name__)


class RecordStore:
    """Owns the customer collection. Construct one and pass it to consumers."""

    def __init__(self, repository: CustomerRepository) -> None:
        self.repository = repository
        self._customers: tuple[CustomerRecord, ...] = ()

    @property
    def customers(self) -> tuple[CustomerRecord, ...]:
        return self._customers

    def __len__(self) -> int:
        return len(self._customers)

    def get(self, customer_id: str) -> Optional[CustomerRecord]:
        for customer in self._customers:
            if customer.id == customer_id:
                return customer
        return None

    def stats(self, today: Optional[date] = None) -> IncomeStats:
        """Income figures for the current collection."""
        return compute_income_stats(self._customers, today=today)

    def _commit(self, customers: Iterable[CustomerRecord], persist: bool = True) -> None:
        new_collection = tuple(customers)
        if persist:
            self.repository.save(new_collection)
        self._customers = new_collection

    def ingest(self, customers: Iterable[CustomerRecord]) -> tuple[CustomerRecord, ...]:
        """Replace the whole collection verbatim.

        An empty collection is not persisted, so a failed or empty load
        never overwrites data that was saved earlier.
        """
        collection = tuple(customers)
        self._commit(collection, persist=bool(collection))
        logger.info("Ingested %d customer records", len(collection))
        return self._customers

    def find_match(self, new_visit: CustomerRecord) -> Optional[int]:
        """Index of the existing record the visit belongs to, or None."""
        id_index: Optional[int] = None
        phone_index: Optional[int] = None
        for index, customer in enumerate(self._customers):
            if id_index is None and customer.id == new_visit.id:
                id_index = index
            if phone_index is None and customer.phone == new_visit.phone:
                phone_index = index

        if id_index is not None and phone_index is not None and id_index != phone_index:
            logger.warning(
                "Identity conflict for visit %s: id matches %s but phone %s matches %s; "
                "merging into the id match",
                new_visit.id,
                self._customers[id_index].id,
                new_visit.phone,
                self._customers[phone_index].id,
            )
        return id_index if id_index is not None else phone_index

    def log_visit(self, new_visit: CustomerRecord) -> tuple[CustomerRecord, ...]:
        """Add a visit, merging it into the matching customer if there is one.

        On a match the existing current visit is archived (as Paid) at the
        front of the history, the record takes the new visit's fields while
        keeping its original id, and moves to the front of the collection.
        """
        index = self.find_match(new_visit)

        if index is None:
            fresh = new_visit.model_copy(update={"history": []})
            self._commit((fresh,) + self._customers)
            logger.info("New customer %s (%s) logged", fresh.id, fresh.name)
            return self._customers

        existing = self._customers[index]
        merged = new_visit.model_copy(
            update={
                "id": existing.id,
                "history": [existing.archive_current()] + list(existing.history),
            }
        )
        rest = self._customers[:index] + self._customers[index + 1:]
        self._commit((merged,) + rest)
        logger.info(
            "Returning customer %s: visit on %s archived, history now %d",
            merged.id,
            existing.service_date,
            len(merged.history),
        )
        return self._customers

    def update_visit(
        self,
        customer_id: str,
        fields: Union[CustomerRecord, Mapping[str, Any]],
    ) -> tuple[CustomerRecord, ...]:
        """Replace current-visit and contact fields. History is left as is.

        A ``CustomerRecord`` replaces every editable field; a mapping
        replaces only the keys it carries.
        """
        if isinstance(fields, CustomerRecord):
            changes = {name: getattr(fields, name) for name in EDITABLE_FIELDS}
        else:
            unknown = set(fields) - set(EDITABLE_FIELDS)
            if unknown:
                raise ValueError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")
            changes = dict(fields)

        if changes.get("service_type", None) not in (None, ServiceType.OTHER, "Other"):
            changes.setdefault("custom_service_type", None)

        updated_collection = []
        found = False
        for customer in self._customers:
            if customer.id == customer_id:
                data = customer.model_dump()
                data.update(changes)
                data["id"] = customer.id
                data["history"] = customer.history
                updated_collection.append(CustomerRecord.model_validate(data))
                found = True
            else:
                updated_collection.append(customer)

        if not found:
            logger.debug("update_visit: no customer with id %s", customer_id)
        self._commit(updated_collection)
        return self._customers

    def delete_record(self, customer_id: str) -> tuple[CustomerRecord, ...]:
        remaining = [c for c in self._customers if c.id != customer_id]
        if len(remaining) == len(self._customers):
            logger.debug("delete_record: no customer with id %s", customer_id)
        else:
            logger.info("Customer %s deleted", customer_id)
        self._commit(remaining)
        return self._customers

    def mark_reminder_sent(self, customer_id: str, sent_at: str) -> tuple[CustomerRecord, ...]:
        """Flag the next-service reminder as sent. Repeat calls overwrite sent_at."""
        updated_collection = [
            customer.model_copy(update={"reminder_sent": True, "reminder_sent_at": sent_at})
            if customer.id == customer_id
            else customer
            for customer in self._customers
        ]
        self._commit(updated_collection)
        if self.get(customer_id) is None:
            logger.debug("mark_reminder_sent: no customer with id %s", customer_id)
        else:
            logger.info("Reminder marked sent for %s at %s", customer_id, sent_at)
        return self._customers


def open_store(
    repository: CustomerRepository,
    seed: Iterable[CustomerRecord] = SEED_CUSTOMERS,
) -> RecordStore:
    """Build a store from persisted data, installing the seed on first run only."""
    store = RecordStore(repository)
    stored = repository.load()
    if repository.is_first_run() and not stored:
        logger.info("First run with no saved data; installing example customers")
        store.ingest(seed)
        repository.mark_initialized()
    else:
        store.ingest(stored)
    return store


def generate_customer_id() -> str:
    return uuid.uuid4().hex[:12]


def new_service_record(
    name: str,
    phone: str,
    address: str,
    service_type: Union[ServiceType, str],
    price: int,
    service_date: Optional[str] = None,
    custom_service_type: Optional[str] = None,
    notes: Optional[str] = None,
    next_service_date: Optional[str] = None,
    customer_id: Optional[str] = None,
) -> CustomerRecord:
    """Build a record from operator input: fresh id, normalized phone."""
    missing = [
        field_name
        for field_name, value in [("name", name), ("phone", phone), ("address", address)]
        if not value or not value.strip()
    ]
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")

    service_type = ServiceType(service_type)
    return CustomerRecord(
        id=customer_id or generate_customer_id(),
        name=name.strip(),
        phone=normalize_phone(phone),
        address=address.strip(),
        service_date=service_date or datetime.now().strftime("%Y-%m-%d"),
        service_type=service_type,
        custom_service_type=custom_service_type if service_type == ServiceType.OTHER else None,
        price=price,
        notes=notes or None,
        next_service_date=next_service_date or None,
        reminder_sent=False,
    )
