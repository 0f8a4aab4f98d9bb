"""Dashboard search: free-text, service type and service-date range."""

from dataclasses import dataclass
from typing import Iterable, Optional

from suraksha.schemas.customer_schema import CustomerRecord, ServiceType
from suraksha.utils import parse_iso_date

ALL_TYPES = "ALL_TYPES"


@dataclass(frozen=True)
class CustomerFilter:
    """Active filters. Empty values mean "don't filter on this"."""

    search: str = ""
    service_type: str = ALL_TYPES
    date_from: str = ""
    date_to: str = ""


def _matches(customer: CustomerRecord, flt: CustomerFilter) -> bool:
    if flt.search:
        term = flt.search.lower()
        if term not in customer.name.lower() and term not in customer.phone.lower():
            return False

    if flt.service_type != ALL_TYPES:
        if flt.service_type == ServiceType.OTHER.value:
            if customer.service_type != ServiceType.OTHER or not customer.custom_service_type:
                return False
        elif customer.service_type.value != flt.service_type:
            return False

    if flt.date_from or flt.date_to:
        served = parse_iso_date(customer.service_date)
        if served is None:
            return False
        lower = parse_iso_date(flt.date_from)
        upper = parse_iso_date(flt.date_to)
        if lower and served < lower:
            return False
        if upper and served > upper:
            return False

    return True


def filter_customers(
    customers: Iterable[CustomerRecord], flt: Optional[CustomerFilter] = None
) -> list[CustomerRecord]:
    """Customers matching every active filter, in collection order."""
    flt = flt or CustomerFilter()
    return [c for c in customers if _matches(c, flt)]
