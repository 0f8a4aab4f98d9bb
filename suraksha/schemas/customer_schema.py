"""Customer records and archived service visits.

Field aliases are camelCase so the stored JSON document keeps the
``serviceDate``/``customServiceType`` layout the records were first
written in.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class ServiceType(str, Enum):
    SUMP = "Sump"
    TANK = "Tank"
    BOTH = "Both"
    OTHER = "Other"


class PaymentStatus(str, Enum):
    PAID = "Paid"
    PENDING = "Pending"


def _check_custom_label(service_type: ServiceType, custom: Optional[str]) -> None:
    if service_type == ServiceType.OTHER and not custom:
        raise ValueError("customServiceType is required when serviceType is Other")
    if service_type != ServiceType.OTHER and custom is not None:
        raise ValueError("customServiceType is only allowed when serviceType is Other")


def service_label(service_type: ServiceType, custom: Optional[str] = None) -> str:
    """Effective category label: the custom label for Other, else the category."""
    if service_type == ServiceType.OTHER and custom:
        return custom
    return service_type.value


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_storage(self) -> dict:
        """Serialize with camelCase keys, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ServiceVisit(_CamelModel):
    """One archived service. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    date: str
    service_type: ServiceType
    custom_service_type: Optional[str] = None
    price: int = Field(ge=0)
    payment_status: PaymentStatus = PaymentStatus.PAID
    reminder_sent: Optional[bool] = None
    reminder_sent_at: Optional[str] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _custom_label_iff_other(self) -> "ServiceVisit":
        _check_custom_label(self.service_type, self.custom_service_type)
        return self

    @property
    def label(self) -> str:
        return service_label(self.service_type, self.custom_service_type)


class CustomerRecord(_CamelModel):
    """
    A customer's current (most recent, still-open) visit plus history.

    ``history`` is most-recent-first. It only grows by prepending when a
    newer visit supersedes the current one.
    """

    id: str
    name: str
    phone: str
    address: str
    service_date: str
    service_type: ServiceType
    custom_service_type: Optional[str] = None
    price: int = Field(ge=0)
    notes: Optional[str] = None
    next_service_date: Optional[str] = None
    reminder_sent: Optional[bool] = None
    reminder_sent_at: Optional[str] = None
    history: list[ServiceVisit] = Field(default_factory=list)

    @model_validator(mode="after")
    def _custom_label_iff_other(self) -> "CustomerRecord":
        _check_custom_label(self.service_type, self.custom_service_type)
        return self

    @property
    def label(self) -> str:
        return service_label(self.service_type, self.custom_service_type)

    def archive_current(self) -> ServiceVisit:
        """Freeze the current visit as a history entry, marked Paid."""
        return ServiceVisit(
            date=self.service_date,
            service_type=self.service_type,
            custom_service_type=self.custom_service_type,
            price=self.price,
            payment_status=PaymentStatus.PAID,
            reminder_sent=self.reminder_sent,
            reminder_sent_at=self.reminder_sent_at,
            notes=self.notes,
        )

    def visits(self) -> list[tuple[str, int]]:
        """(date, price) for the current visit followed by every history entry."""
        return [(self.service_date, self.price)] + [
            (entry.date, entry.price) for entry in self.history
        ]


# Contact and current-visit fields an edit may replace. History and id are not
# in this set.
EDITABLE_FIELDS = (
    "name",
    "phone",
    "address",
    "service_date",
    "service_type",
    "custom_service_type",
    "price",
    "notes",
    "next_service_date",
    "reminder_sent",
    "reminder_sent_at",
)
