"""Example customers installed on the very first run only."""

from suraksha.schemas.customer_schema import CustomerRecord, ServiceType

SEED_CUSTOMERS: tuple[CustomerRecord, ...] = (
    CustomerRecord(
        id="1",
        name="Rajesh Kumar",
        phone="+919876543210",
        address="123 MG Road, Bangalore",
        service_date="2024-01-15",
        service_type=ServiceType.BOTH,
        price=2500,
        notes="Annual maintenance",
        next_service_date="2025-01-12",
    ),
    CustomerRecord(
        id="2",
        name="Priya Sharma",
        phone="+918765432109",
        address="456 HSR Layout, Bangalore",
        service_date="2024-01-20",
        service_type=ServiceType.SUMP,
        price=1200,
        notes="Deep cleaning required",
        next_service_date="2025-01-10",
    ),
    CustomerRecord(
        id="3",
        name="Amit Patel",
        phone="+917654321098",
        address="789 Koramangala, Bangalore",
        service_date="2024-02-05",
        service_type=ServiceType.TANK,
        price=1800,
        next_service_date="2025-01-11",
    ),
    CustomerRecord(
        id="4",
        name="Sunita Reddy",
        phone="+916543210987",
        address="321 Whitefield, Bangalore",
        service_date="2024-02-12",
        service_type=ServiceType.BOTH,
        price=3000,
        notes="Emergency service",
        next_service_date="2025-01-13",
    ),
    CustomerRecord(
        id="5",
        name="Vikram Singh",
        phone="+915432109876",
        address="654 Electronic City, Bangalore",
        service_date="2024-02-18",
        service_type=ServiceType.SUMP,
        price=1500,
        next_service_date="2025-01-14",
    ),
)
