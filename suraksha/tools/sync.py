"""
One-way push of a customer record to the automation webhook.

Sync never decides whether a local change sticks: callers save first and
sync afterwards, and a failed sync only produces a warning.
"""

import logging
import time
from typing import Any, Optional

import requests

from suraksha.config import settings
from suraksha.schemas.customer_schema import CustomerRecord

logger = logging.getLogger(__name__)


def build_sync_payload(customer: CustomerRecord, timestamp_ms: Optional[int] = None) -> dict[str, Any]:
    """Flattened view of the record the automation expects."""
    return {
        "id": customer.id,
        "name": customer.name,
        "phone": customer.phone,
        "address": customer.address,
        "serviceType": customer.custom_service_type or customer.service_type.value,
        "price": customer.price,
        "serviceDate": customer.service_date,
        "nextServiceDate": customer.next_service_date or None,
        "notes": customer.notes or "",
        "status": "Active" if customer.next_service_date else "Completed",
        "timestamp": timestamp_ms if timestamp_ms is not None else int(time.time() * 1000),
    }


def sync_customer(
    customer: CustomerRecord,
    url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> bool:
    """POST the record to the webhook. Returns False on any failure."""
    url = url or settings.sync.webhook_url
    if not url:
        logger.info("Sync skipped for %s: no webhook URL configured", customer.id)
        return False

    payload = build_sync_payload(customer)
    try:
        response = requests.post(
            url,
            json=payload,
            timeout=timeout or settings.sync.timeout_seconds,
        )
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.error("Sync failed for %s: %s", customer.id, exc)
        return False

    logger.info("Customer %s synced to automation", customer.id)
    return True
