from suraksha.store.persistence import CustomerRepository, LocalStorage, MemoryStorage
from suraksha.store.record_store import RecordStore, new_service_record, open_store
from suraksha.store.seed import SEED_CUSTOMERS

__all__ = [
    "RecordStore", "open_store", "new_service_record",
    "CustomerRepository", "LocalStorage", "MemoryStorage",
    "SEED_CUSTOMERS",
]
