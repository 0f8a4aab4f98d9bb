"""
Local key/value storage for the customer collection.

``LocalStorage`` keeps string values under string keys in a single JSON
file on disk. ``CustomerRepository`` stores the whole collection as one
JSON document under a fixed key, plus a first-run flag under a second key.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol, Sequence

from suraksha.config import settings
from suraksha.schemas.customer_schema import CustomerRecord

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """In-process storage. Used by tests and dry runs."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class LocalStorage:
    """JSON-file storage. Every write replaces the file atomically."""

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = Path(path or settings.storage.path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as fh:
            return json.load(fh)

    def _write_all(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(items, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key in items:
            del items[key]
            self._write_all(items)


class CustomerRepository:
    """Load-all / save-all over the customer collection."""

    def __init__(
        self,
        storage: KeyValueStorage,
        data_key: Optional[str] = None,
        init_key: Optional[str] = None,
    ) -> None:
        self.storage = storage
        self.data_key = data_key or settings.storage.data_key
        self.init_key = init_key or settings.storage.init_key

    def load(self) -> list[CustomerRecord]:
        """Return the stored collection, or an empty list if nothing is stored.

        Corrupt JSON is not handled here; ``json.JSONDecodeError`` and
        ``pydantic.ValidationError`` reach the caller.
        """
        raw = self.storage.get_item(self.data_key)
        if not raw:
            return []
        customers = [CustomerRecord.model_validate(item) for item in json.loads(raw)]
        logger.debug("Loaded %d customer records", len(customers))
        return customers

    def save(self, customers: Sequence[CustomerRecord]) -> None:
        payload = json.dumps([c.to_storage() for c in customers], ensure_ascii=False)
        self.storage.set_item(self.data_key, payload)
        logger.debug("Saved %d customer records", len(customers))

    def is_first_run(self) -> bool:
        return not self.storage.get_item(self.init_key)

    def mark_initialized(self) -> None:
        self.storage.set_item(self.init_key, "true")
