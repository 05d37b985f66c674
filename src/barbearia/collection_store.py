"""Collection storage for barbearia.

Each collection is a single JSON array. Callers always read the whole
collection, modify it, and write it back; there is no locking, so the last
writer wins.
"""

import copy
import json
import logging
import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

from .errors import StorageUnavailableError

logger = logging.getLogger(__name__)

# Can be overridden via BARBEARIA_DATA_DIR environment variable
_default_data_dir = Path(__file__).parent.parent.parent / "data"
DATA_DIR = Path(os.environ.get("BARBEARIA_DATA_DIR", _default_data_dir))


class Collection(str, Enum):
    """Named collections and the storage key each one persists under."""

    BOOKINGS = "agendamentos"
    CONTACTS = "contatos"
    CART = "carrinho"
    ORDERS = "pedidos"


class CollectionStore(Protocol):
    """Read/replace access to named collections of JSON records."""

    def read_all(self, collection: Collection) -> list[dict[str, Any]]:
        """Return the persisted records, or [] if absent or unreadable."""
        ...

    def write_all(self, collection: Collection, items: list[dict[str, Any]]) -> None:
        """Replace the persisted records of a collection.

        Raises:
            StorageUnavailableError: If the medium cannot be written.
        """
        ...


def _as_records(collection: Collection, data: Any) -> list[dict[str, Any]]:
    """Coerce decoded content to a list of records, treating bad shapes as empty."""
    if not isinstance(data, list):
        logger.warning(
            "Collection %s is not a JSON array; treating as empty", collection.value
        )
        return []
    return [item for item in data if isinstance(item, dict)]


class JsonFileStore:
    """Stores each collection as ``<data_dir>/<name>.json``."""

    def __init__(self, data_dir: Path | None = None):
        """
        Initialize JsonFileStore.

        Args:
            data_dir: Override data directory (for testing).
        """
        self.data_dir = Path(data_dir) if data_dir else DATA_DIR

    def path_for(self, collection: Collection) -> Path:
        return self.data_dir / f"{collection.value}.json"

    def read_all(self, collection: Collection) -> list[dict[str, Any]]:
        path = self.path_for(collection)
        if not path.exists():
            return []

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(
                "Could not read collection %s from %s: %s", collection.value, path, e
            )
            return []

        return _as_records(collection, data)

    def write_all(self, collection: Collection, items: list[dict[str, Any]]) -> None:
        path = self.path_for(collection)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(
                dir=self.data_dir, prefix=f".{collection.value}_", suffix=".tmp"
            )
        except OSError as e:
            raise StorageUnavailableError(str(e)) from e

        # Write to temp file then rename (atomic on POSIX)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(temp_path, path)
        except OSError as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StorageUnavailableError(str(e)) from e


class MemoryStore:
    """In-process store with the same contract, used by tests and scripts."""

    def __init__(self, initial: dict[Collection, list[dict[str, Any]]] | None = None):
        self._data: dict[Collection, list[dict[str, Any]]] = {}
        for collection, items in (initial or {}).items():
            self.write_all(collection, items)

    def read_all(self, collection: Collection) -> list[dict[str, Any]]:
        return copy.deepcopy(self._data.get(collection, []))

    def write_all(self, collection: Collection, items: list[dict[str, Any]]) -> None:
        self._data[collection] = copy.deepcopy(list(items))


class UnavailableStore:
    """A store with no usable medium: reads are empty, writes are refused."""

    def __init__(self, reason: str = "no storage medium available"):
        self.reason = reason

    def read_all(self, collection: Collection) -> list[dict[str, Any]]:
        return []

    def write_all(self, collection: Collection, items: list[dict[str, Any]]) -> None:
        raise StorageUnavailableError(self.reason)
