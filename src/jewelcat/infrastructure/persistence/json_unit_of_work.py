"""JSON-file-backed implementation of UnitOfWork.

The whole catalog (materials, products, price history) lives in one
JSON document.  Entering a unit of work takes a per-file lock and loads
the document fresh; ``commit()`` writes it to a temporary file and
swaps it in with ``os.replace``.  A price write and its audit entry
therefore become durable in the same file replacement.

The lock is per process.  Separate processes writing the same file are
not serialized against each other.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path

from jewelcat.domain.exceptions import DomainException
from jewelcat.domain.repository.unit_of_work import UnitOfWork
from jewelcat.infrastructure.persistence.json_material_repository import (
    JsonMaterialRepository,
)
from jewelcat.infrastructure.persistence.json_price_history_repository import (
    JsonPriceHistoryRepository,
)
from jewelcat.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)

logger = logging.getLogger(__name__)

_SECTIONS = ("materials", "products", "priceHistory")

_locks: dict[Path, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _locks_guard:
        return _locks.setdefault(path.resolve(), threading.Lock())


class StoreBusyError(DomainException):
    """The catalog file stayed locked for longer than the timeout."""


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, file_path: Path, lock_timeout: float = 10.0) -> None:
        self._file_path = file_path
        self._lock_timeout = lock_timeout
        self._lock = _lock_for(file_path)
        self._document: dict | None = None
        self._ensure_file()

    # --- UnitOfWork interface -------------------------------------------------

    def _begin(self) -> None:
        if not self._lock.acquire(timeout=self._lock_timeout):
            raise StoreBusyError(
                f"Catalog {self._file_path} is busy; gave up after {self._lock_timeout}s"
            )
        try:
            self._document = self._load()
        except BaseException:
            self._lock.release()
            raise
        self.materials = JsonMaterialRepository(self._document["materials"])
        self.products = JsonProductRepository(self._document["products"])
        self.price_history = JsonPriceHistoryRepository(self._document["priceHistory"])

    def commit(self) -> None:
        if self._document is None:
            raise RuntimeError("commit() called outside a unit of work")
        self._persist(self._document)
        self._document = None

    def rollback(self) -> None:
        self._document = None

    def _end(self) -> None:
        self._lock.release()

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict:
        document = json.loads(self._file_path.read_text(encoding="utf-8"))
        for section in _SECTIONS:
            document.setdefault(section, [])
        return document

    def _persist(self, document: dict) -> None:
        tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        tmp_path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp_path, self._file_path)
        logger.debug("Committed catalog to %s", self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                json.dumps({section: [] for section in _SECTIONS}, indent=2) + "\n",
                encoding="utf-8",
            )
