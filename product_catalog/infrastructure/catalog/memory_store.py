"""
In-Memory Catalog Store

Reference CatalogStore with document-store semantics:

    put(record)
        ├── new id, no _rev        -> rev "1-<hex>"
        ├── existing id, _rev ok   -> rev "<n+1>-<hex>"
        └── anything else          -> RevisionConflictError
    remove(id, rev)               -> tombstone rev, record gone
    subscribe(callback)           -> {"id", "rev", "deleted"} after each change

Used by the application when no external document store is wired in, and
by the tests.
"""

import asyncio
import uuid
from collections.abc import Callable
from typing import Any

from product_catalog.core.config.constants import Stage
from product_catalog.core.exceptions import (
    InvalidProductError,
    ProductNotFoundError,
    RevisionConflictError,
)
from product_catalog.core.interfaces.catalog import ChangeCallback
from product_catalog.core.logging.logger import get_logger

logger = get_logger(__name__)


def next_revision(current: str | None) -> str:
    """
    Compute the revision following ``current``.

    Revisions are ``"<generation>-<hex>"``; the generation increases by one
    on every write.
    """
    generation = int(current.split("-", 1)[0]) if current else 0
    return f"{generation + 1}-{uuid.uuid4().hex}"


class InMemoryCatalogStore:
    """
    Dict-backed document store.

    Usage:
        store = InMemoryCatalogStore()
        rev = await store.put({"_id": "product:1", "brand": "Acme"})
        unsubscribe = store.subscribe(on_change)
    """

    def __init__(self):
        self._records: dict[str, dict[str, Any]] = {}
        self._subscribers: list[ChangeCallback] = []
        self._lock = asyncio.Lock()

    async def list_all(self, limit: int) -> list[dict[str, Any]]:
        ids = sorted(self._records)[:limit]
        return [dict(self._records[doc_id]) for doc_id in ids]

    async def get_by_id(self, doc_id: str) -> dict[str, Any]:
        record = self._records.get(doc_id)
        if record is None:
            raise ProductNotFoundError("Product not found", details={"id": doc_id})
        return dict(record)

    async def put(self, record: dict[str, Any]) -> str:
        doc_id = record.get("_id")
        if not doc_id:
            raise InvalidProductError("Record has no _id")

        async with self._lock:
            existing = self._records.get(doc_id)
            supplied = record.get("_rev")
            if existing is None and supplied:
                raise RevisionConflictError(
                    "Revision supplied for a missing record",
                    details={"id": doc_id, "supplied": supplied},
                )
            if existing is not None and supplied != existing["_rev"]:
                raise RevisionConflictError(
                    "Document update conflict",
                    details={"id": doc_id, "supplied": supplied, "current": existing["_rev"]},
                )

            rev = next_revision(supplied)
            self._records[doc_id] = {**record, "_rev": rev}

        await self._notify({"id": doc_id, "rev": rev, "deleted": False})
        return rev

    async def remove(self, doc_id: str, rev: str) -> str:
        async with self._lock:
            existing = self._records.get(doc_id)
            if existing is None:
                raise ProductNotFoundError("Product not found", details={"id": doc_id})
            if rev != existing["_rev"]:
                raise RevisionConflictError(
                    "Document update conflict",
                    details={"id": doc_id, "supplied": rev, "current": existing["_rev"]},
                )
            del self._records[doc_id]
            tombstone = next_revision(rev)

        await self._notify({"id": doc_id, "rev": tombstone, "deleted": True})
        return tombstone

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    async def _notify(self, change: dict[str, Any]) -> None:
        for callback in list(self._subscribers):
            try:
                await callback(change)
            except Exception as e:
                logger.error(
                    "Change feed subscriber failed",
                    stage=Stage.CATALOG_CHANGES,
                    id=change["id"],
                    error=str(e),
                    error_type=type(e).__name__,
                )
