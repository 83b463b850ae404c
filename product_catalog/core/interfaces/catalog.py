"""
Catalog Store Protocol

The authoritative document store holding product records. The real store
(a replicating offline-capable document database) is an external
collaborator; this protocol is the slice of it the service consumes.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, runtime_checkable

# Change feed payload: {"id": str, "rev": str, "deleted": bool}
ChangeCallback = Callable[[dict[str, Any]], Awaitable[None]]


@runtime_checkable
class CatalogStore(Protocol):
    """
    Document store operations used by the catalog service.

    Records are plain dicts carrying ``_id`` and ``_rev`` fields.
    """

    async def list_all(self, limit: int) -> list[dict[str, Any]]:
        """
        Return up to ``limit`` records ordered by id.
        """
        ...

    async def get_by_id(self, doc_id: str) -> dict[str, Any]:
        """
        Fetch a record.

        Raises:
            ProductNotFoundError: If the id does not exist
        """
        ...

    async def put(self, record: dict[str, Any]) -> str:
        """
        Create or update a record.

        Returns:
            str: New revision token

        Raises:
            RevisionConflictError: If ``_rev`` does not match the stored revision
        """
        ...

    async def remove(self, doc_id: str, rev: str) -> str:
        """
        Delete a record.

        Returns:
            str: Revision of the deletion

        Raises:
            ProductNotFoundError: If the id does not exist
            RevisionConflictError: If ``rev`` is stale
        """
        ...

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """
        Register a change feed callback.

        Returns:
            Callable that removes the subscription
        """
        ...
