from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

Document = Dict[str, Any]


class DocumentCollection(Protocol):
    """Persistence gateway for one record kind.

    Services depend on this interface, never on a concrete store.
    Documents are plain dicts; ``id`` is an opaque string assigned by the
    store on the first ``save``.  Filters are equality predicates on
    top-level document fields.  Implementations raise ``ConflictError``
    when a write violates a uniqueness rule and ``StorageError`` for any
    other failure.
    """

    async def find_one(self, filter: Document) -> Optional[Document]:
        raise NotImplementedError

    async def find_by_id(self, document_id: str) -> Optional[Document]:
        raise NotImplementedError

    async def find(self, filter: Optional[Document] = None) -> List[Document]:
        raise NotImplementedError

    async def save(self, document: Document) -> Document:
        raise NotImplementedError

    async def delete_by_id(self, document_id: str) -> bool:
        raise NotImplementedError
