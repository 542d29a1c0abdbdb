"""
Persistence gateway.

``DocumentCollection`` is the interface the services depend on;
``SQLiteCollection`` is the store used by the running application.
"""

from .base import Document, DocumentCollection
from .sqlite_collection import SQLiteCollection

__all__ = ["Document", "DocumentCollection", "SQLiteCollection"]
