"""
In-memory storage adapter

Thread-safe replacement for the SQL database, for local development and
tests. Writes apply immediately; rollback does not undo them.
"""

from .store import InMemoryStore
from .unit_of_work import InMemoryUnitOfWork

__all__ = ["InMemoryStore", "InMemoryUnitOfWork"]
