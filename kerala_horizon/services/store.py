"""
In-memory document store standing in for Firestore.

Collections hold pydantic models keyed by id. Everything lives in process
memory and is lost on restart.
"""
import threading
from typing import Callable, Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


class Collection(Generic[T]):
    """A named set of models keyed by document id."""

    def __init__(self, name: str):
        self.name = name
        self._docs: dict[str, T] = {}
        self._lock = threading.RLock()

    def add(self, doc_id: str, doc: T) -> T:
        """Insert a document; fails if the id is taken."""
        with self._lock:
            if doc_id in self._docs:
                raise KeyError(f"{self.name}/{doc_id} already exists")
            self._docs[doc_id] = doc
            return doc

    def set(self, doc_id: str, doc: T) -> T:
        """Create or replace a document."""
        with self._lock:
            self._docs[doc_id] = doc
            return doc

    def get(self, doc_id: str) -> Optional[T]:
        with self._lock:
            return self._docs.get(doc_id)

    def update(self, doc_id: str, **fields) -> Optional[T]:
        """Replace a document with a copy carrying the given field values."""
        with self._lock:
            current = self._docs.get(doc_id)
            if current is None:
                return None
            updated = current.model_copy(update=fields)
            self._docs[doc_id] = updated
            return updated

    def delete(self, doc_id: str) -> bool:
        with self._lock:
            return self._docs.pop(doc_id, None) is not None

    def where(self, predicate: Optional[Callable[[T], bool]] = None, **equals) -> list[T]:
        """Return documents whose attributes equal ``equals`` and match ``predicate``."""
        with self._lock:
            docs = list(self._docs.values())
        results = []
        for doc in docs:
            if any(getattr(doc, key, None) != value for key, value in equals.items()):
                continue
            if predicate is not None and not predicate(doc):
                continue
            results.append(doc)
        return results

    def all(self) -> list[T]:
        with self._lock:
            return list(self._docs.values())

    def count(self) -> int:
        with self._lock:
            return len(self._docs)

    def clear(self):
        with self._lock:
            self._docs.clear()


class Database:
    """Registry of collections, created on first access."""

    def __init__(self):
        self._collections: dict[str, Collection] = {}
        self._lock = threading.Lock()

    def collection(self, name: str) -> Collection:
        with self._lock:
            if name not in self._collections:
                self._collections[name] = Collection(name)
            return self._collections[name]

    def clear(self):
        """Empty every collection."""
        with self._lock:
            collections = list(self._collections.values())
        for collection in collections:
            collection.clear()


# Global database instance
db = Database()
