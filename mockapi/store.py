"""
MockAPI — Collection Store
===========================

What:  In-memory holder of the seeded JSON collections, its loader, and the
       FastAPI dependency that hands it to route handlers.
How:   `load_store()` reads the data file once during the lifespan startup
       and builds a `CollectionStore`. The instance lives on `app.state`;
       routes receive it through `Depends(get_store)`.
Who:   Created by the lifespan handler in main.py; used by every data route.
When:  Loaded at startup; lives for the whole process.

Data File Layout (json-server style):
    {
        "users":    [{"id": 1, ...}, ...],
        "posts":    [{"id": 1, "userId": 1, ...}, ...],
        "products": [...],
        ...
    }
    Every list-valued key becomes a collection. Other values are skipped.

Write Semantics:
    Writes never mutate a record in place. PUT/PATCH build a new dict and
    swap it into the collection list; DELETE rebuilds the list. A record
    or list that was already handed to a response stays untouched.
"""

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import aiofiles
from fastapi import Request

from mockapi.exceptions import NotFoundError, StoreUnavailableError, ValidationError

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


def _same_id(record: Record, record_id: Any) -> bool:
    # Path parameters are strings; stored ids may be ints
    return str(record.get("id")) == str(record_id)


class CollectionStore:
    """
    Named, ordered collections of JSON records.

    Collections keep the order of the data file; inserts append.
    """

    def __init__(self, collections: Dict[str, List[Record]]):
        self._collections: Dict[str, List[Record]] = {
            name: list(records) for name, records in collections.items()
        }

    @classmethod
    def from_document(cls, document: Any, source: str = "<memory>") -> "CollectionStore":
        """
        Build a store from a decoded db.json document.

        Raises:
            StoreUnavailableError: the document is not a JSON object
        """
        if not isinstance(document, dict):
            raise StoreUnavailableError(
                message="Data file must contain a JSON object of collections",
                context={"source": source, "type": type(document).__name__},
            )

        collections: Dict[str, List[Record]] = {}
        for name, value in document.items():
            if not isinstance(value, list):
                logger.warning("Skipping non-collection key '%s' in %s", name, source)
                continue
            collections[name] = [item for item in value if isinstance(item, dict)]
        return cls(collections)

    # ── Reads ─────────────────────────────────────────────────────────────

    def names(self) -> List[str]:
        return list(self._collections)

    def has(self, name: str) -> bool:
        return name in self._collections

    def all(self, name: str) -> List[Record]:
        """Return a copy of the collection's record list."""
        return list(self._records(name))

    def get(self, name: str, record_id: Any) -> Record:
        for record in self._records(name):
            if _same_id(record, record_id):
                return record
        raise NotFoundError(resource=name, resource_id=str(record_id))

    # ── Writes ────────────────────────────────────────────────────────────

    def insert(self, name: str, payload: Record) -> Record:
        """
        Append a new record, assigning an id when the payload has none.

        Numeric collections get max(id) + 1; anything else gets a short uuid.

        Raises:
            ValidationError: the payload's id is already taken
        """
        records = self._records(name)
        record = dict(payload)

        if record.get("id") is None:
            record["id"] = self._next_id(records)
        elif any(_same_id(existing, record["id"]) for existing in records):
            raise ValidationError(
                message=f"{name} with ID '{record['id']}' already exists",
                field="id",
            )

        self._collections[name] = records + [record]
        logger.debug("Inserted %s/%s", name, record["id"])
        return record

    def replace(self, name: str, record_id: Any, payload: Record) -> Record:
        """Swap the whole record for `payload`, keeping its id."""
        index, existing = self._locate(name, record_id)
        record = dict(payload)
        record["id"] = existing["id"]
        self._collections[name][index] = record
        return record

    def update(self, name: str, record_id: Any, payload: Record) -> Record:
        """Shallow-merge `payload` into the record, keeping its id."""
        index, existing = self._locate(name, record_id)
        record = {**existing, **payload, "id": existing["id"]}
        self._collections[name][index] = record
        return record

    def delete(self, name: str, record_id: Any) -> None:
        index, _ = self._locate(name, record_id)
        records = self._collections[name]
        self._collections[name] = records[:index] + records[index + 1:]
        logger.debug("Deleted %s/%s", name, record_id)

    # ── Internals ─────────────────────────────────────────────────────────

    def _records(self, name: str) -> List[Record]:
        try:
            return self._collections[name]
        except KeyError:
            raise NotFoundError(resource="collection", resource_id=name) from None

    def _locate(self, name: str, record_id: Any) -> Tuple[int, Record]:
        for index, record in enumerate(self._records(name)):
            if _same_id(record, record_id):
                return index, record
        raise NotFoundError(resource=name, resource_id=str(record_id))

    @staticmethod
    def _next_id(records: Iterable[Record]) -> Any:
        ids = [record.get("id") for record in records]
        if all(isinstance(i, int) and not isinstance(i, bool) for i in ids):
            return max(ids, default=0) + 1
        return uuid.uuid4().hex[:8]


# ── Loader ────────────────────────────────────────────────────────────────
async def load_store(path: str) -> CollectionStore:
    """
    Read and decode the data file into a CollectionStore.

    Raises:
        StoreUnavailableError: the file is missing, unreadable, or not a JSON object
    """
    data_path = Path(path)
    try:
        async with aiofiles.open(data_path, mode="r", encoding="utf-8") as f:
            raw = await f.read()
        document = json.loads(raw)
    except FileNotFoundError:
        raise StoreUnavailableError(
            message="Data file not found",
            context={"path": str(data_path)},
        ) from None
    except (OSError, json.JSONDecodeError) as e:
        raise StoreUnavailableError(
            message="Data file could not be read",
            context={"path": str(data_path), "error": str(e)},
        ) from e

    store = CollectionStore.from_document(document, source=str(data_path))
    logger.info(
        "Loaded %d collections from %s: %s",
        len(store.names()),
        data_path,
        ", ".join(store.names()),
    )
    return store


# ── Store Dependency ──────────────────────────────────────────────────────
def get_store(request: Request) -> CollectionStore:
    """
    FastAPI dependency that provides the loaded store.

    Example usage in a route:
        @router.get("/products")
        async def list_products(store: CollectionStore = Depends(get_store)):
            ...

    Raises:
        StoreUnavailableError: startup failed to load the data file
    """
    store: Optional[CollectionStore] = getattr(request.app.state, "store", None)
    if store is None:
        raise StoreUnavailableError()
    return store
