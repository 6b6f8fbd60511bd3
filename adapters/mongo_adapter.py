"""MongoDB adapter for day document storage.

Each day is one document in the meals collection, keyed by ``_id``. Nested
fields are addressed with dot paths ("attendance.<uid>",
"responsibility.dinnerId"), which MongoDB's ``$set`` applies without touching
sibling keys. Batches run inside a multi-document transaction, so the server
must be a replica set.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple
import logging

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from app.exceptions import MissingDocumentError, StoreError

logger = logging.getLogger("dailymenu.mongo")

_client: Optional[MongoClient] = None
_db = None


# ------------------ Connection ------------------
def connect(uri: str, db_name: str = "dailymenu") -> None:
    """Open the shared client and verify the server answers.

    Raises:
        StoreError: if the server cannot be reached
    """
    global _client, _db
    try:
        _client = MongoClient(uri, tz_aware=True)
        _db = _client[db_name]
        _client.admin.command("ping")
        logger.info("Connected to MongoDB %s (database: %s)", uri, db_name)
    except PyMongoError as exc:
        close()
        raise StoreError(f"Could not connect to MongoDB: {exc}") from exc


def close() -> None:
    """Close MongoDB connection."""
    global _client, _db
    try:
        if _client is not None:
            _client.close()
            logger.info("MongoDB client closed")
    except PyMongoError:
        logger.exception("Error closing MongoDB client")
    finally:
        _client = None
        _db = None


def is_connected() -> bool:
    return _db is not None


def get_store(collection_name: str) -> "MongoDocumentStore":
    """Store bound to the shared client.

    Raises:
        StoreError: if connect() has not succeeded
    """
    if _client is None or _db is None:
        raise StoreError("MongoDB is not connected")
    return MongoDocumentStore(_client, _db[collection_name])


# ------------------ Store ------------------
class MongoWriteBatch:
    """Ordered set of writes committed in one transaction, all or nothing."""

    def __init__(self, client: MongoClient, collection: Collection):
        self._client = client
        self._collection = collection
        self._ops: List[Tuple[str, str, Optional[Dict[str, Any]]]] = []

    def __len__(self) -> int:
        return len(self._ops)

    def delete(self, key: str) -> None:
        self._ops.append(("delete", key, None))

    def set(self, key: str, data: Dict[str, Any]) -> None:
        self._ops.append(("set", key, dict(data)))

    def update(self, key: str, fields: Dict[str, Any]) -> None:
        self._ops.append(("update", key, dict(fields)))

    def commit(self) -> None:
        """Apply every queued write, or none of them.

        Raises:
            StoreError: on any server error, or when an update targets a
                missing document (the transaction is aborted)
        """
        if not self._ops:
            return
        try:
            with self._client.start_session() as session:
                with session.start_transaction():
                    for op, key, data in self._ops:
                        self._apply(op, key, data, session)
        except MissingDocumentError as exc:
            logger.warning(
                "Batch commit of %d writes aborted: %s", len(self._ops), exc
            )
            raise
        except PyMongoError as exc:
            logger.exception("Batch commit of %d writes failed", len(self._ops))
            raise StoreError(f"Batch commit failed: {exc}") from exc
        logger.info("Committed batch of %d writes", len(self._ops))

    def _apply(self, op: str, key: str, data, session) -> None:
        if op == "delete":
            self._collection.delete_one({"_id": key}, session=session)
        elif op == "set":
            self._collection.replace_one({"_id": key}, data, upsert=True, session=session)
        else:
            result = self._collection.update_one({"_id": key}, {"$set": data}, session=session)
            if result.matched_count == 0:
                raise MissingDocumentError(key)


class MongoDocumentStore:
    """Keyed JSON-like records in one collection"""

    def __init__(self, client: MongoClient, collection: Collection):
        self._client = client
        self._collection = collection

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        try:
            doc = self._collection.find_one({"_id": key})
        except PyMongoError as exc:
            raise StoreError(f"Read failed: {exc}", key=key) from exc
        if doc is None:
            logger.debug("Document not found: %s", key)
        return doc

    def set(self, key: str, data: Dict[str, Any]) -> None:
        try:
            self._collection.replace_one({"_id": key}, dict(data), upsert=True)
        except PyMongoError as exc:
            raise StoreError(f"Write failed: {exc}", key=key) from exc

    def update(self, key: str, fields: Dict[str, Any]) -> None:
        """Set the given (possibly dotted) fields on an existing document.

        Raises:
            StoreError: if the document does not exist or the write fails
        """
        try:
            result = self._collection.update_one({"_id": key}, {"$set": dict(fields)})
        except PyMongoError as exc:
            raise StoreError(f"Update failed: {exc}", key=key) from exc
        if result.matched_count == 0:
            raise MissingDocumentError(key)

    def delete(self, key: str) -> None:
        try:
            self._collection.delete_one({"_id": key})
        except PyMongoError as exc:
            raise StoreError(f"Delete failed: {exc}", key=key) from exc

    def scan(self) -> Iterator[Tuple[str, Dict[str, Any]]]:
        try:
            docs = list(self._collection.find({}))
        except PyMongoError as exc:
            raise StoreError(f"Scan failed: {exc}") from exc
        logger.debug("Scanned %d documents", len(docs))
        for doc in docs:
            yield str(doc["_id"]), doc

    def batch(self) -> MongoWriteBatch:
        return MongoWriteBatch(self._client, self._collection)
