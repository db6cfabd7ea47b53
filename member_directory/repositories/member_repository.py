# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: member data access over a MongoDB collection.
NO business rules here — pure CRUD. Every pymongo failure leaves this
module as a RepositoryError carrying the driver's message.
"""

from contextlib import contextmanager
from typing import Any, Iterator, Optional

from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.errors import OperationFailure, PyMongoError

from member_directory.core.logging import get_logger
from member_directory.metrics import STORE_ERRORS
from member_directory.repositories.base import RepositoryError

logger = get_logger(__name__)

# Never hand Mongo's ObjectId back to callers.
_PROJECTION = {"_id": 0}


@contextmanager
def _store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as exc:
        STORE_ERRORS.labels(operation=operation).inc()
        logger.error("Store operation failed: %s", operation, exc_info=True)
        raise RepositoryError(str(exc)) from exc


class MongoMemberRepository:
    """Member documents in a single collection, keyed by clid."""

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    # ── Read ──

    def find_one(self, clid: str) -> Optional[dict[str, Any]]:
        with _store_errors("find_one"):
            return self._collection.find_one({"clid": clid}, _PROJECTION)

    def find_all(self) -> list[dict[str, Any]]:
        # Drain the cursor inside the guard so mid-iteration failures are caught too.
        with _store_errors("find_all"):
            with self._collection.find({}, _PROJECTION) as cursor:
                return list(cursor)

    def exists(self, clid: str) -> bool:
        with _store_errors("exists"):
            return self._collection.count_documents({"clid": clid}, limit=1) > 0

    # ── Write ──

    def insert_one(self, document: dict[str, Any]) -> None:
        # insert_one adds _id to the dict it is given
        with _store_errors("insert_one"):
            self._collection.insert_one(dict(document))

    def update_one(self, clid: str, fields: dict[str, Any]) -> int:
        with _store_errors("update_one"):
            result = self._collection.update_one({"clid": clid}, {"$set": fields})
        return result.matched_count

    def delete_one(self, clid: str) -> int:
        with _store_errors("delete_one"):
            result = self._collection.delete_one({"clid": clid})
        return result.deleted_count

    def delete_many(self) -> int:
        with _store_errors("delete_many"):
            result = self._collection.delete_many({})
        return result.deleted_count

    # ── Admin ──

    def ping(self) -> None:
        with _store_errors("ping"):
            self._collection.database.client.admin.command("ping")

    def ensure_indexes(self) -> None:
        with _store_errors("create_index"):
            try:
                self._collection.create_index(
                    [("clid", ASCENDING)], unique=True, name="idx_members_clid"
                )
            except OperationFailure as exc:
                if exc.code != 85:  # IndexOptionsConflict: an equivalent index exists
                    raise
                logger.info("Index on clid already present with different options")
