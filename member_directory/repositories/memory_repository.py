# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: in-memory member storage.
Same contract as MongoMemberRepository; used by the test suite and for
running the service locally without a database (STORE_BACKEND=memory).
"""

import copy
from typing import Any, Optional

from member_directory.repositories.base import RepositoryError


class InMemoryMemberRepository:
    """Dict-backed member storage keyed by clid, insertion-ordered."""

    def __init__(self) -> None:
        self._store: dict[str, dict[str, Any]] = {}

    # ── Read ──

    def find_one(self, clid: str) -> Optional[dict[str, Any]]:
        document = self._store.get(clid)
        return copy.deepcopy(document) if document is not None else None

    def find_all(self) -> list[dict[str, Any]]:
        return [copy.deepcopy(d) for d in self._store.values()]

    def exists(self, clid: str) -> bool:
        return clid in self._store

    def count(self) -> int:
        return len(self._store)

    # ── Write ──

    def insert_one(self, document: dict[str, Any]) -> None:
        clid = document["clid"]
        if clid in self._store:
            raise RepositoryError(f"duplicate key error: clid {clid!r} already exists")
        self._store[clid] = copy.deepcopy(document)

    def update_one(self, clid: str, fields: dict[str, Any]) -> int:
        document = self._store.get(clid)
        if document is None:
            return 0
        document.update(copy.deepcopy(fields))
        return 1

    def delete_one(self, clid: str) -> int:
        return 1 if self._store.pop(clid, None) is not None else 0

    def delete_many(self) -> int:
        removed = len(self._store)
        self._store.clear()
        return removed

    # ── Admin ──

    def ping(self) -> None:
        return None

    def ensure_indexes(self) -> None:
        return None

    def clear(self) -> None:
        self._store.clear()
