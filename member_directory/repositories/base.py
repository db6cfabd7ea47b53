# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository contract shared by the MongoDB and in-memory stores.
Documents are plain dicts keyed by clid, firstname, lastname, jobtype,
role, duration, tags.
"""

from typing import Any, Optional, Protocol


class RepositoryError(Exception):
    """Any failure reported by the backing store. The message is caller-facing."""


class MemberStore(Protocol):
    def find_one(self, clid: str) -> Optional[dict[str, Any]]: ...

    def find_all(self) -> list[dict[str, Any]]: ...

    def exists(self, clid: str) -> bool: ...

    def insert_one(self, document: dict[str, Any]) -> None: ...

    def update_one(self, clid: str, fields: dict[str, Any]) -> int: ...

    def delete_one(self, clid: str) -> int: ...

    def delete_many(self) -> int: ...

    def ping(self) -> None: ...

    def ensure_indexes(self) -> None: ...
