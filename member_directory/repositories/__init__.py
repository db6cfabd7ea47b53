# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Repository package — re-exports the member stores."""
from member_directory.repositories.base import MemberStore, RepositoryError
from member_directory.repositories.memory_repository import InMemoryMemberRepository
from member_directory.repositories.member_repository import MongoMemberRepository

__all__ = [
    "InMemoryMemberRepository",
    "MemberStore",
    "MongoMemberRepository",
    "RepositoryError",
]
